# Area: Handlers
"""Info section handler: static reading content, flat points on continue."""

from __future__ import annotations

from typing import Any, Dict

from .base import BaseSectionHandler, HandlerContext


class InfoHandler(BaseSectionHandler):
    section_type = "info"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.scrolled_to_end = False

    def mark_scrolled(self) -> None:
        # Only changes the continue label; never gates continue_()
        self.scrolled_to_end = True

    def continue_(self) -> None:
        if not self._guard_active("continue"):
            return
        self._answer(self.section.id, "read", True, self.ctx.settings.info_points)
        self._complete()

    def view(self) -> Dict[str, Any]:
        return {
            "type": self.section_type,
            "title": self.content.title,
            "blocks": [b.model_dump() for b in self.content.content],
            "continueLabel": "Continue" if self.scrolled_to_end else "Skip reading",
        }
