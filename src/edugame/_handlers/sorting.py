# Area: Handlers
"""
edugame._handlers.sorting — Sorting section handler
===================================================

The player assigns every item to one category, then submits once.
Submission earns partial credit and shows per-item results;
``continue_()`` completes the section.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from .base import BaseSectionHandler, HandlerContext


def partial_credit(correct_count: int, item_count: int, points_per_correct: int) -> int:
    """floor(correct/items * pointsPerCorrect * items); 0 for an empty section."""
    if item_count <= 0:
        return 0
    return math.floor(correct_count / item_count * points_per_correct * item_count)


class SortingHandler(BaseSectionHandler):
    section_type = "sorting"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.items = {item.id: item for item in self.content.items}
        self.categories = {cat.id: cat for cat in self.content.categories}
        self.placements: Dict[str, str] = {}
        self.submitted = False
        self.results: Optional[Dict[str, bool]] = None

    def place(self, item_id: str, category_id: str) -> bool:
        """Assign ``item_id`` to ``category_id``, replacing any earlier assignment."""
        if not self._guard_active("place") or self.submitted:
            return False
        if item_id not in self.items or category_id not in self.categories:
            self.logger.warning(f"Unknown placement {item_id!r} -> {category_id!r}")
            return False
        self.placements[item_id] = category_id
        return True

    def remove(self, item_id: str) -> None:
        if not self.submitted:
            self.placements.pop(item_id, None)

    @property
    def unplaced(self):
        return [item_id for item_id in self.items if item_id not in self.placements]

    @property
    def can_submit(self) -> bool:
        return not self.submitted and not self.unplaced

    def submit(self) -> Optional[Dict[str, Any]]:
        """Grade every placement at once. Blocked until all items are placed."""
        if not self._guard_active("submit"):
            return None
        if self.submitted:
            self.logger.warning("Sorting already submitted")
            return None
        if self.unplaced:
            self.logger.warning(f"Cannot submit with unplaced items: {self.unplaced}")
            return None

        self.results = {
            item_id: self.placements.get(item_id) == item.correct_category
            for item_id, item in self.items.items()
        }
        correct = sum(1 for ok in self.results.values() if ok)
        total = len(self.items)
        points = partial_credit(correct, total, self.points_per_correct)
        self._answer(self.section.id, dict(self.placements), correct == total, points)
        self.submitted = True
        return {"correct": correct, "total": total, "points": points, "results": self.results}

    def continue_(self) -> None:
        if not self.submitted and self.items:
            self.logger.warning("Submit before continuing")
            return
        self._complete()

    def view(self) -> Dict[str, Any]:
        return {
            "type": self.section_type,
            "instructions": self.content.instructions,
            "items": [{"id": i.id, "text": i.text} for i in self.items.values()],
            "categories": [{"id": c.id, "name": c.name} for c in self.categories.values()],
            "placements": dict(self.placements),
            "unplaced": self.unplaced,
            "canSubmit": self.can_submit,
            "submitted": self.submitted,
            "results": self.results,
        }
