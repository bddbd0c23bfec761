# Area: Handler Callbacks
"""
edugame.callbacks — The callback contract between handlers and session
======================================================================

Section handlers never touch GameState directly. Every effect they
have on the session goes through a ``SectionCallbacks`` object:

    on_answer(section_id, item_id, answer, is_correct, points, time_spent)
    on_complete()
    on_use_hint() -> bool

Narrative, simulation and exploration handlers additionally use:

    on_navigate(section_id)
    on_update_variables(patch)
    on_add_item(item) / on_remove_item(item)

The session hands each handler an implementation bound to the section
it was created for; once that section is left, the bound callbacks
become no-ops.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class SectionCallbacks(ABC):
    """
    Abstract callback surface offered to section handlers.

    Subclass this to drive a handler outside a Session (tests, tools).
    """

    # ──────────────────────────────────────────────────────────────
    # Core: every handler
    # ──────────────────────────────────────────────────────────────
    @abstractmethod
    def on_answer(
        self,
        section_id: str,
        item_id: str,
        answer: Any,
        is_correct: bool,
        points: int,
        time_spent: float = 0,
    ) -> None:
        """
        Report one graded interaction.

        ``points`` is the base value; the session adds any streak bonus.
        """

    @abstractmethod
    def on_complete(self) -> None:
        """Report that the section is finished."""

    @abstractmethod
    def on_use_hint(self) -> bool:
        """Spend a hint. Returns False when none are left."""

    # ──────────────────────────────────────────────────────────────
    # World state: narrative / simulation / exploration
    # ──────────────────────────────────────────────────────────────
    def on_navigate(self, section_id: str) -> None:
        """Jump to any section, ignoring progression order."""

    def on_update_variables(self, patch: Dict[str, Any]) -> None:
        """Merge ``patch`` into the session variables."""

    def on_add_item(self, item: str) -> None:
        """Add an item to the inventory."""

    def on_remove_item(self, item: str) -> None:
        """Remove an item from the inventory."""

    # ──────────────────────────────────────────────────────────────
    # Read access for conditions
    # ──────────────────────────────────────────────────────────────
    def get_variables(self) -> Dict[str, Any]:
        return {}

    def get_score(self) -> int:
        return 0

    def get_inventory(self) -> list:
        return []
