# Area: Handlers
"""
edugame._handlers.matching — Matching section handler
=====================================================

Two independently shuffled columns over the same pair set. Selecting
one entry in each column resolves an attempt: both selections must
name the same pair id. Matched pairs cannot be selected again; a
wrong attempt is flagged until the next selection and both
selections clear either way.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..types import MatchAnswer
from .base import BaseSectionHandler, HandlerContext


class MatchingHandler(BaseSectionHandler):
    section_type = "matching"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.pairs = {p.id: p for p in self.content.pairs}
        self.left_order: List[str] = list(self.pairs)
        self.right_order: List[str] = list(self.pairs)
        ctx.rng.shuffle(self.left_order)
        ctx.rng.shuffle(self.right_order)
        self.selected_left: Optional[str] = None
        self.selected_right: Optional[str] = None
        self.matched: List[str] = []
        self.wrong_pair: Optional[MatchAnswer] = None
        self.timed_out = False

    def enter(self) -> None:
        if not self.pairs:
            self.logger.warning(f"Matching '{self.section.id}' has no pairs")
            self._complete()
            return
        limit = self.content.time_limit
        if limit and limit > 0:
            self._arm("matching", limit, self._on_timeout)

    def _on_timeout(self) -> None:
        self.logger.info(f"Matching '{self.section.id}' ran out of time")
        self.timed_out = True
        self._complete()

    def select_left(self, pair_id: str) -> None:
        if self._selectable(pair_id):
            self.selected_left = pair_id
            self._resolve()

    def select_right(self, pair_id: str) -> None:
        if self._selectable(pair_id):
            self.selected_right = pair_id
            self._resolve()

    def _selectable(self, pair_id: str) -> bool:
        if not self._guard_active("select"):
            return False
        if pair_id not in self.pairs:
            self.logger.warning(f"Unknown pair id '{pair_id}'")
            return False
        if pair_id in self.matched:
            return False
        self.wrong_pair = None
        return True

    def _resolve(self) -> None:
        if self.selected_left is None or self.selected_right is None:
            return
        left, right = self.selected_left, self.selected_right
        self.selected_left = None
        self.selected_right = None

        correct = left == right
        attempt: MatchAnswer = {"left": left, "right": right}
        self._answer(
            left,
            attempt,
            correct,
            self.points_per_correct if correct else 0,
        )
        if not correct:
            self.wrong_pair = attempt
            return

        self.matched.append(left)
        if len(self.matched) >= len(self.pairs):
            self._cancel("matching")
            self._complete()

    def view(self) -> Dict[str, Any]:
        def column(order: List[str], side: str) -> List[Dict[str, Any]]:
            return [
                {
                    "id": pid,
                    "text": getattr(self.pairs[pid], side).text,
                    "matched": pid in self.matched,
                }
                for pid in order
            ]

        return {
            "type": self.section_type,
            "left": column(self.left_order, "left"),
            "right": column(self.right_order, "right"),
            "selectedLeft": self.selected_left,
            "selectedRight": self.selected_right,
            "wrongPair": self.wrong_pair,
            "matched": len(self.matched),
            "total": len(self.pairs),
            "timeRemaining": self._remaining("matching"),
        }
