# Area: Handlers
"""
edugame._handlers.flashcards — Flashcard section handler
========================================================

Two test modes:

* flip-reveal (and speak-answer, which plays the same way): the
  player flips the card and self-reports known / unknown.
* type-answer: the player types the back text, sees the result, then
  calls ``next()``.

Every card is reviewed exactly once. The section completes when the
last unreviewed card has been answered.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .._spec.models import Flashcard
from .base import BaseSectionHandler, HandlerContext


class FlashcardHandler(BaseSectionHandler):
    section_type = "flashcards"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.cards: List[Flashcard] = list(self.content.cards)
        if self.config.shuffle_content:
            ctx.rng.shuffle(self.cards)
        self.test_mode = self.content.test_mode
        self.index = 0
        self.flipped = False
        self.reviewed: Dict[str, bool] = {}
        self.show_result = False
        self.last_result: Optional[Dict[str, Any]] = None
        self.hint_visible = False

    @property
    def current_card(self) -> Optional[Flashcard]:
        if self.index < len(self.cards):
            return self.cards[self.index]
        return None

    @property
    def self_reported(self) -> bool:
        return self.test_mode in ("flip-reveal", "speak-answer")

    def enter(self) -> None:
        if not self.cards:
            self.logger.warning(f"Flashcards '{self.section.id}' has no cards")
            self._complete()

    def flip(self) -> bool:
        self.flipped = not self.flipped
        return self.flipped

    def _can_review(self, action: str) -> bool:
        if not self._guard_active(action) or self.current_card is None:
            return False
        if self.current_card.id in self.reviewed:
            self.logger.warning(f"Card '{self.current_card.id}' already reviewed")
            return False
        return True

    def mark_known(self) -> None:
        self._self_report(True)

    def mark_unknown(self) -> None:
        self._self_report(False)

    def _self_report(self, known: bool) -> None:
        if not self.self_reported:
            self.logger.warning(f"Self-report is not available in {self.test_mode} mode")
            return
        if not self._can_review("self-report"):
            return
        card = self.current_card
        self.reviewed[card.id] = known
        self._answer(
            card.id,
            "known" if known else "unknown",
            known,
            self.points_per_correct if known else 0,
        )
        self._advance()

    def submit(self, text: str) -> Optional[Dict[str, Any]]:
        """Grade a typed answer against the back of the card."""
        if self.test_mode != "type-answer":
            self.logger.warning(f"Typed answers are not available in {self.test_mode} mode")
            return None
        if not text or not text.strip():
            return None
        if not self._can_review("submit"):
            return None

        card = self.current_card
        correct = text.strip().lower() == card.back.text.strip().lower()
        self.reviewed[card.id] = correct
        self._answer(card.id, text, correct, self.points_per_correct if correct else 0)
        self.show_result = True
        self.flipped = True
        self.last_result = {
            "cardId": card.id,
            "isCorrect": correct,
            "expected": card.back.text,
        }
        return self.last_result

    def next(self) -> None:
        """Move on from a card whose result is shown (or that was reviewed before)."""
        if not self._guard_active("next") or self.current_card is None:
            return
        if self.current_card.id not in self.reviewed:
            self.logger.warning("Cannot skip an unreviewed card")
            return
        self._advance()

    def previous(self) -> None:
        """Step back to the previous card when allowBack is set."""
        if not self._guard_active("previous"):
            return
        if not self.config.allow_back:
            self.logger.warning("Going back is disabled for this game")
            return
        if self.index > 0:
            self.index -= 1
            self._reset_card()

    def _advance(self) -> None:
        if len(self.reviewed) >= len(self.cards):
            self._complete()
            return
        if self.index < len(self.cards) - 1:
            self.index += 1
        else:
            self.index = next(
                i for i, c in enumerate(self.cards) if c.id not in self.reviewed
            )
        self._reset_card()

    def _reset_card(self) -> None:
        self.flipped = False
        self.show_result = False
        self.last_result = None
        self.hint_visible = False
        self._start_item_clock()

    def use_hint(self) -> Optional[str]:
        card = self.current_card
        if card is None or not card.hint or self.hint_visible:
            return None
        if not self.callbacks.on_use_hint():
            return None
        self.hint_visible = True
        return card.hint

    def view(self) -> Dict[str, Any]:
        card = self.current_card
        return {
            "type": self.section_type,
            "testMode": self.test_mode,
            "index": self.index,
            "total": len(self.cards),
            "reviewed": len(self.reviewed),
            "known": sum(1 for k in self.reviewed.values() if k),
            "front": card.front.text if card else None,
            "back": card.back.text if card and self.flipped else None,
            "flipped": self.flipped,
            "showResult": self.show_result,
            "result": self.last_result,
            "hint": card.hint if card and self.hint_visible else None,
            "canGoBack": self.config.allow_back and self.index > 0,
        }
