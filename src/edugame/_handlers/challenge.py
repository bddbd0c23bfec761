# Area: Handlers
"""
edugame._handlers.challenge — Timed challenge handler
=====================================================

A gauntlet of prompts under one section countdown, with a mistake
budget and a target score. The challenge keeps its own score and
streak; the session only sees a single answer when it ends:

    {score, mistakes, timeSpent}, passed = score >= targetScore

A correct answer earns the item's points, plus its time bonus while
more than half the time limit remains, plus 20% of its points while
the streak (before this answer) is at least 2.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from .._spec.models import ChallengeItem
from ..types import ChallengeResult
from .base import BaseSectionHandler, HandlerContext

STREAK_BONUS_RATE = 0.2
STREAK_BONUS_MIN = 2


def challenge_points(item: ChallengeItem, streak: int, remaining: int, limit: int) -> int:
    time_bonus = item.time_bonus if item.time_bonus and remaining > limit / 2 else 0
    streak_bonus = math.floor(item.points * STREAK_BONUS_RATE) if streak >= STREAK_BONUS_MIN else 0
    return item.points + time_bonus + streak_bonus


class ChallengeHandler(BaseSectionHandler):
    section_type = "challenge"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.items = list(self.content.items)
        self.index = 0
        self.score = 0
        self.mistakes = 0
        self.streak = 0
        self.time_remaining = self.content.time_limit
        self.last_feedback: Optional[str] = None
        self.result: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.result is not None

    @property
    def current_item(self) -> Optional[ChallengeItem]:
        if self.index < len(self.items):
            return self.items[self.index]
        return None

    def enter(self) -> None:
        if not self.items:
            self._end("items exhausted")
            return
        if self.content.time_limit > 0:
            self._arm("challenge", self.content.time_limit, self._on_timeout, on_tick=self._on_tick)

    def _on_tick(self, remaining: int) -> None:
        self.time_remaining = remaining

    def _on_timeout(self) -> None:
        self._end("time up")

    def answer(self, value: Any) -> Optional[bool]:
        """Grade the current prompt; returns correctness, None when ignored."""
        if not self._guard_active("answer") or self.is_over:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        item = self.current_item
        correct = str(value).strip().lower() == str(item.correct_answer).strip().lower()

        if correct:
            self.score += challenge_points(
                item, self.streak, self.time_remaining, self.content.time_limit
            )
            self.streak += 1
            self.last_feedback = "correct"
        else:
            self.mistakes += 1
            self.streak = 0
            self.last_feedback = "wrong"

        if self.content.max_mistakes > 0 and self.mistakes >= self.content.max_mistakes:
            self._end("mistake budget spent")
        elif self.index >= len(self.items) - 1:
            self._end("items exhausted")
        else:
            self.index += 1
        return correct

    def _end(self, reason: str) -> None:
        if self.is_over:
            return
        self._cancel("challenge")
        passed = self.score >= self.content.target_score
        self.result = "win" if passed else "lose"
        time_spent = self._elapsed()
        outcome: ChallengeResult = {
            "score": self.score, "mistakes": self.mistakes, "timeSpent": time_spent,
        }
        self.callbacks.on_answer(
            self.section.id,
            self.section.id,
            outcome,
            passed,
            self.score,
            time_spent,
        )
        self.logger.info(f"Challenge '{self.section.id}' ended ({reason}): {self.result}")

    def continue_(self) -> None:
        if not self.is_over:
            self.logger.warning("Challenge is still running")
            return
        self._complete()

    def view(self) -> Dict[str, Any]:
        item = self.current_item
        return {
            "type": self.section_type,
            "challengeType": self.content.challenge_type,
            "index": self.index,
            "total": len(self.items),
            "prompt": item.prompt if item and not self.is_over else None,
            "options": item.options if item and not self.is_over else None,
            "score": self.score,
            "targetScore": self.content.target_score,
            "mistakes": self.mistakes,
            "maxMistakes": self.content.max_mistakes,
            "streak": self.streak,
            "timeRemaining": self.time_remaining,
            "feedback": self.last_feedback,
            "result": self.result,
        }
