# Area: Handlers
"""
edugame._handlers.base — Section handler base class
===================================================

Every section type has a runtime handler that owns its interaction
state (current item, selections, timers) and reports effects through
``SectionCallbacks``. Handlers never mutate GameState themselves.
"""

from __future__ import annotations

import logging
import random
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .._engine.timers import SECTION_SCOPE, TimerRegistry
from .._spec.models import GameSection, GameSpec
from ..callbacks import SectionCallbacks
from ..config import EngineSettings


@dataclass
class HandlerContext:
    """Everything a handler needs from its session."""

    section: GameSection
    spec: GameSpec
    callbacks: SectionCallbacks
    timers: TimerRegistry = field(default_factory=TimerRegistry)
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.monotonic
    settings: EngineSettings = field(default_factory=EngineSettings)


class BaseSectionHandler(ABC):
    """
    Base for all section handlers.

    Subclasses implement ``view()`` and their interaction methods, and
    may override ``enter()`` to arm timers when the section activates.
    """

    section_type = ""

    def __init__(self, ctx: HandlerContext):
        self.ctx = ctx
        self.section = ctx.section
        self.content = ctx.section.content
        self.callbacks = ctx.callbacks
        self.completed = False
        self.logger = logging.getLogger(f"edugame.handlers.{self.section_type}")
        self._item_started = ctx.clock()

    # ── lifecycle ───────────────────────────────────────────

    def enter(self) -> None:
        """Called once when the section becomes active."""

    @abstractmethod
    def view(self) -> Dict[str, Any]:
        """Presentation state of the section."""

    # ── shared helpers ──────────────────────────────────────

    @property
    def points_per_correct(self) -> int:
        return self.ctx.spec.scoring.points_per_correct

    @property
    def config(self):
        return self.ctx.spec.config

    def _start_item_clock(self) -> None:
        self._item_started = self.ctx.clock()

    def _elapsed(self) -> int:
        return max(0, round(self.ctx.clock() - self._item_started))

    def _answer(self, item_id: str, answer: Any, is_correct: bool, points: int) -> None:
        self.callbacks.on_answer(
            self.section.id, item_id, answer, is_correct, points, self._elapsed()
        )

    def _complete(self) -> None:
        if self.completed:
            self.logger.warning(f"Section '{self.section.id}' already completed")
            return
        self.completed = True
        self.callbacks.on_complete()

    def _guard_active(self, action: str) -> bool:
        if self.completed:
            self.logger.warning(f"Ignoring {action} on completed section '{self.section.id}'")
            return False
        return True

    def _timer_name(self, name: str) -> str:
        return f"{self.section.id}:{name}"

    def _arm(
        self,
        name: str,
        seconds: int,
        on_expire: Callable[[], Any],
        on_tick: Optional[Callable[[int], Any]] = None,
    ) -> None:
        self.ctx.timers.arm(
            self._timer_name(name), seconds, on_expire,
            scope=SECTION_SCOPE, on_tick=on_tick,
        )

    def _cancel(self, name: str) -> None:
        self.ctx.timers.cancel(self._timer_name(name))

    def _remaining(self, name: str) -> Optional[int]:
        return self.ctx.timers.remaining(self._timer_name(name))
