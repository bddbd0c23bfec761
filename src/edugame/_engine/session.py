# Area: Engine
"""
edugame._engine.session — Play session state machine
====================================================

A Session owns exactly one play session over one GameSpec: its
GameState, its phase, its timers and the handler of the active
section. Callers create as many sessions as they need; nothing is
shared between them.

Playing-only operations called outside ``playing`` are logged and
ignored. Handlers reach the session through callbacks bound to the
section they were created for, so a late call from a replaced
handler is a no-op.
"""

from __future__ import annotations

import logging
import math
import random
import time
from typing import Any, Callable, Dict, List, Optional

from .._handlers import create_handler
from .._handlers.base import BaseSectionHandler, HandlerContext
from .._handlers.conditions import compare_values
from .._spec.models import GameSpec
from ..callbacks import SectionCallbacks
from ..config import EngineSettings
from ..errors import InvalidTransitionError, UnknownSectionTypeError
from .phases import GamePhase, PhaseEvent, PhaseMachine
from .rating import calculate_rating
from .state import AnswerRecord, GameState
from .timers import PHASE_SCOPE, TimerRegistry

logger = logging.getLogger("edugame.session")

STREAK_BONUS_THRESHOLD = 3
GAME_TIMER = "game"
LIFE_LOSS_TIMER = "life-loss"


class _BoundCallbacks(SectionCallbacks):
    """Session callbacks bound to one section epoch."""

    def __init__(self, session: "Session", section_id: str):
        guard = session.timers.guard
        self._session = session
        self._section_id = section_id
        self._answer = guard(session.submit_answer)
        self._complete = guard(session.complete_section)
        self._hint = guard(session.use_hint)
        self._navigate = guard(session.navigate_to_section)
        self._update = guard(session.update_variables)
        self._add = guard(session.add_item)
        self._remove = guard(session.remove_item)

    def on_answer(self, section_id, item_id, answer, is_correct, points, time_spent=0):
        self._answer(section_id, item_id, answer, is_correct, points, time_spent)

    def on_complete(self):
        self._complete(self._section_id)

    def on_use_hint(self) -> bool:
        return bool(self._hint())

    def on_navigate(self, section_id):
        self._navigate(section_id)

    def on_update_variables(self, patch):
        self._update(patch)

    def on_add_item(self, item):
        self._add(item)

    def on_remove_item(self, item):
        self._remove(item)

    def get_variables(self) -> Dict[str, Any]:
        return dict(self._session.state.variables)

    def get_score(self) -> int:
        return self._session.state.score

    def get_inventory(self) -> list:
        return list(self._session.state.inventory)


class Session:
    """
    Interpreter for one play session.

    Parameters
    ----------
    spec : GameSpec
        The validated game to play.
    on_complete : callable, optional
        Called once with the final GameState when the game ends.
    settings : EngineSettings, optional
    rng : random.Random, optional
        Source of randomness for shuffles and simulation events.
    clock : callable, optional
        Monotonic seconds, used by handlers to measure time spent.
    """

    def __init__(
        self,
        spec: GameSpec,
        on_complete: Optional[Callable[[GameState], Any]] = None,
        settings: Optional[EngineSettings] = None,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.spec = spec
        self.on_complete = on_complete
        self.settings = settings or EngineSettings()
        self.rng = rng or random.Random()
        self.clock = clock or time.monotonic
        self.timers = TimerRegistry()
        self.machine = PhaseMachine()
        self.state = GameState.initial(spec)
        self.current_handler: Optional[BaseSectionHandler] = None
        self._order: List[str] = spec.effective_order()
        self._completion_reported = False

    # ══════════════════════════════════════════════════════════
    # PHASES
    # ══════════════════════════════════════════════════════════

    @property
    def phase(self) -> GamePhase:
        return self.machine.phase

    @property
    def is_playing(self) -> bool:
        return self.machine.phase == GamePhase.PLAYING

    def _transition(self, event: PhaseEvent) -> bool:
        try:
            self.machine.transition(event)
        except InvalidTransitionError as e:
            logger.warning(str(e))
            return False
        return True

    def _require_playing(self, operation: str) -> bool:
        if not self.is_playing:
            logger.warning(f"Ignoring {operation} in phase '{self.phase.value}'")
            return False
        return True

    def start(self) -> bool:
        """Enter ``playing``; arms the global timer when timeLimit > 0."""
        if not self._transition(PhaseEvent.START):
            return False
        logger.info(f"Session started: '{self.spec.metadata.title}'")
        if self.state.time_remaining:
            self.timers.arm(
                GAME_TIMER,
                self.state.time_remaining,
                self._on_time_up,
                scope=PHASE_SCOPE,
                on_tick=self._on_game_tick,
            )
        self._activate_section()
        return True

    def end(self) -> Optional[GameState]:
        """Finish the game: rate it, cancel every timer, move to ``outro``."""
        if not self._require_playing("end"):
            return None
        self.state.is_complete = True
        self.state.final_rating = calculate_rating(self.state.score, self.spec.scoring)
        self.timers.invalidate_all()
        self.current_handler = None
        self._transition(PhaseEvent.FINISH)
        logger.info(
            f"Session complete: score {self.state.score}/{self.spec.scoring.max_score}, "
            f"rating '{self.state.final_rating.label}'"
        )
        if self.on_complete is not None and not self._completion_reported:
            self._completion_reported = True
            self.on_complete(self.state)
        return self.state

    def restart(self) -> None:
        """Discard the session state and return to ``intro``."""
        self.timers.invalidate_all()
        self._transition(PhaseEvent.RESTART)
        self.state = GameState.initial(self.spec)
        self.current_handler = None
        self._completion_reported = False
        logger.info("Session restarted")

    # ══════════════════════════════════════════════════════════
    # SECTIONS
    # ══════════════════════════════════════════════════════════

    def _activate_section(self) -> None:
        """Replace the active handler with one for ``current_section_id``."""
        self.timers.invalidate_section()
        self.current_handler = None
        section = self.spec.section(self.state.current_section_id)
        if section is None:
            logger.warning(f"Section '{self.state.current_section_id}' does not exist")
            return

        ctx = HandlerContext(
            section=section,
            spec=self.spec,
            callbacks=_BoundCallbacks(self, section.id),
            timers=self.timers,
            rng=self.rng,
            clock=self.clock,
            settings=self.settings,
        )
        try:
            handler = create_handler(ctx)
        except UnknownSectionTypeError as e:
            logger.error(str(e))
            return
        self.current_handler = handler
        logger.debug(f"Section active: '{section.id}' ({section.type})")
        handler.enter()

    def _next_section(self, section_id: str) -> Optional[str]:
        position = self._order.index(section_id)
        for candidate in self._order[position + 1:]:
            if candidate not in self.state.completed_sections:
                return candidate
        return None

    def complete_section(self, section_id: str) -> bool:
        """Mark a section complete and advance along the progression order."""
        if not self._require_playing("complete_section"):
            return False
        state = self.state
        if state.is_complete:
            logger.warning(f"Ignoring completion of '{section_id}': game is complete")
            return False
        if section_id in state.completed_sections:
            logger.warning(f"Section '{section_id}' already completed")
            return False
        if section_id not in self._order:
            logger.warning(f"Section '{section_id}' is not in the progression order; ending game")
            self.end()
            return True

        position = self._order.index(section_id)
        last = max((self._order.index(s) for s in state.completed_sections), default=-1)
        if position > last:
            state.completed_sections.append(section_id)
        else:
            logger.warning(f"Section '{section_id}' completed out of order; not recorded")
        logger.info(f"Section completed: '{section_id}'")

        next_id = self._next_section(section_id)
        if next_id is None:
            self.end()
            return True
        state.current_section_id = next_id
        state.current_item_index = 0
        self._activate_section()
        return True

    def navigate_to_section(self, section_id: str) -> bool:
        """Jump to any declared section, regardless of progression order."""
        if not self._require_playing("navigate_to_section"):
            return False
        if self.spec.section(section_id) is None:
            logger.warning(f"Cannot navigate to unknown section '{section_id}'")
            return False
        self.state.current_section_id = section_id
        self.state.current_item_index = 0
        self._activate_section()
        return True

    def is_unlocked(self, section_id: str) -> bool:
        """Evaluate a section's unlock condition for presentation."""
        section = self.spec.section(section_id)
        if section is None:
            return False
        condition = section.unlock_condition
        if condition is None:
            return True
        if condition.type == "score":
            return compare_values(self.state.score, ">=", condition.value)
        if condition.type == "complete-section":
            return condition.target in self.state.completed_sections
        value = self.state.variables.get(condition.target)
        if condition.value is None:
            return bool(value)
        return compare_values(value, "==", condition.value)

    # ══════════════════════════════════════════════════════════
    # ANSWERS / HINTS / WORLD STATE
    # ══════════════════════════════════════════════════════════

    def submit_answer(
        self,
        section_id: str,
        item_id: str,
        answer: Any,
        is_correct: bool,
        base_points: int,
        time_spent: float = 0,
    ) -> Optional[AnswerRecord]:
        """
        Record one graded interaction and update score, streak and lives.

        The third and later consecutive correct answers earn
        ``floor(base_points * (streakMultiplier - 1))`` on top when the
        multiplier is above 1. An incorrect answer costs
        ``penaltyPerWrong`` points.
        """
        if not self._require_playing("submit_answer"):
            return None
        state = self.state
        scoring = self.spec.scoring

        new_streak = state.streak + 1 if is_correct else 0
        bonus = 0
        if is_correct and new_streak >= STREAK_BONUS_THRESHOLD and scoring.streak_multiplier > 1:
            bonus = math.floor(base_points * (scoring.streak_multiplier - 1))
        points = base_points + bonus
        if not is_correct and scoring.penalty_per_wrong > 0:
            points -= scoring.penalty_per_wrong

        record = AnswerRecord(
            section_id=section_id,
            item_id=item_id,
            answer=answer,
            is_correct=is_correct,
            time_spent=time_spent,
            points_earned=points,
        )
        state.answers.append(record)
        state.score += points
        state.streak = new_streak
        logger.debug(
            f"Answer {section_id}/{item_id}: correct={is_correct} "
            f"points={points} streak={new_streak}"
        )

        if not is_correct and state.lives is not None and state.lives > 0:
            state.lives -= 1
            if state.lives == 0:
                self._schedule_game_over()
        return record

    def _schedule_game_over(self) -> None:
        grace = self.settings.life_loss_grace_seconds
        logger.info(f"Out of lives; ending game in {grace}s")
        if grace <= 0:
            self.end()
        else:
            self.timers.arm(LIFE_LOSS_TIMER, grace, self.end, scope=PHASE_SCOPE)

    def use_hint(self) -> bool:
        if not self._require_playing("use_hint"):
            return False
        if self.state.hints <= 0:
            return False
        self.state.hints -= 1
        return True

    def update_variables(self, patch: Dict[str, Any]) -> None:
        if self._require_playing("update_variables"):
            self.state.variables.update(patch)

    def add_item(self, item: str) -> None:
        if self._require_playing("add_item") and item not in self.state.inventory:
            self.state.inventory.append(item)

    def remove_item(self, item: str) -> None:
        if self._require_playing("remove_item") and item in self.state.inventory:
            self.state.inventory.remove(item)

    # ══════════════════════════════════════════════════════════
    # TIME
    # ══════════════════════════════════════════════════════════

    def tick(self) -> None:
        """Advance the session by one second of play."""
        if not self.is_playing:
            return
        self.state.time_elapsed += 1
        self.timers.tick()

    def _on_game_tick(self, remaining: int) -> None:
        self.state.time_remaining = remaining

    def _on_time_up(self) -> None:
        logger.info("Time limit reached")
        self.end()
