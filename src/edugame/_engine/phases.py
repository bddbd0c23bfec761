# Area: Engine
"""
edugame._engine.phases — Session phase state machine
====================================================

A play session moves through three phases:

    INTRO   -> PLAYING  (on START)
    PLAYING -> OUTRO    (on FINISH)
    any     -> INTRO    (on RESTART)

FINISH is only valid while playing; OUTRO is terminal except for
RESTART.
"""

import logging
from enum import Enum

from ..errors import InvalidTransitionError

logger = logging.getLogger("edugame.phases")


class GamePhase(Enum):
    """Phase of one play session."""
    INTRO = "intro"
    PLAYING = "playing"
    OUTRO = "outro"


class PhaseEvent(Enum):
    """Events that move a session between phases."""
    START = "START"
    FINISH = "FINISH"
    RESTART = "RESTART"


# Valid transitions: {current_phase: {event: next_phase}}
PHASE_TRANSITIONS = {
    GamePhase.INTRO: {
        PhaseEvent.START: GamePhase.PLAYING,
        PhaseEvent.RESTART: GamePhase.INTRO,
    },
    GamePhase.PLAYING: {
        PhaseEvent.FINISH: GamePhase.OUTRO,
        PhaseEvent.RESTART: GamePhase.INTRO,
    },
    GamePhase.OUTRO: {
        PhaseEvent.RESTART: GamePhase.INTRO,
    },
}


class PhaseMachine:
    """
    Tracks the current phase and validates transitions.

    Attributes:
        phase: The current phase
    """

    def __init__(self):
        self.phase = GamePhase.INTRO

    def can_transition(self, event: PhaseEvent) -> bool:
        return event in PHASE_TRANSITIONS.get(self.phase, {})

    def transition(self, event: PhaseEvent) -> GamePhase:
        """
        Execute a phase transition.

        Raises:
            InvalidTransitionError: If ``event`` is not valid from the
                current phase
        """
        if not self.can_transition(event):
            raise InvalidTransitionError(self.phase.value, event.value)
        previous = self.phase
        self.phase = PHASE_TRANSITIONS[self.phase][event]
        logger.debug(f"Phase: {previous.value} → {self.phase.value} ({event.value})")
        return self.phase

    def reset(self) -> None:
        self.phase = GamePhase.INTRO
