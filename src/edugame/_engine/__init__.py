# Area: Engine
"""
edugame._engine — Play session engine
=====================================

Phases, GameState, timers, rating and snapshots. The Session itself
lives in ``edugame._engine.session``.
"""

from .phases import PHASE_TRANSITIONS, GamePhase, PhaseEvent, PhaseMachine
from .rating import calculate_rating, fallback_rating, score_percentage
from .state import AnswerRecord, GameState
from .timers import PHASE_SCOPE, SECTION_SCOPE, Countdown, TimerRegistry

__all__ = [
    "AnswerRecord",
    "Countdown",
    "GamePhase",
    "GameState",
    "PHASE_SCOPE",
    "PHASE_TRANSITIONS",
    "PhaseEvent",
    "PhaseMachine",
    "SECTION_SCOPE",
    "TimerRegistry",
    "calculate_rating",
    "fallback_rating",
    "score_percentage",
]
