"""
edugame — Universal Game Engine
===============================

Interpreter for declarative educational games. A GameSpec (metadata,
theme, rules, content sections, scoring and progression) is loaded,
normalized and then played through a Session.

Quick Start:
    from edugame import Session, load_game_spec
    spec = load_game_spec(generator_output, game_type="quiz")
    session = Session(spec, on_complete=save_stats)
    session.start()
    session.current_handler.submit(1)

Stored records (full GameSpec or legacy flat content):
    from edugame import load_game_record
    spec = load_game_record({"gameContent": blob, "title": "Planets"})

Drive timers by calling ``session.tick()`` once per second.

Type Definitions
----------------
    from edugame import GameRecord, StateSnapshot, OutroSummary
"""

from ._engine.session import Session
from ._engine.phases import GamePhase
from ._engine.rating import calculate_rating
from ._engine.snapshot import build_outro_summary, build_state_snapshot
from ._engine.state import AnswerRecord, GameState
from ._spec.loader import load_game_record, load_game_spec
from ._spec.models import GameSection, GameSpec
from .callbacks import SectionCallbacks
from .config import EngineSettings, load_settings
from .errors import (
    EdugameError,
    ContentFormatError,
    InvalidTransitionError,
    UnknownSectionTypeError,
)
from .types import (
    GameRecord,
    MatchAnswer,
    SimulationResult,
    ChallengeResult,
    AnswerSnapshot,
    RatingSnapshot,
    StateSnapshot,
    OutroSummary,
)

__all__ = [
    # Main classes
    "Session",
    "GameSpec",
    "GameSection",
    "GameState",
    "GamePhase",
    "AnswerRecord",
    "SectionCallbacks",
    "EngineSettings",
    # Functions
    "load_game_spec",
    "load_game_record",
    "load_settings",
    "calculate_rating",
    "build_state_snapshot",
    "build_outro_summary",
    # Errors
    "EdugameError",
    "ContentFormatError",
    "InvalidTransitionError",
    "UnknownSectionTypeError",
    # Types
    "GameRecord",
    "MatchAnswer",
    "SimulationResult",
    "ChallengeResult",
    "AnswerSnapshot",
    "RatingSnapshot",
    "StateSnapshot",
    "OutroSummary",
]
__version__ = "1.0.0"
