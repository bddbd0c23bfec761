# Area: Public Types
"""
edugame.types — TypedDict schemas for engine inputs/outputs
===========================================================

Dict shapes crossing the engine boundary: the stored game record the
loader consumes, the answer payloads handlers report, and the
snapshots handed to ``on_complete``.

All types are exported from the main package:

    from edugame import GameRecord, StateSnapshot, ...

Use __annotations__ to inspect fields:

    >>> GameRecord.__annotations__
    {'gameContent': str, 'title': str, ...}
"""

from typing import Any, Dict, List, Optional, TypedDict


# ============================================
# Persistence boundary
# ============================================

class GameRecord(TypedDict, total=False):
    """A stored game as handed over by the record store.

    Fields
    ------
    gameContent : str
        JSON-encoded GameSpec or legacy flat content (required).
    title, description, topic : str
        Display fields, copied into metadata for legacy content.
    difficulty, complexity : str
        Free-form labels, e.g. "Beginner", "Normal".
    durationMinutes : int
        Estimated play time.
    tags : List[str]
    language : str
    gameType : str
        Requested game type, e.g. "quiz", "flashcard".
    """
    gameContent: str
    title: str
    description: str
    topic: str
    difficulty: str
    complexity: str
    durationMinutes: int
    tags: List[str]
    language: str
    gameType: str


# ============================================
# Handler answer payloads
# ============================================

class MatchAnswer(TypedDict):
    """Answer recorded for a matching attempt (pair ids)."""
    left: str
    right: str


class SimulationResult(TypedDict):
    """Answer recorded once when a simulation ends."""
    result: str                     # "win" or "lose"
    turn: int
    completedObjectives: List[str]


class ChallengeResult(TypedDict):
    """Answer recorded once when a challenge ends."""
    score: int
    mistakes: int
    timeSpent: int


# ============================================
# on_complete() payloads
# ============================================

class AnswerSnapshot(TypedDict):
    sectionId: str
    itemId: str
    answer: Any
    isCorrect: bool
    timeSpent: float
    pointsEarned: int


class RatingSnapshot(TypedDict):
    minPercentage: float
    label: str
    message: str
    stars: int


class StateSnapshot(TypedDict):
    """JSON-serializable GameState, camelCase keys."""
    currentSectionId: str
    currentItemIndex: int
    score: int
    lives: Optional[int]            # None means unlimited
    hints: int
    timeElapsed: int
    timeRemaining: Optional[int]
    answers: List[AnswerSnapshot]
    completedSections: List[str]
    variables: Dict[str, Any]
    inventory: List[str]
    streak: int
    isComplete: bool
    finalRating: Optional[RatingSnapshot]


class OutroSummary(TypedDict):
    """Figures shown on the outro screen."""
    score: int
    maxScore: int
    percentage: int
    correctAnswers: int
    totalAnswers: int
    accuracy: int
    timeElapsed: int
    formattedTime: str
    rating: RatingSnapshot
    completionMessage: str
    learningSummary: str
    nextSteps: List[str]
