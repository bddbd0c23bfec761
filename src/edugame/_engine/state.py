# Area: Engine
"""
edugame._engine.state — Game state record
=========================================

GameState is the mutable record of one play session. It is owned by
the Session and replaced wholesale on restart. AnswerRecord entries
are immutable once appended.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .._spec.models import GameSpec, ScoreRating


@dataclass(frozen=True)
class AnswerRecord:
    """One graded interaction. ``points_earned`` includes any streak bonus."""
    section_id: str
    item_id: str
    answer: Any
    is_correct: bool
    time_spent: float
    points_earned: int


@dataclass
class GameState:
    """
    Full state of one play session.

    ``lives`` is None when the game has no life limit.
    ``time_remaining`` is None when no global time limit is armed.
    """
    current_section_id: str
    current_item_index: int = 0
    score: int = 0
    lives: Optional[int] = None
    hints: int = 0
    time_elapsed: int = 0
    time_remaining: Optional[int] = None
    answers: List[AnswerRecord] = field(default_factory=list)
    completed_sections: List[str] = field(default_factory=list)
    variables: Dict[str, Any] = field(default_factory=dict)
    inventory: List[str] = field(default_factory=list)
    streak: int = 0
    is_complete: bool = False
    final_rating: Optional[ScoreRating] = None

    @classmethod
    def initial(cls, spec: GameSpec) -> "GameState":
        """Fresh state for a new session over ``spec``."""
        config = spec.config
        return cls(
            current_section_id=spec.first_section_id(),
            lives=config.lives if config.lives > 0 else None,
            hints=config.max_hints if config.hints_enabled else 0,
            time_remaining=config.time_limit if config.time_limit > 0 else None,
        )

    def has_completed(self, section_id: str) -> bool:
        return section_id in self.completed_sections

    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)
