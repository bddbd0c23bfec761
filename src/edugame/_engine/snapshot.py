# Area: Engine
"""
edugame._engine.snapshot — State snapshot and outro summary builders
====================================================================

Builds the JSON-serializable views of a session used outside the
engine: the persistence payload of a finished game and the figures
shown on the outro screen.
"""

from __future__ import annotations

from typing import Optional

from .._spec.models import GameSpec, ScoreRating
from ..types import AnswerSnapshot, OutroSummary, RatingSnapshot, StateSnapshot
from .rating import calculate_rating, score_percentage
from .state import AnswerRecord, GameState


def build_state_snapshot(state: GameState) -> StateSnapshot:
    """Serializable GameState with camelCase keys."""
    return {
        "currentSectionId": state.current_section_id,
        "currentItemIndex": state.current_item_index,
        "score": state.score,
        "lives": state.lives,
        "hints": state.hints,
        "timeElapsed": state.time_elapsed,
        "timeRemaining": state.time_remaining,
        "answers": [_answer_snapshot(a) for a in state.answers],
        "completedSections": list(state.completed_sections),
        "variables": dict(state.variables),
        "inventory": list(state.inventory),
        "streak": state.streak,
        "isComplete": state.is_complete,
        "finalRating": _rating_snapshot(state.final_rating),
    }


def _answer_snapshot(record: AnswerRecord) -> AnswerSnapshot:
    return {
        "sectionId": record.section_id,
        "itemId": record.item_id,
        "answer": record.answer,
        "isCorrect": record.is_correct,
        "timeSpent": record.time_spent,
        "pointsEarned": record.points_earned,
    }


def _rating_snapshot(rating: Optional[ScoreRating]) -> Optional[RatingSnapshot]:
    if rating is None:
        return None
    return {
        "minPercentage": rating.min_percentage,
        "label": rating.label,
        "message": rating.message,
        "stars": rating.stars,
    }


def format_time(seconds: int) -> str:
    """Format seconds as ``{m}m {s}s``."""
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}m {secs}s"


def build_outro_summary(spec: GameSpec, state: GameState) -> OutroSummary:
    """
    Figures for the outro screen.

    The outro ``completionMessage`` may reference {score}, {total},
    {percentage} and {time}; unknown placeholders are left as they are.
    """
    max_score = spec.scoring.max_score
    percentage = round(score_percentage(state.score, max_score))
    total = len(state.answers)
    correct = state.correct_count()
    accuracy = round(correct / total * 100) if total else 0
    formatted = format_time(state.time_elapsed)
    rating = state.final_rating or calculate_rating(state.score, spec.scoring)

    outro = spec.content.outro
    message = outro.completion_message if outro else ""
    for key, value in (
        ("score", state.score),
        ("total", max_score),
        ("percentage", percentage),
        ("time", formatted),
    ):
        message = message.replace("{" + key + "}", str(value))

    return {
        "score": state.score,
        "maxScore": max_score,
        "percentage": percentage,
        "correctAnswers": correct,
        "totalAnswers": total,
        "accuracy": accuracy,
        "timeElapsed": state.time_elapsed,
        "formattedTime": formatted,
        "rating": _rating_snapshot(rating),
        "completionMessage": message,
        "learningSummary": outro.learning_summary if outro else "",
        "nextSteps": list(outro.next_steps) if outro else [],
    }
