# Area: Engine
"""
edugame._engine.rating — Final rating calculator
================================================

Maps a final score to one of the GameSpec's ScoreRating tiers.
"""

from __future__ import annotations

import logging

from .._spec.defaults import FALLBACK_RATING
from .._spec.models import ScoreRating, ScoringConfig

logger = logging.getLogger("edugame.rating")


def fallback_rating() -> ScoreRating:
    return ScoreRating.model_validate(FALLBACK_RATING)


def score_percentage(score: float, max_score: float) -> float:
    """Percentage of ``max_score``; 0 when ``max_score`` is not positive."""
    if max_score <= 0:
        return 0.0
    return score / max_score * 100


def calculate_rating(score: float, scoring: ScoringConfig) -> ScoreRating:
    """
    Pick the highest rating tier the score qualifies for.

    Ratings are sorted by ``min_percentage`` descending; the sort is
    stable, so among equal thresholds the first declared wins. When
    ``max_score`` is not positive or no tier qualifies, the fallback
    "Keep Trying" rating is returned.
    """
    if scoring.max_score <= 0:
        logger.warning("maxScore is not positive; using fallback rating")
        return fallback_rating()

    percentage = score_percentage(score, scoring.max_score)
    ordered = sorted(scoring.ratings, key=lambda r: r.min_percentage, reverse=True)
    for rating in ordered:
        if rating.min_percentage <= percentage:
            return rating
    return fallback_rating()
