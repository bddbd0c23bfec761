# Area: Spec
"""
edugame._spec.defaults — Default substructures for incomplete GameSpecs
=======================================================================

Raw camelCase dicts merged into documents that omit a substructure.
Builders return fresh copies so callers may mutate the result.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, List

DEFAULT_THEME: Dict[str, Any] = {
    "primaryColor": "#B6EBE7",
    "secondaryColor": "#7DD3C8",
    "background": {
        "type": "gradient",
        "value": "linear-gradient(135deg, #B6EBE7 0%, #7DD3C8 100%)",
    },
    "icon": "🎮",
    "mood": "playful",
}

DEFAULT_RATINGS: List[Dict[str, Any]] = [
    {"minPercentage": 90, "label": "Excellent", "message": "Outstanding!", "stars": 3},
    {"minPercentage": 70, "label": "Good", "message": "Well done!", "stars": 2},
    {"minPercentage": 50, "label": "Fair", "message": "Keep practicing!", "stars": 1},
    {"minPercentage": 0, "label": "Needs Work", "message": "Try again!", "stars": 0},
]

FALLBACK_RATING: Dict[str, Any] = {
    "minPercentage": 0,
    "label": "Keep Trying",
    "message": "Practice makes perfect!",
    "stars": 0,
}

COMPLEXITY_ALIASES: Dict[str, str] = {
    "basic": "basic",
    "simple": "basic",
    "easy": "basic",
    "normal": "standard",
    "standard": "standard",
    "medium": "standard",
    "complex": "complex",
    "advanced": "complex",
    "hard": "complex",
}

DIFFICULTY_ALIASES: Dict[str, str] = {
    "beginner": "beginner",
    "easy": "beginner",
    "intermediate": "intermediate",
    "medium": "intermediate",
    "advanced": "advanced",
    "hard": "advanced",
}


def default_theme() -> Dict[str, Any]:
    return copy.deepcopy(DEFAULT_THEME)


def default_config(game_type: str) -> Dict[str, Any]:
    """Config used when a document carries none."""
    return {
        "gameType": game_type,
        "timeLimit": 0,
        "questionTimeLimit": 0,
        "allowSkip": True,
        "allowBack": True,
        "hintsEnabled": True,
        "maxHints": 3,
        "lives": 0,
        "shuffleContent": False,
        "feedbackType": "immediate",
        "showCorrectAnswer": True,
    }


def default_progression(section_ids: List[str]) -> Dict[str, Any]:
    return {
        "type": "linear",
        "sectionOrder": list(section_ids),
        "showProgress": True,
    }


def default_scoring(max_score: int = 100) -> Dict[str, Any]:
    return {
        "maxScore": max_score,
        "pointsPerCorrect": 10,
        "penaltyPerWrong": 0,
        "timeBonus": False,
        "streakMultiplier": 1,
        "ratings": copy.deepcopy(DEFAULT_RATINGS),
    }


def normalize_difficulty(value: Any, default: str = "beginner") -> str:
    """Lower-case a difficulty label and map common synonyms."""
    if not isinstance(value, str) or not value.strip():
        return default
    return DIFFICULTY_ALIASES.get(value.strip().lower(), default)


def normalize_complexity(value: Any, default: str = "basic") -> str:
    """Lower-case a complexity label; "Normal" and friends become "standard"."""
    if not isinstance(value, str) or not value.strip():
        return default
    return COMPLEXITY_ALIASES.get(value.strip().lower(), default)
