# Area: Spec
"""GameSpec data contract, loader, normalizers and legacy conversion."""

from .defaults import COMPLEXITY_ALIASES, FALLBACK_RATING
from .legacy import convert_legacy, detect_legacy_shape, group_match_cards
from .loader import (
    build_game_spec,
    complete_document,
    load_game_record,
    load_game_spec,
    parse_document,
    strip_code_fence,
)
from .models import GameSection, GameSpec, ScoreRating, ScoringConfig
from .normalizers import normalize_section

__all__ = [
    "COMPLEXITY_ALIASES",
    "FALLBACK_RATING",
    "GameSection",
    "GameSpec",
    "ScoreRating",
    "ScoringConfig",
    "build_game_spec",
    "complete_document",
    "convert_legacy",
    "detect_legacy_shape",
    "group_match_cards",
    "load_game_record",
    "load_game_spec",
    "normalize_section",
    "parse_document",
    "strip_code_fence",
]
