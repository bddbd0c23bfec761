# Area: Spec
"""
edugame._spec.legacy — Legacy flat content conversion
=====================================================

Older game records store flat content instead of a GameSpec:

    {"questions": [{"question", "options", "correctAnswer", ...}]}
    {"cards": [{"front", "back", "hint"?}]}
    {"cards": [{"id", "content", "matchId", "type"}]}

``convert_legacy`` synthesizes a single-section GameSpec document
(section id ``main``) from one of these shapes plus the record's
display fields. The result is a raw camelCase dict; the loader
validates it like any other document.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..errors import ContentFormatError
from .defaults import (
    default_config,
    default_progression,
    default_scoring,
    default_theme,
    normalize_complexity,
    normalize_difficulty,
)

logger = logging.getLogger("edugame.legacy")

LEGACY_SECTION_ID = "main"


def detect_legacy_shape(content: Mapping[str, Any]) -> Optional[str]:
    """Return "quiz", "flashcards", "matching" or None."""
    if isinstance(content.get("questions"), list):
        return "quiz"
    cards = content.get("cards")
    if isinstance(cards, list) and cards and isinstance(cards[0], dict):
        if "front" in cards[0]:
            return "flashcards"
        if "matchId" in cards[0]:
            return "matching"
    return None


def _quiz_section(content: Mapping[str, Any]) -> Dict[str, Any]:
    questions = []
    for i, q in enumerate(content["questions"]):
        if not isinstance(q, dict):
            logger.warning(f"Dropping non-object legacy question at index {i}")
            continue
        questions.append({
            "id": f"q{i + 1}",
            "question": q.get("question", ""),
            "questionType": "single-choice",
            "options": [
                {"id": f"opt{j}", "text": str(opt)}
                for j, opt in enumerate(q.get("options") or [])
            ],
            "correctAnswer": q.get("correctAnswer", 0),
            "explanation": q.get("explanation"),
            "points": 10,
        })
    return {
        "id": LEGACY_SECTION_ID,
        "title": "Quiz",
        "type": "quiz",
        "content": {"type": "quiz", "questions": questions},
    }


def _flashcard_section(content: Mapping[str, Any]) -> Dict[str, Any]:
    cards = []
    for i, card in enumerate(content["cards"]):
        if not isinstance(card, dict):
            continue
        cards.append({
            "id": f"card{i + 1}",
            "front": {"text": str(card.get("front", ""))},
            "back": {"text": str(card.get("back", ""))},
            "hint": card.get("hint"),
        })
    return {
        "id": LEGACY_SECTION_ID,
        "title": "Flashcards",
        "type": "flashcards",
        "content": {"type": "flashcards", "cards": cards, "testMode": "flip-reveal"},
    }


def group_match_cards(cards: List[Any]) -> List[Dict[str, Any]]:
    """
    Group memory cards sharing a matchId into pairs.

    Groups keep first-seen order. A group with a single card is paired
    with itself; members beyond the second are ignored.
    """
    groups: Dict[str, List[Dict[str, Any]]] = {}
    for card in cards:
        if not isinstance(card, dict):
            continue
        groups.setdefault(str(card.get("matchId")), []).append(card)

    pairs = []
    for i, (match_id, members) in enumerate(groups.items()):
        left = str(members[0].get("content") or "")
        if len(members) == 1:
            logger.warning(f"Match key '{match_id}' has a single card; pairing it with itself")
            right = left
        else:
            right = str(members[1].get("content") or left)
        pairs.append({
            "id": f"pair{i + 1}",
            "left": {"text": left},
            "right": {"text": right},
        })
    return pairs


def _matching_section(content: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "id": LEGACY_SECTION_ID,
        "title": "Matching",
        "type": "matching",
        "content": {
            "type": "matching",
            "pairs": group_match_cards(content["cards"]),
            "matchStyle": "tap-tap",
        },
    }


_SECTION_BUILDERS = {
    "quiz": (_quiz_section, "quiz"),
    "flashcards": (_flashcard_section, "flashcard"),
    "matching": (_matching_section, "matching"),
}


def legacy_metadata(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Map a game record's display fields to GameSpec metadata."""
    topic = record.get("topic") or "General"
    tags = record.get("tags")
    return {
        "title": record.get("title") or "Game",
        "description": record.get("description") or "",
        "subject": topic,
        "topic": topic,
        "difficulty": normalize_difficulty(record.get("difficulty"), default="intermediate"),
        "complexity": normalize_complexity(record.get("complexity")),
        "estimatedMinutes": record.get("durationMinutes") or 10,
        "learningObjectives": [],
        "tags": list(tags) if isinstance(tags, list) else [],
        "language": record.get("language") or "English",
    }


def convert_legacy(
    content: Mapping[str, Any],
    record: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a GameSpec document from legacy flat content.

    Parameters
    ----------
    content : Mapping
        Parsed legacy content.
    record : Mapping, optional
        Game record display fields (title, topic, difficulty, ...).

    Raises
    ------
    ContentFormatError
        If ``content`` matches none of the legacy shapes.
    """
    shape = detect_legacy_shape(content)
    if shape is None:
        raise ContentFormatError(
            "no recognizable content shape",
            payload=sorted(str(k) for k in content.keys()),
            details=["expected 'questions', 'cards' with 'front', or 'cards' with 'matchId'"],
        )

    build, game_type = _SECTION_BUILDERS[shape]
    section = build(content)
    logger.info(f"Converted legacy {shape} content into section '{LEGACY_SECTION_ID}'")

    return {
        "version": "1.0",
        "metadata": legacy_metadata(record or {}),
        "theme": default_theme(),
        "config": default_config(game_type),
        "content": {"sections": [section]},
        "progression": default_progression([LEGACY_SECTION_ID]),
        "scoring": default_scoring(),
    }
