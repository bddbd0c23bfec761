# Area: Spec
"""
edugame._spec.loader — GameSpec loader
======================================

Turns whatever the content generator or the record store hands over
into a validated, structurally complete GameSpec:

1. Strip a markdown code fence and parse JSON (strings only).
2. Recognize the shape: full GameSpec (``content.sections``) or one
   of the legacy flat shapes.
3. Fill missing substructures with defaults, normalize every section.
4. Validate through the pydantic models.

Anything that cannot be played raises ContentFormatError.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..errors import ContentFormatError
from ..types import GameRecord
from .defaults import (
    default_config,
    default_progression,
    default_scoring,
    default_theme,
    normalize_complexity,
    normalize_difficulty,
)
from .legacy import convert_legacy, detect_legacy_shape
from .models import GameSpec, ScoreRating
from .normalizers import normalize_section

logger = logging.getLogger("edugame.loader")

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if any."""
    stripped = text.strip()
    if stripped.startswith("```"):
        match = _FENCE_RE.search(stripped)
        if match:
            return match.group(1).strip()
    return stripped


def parse_document(raw: str) -> Any:
    """Parse generator output into a JSON value."""
    try:
        return json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise ContentFormatError(
            "content is not valid JSON",
            payload=raw,
            details=[f"line {e.lineno}, column {e.colno}: {e.msg}"],
        ) from e


def is_full_spec(document: Mapping[str, Any]) -> bool:
    content = document.get("content")
    return isinstance(content, dict) and isinstance(content.get("sections"), list)


def _merge(defaults: Dict[str, Any], given: Any) -> Dict[str, Any]:
    if not isinstance(given, dict):
        return defaults
    merged = dict(defaults)
    merged.update({k: v for k, v in given.items() if v is not None})
    return merged


def _fill_metadata(raw: Any) -> Dict[str, Any]:
    metadata = {k: v for k, v in raw.items() if v is not None} if isinstance(raw, dict) else {}
    metadata.setdefault("title", "Game")
    for key in ("title", "description", "subject", "topic"):
        if key in metadata:
            metadata[key] = str(metadata[key])
    metadata.setdefault("description", "")
    minutes = metadata.get("estimatedMinutes")
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)):
        metadata.pop("estimatedMinutes", None)
    else:
        metadata["estimatedMinutes"] = int(minutes)
    metadata["difficulty"] = normalize_difficulty(metadata.get("difficulty"))
    metadata["complexity"] = normalize_complexity(metadata.get("complexity"))
    for key in ("tags", "learningObjectives"):
        if not isinstance(metadata.get(key), list):
            metadata[key] = []
    if not metadata.get("language"):
        metadata["language"] = "English"
    return metadata


def _fill_ratings(raw_ratings: List[Any]) -> List[Any]:
    ratings = []
    for entry in raw_ratings:
        try:
            ScoreRating.model_validate(entry)
        except ValidationError:
            logger.warning(f"Dropping invalid rating tier: {entry!r}")
            continue
        ratings.append(entry)
    if raw_ratings and not ratings:
        return default_scoring()["ratings"]
    return ratings


def _fill_sections(raw_sections: List[Any], points_per_correct: int) -> List[Dict[str, Any]]:
    sections: List[Dict[str, Any]] = []
    seen = set()
    for index, raw in enumerate(raw_sections):
        section = normalize_section(raw, index, points_per_correct)
        if section is None:
            continue
        if section["id"] in seen:
            logger.warning(f"Dropping duplicate section id '{section['id']}'")
            continue
        seen.add(section["id"])
        sections.append(section)
    return sections


def _fill_progression(raw: Any, section_ids: List[str]) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        return default_progression(section_ids)

    progression = dict(raw)
    order = progression.get("sectionOrder")
    if isinstance(order, list):
        kept = [str(s) for s in order if str(s) in section_ids]
        dropped = [s for s in order if str(s) not in section_ids]
        if dropped:
            logger.warning(f"Dropping unknown ids from sectionOrder: {dropped}")
        if len(set(kept)) != len(kept):
            kept = list(dict.fromkeys(kept))
        progression["sectionOrder"] = kept or None
    else:
        progression["sectionOrder"] = None

    start = progression.get("startSection")
    if start is not None and start not in section_ids:
        logger.warning(f"Ignoring unknown startSection '{start}'")
        progression["startSection"] = None
    if progression.get("type") not in ("linear", "branching", "adaptive", "open", "milestone"):
        progression["type"] = "linear"
    return progression


def complete_document(document: Mapping[str, Any], game_type: str) -> Dict[str, Any]:
    """
    Apply the default-fill policy to a full GameSpec document.

    Returns a new camelCase dict ready for validation.
    """
    doc = dict(document)
    scoring = _merge(default_scoring(), doc.get("scoring"))
    if isinstance(scoring.get("ratings"), list):
        scoring["ratings"] = _fill_ratings(scoring["ratings"])
    else:
        scoring["ratings"] = default_scoring()["ratings"]

    points = scoring.get("pointsPerCorrect")
    if isinstance(points, bool) or not isinstance(points, (int, float)):
        points = 10
    sections = _fill_sections(doc["content"]["sections"], int(points))
    if not sections:
        raise ContentFormatError(
            "no playable sections",
            payload=[s.get("type") if isinstance(s, dict) else s
                     for s in doc["content"]["sections"]],
        )
    section_ids = [s["id"] for s in sections]

    doc["version"] = str(doc.get("version") or "1.0")
    doc["metadata"] = _fill_metadata(doc.get("metadata"))
    doc["theme"] = _merge(default_theme(), doc.get("theme"))
    doc["config"] = _merge(default_config(game_type), doc.get("config"))
    if not doc["config"].get("gameType"):
        doc["config"]["gameType"] = game_type
    doc["content"] = {**doc["content"], "sections": sections}
    doc["progression"] = _fill_progression(doc.get("progression"), section_ids)
    doc["scoring"] = scoring
    return doc


def _validate(document: Dict[str, Any]) -> GameSpec:
    try:
        return GameSpec.model_validate(document)
    except ValidationError as e:
        details = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()[:10]
        ]
        raise ContentFormatError(
            "invalid GameSpec structure",
            payload=None,
            details=details,
        ) from e


def build_game_spec(
    document: Any,
    game_type: str = "quiz",
    record: Optional[Mapping[str, Any]] = None,
) -> GameSpec:
    """Recognize the shape of a parsed document and build a GameSpec."""
    if not isinstance(document, dict):
        raise ContentFormatError(
            "document is not a JSON object",
            payload=type(document).__name__,
        )

    if is_full_spec(document):
        shape = "gamespec"
    elif detect_legacy_shape(document) is not None:
        document = convert_legacy(document, record)
        shape = "legacy"
    else:
        raise ContentFormatError(
            "no recognizable content shape",
            payload=sorted(str(k) for k in document.keys()),
            details=["expected 'content.sections', 'questions' or 'cards'"],
        )

    spec = _validate(complete_document(document, game_type))
    logger.info(
        f"Loaded {shape} '{spec.metadata.title}' with "
        f"{len(spec.content.sections)} section(s): {spec.effective_order()}"
    )
    return spec


def load_game_spec(
    raw: Union[str, Mapping[str, Any]],
    game_type: str = "quiz",
) -> GameSpec:
    """
    Load a GameSpec from generator output.

    Parameters
    ----------
    raw : str or Mapping
        JSON text (optionally fenced) or an already-parsed document.
    game_type : str
        Requested game type, used when the document has no config.

    Raises
    ------
    ContentFormatError
        If the content cannot be played.
    """
    document = parse_document(raw) if isinstance(raw, str) else raw
    if isinstance(document, Mapping):
        document = dict(document)
    return build_game_spec(document, game_type)


def load_game_record(record: GameRecord, game_type: Optional[str] = None) -> GameSpec:
    """
    Load a GameSpec from a stored game record.

    The record's ``gameContent`` blob holds either a full GameSpec or
    legacy flat content, which is converted using the record's display
    fields.
    """
    blob = record.get("gameContent")
    if not isinstance(blob, str) or not blob.strip():
        raise ContentFormatError(
            "game record has no playable content",
            payload={k: v for k, v in record.items() if k != "gameContent"},
        )

    document = parse_document(blob)
    requested = game_type or record.get("gameType") or "quiz"
    return build_game_spec(document, requested, record=record)
