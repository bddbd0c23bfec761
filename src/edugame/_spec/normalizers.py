# Area: Spec
"""
edugame._spec.normalizers — Per-section default filling
=======================================================

Generated content is frequently incomplete: ids are missing, options
arrive as bare strings, optional knobs are absent. Each normalizer
takes the raw camelCase section content and returns a filled copy
that validates against the matching content model.

Normalizers never fail on missing optional data. Items that cannot be
made playable (a narrative choice without a target, an effect or
condition of unknown kind, a non-object list entry) are dropped with a
warning; unknown enum values elsewhere fall back to a default.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .models import SECTION_TYPES

logger = logging.getLogger("edugame.normalizer")

QUESTION_TYPES = ("single-choice", "multiple-choice", "text-input", "true-false")
TEST_MODES = ("flip-reveal", "type-answer", "speak-answer")
OBJECTIVE_TYPES = ("reach-value", "maintain-value", "complete-action", "survive-turns")
INFO_BLOCK_TYPES = ("text", "image", "list", "table", "quote", "code")
EFFECT_TYPES = ("set-variable", "add-score", "add-item", "remove-item")
CONDITION_TYPES = ("variable", "score", "item")
OPERATORS = ("==", "!=", ">", "<", ">=", "<=")
ENDING_TYPES = ("success", "failure", "neutral")
LOCATION_EVENT_TYPES = ("info", "quiz", "item", "narrative")


# ── helpers ────────────────────────────────────────────────────

def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _objects(value: Any, what: str) -> List[Dict[str, Any]]:
    """Copy the dict entries of a list, dropping anything else."""
    result = []
    for entry in _as_list(value):
        if isinstance(entry, dict):
            result.append(dict(entry))
        else:
            logger.warning(f"Dropping non-object {what}: {entry!r}")
    return result


def _fill_id(item: Dict[str, Any], fallback: str, key: str = "id") -> str:
    value = item.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        item[key] = fallback
    else:
        item[key] = str(value)
    return item[key]


def _text_side(value: Any) -> Dict[str, Any]:
    """A card face or pair side given as a bare string or an object."""
    if isinstance(value, dict):
        side = dict(value)
        side["text"] = str(side.get("text", ""))
        return side
    if value is None:
        return {"text": ""}
    return {"text": str(value)}


def _int_or(value: Any, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return int(value)


# ── quiz ───────────────────────────────────────────────────────

def _quiz_options(raw: Any) -> List[Dict[str, Any]]:
    options = []
    for n, opt in enumerate(_as_list(raw)):
        if isinstance(opt, dict):
            option = dict(opt)
            _fill_id(option, f"opt{n}")
            option["text"] = str(option.get("text", ""))
        else:
            option = {"id": f"opt{n}", "text": str(opt)}
        options.append(option)
    return options


def _option_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _coerce_answer(answer: Any, qtype: str) -> Union[int, List[int], str]:
    """Fit a correct answer into an option index, an index list or text."""
    if qtype == "text-input":
        return answer if isinstance(answer, str) else str(answer)
    if isinstance(answer, list):
        indices = [_option_number(a) for a in answer]
        return [i for i in indices if i is not None]
    if isinstance(answer, str):
        return answer
    index = _option_number(answer)
    return index if index is not None else str(answer)


def normalize_quiz(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    questions = []
    for n, q in enumerate(_objects(content.get("questions"), "quiz question"), start=1):
        _fill_id(q, f"q{n}")
        q["question"] = str(q.get("question", ""))
        options = _quiz_options(q.get("options"))
        qtype = q.get("questionType")
        if qtype not in QUESTION_TYPES:
            qtype = "single-choice" if options else "text-input"

        answer = q.get("correctAnswer")
        if qtype == "true-false":
            if not options:
                options = _quiz_options(["True", "False"])
            if isinstance(answer, bool):
                answer = 0 if answer else 1
            elif isinstance(answer, str) and answer.strip().lower() in ("true", "false"):
                answer = 0 if answer.strip().lower() == "true" else 1
        elif qtype == "multiple-choice" and isinstance(answer, int) and not isinstance(answer, bool):
            answer = [answer]
        if answer is None:
            answer = "" if qtype == "text-input" else 0
        answer = _coerce_answer(answer, qtype)

        q["questionType"] = qtype
        q["options"] = options
        q["correctAnswer"] = answer
        q["points"] = _int_or(q.get("points"), points)
        questions.append(q)
    return {**content, "questions": questions}


# ── flashcards / matching / sorting ────────────────────────────

def normalize_flashcards(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    cards = []
    for n, card in enumerate(_objects(content.get("cards"), "flashcard"), start=1):
        _fill_id(card, f"card{n}")
        card["front"] = _text_side(card.get("front"))
        card["back"] = _text_side(card.get("back"))
        cards.append(card)
    mode = content.get("testMode")
    return {
        **content,
        "cards": cards,
        "testMode": mode if mode in TEST_MODES else "flip-reveal",
    }


def normalize_matching(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    pairs = []
    for n, pair in enumerate(_objects(content.get("pairs"), "match pair"), start=1):
        _fill_id(pair, f"pair{n}")
        pair["left"] = _text_side(pair.get("left"))
        pair["right"] = _text_side(pair.get("right"))
        pairs.append(pair)
    return {
        **content,
        "pairs": pairs,
        "matchStyle": content.get("matchStyle") or "tap-tap",
    }


def normalize_sorting(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    categories = []
    by_name: Dict[str, str] = {}
    for n, cat in enumerate(_objects(content.get("categories"), "sort category"), start=1):
        cat_id = _fill_id(cat, f"cat{n}")
        cat["name"] = str(cat.get("name", cat_id))
        by_name[cat["name"].strip().lower()] = cat_id
        categories.append(cat)
    known = {c["id"] for c in categories}

    items = []
    for n, item in enumerate(_objects(content.get("items"), "sort item"), start=1):
        _fill_id(item, f"item{n}")
        item["text"] = str(item.get("text", ""))
        target = str(item.get("correctCategory", ""))
        # Generators sometimes reference the category by name
        if target not in known:
            target = by_name.get(target.strip().lower(), target)
        item["correctCategory"] = target
        items.append(item)
    return {
        **content,
        "items": items,
        "categories": categories,
        "instructions": content.get("instructions") or "",
    }


# ── narrative ──────────────────────────────────────────────────

def _choice_condition(raw: Any, scene_id: str) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        logger.warning(f"Dropping non-object choice condition in scene '{scene_id}'")
        return None
    condition = dict(raw)
    condition["type"] = condition.get("type") or "variable"
    condition["operator"] = condition.get("operator") or "=="
    if condition["type"] not in CONDITION_TYPES or condition["operator"] not in OPERATORS:
        logger.warning(
            f"Dropping condition with type {condition['type']!r} and operator "
            f"{condition['operator']!r} in scene '{scene_id}'"
        )
        return None
    condition["variable"] = str(condition.get("variable") or "")
    return condition


def _choice_effects(raw: Any, scene_id: str) -> List[Dict[str, Any]]:
    effects = []
    for effect in _objects(raw, "choice effect"):
        if effect.get("type") not in EFFECT_TYPES:
            logger.warning(f"Dropping effect of unknown type {effect.get('type')!r} in scene '{scene_id}'")
            continue
        effect["target"] = str(effect.get("target") or "")
        effects.append(effect)
    return effects


def normalize_narrative(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    scenes = []
    for n, scene in enumerate(_objects(content.get("scenes"), "narrative scene"), start=1):
        scene_id = _fill_id(scene, f"scene{n}")
        choices = []
        for m, choice in enumerate(_objects(scene.get("choices"), "narrative choice"), start=1):
            if not choice.get("targetScene"):
                logger.warning(f"Dropping choice without targetScene in scene '{scene_id}'")
                continue
            _fill_id(choice, f"choice{m}")
            choice["text"] = str(choice.get("text", ""))
            choice["targetScene"] = str(choice["targetScene"])
            choice["condition"] = _choice_condition(choice.get("condition"), scene_id)
            choice["effects"] = _choice_effects(choice.get("effects"), scene_id)
            choices.append(choice)
        scene["choices"] = choices
        scene["text"] = str(scene.get("text") or "")
        actions = _objects(scene.get("actions"), "scene action")
        for action in actions:
            action["type"] = str(action.get("type") or "")
        scene["actions"] = actions
        ending = scene.get("endingType")
        if ending is not None and ending not in ENDING_TYPES:
            logger.warning(f"Unknown endingType {ending!r} in scene '{scene_id}', using 'neutral'")
            scene["endingType"] = "neutral"
        scenes.append(scene)

    scene_ids = [s["id"] for s in scenes]
    start = content.get("startScene")
    if start not in scene_ids:
        start = scene_ids[0] if scene_ids else ""
    return {**content, "scenes": scenes, "startScene": start}


# ── simulation ─────────────────────────────────────────────────

def normalize_simulation(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    resources = _objects(content.get("resources"), "simulation resource")
    for n, res in enumerate(resources, start=1):
        _fill_id(res, f"res{n}")

    initial = dict(content.get("initialState") or {})
    values = dict(initial.get("resources") or {})
    for res in resources:
        values.setdefault(res["id"], res.get("initialValue", 0))
    initial["resources"] = values
    initial.setdefault("turn", 0)
    initial.setdefault("variables", {})
    initial.setdefault("unlockedActions", [])
    initial.setdefault("completedObjectives", [])

    actions = _objects(content.get("actions"), "simulation action")
    for n, action in enumerate(actions, start=1):
        _fill_id(action, f"action{n}")
    events = _objects(content.get("events"), "simulation event")
    for n, event in enumerate(events, start=1):
        _fill_id(event, f"event{n}")
        event["choices"] = _objects(event.get("choices"), "event choice")
    objectives = _objects(content.get("objectives"), "simulation objective")
    for n, objective in enumerate(objectives, start=1):
        _fill_id(objective, f"obj{n}")
        if objective.get("type") not in OBJECTIVE_TYPES:
            objective["type"] = "reach-value"

    return {
        **content,
        "initialState": initial,
        "resources": resources,
        "actions": actions,
        "events": events,
        "objectives": objectives,
        "maxTurns": _int_or(content.get("maxTurns"), 10),
    }


# ── exploration / challenge / info ─────────────────────────────

def normalize_exploration(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    locations = _objects(content.get("locations"), "location")
    for n, loc in enumerate(locations, start=1):
        loc_id = _fill_id(loc, f"loc{n}")
        event = loc.get("onVisit")
        if event is not None and (
            not isinstance(event, dict) or event.get("type") not in LOCATION_EVENT_TYPES
        ):
            logger.warning(f"Ignoring unknown onVisit event at location '{loc_id}'")
            loc["onVisit"] = None
        position = loc.get("position")
        loc["position"] = {
            k: v for k, v in position.items()
            if isinstance(v, (int, float)) and not isinstance(v, bool)
        } if isinstance(position, dict) else {}
        loc["visible"] = loc.get("visible") is not False
    collectibles = _objects(content.get("collectibles"), "collectible")
    for n, item in enumerate(collectibles, start=1):
        _fill_id(item, f"collect{n}")
        item["locationId"] = str(item.get("locationId", ""))
        item["points"] = _int_or(item.get("points"), 0)

    location_ids = [loc["id"] for loc in locations]
    start = content.get("startLocation")
    if start not in location_ids:
        start = location_ids[0] if location_ids else ""
    return {
        **content,
        "locations": locations,
        "collectibles": collectibles,
        "startLocation": start,
    }


def normalize_challenge(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    items = []
    for n, item in enumerate(_objects(content.get("items"), "challenge item"), start=1):
        _fill_id(item, f"c{n}")
        item["prompt"] = str(item.get("prompt", ""))
        if item.get("correctAnswer") is None:
            item["correctAnswer"] = ""
        item["points"] = _int_or(item.get("points"), points)
        items.append(item)
    return {
        **content,
        "challengeType": content.get("challengeType") or "speed-round",
        "items": items,
        "timeLimit": _int_or(content.get("timeLimit"), 60),
        "targetScore": _int_or(content.get("targetScore"), 0),
        "maxMistakes": _int_or(content.get("maxMistakes"), 0),
    }


def normalize_info(content: Dict[str, Any], section: Dict[str, Any], points: int) -> Dict[str, Any]:
    raw_blocks = content.get("content")
    if isinstance(raw_blocks, str):
        raw_blocks = [raw_blocks]
    blocks = []
    for block in _as_list(raw_blocks):
        if isinstance(block, dict):
            block = dict(block)
            if block.get("type") not in INFO_BLOCK_TYPES:
                block["type"] = "text"
            blocks.append(block)
        else:
            blocks.append({"type": "text", "content": str(block)})
    return {
        **content,
        "title": content.get("title") or section.get("title", ""),
        "content": blocks,
    }


NORMALIZERS: Dict[str, Callable[[Dict[str, Any], Dict[str, Any], int], Dict[str, Any]]] = {
    "quiz": normalize_quiz,
    "flashcards": normalize_flashcards,
    "matching": normalize_matching,
    "sorting": normalize_sorting,
    "narrative": normalize_narrative,
    "simulation": normalize_simulation,
    "exploration": normalize_exploration,
    "challenge": normalize_challenge,
    "info": normalize_info,
}


def normalize_section(
    raw: Any, index: int, points_per_correct: int
) -> Optional[Dict[str, Any]]:
    """
    Fill defaults for one raw section.

    Returns the filled camelCase section dict, or None when the entry
    cannot be played (not an object, unknown section type).
    """
    if not isinstance(raw, dict):
        logger.warning(f"Dropping non-object section at index {index}")
        return None

    section = dict(raw)
    content = section.get("content")
    content = dict(content) if isinstance(content, dict) else {}

    section_type = section.get("type") or content.get("type")
    if section_type not in SECTION_TYPES:
        logger.warning(f"Skipping section {index} with unknown type {section_type!r}")
        return None

    _fill_id(section, f"section{index + 1}")
    if not section.get("title"):
        section["title"] = f"Section {index + 1}"

    filled = NORMALIZERS[section_type](content, section, points_per_correct)
    filled["type"] = section_type
    section["type"] = section_type
    section["content"] = filled
    return section
