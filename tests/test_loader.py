# Area: Spec Tests
"""Tests for the GameSpec loader — parsing, shape detection and default filling."""

import json
import random

import pytest

from edugame import ContentFormatError, Session, load_game_record, load_game_spec
from edugame._spec.loader import is_full_spec, strip_code_fence


def _document(sections=None, **extra):
    if sections is None:
        sections = [
            {"id": "s1", "title": "Quiz", "type": "quiz",
             "content": {"questions": [{"question": "?", "options": ["a", "b"],
                                        "correctAnswer": 0}]}},
            {"id": "s2", "title": "Read", "type": "info", "content": {"content": ["x"]}},
        ]
    document = {"version": "1.0", "metadata": {"title": "Loader"},
                "content": {"sections": sections}}
    document.update(extra)
    return document


class TestParsing:

    def test_fenced_json(self):
        raw = "```json\n" + json.dumps(_document()) + "\n```"
        spec = load_game_spec(raw)
        assert spec.section_ids() == ["s1", "s2"]

    def test_bare_fence(self):
        assert strip_code_fence("```\n{\"a\": 1}\n```") == '{"a": 1}'

    def test_unfenced_text_untouched(self):
        assert strip_code_fence('  {"a": 1} ') == '{"a": 1}'

    def test_invalid_json(self):
        with pytest.raises(ContentFormatError) as exc_info:
            load_game_spec("{not json")
        assert exc_info.value.reason == "content is not valid JSON"
        assert exc_info.value.details

    def test_non_object(self):
        with pytest.raises(ContentFormatError) as exc_info:
            load_game_spec("[1, 2, 3]")
        assert exc_info.value.reason == "document is not a JSON object"

    def test_unrecognized_shape(self):
        with pytest.raises(ContentFormatError) as exc_info:
            load_game_spec({"title": "Nothing playable"})
        assert exc_info.value.reason == "no recognizable content shape"
        assert exc_info.value.payload == ["title"]


class TestShapeDetection:

    def test_full_spec_needs_section_list(self):
        assert is_full_spec({"content": {"sections": []}}) is True
        assert is_full_spec({"content": {"sections": "no"}}) is False
        assert is_full_spec({"content": "x"}) is False

    def test_zero_sections_is_unplayable(self):
        with pytest.raises(ContentFormatError) as exc_info:
            load_game_spec(_document(sections=[]))
        assert exc_info.value.reason == "no playable sections"

    def test_only_unknown_sections_is_unplayable(self):
        with pytest.raises(ContentFormatError):
            load_game_spec(_document(sections=[{"id": "x", "type": "puzzle", "content": {}}]))


class TestDefaults:

    def test_missing_substructures_filled(self):
        spec = load_game_spec(_document(), game_type="flashcard")
        assert spec.config.game_type == "flashcard"
        assert spec.config.max_hints == 3
        assert spec.theme.primary_color == "#B6EBE7"
        assert spec.scoring.max_score == 100
        assert [r.label for r in spec.scoring.ratings] == [
            "Excellent", "Good", "Fair", "Needs Work",
        ]
        assert spec.progression.type == "linear"
        assert spec.effective_order() == ["s1", "s2"]

    def test_partial_scoring_merged(self):
        spec = load_game_spec(_document(scoring={"maxScore": 50}))
        assert spec.scoring.max_score == 50
        assert spec.scoring.points_per_correct == 10
        assert len(spec.scoring.ratings) == 4

    def test_explicit_empty_ratings_kept(self):
        spec = load_game_spec(_document(scoring={"ratings": []}))
        assert spec.scoring.ratings == []

    def test_metadata_defaults_and_aliases(self):
        spec = load_game_spec(_document(metadata={"difficulty": "Medium",
                                                  "complexity": "Normal"}))
        assert spec.metadata.title == "Game"
        assert spec.metadata.difficulty == "intermediate"
        assert spec.metadata.complexity == "standard"
        assert spec.metadata.language == "English"

    def test_existing_config_kept(self):
        spec = load_game_spec(_document(config={"gameType": "adventure", "lives": 3}))
        assert spec.config.game_type == "adventure"
        assert spec.config.lives == 3
        assert spec.config.hints_enabled is True

    def test_sections_get_ids_and_titles(self):
        spec = load_game_spec(_document(sections=[
            {"type": "info", "content": {"content": ["a"]}},
            {"type": "info", "content": {"content": ["b"]}},
        ]))
        assert spec.section_ids() == ["section1", "section2"]
        assert spec.content.sections[1].title == "Section 2"

    def test_duplicate_section_ids_dropped(self):
        spec = load_game_spec(_document(sections=[
            {"id": "a", "title": "One", "type": "info", "content": {}},
            {"id": "a", "title": "Two", "type": "info", "content": {}},
        ]))
        assert spec.section_ids() == ["a"]
        assert spec.content.sections[0].title == "One"

    def test_unknown_section_type_skipped(self):
        spec = load_game_spec(_document(sections=[
            {"id": "x", "title": "X", "type": "puzzle", "content": {}},
            {"id": "y", "title": "Y", "type": "info", "content": {}},
        ]))
        assert spec.section_ids() == ["y"]


class TestProgression:

    def test_unknown_order_ids_filtered(self):
        spec = load_game_spec(_document(progression={
            "type": "linear", "sectionOrder": ["s2", "ghost", "s1"],
        }))
        assert spec.progression.section_order == ["s2", "s1"]
        assert spec.first_section_id() == "s2"

    def test_order_with_only_unknown_ids_falls_back(self):
        spec = load_game_spec(_document(progression={"sectionOrder": ["ghost"]}))
        assert spec.progression.section_order is None
        assert spec.effective_order() == ["s1", "s2"]

    def test_unknown_start_section_dropped(self):
        spec = load_game_spec(_document(progression={"startSection": "ghost"}))
        assert spec.progression.start_section is None
        assert spec.first_section_id() == "s1"

    def test_invalid_type_becomes_linear(self):
        spec = load_game_spec(_document(progression={"type": "spiral"}))
        assert spec.progression.type == "linear"


class TestDocumentRoundTrip:

    def test_normalized_document_loads_unchanged(self):
        spec = load_game_spec(_document())
        again = load_game_spec(spec.to_document())
        assert again == spec


class TestGameRecord:

    def test_full_spec_record(self):
        record = {"gameContent": json.dumps(_document()), "title": "Ignored"}
        spec = load_game_record(record)
        assert spec.metadata.title == "Loader"

    def test_empty_record(self):
        with pytest.raises(ContentFormatError) as exc_info:
            load_game_record({"gameContent": "  ", "title": "Empty"})
        assert exc_info.value.reason == "game record has no playable content"
        assert exc_info.value.payload == {"title": "Empty"}

    def test_missing_content(self):
        with pytest.raises(ContentFormatError):
            load_game_record({"title": "No content"})

    def test_record_game_type_used(self):
        document = _document()
        record = {"gameContent": json.dumps(document), "gameType": "matching"}
        assert load_game_record(record).config.game_type == "matching"

    def test_legacy_record_uses_display_fields(self):
        record = {
            "gameContent": json.dumps({"questions": [
                {"question": "2+2?", "options": ["3", "4"], "correctAnswer": 1},
            ]}),
            "title": "Arithmetic",
            "topic": "Math",
            "difficulty": "Beginner",
            "durationMinutes": 5,
        }
        spec = load_game_record(record)
        assert spec.metadata.title == "Arithmetic"
        assert spec.metadata.topic == "Math"
        assert spec.metadata.estimated_minutes == 5
        assert spec.section_ids() == ["main"]


def _story(choice=None, **scene):
    first = {"id": "start", "text": "A fork in the road.",
             "choices": [dict({"id": "go", "text": "Go left", "targetScene": "end"},
                              **(choice or {}))]}
    first.update(scene)
    return {"id": "story", "title": "Story", "type": "narrative",
            "content": {"startScene": "start", "scenes": [
                first,
                {"id": "end", "text": "Home.", "isEnding": True, "endingType": "success"},
            ]}}


def _with_info(section):
    return _document(sections=[
        {"id": "intro", "title": "Read", "type": "info", "content": {"content": ["hello"]}},
        section,
    ])


class TestMalformedItems:
    """A bad item degrades in place; the rest of the game stays playable."""

    def test_unknown_effect_dropped(self):
        spec = load_game_spec(_with_info(_story({"effects": [
            {"type": "add-points", "value": 5},
            {"type": "add-item", "target": "map"},
        ]})))
        assert spec.section_ids() == ["intro", "story"]
        choice = spec.content.sections[1].content.scenes[0].choices[0]
        assert [e.type for e in choice.effects] == ["add-item"]

    def test_bad_condition_and_ending_degrade(self):
        section = _story({"condition": {"variable": "trust", "operator": "=", "value": 1}})
        section["content"]["scenes"][1]["endingType"] = "good"
        spec = load_game_spec(_with_info(section))
        scenes = spec.content.sections[1].content.scenes
        assert scenes[0].choices[0].condition is None
        assert scenes[1].ending_type == "neutral"

    def test_float_text_answer_becomes_text(self):
        spec = load_game_spec(_with_info(
            {"id": "pi", "title": "Pi", "type": "quiz",
             "content": {"questions": [{"question": "Pi to two places?",
                                        "questionType": "text-input",
                                        "correctAnswer": 3.14}]}}
        ))
        assert spec.content.sections[1].content.questions[0].correct_answer == "3.14"

    def test_null_metadata_values_defaulted(self):
        document = _document(metadata={"title": None, "estimatedMinutes": None,
                                       "description": None})
        spec = load_game_spec(document)
        assert spec.metadata.title == "Game"
        assert spec.metadata.estimated_minutes == 10
        assert spec.metadata.description == ""

    def test_invalid_rating_dropped(self):
        spec = load_game_spec(_document(scoring={"ratings": [
            {"minPercentage": 80, "label": "Great"},
            {"minPercentage": "lots", "label": "Broken"},
            {"label": "No threshold"},
        ]}))
        assert [r.label for r in spec.scoring.ratings] == ["Great"]

    def test_all_ratings_invalid_uses_defaults(self):
        spec = load_game_spec(_document(scoring={"ratings": [{"label": "x"}]}))
        assert len(spec.scoring.ratings) == 4

    def test_other_sections_still_play(self):
        spec = load_game_spec(_with_info(_story(
            {"effects": [{"type": "teleport"}],
             "condition": {"type": "weather", "variable": "sky"}},
        )))
        session = Session(spec, rng=random.Random(1), clock=lambda: 0.0)
        session.start()
        session.current_handler.continue_()
        assert session.state.current_section_id == "story"

        story = session.current_handler
        assert [c.id for c in story.available_choices()] == ["go"]
        assert story.choose("go") is True
        story.continue_()
        assert session.state.is_complete is True
