# Area: Spec Tests
"""Tests for per-section default filling."""

from edugame._spec.normalizers import (
    normalize_challenge,
    normalize_exploration,
    normalize_info,
    normalize_narrative,
    normalize_quiz,
    normalize_section,
    normalize_simulation,
    normalize_sorting,
)


class TestNormalizeSection:

    def test_non_object_dropped(self):
        assert normalize_section("quiz", 0, 10) is None

    def test_unknown_type_dropped(self):
        assert normalize_section({"type": "crossword"}, 0, 10) is None

    def test_type_from_content(self):
        section = normalize_section({"content": {"type": "info", "content": "hi"}}, 2, 10)
        assert section["type"] == "info"
        assert section["id"] == "section3"
        assert section["title"] == "Section 3"
        assert section["content"]["type"] == "info"

    def test_section_type_wins_over_content_type(self):
        section = normalize_section({"type": "info", "content": {"type": "quiz"}}, 0, 10)
        assert section["content"]["type"] == "info"


class TestQuiz:

    def test_string_options_and_points(self):
        content = normalize_quiz(
            {"questions": [{"question": "?", "options": ["a", "b"], "correctAnswer": 1}]},
            {}, 7,
        )
        question = content["questions"][0]
        assert question["id"] == "q1"
        assert question["questionType"] == "single-choice"
        assert question["options"][1] == {"id": "opt1", "text": "b"}
        assert question["points"] == 7

    def test_without_options_becomes_text_input(self):
        content = normalize_quiz({"questions": [{"question": "Name it"}]}, {}, 10)
        question = content["questions"][0]
        assert question["questionType"] == "text-input"
        assert question["correctAnswer"] == ""

    def test_true_false_defaults(self):
        content = normalize_quiz(
            {"questions": [
                {"question": "Sky is blue", "questionType": "true-false", "correctAnswer": True},
                {"question": "Fish fly", "questionType": "true-false", "correctAnswer": "false"},
            ]},
            {}, 10,
        )
        first, second = content["questions"]
        assert [o["text"] for o in first["options"]] == ["True", "False"]
        assert first["correctAnswer"] == 0
        assert second["correctAnswer"] == 1

    def test_multiple_choice_answer_wrapped(self):
        content = normalize_quiz(
            {"questions": [{"question": "?", "questionType": "multiple-choice",
                            "options": ["a", "b"], "correctAnswer": 1}]},
            {}, 10,
        )
        assert content["questions"][0]["correctAnswer"] == [1]

    def test_non_object_question_dropped(self):
        content = normalize_quiz({"questions": ["bad", {"question": "ok"}]}, {}, 10)
        assert len(content["questions"]) == 1


class TestSortingAndNarrative:

    def test_category_name_reference(self):
        content = normalize_sorting(
            {"categories": [{"name": "Mammal"}, {"id": "b", "name": "Bird"}],
             "items": [{"text": "Cow", "correctCategory": "mammal"},
                       {"text": "Owl", "correctCategory": "b"}]},
            {}, 10,
        )
        assert [i["correctCategory"] for i in content["items"]] == ["cat1", "b"]

    def test_narrative_start_scene_defaults_to_first(self):
        content = normalize_narrative(
            {"scenes": [{"text": "one"}, {"text": "two"}], "startScene": "nowhere"}, {}, 10,
        )
        assert content["startScene"] == "scene1"
        assert content["scenes"][0]["choices"] == []


class TestSimulation:

    def test_initial_state_from_resources(self):
        content = normalize_simulation(
            {"resources": [{"id": "gold", "initialValue": 30}, {"name": "Wood"}],
             "objectives": [{"type": "collect-stuff"}]},
            {}, 10,
        )
        assert content["initialState"]["resources"] == {"gold": 30, "res2": 0}
        assert content["initialState"]["turn"] == 0
        assert content["maxTurns"] == 10
        assert content["objectives"][0]["type"] == "reach-value"
        assert content["objectives"][0]["id"] == "obj1"

    def test_explicit_initial_values_win(self):
        content = normalize_simulation(
            {"resources": [{"id": "gold", "initialValue": 30}],
             "initialState": {"resources": {"gold": 5}, "turn": 2}},
            {}, 10,
        )
        assert content["initialState"]["resources"] == {"gold": 5}
        assert content["initialState"]["turn"] == 2


class TestChallengeAndInfo:

    def test_challenge_defaults(self):
        content = normalize_challenge({"items": [{"prompt": "1+1", "correctAnswer": 2}]}, {}, 5)
        assert content["challengeType"] == "speed-round"
        assert content["timeLimit"] == 60
        assert content["targetScore"] == 0
        assert content["maxMistakes"] == 0
        assert content["items"][0]["id"] == "c1"
        assert content["items"][0]["points"] == 5

    def test_info_blocks(self):
        content = normalize_info(
            {"content": ["plain", {"type": "banner", "content": "x"}]},
            {"title": "Notes"}, 10,
        )
        assert content["title"] == "Notes"
        assert [b["type"] for b in content["content"]] == ["text", "text"]

    def test_info_single_string(self):
        content = normalize_info({"content": "just text"}, {}, 10)
        assert content["content"] == [{"type": "text", "content": "just text"}]


class TestMalformedItems:

    def _scene(self, **choice):
        content = normalize_narrative(
            {"scenes": [{"id": "a", "text": None,
                         "choices": [dict({"text": "on", "targetScene": "b"}, **choice)]},
                        {"id": "b", "isEnding": True, "endingType": "victory"}]},
            {}, 10,
        )
        return content["scenes"]

    def test_unknown_effects_dropped(self):
        scenes = self._scene(effects=[{"type": "add-points"}, "oops",
                                      {"type": "set-variable", "target": "trust", "value": 1}])
        assert scenes[0]["choices"][0]["effects"] == [
            {"type": "set-variable", "target": "trust", "value": 1},
        ]

    def test_unknown_operator_drops_condition(self):
        scenes = self._scene(condition={"variable": "trust", "operator": "=", "value": 2})
        assert scenes[0]["choices"][0]["condition"] is None

    def test_unknown_condition_type_drops_condition(self):
        scenes = self._scene(condition={"type": "weather", "operator": "=="})
        assert scenes[0]["choices"][0]["condition"] is None

    def test_condition_defaults_filled(self):
        scenes = self._scene(condition={"variable": "trust", "value": 2})
        condition = scenes[0]["choices"][0]["condition"]
        assert condition["type"] == "variable"
        assert condition["operator"] == "=="

    def test_unknown_ending_becomes_neutral(self):
        scenes = self._scene()
        assert scenes[1]["endingType"] == "neutral"
        assert scenes[0]["text"] == ""

    def test_unknown_location_event_cleared(self):
        content = normalize_exploration(
            {"locations": [{"id": "cave", "onVisit": {"type": "teleport"}},
                           {"id": "hut", "onVisit": {"type": "item", "content": "key"}},
                           {"id": "lake", "onVisit": "splash"}]},
            {}, 10,
        )
        assert [loc["onVisit"] for loc in content["locations"]] == [
            None, {"type": "item", "content": "key"}, None,
        ]

    def test_text_answer_stringified(self):
        content = normalize_quiz(
            {"questions": [{"question": "Pi?", "questionType": "text-input",
                            "correctAnswer": 3.14}]},
            {}, 10,
        )
        assert content["questions"][0]["correctAnswer"] == "3.14"

    def test_choice_answers_made_integral(self):
        content = normalize_quiz(
            {"questions": [
                {"question": "?", "options": ["a", "b"], "correctAnswer": 1.0},
                {"question": "?", "options": ["a", "b"], "questionType": "multiple-choice",
                 "correctAnswer": [0, 1.0, "x"]},
            ]},
            {}, 10,
        )
        single, multiple = content["questions"]
        assert single["correctAnswer"] == 1
        assert multiple["correctAnswer"] == [0, 1]
