# Area: Handler Tests
"""Tests for NarrativeHandler — scene graph traversal, conditions and effects."""

from edugame._handlers import NarrativeHandler


def _section(start="intro"):
    scenes = [
        {
            "id": "intro",
            "text": "A fox blocks the path.",
            "actions": [{"type": "add-item", "payload": {"item": "map"}}],
            "choices": [
                {
                    "id": "befriend",
                    "text": "Offer bread",
                    "targetScene": "friend",
                    "effects": [
                        {"type": "set-variable", "target": "trust", "value": 6},
                        {"type": "add-score", "value": 5},
                    ],
                },
                {"id": "ignore", "text": "Walk past", "targetScene": "alone"},
                {"text": "Broken choice"},
            ],
        },
        {
            "id": "friend",
            "text": "The fox follows you.",
            "nextScene": "gate",
            "actions": [{"type": "add-score", "payload": {"points": "3"}}],
        },
        {
            "id": "gate",
            "text": "A locked gate.",
            "choices": [
                {
                    "id": "enter",
                    "text": "Ask the fox",
                    "targetScene": "win",
                    "condition": {"type": "variable", "variable": "trust",
                                  "operator": ">=", "value": 5},
                },
                {"id": "leave", "text": "Turn back", "targetScene": "lose"},
            ],
        },
        {"id": "alone", "text": "Nothing happens."},
        {"id": "win", "text": "You made it.", "isEnding": True, "endingType": "success"},
        {"id": "lose", "text": "You went home.", "isEnding": True, "endingType": "failure"},
    ]
    return {
        "id": "story",
        "title": "Story",
        "type": "narrative",
        "content": {"scenes": scenes, "startScene": start},
    }


def _handler(make_ctx, start="intro"):
    handler = NarrativeHandler(make_ctx(_section(start)))
    handler.enter()
    return handler


class TestTraversal:

    def test_choice_without_target_is_dropped(self, make_ctx):
        handler = _handler(make_ctx)
        assert [c.id for c in handler.available_choices()] == ["befriend", "ignore"]

    def test_scene_actions_run_on_entry(self, make_ctx, recorder):
        _handler(make_ctx)
        assert recorder.inventory == ["map"]

    def test_successful_path(self, make_ctx, recorder):
        handler = _handler(make_ctx)

        assert handler.choose("befriend") is True
        assert recorder.variables["trust"] == 6
        assert recorder.answers[0]["item_id"] == "intro-befriend"
        assert recorder.answers[0]["answer"] == "Offer bread"
        assert recorder.answers[0]["points"] == 5
        assert handler.scene_id == "friend"
        assert recorder.answers[1]["answer"] == "scene-bonus"
        assert recorder.answers[1]["points"] == 3

        handler.continue_()
        assert handler.scene_id == "gate"
        assert handler.choose("enter") is True

        handler.continue_()
        ending = recorder.answers[-1]
        assert ending["item_id"] == "win"
        assert ending["answer"] == "success"
        assert ending["points"] == 50
        assert recorder.completed == 1
        assert handler.history == ["intro", "friend", "gate", "win"]

    def test_failure_ending_earns_nothing(self, make_ctx, recorder):
        handler = _handler(make_ctx, start="gate")
        handler.choose("leave")
        handler.continue_()
        assert recorder.answers[-1]["is_correct"] is False
        assert recorder.answers[-1]["points"] == 0
        assert recorder.completed == 1

    def test_continue_requires_a_choice(self, make_ctx, recorder):
        handler = _handler(make_ctx)
        handler.continue_()
        assert handler.scene_id == "intro"
        assert recorder.completed == 0

    def test_dead_end_completes(self, make_ctx, recorder):
        handler = _handler(make_ctx, start="alone")
        handler.continue_()
        assert recorder.completed == 1


class TestConditions:

    def test_gated_choice_hidden_below_threshold(self, make_ctx, recorder):
        recorder.variables["trust"] = 3
        handler = _handler(make_ctx, start="gate")
        assert [c.id for c in handler.available_choices()] == ["leave"]
        assert handler.choose("enter") is False
        assert handler.scene_id == "gate"

    def test_gated_choice_visible_at_threshold(self, make_ctx, recorder):
        recorder.variables["trust"] = 5
        handler = _handler(make_ctx, start="gate")
        assert [c["id"] for c in handler.view()["choices"]] == ["enter", "leave"]


class TestPresentation:

    def test_typing_flag(self, make_ctx):
        handler = _handler(make_ctx)
        assert handler.view()["typing"] is True
        handler.skip_typing()
        assert handler.view()["typing"] is False

    def test_ending_view(self, make_ctx):
        view = _handler(make_ctx, start="win").view()
        assert view["isEnding"] is True
        assert view["canContinue"] is True
        assert view["endingType"] == "success"
