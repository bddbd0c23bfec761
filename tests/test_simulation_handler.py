# Area: Handler Tests
"""Tests for SimulationHandler — actions, turns, events and objectives."""

from edugame._handlers import SimulationHandler
from edugame.types import SimulationResult


def _section(objectives=None, events=None, max_turns=10, actions=None):
    if actions is None:
        actions = [
            {"id": "expand", "cost": {"money": 100}, "effects": {"energy": 10}},
            {"id": "invest", "cost": {"money": 10}, "effects": {"money": 80}},
            {"id": "spend", "cost": {"money": 50}},
            {"id": "work", "effects": {"energy": -40, "money": 5}, "cooldown": 2},
            {"id": "secret", "unlockCondition": "after investing", "effects": {"money": 1}},
        ]
    return {
        "id": "sim",
        "title": "Shop",
        "type": "simulation",
        "content": {
            "resources": [
                {"id": "money", "name": "Money", "initialValue": 50},
                {"id": "energy", "name": "Energy", "initialValue": 80},
            ],
            "actions": actions,
            "events": events or [],
            "objectives": objectives or [],
            "maxTurns": max_turns,
        },
    }


def _handler(make_ctx, **kwargs):
    handler = SimulationHandler(make_ctx(_section(**kwargs)))
    handler.enter()
    return handler


class TestActions:

    def test_initial_resources(self, make_ctx):
        handler = _handler(make_ctx)
        assert handler.resources == {"money": 50, "energy": 80}

    def test_unaffordable_action_rejected(self, make_ctx):
        handler = _handler(make_ctx)
        assert handler.perform("expand") is False
        assert handler.resources == {"money": 50, "energy": 80}

    def test_effects_clamped_to_max(self, make_ctx):
        handler = _handler(make_ctx)
        assert handler.perform("invest") is True
        assert handler.value("money") == 100

    def test_unknown_action(self, make_ctx):
        assert _handler(make_ctx).perform("teleport") is False

    def test_cooldown_blocks_until_expired(self, make_ctx):
        handler = _handler(make_ctx)
        assert handler.perform("work") is True
        assert handler.perform("work") is False
        handler.end_turn()
        assert handler.perform("work") is False
        handler.end_turn()
        assert handler.perform("work") is True

    def test_locked_action_needs_unlock(self, make_ctx):
        handler = _handler(make_ctx)
        assert handler.perform("secret") is False
        handler.unlock("secret")
        assert handler.perform("secret") is True


class TestTurnsAndEvents:

    def test_end_turn_mirrors_resources_into_variables(self, make_ctx, recorder):
        handler = _handler(make_ctx)
        handler.perform("invest")
        assert handler.end_turn() is None
        assert handler.turn == 1
        assert recorder.variables == {"money": 100, "energy": 80}

    def test_certain_event_must_be_resolved(self, make_ctx):
        events = [{
            "id": "storm",
            "probability": 1.0,
            "effects": {"money": -10},
            "choices": [{"text": "Repair", "effects": {"money": -20}}],
        }]
        handler = _handler(make_ctx, events=events)

        event = handler.end_turn()
        assert event.id == "storm"
        assert handler.turn == 0
        assert handler.perform("invest") is False
        assert handler.end_turn() is None

        handler.resolve_event(0)
        assert handler.value("money") == 30
        assert handler.turn == 1
        assert handler.current_event is None

    def test_event_default_effects(self, make_ctx):
        events = [{"id": "gift", "probability": 1.0, "effects": {"money": 15}}]
        handler = _handler(make_ctx, events=events)
        handler.end_turn()
        handler.resolve_event()
        assert handler.value("money") == 65

    def test_impossible_event_never_fires(self, make_ctx):
        events = [{"id": "meteor", "probability": 0.0, "effects": {"money": -50}}]
        handler = _handler(make_ctx, events=events)
        for _ in range(5):
            assert handler.end_turn() is None
        assert handler.value("money") == 50


class TestOutcome:

    def test_required_objective_wins(self, make_ctx, recorder):
        objectives = [{"id": "rich", "type": "reach-value", "target": "money",
                       "value": 100, "required": True, "points": 20}]
        handler = _handler(make_ctx, objectives=objectives)
        handler.perform("invest")

        assert handler.result == "win"
        answer = recorder.answers[0]
        assert answer["item_id"] == "sim"
        assert answer["is_correct"] is True
        assert answer["points"] == 20
        assert answer["answer"]["completedObjectives"] == ["rich"]
        assert set(answer["answer"]) == set(SimulationResult.__annotations__)

        assert recorder.completed == 0
        handler.continue_()
        assert recorder.completed == 1

    def test_max_turns_without_required_objectives_loses(self, make_ctx, recorder):
        handler = _handler(make_ctx, max_turns=2)
        handler.end_turn()
        assert handler.result is None
        handler.end_turn()
        assert handler.result == "lose"
        assert recorder.answers[0]["is_correct"] is False

    def test_resource_at_minimum_loses(self, make_ctx):
        handler = _handler(make_ctx)
        handler.perform("spend")
        assert handler.value("money") == 0
        assert handler.result == "lose"

    def test_survive_turns(self, make_ctx):
        objectives = [{"id": "hold", "type": "survive-turns", "value": 2,
                       "required": True, "points": 10}]
        handler = _handler(make_ctx, objectives=objectives, max_turns=5)
        handler.end_turn()
        handler.end_turn()
        assert handler.result == "win"

    def test_complete_action_objective(self, make_ctx):
        objectives = [{"id": "try", "type": "complete-action", "target": "work",
                       "required": True}]
        handler = _handler(make_ctx, objectives=objectives)
        handler.perform("work")
        assert handler.result == "win"

    def test_maintain_value_holds_to_the_end(self, make_ctx):
        objectives = [{"id": "rested", "type": "maintain-value", "target": "energy",
                       "value": 50, "required": True, "points": 15}]
        handler = _handler(make_ctx, objectives=objectives, max_turns=2)
        handler.end_turn()
        handler.end_turn()
        assert handler.result == "win"

    def test_maintain_value_broken_once_fails(self, make_ctx):
        objectives = [{"id": "rested", "type": "maintain-value", "target": "energy",
                       "value": 50, "required": True}]
        handler = _handler(make_ctx, objectives=objectives, max_turns=3)
        handler.perform("work")
        handler.end_turn()
        handler.end_turn()
        handler.end_turn()
        assert "rested" in handler.broken_maintains
        assert handler.result == "lose"

    def test_no_actions_after_the_end(self, make_ctx, recorder):
        handler = _handler(make_ctx)
        handler.perform("spend")
        assert handler.perform("invest") is False
        assert handler.end_turn() is None
        assert len(recorder.answers) == 1
