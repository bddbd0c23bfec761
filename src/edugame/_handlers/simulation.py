# Area: Handlers
"""
edugame._handlers.simulation — Turn-based resource simulation
=============================================================

Each turn the player performs any number of affordable, unlocked,
off-cooldown actions, then ends the turn. Ending a turn decrements
cooldowns and may raise one random event; the turn counter advances
when the event is resolved, or directly when none fires.

After every state change objectives are re-evaluated and the end
conditions checked:

* every required objective complete   -> win
* turn >= maxTurns                     -> win if any required objective
                                          is complete, else lose
* a declared resource at its minimum   -> lose

The outcome is recorded once, worth the sum of completed objective
points. Resource values are mirrored into the session variables at
the end of every turn.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Set

from .._spec.models import SimAction, SimEvent, SimObjective
from ..types import SimulationResult
from .base import BaseSectionHandler, HandlerContext

DEFAULT_MIN = 0.0
DEFAULT_MAX = 100.0


class SimulationHandler(BaseSectionHandler):
    section_type = "simulation"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        initial = self.content.initial_state
        self.bounds = {r.id: (r.min_value, r.max_value) for r in self.content.resources}
        self.actions = {a.id: a for a in self.content.actions}
        self.resources: Dict[str, float] = dict(initial.resources)
        self.turn = initial.turn
        self.unlocked_actions: Set[str] = set(initial.unlocked_actions)
        self.completed_objectives: List[str] = list(initial.completed_objectives)
        self.cooldowns: Dict[str, int] = {}
        self.performed: Set[str] = set()
        self.broken_maintains: Set[str] = set()
        self.current_event: Optional[SimEvent] = None
        self.result: Optional[str] = None

    @property
    def is_over(self) -> bool:
        return self.result is not None

    # ── resources ───────────────────────────────────────────

    def value(self, resource_id: str) -> float:
        return self.resources.get(resource_id, 0)

    def _clamp(self, resource_id: str, value: float) -> float:
        low, high = self.bounds.get(resource_id, (DEFAULT_MIN, DEFAULT_MAX))
        return max(low, min(high, value))

    def _apply_effects(self, effects: Dict[str, float]) -> None:
        for resource_id, delta in effects.items():
            self.resources[resource_id] = self._clamp(resource_id, self.value(resource_id) + delta)

    # ── actions ─────────────────────────────────────────────

    def can_perform(self, action: SimAction) -> bool:
        if self.cooldowns.get(action.id, 0) > 0:
            return False
        if action.unlock_condition and action.id not in self.unlocked_actions:
            return False
        return all(self.value(rid) >= cost for rid, cost in action.cost.items())

    def perform(self, action_id: str) -> bool:
        """Pay an action's cost and apply its effects. False when rejected."""
        if not self._guard_active("perform") or self._blocked("perform"):
            return False
        action = self.actions.get(action_id)
        if action is None:
            self.logger.warning(f"Unknown action '{action_id}'")
            return False
        if not self.can_perform(action):
            self.logger.info(f"Action '{action_id}' rejected")
            return False

        for resource_id, cost in action.cost.items():
            self.resources[resource_id] = self.value(resource_id) - cost
        self._apply_effects(action.effects)
        if action.cooldown:
            self.cooldowns[action.id] = action.cooldown
        self.performed.add(action.id)
        self._after_change()
        return True

    def unlock(self, action_id: str) -> None:
        self.unlocked_actions.add(action_id)

    # ── turns and events ────────────────────────────────────

    def end_turn(self) -> Optional[SimEvent]:
        """Finish the turn. Returns the event awaiting resolution, if any."""
        if not self._guard_active("end turn") or self._blocked("end turn"):
            return None

        self.cooldowns = {aid: cd - 1 for aid, cd in self.cooldowns.items() if cd > 1}

        rng = self.ctx.rng
        fired = [e for e in self.content.events if rng.random() < e.probability]
        if fired:
            self.current_event = rng.choice(fired)
            self.logger.info(f"Event '{self.current_event.id}' on turn {self.turn}")
            return self.current_event

        self.turn += 1
        self._after_turn()
        return None

    def resolve_event(self, choice_index: Optional[int] = None) -> None:
        """Apply the chosen (or the event's own) effects and advance the turn."""
        if self.current_event is None or self.is_over:
            self.logger.warning("No event to resolve")
            return
        event = self.current_event
        effects = event.effects
        if choice_index is not None and 0 <= choice_index < len(event.choices):
            effects = event.choices[choice_index].effects
        self._apply_effects(effects)
        self.current_event = None
        self.turn += 1
        self._after_turn()

    def _blocked(self, action: str) -> bool:
        if self.is_over:
            self.logger.warning(f"Ignoring {action}: simulation is over")
            return True
        if self.current_event is not None:
            self.logger.warning(f"Ignoring {action}: resolve event '{self.current_event.id}' first")
            return True
        return False

    def _after_turn(self) -> None:
        self.callbacks.on_update_variables(dict(self.resources))
        self._after_change()

    # ── objectives / end conditions ─────────────────────────

    def _objective_met(self, objective: SimObjective) -> bool:
        if objective.type == "reach-value":
            return self.value(objective.target) >= objective.value
        if objective.type == "survive-turns":
            return self.turn >= objective.value
        if objective.type == "complete-action":
            return objective.target in self.performed
        if objective.type == "maintain-value":
            return (
                objective.id not in self.broken_maintains
                and self.turn >= self.content.max_turns
            )
        return False

    def _evaluate_objectives(self) -> None:
        for objective in self.content.objectives:
            if objective.type == "maintain-value" and self.value(objective.target) < objective.value:
                self.broken_maintains.add(objective.id)
            if objective.id in self.completed_objectives:
                continue
            if self._objective_met(objective):
                self.completed_objectives.append(objective.id)
                self.logger.info(f"Objective '{objective.id}' completed")

    def _check_end(self) -> Optional[str]:
        required = [o.id for o in self.content.objectives if o.required]
        done = [oid for oid in required if oid in self.completed_objectives]
        if required and len(done) == len(required):
            return "win"
        if self.turn >= self.content.max_turns:
            return "win" if done else "lose"
        for resource_id, (low, _high) in self.bounds.items():
            if self.value(resource_id) <= low:
                return "lose"
        return None

    def _after_change(self) -> None:
        self._evaluate_objectives()
        result = self._check_end()
        if result is not None:
            self._end(result)

    def _end(self, result: str) -> None:
        self.result = result
        points = sum(
            o.points for o in self.content.objectives if o.id in self.completed_objectives
        )
        outcome: SimulationResult = {
            "result": result,
            "turn": self.turn,
            "completedObjectives": list(self.completed_objectives),
        }
        self._answer(
            self.section.id,
            outcome,
            result == "win",
            points,
        )
        self.logger.info(f"Simulation '{self.section.id}' ended: {result} on turn {self.turn}")

    def continue_(self) -> None:
        if not self.is_over:
            self.logger.warning("Simulation is still running")
            return
        self._complete()

    def view(self) -> Dict[str, Any]:
        return {
            "type": self.section_type,
            "turn": self.turn,
            "maxTurns": self.content.max_turns,
            "resources": dict(self.resources),
            "actions": [
                {"id": a.id, "name": a.name, "available": self.can_perform(a),
                 "cooldown": self.cooldowns.get(a.id, 0)}
                for a in self.content.actions
            ],
            "event": self.current_event.model_dump(by_alias=True) if self.current_event else None,
            "completedObjectives": list(self.completed_objectives),
            "result": self.result,
        }
