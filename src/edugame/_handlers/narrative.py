# Area: Handlers
"""
edugame._handlers.narrative — Branching narrative handler
=========================================================

Scene-graph traversal from ``startScene``. A scene offers either
choices (filtered by their conditions) or a single ``nextScene``
pointer. Scene actions fire on every entry into the scene; choice
effects fire on selection, before moving to the target scene.

Continuing from an ending scene records the outcome (a success ending
earns five times pointsPerCorrect) and completes the section.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .._spec.models import NarrativeChoice, NarrativeScene
from .base import BaseSectionHandler, HandlerContext
from .conditions import evaluate_condition, to_number


class NarrativeHandler(BaseSectionHandler):
    section_type = "narrative"

    ENDING_MULTIPLIER = 5

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.scenes = {scene.id: scene for scene in self.content.scenes}
        self.scene_id = self.content.start_scene
        self.typing = False
        self.history: List[str] = []

    @property
    def current_scene(self) -> Optional[NarrativeScene]:
        return self.scenes.get(self.scene_id)

    def enter(self) -> None:
        self._enter_scene(self.scene_id)

    def _enter_scene(self, scene_id: str) -> None:
        scene = self.scenes.get(scene_id)
        if scene is None:
            self.logger.warning(f"Scene '{scene_id}' not found; ending narrative")
            self._complete()
            return
        self.scene_id = scene_id
        self.history.append(scene_id)
        self.typing = bool(scene.text)
        self._start_item_clock()
        for action in scene.actions:
            self._apply_action(scene, action.type, action.payload)

    def _apply_action(self, scene: NarrativeScene, kind: str, payload: Dict[str, Any]) -> None:
        if kind == "set-variable":
            self.callbacks.on_update_variables({payload.get("variable"): payload.get("value")})
        elif kind == "add-score":
            points = int(to_number(payload.get("points")) or 0)
            self.callbacks.on_answer(self.section.id, scene.id, "scene-bonus", True, points, 0)
        elif kind == "add-item":
            self.callbacks.on_add_item(str(payload.get("item")))
        elif kind == "remove-item":
            self.callbacks.on_remove_item(str(payload.get("item")))
        elif kind == "navigate":
            self.callbacks.on_navigate(str(payload.get("sectionId")))
        else:
            self.logger.warning(f"Unknown scene action '{kind}' in scene '{scene.id}'")

    def skip_typing(self) -> None:
        self.typing = False

    def available_choices(self) -> List[NarrativeChoice]:
        scene = self.current_scene
        if scene is None:
            return []
        variables = self.callbacks.get_variables()
        score = self.callbacks.get_score()
        inventory = self.callbacks.get_inventory()
        return [
            choice for choice in scene.choices
            if evaluate_condition(choice.condition, variables, score, inventory)
        ]

    def choose(self, choice_id: str) -> bool:
        """Apply a visible choice's effects and move to its target scene."""
        if not self._guard_active("choose"):
            return False
        choice = next((c for c in self.available_choices() if c.id == choice_id), None)
        if choice is None:
            self.logger.warning(f"Choice '{choice_id}' is not available in scene '{self.scene_id}'")
            return False

        time_spent = self._elapsed()
        for effect in choice.effects:
            if effect.type == "set-variable":
                self.callbacks.on_update_variables({effect.target: effect.value})
            elif effect.type == "add-score":
                self.callbacks.on_answer(
                    self.section.id,
                    f"{self.scene_id}-{choice.id}",
                    choice.text,
                    True,
                    int(to_number(effect.value) or 0),
                    time_spent,
                )
            elif effect.type == "add-item":
                self.callbacks.on_add_item(str(effect.target or effect.value))
            elif effect.type == "remove-item":
                self.callbacks.on_remove_item(str(effect.target or effect.value))

        self._enter_scene(choice.target_scene)
        return True

    def continue_(self) -> None:
        """Follow ``nextScene``, or finish on an ending or dead-end scene."""
        if not self._guard_active("continue"):
            return
        scene = self.current_scene
        if scene is None:
            return
        if scene.is_ending:
            success = scene.ending_type == "success"
            points = self.points_per_correct * self.ENDING_MULTIPLIER if success else 0
            self._answer(scene.id, scene.ending_type, success, points)
            self._complete()
        elif scene.next_scene:
            self._enter_scene(scene.next_scene)
        elif scene.choices:
            self.logger.warning(f"Scene '{scene.id}' requires a choice")
        else:
            self.logger.warning(f"Scene '{scene.id}' is a dead end; ending narrative")
            self._complete()

    def view(self) -> Dict[str, Any]:
        scene = self.current_scene
        return {
            "type": self.section_type,
            "sceneId": self.scene_id,
            "text": scene.text if scene else "",
            "speaker": scene.speaker if scene else None,
            "background": scene.background if scene else None,
            "typing": self.typing,
            "choices": [{"id": c.id, "text": c.text} for c in self.available_choices()],
            "isEnding": bool(scene and scene.is_ending),
            "endingType": scene.ending_type if scene else None,
            "canContinue": bool(scene and (scene.is_ending or scene.next_scene)),
        }
