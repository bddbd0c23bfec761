# Area: Test Support
"""Shared fixtures: a recording callbacks double and handler context factory."""

import logging
import random
from typing import Any, Dict, List

import pytest

from edugame import load_game_spec
from edugame._engine.timers import TimerRegistry
from edugame._handlers.base import HandlerContext
from edugame.callbacks import SectionCallbacks


class RecordingCallbacks(SectionCallbacks):
    """Collects every callback a handler makes."""

    def __init__(self, hints: int = 3):
        self.answers: List[Dict[str, Any]] = []
        self.completed = 0
        self.hints = hints
        self.variables: Dict[str, Any] = {}
        self.inventory: List[str] = []
        self.navigations: List[str] = []

    def on_answer(self, section_id, item_id, answer, is_correct, points, time_spent=0):
        self.answers.append({
            "section_id": section_id,
            "item_id": item_id,
            "answer": answer,
            "is_correct": is_correct,
            "points": points,
            "time_spent": time_spent,
        })

    def on_complete(self):
        self.completed += 1

    def on_use_hint(self):
        if self.hints <= 0:
            return False
        self.hints -= 1
        return True

    def on_navigate(self, section_id):
        self.navigations.append(section_id)

    def on_update_variables(self, patch):
        self.variables.update(patch)

    def on_add_item(self, item):
        if item not in self.inventory:
            self.inventory.append(item)

    def on_remove_item(self, item):
        if item in self.inventory:
            self.inventory.remove(item)

    def get_variables(self):
        return dict(self.variables)

    def get_score(self):
        return sum(a["points"] for a in self.answers)

    def get_inventory(self):
        return list(self.inventory)


def one_section_spec(section: Dict[str, Any], **overrides: Any):
    """A full GameSpec document holding a single section."""
    document: Dict[str, Any] = {
        "version": "1.0",
        "metadata": {"title": "Test Game"},
        "content": {"sections": [section]},
    }
    document.update(overrides)
    return load_game_spec(document)


@pytest.fixture
def recorder():
    return RecordingCallbacks()


@pytest.fixture
def make_ctx(recorder):
    """Build a HandlerContext for the only section of a one-section spec."""

    def factory(section: Dict[str, Any], seed: int = 7, clock=None, **overrides: Any):
        spec = one_section_spec(section, **overrides)
        return HandlerContext(
            section=spec.content.sections[0],
            spec=spec,
            callbacks=recorder,
            timers=TimerRegistry(),
            rng=random.Random(seed),
            clock=clock or (lambda: 0.0),
        )

    return factory


@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo setup_logging() so handlers never outlive a captured stream."""
    pkg_logger = logging.getLogger("edugame")
    handlers, level, propagate = list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate
    yield
    for handler in pkg_logger.handlers:
        if handler not in handlers:
            handler.close()
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate
