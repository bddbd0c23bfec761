# Area: Handlers
"""
edugame._handlers — Section runtime handlers
============================================

One handler per section type. ``create_handler`` is the single
dispatch point from a section's ``type`` to its handler class.
"""

from typing import Dict, Type

from ..errors import UnknownSectionTypeError
from .base import BaseSectionHandler, HandlerContext
from .challenge import ChallengeHandler
from .conditions import compare_values, evaluate_condition
from .exploration import ExplorationHandler
from .flashcards import FlashcardHandler
from .info import InfoHandler
from .matching import MatchingHandler
from .narrative import NarrativeHandler
from .quiz import QuizHandler, is_answer_correct
from .simulation import SimulationHandler
from .sorting import SortingHandler, partial_credit

HANDLERS: Dict[str, Type[BaseSectionHandler]] = {
    "quiz": QuizHandler,
    "flashcards": FlashcardHandler,
    "matching": MatchingHandler,
    "sorting": SortingHandler,
    "narrative": NarrativeHandler,
    "simulation": SimulationHandler,
    "exploration": ExplorationHandler,
    "challenge": ChallengeHandler,
    "info": InfoHandler,
}


def create_handler(ctx: HandlerContext) -> BaseSectionHandler:
    """Instantiate the handler for ``ctx.section``."""
    handler_cls = HANDLERS.get(ctx.section.type)
    if handler_cls is None:
        raise UnknownSectionTypeError(ctx.section.id, ctx.section.type)
    return handler_cls(ctx)


__all__ = [
    "BaseSectionHandler",
    "ChallengeHandler",
    "ExplorationHandler",
    "FlashcardHandler",
    "HANDLERS",
    "HandlerContext",
    "InfoHandler",
    "MatchingHandler",
    "NarrativeHandler",
    "QuizHandler",
    "SimulationHandler",
    "SortingHandler",
    "compare_values",
    "create_handler",
    "evaluate_condition",
    "is_answer_correct",
    "partial_credit",
]
