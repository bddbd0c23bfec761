# Area: Handlers
"""
edugame._handlers.quiz — Quiz section handler
=============================================

Presents questions one at a time. Each question is answered once,
its result is shown, and ``next()`` moves on; ``next()`` after the
last result completes the section.

A question may carry a time limit (falling back to
``config.questionTimeLimit``). When it runs out, a null answer is
submitted for the player.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .._spec.models import QuizQuestion
from .base import BaseSectionHandler, HandlerContext


def _option_index(question: QuizQuestion, answer: Any) -> Any:
    """Resolve an option id to its index; other answers pass through."""
    if isinstance(answer, str):
        for i, option in enumerate(question.options):
            if option.id == answer:
                return i
    return answer


def is_answer_correct(question: QuizQuestion, answer: Any) -> bool:
    """
    Grade ``answer`` against ``question.correct_answer``.

    text-input: case-insensitive, trimmed string equality.
    multiple-choice: same length and every correct index present.
    otherwise: exact equality (option ids are resolved to indices).
    """
    if answer is None:
        return False
    correct = question.correct_answer

    if question.question_type == "text-input":
        return str(answer).strip().lower() == str(correct).strip().lower()

    if question.question_type == "multiple-choice":
        if not isinstance(answer, (list, tuple)):
            return False
        expected = correct if isinstance(correct, list) else [correct]
        chosen = [_option_index(question, a) for a in answer]
        return len(chosen) == len(expected) and all(c in chosen for c in expected)

    return _option_index(question, answer) == correct


class QuizHandler(BaseSectionHandler):
    section_type = "quiz"

    def __init__(self, ctx: HandlerContext):
        super().__init__(ctx)
        self.questions: List[QuizQuestion] = list(self.content.questions)
        if self.config.shuffle_content:
            ctx.rng.shuffle(self.questions)
        self.index = 0
        self.show_result = False
        self.last_result: Optional[Dict[str, Any]] = None
        self.hint_visible = False

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if self.index < len(self.questions):
            return self.questions[self.index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.index >= len(self.questions) - 1

    def enter(self) -> None:
        if not self.questions:
            self.logger.warning(f"Quiz '{self.section.id}' has no questions")
            self._complete()
            return
        self._start_question()

    def _start_question(self) -> None:
        self.show_result = False
        self.last_result = None
        self.hint_visible = False
        self._start_item_clock()
        question = self.current_question
        limit = question.time_limit or self.config.question_time_limit
        if limit and limit > 0:
            self._arm("question", limit, self._on_timeout)

    def _on_timeout(self) -> None:
        self.logger.info(f"Question '{self.current_question.id}' timed out")
        self.submit(None)

    def submit(self, answer: Any) -> Optional[Dict[str, Any]]:
        """Grade the current question and record the answer."""
        if not self._guard_active("submit") or self.current_question is None:
            return None
        if self.show_result:
            self.logger.warning("Question already answered; call next()")
            return None

        self._cancel("question")
        question = self.current_question
        correct = is_answer_correct(question, answer)
        points = question.points if correct else 0
        self._answer(question.id, answer, correct, points)

        self.show_result = True
        self.last_result = {
            "questionId": question.id,
            "isCorrect": correct,
            "points": points,
            "correctAnswer": question.correct_answer if self.config.show_correct_answer else None,
            "explanation": question.explanation,
        }
        return self.last_result

    def next(self) -> None:
        """Advance past a shown result; completes after the last question."""
        if not self._guard_active("next"):
            return
        if not self.show_result:
            self.logger.warning("Cannot advance before the question is answered")
            return
        if self.is_last_question:
            self._complete()
            return
        self.index += 1
        self._start_question()

    def use_hint(self) -> Optional[str]:
        """Reveal the current question's hint if a hint can be spent."""
        question = self.current_question
        if question is None or not question.hint or self.hint_visible:
            return None
        if not self.callbacks.on_use_hint():
            return None
        self.hint_visible = True
        return question.hint

    def view(self) -> Dict[str, Any]:
        question = self.current_question
        return {
            "type": self.section_type,
            "index": self.index,
            "total": len(self.questions),
            "question": question.model_dump(by_alias=True, exclude={"correct_answer"})
            if question else None,
            "showResult": self.show_result,
            "result": self.last_result,
            "hint": question.hint if question and self.hint_visible else None,
            "timeRemaining": self._remaining("question"),
        }
