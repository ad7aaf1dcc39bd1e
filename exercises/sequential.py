"""Session controllers for question-by-question exercises.

Used by ser/estar, fill-in-the-blank, reading comprehension, verb tenses and
verb conjugation. Each question goes PRESENTING -> FEEDBACK, then either the
next question is presented or the session completes.
"""

from abc import abstractmethod

from loguru import logger

from models import (
    Question,
    QuestionExercise,
    ReadingComprehensionExercise,
    SessionStatus,
    UserAnswer,
)

from .base import SessionController, normalize_free_text

SequentialExercise = QuestionExercise | ReadingComprehensionExercise


class SequentialSession(SessionController[SequentialExercise]):
    """Base controller for sequential question exercises."""

    def __init__(self, exercise: SequentialExercise):
        super().__init__(exercise)
        self._index = 0

    @property
    def total(self) -> int:
        return len(self.exercise.questions)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Question:
        return self.exercise.questions[self._index]

    @property
    def is_last_question(self) -> bool:
        return self._index == self.total - 1

    @property
    def last_answer(self) -> UserAnswer | None:
        return self._answers[-1] if self._answers else None

    @abstractmethod
    def check_answer(self, question: Question, value: str) -> bool:
        """Return whether value answers question correctly."""
        ...

    def _accept(self, value: str) -> str:
        """Validate raw input before it is checked. Returns the value to record."""
        return value

    def submit_answer(self, value: str) -> UserAnswer:
        """Answer the current question.

        Raises:
            InvalidTransitionError: If the session is not presenting a question.
            ValueError: If the input cannot be accepted (nothing is recorded).
        """
        self._require_status(SessionStatus.PRESENTING)
        value = self._accept(value)

        is_correct = self.check_answer(self.current_question, value)
        user_answer = self._record(self._index, value, is_correct)
        self._status = SessionStatus.FEEDBACK

        logger.debug(
            f"Question {self._index + 1}/{self.total}: "
            f"{'correct' if is_correct else 'incorrect'}"
        )
        return user_answer

    def advance(self) -> SessionStatus:
        """Leave feedback and present the next question, or complete.

        Calling advance again after completion is a no-op.

        Raises:
            InvalidTransitionError: If called while a question is presented.
        """
        if self.is_completed:
            return self._status
        self._require_status(SessionStatus.FEEDBACK)

        if self.is_last_question:
            self._complete()
        else:
            self._index += 1
            self._status = SessionStatus.PRESENTING
        return self._status


class FreeTextSession(SequentialSession):
    """Typed answers, compared trimmed and case-folded."""

    def _accept(self, value: str) -> str:
        if not value.strip():
            raise ValueError("Answer cannot be empty")
        return value

    def check_answer(self, question: Question, value: str) -> bool:
        return normalize_free_text(value) == normalize_free_text(question.correct_answer)


class SingleChoiceSession(SequentialSession):
    """One option picked from a closed set, compared exactly."""

    @property
    def options(self) -> tuple[str, ...]:
        return self.current_question.options or ()

    def _accept(self, value: str) -> str:
        if value not in self.options:
            raise ValueError(f"{value!r} is not one of the options")
        return value

    def submit_choice(self, option_index: int) -> UserAnswer:
        """Answer with the option at option_index (0-based)."""
        if not 0 <= option_index < len(self.options):
            raise ValueError(f"Option {option_index} is out of range")
        return self.submit_answer(self.options[option_index])

    def check_answer(self, question: Question, value: str) -> bool:
        return value == question.correct_answer
