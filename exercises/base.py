"""Abstract base class and shared utilities for session controllers."""

import random
import unicodedata
from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar

from loguru import logger

from models import Score, SessionStatus, UserAnswer

from .errors import InvalidTransitionError

E = TypeVar("E")
T = TypeVar("T")


class SessionController(ABC, Generic[E]):
    """Abstract base class for session controllers.

    A controller owns one exercise instance, records an append-only answer
    log and produces the final score exactly once. Subclasses implement
    the interaction style (free text, single choice, matching).
    """

    def __init__(self, exercise: E):
        self.exercise = exercise
        self._answers: list[UserAnswer] = []
        self._status = SessionStatus.PRESENTING
        self._score: Score | None = None

    @property
    @abstractmethod
    def total(self) -> int:
        """Number of questions or items in the exercise."""
        ...

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def answers(self) -> tuple[UserAnswer, ...]:
        """Snapshot of the answer log."""
        return tuple(self._answers)

    @property
    def is_completed(self) -> bool:
        return self._status == SessionStatus.COMPLETED

    @property
    def score(self) -> Score | None:
        """The final score, or None while the session is still running."""
        return self._score

    def _require_status(self, *allowed: SessionStatus) -> None:
        if self._status not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise InvalidTransitionError(
                f"Operation requires status {names}, session is {self._status.value}"
            )

    def _record(self, question_index: int, answer: str, is_correct: bool) -> UserAnswer:
        user_answer = UserAnswer(
            question_index=question_index,
            answer=answer,
            is_correct=is_correct,
        )
        self._answers.append(user_answer)
        return user_answer

    def _complete(self) -> None:
        """Move to COMPLETED and freeze the score. Re-entry is a no-op."""
        if self._status == SessionStatus.COMPLETED:
            return
        self._status = SessionStatus.COMPLETED
        self._score = Score.from_answers(self._answers)
        logger.info(
            f"Session complete: {self._score.correct_count}/{self._score.total} "
            f"({self._score.percentage}%)"
        )


def normalize_free_text(text: str) -> str:
    """Normalize typed text for comparison: NFC, trimmed and case-folded."""
    return unicodedata.normalize("NFC", text).strip().casefold()


def shuffled(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return an unbiased (Fisher-Yates) permutation of items.

    Args:
        items: Items to permute; the input is not modified.
        rng: Random source, injectable for deterministic tests.

    Returns:
        A new list with the same multiset of items.
    """
    result = list(items)
    (rng or random.Random()).shuffle(result)
    return result
