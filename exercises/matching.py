"""Session controller for vocabulary matching.

Words are shown in their original order and definitions in a shuffled
order. The student picks one word and one definition (in either order);
a correct pair is solved for good, an incorrect pair is flagged for a short
delay and then becomes selectable again. Only correct pairs are recorded,
so a completed session always holds one correct answer per item.
"""

import random
import time
from typing import Callable

from loguru import logger
from pydantic import BaseModel, ConfigDict

from models import SessionStatus, UserAnswer, VocabularyMatchExercise

from .base import SessionController, shuffled
from .config import MatchConfig


class MatchOutcome(BaseModel):
    """Result of evaluating one word/definition pair."""

    model_config = ConfigDict(frozen=True)

    word_index: int
    definition_index: int  # Position in the shuffled definitions column
    is_correct: bool
    answer: UserAnswer | None = None


class VocabularyMatchSession(SessionController[VocabularyMatchExercise]):
    """Controller for matching words to shuffled definitions."""

    def __init__(
        self,
        exercise: VocabularyMatchExercise,
        config: MatchConfig | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ):
        super().__init__(exercise)
        self.config = config or MatchConfig()
        self._clock = clock or time.monotonic

        # Column position -> index into exercise.items
        self._order: list[int] = shuffled(range(len(exercise.items)), rng)

        self._selected_word: int | None = None
        self._selected_definition: int | None = None
        self._solved_words: set[int] = set()
        self._solved_definitions: set[int] = set()
        self._incorrect_words: dict[int, float] = {}  # index -> clears at
        self._incorrect_definitions: dict[int, float] = {}
        self.failed_attempts = 0

    # ------------------------------------------------------------------
    # Board state
    # ------------------------------------------------------------------

    @property
    def total(self) -> int:
        return len(self.exercise.items)

    @property
    def words(self) -> tuple[str, ...]:
        return tuple(item.word for item in self.exercise.items)

    @property
    def definitions(self) -> tuple[str, ...]:
        return tuple(self.exercise.items[i].definition for i in self._order)

    @property
    def definition_order(self) -> tuple[int, ...]:
        """Item index shown at each position of the definitions column."""
        return tuple(self._order)

    @property
    def solved_count(self) -> int:
        return len(self._solved_words)

    @property
    def selected_word(self) -> int | None:
        return self._selected_word

    @property
    def selected_definition(self) -> int | None:
        return self._selected_definition

    def is_word_solved(self, index: int) -> bool:
        return index in self._solved_words

    def is_definition_solved(self, index: int) -> bool:
        return index in self._solved_definitions

    def is_word_incorrect(self, index: int) -> bool:
        self.refresh()
        return index in self._incorrect_words

    def is_definition_incorrect(self, index: int) -> bool:
        self.refresh()
        return index in self._incorrect_definitions

    def is_word_selectable(self, index: int) -> bool:
        return not self.is_word_solved(index) and not self.is_word_incorrect(index)

    def is_definition_selectable(self, index: int) -> bool:
        return not self.is_definition_solved(index) and not self.is_definition_incorrect(
            index
        )

    def refresh(self) -> None:
        """Clear incorrect flags whose delay has elapsed."""
        now = self._clock()
        for flags in (self._incorrect_words, self._incorrect_definitions):
            for index in [i for i, clears_at in flags.items() if clears_at <= now]:
                del flags[index]

    def incorrect_remaining(self) -> float:
        """Seconds until every current incorrect flag has cleared."""
        pending = list(self._incorrect_words.values()) + list(
            self._incorrect_definitions.values()
        )
        if not pending:
            return 0.0
        return max(0.0, max(pending) - self._clock())

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_word(self, index: int) -> MatchOutcome | None:
        """Select a word. Evaluates the pair if a definition is selected.

        Raises:
            InvalidTransitionError: If the session is completed.
            ValueError: If the word is out of range, solved or flagged incorrect.
        """
        self._require_status(SessionStatus.PRESENTING)
        self._check_index(index, "Word")
        if not self.is_word_selectable(index):
            raise ValueError(f"Word {index} is not selectable")

        self._selected_word = index
        return self._evaluate_if_paired()

    def select_definition(self, index: int) -> MatchOutcome | None:
        """Select a definition by column position. Evaluates the pair if a
        word is selected.

        Raises:
            InvalidTransitionError: If the session is completed.
            ValueError: If the definition is out of range, solved or flagged
                incorrect.
        """
        self._require_status(SessionStatus.PRESENTING)
        self._check_index(index, "Definition")
        if not self.is_definition_selectable(index):
            raise ValueError(f"Definition {index} is not selectable")

        self._selected_definition = index
        return self._evaluate_if_paired()

    def clear_selection(self) -> None:
        """Drop any pending word or definition selection."""
        self._selected_word = None
        self._selected_definition = None

    def _check_index(self, index: int, label: str) -> None:
        if not 0 <= index < self.total:
            raise ValueError(f"{label} {index} is out of range")

    def _evaluate_if_paired(self) -> MatchOutcome | None:
        if self._selected_word is None or self._selected_definition is None:
            return None

        word_index = self._selected_word
        definition_index = self._selected_definition
        self._selected_word = None
        self._selected_definition = None

        expected = self.exercise.items[word_index].definition
        chosen = self.exercise.items[self._order[definition_index]].definition

        if chosen != expected:
            clears_at = self._clock() + self.config.incorrect_delay_seconds
            self._incorrect_words[word_index] = clears_at
            self._incorrect_definitions[definition_index] = clears_at
            self.failed_attempts += 1
            logger.debug(f"Incorrect match: {self.words[word_index]!r} -> {chosen!r}")
            return MatchOutcome(
                word_index=word_index,
                definition_index=definition_index,
                is_correct=False,
            )

        self._solved_words.add(word_index)
        self._solved_definitions.add(definition_index)
        answer = self._record(word_index, chosen, True)
        logger.debug(f"Matched {self.words[word_index]!r} -> {chosen!r}")

        if self.solved_count == self.total:
            self._complete()

        return MatchOutcome(
            word_index=word_index,
            definition_index=definition_index,
            is_correct=True,
            answer=answer,
        )
