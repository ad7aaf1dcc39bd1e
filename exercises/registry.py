"""Session factory: picks the controller for an exercise's answer style."""

import random
from typing import Callable, assert_never

from models import AnswerStyle, Exercise, VocabularyMatchExercise

from .base import SessionController
from .config import MatchConfig
from .matching import VocabularyMatchSession
from .schemas import get_exercise_schema
from .sequential import FreeTextSession, SingleChoiceSession


def create_session(
    exercise: Exercise,
    *,
    match_config: MatchConfig | None = None,
    rng: random.Random | None = None,
    clock: Callable[[], float] | None = None,
) -> SessionController:
    """Create a fresh session controller for an exercise.

    Args:
        exercise: A validated exercise.
        match_config: Timing for vocabulary matching.
        rng: Random source for shuffling definitions.
        clock: Monotonic clock used by vocabulary matching.

    Returns:
        A controller in its initial state with an empty answer log.
    """
    style = get_exercise_schema(exercise.kind).answer_style

    match style:
        case AnswerStyle.FREE_TEXT:
            return FreeTextSession(exercise)
        case AnswerStyle.SINGLE_CHOICE:
            return SingleChoiceSession(exercise)
        case AnswerStyle.MATCHING:
            if not isinstance(exercise, VocabularyMatchExercise):
                raise TypeError(f"Matching needs a vocabulary exercise, got {exercise.kind}")
            return VocabularyMatchSession(
                exercise, config=match_config, rng=rng, clock=clock
            )
        case _:
            assert_never(style)
