from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class ExerciseKind(str, Enum):
    SER_VS_ESTAR = "ser_vs_estar"
    FILL_IN_THE_BLANK = "fill_in_the_blank"
    VOCABULARY_MATCH = "vocabulary_match"
    READING_COMPREHENSION = "reading_comprehension"
    VERB_TENSES = "verb_tenses"
    VERB_CONJUGATION = "verb_conjugation"


class AnswerStyle(str, Enum):
    """How the student answers an exercise kind."""

    FREE_TEXT = "free_text"
    SINGLE_CHOICE = "single_choice"
    MATCHING = "matching"


class SessionStatus(str, Enum):
    PRESENTING = "presenting"
    FEEDBACK = "feedback"
    COMPLETED = "completed"


# ============================================================================
# Exercise Models
# ============================================================================


class Question(BaseModel):
    """A single question of a sequential exercise.

    For fill-style kinds the prompt contains exactly one blank marker.
    For choice-style kinds the options hold the closed answer set.
    """

    model_config = ConfigDict(frozen=True)

    prompt: str
    correct_answer: str
    options: tuple[str, ...] | None = None
    hint: str | None = None  # In the learner's language
    explanation: str | None = None
    verb: str | None = None
    tense: str | None = None


class VocabularyItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    word: str
    definition: str


class QuestionExercise(BaseModel):
    """Sentence-based exercise: ser/estar, fill-in-the-blank and verb drills."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[
        ExerciseKind.SER_VS_ESTAR,
        ExerciseKind.FILL_IN_THE_BLANK,
        ExerciseKind.VERB_TENSES,
        ExerciseKind.VERB_CONJUGATION,
    ]
    title: str
    instructions: str | None = None
    questions: tuple[Question, ...] = Field(min_length=1)


class ReadingComprehensionExercise(BaseModel):
    """A reading passage followed by multiple choice questions."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ExerciseKind.READING_COMPREHENSION] = (
        ExerciseKind.READING_COMPREHENSION
    )
    title: str
    instructions: str | None = None
    passage: str
    questions: tuple[Question, ...] = Field(min_length=1)


class VocabularyMatchExercise(BaseModel):
    """Word/definition pairs; has no questions, blanks or options."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[ExerciseKind.VOCABULARY_MATCH] = ExerciseKind.VOCABULARY_MATCH
    title: str
    instructions: str | None = None
    items: tuple[VocabularyItem, ...] = Field(min_length=1)


Exercise = Annotated[
    QuestionExercise | ReadingComprehensionExercise | VocabularyMatchExercise,
    Field(discriminator="kind"),
]


def exercise_length(exercise: Exercise) -> int:
    """Number of questions (or match items) in an exercise."""
    if isinstance(exercise, VocabularyMatchExercise):
        return len(exercise.items)
    return len(exercise.questions)


# ============================================================================
# Answer and Score Models
# ============================================================================


class UserAnswer(BaseModel):
    """One recorded response to one question. Immutable once appended."""

    model_config = ConfigDict(frozen=True)

    question_index: int = Field(ge=0)
    answer: str
    is_correct: bool


class Score(BaseModel):
    """Score derived from an answer log."""

    model_config = ConfigDict(frozen=True)

    correct_count: int = Field(ge=0)
    total: int = Field(ge=0)
    percentage: int = Field(ge=0, le=100)

    @classmethod
    def from_answers(cls, answers: tuple[UserAnswer, ...] | list[UserAnswer]) -> "Score":
        correct = sum(1 for answer in answers if answer.is_correct)
        total = len(answers)
        return cls(
            correct_count=correct,
            total=total,
            percentage=round_percentage(correct, total),
        )


def round_percentage(correct: int, total: int) -> int:
    """Percentage of correct answers rounded half-up (0 when total is 0)."""
    if total <= 0:
        return 0
    return (200 * correct + total) // (2 * total)
