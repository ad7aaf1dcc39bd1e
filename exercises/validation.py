"""Validation and normalization of parsed provider documents.

The validator turns an untyped document (the parsed JSON reply) into an
immutable Exercise for a given kind, or raises an ExerciseValidationError
naming the offending field path.

Blank marker policy: any run of three or more underscores counts as one
blank marker and is rewritten to the canonical "___". A fill-style prompt
with zero markers or more than one marker is rejected.
"""

import re
from typing import Any, assert_never

from loguru import logger

from models import (
    AnswerStyle,
    Exercise,
    ExerciseKind,
    Question,
    QuestionExercise,
    ReadingComprehensionExercise,
    VocabularyItem,
    VocabularyMatchExercise,
)

from .errors import (
    AnswerNotInOptionsError,
    BlankMarkerCountError,
    EmptyContentError,
    FieldTypeError,
    MissingFieldError,
)
from .schemas import BLANK_MARKER, ExerciseSchema, get_exercise_schema

BLANK_PATTERN = re.compile(r"_{3,}")

# Fields that are optional for most kinds but required for these
_REQUIRED_EXTRAS: dict[ExerciseKind, tuple[str, ...]] = {
    ExerciseKind.VERB_TENSES: ("verb", "tense"),
    ExerciseKind.VERB_CONJUGATION: ("verb",),
}


def _join(path: str, field: str) -> str:
    return f"{path}.{field}" if path else field


def _expect_object(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise FieldTypeError(
            f"expected an object, got {type(value).__name__}", path or "$"
        )
    return value


def _require(document: dict[str, Any], field: str, path: str) -> Any:
    value = document.get(field)
    if value is None:
        raise MissingFieldError("required field is missing", _join(path, field))
    return value


def _require_str(
    document: dict[str, Any], field: str, path: str = "", strip: bool = True
) -> str:
    value = _require(document, field, path)
    if not isinstance(value, str):
        raise FieldTypeError(
            f"expected a string, got {type(value).__name__}", _join(path, field)
        )
    if not value.strip():
        raise MissingFieldError("required field is blank", _join(path, field))
    return value.strip() if strip else value


def _optional_str(document: dict[str, Any], field: str, path: str = "") -> str | None:
    value = document.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise FieldTypeError(
            f"expected a string, got {type(value).__name__}", _join(path, field)
        )
    return value.strip() or None


def _require_list(document: dict[str, Any], field: str, path: str = "") -> list[Any]:
    value = _require(document, field, path)
    if not isinstance(value, list):
        raise FieldTypeError(
            f"expected an array, got {type(value).__name__}", _join(path, field)
        )
    if not value:
        raise EmptyContentError("sequence is empty", _join(path, field))
    return value


def normalize_blank(prompt: str, path: str = "") -> str:
    """Rewrite the single blank marker of a prompt to the canonical form.

    Raises:
        BlankMarkerCountError: If the prompt has zero or several markers.
    """
    count = len(BLANK_PATTERN.findall(prompt))
    if count != 1:
        raise BlankMarkerCountError(
            f"expected exactly one blank marker, found {count}", path, count=count
        )
    return BLANK_PATTERN.sub(BLANK_MARKER, prompt)


class ExerciseValidator:
    """Validates parsed documents and builds Exercise objects."""

    def validate(self, kind: ExerciseKind, raw: Any) -> Exercise:
        """Validate a raw document for the given kind.

        Args:
            kind: The exercise kind that was requested.
            raw: The parsed provider document.

        Returns:
            An immutable exercise tagged with kind.

        Raises:
            ExerciseValidationError: If the document violates the kind's rules.
        """
        kind = ExerciseKind(kind)
        schema = get_exercise_schema(kind)
        document = _expect_object(raw, "")

        title = _require_str(document, "title")
        instructions = _optional_str(document, "instructions") or schema.default_instructions

        exercise: Exercise
        match kind:
            case ExerciseKind.VOCABULARY_MATCH:
                entries = _require_list(document, "items")
                exercise = VocabularyMatchExercise(
                    title=title,
                    instructions=instructions,
                    items=tuple(
                        self._build_item(entry, f"items[{i}]")
                        for i, entry in enumerate(entries)
                    ),
                )
            case ExerciseKind.READING_COMPREHENSION:
                passage = _require_str(document, "text")
                exercise = ReadingComprehensionExercise(
                    title=title,
                    instructions=instructions,
                    passage=passage,
                    questions=self._build_questions(schema, document),
                )
            case (
                ExerciseKind.SER_VS_ESTAR
                | ExerciseKind.FILL_IN_THE_BLANK
                | ExerciseKind.VERB_TENSES
                | ExerciseKind.VERB_CONJUGATION
            ):
                exercise = QuestionExercise(
                    kind=kind,
                    title=title,
                    instructions=instructions,
                    questions=self._build_questions(schema, document),
                )
            case _:
                assert_never(kind)

        logger.debug(f"Validated {kind.value} exercise '{title}'")
        return exercise

    def _build_item(self, entry: Any, path: str) -> VocabularyItem:
        entry = _expect_object(entry, path)
        return VocabularyItem(
            word=_require_str(entry, "word", path),
            definition=_require_str(entry, "definition", path),
        )

    def _build_questions(
        self, schema: ExerciseSchema, document: dict[str, Any]
    ) -> tuple[Question, ...]:
        entries = _require_list(document, "questions")
        return tuple(
            self._build_question(schema, entry, f"questions[{i}]")
            for i, entry in enumerate(entries)
        )

    def _build_question(self, schema: ExerciseSchema, entry: Any, path: str) -> Question:
        entry = _expect_object(entry, path)
        is_choice = schema.answer_style == AnswerStyle.SINGLE_CHOICE

        prompt_field = "question" if schema.kind == ExerciseKind.READING_COMPREHENSION else "sentence"
        prompt = _require_str(entry, prompt_field, path)
        if schema.uses_blank_marker:
            prompt = normalize_blank(prompt, _join(path, prompt_field))

        # Choice answers are compared byte for byte, so they are never trimmed
        correct_answer = _require_str(entry, "correct_answer", path, strip=not is_choice)

        options = None
        if is_choice:
            options = tuple(self._build_options(entry, path))
            if correct_answer not in options:
                raise AnswerNotInOptionsError(
                    f"correct answer {correct_answer!r} is not one of {list(options)!r}",
                    _join(path, "correct_answer"),
                )

        for field in _REQUIRED_EXTRAS.get(schema.kind, ()):
            _require_str(entry, field, path)

        return Question(
            prompt=prompt,
            correct_answer=correct_answer,
            options=options,
            hint=_optional_str(entry, "hint", path),
            explanation=_optional_str(entry, "explanation", path),
            verb=_optional_str(entry, "verb", path),
            tense=_optional_str(entry, "tense", path),
        )

    def _build_options(self, entry: dict[str, Any], path: str) -> list[str]:
        options = _require_list(entry, "options", path)
        for i, option in enumerate(options):
            if not isinstance(option, str):
                raise FieldTypeError(
                    f"expected a string, got {type(option).__name__}",
                    f"{_join(path, 'options')}[{i}]",
                )
        return options
