"""Exercise generation, validation and session control for the Spanish tutor.

Architecture:
- The schema registry holds the prompt and output descriptor for each kind
- A provider sends a prompt to the generation service and returns raw text
- The generation client extracts the payload and hands it to the validator
- The validator turns the untyped document into an immutable Exercise
- Session controllers drive answering and scoring for one exercise

Session controllers:
- FreeTextSession: Typed answers (fill-in-the-blank, verb conjugation)
- SingleChoiceSession: Pick one option (ser/estar, reading, verb tenses)
- VocabularyMatchSession: Match words to shuffled definitions

Configuration:
- GenerationConfig, MatchConfig, ReportConfig, TutorConfig
"""

from exercises.base import SessionController, normalize_free_text, shuffled
from exercises.config import GenerationConfig, MatchConfig, ReportConfig, TutorConfig
from exercises.errors import (
    AnswerNotInOptionsError,
    BlankMarkerCountError,
    EmptyContentError,
    EmptyResultError,
    ExerciseError,
    ExerciseValidationError,
    FieldTypeError,
    GenerationError,
    InvalidTransitionError,
    MalformedPayloadError,
    MissingFieldError,
    TransportFailureError,
)
from exercises.generation import ContentGenerationClient, extract_payload, strip_code_fence
from exercises.matching import MatchOutcome, VocabularyMatchSession
from exercises.providers import GenerationProvider, OpenAIProvider
from exercises.registry import create_session
from exercises.schemas import (
    BLANK_MARKER,
    EXERCISE_SCHEMAS,
    ExerciseSchema,
    SchemaNode,
    get_exercise_schema,
    list_exercise_schemas,
)
from exercises.sequential import FreeTextSession, SequentialSession, SingleChoiceSession
from exercises.validation import ExerciseValidator, normalize_blank

__all__ = [
    # Utilities
    "normalize_free_text",
    "shuffled",
    "normalize_blank",
    "extract_payload",
    "strip_code_fence",
    # Schema registry
    "BLANK_MARKER",
    "EXERCISE_SCHEMAS",
    "ExerciseSchema",
    "SchemaNode",
    "get_exercise_schema",
    "list_exercise_schemas",
    # Generation
    "GenerationProvider",
    "OpenAIProvider",
    "ContentGenerationClient",
    "ExerciseValidator",
    # Sessions
    "SessionController",
    "SequentialSession",
    "FreeTextSession",
    "SingleChoiceSession",
    "VocabularyMatchSession",
    "MatchOutcome",
    "create_session",
    # Configuration
    "GenerationConfig",
    "MatchConfig",
    "ReportConfig",
    "TutorConfig",
    # Errors
    "ExerciseError",
    "GenerationError",
    "EmptyResultError",
    "MalformedPayloadError",
    "TransportFailureError",
    "ExerciseValidationError",
    "MissingFieldError",
    "FieldTypeError",
    "EmptyContentError",
    "AnswerNotInOptionsError",
    "BlankMarkerCountError",
    "InvalidTransitionError",
]
