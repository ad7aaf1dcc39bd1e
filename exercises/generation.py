"""Content generation client.

Sends a kind's prompt and schema descriptor to the generation provider,
extracts the structured payload from the reply and hands it to the
validator. Each call is exactly one round trip; retrying is up to the
caller.
"""

import json
import re
from typing import Any

from loguru import logger

from models import Exercise, ExerciseKind

from .config import GenerationConfig
from .errors import EmptyResultError, MalformedPayloadError
from .providers import GenerationProvider
from .schemas import get_exercise_schema
from .validation import ExerciseValidator

_FENCE_START = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_FENCE_END = re.compile(r"\n?[ \t]*```$")

REFUSAL_VOCABULARY = (
    "error",
    "sorry",
    "apolog",
    "unable to",
    "cannot",
    "can't",
    "i can not",
    "lo siento",
    "perdón",
    "disculp",
    "no puedo",
    "no es posible",
)

# Keys of an object that only reports a problem instead of carrying data
_ERROR_KEYS = {"error", "message", "detail", "details"}


def strip_code_fence(text: str) -> str:
    """Remove an optional surrounding ``` fence (with or without a language tag)."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _FENCE_START.sub("", stripped, count=1)
        stripped = _FENCE_END.sub("", stripped, count=1)
    return stripped.strip()


def looks_like_refusal(text: str) -> bool:
    """Check whether text reads like an apology or error message."""
    lowered = text.lower()
    return any(word in lowered for word in REFUSAL_VOCABULARY)


def extract_payload(text: str) -> Any:
    """Parse the provider reply into an untyped document.

    Raises:
        EmptyResultError: If the reply is blank.
        MalformedPayloadError: If the reply is not structured data.
    """
    if not text or not text.strip():
        raise EmptyResultError("The provider returned an empty reply")

    cleaned = strip_code_fence(text)
    if not cleaned:
        raise EmptyResultError("The provider returned an empty code block")

    try:
        document = json.loads(cleaned)
    except json.JSONDecodeError as e:
        if looks_like_refusal(cleaned):
            raise MalformedPayloadError(
                f"The provider returned a message instead of data: {cleaned[:200]}",
                raw_text=text,
                refusal=True,
            ) from e
        raise MalformedPayloadError(
            f"The provider returned invalid JSON: {e}", raw_text=text
        ) from e

    if not isinstance(document, (dict, list)):
        raise MalformedPayloadError(
            f"The provider returned a bare {type(document).__name__} instead of a document",
            raw_text=text,
            refusal=isinstance(document, str) and looks_like_refusal(document),
        )

    if isinstance(document, dict) and document and set(document) <= _ERROR_KEYS:
        raise MalformedPayloadError(
            f"The provider returned an error object: {cleaned[:200]}",
            raw_text=text,
            refusal=True,
        )

    return document


class ContentGenerationClient:
    """Obtains validated exercises from a generation provider."""

    def __init__(
        self,
        provider: GenerationProvider,
        config: GenerationConfig | None = None,
        validator: ExerciseValidator | None = None,
    ):
        self.provider = provider
        self.config = config or GenerationConfig()
        self.validator = validator or ExerciseValidator()

    def request_exercise(self, kind: ExerciseKind) -> Exercise:
        """Request one exercise of the given kind.

        Raises:
            GenerationError: If the reply is empty, malformed or the
                provider cannot be reached.
            ExerciseValidationError: If the document is not a valid exercise.
        """
        schema = get_exercise_schema(kind)
        prompt = schema.render_prompt(self.config)

        logger.info(f"Requesting {schema.kind.value} exercise")
        text = self.provider.generate(prompt, schema.descriptor)

        try:
            document = extract_payload(text)
        except MalformedPayloadError as e:
            logger.warning(f"Malformed {schema.kind.value} payload: {e}")
            raise

        exercise = self.validator.validate(schema.kind, document)
        logger.info(f"Generated '{exercise.title}' ({schema.kind.value})")
        return exercise
