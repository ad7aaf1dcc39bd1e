"""Errors raised while obtaining an exercise or driving a session.

Every error here is terminal for the single operation that raised it:
no partial exercise or session is ever exposed.
"""


class ExerciseError(Exception):
    """A failed attempt to obtain an exercise."""


# =============================================================================
# Generation errors
# =============================================================================


class GenerationError(ExerciseError):
    """The provider reply could not be turned into a document."""


class EmptyResultError(GenerationError):
    """The provider returned no text."""


class MalformedPayloadError(GenerationError):
    """The provider reply is not structured data.

    ``refusal`` is set when the reply reads like an apology or an error
    message instead of data.
    """

    def __init__(self, message: str, raw_text: str = "", refusal: bool = False):
        super().__init__(message)
        self.raw_text = raw_text
        self.refusal = refusal


class TransportFailureError(GenerationError):
    """The provider could not be reached or rejected the request."""


# =============================================================================
# Validation errors
# =============================================================================


class ExerciseValidationError(ExerciseError):
    """The parsed document does not describe a well-formed exercise."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class MissingFieldError(ExerciseValidationError):
    """A required field is absent, null or blank."""


class FieldTypeError(ExerciseValidationError):
    """A required field has the wrong JSON type."""


class EmptyContentError(ExerciseValidationError):
    """The question or item sequence is empty."""


class AnswerNotInOptionsError(ExerciseValidationError):
    """A choice question's correct answer is not one of its options."""


class BlankMarkerCountError(ExerciseValidationError):
    """A fill-style prompt does not contain exactly one blank marker."""

    def __init__(self, message: str, path: str = "", count: int = 0):
        super().__init__(message, path)
        self.count = count


# =============================================================================
# Session errors
# =============================================================================


class InvalidTransitionError(RuntimeError):
    """A session operation was invoked in a state that does not allow it."""
