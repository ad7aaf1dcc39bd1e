"""Abstract results reporter interface, report models and reporting errors."""

import re
from abc import ABC, abstractmethod

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MISSING_FIELDS_MESSAGE = "Falta información requerida."
INVALID_RECIPIENT_MESSAGE = "Formato de correo electrónico no válido."
SENT_MESSAGE = "¡Resultados enviados con éxito!"


class ReportRequest(BaseModel):
    """Score summary addressed to a recipient (the teacher)."""

    model_config = ConfigDict(frozen=True)

    student_name: str
    recipient_address: str
    activity_name: str
    score: int = Field(ge=0)
    total: int = Field(ge=0)


class ReportResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


# =============================================================================
# Errors
# =============================================================================


class ReportingError(Exception):
    """A report could not be delivered."""


class MissingReportFieldError(ReportingError):
    def __init__(self, field: str):
        super().__init__(MISSING_FIELDS_MESSAGE)
        self.field = field


class InvalidRecipientError(ReportingError):
    def __init__(self, address: str):
        super().__init__(INVALID_RECIPIENT_MESSAGE)
        self.address = address


class ReportTransportError(ReportingError):
    """The delivery channel failed."""


# =============================================================================
# Reporter
# =============================================================================


class ResultsReporter(ABC):
    """Abstract interface for delivering results.

    send() validates the request, then delegates delivery to _transmit().
    Every ReportingError is turned into a failed ReportResult; nothing is
    raised to the caller. Each call is independent.
    """

    def send(self, request: ReportRequest) -> ReportResult:
        """Deliver a report.

        Args:
            request: The score summary to deliver.

        Returns:
            The outcome, with a message suitable for showing to the student.
        """
        try:
            self.validate(request)
            message = self._transmit(request)
        except ReportingError as e:
            logger.warning(f"Report for {request.activity_name!r} not sent: {e}")
            return ReportResult(success=False, message=str(e))

        logger.info(
            f"Report sent: {request.score}/{request.total} for {request.activity_name!r}"
        )
        return ReportResult(success=True, message=message)

    def validate(self, request: ReportRequest) -> None:
        """Reject a request before any delivery attempt.

        Raises:
            MissingReportFieldError: If a name, address or activity is blank.
            InvalidRecipientError: If the address is not an email address.
        """
        for field in ("student_name", "recipient_address", "activity_name"):
            if not getattr(request, field).strip():
                raise MissingReportFieldError(field)
        if not EMAIL_PATTERN.match(request.recipient_address):
            raise InvalidRecipientError(request.recipient_address)

    @abstractmethod
    def _transmit(self, request: ReportRequest) -> str:
        """Deliver a validated request.

        Returns:
            The success message.

        Raises:
            ReportTransportError: If delivery fails.
        """
        pass
