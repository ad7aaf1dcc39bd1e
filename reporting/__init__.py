"""Results reporting for the Spanish tutor.

Provides the reporter interface and a simulated email implementation used
to send a student's score to a teacher.
"""

from exercises.config import ReportConfig

from .base import (
    EMAIL_PATTERN,
    InvalidRecipientError,
    MissingReportFieldError,
    ReportingError,
    ReportRequest,
    ReportResult,
    ReportTransportError,
    ResultsReporter,
)
from .simulated import SimulatedEmailReporter

__all__ = [
    # Models
    "ReportRequest",
    "ReportResult",
    # Abstract interface
    "ResultsReporter",
    # Implementations
    "SimulatedEmailReporter",
    # Errors
    "ReportingError",
    "MissingReportFieldError",
    "InvalidRecipientError",
    "ReportTransportError",
    "EMAIL_PATTERN",
    # Factory functions
    "get_results_reporter",
]


def get_results_reporter(config: ReportConfig | None = None) -> ResultsReporter:
    """Get the configured ResultsReporter instance."""
    config = config or ReportConfig()
    return SimulatedEmailReporter(delay_seconds=config.simulated_delay_seconds)
