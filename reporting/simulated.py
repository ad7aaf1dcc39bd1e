"""Reporter that pretends to email the results."""

import time
from typing import Callable

from loguru import logger

from .base import SENT_MESSAGE, ReportRequest, ResultsReporter


class SimulatedEmailReporter(ResultsReporter):
    """Waits for a simulated network delay and always succeeds."""

    def __init__(
        self,
        delay_seconds: float = 1.5,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.delay_seconds = delay_seconds
        self._sleep = sleep

    def _transmit(self, request: ReportRequest) -> str:
        logger.debug(f"Simulating email to {request.recipient_address}")
        if self.delay_seconds > 0:
            self._sleep(self.delay_seconds)
        return SENT_MESSAGE
