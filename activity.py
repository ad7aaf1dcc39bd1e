"""Activity controller: owns the live session and the generation request.

At most one session is live at a time. Every generation request gets a
RequestToken; beginning a new request or restarting makes older tokens
stale, and a response that arrives for a stale token is discarded instead
of replacing the newer state.
"""

import random
from typing import Callable

from loguru import logger
from pydantic import BaseModel, ConfigDict

from exercises.base import SessionController
from exercises.config import MatchConfig
from exercises.errors import ExerciseError, InvalidTransitionError
from exercises.generation import ContentGenerationClient
from exercises.registry import create_session
from models import Exercise, ExerciseKind
from reporting import ReportRequest, ReportResult, ResultsReporter, get_results_reporter


class RequestToken(BaseModel):
    """Identifies one generation request."""

    model_config = ConfigDict(frozen=True)

    serial: int
    kind: ExerciseKind


class ActivityController:
    """Coordinates exercise generation, the live session and reporting."""

    def __init__(
        self,
        client: ContentGenerationClient,
        reporter: ResultsReporter | None = None,
        match_config: MatchConfig | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.client = client
        self.reporter = reporter or get_results_reporter()
        self.match_config = match_config or MatchConfig()
        self._rng = rng
        self._clock = clock

        self._serial = 0
        self._pending: RequestToken | None = None
        self._kind: ExerciseKind | None = None
        self._session: SessionController | None = None
        self._last_error: ExerciseError | None = None

    @property
    def is_loading(self) -> bool:
        return self._pending is not None

    @property
    def current_kind(self) -> ExerciseKind | None:
        return self._kind

    @property
    def session(self) -> SessionController | None:
        return self._session

    @property
    def last_error(self) -> ExerciseError | None:
        """Error from the most recent current request, if it failed."""
        return self._last_error

    def is_current(self, token: RequestToken) -> bool:
        return self._pending is not None and token.serial == self._pending.serial

    # ------------------------------------------------------------------
    # Generation requests
    # ------------------------------------------------------------------

    def begin_request(self, kind: ExerciseKind) -> RequestToken:
        """Discard the current session and issue a token for a new request."""
        self._serial += 1
        token = RequestToken(serial=self._serial, kind=ExerciseKind(kind))
        self._pending = token
        self._kind = token.kind
        self._session = None
        self._last_error = None
        logger.debug(f"Request #{token.serial} for {token.kind.value}")
        return token

    def complete_request(
        self, token: RequestToken, exercise: Exercise
    ) -> SessionController | None:
        """Create the session for a finished request.

        Returns:
            The new session, or None if the token is stale.
        """
        if not self.is_current(token):
            logger.info(f"Discarding stale response for request #{token.serial}")
            return None

        self._pending = None
        self._session = create_session(
            exercise,
            match_config=self.match_config,
            rng=self._rng,
            clock=self._clock,
        )
        return self._session

    def fail_request(self, token: RequestToken, error: ExerciseError) -> bool:
        """Record a failed request. Returns False if the token is stale."""
        if not self.is_current(token):
            logger.info(f"Ignoring failure of stale request #{token.serial}: {error}")
            return False

        self._pending = None
        self._last_error = error
        logger.warning(f"Could not obtain a {token.kind.value} exercise: {error}")
        return True

    def start(self, kind: ExerciseKind) -> SessionController | None:
        """Generate an exercise of kind and start a session for it.

        Returns:
            The new session, or None if the request was superseded while
            it was in flight.

        Raises:
            ExerciseError: If the current request fails. The controller is
                left without a session so the request can be retried.
        """
        token = self.begin_request(kind)
        try:
            exercise = self.client.request_exercise(token.kind)
        except ExerciseError as e:
            if self.fail_request(token, e):
                raise
            return None
        return self.complete_request(token, exercise)

    def restart(self, regenerate: bool = False) -> SessionController | None:
        """Discard the session and invalidate any request in flight.

        Args:
            regenerate: Request a new exercise of the same kind.

        Raises:
            InvalidTransitionError: If regenerate is set but no kind was
                ever requested.
        """
        if self._pending is not None:
            logger.debug(f"Invalidating request #{self._pending.serial}")
        self._pending = None
        self._session = None
        self._last_error = None

        if not regenerate:
            return None
        if self._kind is None:
            raise InvalidTransitionError("No exercise kind to regenerate")
        return self.start(self._kind)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def build_report(self, student_name: str, recipient_address: str) -> ReportRequest:
        """Build a report from the completed session's score.

        Raises:
            InvalidTransitionError: If there is no completed session.
        """
        if self._session is None or self._session.score is None:
            raise InvalidTransitionError("Results can only be reported after completion")

        score = self._session.score
        return ReportRequest(
            student_name=student_name,
            recipient_address=recipient_address,
            activity_name=self._session.exercise.title,
            score=score.correct_count,
            total=score.total,
        )

    def send_report(self, student_name: str, recipient_address: str) -> ReportResult:
        """Send the completed session's score through the reporter."""
        return self.reporter.send(self.build_report(student_name, recipient_address))
