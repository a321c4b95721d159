"""
Main interface for driving one candidate's application session.
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..form.errors import InvalidTransitionError, SubmissionError
from ..form.events import (
    FieldBlurred,
    FieldChanged,
    JobLoaded,
    ReturnToReviewRequested,
    StepAdvanceRequested,
    StepBackRequested,
    SubmissionFailed,
    SubmissionSucceeded,
    SubmitRequested,
)
from ..form.models import FieldName
from ..form.reducer import reduce
from ..form.state import ClosedState, LoadingState, SessionState
from ..storage.json_store import JsonJobStore, JsonSubmissionSink
from ..utils.config import Config
from .collaborators import JobDescriptorProvider, SubmissionSink

logger = logging.getLogger(__name__)


class ApplicationSession:
    """One candidate's pass through the application form for one job."""

    def __init__(
        self,
        job_id: str,
        provider: Optional[JobDescriptorProvider] = None,
        sink: Optional[SubmissionSink] = None,
        storage_path: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """Initialize a session in the loading state.

        Args:
            job_id: ID of the job being applied to
            provider: Optional job descriptor provider. If None, uses JsonJobStore
            sink: Optional submission sink. If None, uses JsonSubmissionSink
            storage_path: Directory for the JSON stores. If None, uses the
                configured storage directory
            clock: Optional callable returning the current instant, used once
                for the deadline check
        """
        self.job_id = job_id

        if storage_path is None and (provider is None or sink is None):
            storage_path = str(Config().storage_dir)
        self._provider = provider if provider is not None else JsonJobStore(storage_path)
        self._sink = sink if sink is not None else JsonSubmissionSink(storage_path)
        self._clock = clock or datetime.now

        self._state: SessionState = LoadingState()
        self._torn_down = False

    @classmethod
    def from_config(cls, job_id: str, config: Config) -> "ApplicationSession":
        """Create a session backed by the JSON stores in the configured directory."""
        return cls(job_id=job_id, storage_path=str(config.storage_dir))

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    async def load(self) -> SessionState:
        """Fetch the job and run the deadline check once.

        Returns:
            ClosedState if the deadline has passed, otherwise ActiveState at step 1

        Raises:
            JobNotFoundError: the provider has no such job; the session stays loading
        """
        if not isinstance(self._state, LoadingState):
            raise InvalidTransitionError(self._state.status, "JobLoaded")

        job = await self._provider.fetch(self.job_id)
        state = self.dispatch(JobLoaded(job=job, now=self._clock()))
        if isinstance(state, ClosedState):
            logger.info("Applications for job %s closed at %s", self.job_id, state.closes_at)
        else:
            logger.info("Loaded job %s: %s", self.job_id, job.title)
        return state

    def dispatch(self, event) -> SessionState:
        """Apply an event to the current state.

        Errors raised by the reducer leave the current state untouched.
        """
        if self._torn_down:
            raise InvalidTransitionError("torn_down", type(event).__name__)
        self._state = reduce(self._state, event)
        return self._state

    def change(self, field: FieldName, value: Any) -> SessionState:
        return self.dispatch(FieldChanged(field=field, value=value))

    def blur(self, field: FieldName) -> SessionState:
        return self.dispatch(FieldBlurred(field=field))

    def next_step(self) -> SessionState:
        before = getattr(self._state, "step", None)
        state = self.dispatch(StepAdvanceRequested())
        if state.step == before:
            logger.debug("Step %s advance refused: %s", before, state.errors)
        else:
            logger.debug("Moved to step %s", state.step)
        return state

    def previous_step(self) -> SessionState:
        return self.dispatch(StepBackRequested())

    def return_to_review(self) -> SessionState:
        """Go back to the review step after a failed submission."""
        return self.dispatch(ReturnToReviewRequested())

    async def submit(self) -> SessionState:
        """Hand the draft to the submission sink and record the outcome.

        The sink call is never cancelled. If the caller is cancelled while it
        is outstanding, the session moves to the failed state and the sink
        call runs to completion on its own. If the session is torn down while
        it is outstanding, its result is dropped.

        Raises:
            IncompleteAnswersError: a present question has no answer
            SubmissionInProgressError: a submission is already outstanding
        """
        submitting = self.dispatch(SubmitRequested())
        logger.info("Submitting application for job %s", self.job_id)

        pending = asyncio.ensure_future(self._sink.submit(submitting.job, submitting.draft))
        try:
            confirmation_email = await asyncio.shield(pending)
        except asyncio.CancelledError:
            pending.add_done_callback(self._log_abandoned)
            if not self._torn_down:
                self.dispatch(SubmissionFailed(reason="cancelled"))
            logger.warning("Submission for job %s cancelled while outstanding", self.job_id)
            raise
        except SubmissionError as e:
            logger.warning("Submission for job %s rejected: %s", self.job_id, e.reason)
            outcome = SubmissionFailed(reason=e.reason)
        except Exception as e:  # pylint: disable=broad-except
            logger.exception("Submission sink failed for job %s", self.job_id)
            outcome = SubmissionFailed(reason=str(e) or type(e).__name__)
        else:
            outcome = SubmissionSucceeded(
                confirmation_email=confirmation_email or submitting.draft.email
            )

        if self._torn_down:
            logger.info("Session for job %s closed; discarding %s", self.job_id, outcome.kind)
            return self._state

        state = self.dispatch(outcome)
        logger.info("Application for job %s %s", self.job_id, state.status)
        return state

    def _log_abandoned(self, pending: "asyncio.Future[str]"):
        if pending.cancelled():
            return
        error = pending.exception()
        if error is not None:
            logger.warning("Abandoned submission for job %s failed: %s", self.job_id, error)
        else:
            logger.info("Abandoned submission for job %s completed after cancel", self.job_id)

    def close(self):
        """Tear down the session. Later events are rejected."""
        self._torn_down = True
