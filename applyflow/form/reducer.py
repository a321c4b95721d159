"""
Pure reducer applying events to a session state.
"""
from .deadline import is_closed
from .errors import DeadlinePassedError, InvalidTransitionError, SubmissionInProgressError
from .events import (
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
from .models import FieldName, Step
from .state import (
    ActiveState,
    ClosedState,
    FailedState,
    LoadingState,
    SessionState,
    SubmittingState,
    SucceededState,
)
from .steps import advance, back
from .submission import check_ready


def reduce(state: SessionState, event) -> SessionState:
    """Apply one event and return the next state.

    The input state is never modified. Events that would be refused without
    any visible effect raise instead of returning the same state.

    Raises:
        DeadlinePassedError: any event after the session closed
        SubmissionInProgressError: submit while a submission is outstanding
        IncompleteAnswersError: submit with a present question left empty
        InvalidTransitionError: event has no meaning in the current state
    """
    if isinstance(event, JobLoaded):
        if not isinstance(state, LoadingState):
            raise _invalid(state, event)
        if is_closed(event.job, event.now):
            return ClosedState(job=event.job, closes_at=event.job.closes_at)
        return ActiveState(job=event.job)

    if isinstance(state, ClosedState):
        raise DeadlinePassedError(state.closes_at)

    if isinstance(state, ActiveState):
        return _reduce_active(state, event)

    if isinstance(state, SubmittingState):
        if isinstance(event, SubmitRequested):
            raise SubmissionInProgressError()
        if isinstance(event, SubmissionSucceeded):
            return SucceededState(job=state.job, confirmation_email=event.confirmation_email)
        if isinstance(event, SubmissionFailed):
            return FailedState(
                job=state.job,
                draft=state.draft,
                validation=state.validation,
                reason=event.reason,
            )

    if isinstance(state, FailedState) and isinstance(event, ReturnToReviewRequested):
        return ActiveState(
            job=state.job,
            step=Step.REVIEW,
            draft=state.draft,
            validation=state.validation,
        )

    raise _invalid(state, event)


def _reduce_active(state: ActiveState, event) -> SessionState:
    if isinstance(event, FieldChanged):
        draft = state.draft.with_value(event.field, event.value)
        if event.field == FieldName.CV and event.value is not None:
            # Picking a file counts as interacting with the field
            validation = state.validation.touch(FieldName.CV, draft)
        else:
            validation = state.validation.changed(event.field, draft)
        return state.model_copy(update={"draft": draft, "validation": validation})

    if isinstance(event, FieldBlurred):
        validation = state.validation.touch(event.field, state.draft)
        return state.model_copy(update={"validation": validation})

    if isinstance(event, StepAdvanceRequested):
        step, validation = advance(state.step, state.draft, state.validation)
        return state.model_copy(update={"step": step, "validation": validation})

    if isinstance(event, StepBackRequested):
        return state.model_copy(update={"step": back(state.step)})

    if isinstance(event, SubmitRequested):
        check_ready(state.step, state.job, state.draft)
        return SubmittingState(job=state.job, draft=state.draft, validation=state.validation)

    raise _invalid(state, event)


def _invalid(state: SessionState, event) -> InvalidTransitionError:
    return InvalidTransitionError(state.status, type(event).__name__)
