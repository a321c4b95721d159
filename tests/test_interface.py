"""
Tests for the ApplicationSession interface.
"""
import asyncio
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from applyflow.form.errors import (
    DeadlinePassedError,
    IncompleteAnswersError,
    InvalidTransitionError,
    JobNotFoundError,
    SubmissionError,
    SubmissionInProgressError,
)
from applyflow.form.models import FieldName, Step
from applyflow.form.state import (
    ActiveState,
    ClosedState,
    FailedState,
    LoadingState,
    SubmittingState,
    SucceededState,
)
from applyflow.interfaces.interface import ApplicationSession


@pytest.fixture
def mock_provider(sample_job):
    """Create a mock job descriptor provider."""
    mock = MagicMock()
    mock.fetch = AsyncMock(return_value=sample_job)
    return mock


@pytest.fixture
def mock_sink():
    """Create a mock submission sink."""
    mock = MagicMock()
    mock.submit = AsyncMock(return_value="jane@example.com")
    return mock


@pytest.fixture
def session(mock_provider, mock_sink, before_deadline):
    """Create a session with mocked collaborators."""
    return ApplicationSession(
        job_id="job_1",
        provider=mock_provider,
        sink=mock_sink,
        clock=lambda: before_deadline
    )


def fill_to_review(session, personal_info):
    for field, value in personal_info.items():
        session.change(field, value)
    session.next_step()
    for slot, text in ((1, "Redux"), (2, "Led a rewrite"), (3, "Unit first"), (4, "Daily")):
        session.change(FieldName(f"answer{slot}"), text)
    return session.next_step()


@pytest.mark.asyncio
async def test_load_opens_session(session, mock_provider):
    assert isinstance(session.state, LoadingState)

    state = await session.load()

    mock_provider.fetch.assert_called_once_with("job_1")
    assert isinstance(state, ActiveState)
    assert state.step == Step.PERSONAL_INFO


@pytest.mark.asyncio
async def test_load_closed_job(mock_provider, mock_sink):
    session = ApplicationSession(
        job_id="job_1",
        provider=mock_provider,
        sink=mock_sink,
        clock=lambda: datetime(2027, 1, 1)
    )

    state = await session.load()

    assert isinstance(state, ClosedState)
    with pytest.raises(DeadlinePassedError):
        session.change(FieldName.FULL_NAME, "Jane Doe")
    assert isinstance(session.state, ClosedState)


@pytest.mark.asyncio
async def test_load_missing_job(session, mock_provider):
    mock_provider.fetch.side_effect = JobNotFoundError("job_1")

    with pytest.raises(JobNotFoundError):
        await session.load()
    assert isinstance(session.state, LoadingState)


@pytest.mark.asyncio
async def test_load_only_once(session):
    await session.load()

    with pytest.raises(InvalidTransitionError):
        await session.load()


@pytest.mark.asyncio
async def test_full_flow_succeeds(session, mock_sink, personal_info):
    await session.load()
    review = fill_to_review(session, personal_info)
    assert review.step == Step.REVIEW

    state = await session.submit()

    mock_sink.submit.assert_called_once()
    job, draft = mock_sink.submit.call_args.args
    assert job.job_id == "job_1"
    assert draft.full_name == "Jane Doe"
    assert draft.answer2 == "Led a rewrite"
    assert isinstance(state, SucceededState)
    assert state.confirmation_email == "jane@example.com"


@pytest.mark.asyncio
async def test_submit_refused_with_missing_answer(session, mock_sink, personal_info):
    await session.load()
    fill_to_review(session, personal_info)
    session.previous_step()
    session.change(FieldName.ANSWER2, "")
    session.next_step()

    with pytest.raises(IncompleteAnswersError):
        await session.submit()

    mock_sink.submit.assert_not_called()
    assert session.state.step == Step.REVIEW


@pytest.mark.asyncio
async def test_sink_failure_keeps_draft(session, mock_sink, personal_info):
    await session.load()
    review = fill_to_review(session, personal_info)
    mock_sink.submit.side_effect = SubmissionError("Service unavailable")

    state = await session.submit()

    assert isinstance(state, FailedState)
    assert state.reason == "Service unavailable"
    assert state.draft == review.draft

    mock_sink.submit.side_effect = None
    session.return_to_review()
    state = await session.submit()
    assert isinstance(state, SucceededState)
    assert mock_sink.submit.call_count == 2


@pytest.mark.asyncio
async def test_unexpected_sink_error_becomes_failure(session, mock_sink, personal_info):
    await session.load()
    fill_to_review(session, personal_info)
    mock_sink.submit.side_effect = ConnectionError("connection reset")

    state = await session.submit()

    assert isinstance(state, FailedState)
    assert state.reason == "connection reset"


@pytest.mark.asyncio
async def test_concurrent_submit_rejected(session, mock_sink, personal_info):
    await session.load()
    fill_to_review(session, personal_info)
    release = asyncio.Event()

    async def slow_submit(job, draft):
        await release.wait()
        return draft.email

    mock_sink.submit.side_effect = slow_submit

    first = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    assert isinstance(session.state, SubmittingState)

    with pytest.raises(SubmissionInProgressError):
        await session.submit()

    release.set()
    state = await first
    assert isinstance(state, SucceededState)
    mock_sink.submit.assert_called_once()


@pytest.mark.asyncio
async def test_result_discarded_after_close(session, mock_sink, personal_info):
    await session.load()
    fill_to_review(session, personal_info)
    release = asyncio.Event()

    async def slow_submit(job, draft):
        await release.wait()
        return draft.email

    mock_sink.submit.side_effect = slow_submit

    pending = asyncio.create_task(session.submit())
    await asyncio.sleep(0)
    session.close()
    release.set()
    state = await pending

    # The sink still ran to completion, but the session kept its last state
    mock_sink.submit.assert_called_once()
    assert isinstance(state, SubmittingState)
    assert session.torn_down
    with pytest.raises(InvalidTransitionError):
        session.change(FieldName.EMAIL, "other@example.com")


@pytest.mark.asyncio
async def test_cancelled_caller_leaves_sink_running(session, mock_sink, personal_info):
    """Test that cancelling submit fails the session without cancelling the sink."""
    await session.load()
    fill_to_review(session, personal_info)
    release = asyncio.Event()
    finished = asyncio.Event()

    async def slow_submit(job, draft):
        await release.wait()
        finished.set()
        return draft.email

    mock_sink.submit.side_effect = slow_submit

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(session.submit(), 0.05)

    state = session.state
    assert isinstance(state, FailedState)
    assert state.reason == "cancelled"
    assert not session.torn_down

    # The sink call was shielded and still completes
    release.set()
    await asyncio.wait_for(finished.wait(), 1)

    mock_sink.submit.side_effect = None
    session.return_to_review()
    state = await session.submit()
    assert isinstance(state, SucceededState)
    assert mock_sink.submit.call_count == 2


def test_default_collaborators_use_storage_path(tmp_path):
    session = ApplicationSession(job_id="job_1", storage_path=str(tmp_path))

    assert (tmp_path / "jobs.json").exists()
    assert (tmp_path / "applications.jsonl").exists()
    assert isinstance(session.state, LoadingState)
