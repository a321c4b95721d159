"""
Tests for storage functionality.
"""
import json
from datetime import date, time

import pytest

from applyflow.form.errors import JobNotFoundError, SubmissionError
from applyflow.form.models import ApplicationDraft, CvFile
from applyflow.storage.json_store import JsonJobStore, JsonSubmissionSink


@pytest.fixture
def temp_storage_dir(tmp_path):
    """Create a temporary storage directory for testing."""
    storage_dir = tmp_path / "test_storage"
    storage_dir.mkdir()
    return storage_dir


@pytest.fixture
def job_store(temp_storage_dir):
    """Create a job store instance for testing."""
    return JsonJobStore(str(temp_storage_dir))


@pytest.fixture
def sink(temp_storage_dir):
    """Create a submission sink instance for testing."""
    return JsonSubmissionSink(str(temp_storage_dir))


@pytest.fixture
def sample_draft():
    """Create a completed draft for testing."""
    return ApplicationDraft(
        full_name="  Jane Doe ",
        email="jane@example.com",
        phone="555-123-4567",
        cv=CvFile(name="resume.pdf", size=2048, path="/tmp/resume.pdf"),
        answer1="Redux",
        answer2="Led a rewrite",
        answer3="Unit first",
        answer4="Daily",
    )


def test_initialization(temp_storage_dir):
    """Test store initialization."""
    JsonJobStore(str(temp_storage_dir))
    JsonSubmissionSink(str(temp_storage_dir))

    assert (temp_storage_dir / "jobs.json").exists()
    assert (temp_storage_dir / "applications.jsonl").exists()

    with open(temp_storage_dir / "jobs.json", 'r') as f:
        data = json.load(f)
        assert data == {"jobs": {}, "last_updated": data["last_updated"]}


@pytest.mark.asyncio
async def test_add_and_fetch_job(job_store, sample_job):
    """Test adding a job and fetching it back."""
    job_store.add_job("job_42", sample_job)

    job = await job_store.fetch("job_42")

    assert job.job_id == "job_42"
    assert job.title == sample_job.title
    assert job.close_date == date(2026, 12, 31)
    assert job.close_time == time(23, 59)


@pytest.mark.asyncio
async def test_jobs_survive_reload(temp_storage_dir, job_store, sample_job):
    """Test that jobs are read back from the jobs file."""
    job_store.add_job("job_42", sample_job.model_copy(update={"question4": None}))

    reloaded = JsonJobStore(str(temp_storage_dir))
    job = await reloaded.fetch("job_42")

    assert job.question4 is None
    assert job.present_slots() == [1, 2, 3]


@pytest.mark.asyncio
async def test_fetch_missing_job(job_store):
    """Test that a missing job raises JobNotFoundError."""
    with pytest.raises(JobNotFoundError) as exc_info:
        await job_store.fetch("nope")
    assert exc_info.value.job_id == "nope"


@pytest.mark.asyncio
async def test_submit_appends_application(sink, sample_job, sample_draft):
    """Test that submitted applications are written to the JSONL file."""
    job = sample_job.model_copy(update={"question3": None})

    confirmation = await sink.submit(job, sample_draft)
    await sink.submit(job, sample_draft.model_copy(update={"email": "john@example.com"}))

    assert confirmation == "jane@example.com"
    applications = sink.get_applications("job_1")
    assert len(applications) == 2
    first = applications[0]
    assert first.full_name == "Jane Doe"
    assert first.cv.name == "resume.pdf"
    assert first.answers == {1: "Redux", 2: "Led a rewrite", 4: "Daily"}
    assert applications[1].email == "john@example.com"
    assert sink.get_applications("other_job") == []


@pytest.mark.asyncio
async def test_submit_write_failure(sink, sample_job, sample_draft):
    """Test that write errors surface as SubmissionError."""
    sink.applications_file.unlink()
    sink.applications_file.mkdir()

    with pytest.raises(SubmissionError):
        await sink.submit(sample_job, sample_draft)
