"""
JSON storage implementation of the job provider and submission sink.
"""
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..form.errors import JobNotFoundError, SubmissionError
from ..form.models import ApplicationDraft, JobDescriptor
from .models import JobsState, SubmittedApplication

logger = logging.getLogger(__name__)


class JsonJobStore:
    """Serves job descriptors from a JSON file."""

    def __init__(self, storage_dir: str = "data/active"):
        """Initialize job store."""
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

        self.jobs_file = self.storage_dir / "jobs.json"
        self.jobs_file.touch(exist_ok=True)

        self._load_or_create_jobs()

    def _load_or_create_jobs(self):
        """Load or create the jobs file."""
        if self.jobs_file.stat().st_size == 0:
            self.jobs_state = JobsState()
            self._save_jobs()
        else:
            with open(self.jobs_file, 'r') as f:
                data = json.load(f)
                self.jobs_state = JobsState(**data)

    def _save_jobs(self):
        """Save jobs to file."""
        with open(self.jobs_file, 'w') as f:
            json.dump(self.jobs_state.model_dump(mode="json"), f, indent=2)

    def add_job(self, job_id: str, job: JobDescriptor):
        """Add or replace a job.

        Args:
            job_id: ID the job is served under
            job: Job descriptor to store
        """
        self.jobs_state.jobs[job_id] = job.model_copy(update={"job_id": job_id})
        self.jobs_state.last_updated = datetime.now(timezone.utc)
        self._save_jobs()

    def get_job(self, job_id: str) -> Optional[JobDescriptor]:
        return self.jobs_state.jobs.get(job_id)

    async def fetch(self, job_id: str) -> JobDescriptor:
        """Get a job descriptor by ID.

        Raises:
            JobNotFoundError: if the job is not in the store
        """
        job = self.get_job(job_id)
        if job is None:
            raise JobNotFoundError(job_id)
        return job


class JsonSubmissionSink:
    """Appends submitted applications to a JSONL file."""

    def __init__(self, storage_dir: str = "data/active"):
        """Initialize submission sink."""
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

        self.applications_file = self.storage_dir / "applications.jsonl"
        self.applications_file.touch(exist_ok=True)

    async def submit(self, job: JobDescriptor, draft: ApplicationDraft) -> str:
        """Store an application and return the confirmation address.

        Only the CV's metadata is written; the file itself is not copied.

        Raises:
            SubmissionError: if the application could not be written
        """
        application = SubmittedApplication.from_draft(job, draft)
        try:
            with open(self.applications_file, 'a') as f:
                f.write(application.model_dump_json() + '\n')
        except OSError as e:
            raise SubmissionError(f"Could not store application: {e}") from e
        logger.info("Stored application for job %s", job.job_id)
        return application.email

    def get_applications(self, job_id: Optional[str] = None) -> List[SubmittedApplication]:
        """Get stored applications, optionally for one job only.

        Args:
            job_id: Optional job ID to filter by

        Returns:
            List of SubmittedApplication objects in submission order
        """
        applications = []
        with open(self.applications_file, 'r') as f:
            for line in f:
                if not line.strip():
                    continue
                application = SubmittedApplication.model_validate_json(line)
                if job_id is None or application.job_id == job_id:
                    applications.append(application)
        return applications
