"""
External collaborators consumed by an application session.
"""
from typing import Protocol

from ..form.models import ApplicationDraft, JobDescriptor


class JobDescriptorProvider(Protocol):
    """Source of job metadata."""

    async def fetch(self, job_id: str) -> JobDescriptor:
        """Get a job descriptor.

        Raises:
            JobNotFoundError: if no job has this id
        """
        ...


class SubmissionSink(Protocol):
    """Destination for completed applications."""

    async def submit(self, job: JobDescriptor, draft: ApplicationDraft) -> str:
        """Store a completed application.

        Returns:
            Email address the confirmation was sent to

        Raises:
            SubmissionError: if the application was not accepted
        """
        ...
