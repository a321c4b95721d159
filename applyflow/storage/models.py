"""
Data models for stored jobs and applications.
"""
from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..form.models import ApplicationDraft, CvFile, JobDescriptor


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobsState(BaseModel):
    """Contents of the jobs file, keyed by job id."""
    jobs: Dict[str, JobDescriptor] = {}
    last_updated: datetime = Field(default_factory=_utcnow)


class SubmittedApplication(BaseModel):
    """A completed application as written by the submission sink."""
    job_id: Optional[str] = None
    job_title: str
    company_name: str
    full_name: str
    email: str
    phone: str
    cv: Optional[CvFile] = None
    answers: Dict[int, str] = {}  # Present question slots only
    submitted_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_draft(cls, job: JobDescriptor, draft: ApplicationDraft) -> "SubmittedApplication":
        return cls(
            job_id=job.job_id,
            job_title=job.title,
            company_name=job.company,
            full_name=draft.full_name.strip(),
            email=draft.email,
            phone=draft.phone,
            cv=draft.cv,
            answers={slot: draft.answer(slot) for slot in job.present_slots()},
        )
