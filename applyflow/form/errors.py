"""
Error types raised by the application form controller.
"""
from datetime import datetime
from typing import Iterable, Optional


class ApplicationFormError(Exception):
    """Base class for all application form errors."""


class ValidationError(ApplicationFormError):
    """A single field failed its validator."""

    def __init__(self, field, reason, message: str):
        self.field = field
        self.reason = reason
        self.message = message
        super().__init__(f"{field.value}: {message}")


class IncompleteAnswersError(ApplicationFormError):
    """One or more present screening questions have no answer."""

    notice = "Please answer all questions"

    def __init__(self, missing_slots: Iterable[int]):
        self.missing_slots = tuple(missing_slots)
        super().__init__(self.notice)


class DeadlinePassedError(ApplicationFormError):
    """The application period for the job has ended."""

    def __init__(self, closes_at: Optional[datetime] = None):
        self.closes_at = closes_at
        if closes_at is None:
            super().__init__("Applications for this job are closed")
        else:
            super().__init__(f"Applications for this job closed at {closes_at.isoformat()}")


class SubmissionError(ApplicationFormError):
    """The submission sink rejected the application."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class SubmissionInProgressError(ApplicationFormError):
    """A submission is already outstanding for this session."""

    def __init__(self):
        super().__init__("An application is already being submitted")


class InvalidTransitionError(ApplicationFormError):
    """An event has no meaning in the current session state."""

    def __init__(self, status: str, event: str):
        self.status = status
        self.event = event
        super().__init__(f"Cannot handle {event} while session is {status}")


class JobNotFoundError(ApplicationFormError):
    """The job descriptor provider has no job with the given id."""

    def __init__(self, job_id: str):
        self.job_id = job_id
        super().__init__(f"Job not found: {job_id}")
