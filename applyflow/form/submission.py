"""
Submission guards.
"""
from typing import List

from .errors import IncompleteAnswersError, InvalidTransitionError
from .models import ApplicationDraft, JobDescriptor, Step


def missing_answers(job: JobDescriptor, draft: ApplicationDraft) -> List[int]:
    """Slots whose question is present but whose answer is empty."""
    return [slot for slot in job.present_slots() if not draft.answer(slot)]


def check_ready(step: Step, job: JobDescriptor, draft: ApplicationDraft) -> None:
    """Raise unless the draft may be handed to the submission sink.

    Only present question slots impose a requirement; absent slots are ignored
    even if the draft holds text for them.
    """
    if step != Step.REVIEW:
        raise InvalidTransitionError(step.name.lower(), "SubmitRequested")
    missing = missing_answers(job, draft)
    if missing:
        raise IncompleteAnswersError(missing)
