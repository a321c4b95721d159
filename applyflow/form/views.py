"""
Read-only projections of a session state for the rendering layer.
"""
from typing import Dict, List, Optional, Tuple

from .deadline import format_deadline
from .models import FieldName, JobDescriptor
from .state import ActiveState, ClosedState, SessionState, SucceededState
from .validation import is_field_valid


def visible_error(state: SessionState, field: FieldName) -> str:
    """Error to show under a field; empty until the field is touched."""
    if not isinstance(state, ActiveState):
        return ""
    return state.validation.visible_error(field)


def shows_valid_marker(state: SessionState, field: FieldName) -> bool:
    """True when a touched field currently passes its validator."""
    if not isinstance(state, ActiveState):
        return False
    return state.validation.is_touched(field) and is_field_valid(field, state.draft)


def present_questions(job: JobDescriptor) -> List[Tuple[int, str]]:
    return [(slot, job.question(slot)) for slot in job.present_slots()]


def has_questions(job: JobDescriptor) -> bool:
    return bool(job.present_slots())


def review_summary(state: ActiveState) -> Dict[str, object]:
    """Everything the review step lists before the candidate submits.

    Answers are only included for present question slots.
    """
    draft = state.draft
    return {
        "full_name": draft.full_name,
        "email": draft.email,
        "phone": draft.phone,
        "cv": draft.cv.name if draft.cv else None,
        "answers": [
            (question, draft.answer(slot))
            for slot, question in present_questions(state.job)
        ],
    }


def closed_message(state: ClosedState, contact_email: Optional[str] = None) -> str:
    job = state.job
    contact = job.contact_email or contact_email
    message = f"Unfortunately, the application period for the {job.title} position has ended."
    if state.closes_at is not None:
        message += f" The deadline was {format_deadline(state.closes_at)}."
    if contact:
        message += (
            f" Please reach out to the recruiter at {contact} for more information"
            " about this position or similar opportunities."
        )
    return message


def success_message(state: SucceededState) -> str:
    return (
        f"Thank you for applying to the {state.job.title} position. "
        f"A confirmation email has been sent to {state.confirmation_email}"
    )
