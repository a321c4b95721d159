"""
Step state machine for the three-step application flow.
"""
from typing import List, Tuple

from .errors import InvalidTransitionError
from .models import TRACKED_FIELDS, ApplicationDraft, Step
from .validation import ValidationState


def advance(
    step: Step,
    draft: ApplicationDraft,
    validation: ValidationState
) -> Tuple[Step, ValidationState]:
    """Move forward one step if allowed.

    Leaving personal info runs a bulk validation pass over all tracked fields,
    so the gate cannot be skipped by never blurring a field. On refusal the
    step is returned unchanged together with the refreshed validation state.
    Questions to review is always allowed; answers are checked at submit.

    Returns:
        Tuple of (new step, new validation state)
    """
    if step == Step.PERSONAL_INFO:
        validation = validation.validate_all(draft, TRACKED_FIELDS)
        if not validation.all_valid(TRACKED_FIELDS):
            return step, validation
        return Step.QUESTIONS, validation
    if step == Step.QUESTIONS:
        return Step.REVIEW, validation
    raise InvalidTransitionError("review", "StepAdvanceRequested")


def back(step: Step) -> Step:
    """Move back one step. Draft and validation state are left alone."""
    if step == Step.PERSONAL_INFO:
        raise InvalidTransitionError("personal_info", "StepBackRequested")
    return Step(step - 1)


def step_progress(step: Step) -> List[bool]:
    """Whether each step has been reached, for a progress indicator."""
    return [step >= candidate for candidate in Step]
