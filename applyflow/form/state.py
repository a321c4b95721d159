"""
Session states for one candidate's pass through the application form.
"""
from datetime import datetime
from typing import Annotated, Dict, FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import ApplicationDraft, FieldName, JobDescriptor, Step, ValidationResult
from .validation import ValidationState


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoadingState(_State):
    """Job descriptor not fetched yet."""
    status: Literal["loading"] = "loading"


class ClosedState(_State):
    """The deadline had passed when the session loaded."""
    status: Literal["closed"] = "closed"
    job: JobDescriptor
    closes_at: Optional[datetime] = None


class ActiveState(_State):
    """The candidate is filling in the form."""
    status: Literal["active"] = "active"
    job: JobDescriptor
    step: Step = Step.PERSONAL_INFO
    draft: ApplicationDraft = ApplicationDraft()
    validation: ValidationState = ValidationState()

    @property
    def errors(self) -> Dict[FieldName, ValidationResult]:
        return self.validation.errors

    @property
    def touched(self) -> FrozenSet[FieldName]:
        return self.validation.touched


class SubmittingState(_State):
    """The draft has been handed to the submission sink."""
    status: Literal["submitting"] = "submitting"
    job: JobDescriptor
    draft: ApplicationDraft
    validation: ValidationState = ValidationState()


class SucceededState(_State):
    status: Literal["succeeded"] = "succeeded"
    job: JobDescriptor
    confirmation_email: str


class FailedState(_State):
    """The sink rejected the draft. The draft is kept for another attempt."""
    status: Literal["failed"] = "failed"
    job: JobDescriptor
    draft: ApplicationDraft
    validation: ValidationState = ValidationState()
    reason: str


SessionState = Annotated[
    Union[LoadingState, ClosedState, ActiveState, SubmittingState, SucceededState, FailedState],
    Field(discriminator="status"),
]
