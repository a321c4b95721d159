"""
Events applied to a session by the reducer.
"""
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import FieldName, JobDescriptor


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class JobLoaded(_Event):
    """The job descriptor arrived; ``now`` is the instant for the deadline check."""
    kind: Literal["job_loaded"] = "job_loaded"
    job: JobDescriptor
    now: datetime


class FieldChanged(_Event):
    kind: Literal["field_changed"] = "field_changed"
    field: FieldName
    value: Any = None


class FieldBlurred(_Event):
    kind: Literal["field_blurred"] = "field_blurred"
    field: FieldName


class StepAdvanceRequested(_Event):
    kind: Literal["step_advance_requested"] = "step_advance_requested"


class StepBackRequested(_Event):
    kind: Literal["step_back_requested"] = "step_back_requested"


class SubmitRequested(_Event):
    kind: Literal["submit_requested"] = "submit_requested"


class SubmissionSucceeded(_Event):
    kind: Literal["submission_succeeded"] = "submission_succeeded"
    confirmation_email: str


class SubmissionFailed(_Event):
    kind: Literal["submission_failed"] = "submission_failed"
    reason: str


class ReturnToReviewRequested(_Event):
    """Leave the failed state and go back to the review step."""
    kind: Literal["return_to_review_requested"] = "return_to_review_requested"


Event = Annotated[
    Union[
        JobLoaded,
        FieldChanged,
        FieldBlurred,
        StepAdvanceRequested,
        StepBackRequested,
        SubmitRequested,
        SubmissionSucceeded,
        SubmissionFailed,
        ReturnToReviewRequested,
    ],
    Field(discriminator="kind"),
]
