"""
Data models for the application form.
"""
from datetime import date, datetime, time
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as ModelValidationError

from .errors import ValidationError


class FieldName(str, Enum):
    """Closed set of draft fields the form knows about."""
    FULL_NAME = "full_name"
    EMAIL = "email"
    PHONE = "phone"
    CV = "cv"
    ANSWER1 = "answer1"
    ANSWER2 = "answer2"
    ANSWER3 = "answer3"
    ANSWER4 = "answer4"


# Step-1 fields; the only ones with validators and touched tracking
TRACKED_FIELDS: Tuple[FieldName, ...] = (
    FieldName.FULL_NAME,
    FieldName.EMAIL,
    FieldName.PHONE,
    FieldName.CV,
)

QUESTION_SLOTS: Tuple[int, ...] = (1, 2, 3, 4)

ANSWER_FIELDS: Dict[int, FieldName] = {
    1: FieldName.ANSWER1,
    2: FieldName.ANSWER2,
    3: FieldName.ANSWER3,
    4: FieldName.ANSWER4,
}


class Step(IntEnum):
    """Stages of the application flow."""
    PERSONAL_INFO = 1
    QUESTIONS = 2
    REVIEW = 3


class ValidationReason(str, Enum):
    """Why a field failed validation."""
    REQUIRED = "required"
    TOO_SHORT = "too_short"
    CONTAINS_DIGITS = "contains_digits"
    INVALID_FORMAT = "invalid_format"
    INVALID_PHONE = "invalid_phone"
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"
    INVALID_TYPE = "invalid_type"


class ValidationResult(BaseModel):
    """Outcome of validating one field. An empty message means valid."""
    model_config = ConfigDict(frozen=True)

    message: str = ""
    reason: Optional[ValidationReason] = None

    @property
    def is_valid(self) -> bool:
        return not self.message


class CvFile(BaseModel):
    """Handle to the attached CV. Only name and size are inspected."""
    model_config = ConfigDict(frozen=True)

    name: str
    size: int = Field(ge=0)
    path: Optional[str] = None
    content_type: Optional[str] = None


class JobDescriptor(BaseModel):
    """Job metadata supplied by the job descriptor provider."""
    model_config = ConfigDict(frozen=True)

    job_id: Optional[str] = None
    title: str
    company: str
    department: str = ""
    location: str = ""
    requirements: str = ""
    question1: Optional[str] = None
    question2: Optional[str] = None
    question3: Optional[str] = None
    question4: Optional[str] = None
    close_date: Optional[date] = None
    close_time: Optional[time] = None
    contact_email: Optional[str] = None

    @field_validator("question1", "question2", "question3", "question4", mode="before")
    @classmethod
    def _empty_question_is_absent(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    def question(self, slot: int) -> Optional[str]:
        """Get the screening question in a slot (1-4), or None if absent."""
        if slot not in QUESTION_SLOTS:
            raise ValueError(f"Invalid question slot: {slot}")
        return getattr(self, f"question{slot}")

    def present_slots(self) -> List[int]:
        return [slot for slot in QUESTION_SLOTS if self.question(slot) is not None]

    @property
    def closes_at(self) -> Optional[datetime]:
        """Close date and time combined, or None unless both are set."""
        if self.close_date is None or self.close_time is None:
            return None
        return datetime.combine(self.close_date, self.close_time)


class ApplicationDraft(BaseModel):
    """The candidate's answers so far.

    Drafts are values: every change produces a new draft via ``with_value``,
    so a draft handed to the submission sink can never change underneath it.
    """
    model_config = ConfigDict(frozen=True)

    full_name: str = ""
    email: str = ""
    phone: str = ""
    cv: Optional[CvFile] = None
    answer1: str = ""
    answer2: str = ""
    answer3: str = ""
    answer4: str = ""

    def value(self, field: FieldName) -> Any:
        return getattr(self, field.value)

    def answer(self, slot: int) -> str:
        return self.value(ANSWER_FIELDS[slot])

    def with_value(self, field: FieldName, value: Any) -> "ApplicationDraft":
        """Return a copy of the draft with one field replaced.

        Raises:
            ValidationError: the value has the wrong type for the field
        """
        data = dict(self)
        data[field.value] = value
        try:
            return type(self).model_validate(data)
        except ModelValidationError as e:
            message = e.errors()[0]["msg"]
            raise ValidationError(field, ValidationReason.INVALID_TYPE, message) from None
