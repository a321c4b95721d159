"""
Field validators for the personal info step.

Every validator is a pure function returning an error message, where the
empty string means the value is valid.
"""
import re
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import ValidationError
from .models import CvFile, FieldName, ValidationReason, ValidationResult

# Shared with the file picker filter; both must accept exactly the same files
ACCEPTED_CV_EXTENSIONS: Tuple[str, ...] = ("pdf", "doc", "docx")
MAX_CV_SIZE_BYTES = 10 * 1024 * 1024
CV_ACCEPT_ATTRIBUTE = ",".join(f".{ext}" for ext in ACCEPTED_CV_EXTENSIONS)

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10

_DIGIT = re.compile(r"[0-9]")
_EMAIL = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PHONE_CHARS = re.compile(r"[0-9 +\-()]+")

MESSAGES: Dict[Tuple[FieldName, ValidationReason], str] = {
    (FieldName.FULL_NAME, ValidationReason.REQUIRED): "Full name is required",
    (FieldName.FULL_NAME, ValidationReason.TOO_SHORT): "Name must be at least 2 characters",
    (FieldName.FULL_NAME, ValidationReason.CONTAINS_DIGITS): "Name cannot contain numbers",
    (FieldName.EMAIL, ValidationReason.REQUIRED): "Email is required",
    (FieldName.EMAIL, ValidationReason.INVALID_FORMAT): "Please enter a valid email",
    (FieldName.PHONE, ValidationReason.REQUIRED): "Phone number is required",
    (FieldName.PHONE, ValidationReason.INVALID_PHONE): "Please enter a valid phone number",
    (FieldName.CV, ValidationReason.REQUIRED): "CV/Resume is required",
    (FieldName.CV, ValidationReason.UNSUPPORTED_TYPE): "Only PDF, DOC, DOCX allowed",
    (FieldName.CV, ValidationReason.TOO_LARGE): "File size must be less than 10MB",
}


def check_full_name(name: str) -> Optional[ValidationReason]:
    trimmed = name.strip()
    if not trimmed:
        return ValidationReason.REQUIRED
    if len(trimmed) < MIN_NAME_LENGTH:
        return ValidationReason.TOO_SHORT
    if _DIGIT.search(name):
        return ValidationReason.CONTAINS_DIGITS
    return None


def check_email(email: str) -> Optional[ValidationReason]:
    if not email.strip():
        return ValidationReason.REQUIRED
    if not _EMAIL.fullmatch(email):
        return ValidationReason.INVALID_FORMAT
    return None


def check_phone(phone: str) -> Optional[ValidationReason]:
    if not phone.strip():
        return ValidationReason.REQUIRED
    digits = sum(1 for char in phone if char in "0123456789")
    if not _PHONE_CHARS.fullmatch(phone) or digits < MIN_PHONE_DIGITS:
        return ValidationReason.INVALID_PHONE
    return None


def cv_extension(filename: str) -> str:
    """Lowercased text after the last dot, or "" when the name has no dot."""
    _, dot, extension = filename.rpartition(".")
    return extension.lower() if dot else ""


def check_cv(cv: Optional[CvFile]) -> Optional[ValidationReason]:
    if cv is None:
        return ValidationReason.REQUIRED
    if cv_extension(cv.name) not in ACCEPTED_CV_EXTENSIONS:
        return ValidationReason.UNSUPPORTED_TYPE
    if cv.size > MAX_CV_SIZE_BYTES:
        return ValidationReason.TOO_LARGE
    return None


_CHECKS: Dict[FieldName, Callable[[Any], Optional[ValidationReason]]] = {
    FieldName.FULL_NAME: check_full_name,
    FieldName.EMAIL: check_email,
    FieldName.PHONE: check_phone,
    FieldName.CV: check_cv,
}


def validate_field(field: FieldName, value: Any) -> ValidationResult:
    """Validate one tracked field.

    Args:
        field: One of the personal info fields
        value: Current draft value for that field

    Returns:
        ValidationResult with an empty message when the value is valid
    """
    try:
        check = _CHECKS[field]
    except KeyError:
        raise ValueError(f"No validator for field: {field.value}") from None
    reason = check(value)
    if reason is None:
        return ValidationResult()
    return ValidationResult(message=MESSAGES[(field, reason)], reason=reason)


def validate(field: FieldName, value: Any) -> str:
    """Validate one tracked field and return its message ("" when valid)."""
    return validate_field(field, value).message


def validate_full_name(name: str) -> str:
    return validate(FieldName.FULL_NAME, name)


def validate_email(email: str) -> str:
    return validate(FieldName.EMAIL, email)


def validate_phone(phone: str) -> str:
    return validate(FieldName.PHONE, phone)


def validate_cv(cv: Optional[CvFile]) -> str:
    return validate(FieldName.CV, cv)


def is_valid(field: FieldName, value: Any) -> bool:
    return not validate(field, value)


def ensure_valid(field: FieldName, value: Any) -> None:
    """Raise ValidationError if the value does not pass its validator."""
    result = validate_field(field, value)
    if not result.is_valid:
        raise ValidationError(field, result.reason, result.message)
