"""
Per-field validation state: stored errors and the touched set.
"""
from typing import Dict, FrozenSet, Iterable

from pydantic import BaseModel, ConfigDict

from .models import TRACKED_FIELDS, ApplicationDraft, FieldName, ValidationResult
from .validators import validate_field


class ValidationState(BaseModel):
    """Errors and touched flags for the tracked fields.

    A field's stored error only exists once the field has been touched or
    validated in bulk. Validity itself never depends on this state; use
    ``is_field_valid`` for that.
    """
    model_config = ConfigDict(frozen=True)

    errors: Dict[FieldName, ValidationResult] = {}
    touched: FrozenSet[FieldName] = frozenset()

    def is_touched(self, field: FieldName) -> bool:
        return field in self.touched

    def error(self, field: FieldName) -> str:
        """Stored message for a field, "" if valid or not yet computed."""
        result = self.errors.get(field)
        return result.message if result else ""

    def visible_error(self, field: FieldName) -> str:
        if not self.is_touched(field):
            return ""
        return self.error(field)

    def changed(self, field: FieldName, draft: ApplicationDraft) -> "ValidationState":
        """Apply the live feedback rule after a field value changed."""
        if field not in TRACKED_FIELDS or field not in self.touched:
            return self
        return self._with_result(field, draft)

    def touch(self, field: FieldName, draft: ApplicationDraft) -> "ValidationState":
        """Mark a field touched and compute its error."""
        if field not in TRACKED_FIELDS:
            return self
        state = self._with_result(field, draft)
        return state.model_copy(update={"touched": state.touched | {field}})

    def validate_all(
        self,
        draft: ApplicationDraft,
        fields: Iterable[FieldName] = TRACKED_FIELDS
    ) -> "ValidationState":
        """Touch and validate every given field regardless of prior state."""
        fields = tuple(fields)
        errors = dict(self.errors)
        for field in fields:
            errors[field] = validate_field(field, draft.value(field))
        return ValidationState(errors=errors, touched=self.touched | frozenset(fields))

    def all_valid(self, fields: Iterable[FieldName] = TRACKED_FIELDS) -> bool:
        return all(field in self.errors and self.errors[field].is_valid for field in fields)

    def _with_result(self, field: FieldName, draft: ApplicationDraft) -> "ValidationState":
        errors = dict(self.errors)
        errors[field] = validate_field(field, draft.value(field))
        return self.model_copy(update={"errors": errors})


def is_field_valid(field: FieldName, draft: ApplicationDraft) -> bool:
    return validate_field(field, draft.value(field)).is_valid
