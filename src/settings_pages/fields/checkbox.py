"""Checkbox field."""

from typing import Any

from .base import Field, FieldType, ValidationResult


class CheckboxField(Field):
    """Boolean toggle.

    Values are coerced with plain truthiness, so the string ``"false"`` is
    stored as ``True``. Clients are expected to submit JSON booleans.
    """

    type_name = FieldType.CHECKBOX.value
    defaults = {
        "label": "",
        "description": "",
        "default": False,
    }

    def coerce(self, value: Any) -> bool:
        return bool(value)

    def validate(self, value: Any) -> ValidationResult:
        return ValidationResult.ok(self.id)

    def sanitize(self, value: Any) -> bool:
        return bool(value)
