"""Text and textarea fields."""

from typing import Any

from .base import Field, FieldType, ValidationResult, is_empty
from .sanitize import sanitize_text, sanitize_textarea, to_text


class TextField(Field):
    """Single-line text input with an optional required check.

    The required check runs on the sanitized text, so values that clean
    down to nothing (``False``, ``[]``, bare markup) are rejected.
    """

    type_name = FieldType.TEXT.value
    defaults = {
        "label": "",
        "description": "",
        "default": "",
        "placeholder": "",
        "required": False,
    }

    def coerce(self, value: Any) -> str:
        return to_text(value)

    def validate(self, value: Any) -> ValidationResult:
        if self.required and is_empty(self.sanitize(value)):
            return self.required_error()
        return ValidationResult.ok(self.id)

    def sanitize(self, value: Any) -> str:
        return sanitize_text(value)


class TextareaField(TextField):
    """Multi-line text input; line breaks survive sanitization."""

    type_name = FieldType.TEXTAREA.value
    defaults = {**TextField.defaults, "rows": 5}

    def sanitize(self, value: Any) -> str:
        return sanitize_textarea(value)
