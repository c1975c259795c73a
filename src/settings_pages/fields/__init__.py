"""Field contract and built-in field types."""

from .base import ErrorKind, Field, FieldError, FieldType, ValidationResult, is_empty
from .checkbox import CheckboxField
from .image import ImageField
from .sanitize import absint, sanitize_text, sanitize_textarea
from .select import SelectField
from .text import TextareaField, TextField

BUILTIN_FIELDS = {
    FieldType.TEXT: TextField,
    FieldType.TEXTAREA: TextareaField,
    FieldType.SELECT: SelectField,
    FieldType.CHECKBOX: CheckboxField,
    FieldType.IMAGE: ImageField,
}

__all__ = [
    # Contract
    "Field",
    "FieldType",
    "FieldError",
    "ErrorKind",
    "ValidationResult",
    "is_empty",
    # Built-in types
    "TextField",
    "TextareaField",
    "SelectField",
    "CheckboxField",
    "ImageField",
    "BUILTIN_FIELDS",
    # Sanitizers
    "absint",
    "sanitize_text",
    "sanitize_textarea",
]
