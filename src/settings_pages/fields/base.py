"""Field contract shared by every field type.

A field encapsulates one configurable value of a settings page: its
configuration, its current value, and the rules used to validate and
sanitize submitted values before they are stored.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from ..media import MediaResolver


class FieldType(Enum):
    """Built-in field types.

    Attributes:
        TEXT: Single-line text input.
        TEXTAREA: Multi-line text input.
        SELECT: Dropdown with static options.
        CHECKBOX: Boolean toggle.
        IMAGE: Attachment picker storing an image id.
    """

    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"
    CHECKBOX = "checkbox"
    IMAGE = "image"


class ErrorKind(Enum):
    """Machine-readable reasons a field value can be rejected."""

    REQUIRED = "required_field"
    INVALID_IMAGE = "invalid_image"
    INVALID_CHOICE = "invalid_choice"


@dataclass(frozen=True)
class FieldError:
    """A rejected field value.

    Attributes:
        kind: Why the value was rejected.
        message: Human-readable message for the form.
    """

    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a field value.

    Attributes:
        field_id: The field that was validated.
        error: The failure, or None when the value is valid.
    """

    field_id: str
    error: Optional[FieldError] = None

    @property
    def valid(self) -> bool:
        """Whether the value passed validation."""
        return self.error is None

    @classmethod
    def ok(cls, field_id: str) -> "ValidationResult":
        return cls(field_id=field_id)

    @classmethod
    def fail(cls, field_id: str, kind: ErrorKind, message: str) -> "ValidationResult":
        return cls(field_id=field_id, error=FieldError(kind=kind, message=message))


def is_empty(value: Any) -> bool:
    """Loose emptiness test used by required checks.

    ``None``, ``False``, ``0``, empty containers, whitespace-only strings
    and the string ``"0"`` count as empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return stripped == "" or stripped == "0"
    if isinstance(value, (int, float)):
        return value == 0
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0
    return False


class Field(ABC):
    """Base class for all field types.

    Subclasses declare ``type_name`` and ``defaults`` and implement value
    coercion, validation and sanitization. The current value is always a
    storable primitive (str, bool or int).

    Example:
        field = TextField("site_name", {"label": "Site name", "required": True})
        result = field.validate("  ")
        assert not result.valid
        field.set_value("My site")
    """

    type_name: str = ""
    defaults: Dict[str, Any] = {}

    def __init__(self, field_id: str, config: Optional[Dict[str, Any]] = None):
        """Create a field.

        Args:
            field_id: Identifier, unique within its page.
            config: Options merged over the type's defaults.
        """
        self._id = field_id
        self._config = self.prepare_config({**self.defaults, **(config or {})})
        self._type = self.type_name
        self._media: Optional["MediaResolver"] = None
        self._value = self.coerce(self._config.get("default"))

    def prepare_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize the merged configuration. Subclasses may override."""
        return config

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> str:
        return self._type

    @property
    def config(self) -> Dict[str, Any]:
        return dict(self._config)

    @property
    def label(self) -> str:
        return self._config.get("label") or self._id

    @property
    def required(self) -> bool:
        return bool(self._config.get("required", False))

    @property
    def value(self) -> Any:
        return self._value

    def bind_type(self, type_name: str) -> "Field":
        """Report ``type_name`` as this field's type (used for registry aliases)."""
        self._type = type_name
        return self

    def use_media(self, media: Optional["MediaResolver"]) -> "Field":
        """Attach the media library consulted by media-aware fields."""
        self._media = media
        return self

    def set_value(self, value: Any) -> "Field":
        """Set the current value, coercing it to the field's native type."""
        self._value = self.coerce(value)
        return self

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Convert any input toward the field's native value type."""

    @abstractmethod
    def validate(self, value: Any) -> ValidationResult:
        """Check a proposed value without changing the field."""

    @abstractmethod
    def sanitize(self, value: Any) -> Any:
        """Clean a value for safe storage."""

    def required_error(self) -> ValidationResult:
        return ValidationResult.fail(
            self._id, ErrorKind.REQUIRED, f'The field "{self.label}" is required.'
        )

    def serialize(self) -> Dict[str, Any]:
        """Describe the field for API clients. Performs no lookups."""
        return {
            "id": self._id,
            "type": self._type,
            "config": self.config,
            "value": self._value,
        }

    def resolve_display_data(self, media: Optional["MediaResolver"]) -> Dict[str, Any]:
        """Return extra display data resolved from external collaborators.

        Args:
            media: Media library used to look up attachments, if any.

        Returns:
            Keys to merge into the serialized field. Empty by default.
        """
        return {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, value={self._value!r})"
