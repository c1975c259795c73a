"""Declarative settings pages.

Host code registers pages made of typed fields; values are validated,
sanitized and persisted per page, and served to form clients through a
JSON API (see ``settings_pages.api``).

Example usage:
    from settings_pages import SettingsPages

    pages = SettingsPages()
    pages.register_page("general", title="General")
    pages.add_field("general", "checkbox", "flag", label="Flag", default=False)

    pages.get_setting("general", "flag", False)
"""

__version__ = "0.1.0"

from .builder import SettingsPages
from .errors import (
    DuplicateFieldError,
    DuplicatePageError,
    ForbiddenError,
    InvalidFieldTypeError,
    InvalidPayloadError,
    PageNotFoundError,
    PersistenceError,
    SettingsPagesError,
    SettingsValidationError,
    UnknownFieldTypeError,
)
from .fields import (
    CheckboxField,
    ErrorKind,
    Field,
    FieldError,
    FieldType,
    ImageField,
    SelectField,
    TextareaField,
    TextField,
    ValidationResult,
)
from .media import MediaAttachment, MediaLibrary
from .page import Page
from .registry import FieldTypeRegistry, PageRegistry
from .service import SettingsService, validate_and_sanitize
from .storage import MemoryBackend, SettingsStore, SqlBackend, YamlBackend

__all__ = [
    "__version__",
    # Bootstrap
    "SettingsPages",
    # Fields
    "Field",
    "FieldType",
    "FieldError",
    "ErrorKind",
    "ValidationResult",
    "TextField",
    "TextareaField",
    "SelectField",
    "CheckboxField",
    "ImageField",
    # Pages and registries
    "Page",
    "PageRegistry",
    "FieldTypeRegistry",
    # Persistence
    "SettingsService",
    "SettingsStore",
    "MemoryBackend",
    "YamlBackend",
    "SqlBackend",
    "validate_and_sanitize",
    # Media
    "MediaAttachment",
    "MediaLibrary",
    # Errors
    "SettingsPagesError",
    "UnknownFieldTypeError",
    "InvalidFieldTypeError",
    "PageNotFoundError",
    "DuplicatePageError",
    "DuplicateFieldError",
    "InvalidPayloadError",
    "ForbiddenError",
    "SettingsValidationError",
    "PersistenceError",
]
