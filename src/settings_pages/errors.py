"""Error types for settings pages.

These exceptions provide consistent error handling across the registries,
the settings service and the REST layer. Each error type carries a
machine-readable code and the HTTP status the API maps it to.
"""


class SettingsPagesError(Exception):
    """Base exception for all settings-pages errors."""

    code = "SETTINGS_PAGES_ERROR"
    status_code = 500

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Return the error body sent to API clients."""
        return {"code": self.code, "message": self.message, "details": self.details}


class UnknownFieldTypeError(SettingsPagesError):
    """Raised when a field type tag is not registered.

    HTTP: 500 Internal Server Error
    """

    code = "UNKNOWN_FIELD_TYPE"

    def __init__(self, type_name: str, available_types: list = None):
        message = f"Field type '{type_name}' is not registered"
        details = {"type": type_name}
        if available_types:
            details["available_types"] = available_types
            message += f". Available: {', '.join(available_types)}"
        super().__init__(message, details)
        self.type_name = type_name


class InvalidFieldTypeError(SettingsPagesError):
    """Raised when a factory registered for a type does not produce Fields."""

    code = "INVALID_FIELD_TYPE"

    def __init__(self, type_name: str, reason: str):
        message = f"Invalid factory for field type '{type_name}': {reason}"
        super().__init__(message, {"type": type_name, "reason": reason})
        self.type_name = type_name


class PageNotFoundError(SettingsPagesError):
    """Raised when a requested page does not exist.

    HTTP: 404 Not Found
    """

    code = "PAGE_NOT_FOUND"
    status_code = 404

    def __init__(self, page_id: str):
        super().__init__(f"Settings page not found: {page_id}", {"page": page_id})
        self.page_id = page_id


class DuplicatePageError(SettingsPagesError):
    """Raised when a page id is registered twice without ``replace=True``."""

    code = "DUPLICATE_PAGE"

    def __init__(self, page_id: str):
        super().__init__(f"Page '{page_id}' already registered", {"page": page_id})
        self.page_id = page_id


class DuplicateFieldError(SettingsPagesError):
    """Raised when a field id is added twice to the same page."""

    code = "DUPLICATE_FIELD"

    def __init__(self, page_id: str, field_id: str):
        super().__init__(
            f"Field '{field_id}' already exists on page '{page_id}'",
            {"page": page_id, "field": field_id},
        )
        self.page_id = page_id
        self.field_id = field_id


class InvalidPayloadError(SettingsPagesError):
    """Raised when a request body is not a JSON object.

    HTTP: 400 Bad Request
    """

    code = "INVALID_PAYLOAD"
    status_code = 400

    def __init__(self, message: str = "Invalid settings data provided."):
        super().__init__(message)


class ForbiddenError(SettingsPagesError):
    """Raised when the caller lacks the capability a page requires.

    HTTP: 403 Forbidden
    """

    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, page_id: str, capability: str):
        super().__init__(
            "Sorry, you are not allowed to access this settings page.",
            {"page": page_id, "capability": capability},
        )
        self.page_id = page_id
        self.capability = capability


class SettingsValidationError(SettingsPagesError):
    """Raised when one or more submitted field values fail validation.

    HTTP: 400 Bad Request
    """

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, page_id: str, errors: dict):
        super().__init__(
            "Validation failed for one or more fields.",
            {"page": page_id, "errors": errors},
        )
        self.page_id = page_id
        self.errors = errors

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["errors"] = dict(self.errors)
        return body


class PersistenceError(SettingsPagesError):
    """Raised when the storage backend refuses a write.

    HTTP: 500 Internal Server Error
    """

    code = "PERSISTENCE_ERROR"

    def __init__(self, page_id: str):
        super().__init__(
            "Failed to save settings. Please try again.", {"page": page_id}
        )
        self.page_id = page_id
