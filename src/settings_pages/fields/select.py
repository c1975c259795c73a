"""Select field."""

from typing import Any, Dict

from .base import ErrorKind, Field, FieldType, ValidationResult, is_empty


class SelectField(Field):
    """Dropdown restricted to a fixed set of options.

    ``options`` maps stored values to display labels; a plain list is
    accepted and used for both. Values outside the options fail validation
    and are clamped to the configured default by ``sanitize``.
    """

    type_name = FieldType.SELECT.value
    defaults = {
        "label": "",
        "description": "",
        "default": "",
        "options": {},
        "required": False,
    }

    def prepare_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        options = config.get("options") or {}
        if isinstance(options, dict):
            config["options"] = {str(key): label for key, label in options.items()}
        else:
            config["options"] = {str(option): str(option) for option in options}
        return config

    @property
    def options(self) -> Dict[str, Any]:
        return dict(self._config["options"])

    def coerce(self, value: Any) -> str:
        return "" if value is None else str(value)

    def validate(self, value: Any) -> ValidationResult:
        if is_empty(value) and not self._is_option(value):
            if self.required:
                return self.required_error()
            return ValidationResult.ok(self.id)

        if not self._is_option(value):
            return ValidationResult.fail(
                self.id,
                ErrorKind.INVALID_CHOICE,
                f'"{value}" is not a valid choice for "{self.label}".',
            )
        return ValidationResult.ok(self.id)

    def sanitize(self, value: Any) -> str:
        if self._is_option(value):
            return self.coerce(value)
        return self.coerce(self._config.get("default"))

    def _is_option(self, value: Any) -> bool:
        if value is None or isinstance(value, (list, dict, bool)):
            return False
        return str(value) in self._config["options"]
