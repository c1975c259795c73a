"""Settings read/write service.

``SettingsService`` ties registered pages to their persisted blobs. It
hydrates field values on read and persists already-validated values on
write; validation policy belongs to the caller (the REST layer), which
uses ``validate_and_sanitize`` before ``save_settings``.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Tuple

from .fields import FieldError
from .page import Page
from .registry import PageRegistry
from .storage import SettingsStore

logger = logging.getLogger(__name__)

# (values, page_id) -> values to persist
BeforeSaveFilter = Callable[[Dict[str, Any], str], Dict[str, Any]]

# (saved_values, page_id) -> None
SavedListener = Callable[[Dict[str, Any], str], None]


def validate_and_sanitize(
    page: Page, values: Mapping[str, Any]
) -> Tuple[Dict[str, Any], Dict[str, FieldError]]:
    """Validate and sanitize submitted values against a page's fields.

    Every declared field is checked, using None for values that were not
    submitted. Keys that are not fields of the page are dropped.

    Args:
        page: The page whose fields define the schema.
        values: Submitted field id -> value mapping.

    Returns:
        Tuple of (sanitized values, errors by field id). When errors is
        non-empty the sanitized values are incomplete and must not be saved.
    """
    sanitized: Dict[str, Any] = {}
    errors: Dict[str, FieldError] = {}

    for field_id, field in page.fields.items():
        value = values.get(field_id)
        result = field.validate(value)
        if not result.valid:
            errors[field_id] = result.error
            continue
        sanitized[field_id] = field.sanitize(value)

    return sanitized, errors


class SettingsService:
    """Reads, hydrates and persists page settings.

    Example:
        service = SettingsService(pages, SettingsStore(MemoryBackend()))
        service.on_saved(lambda values, page_id: print(page_id, values))
        service.save_settings("general", {"site_name": "My site"})
        service.get_setting("general", "site_name")  # "My site"
    """

    def __init__(self, pages: PageRegistry, store: SettingsStore):
        """Initialize the service.

        Args:
            pages: Registry used to find the fields to hydrate.
            store: Persistence for page blobs.
        """
        self._pages = pages
        self._store = store
        self._before_save: List[BeforeSaveFilter] = []
        self._saved_listeners: List[SavedListener] = []

    @property
    def store(self) -> SettingsStore:
        return self._store

    # ─────────────────────────────────────────────────────────────────
    # Reading
    # ─────────────────────────────────────────────────────────────────

    def get_settings(self, page_id: str) -> Dict[str, Any]:
        """Get the stored settings of a page.

        Fields declared on the page that have a stored value are hydrated
        with it. The returned mapping is the stored blob as is: keys missing
        from storage are not filled with defaults, and stale keys are kept.

        Args:
            page_id: Page identifier.

        Returns:
            Stored field id -> value mapping (empty if nothing is stored).
        """
        settings = self._store.load(page_id)

        page = self._pages.get_page(page_id)
        if page is not None:
            for field_id, field in page.fields.items():
                if field_id in settings:
                    field.set_value(settings[field_id])

        return settings

    def get_setting(self, page_id: str, field_id: str, default: Any = None) -> Any:
        """Get one stored value, or ``default`` if it is not stored."""
        return self.get_settings(page_id).get(field_id, default)

    def has_settings(self, page_id: str) -> bool:
        return self._store.exists(page_id)

    # ─────────────────────────────────────────────────────────────────
    # Writing
    # ─────────────────────────────────────────────────────────────────

    def save_settings(self, page_id: str, values: Dict[str, Any]) -> bool:
        """Persist a page's settings, replacing what was stored.

        Values pass through the before-save filters first. Saved listeners
        are notified only when the store accepted the write.

        Args:
            page_id: Page identifier.
            values: Field id -> value mapping, already validated.

        Returns:
            True if the store accepted the write.
        """
        values = dict(values)
        for settings_filter in self._before_save:
            values = settings_filter(values, page_id)
            if not isinstance(values, dict):
                raise TypeError(
                    f"Before-save filter {settings_filter!r} must return a dict, "
                    f"got {type(values).__name__}"
                )

        result = self._store.save(page_id, values)
        if not result:
            logger.error(f"Store rejected settings for page '{page_id}'")
            return False

        logger.info(f"Saved {len(values)} settings for page '{page_id}'")
        self._emit_saved(values, page_id)
        return True

    def delete_settings(self, page_id: str) -> bool:
        result = self._store.delete(page_id)
        if result:
            logger.info(f"Deleted settings for page '{page_id}'")
        return result

    # ─────────────────────────────────────────────────────────────────
    # Hooks
    # ─────────────────────────────────────────────────────────────────

    def add_before_save_filter(self, settings_filter: BeforeSaveFilter) -> None:
        """Register a transform applied to values before they are stored.

        Args:
            settings_filter: Function(values, page_id) returning the values
                to store.
        """
        self._before_save.append(settings_filter)

    def remove_before_save_filter(self, settings_filter: BeforeSaveFilter) -> None:
        if settings_filter in self._before_save:
            self._before_save.remove(settings_filter)

    def on_saved(self, callback: SavedListener) -> None:
        """Register a callback for successful saves.

        Args:
            callback: Function(saved_values, page_id) called after a write.
        """
        self._saved_listeners.append(callback)

    def remove_saved_listener(self, callback: SavedListener) -> None:
        if callback in self._saved_listeners:
            self._saved_listeners.remove(callback)

    def _emit_saved(self, values: Dict[str, Any], page_id: str) -> None:
        for listener in list(self._saved_listeners):
            try:
                listener(dict(values), page_id)
            except Exception as e:
                logger.warning(f"Settings saved listener error: {e}")
