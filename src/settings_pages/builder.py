"""Bootstrap object tying registries, storage and the settings service.

A ``SettingsPages`` instance is created once by the host at startup,
filled with pages during a registration phase, and then handed to the API
layer. Tests create one per test case.

Example usage:
    pages = SettingsPages()
    pages.register_page("general", title="General settings")
    pages.add_field("general", "text", "site_name", label="Site name", required=True)
    pages.add_field("general", "checkbox", "maintenance", label="Maintenance mode")

    pages.get_setting("general", "maintenance", False)
"""

import logging
from typing import Any, Callable, Dict, Optional

from .config import Settings
from .fields import Field
from .media import MediaLibrary, MediaResolver
from .page import DEFAULT_CAPABILITY, Page
from .registry import FieldTypeRegistry, PageRegistry
from .service import SettingsService
from .storage import (
    DEFAULT_PREFIX,
    KeyValueBackend,
    MemoryBackend,
    SettingsStore,
    SqlBackend,
    YamlBackend,
)

logger = logging.getLogger(__name__)


class SettingsPages:
    """Owns the field-type registry, page registry, store and service."""

    def __init__(
        self,
        backend: Optional[KeyValueBackend] = None,
        media: Optional[MediaResolver] = None,
        prefix: str = DEFAULT_PREFIX,
        current_route: Optional[Callable[[], Optional[str]]] = None,
    ):
        """Initialize the container.

        Args:
            backend: Key-value backend; defaults to an in-memory one.
            media: Media library used by image fields.
            prefix: Prefix of the backend key holding each page's settings.
            current_route: Provider of the host's current route key.
        """
        self.media = media if media is not None else MediaLibrary()
        self.field_types = FieldTypeRegistry(media=self.media)
        self.pages = PageRegistry(current_route=current_route)
        self.store = SettingsStore(backend if backend is not None else MemoryBackend(), prefix)
        self.service = SettingsService(self.pages, self.store)

    @classmethod
    def from_config(cls, settings: Settings) -> "SettingsPages":
        """Build a container with the backend selected in configuration."""
        if settings.storage_backend == "sql":
            backend = SqlBackend(settings.database_url, echo=settings.debug)
        elif settings.storage_backend == "yaml":
            backend = YamlBackend(settings.storage_path)
        else:
            backend = MemoryBackend()

        logger.info(f"Using {settings.storage_backend} settings storage")
        return cls(
            backend=backend,
            media=MediaLibrary.from_yaml(settings.media_manifest),
            prefix=settings.option_prefix,
        )

    def register_page(
        self,
        page_id: str,
        title: str = "",
        menu_title: str = "",
        capability: str = DEFAULT_CAPABILITY,
        replace: bool = False,
    ) -> Page:
        """Create and register a page.

        Raises:
            DuplicatePageError: If the id is taken and ``replace`` is False.
        """
        page = Page(page_id, title=title, menu_title=menu_title, capability=capability)
        self.pages.register(page, replace=replace)
        return page

    def add_field(self, page_id: str, type_name: str, field_id: str, **config: Any) -> Field:
        """Create a field of a registered type and attach it to a page.

        Raises:
            PageNotFoundError: If the page is not registered.
            UnknownFieldTypeError: If the type is not registered.
        """
        page = self.pages.require_page(page_id)
        field = self.field_types.create_field(type_name, field_id, config)
        page.add_field(field)
        return field

    def get_settings(self, page_id: str) -> Dict[str, Any]:
        return self.service.get_settings(page_id)

    def get_setting(self, page_id: str, field_id: str, default: Any = None) -> Any:
        return self.service.get_setting(page_id, field_id, default)
