"""Registries of field types and settings pages.

Both registries are plain objects owned by whoever bootstraps the
application (see ``SettingsPages``). They are filled during a registration
phase at startup and only read afterwards.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Union

from .errors import (
    DuplicatePageError,
    InvalidFieldTypeError,
    PageNotFoundError,
    UnknownFieldTypeError,
)
from .fields import BUILTIN_FIELDS, Field
from .media import MediaResolver
from .page import Page

logger = logging.getLogger(__name__)

# A Field subclass, or any callable (field_id, config) -> Field
FieldFactory = Callable[[str, Dict[str, Any]], Field]


class FieldTypeRegistry:
    """Maps field type tags to the factories that build them.

    The five built-in types are registered on construction; hosts may add
    their own tags or replace a built-in before pages are registered.

    Example:
        registry = FieldTypeRegistry()
        registry.register("email", EmailField)
        field = registry.create_field("email", "contact", {"label": "Contact"})
    """

    def __init__(self, media: Optional[MediaResolver] = None):
        """Initialize the registry with the built-in field types.

        Args:
            media: Media library attached to every created field.
        """
        self._media = media
        self._factories: Dict[str, FieldFactory] = {}
        for field_type, field_class in BUILTIN_FIELDS.items():
            self.register(field_type.value, field_class)

    def register(self, type_name: str, factory: Union[type, FieldFactory]) -> "FieldTypeRegistry":
        """Register a field type.

        Args:
            type_name: Tag used in page definitions (e.g., "color").
            factory: Field subclass or callable producing a Field.

        Returns:
            The registry, for chaining.

        Raises:
            InvalidFieldTypeError: If the factory cannot produce Fields.
        """
        if not type_name:
            raise InvalidFieldTypeError(str(type_name), "type name must not be empty")
        if isinstance(factory, type):
            if not issubclass(factory, Field):
                raise InvalidFieldTypeError(
                    type_name, f"{factory.__name__} must subclass Field"
                )
            if getattr(factory, "__abstractmethods__", None):
                missing = ", ".join(sorted(factory.__abstractmethods__))
                raise InvalidFieldTypeError(
                    type_name, f"{factory.__name__} does not implement: {missing}"
                )
        elif not callable(factory):
            raise InvalidFieldTypeError(type_name, "factory is not callable")

        if type_name in self._factories:
            logger.debug(f"Replacing factory for field type '{type_name}'")
        self._factories[type_name] = factory
        return self

    def has_field(self, type_name: str) -> bool:
        return type_name in self._factories

    def get_fields(self) -> Dict[str, FieldFactory]:
        """Get all registered factories keyed by type tag."""
        return dict(self._factories)

    def create_field(
        self,
        type_name: str,
        field_id: str,
        config: Optional[Dict[str, Any]] = None,
    ) -> Field:
        """Create a field of a registered type.

        Args:
            type_name: Registered type tag.
            field_id: Identifier, unique within its page.
            config: Field configuration options.

        Returns:
            The new field, reporting ``type_name`` as its type.

        Raises:
            UnknownFieldTypeError: If the type is not registered.
            InvalidFieldTypeError: If the factory returns something else
                than a Field.
        """
        factory = self._factories.get(type_name)
        if factory is None:
            raise UnknownFieldTypeError(type_name, sorted(self._factories))

        field = factory(field_id, dict(config or {}))
        if not isinstance(field, Field):
            raise InvalidFieldTypeError(
                type_name, f"factory returned {type(field).__name__}, not a Field"
            )
        field.bind_type(type_name)
        if self._media is not None:
            field.use_media(self._media)
        return field


class PageRegistry:
    """Collection of settings pages keyed by id.

    The registry is the single source of truth for which pages and fields
    exist. Pages keep their registration order.
    """

    def __init__(self, current_route: Optional[Callable[[], Optional[str]]] = None):
        """Initialize an empty registry.

        Args:
            current_route: Returns the host's current route key, used by
                ``get_current_page`` when no key is passed.
        """
        self._pages: Dict[str, Page] = {}
        self._current_route = current_route

    def register(self, page: Page, replace: bool = False) -> "PageRegistry":
        """Register a page.

        Args:
            page: The page to register.
            replace: Overwrite a page already registered under the same id.

        Returns:
            The registry, for chaining.

        Raises:
            DuplicatePageError: If the id is taken and ``replace`` is False.
        """
        if page.id in self._pages and not replace:
            raise DuplicatePageError(page.id)
        self._pages[page.id] = page
        logger.debug(f"Registered settings page: {page.id}")
        return self

    def get_page(self, page_id: str) -> Optional[Page]:
        return self._pages.get(page_id)

    def require_page(self, page_id: str) -> Page:
        """Get a page or raise ``PageNotFoundError``."""
        page = self._pages.get(page_id)
        if page is None:
            raise PageNotFoundError(page_id)
        return page

    def has_page(self, page_id: str) -> bool:
        return page_id in self._pages

    def get_pages(self) -> List[Page]:
        """Get all pages in registration order."""
        return list(self._pages.values())

    def is_options_page(self, route_key: str) -> bool:
        """Check whether a route key belongs to one of the registered pages."""
        return self._find_by_route(route_key) is not None

    def get_current_page(self, route_key: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """Serialize the page matching the current route.

        Args:
            route_key: Route to match. Defaults to the value reported by the
                ``current_route`` provider.

        Returns:
            The serialized page, or None if the route is not a settings page.
        """
        if route_key is None and self._current_route is not None:
            route_key = self._current_route()
        if not route_key:
            return None
        page = self._find_by_route(route_key)
        return page.serialize() if page is not None else None

    def _find_by_route(self, route_key: str) -> Optional[Page]:
        for page in self._pages.values():
            if page.route_key == route_key:
                return page
        return None

    def __len__(self) -> int:
        return len(self._pages)
