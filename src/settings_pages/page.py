"""Settings page model."""

import re
from typing import Any, Dict, List, Optional

from .errors import DuplicateFieldError
from .fields import Field

ROUTE_PREFIX = "settings_page_"
DEFAULT_CAPABILITY = "manage_options"

# Page ids are URL segments
PAGE_ID_PATTERN = r"^[\w-]+$"
_PAGE_ID_RE = re.compile(PAGE_ID_PATTERN)

# Taken by static API routes (/pages/current)
RESERVED_PAGE_IDS = frozenset({"current"})


class Page:
    """A named, access-controlled collection of fields.

    The page id doubles as the storage key suffix and URL segment. Fields
    keep their insertion order, which is also their display order.

    Example:
        page = Page("general", title="General", capability="manage_options")
        page.add_field(TextField("site_name", {"label": "Site name"}))
    """

    def __init__(
        self,
        page_id: str,
        title: str = "",
        menu_title: str = "",
        capability: str = DEFAULT_CAPABILITY,
    ):
        """Create a page.

        Args:
            page_id: Unique page identifier.
            title: Page title.
            menu_title: Short label; falls back to the title.
            capability: Capability required to read or write the settings.

        Raises:
            ValueError: If the id is empty, is not a valid URL segment, or
                is reserved.
        """
        if not page_id:
            raise ValueError("Page id must not be empty")
        if not _PAGE_ID_RE.fullmatch(page_id):
            raise ValueError(
                f"Invalid page id {page_id!r}: use letters, digits, underscores and hyphens"
            )
        if page_id in RESERVED_PAGE_IDS:
            raise ValueError(f"Page id {page_id!r} is reserved")
        self._id = page_id
        self._title = title
        self._menu_title = menu_title
        self._capability = capability or DEFAULT_CAPABILITY
        self._fields: Dict[str, Field] = {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @property
    def menu_title(self) -> str:
        return self._menu_title or self._title

    @property
    def capability(self) -> str:
        return self._capability

    @property
    def route_key(self) -> str:
        """Route identifier the host uses for this page's screen."""
        return f"{ROUTE_PREFIX}{self._id}"

    @property
    def fields(self) -> Dict[str, Field]:
        return dict(self._fields)

    def add_field(self, field: Field) -> "Page":
        """Attach a field after the existing ones.

        Raises:
            DuplicateFieldError: If a field with the same id is present.
        """
        if field.id in self._fields:
            raise DuplicateFieldError(self._id, field.id)
        self._fields[field.id] = field
        return self

    def get_field(self, field_id: str) -> Optional[Field]:
        return self._fields.get(field_id)

    def has_field(self, field_id: str) -> bool:
        return field_id in self._fields

    def serialize(self) -> Dict[str, Any]:
        """Describe the page and its fields for API clients."""
        fields: List[Dict[str, Any]] = [field.serialize() for field in self._fields.values()]
        return {
            "id": self._id,
            "title": self.title,
            "menu_title": self.menu_title,
            "capability": self._capability,
            "fields": fields,
        }

    def __repr__(self) -> str:
        return f"Page(id={self._id!r}, fields={list(self._fields)!r})"
