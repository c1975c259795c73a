"""Pydantic models for the settings REST API.

These models define the page and field descriptors consumed by form
clients, and the error body returned for every failure.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..fields import Field as SettingsField
from ..media import MediaResolver
from ..page import Page


class FieldDescriptor(BaseModel):
    """One field of a page, with any variant-specific extras.

    Image fields add ``image_data`` describing the selected attachment.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    type: str
    config: Dict[str, Any] = Field(default_factory=dict)
    value: Any = None


class PageDescriptor(BaseModel):
    """A page and its fields in display order."""

    id: str
    title: str
    menu_title: str
    capability: str
    fields: List[FieldDescriptor] = Field(default_factory=list)


class PageListResponse(BaseModel):
    """Pages visible to the caller."""

    pages: List[PageDescriptor]
    total: int


class ErrorResponse(BaseModel):
    """Error body for all API failures."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)
    errors: Optional[Dict[str, str]] = Field(
        default=None, description="Per-field messages for validation failures"
    )


def describe_field(field: SettingsField, media: Optional[MediaResolver]) -> FieldDescriptor:
    """Serialize a field and merge its resolved display data."""
    data = field.serialize()
    data.update(field.resolve_display_data(media))
    return FieldDescriptor(**data)


def describe_page(page: Page, media: Optional[MediaResolver]) -> PageDescriptor:
    """Serialize a page, resolving display data for each field."""
    data = page.serialize()
    data["fields"] = [describe_field(field, media) for field in page.fields.values()]
    return PageDescriptor(**data)
