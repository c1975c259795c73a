"""Page descriptor endpoints used by form clients to render settings pages."""

from fastapi import APIRouter, Depends, Query

from ...builder import SettingsPages
from ...errors import PageNotFoundError
from ...page import Page
from ..auth import Principal, ensure_capability, get_current_principal
from ..contracts import ErrorResponse, PageDescriptor, PageListResponse, describe_page
from ..dependencies import get_accessible_page, get_settings_pages

router = APIRouter(prefix="/pages", tags=["pages"])


def _hydrated(pages: SettingsPages, page: Page) -> PageDescriptor:
    pages.service.get_settings(page.id)
    return describe_page(page, pages.media)


@router.get("", response_model=PageListResponse)
async def list_pages(
    principal: Principal = Depends(get_current_principal),
    pages: SettingsPages = Depends(get_settings_pages),
):
    """List the pages the caller may access, with current values."""
    visible = [
        _hydrated(pages, page)
        for page in pages.pages.get_pages()
        if principal.can(page.capability)
    ]
    return PageListResponse(pages=visible, total=len(visible))


@router.get(
    "/current",
    response_model=PageDescriptor,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_current_page(
    route: str = Query(description="Host route key, e.g. settings_page_<id>."),
    principal: Principal = Depends(get_current_principal),
    pages: SettingsPages = Depends(get_settings_pages),
):
    """Describe the page registered for a host route."""
    current = pages.pages.get_current_page(route)
    if current is None:
        raise PageNotFoundError(route)

    page = pages.pages.require_page(current["id"])
    ensure_capability(principal, page)
    return _hydrated(pages, page)


@router.get(
    "/{page_id}",
    response_model=PageDescriptor,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_page(
    page: Page = Depends(get_accessible_page),
    pages: SettingsPages = Depends(get_settings_pages),
):
    """Describe one page with its fields and current values."""
    return _hydrated(pages, page)
