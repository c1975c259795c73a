"""FastAPI dependencies shared by the routers."""

from fastapi import Depends, Path, Request

from ..builder import SettingsPages
from ..page import PAGE_ID_PATTERN, Page
from .auth import Principal, ensure_capability, get_current_principal


def get_settings_pages(request: Request) -> SettingsPages:
    """Dependency returning the application's SettingsPages container."""
    return request.app.state.settings_pages


def get_accessible_page(
    page_id: str = Path(pattern=PAGE_ID_PATTERN, description="Page identifier."),
    principal: Principal = Depends(get_current_principal),
    pages: SettingsPages = Depends(get_settings_pages),
) -> Page:
    """Resolve the page in the URL and check the caller's capability.

    Raises:
        PageNotFoundError: If the page is not registered (404).
        ForbiddenError: If the caller lacks the page capability (403).
    """
    page = pages.pages.require_page(page_id)
    ensure_capability(principal, page)
    return page
