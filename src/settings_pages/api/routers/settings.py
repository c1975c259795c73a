"""Settings read/write endpoints."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from ...builder import SettingsPages
from ...errors import InvalidPayloadError, PersistenceError, SettingsValidationError
from ...page import Page
from ...service import validate_and_sanitize
from ..contracts import ErrorResponse
from ..dependencies import get_accessible_page, get_settings_pages

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """Decode the request body as a JSON object.

    Raises:
        InvalidPayloadError: If the body is not valid JSON or not an object.
    """
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidPayloadError()
    if not isinstance(payload, dict):
        raise InvalidPayloadError()
    return payload


@router.get("/{page_id}", response_model=Dict[str, Any], responses=ERROR_RESPONSES)
async def get_page_settings(
    page: Page = Depends(get_accessible_page),
    pages: SettingsPages = Depends(get_settings_pages),
):
    """Get the stored settings of a page."""
    return pages.service.get_settings(page.id)


@router.api_route(
    "/{page_id}",
    methods=["PUT", "POST"],
    response_model=Dict[str, Any],
    responses={**ERROR_RESPONSES, 500: {"model": ErrorResponse}},
)
async def update_page_settings(
    request: Request,
    page: Page = Depends(get_accessible_page),
    pages: SettingsPages = Depends(get_settings_pages),
):
    """Validate, sanitize and save a page's settings.

    Every field of the page is validated; if any fails, nothing is saved
    and all field errors are returned together.
    """
    submitted = await _read_json_object(request)

    sanitized, errors = validate_and_sanitize(page, submitted)
    if errors:
        messages = {field_id: error.message for field_id, error in errors.items()}
        logger.info(f"Rejected settings for page '{page.id}': {sorted(messages)}")
        raise SettingsValidationError(page.id, messages)

    if not pages.service.save_settings(page.id, sanitized):
        raise PersistenceError(page.id)

    return sanitized
