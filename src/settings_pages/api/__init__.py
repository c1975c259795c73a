"""REST API for settings pages."""

from .app import create_app
from .auth import Principal, create_access_token, decode_token, ensure_capability

__all__ = [
    "create_app",
    "Principal",
    "create_access_token",
    "decode_token",
    "ensure_capability",
]
