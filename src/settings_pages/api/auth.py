"""Bearer-token authentication and capability checks."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import FrozenSet, Iterable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..errors import ForbiddenError
from ..page import Page

logger = logging.getLogger(__name__)

# JWT settings
ALGORITHM = "HS256"

# Grants every capability
WILDCARD_CAPABILITY = "*"

# Security scheme; missing headers are reported as 401 below
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller.

    Attributes:
        subject: Unique identifier from the token's ``sub`` claim.
        name: Human-readable name.
        capabilities: Capability strings granted to the caller.
    """

    subject: str
    name: str = ""
    capabilities: FrozenSet[str] = field(default_factory=frozenset)

    def can(self, capability: str) -> bool:
        return WILDCARD_CAPABILITY in self.capabilities or capability in self.capabilities


def create_access_token(
    subject: str,
    capabilities: Iterable[str],
    secret_key: str,
    name: str = "",
    expires_delta: Optional[timedelta] = None,
    extra_claims: dict = None,
) -> str:
    """Create a JWT access token.

    Args:
        subject: Unique identifier of the caller.
        capabilities: Capabilities granted by the token.
        secret_key: Signing key.
        name: Human-readable name.
        expires_delta: Token lifetime (default 60 minutes).
        extra_claims: Additional claims to include.

    Returns:
        Encoded JWT token
    """
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": subject,
        "name": name,
        "capabilities": sorted(set(capabilities)),
        "iat": now,
        "exp": now + (expires_delta or timedelta(minutes=60)),
    }
    if extra_claims:
        to_encode.update(extra_claims)

    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_token(token: str, secret_key: str) -> Principal:
    """Decode and validate a JWT token.

    Args:
        token: JWT token string
        secret_key: Signing key.

    Returns:
        The principal described by the token.

    Raises:
        HTTPException: If token is invalid or expired
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {e}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    subject = payload.get("sub")
    capabilities = payload.get("capabilities") or []
    if not subject or not isinstance(capabilities, list):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Principal(
        subject=subject,
        name=payload.get("name") or "",
        capabilities=frozenset(str(capability) for capability in capabilities),
    )


async def get_current_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Dependency resolving the bearer token into a Principal."""
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return decode_token(credentials.credentials, request.app.state.settings.secret_key)


def ensure_capability(principal: Principal, page: Page) -> None:
    """Check that the caller may read and write a page's settings.

    Raises:
        ForbiddenError: If the principal lacks the page's capability.
    """
    if not principal.can(page.capability):
        logger.info(
            f"Denied '{principal.subject}' access to page '{page.id}' "
            f"(needs '{page.capability}')"
        )
        raise ForbiddenError(page.id, page.capability)
