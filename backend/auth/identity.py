"""
Request identity.

Every inbound request resolves to exactly one :data:`Identity`: either
:class:`Anonymous` or :class:`Authenticated`. Resolution never fails; a
missing, malformed or expired token simply yields ``Anonymous``. Handlers
that need a user call :func:`require_authenticated`.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

from jose import JWTError

from .jwt_service import verify_access_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Anonymous:
    is_authenticated = False


@dataclass(frozen=True)
class Authenticated:
    id: int
    username: str
    email: str

    is_authenticated = True


Identity = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()


class NotAuthenticated(Exception):
    """Raised when an operation needs an authenticated identity."""


def identity_from_token(token: Optional[str]) -> Identity:
    """Decode a session token into an identity."""
    if not token:
        return ANONYMOUS
    try:
        payload = verify_access_token(token)
        return Authenticated(
            id=int(payload["sub"]),
            username=payload["username"],
            email=payload.get("email", ""),
        )
    except (JWTError, KeyError, ValueError) as exc:
        logger.debug(f"Rejected session token: {exc}")
        return ANONYMOUS


def identity_from_header(authorization: Optional[str]) -> Identity:
    """Resolve an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return ANONYMOUS
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return ANONYMOUS
    return identity_from_token(token.strip())


def require_authenticated(identity: Identity) -> Authenticated:
    if not isinstance(identity, Authenticated):
        raise NotAuthenticated()
    return identity
