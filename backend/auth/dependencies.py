"""
FastAPI dependencies for request identity.

Usage::

    from auth.dependencies import get_identity

    async def context_getter(identity: Identity = Depends(get_identity)):
        ...
"""

import logging
from typing import Optional

from fastapi import Header

from utils.audit import audit

from .identity import Authenticated, Identity, identity_from_header

logger = logging.getLogger(__name__)


async def get_identity(authorization: Optional[str] = Header(default=None)) -> Identity:
    """
    Resolve the ``Authorization: Bearer <token>`` header into an identity.

    Never raises: requests without a usable token proceed as anonymous and
    individual resolvers decide whether that is acceptable.
    """
    identity = identity_from_header(authorization)
    if isinstance(identity, Authenticated):
        audit.set_actor(f"user:{identity.id}")
    return identity
