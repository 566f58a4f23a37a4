"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers. The chain is
header → extract_bearer_token → IdentityResolver.resolve → Identity.
Nothing in the chain touches the task store, so an unauthenticated
request is rejected before any query runs.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, Request

from taskbox.auth.credentials import extract_bearer_token
from taskbox.auth.identity import AuthError, Identity, IdentityResolver
from taskbox.errors import Unauthenticated

logger = structlog.get_logger()


def get_identity_resolver(request: Request) -> IdentityResolver:
    """The resolver built at startup (see create_app)."""
    return request.app.state.identity_resolver


async def get_current_identity_optional(
    authorization: Optional[str] = Header(None),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[Identity]:
    """Resolve the caller, or None when there is no usable credential."""
    token = extract_bearer_token(authorization)
    if token is None:
        return None
    try:
        return await resolver.resolve(token)
    except AuthError as e:
        logger.info("auth.rejected", reason=str(e))
        return None


async def get_current_identity(
    identity: Optional[Identity] = Depends(get_current_identity_optional),
) -> Identity:
    """Extract current identity (required — 401 if no auth)."""
    if identity is None:
        raise Unauthenticated()
    return identity
