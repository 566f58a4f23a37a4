"""Authentication.

Learn: Taskbox never stores passwords. A bearer token is pulled off the
request and handed to an external identity provider, which answers with
the caller's identity (or refuses). Everything downstream only uses
Identity.id for ownership checks.

Two providers ship:
1. JwtIdentityResolver → verify the provider's signed token locally
2. SupabaseIdentityResolver → ask the provider's /auth/v1/user endpoint
"""

from taskbox.auth.credentials import extract_bearer_token
from taskbox.auth.identity import (
    AuthError,
    Identity,
    IdentityResolver,
    JwtIdentityResolver,
    SupabaseIdentityResolver,
    build_identity_resolver,
)

__all__ = [
    "AuthError",
    "Identity",
    "IdentityResolver",
    "JwtIdentityResolver",
    "SupabaseIdentityResolver",
    "build_identity_resolver",
    "extract_bearer_token",
]
