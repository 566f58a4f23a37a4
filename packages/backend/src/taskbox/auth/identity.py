"""Identity resolution — bearer token in, Identity out.

Learn: The resolver is a capability interface. TaskService and the
routes only see IdentityResolver.resolve(), so swapping the provider is
a settings change, not a code change.

Both "token is bad" and "provider is down" surface as AuthError. The
caller cannot tell them apart, and neither can the HTTP response.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import httpx
import structlog

from taskbox.auth.jwt import TokenError, verify_token
from taskbox.config import Settings

logger = structlog.get_logger()


class AuthError(Exception):
    """Raised when a token cannot be resolved to an identity."""


@dataclass(frozen=True)
class Identity:
    """The authenticated caller. Only ``id`` takes part in ownership."""

    id: str
    email: Optional[str] = None
    claims: dict[str, Any] = field(default_factory=dict, compare=False)


class IdentityResolver(Protocol):
    async def resolve(self, token: str) -> Identity:
        """Return the identity behind ``token`` or raise AuthError."""
        ...

    async def aclose(self) -> None:
        ...


class JwtIdentityResolver:
    """Verify provider-signed JWTs locally (no network round trip)."""

    def __init__(self, secret: str, algorithm: str = "HS256", audience: str = ""):
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience

    async def resolve(self, token: str) -> Identity:
        try:
            payload = verify_token(
                token,
                secret=self.secret,
                algorithm=self.algorithm,
                audience=self.audience,
            )
        except TokenError as e:
            raise AuthError(str(e)) from e

        sub = payload.get("sub")
        if not isinstance(sub, str) or not sub:
            raise AuthError("Token has no subject")
        return Identity(id=sub, email=payload.get("email"), claims=payload)

    async def aclose(self) -> None:
        pass


class SupabaseIdentityResolver:
    """Ask Supabase GoTrue who owns the token (GET /auth/v1/user).

    Learn: One shared httpx.AsyncClient keeps the connection pool warm
    across requests. No retries — a failed lookup is an AuthError now.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout
        )

    async def resolve(self, token: str) -> Identity:
        try:
            resp = await self._client.get(
                "/auth/v1/user",
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {token}",
                },
            )
        except httpx.HTTPError as e:
            logger.warning("auth.provider_unreachable", error=str(e))
            raise AuthError("Identity provider unreachable") from e

        if resp.status_code != 200:
            raise AuthError(f"Identity provider rejected token ({resp.status_code})")

        try:
            user = resp.json()
        except ValueError as e:
            raise AuthError("Identity provider returned malformed user") from e

        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise AuthError("Identity provider returned malformed user")
        return Identity(id=user_id, email=user.get("email"), claims=user)

    async def aclose(self) -> None:
        await self._client.aclose()


def build_identity_resolver(settings: Settings) -> IdentityResolver:
    """Build the resolver selected by TASKBOX_IDENTITY_PROVIDER."""
    if settings.identity_provider == "supabase":
        return SupabaseIdentityResolver(
            base_url=settings.supabase_url,
            api_key=settings.supabase_service_role_key,
            timeout=settings.identity_timeout_seconds,
        )
    return JwtIdentityResolver(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        audience=settings.jwt_audience,
    )
