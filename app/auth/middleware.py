# =============================================================================
# app/auth/middleware.py - Auth Context Middleware
# =============================================================================
# Verifies the bearer token on every request and attaches the resulting
# AuthUser (or None) to request.state.auth. It never rejects a request;
# routes that need a user enforce it through the dependencies in
# app/auth/dependencies.py.
#
# Supports both:
# - ES256 (new Supabase JWT signing keys) via JWKS
# - HS256 (legacy Supabase JWT secret) as fallback
# =============================================================================

import logging
import time
from uuid import UUID

import httpx
from jose import jwt
from jose.exceptions import JOSEError, JWTError
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from app.auth.models import AuthUser
from app.config import Settings

logger = logging.getLogger(__name__)

AUTH_STATE_KEY = "auth"
TOKEN_AUDIENCE = "authenticated"

# Cache for JWKS keys
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600  # 1 hour


def _get_jwks_url(settings: Settings) -> str:
    """Get the JWKS URL from the Supabase URL."""
    supabase_url = settings.SUPABASE_URL.rstrip('/')
    return f"{supabase_url}/auth/v1/.well-known/jwks.json"


def _fetch_jwks(settings: Settings) -> dict:
    """Fetch JWKS from Supabase with caching."""
    global _jwks_cache, _jwks_cache_time

    current_time = time.time()

    if _jwks_cache and (current_time - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    try:
        jwks_url = _get_jwks_url(settings)
        response = httpx.get(jwks_url, timeout=10)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = current_time
        logger.debug(f"Fetched JWKS from {jwks_url}")
        return _jwks_cache
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Failed to fetch JWKS: {e}")
        # Return cached even if expired, as fallback
        if _jwks_cache:
            return _jwks_cache
        return {"keys": []}


def _get_signing_key(token: str, settings: Settings) -> tuple[dict | str | None, str]:
    """
    Get the appropriate signing key for a token.

    Returns:
        Tuple of (key, algorithm) to use for verification
    """
    unverified_header = jwt.get_unverified_header(token)

    alg = unverified_header.get("alg", "HS256")
    kid = unverified_header.get("kid")

    if alg == "HS256":
        return settings.SUPABASE_JWT_SECRET, "HS256"

    if kid:
        for key in _fetch_jwks(settings).get("keys", []):
            if key.get("kid") == kid:
                return key, alg

    logger.warning(f"Could not find key for alg={alg}, kid={kid}, falling back to HS256")
    return settings.SUPABASE_JWT_SECRET, "HS256"


def verify_token(token: str, settings: Settings) -> AuthUser:
    """
    Verify a Supabase access token and return its user.

    Raises:
        JWTError: If the token is malformed, expired, badly signed,
            or has no usable subject
    """
    signing_key, algorithm = _get_signing_key(token, settings)
    if not signing_key:
        raise JWTError("No signing key configured")

    payload = jwt.decode(
        token,
        signing_key,
        algorithms=[algorithm],
        audience=TOKEN_AUDIENCE,
    )

    user_id = payload.get("sub")
    if not user_id:
        raise JWTError("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        raise JWTError(f"Invalid token: malformed user ID {user_id}")

    return AuthUser(id=user_uuid, email=payload.get("email"))


class AuthContextMiddleware:
    """Attach the verified bearer-token user (or None) to every request."""

    def __init__(self, app: ASGIApp, settings: Settings):
        self.app = app
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] in ("http", "websocket"):
            state = scope.setdefault("state", {})
            state[AUTH_STATE_KEY] = await self._resolve(scope)

        await self.app(scope, receive, send)

    async def _resolve(self, scope: Scope) -> AuthUser | None:
        authorization = Headers(scope=scope).get("authorization", "")
        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return None

        try:
            user = await run_in_threadpool(verify_token, token, self.settings)
        except JOSEError as e:
            logger.debug(f"Ignoring invalid bearer token: {e}")
            return None

        logger.debug(f"Authenticated user: {user.id}")
        return user
