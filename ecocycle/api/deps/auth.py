"""
Bearer-token authentication.

Tokens are HS256 JWTs issued by Supabase Auth; ``sub`` carries the user
id and ``aud`` must match the configured audience.

Dependencies: PyJWT, fastapi, ecocycle.configs
System role: Resolves the authenticated user for every user-scoped route
"""

import logging
from dataclasses import dataclass
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ecocycle.api.deps.dependencies import get_settings_dependency
from ecocycle.configs import Settings
from ecocycle.configs.auth import AuthSettings
from ecocycle.core.exceptions import AuthenticationError, TokenExpiredError

logger = logging.getLogger(__name__)

# Missing credentials are reported through AuthenticationError, not FastAPI's 403
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthUser:
    """Authenticated user context extracted from the JWT."""

    user_id: UUID
    email: str | None = None
    role: str | None = None


def verify_token(token: str, auth: AuthSettings) -> dict:
    """
    Verify a Supabase JWT.

    Args:
        token: Encoded JWT
        auth: Secret, algorithm and audience to verify against

    Returns:
        dict: Decoded payload

    Raises:
        TokenExpiredError: Token past its exp claim
        AuthenticationError: Any other verification failure
    """
    if not auth.jwt_secret:
        logger.error("JWT secret is not configured")
        raise AuthenticationError("Authentication is not configured")
    try:
        return jwt.decode(
            token,
            auth.jwt_secret,
            algorithms=[auth.jwt_algorithm],
            audience=auth.jwt_audience,
        )
    except jwt.ExpiredSignatureError as e:
        logger.warning("Token expired")
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token", extra={"error": str(e)})
        raise AuthenticationError("Invalid authentication token") from e


def user_from_payload(payload: dict) -> AuthUser:
    """
    Raises:
        AuthenticationError: sub missing or not a UUID
    """
    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Invalid token: missing user ID")
    try:
        user_id = UUID(str(subject))
    except ValueError as e:
        raise AuthenticationError("Invalid token: malformed user ID") from e
    return AuthUser(user_id=user_id, email=payload.get("email"), role=payload.get("role"))


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings_dependency),
) -> AuthUser:
    """
    FastAPI dependency returning the authenticated user.

    Raises:
        AuthenticationError: No bearer token, or token invalid
        TokenExpiredError: Token expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")
    payload = verify_token(credentials.credentials, settings.auth)
    return user_from_payload(payload)
