from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from config import ApplicationConfig


def generate_jwt(user_id: UUID, expires_delta: timedelta = timedelta(minutes=15)) -> str:
    """
    Generate JWT access token

    The token identifies the principal only. Roles and tenant are resolved
    from storage on every request, so a role change never waits for a
    token refresh.

    Args:
        user_id: User UUID
        expires_delta: Token lifetime

    Returns:
        JWT token string (HS256)
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "exp": now + expires_delta,
        "iat": now,
    }
    return jwt.encode(payload, ApplicationConfig.JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> Optional[dict]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        return jwt.decode(token, ApplicationConfig.JWT_SECRET, algorithms=["HS256"])
    except JWTError:
        return None
