"""JWT helpers for bearer-token authentication."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt

from forum_moderation.core.settings import settings


def create_access_token(user_id: int) -> str:
    """Create a JWT access token whose subject is the user's identifier."""
    to_encode: dict[str, object] = {"sub": str(user_id)}
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and verify a JWT access token.

    Raises:
        jose.JWTError: If the signature or expiry is invalid.
    """
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
