import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ValidationError

from config import ApplicationConfig
from src.domain.entities import UserRole
from src.domain.errors import TokenExpiredError, TokenInvalidError


class TokenPayload(BaseModel):
    """Identity carried by a verified access token"""

    user_id: UUID
    role: UserRole


def generate_jwt(user_id: UUID, role: str) -> str:
    """
    Generate JWT access token

    Args:
        user_id: User UUID
        role: User role (admin, teacher, student)

    Returns:
        JWT token string (HS256, ACCESS_TOKEN_EXPIRE_MINUTES expiry)
    """
    return create_access_token(
        str(user_id),
        role,
        timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_access_token(user_id: str, role: str, expires_delta: timedelta) -> str:
    """
    Create JWT access token with custom expiry

    Args:
        user_id: User UUID as string
        role: User role (admin, teacher, student)
        expires_delta: Token expiration duration

    Returns:
        JWT token string (HS256)
    """
    if not user_id:
        raise ValueError("user_id must be a non-empty string")
    if not role:
        raise ValueError("role must be a non-empty string")

    now = datetime.now(UTC)
    payload = {
        "user_id": user_id,
        "role": role,
        "exp": now + expires_delta,
        "iat": now,
        # Unique per token so two tokens minted in the same second differ
        "jti": secrets.token_hex(8),
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def decode_jwt(token: Optional[str]) -> TokenPayload:
    """
    Verify and decode JWT access token

    Args:
        token: JWT token string

    Returns:
        TokenPayload with user_id and role

    Raises:
        TokenExpiredError: signature is valid but the token has expired
        TokenInvalidError: token is malformed, tampered or has a bad payload
    """
    if not token:
        raise TokenInvalidError("Token must be a non-empty string")

    try:
        claims = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except ExpiredSignatureError as exc:
        raise TokenExpiredError("Token has expired") from exc
    except JWTError as exc:
        raise TokenInvalidError(f"Invalid token: {exc}") from exc

    try:
        return TokenPayload(user_id=claims.get("user_id"), role=claims.get("role"))
    except ValidationError as exc:
        raise TokenInvalidError("Invalid token payload") from exc


def generate_refresh_token() -> str:
    """Opaque 256-bit refresh token; it is not a JWT and only means something to the session store"""
    return secrets.token_urlsafe(32)
