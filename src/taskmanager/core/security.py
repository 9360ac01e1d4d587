"""Security utilities for password hashing and signed access tokens."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from passlib.context import CryptContext

from taskmanager.config import Settings

# Password hashing context using bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

USER_ROLE = "user"


class TokenError(Exception):
    """Raised when an access token cannot be trusted."""


class TokenExpiredError(TokenError):
    """The token's expiry claim has passed."""


class InvalidTokenError(TokenError):
    """The token is malformed, has a bad signature or a foreign issuer."""


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    email: str,
    name: str,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for a user.

    The email is carried both as ``sub`` and ``upn``. ``jti`` makes every
    token unique even when two are minted within the same second.

    Args:
        email: User email
        name: User display name
        settings: Application settings
        expires_delta: Lifetime override, defaults to the configured one

    Returns:
        Encoded JWT
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "iss": settings.jwt_issuer,
        "sub": email,
        "upn": email,
        "name": name,
        "groups": [USER_ROLE],
        "iat": now,
        "exp": now + expires_delta,
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Verify an access token and return its claims.

    Raises:
        TokenExpiredError: If the expiry claim has passed
        InvalidTokenError: If the signature, issuer or structure is invalid
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "sub", "iss"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError("Invalid token") from e

