"""Unit tests for security utilities."""
from datetime import timedelta

import jwt
import pytest

from taskmanager.config import Settings
from taskmanager.core.security import (
    USER_ROLE,
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        secret_key="test-secret-key-minimum-32-characters-long",
        jwt_issuer="test-issuer",
        access_token_expire_minutes=5,
    )


def test_hash_password():
    """Test password hashing."""
    password = "MySecurePassword123!"
    hashed = hash_password(password)
    assert hashed != password
    assert hashed.startswith("$2b$")


def test_verify_password():
    """Test password verification."""
    password = "MySecurePassword123!"
    hashed = hash_password(password)
    assert verify_password(password, hashed)
    assert not verify_password("WrongPassword", hashed)


def test_create_access_token_claims(settings):
    """The token carries identity, role, issuer and expiry."""
    token = create_access_token("user@example.com", "Some User", settings)
    claims = decode_access_token(token, settings)

    assert claims["sub"] == "user@example.com"
    assert claims["upn"] == "user@example.com"
    assert claims["name"] == "Some User"
    assert claims["groups"] == [USER_ROLE]
    assert claims["iss"] == "test-issuer"
    assert claims["exp"] - claims["iat"] == 5 * 60


def test_tokens_are_unique(settings):
    """Two tokens minted back to back differ."""
    first = create_access_token("user@example.com", "Some User", settings)
    second = create_access_token("user@example.com", "Some User", settings)
    assert first != second


def test_decode_expired_token(settings):
    """An expired token is rejected as expired."""
    token = create_access_token(
        "user@example.com", "Some User", settings, expires_delta=timedelta(seconds=-10)
    )
    with pytest.raises(TokenExpiredError, match="Token has expired"):
        decode_access_token(token, settings)


def test_decode_token_with_wrong_key(settings):
    """A token signed with another key is rejected."""
    other = settings.model_copy(update={"secret_key": "another-secret-key-minimum-32-characters"})
    token = create_access_token("user@example.com", "Some User", other)

    with pytest.raises(InvalidTokenError, match="Invalid token"):
        decode_access_token(token, settings)


def test_decode_token_with_wrong_issuer(settings):
    """A token from another issuer is rejected."""
    other = settings.model_copy(update={"jwt_issuer": "someone-else"})
    token = create_access_token("user@example.com", "Some User", other)

    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)


def test_decode_garbage(settings):
    """A string that is not a JWT is rejected."""
    with pytest.raises(TokenError):
        decode_access_token("not-a-jwt", settings)


def test_decode_token_missing_subject(settings):
    """Tokens without a subject are not accepted."""
    token = jwt.encode(
        {"iss": settings.jwt_issuer, "exp": 9999999999},
        settings.secret_key,
        algorithm=settings.algorithm,
    )
    with pytest.raises(InvalidTokenError):
        decode_access_token(token, settings)
