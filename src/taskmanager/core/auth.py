"""Authentication: registration, login, logout and token validation."""
import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from taskmanager.config import Settings
from taskmanager.core.scope import Principal
from taskmanager.core.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from taskmanager.models import Token, User
from taskmanager.telemetry import AuthEvent, record_auth_event

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str, for_update: bool = False) -> User | None:
    """
    Get a user by email.

    Args:
        db: Database session
        email: Email address
        for_update: Lock the user row until the transaction ends

    Returns:
        User if found, None otherwise
    """
    stmt = select(User).where(User.email == email)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def create_user(db: Session, name: str, email: str, password: str) -> User:
    """
    Register a new user.

    Args:
        db: Database session
        name: Display name
        email: Email address
        password: Plaintext password

    Returns:
        Created user object

    Raises:
        ValueError: If the email is already registered
    """
    logger.info(f"Initiating registration for user: {email}")

    if get_user_by_email(db, email):
        raise ValueError(f"Email is already registered: {email}")

    user = User(name=name, email=email, hashed_password=hash_password(password))
    db.add(user)
    db.commit()
    db.refresh(user)

    record_auth_event(AuthEvent.REGISTER)
    logger.info(f"User registered successfully: {email}")
    return user


def authenticate_user(
    db: Session, email: str, password: str, for_update: bool = False
) -> User | None:
    """
    Authenticate a user by email and password.

    Unknown, inactive and wrong-password users all return None so callers
    cannot tell them apart; the reason is only logged.

    Args:
        db: Database session
        email: Email address
        password: Plaintext password
        for_update: Lock the user row until the transaction ends

    Returns:
        User object if authentication successful, None otherwise
    """
    user = get_user_by_email(db, email, for_update=for_update)

    if not user:
        logger.warning(f"Login failed for {email}: unknown email")
        return None

    if not user.active:
        logger.warning(f"Login failed for {email}: user is inactive")
        return None

    if not verify_password(password, user.hashed_password):
        logger.warning(f"Login failed for {email}: wrong password")
        return None

    return user


def invalidate_all_tokens_for_user(db: Session, user_id: int) -> int:
    """
    Mark every valid token of a user as logged out. Does not commit.

    Args:
        db: Database session
        user_id: Owner of the tokens

    Returns:
        Number of tokens invalidated
    """
    stmt = (
        update(Token)
        .where(Token.user_id == user_id, Token.logged_out.is_(False))
        .values(logged_out=True)
    )
    result = db.execute(stmt)
    return result.rowcount


def issue_token(db: Session, user: User, settings: Settings) -> Token:
    """
    Issue a new access token, revoking all previous ones.

    Args:
        db: Database session
        user: Authenticated user
        settings: Application settings

    Returns:
        Persisted token record
    """
    access_token = create_access_token(user.email, user.name, settings)

    revoked = invalidate_all_tokens_for_user(db, user.id)
    if revoked:
        logger.info(f"Invalidated {revoked} previous token(s) for user: {user.email}")

    token = Token(user_id=user.id, access_token=access_token, refresh_token=None)
    db.add(token)
    db.commit()
    db.refresh(token)

    return token


def login_user(db: Session, email: str, password: str, settings: Settings) -> Token | None:
    """
    Log a user in.

    The user row stays locked from lookup until the new token is committed,
    so concurrent logins for one account are serialized.

    Args:
        db: Database session
        email: Email address
        password: Plaintext password
        settings: Application settings

    Returns:
        New token record, or None if the credentials were rejected
    """
    logger.info(f"Initiating login for user: {email}")

    user = authenticate_user(db, email, password, for_update=True)
    if not user:
        db.rollback()
        record_auth_event(AuthEvent.LOGIN_FAILURE)
        return None

    token = issue_token(db, user, settings)

    record_auth_event(AuthEvent.LOGIN_SUCCESS)
    logger.info(f"Login successful for user: {email}")
    return token


def logout_user(db: Session, email: str) -> int:
    """
    Invalidate all tokens of a user.

    Args:
        db: Database session
        email: Email of the authenticated caller

    Returns:
        Number of tokens invalidated

    Raises:
        ValueError: If no user has this email
    """
    logger.info(f"Logging out user with email: {email}")

    user = get_user_by_email(db, email)
    if not user:
        raise ValueError(f"User not found with email: {email}")

    revoked = invalidate_all_tokens_for_user(db, user.id)
    db.commit()

    record_auth_event(AuthEvent.LOGOUT)
    logger.info(f"User with email {email} logged out successfully")
    return revoked


def get_token_record(db: Session, access_token: str) -> Token | None:
    """Find the persisted record of an access token."""
    stmt = select(Token).where(Token.access_token == access_token)
    return db.execute(stmt).scalar_one_or_none()


def verify_access_token(db: Session, access_token: str, settings: Settings) -> Principal:
    """
    Validate a bearer token against the allow-list and its signature.

    Args:
        db: Database session
        access_token: Raw bearer token
        settings: Application settings

    Returns:
        Principal for the token's subject

    Raises:
        TokenError: If the token is unknown, logged out, expired or forged
    """
    record = get_token_record(db, access_token)
    if record is None or not record.is_valid:
        raise InvalidTokenError("Invalid or expired token")

    claims = decode_access_token(access_token, settings)
    return Principal.from_claims(claims, token=access_token)
