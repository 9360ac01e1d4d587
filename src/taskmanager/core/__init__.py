"""Core application modules."""
from taskmanager.core.auth import (
    authenticate_user,
    create_user,
    get_token_record,
    get_user_by_email,
    invalidate_all_tokens_for_user,
    issue_token,
    login_user,
    logout_user,
    verify_access_token,
)
from taskmanager.core.scope import Principal, is_task_owner
from taskmanager.core.security import (
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Auth
    "authenticate_user",
    "create_user",
    "get_user_by_email",
    "get_token_record",
    "invalidate_all_tokens_for_user",
    "issue_token",
    "login_user",
    "logout_user",
    "verify_access_token",
    # Scope
    "Principal",
    "is_task_owner",
    # Security
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
    "TokenError",
    "TokenExpiredError",
    "InvalidTokenError",
]
