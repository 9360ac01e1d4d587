"""FastAPI dependencies for authentication and database."""
import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from taskmanager.config import Settings, get_settings
from taskmanager.core.auth import verify_access_token
from taskmanager.core.scope import Principal
from taskmanager.core.security import TokenError
from taskmanager.database import get_db
from taskmanager.telemetry import AuthEvent, record_auth_event

logger = logging.getLogger(__name__)

# HTTP Bearer token authentication
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_principal(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Principal:
    """
    Authenticate the request from its Bearer token.

    The token must have a persisted, not logged-out record and a valid,
    unexpired signature. The caller must hold the ``user`` role.

    Args:
        token: Bearer token from Authorization header
        db: Database session
        settings: Application settings

    Returns:
        Principal of the caller

    Raises:
        HTTPException: 401 if the token is missing or rejected, 403 without the role
    """
    if not token:
        logger.warning("Missing or invalid Authorization header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid Authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        principal = verify_access_token(db, token.credentials, settings)
    except TokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        record_auth_event(AuthEvent.TOKEN_REJECTED, reason=e.__class__.__name__)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not principal.is_user:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient role",
        )

    return principal


# Type aliases for cleaner dependency injection
CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
DatabaseSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_settings)]
