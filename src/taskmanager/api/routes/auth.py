"""Authentication routes."""
from fastapi import APIRouter, HTTPException, status

from taskmanager.api.deps import AppSettings, CurrentPrincipal, DatabaseSession
from taskmanager.core.auth import create_user, get_user_by_email, login_user, logout_user
from taskmanager.schemas.common import APIResponse
from taskmanager.schemas.user import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=APIResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(user_data: UserCreate, db: DatabaseSession):
    """
    Register a new user.

    Args:
        user_data: User registration data
        db: Database session

    Returns:
        Created user, without password

    Raises:
        HTTPException: If the email is already registered
    """
    try:
        user = create_user(db, user_data.name, user_data.email, user_data.password)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return APIResponse.ok(
        "User registered successfully",
        UserResponse.model_validate(user),
        status.HTTP_201_CREATED,
    )


@router.post("/login", response_model=APIResponse[AuthResponse])
def login(credentials: UserLogin, db: DatabaseSession, settings: AppSettings):
    """
    Login and get an access token. Previous tokens of the user stop working.

    Args:
        credentials: Login credentials
        db: Database session
        settings: Application settings

    Returns:
        Access token

    Raises:
        HTTPException: If credentials are invalid or the user is inactive
    """
    token = login_user(db, credentials.email, credentials.password, settings)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return APIResponse.ok(
        "Login successful",
        AuthResponse(access_token=token.access_token, message="Login successful"),
    )


@router.get("/logout", response_model=APIResponse[None])
def logout(principal: CurrentPrincipal, db: DatabaseSession):
    """Invalidate every token of the current user."""
    try:
        logout_user(db, principal.email)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return APIResponse.ok("Logout successful")


@router.get("/profile", response_model=APIResponse[ProfileResponse])
def profile(principal: CurrentPrincipal, db: DatabaseSession):
    """
    Get the current authenticated user.

    Args:
        principal: Current caller
        db: Database session

    Returns:
        Caller identity
    """
    user = get_user_by_email(db, principal.email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found with email: {principal.email}",
        )

    return APIResponse.ok(
        "Access granted",
        ProfileResponse(id=user.id, email=user.email, name=user.name),
    )


@router.get("/public", response_model=APIResponse[None])
def public():
    """Unauthenticated endpoint."""
    return APIResponse.ok("Public endpoint is up")
