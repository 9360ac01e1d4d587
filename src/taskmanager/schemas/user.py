"""User and authentication Pydantic schemas."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user schema."""

    name: str = Field(..., min_length=2, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="Email address")


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(
        ..., min_length=6, max_length=72, description="Password (6-72 characters)"
    )


class UserLogin(BaseModel):
    """Schema for user login."""

    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class UserResponse(BaseModel):
    """Schema for user response. Never carries the password."""

    id: int
    name: str
    email: str
    active: bool
    last_updated: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    """Schema for a successful login."""

    access_token: str
    message: str = "Login successful"


class ProfileResponse(BaseModel):
    """Identity of the authenticated caller."""

    id: int
    email: str
    name: str
