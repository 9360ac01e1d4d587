"""Pydantic schemas for request/response validation."""
from taskmanager.schemas.common import APIResponse
from taskmanager.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskmanager.schemas.user import (
    AuthResponse,
    ProfileResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)

__all__ = [
    "APIResponse",
    # User schemas
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "ProfileResponse",
    # Task schemas
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
]
