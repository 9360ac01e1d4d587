"""Database models."""
from taskmanager.models.task import Task
from taskmanager.models.token import Token
from taskmanager.models.user import User

__all__ = [
    "User",
    "Task",
    "Token",
]
