"""Authenticated identity and ownership rules."""
from dataclasses import dataclass, field
from typing import Any

from taskmanager.core.security import USER_ROLE
from taskmanager.models import Task, User


@dataclass
class Principal:
    """Identity extracted from a validated bearer token."""

    email: str
    name: str | None = None
    roles: set[str] = field(default_factory=set)
    token: str | None = None

    @classmethod
    def from_claims(cls, claims: dict[str, Any], token: str | None = None) -> "Principal":
        """
        Build a principal from decoded token claims.

        Args:
            claims: Verified JWT claims
            token: Raw bearer token

        Returns:
            Principal for the token's subject
        """
        return cls(
            email=claims.get("upn") or claims["sub"],
            name=claims.get("name"),
            roles=set(claims.get("groups") or []),
            token=token,
        )

    @property
    def is_user(self) -> bool:
        return USER_ROLE in self.roles


def is_task_owner(user: User, task: Task) -> bool:
    """
    Check if the user owns the given task.

    Args:
        user: Resolved caller
        task: Task to check

    Returns:
        True if the task belongs to the user
    """
    return task.user_id == user.id
