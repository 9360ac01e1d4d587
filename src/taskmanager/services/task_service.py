"""Task service for CRUD operations scoped to the owning user."""
import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from taskmanager.core.auth import get_user_by_email
from taskmanager.core.scope import is_task_owner
from taskmanager.models import Task, User

logger = logging.getLogger(__name__)

# Largest value a BIGINT id column can hold
MAX_TASK_ID = 2**63 - 1


def _resolve_user(db: Session, email: str, status_code: int) -> User:
    """
    Re-resolve the caller by email.

    Args:
        db: Database session
        email: Caller email from the token
        status_code: Status to raise with when the user is gone

    Raises:
        HTTPException: If no user has this email
    """
    user = get_user_by_email(db, email)
    if not user:
        raise HTTPException(
            status_code=status_code,
            detail=f"User not found with email: {email}",
        )
    return user


def _get_owned_task(db: Session, user: User, task_id: int) -> Task:
    """
    Load a task and check that the user owns it.

    Raises:
        HTTPException: 404 if the task is missing or owned by someone else
    """
    task = db.get(Task, task_id) if 0 < task_id <= MAX_TASK_ID else None
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task not found with id: {task_id}",
        )

    if not is_task_owner(user, task):
        logger.warning(f"User {user.email} tried to access task {task_id} owned by another user")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User is not the owner of the task",
        )

    return task


def create_task(
    db: Session,
    email: str,
    title: str,
    description: str,
    completed: bool = False,
) -> Task:
    """
    Create a new task for the caller.

    Args:
        db: Database session
        email: Caller email
        title: Task title
        description: Task description
        completed: Initial completion state

    Returns:
        Created task

    Raises:
        HTTPException: 400 if the caller no longer exists
    """
    logger.info(f"Creating a new task for user: {email}")
    user = _resolve_user(db, email, status.HTTP_400_BAD_REQUEST)

    task = Task(
        user_id=user.id,
        title=title,
        description=description,
        completed=completed,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    return task


def update_task(
    db: Session,
    email: str,
    task_id: int,
    title: str,
    description: str,
    completed: bool | None = None,
) -> Task:
    """
    Replace a task's content.

    The creation time is kept. Completion only changes when given.

    Args:
        db: Database session
        email: Caller email
        task_id: Task ID
        title: New title
        description: New description
        completed: New completion state, or None to keep it

    Returns:
        Updated task

    Raises:
        HTTPException: 404 if the caller, or the task, is not found or not owned
    """
    logger.info(f"Updating task with id: {task_id} for user: {email}")
    user = _resolve_user(db, email, status.HTTP_404_NOT_FOUND)
    task = _get_owned_task(db, user, task_id)

    task.title = title
    task.description = description
    if completed is not None:
        task.completed = completed

    db.commit()
    db.refresh(task)

    return task


def list_tasks(db: Session, email: str) -> list[Task]:
    """
    List all tasks owned by the caller, newest first.

    Raises:
        HTTPException: 404 if the caller no longer exists
    """
    logger.info(f"Finding all tasks for user: {email}")
    user = _resolve_user(db, email, status.HTTP_404_NOT_FOUND)

    stmt = (
        select(Task)
        .where(Task.user_id == user.id)
        .order_by(Task.created_at.desc(), Task.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def get_task_by_id(db: Session, email: str, task_id: int) -> Task:
    """
    Get a task owned by the caller.

    Raises:
        HTTPException: 404 if the caller, or the task, is not found or not owned
    """
    logger.info(f"Finding task with id: {task_id} for user: {email}")
    user = _resolve_user(db, email, status.HTTP_404_NOT_FOUND)
    return _get_owned_task(db, user, task_id)


def delete_task(db: Session, email: str, task_id: int) -> None:
    """
    Delete a task owned by the caller.

    Raises:
        HTTPException: 404 if the caller, or the task, is not found or not owned
    """
    logger.info(f"Deleting task with id: {task_id} for user: {email}")
    task = get_task_by_id(db, email, task_id)

    db.delete(task)
    db.commit()
