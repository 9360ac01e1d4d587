"""Task routes."""
from fastapi import APIRouter, status

from taskmanager.api.deps import CurrentPrincipal, DatabaseSession
from taskmanager.schemas.common import APIResponse
from taskmanager.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from taskmanager.services.task_service import (
    create_task,
    delete_task,
    get_task_by_id,
    list_tasks,
    update_task,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=APIResponse[list[TaskResponse]])
def list_all_tasks(principal: CurrentPrincipal, db: DatabaseSession):
    """
    List all tasks of the current user.

    Args:
        principal: Current caller
        db: Database session

    Returns:
        List of tasks
    """
    tasks = list_tasks(db, principal.email)
    return APIResponse.ok(
        "Tasks retrieved successfully",
        [TaskResponse.model_validate(task) for task in tasks],
    )


@router.post(
    "",
    response_model=APIResponse[TaskResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_new_task(task_data: TaskCreate, principal: CurrentPrincipal, db: DatabaseSession):
    """
    Create a new task.

    Args:
        task_data: Task creation data
        principal: Current caller
        db: Database session

    Returns:
        Created task
    """
    task = create_task(
        db,
        principal.email,
        title=task_data.title,
        description=task_data.description,
        completed=task_data.completed,
    )
    return APIResponse.ok(
        "Task created successfully",
        TaskResponse.model_validate(task),
        status.HTTP_201_CREATED,
    )


@router.put("", response_model=APIResponse[TaskResponse])
def update_existing_task(task_data: TaskUpdate, principal: CurrentPrincipal, db: DatabaseSession):
    """
    Update a task. The task id is taken from the body.

    Args:
        task_data: Task update data
        principal: Current caller
        db: Database session

    Returns:
        Updated task
    """
    task = update_task(
        db,
        principal.email,
        task_data.id,
        title=task_data.title,
        description=task_data.description,
        completed=task_data.completed,
    )
    return APIResponse.ok("Task updated successfully", TaskResponse.model_validate(task))


@router.get("/{task_id}", response_model=APIResponse[TaskResponse])
def get_task(task_id: int, principal: CurrentPrincipal, db: DatabaseSession):
    """
    Get a specific task.

    Raises:
        HTTPException: If the task is not found or belongs to another user
    """
    task = get_task_by_id(db, principal.email, task_id)
    return APIResponse.ok("Task retrieved successfully", TaskResponse.model_validate(task))


@router.delete("/{task_id}", response_model=APIResponse[None])
def delete_existing_task(task_id: int, principal: CurrentPrincipal, db: DatabaseSession):
    """Delete a task."""
    delete_task(db, principal.email, task_id)
    return APIResponse.ok("Task deleted successfully")
