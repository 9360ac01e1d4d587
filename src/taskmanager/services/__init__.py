"""Service layer."""
from taskmanager.services.task_service import (
    create_task,
    delete_task,
    get_task_by_id,
    list_tasks,
    update_task,
)

__all__ = [
    "create_task",
    "update_task",
    "list_tasks",
    "get_task_by_id",
    "delete_task",
]
