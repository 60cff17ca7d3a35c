"""SQLAlchemy models."""

from task_manager.models.category import Category
from task_manager.models.enums import TaskPriority, TaskStatus
from task_manager.models.task import Task
from task_manager.models.user import User

__all__ = [
    "User",
    "Category",
    "Task",
    "TaskStatus",
    "TaskPriority",
]
