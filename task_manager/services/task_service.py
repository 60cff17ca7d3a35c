"""Task service."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Query, Session, joinedload

from task_manager.errors import NotFoundError, ValidationError
from task_manager.models.category import Category
from task_manager.models.enums import TaskPriority, TaskStatus
from task_manager.models.task import Task
from task_manager.schemas.task import TaskCreate, TaskStatistics, TaskUpdate

logger = logging.getLogger(__name__)

# Window for the "due soon" statistic
DUE_SOON_WINDOW = timedelta(hours=48)

FOREIGN_CATEGORY_MESSAGE = "Category not found or does not belong to you"


class TaskService:
    """Owner-scoped task operations and statistics."""

    def __init__(self, db: Session):
        self.db = db

    def _owned(self, user_id: int) -> Query:
        return (
            self.db.query(Task)
            .options(joinedload(Task.category))
            .filter(Task.user_id == user_id)
        )

    def _ensure_category_owned(self, category_id: int, user_id: int) -> None:
        exists = (
            self.db.query(Category.id)
            .filter(Category.id == category_id, Category.user_id == user_id)
            .first()
        )
        if not exists:
            raise ValidationError(FOREIGN_CATEGORY_MESSAGE)

    def list_tasks(
        self,
        user_id: int,
        status: str | None = None,
        priority: str | None = None,
        category_id: int | None = None,
    ) -> list[Task]:
        """Get the user's tasks, newest first, optionally filtered by exact match."""
        query = self._owned(user_id)

        if status is not None:
            query = query.filter(Task.status == status)
        if priority is not None:
            query = query.filter(Task.priority == priority)
        if category_id is not None:
            query = query.filter(Task.category_id == category_id)

        return query.order_by(Task.created_at.desc(), Task.id.desc()).all()

    def get(self, task_id: int, user_id: int) -> Task:
        """Get an owned task or raise NotFoundError."""
        task = self._owned(user_id).filter(Task.id == task_id).first()
        if not task:
            raise NotFoundError("Task not found")
        return task

    def create(self, data: TaskCreate, user_id: int) -> Task:
        """Create a task for the user."""
        if data.category_id is not None:
            self._ensure_category_owned(data.category_id, user_id)

        task = Task(**data.model_dump(), user_id=user_id)
        self.db.add(task)
        self.db.commit()

        logger.info(f"Created task {task.id} for user {user_id}")
        return self.get(task.id, user_id)

    def update(self, task_id: int, data: TaskUpdate, user_id: int) -> Task:
        """Apply only the supplied fields to an owned task."""
        task = self.get(task_id, user_id)

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return task

        if changes.get("category_id") is not None:
            self._ensure_category_owned(changes["category_id"], user_id)

        for field, value in changes.items():
            setattr(task, field, value)

        self.db.commit()
        return self.get(task_id, user_id)

    def delete(self, task_id: int, user_id: int) -> None:
        """Delete an owned task."""
        task = self.get(task_id, user_id)
        self.db.delete(task)
        self.db.commit()
        logger.info(f"Deleted task {task_id} for user {user_id}")

    def list_by_category(self, category_id: int, user_id: int) -> list[Task]:
        """Get the user's tasks in one of their categories, newest first."""
        category = (
            self.db.query(Category.id)
            .filter(Category.id == category_id, Category.user_id == user_id)
            .first()
        )
        if not category:
            raise NotFoundError("Category not found")

        return self.list_tasks(user_id, category_id=category_id)

    def statistics(self, user_id: int, now: datetime | None = None) -> TaskStatistics:
        """Count the user's tasks by status, priority and due date."""
        now = now or datetime.now(UTC)

        status_counts = dict(
            self.db.query(Task.status, func.count(Task.id))
            .filter(Task.user_id == user_id)
            .group_by(Task.status)
            .all()
        )

        high_priority = (
            self.db.query(func.count(Task.id))
            .filter(
                Task.user_id == user_id,
                Task.priority.in_([TaskPriority.HIGH.value, TaskPriority.URGENT.value]),
            )
            .scalar()
        )

        open_with_due_date = self.db.query(func.count(Task.id)).filter(
            Task.user_id == user_id,
            Task.status != TaskStatus.COMPLETED.value,
            Task.due_date.is_not(None),
        )
        due_soon = open_with_due_date.filter(
            Task.due_date >= now, Task.due_date <= now + DUE_SOON_WINDOW
        ).scalar()
        overdue = open_with_due_date.filter(Task.due_date < now).scalar()

        return TaskStatistics(
            total=sum(status_counts.values()),
            pending=status_counts.get(TaskStatus.PENDING.value, 0),
            in_progress=status_counts.get(TaskStatus.IN_PROGRESS.value, 0),
            completed=status_counts.get(TaskStatus.COMPLETED.value, 0),
            cancelled=status_counts.get(TaskStatus.CANCELLED.value, 0),
            high_priority=high_priority,
            due_soon=due_soon,
            overdue=overdue,
        )
