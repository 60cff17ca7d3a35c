"""Category service."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from task_manager.database import is_unique_violation
from task_manager.errors import ConflictError, NotFoundError, ValidationError
from task_manager.models.category import Category
from task_manager.models.task import Task
from task_manager.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CATEGORY_MESSAGE = "A category with this name already exists"


class CategoryService:
    """Owner-scoped category operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_categories(self, user_id: int) -> list[Category]:
        """Get all categories owned by a user, ordered by name."""
        return (
            self.db.query(Category)
            .filter(Category.user_id == user_id)
            .order_by(Category.name.asc())
            .all()
        )

    def find(self, category_id: int, user_id: int) -> Category | None:
        """Get a category only if it belongs to the user."""
        return (
            self.db.query(Category)
            .filter(Category.id == category_id, Category.user_id == user_id)
            .first()
        )

    def get(self, category_id: int, user_id: int) -> Category:
        """Get an owned category or raise NotFoundError."""
        category = self.find(category_id, user_id)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def count_tasks(self, category_id: int, user_id: int) -> int:
        """Count the user's tasks filed under a category."""
        return (
            self.db.query(func.count(Task.id))
            .filter(Task.category_id == category_id, Task.user_id == user_id)
            .scalar()
        )

    def _name_taken(self, name: str, user_id: int, exclude_id: int | None = None) -> bool:
        query = self.db.query(Category.id).filter(
            Category.user_id == user_id, Category.name == name
        )
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        return query.first() is not None

    def _commit_unique(self) -> None:
        # Concurrent writers can slip past the pre-check; the unique index decides.
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if not is_unique_violation(e):
                raise
            raise ConflictError(DUPLICATE_CATEGORY_MESSAGE) from None

    def create(self, data: CategoryCreate, user_id: int) -> Category:
        """Create a category for the user."""
        if self._name_taken(data.name, user_id):
            raise ConflictError(DUPLICATE_CATEGORY_MESSAGE)

        category = Category(name=data.name, description=data.description, user_id=user_id)
        self.db.add(category)
        self._commit_unique()
        self.db.refresh(category)

        logger.info(f"Created category {category.id} for user {user_id}")
        return category

    def update(self, category_id: int, data: CategoryUpdate, user_id: int) -> Category:
        """Apply the supplied fields to an owned category."""
        category = self.get(category_id, user_id)

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise ValidationError("No fields provided for update")

        if "name" in changes and self._name_taken(changes["name"], user_id, category_id):
            raise ConflictError(DUPLICATE_CATEGORY_MESSAGE)

        for field, value in changes.items():
            setattr(category, field, value)

        self._commit_unique()
        self.db.refresh(category)
        return category

    def delete(self, category_id: int, user_id: int) -> None:
        """Delete an owned category, leaving its tasks uncategorized."""
        category = self.get(category_id, user_id)

        detached = (
            self.db.query(Task)
            .filter(Task.category_id == category_id, Task.user_id == user_id)
            .update({Task.category_id: None}, synchronize_session="fetch")
        )

        self.db.delete(category)
        self.db.commit()

        logger.info(
            f"Deleted category {category_id} for user {user_id} ({detached} tasks uncategorized)"
        )
