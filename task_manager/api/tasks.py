"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from task_manager.api.dependencies import get_current_user_id, get_task_service
from task_manager.config import get_settings
from task_manager.models.enums import TaskPriority, TaskStatus
from task_manager.schemas.envelope import Envelope
from task_manager.schemas.task import TaskCreate, TaskResponse, TaskStatistics, TaskUpdate
from task_manager.services.task_service import TaskService

settings = get_settings()

router = APIRouter(prefix=f"{settings.api_prefix}/tasks", tags=["tasks"])


def _task_list(tasks) -> Envelope[list[TaskResponse]]:
    results = [TaskResponse.model_validate(t) for t in tasks]
    return Envelope[list[TaskResponse]](success=True, count=len(results), data=results)


@router.get("", response_model=Envelope[list[TaskResponse]], response_model_exclude_unset=True)
def get_tasks(
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
    status_filter: TaskStatus | None = Query(default=None, alias="status"),
    priority: TaskPriority | None = Query(default=None),
    category_id: int | None = Query(default=None),
):
    """Get all tasks for the current user, optionally filtered."""
    return _task_list(
        tasks.list_tasks(
            user_id,
            status=status_filter.value if status_filter else None,
            priority=priority.value if priority else None,
            category_id=category_id,
        )
    )


# Static paths are registered before /{task_id} so they are not parsed as ids
@router.get(
    "/statistics", response_model=Envelope[TaskStatistics], response_model_exclude_unset=True
)
def get_task_statistics(
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get task counts for the current user."""
    return Envelope[TaskStatistics](success=True, data=tasks.statistics(user_id))


@router.get(
    "/category/{category_id}",
    response_model=Envelope[list[TaskResponse]],
    response_model_exclude_unset=True,
)
def get_tasks_by_category(
    category_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get the current user's tasks in a category."""
    return _task_list(tasks.list_by_category(category_id, user_id))


@router.get("/{task_id}", response_model=Envelope[TaskResponse], response_model_exclude_unset=True)
def get_task(
    task_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Get a specific task."""
    task = tasks.get(task_id, user_id)
    return Envelope[TaskResponse](success=True, data=TaskResponse.model_validate(task))


@router.post(
    "",
    response_model=Envelope[TaskResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    task_data: TaskCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Create a new task."""
    task = tasks.create(task_data, user_id)
    return Envelope[TaskResponse](
        success=True,
        message="Task created successfully",
        data=TaskResponse.model_validate(task),
    )


@router.put("/{task_id}", response_model=Envelope[TaskResponse], response_model_exclude_unset=True)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Update only the supplied fields of a task."""
    task = tasks.update(task_id, task_data, user_id)
    return Envelope[TaskResponse](
        success=True,
        message="Task updated successfully",
        data=TaskResponse.model_validate(task),
    )


@router.delete("/{task_id}", response_model=Envelope, response_model_exclude_unset=True)
def delete_task(
    task_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    tasks: Annotated[TaskService, Depends(get_task_service)],
):
    """Delete a task."""
    tasks.delete(task_id, user_id)
    return Envelope(success=True, message="Task deleted successfully")
