"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from task_manager.api.dependencies import get_category_service, get_current_user_id
from task_manager.config import get_settings
from task_manager.schemas.category import (
    CategoryCreate,
    CategoryDetailResponse,
    CategoryResponse,
    CategoryUpdate,
)
from task_manager.schemas.envelope import Envelope
from task_manager.services.category_service import CategoryService

settings = get_settings()

router = APIRouter(prefix=f"{settings.api_prefix}/categories", tags=["categories"])


@router.get(
    "", response_model=Envelope[list[CategoryResponse]], response_model_exclude_unset=True
)
def get_categories(
    user_id: Annotated[int, Depends(get_current_user_id)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Get all categories for the current user."""
    results = [CategoryResponse.model_validate(c) for c in categories.list_categories(user_id)]
    return Envelope[list[CategoryResponse]](success=True, count=len(results), data=results)


@router.get(
    "/{category_id}",
    response_model=Envelope[CategoryDetailResponse],
    response_model_exclude_unset=True,
)
def get_category(
    category_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Get a category with the number of tasks in it."""
    category = categories.get(category_id, user_id)

    detail = CategoryDetailResponse.model_validate(category)
    detail.task_count = categories.count_tasks(category_id, user_id)
    return Envelope[CategoryDetailResponse](success=True, data=detail)


@router.post(
    "",
    response_model=Envelope[CategoryResponse],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    category_data: CategoryCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Create a new category."""
    category = categories.create(category_data, user_id)
    return Envelope[CategoryResponse](
        success=True,
        message="Category created successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.put(
    "/{category_id}",
    response_model=Envelope[CategoryResponse],
    response_model_exclude_unset=True,
)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Update a category's name and/or description."""
    category = categories.update(category_id, category_data, user_id)
    return Envelope[CategoryResponse](
        success=True,
        message="Category updated successfully",
        data=CategoryResponse.model_validate(category),
    )


@router.delete("/{category_id}", response_model=Envelope, response_model_exclude_unset=True)
def delete_category(
    category_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    categories: Annotated[CategoryService, Depends(get_category_service)],
):
    """Delete a category. Tasks in the category become uncategorized."""
    categories.delete(category_id, user_id)
    return Envelope(success=True, message="Category deleted successfully")
