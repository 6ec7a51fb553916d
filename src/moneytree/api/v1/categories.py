"""Category tree endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from moneytree.api.deps import get_category_service, get_current_user
from moneytree.models.user import User
from moneytree.schemas.category import (
    CategoryCreateRequest,
    CategoryResponse,
    CategoryTreeResult,
    CategoryUpdateRequest,
)
from moneytree.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get(
    "",
    response_model=CategoryTreeResult,
    summary="Get category tree",
    description="""
    Get the Income and Expense roots and the authenticated user's
    categories as a flat depth-first list. Each entry carries its
    parent_id and depth, so trees of any depth can be rebuilt client-side.
    """,
)
async def get_category_tree(
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryTreeResult:
    """
    List the category forest for the authenticated user.

    Args:
        current_user: Authenticated user
        service: Category service

    Returns:
        Every visible category in depth-first order
    """
    forest = await service.get_tree(current_user.id)
    return CategoryTreeResult.from_forest(forest)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
    description="""
    Create a category under a system root or under one of your own
    categories. User categories can never be roots.
    """,
    responses={
        404: {"description": "Parent category not found"},
        403: {"description": "Parent belongs to another user"},
    },
)
async def create_category(
    data: CategoryCreateRequest,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Create a category owned by the authenticated user."""
    category = await service.create_category(
        user_id=current_user.id,
        name=data.name,
        parent_id=data.parent_id,
        color=data.color,
        icon=data.icon,
    )
    return CategoryResponse.model_validate(category)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update category",
    description="Rename or restyle one of your categories. System roots cannot be edited.",
    responses={
        404: {"description": "Category not found"},
        403: {"description": "System category"},
    },
)
async def update_category(
    category_id: UUID,
    data: CategoryUpdateRequest,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> CategoryResponse:
    """Update name, color or icon of a category."""
    category = await service.update_category(
        current_user.id, category_id, data.model_dump(exclude_unset=True)
    )
    return CategoryResponse.model_validate(category)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete category",
    description="Delete one of your categories. Categories with children must be emptied first.",
    responses={
        400: {"description": "Category has children or transactions"},
        404: {"description": "Category not found"},
        403: {"description": "System category"},
    },
)
async def delete_category(
    category_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CategoryService = Depends(get_category_service),
) -> Response:
    """Delete a childless category."""
    await service.delete_category(current_user.id, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
