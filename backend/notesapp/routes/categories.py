"""
NotesApp Backend — Category Routes
====================================

What:  CRUD endpoints under /api/categories. Every route requires a session.
How:   Build the command with the caller's id, dispatch to category_service,
       unwrap the result. Err results raise and are mapped to status codes by
       the exception handlers in main.py.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.auth.session import SessionPrincipal, get_current_user
from notesapp.commands import (
    CreateCategoryCommand,
    DeleteCategoryCommand,
    GetAllCategoriesQuery,
    GetCategoryByIdQuery,
    UpdateCategoryCommand,
)
from notesapp.database import get_db_session
from notesapp.exceptions import NotFoundError
from notesapp.schemas.category import (
    CategoryCreateRequest,
    CategoryDto,
    CategoryUpdateRequest,
    CategoryWithNotesDto,
)
from notesapp.schemas.common import ErrorResponse
from notesapp.services.category_service import category_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["Categories"])

_errors = {
    400: {"description": "Rejected", "model": ErrorResponse},
    401: {"description": "Not signed in or not the owner", "model": ErrorResponse},
    404: {"description": "Category not found", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CategoryDto,
    responses=_errors,
    summary="Create a category",
)
async def create_category(
    body: CategoryCreateRequest,
    request: Request,
    response: Response,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CategoryDto:
    """Create a category owned by the signed-in user."""
    result = await category_service.create_category(
        db, CreateCategoryCommand(name=body.name, caller_id=user.user_id)
    )
    category = result.unwrap()
    response.headers["Location"] = str(request.url_for("get_category", category_id=category.id))
    return category


@router.get(
    "",
    response_model=List[CategoryDto],
    responses=_errors,
    summary="List all categories",
)
async def list_categories(
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryDto]:
    """All categories, newest first. 404 when there are none."""
    categories = (
        await category_service.list_categories(db, GetAllCategoriesQuery(caller_id=user.user_id))
    ).unwrap()
    if not categories:
        raise NotFoundError("categories", message="No categories found.")
    return categories


@router.get(
    "/{category_id}",
    response_model=CategoryWithNotesDto,
    responses=_errors,
    summary="Get a category with its notes",
)
async def get_category(
    category_id: UUID,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CategoryWithNotesDto:
    """A category together with its notes."""
    result = await category_service.get_category(
        db, GetCategoryByIdQuery(category_id=category_id, caller_id=user.user_id)
    )
    return result.unwrap()


@router.put(
    "/{category_id}",
    response_model=CategoryDto,
    responses=_errors,
    summary="Rename a category",
)
async def update_category(
    category_id: UUID,
    body: CategoryUpdateRequest,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> CategoryDto:
    """Owner-only rename; an empty name keeps the current one."""
    result = await category_service.update_category(
        db,
        UpdateCategoryCommand(category_id=category_id, name=body.name, caller_id=user.user_id),
    )
    return result.unwrap()


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_errors,
    summary="Delete an empty category",
)
async def delete_category(
    category_id: UUID,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> None:
    """Owner-only delete, refused while notes still reference the category."""
    result = await category_service.delete_category(
        db, DeleteCategoryCommand(category_id=category_id, caller_id=user.user_id)
    )
    # False: the row disappeared between the lookup and the delete
    if not result.unwrap():
        raise NotFoundError("category", category_id)
