"""
NotesApp Backend — Category Handlers
======================================

What:  Create, read, rename and delete categories.
Why:   Ownership checks and the "no delete while notes reference it" guard
       live here, between the HTTP layer and the repositories.
How:   Each method takes the request's AsyncSession and one command/query
       object (which carries the caller id) and returns Ok(dto) or Err(error).

Outcome table:
    create  → Ok(CategoryDto) | Unauthorized | CategoryOperation
    get     → Ok(CategoryWithNotesDto) | NotFound
    list    → Ok([CategoryDto])
    update  → Ok(CategoryDto) | NotFound | Unauthorized | CategoryOperation
    delete  → Ok(True/False) | NotFound | Unauthorized | InvalidOperation
"""

import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.commands import (
    CreateCategoryCommand,
    DeleteCategoryCommand,
    GetAllCategoriesQuery,
    GetCategoryByIdQuery,
    UpdateCategoryCommand,
)
from notesapp.config import settings
from notesapp.database import utcnow
from notesapp.exceptions import (
    CategoryOperationError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)
from notesapp.models.category import CATEGORY_NAME_MAX_LENGTH, Category
from notesapp.repositories.category_repository import category_repository
from notesapp.repositories.note_repository import note_repository
from notesapp.results import Err, Ok, Result
from notesapp.schemas.category import CategoryDto, CategoryWithNotesDto
from notesapp.services.projections import to_category_dto, to_note_dto

logger = logging.getLogger(__name__)

NAME_TOO_LONG = f"Category name cannot be longer than {CATEGORY_NAME_MAX_LENGTH} characters."


class CategoryService:

    async def create_category(
        self, db: AsyncSession, command: CreateCategoryCommand
    ) -> Result[CategoryDto]:
        """Checks caller, then name; created and last_modified start equal."""
        if not command.caller_id:
            return Err(UnauthorizedError("User is not authenticated."))

        if not command.name:
            return Err(CategoryOperationError("Category name cannot be empty."))
        if len(command.name) > CATEGORY_NAME_MAX_LENGTH:
            return Err(CategoryOperationError(NAME_TOO_LONG))

        now = utcnow()
        category = Category(
            name=command.name,
            user_id=command.caller_id,
            created=now,
            last_modified=now,
        )
        created = await category_repository.create(db, category)
        logger.info("Category %s created by user %s", created.id, command.caller_id)
        return Ok(to_category_dto(created))

    async def get_category(
        self, db: AsyncSession, query: GetCategoryByIdQuery
    ) -> Result[CategoryWithNotesDto]:
        """
        Returns the category with all of its notes.

        Readable by any signed-in user unless SCOPE_READS_TO_OWNER is enabled,
        in which case other users' categories are reported as not found.
        """
        category = await category_repository.get_by_id(db, query.category_id)
        if category is None or not self._visible_to(category, query.caller_id):
            return Err(NotFoundError("category", query.category_id))

        notes = await note_repository.list_by_category(db, category.id)
        return Ok(
            CategoryWithNotesDto(
                id=category.id,
                name=category.name,
                notes=[to_note_dto(note, category.name) for note in notes],
            )
        )

    async def list_categories(
        self, db: AsyncSession, query: GetAllCategoriesQuery
    ) -> Result[List[CategoryDto]]:
        """Every category, newest first; only the caller's when reads are owner-scoped."""
        owner_id = query.caller_id if settings.scope_reads_to_owner else None
        categories = await category_repository.list_all(db, owner_id=owner_id)
        return Ok([to_category_dto(category) for category in categories])

    async def update_category(
        self, db: AsyncSession, command: UpdateCategoryCommand
    ) -> Result[CategoryDto]:
        """Owner-only rename. An empty name keeps the current one."""
        category = await category_repository.get_by_id(db, command.category_id)
        if category is None:
            return Err(NotFoundError("category", command.category_id))

        if category.user_id != command.caller_id:
            logger.warning(
                "User %s attempted to update category %s owned by another user",
                command.caller_id,
                command.category_id,
            )
            return Err(UnauthorizedError("You do not have permission to update this category."))

        if command.name:
            if len(command.name) > CATEGORY_NAME_MAX_LENGTH:
                return Err(CategoryOperationError(NAME_TOO_LONG, category_id=category.id))
            category.name = command.name

        updated = await category_repository.update(db, category)
        if updated is None:
            return Err(
                CategoryOperationError(
                    f"Failed to update category with ID {command.category_id}.",
                    category_id=command.category_id,
                )
            )

        logger.info("Category %s updated by user %s", updated.id, command.caller_id)
        return Ok(to_category_dto(updated))

    async def delete_category(
        self, db: AsyncSession, command: DeleteCategoryCommand
    ) -> Result[bool]:
        """Owner-only delete, refused while any note still references the category."""
        category = await category_repository.get_by_id(db, command.category_id)
        if category is None:
            return Err(NotFoundError("category", command.category_id))

        if category.user_id != command.caller_id:
            logger.warning(
                "User %s attempted to delete category %s owned by another user",
                command.caller_id,
                command.category_id,
            )
            return Err(UnauthorizedError("You do not have permission to delete this category."))

        note_count = await note_repository.count_by_category(db, category.id)
        if note_count > 0:
            logger.warning(
                "Category %s cannot be deleted: %d note(s) still reference it",
                category.id,
                note_count,
            )
            return Err(
                InvalidOperationError(
                    "Cannot delete a category that has associated notes.",
                    context={"category_id": str(category.id), "note_count": note_count},
                )
            )

        deleted = await category_repository.delete(db, category.id)
        if deleted:
            logger.info("Category %s deleted by user %s", category.id, command.caller_id)
        return Ok(deleted)

    @staticmethod
    def _visible_to(category: Category, caller_id) -> bool:
        return not settings.scope_reads_to_owner or category.user_id == caller_id


category_service = CategoryService()
