"""
NotesApp Backend — Note Handlers
==================================

What:  Create, read, update and delete notes.
Why:   Holds the ownership checks and the category-reference rule: a note may
       only point at a category that exists, and is owned by the note's
       owner, when the reference is assigned.
How:   Each method takes the request's AsyncSession and one command/query
       object carrying the caller id, and returns Ok(value) or Err(error).

Partial update policy (update_note):
    title / content  applied only when the incoming value is a non-empty string
    category         driven by the CategoryChange value:
                       Unchanged → untouched
                       Cleared   → no category
                       SetTo(id) → that category, which must exist and be the caller's
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.commands import (
    Cleared,
    CreateNoteCommand,
    DeleteNoteCommand,
    GetAllNotesQuery,
    GetNoteByIdQuery,
    SetTo,
    UpdateNoteCommand,
)
from notesapp.config import settings
from notesapp.database import utcnow
from notesapp.exceptions import NoteOperationError, NotFoundError, UnauthorizedError
from notesapp.models.category import Category
from notesapp.models.note import NOTE_TITLE_MAX_LENGTH, Note
from notesapp.repositories.category_repository import category_repository
from notesapp.repositories.note_repository import note_repository
from notesapp.results import Err, Ok, Result
from notesapp.schemas.note import NoteDto
from notesapp.services.projections import to_note_dto

logger = logging.getLogger(__name__)

INVALID_CATEGORY_ID = "Invalid CategoryId."
TITLE_TOO_LONG = f"Note title cannot be longer than {NOTE_TITLE_MAX_LENGTH} characters."


def _usable_by(category: Optional[Category], caller_id: Optional[str]) -> bool:
    """A note may only be filed under an existing category owned by the same user."""
    return category is not None and category.user_id == caller_id


def _invalid_category(category_id: UUID) -> Err:
    return Err(
        NotFoundError(
            "category",
            category_id,
            message=INVALID_CATEGORY_ID,
        )
    )


class NoteService:

    async def create_note(
        self, db: AsyncSession, command: CreateNoteCommand
    ) -> Result[NoteDto]:
        """
        Checks, in order: caller present, category exists and belongs to the
        caller, title non-empty.
        """
        if not command.caller_id:
            return Err(UnauthorizedError("User is not authenticated."))

        category: Optional[Category] = None
        if command.category_id is not None:
            category = await category_repository.get_by_id(db, command.category_id)
            if not _usable_by(category, command.caller_id):
                return _invalid_category(command.category_id)

        if not command.title:
            return Err(NoteOperationError("Note title cannot be empty."))
        if len(command.title) > NOTE_TITLE_MAX_LENGTH:
            return Err(NoteOperationError(TITLE_TOO_LONG))

        now = utcnow()
        note = Note(
            title=command.title,
            content_markdown=command.content_markdown or "",
            user_id=command.caller_id,
            category_id=command.category_id,
            created=now,
            last_modified=now,
        )
        created = await note_repository.create(db, note)
        logger.info("Note %s created by user %s", created.id, command.caller_id)
        return Ok(to_note_dto(created, category.name if category else None))

    async def get_note(self, db: AsyncSession, query: GetNoteByIdQuery) -> Result[NoteDto]:
        """Single note with its category name resolved."""
        note = await note_repository.get_by_id(db, query.note_id)
        if note is None or not self._visible_to(note, query.caller_id):
            return Err(NotFoundError("note", query.note_id))

        return Ok(to_note_dto(note, await self._category_name(db, note.category_id)))

    async def list_notes(
        self, db: AsyncSession, query: GetAllNotesQuery
    ) -> Result[List[NoteDto]]:
        """Every note, newest first; only the caller's when reads are owner-scoped."""
        owner_id = query.caller_id if settings.scope_reads_to_owner else None
        rows = await note_repository.list_all(db, owner_id=owner_id)
        return Ok([to_note_dto(note, category_name) for note, category_name in rows])

    async def update_note(
        self, db: AsyncSession, command: UpdateNoteCommand
    ) -> Result[NoteDto]:
        """Owner-only partial update; nothing is changed unless every check passes."""
        note = await note_repository.get_by_id(db, command.note_id)
        if note is None:
            return Err(NotFoundError("note", command.note_id))

        if note.user_id != command.caller_id:
            logger.warning(
                "User %s attempted to update note %s owned by another user",
                command.caller_id,
                command.note_id,
            )
            return Err(UnauthorizedError("You do not have permission to update this note."))

        # Validate everything before touching the entity
        if command.title and len(command.title) > NOTE_TITLE_MAX_LENGTH:
            return Err(NoteOperationError(TITLE_TOO_LONG, note_id=note.id))

        change = command.category
        if isinstance(change, SetTo):
            target = await category_repository.get_by_id(db, change.category_id)
            if not _usable_by(target, command.caller_id):
                return _invalid_category(change.category_id)

        if command.title:
            note.title = command.title
        if command.content:
            note.content_markdown = command.content
        if isinstance(change, SetTo):
            note.category_id = change.category_id
        elif isinstance(change, Cleared):
            note.category_id = None

        updated = await note_repository.update(db, note)
        if updated is None:
            return Err(
                NoteOperationError(
                    f"Failed to update the note with ID {command.note_id}",
                    note_id=command.note_id,
                )
            )

        logger.info("Note %s updated by user %s", updated.id, command.caller_id)
        return Ok(to_note_dto(updated, await self._category_name(db, updated.category_id)))

    async def delete_note(self, db: AsyncSession, command: DeleteNoteCommand) -> Result[bool]:
        """Owner-only delete. Ok(False) when the row was already gone."""
        note = await note_repository.get_by_id(db, command.note_id)
        if note is None:
            return Err(NotFoundError("note", command.note_id))

        if note.user_id != command.caller_id:
            logger.warning(
                "User %s attempted to delete note %s owned by another user",
                command.caller_id,
                command.note_id,
            )
            return Err(UnauthorizedError("You do not have permission to delete this note."))

        deleted = await note_repository.delete(db, note.id)
        if deleted:
            logger.info("Note %s deleted by user %s", note.id, command.caller_id)
        return Ok(deleted)

    async def _category_name(self, db: AsyncSession, category_id: Optional[UUID]) -> Optional[str]:
        if category_id is None:
            return None
        category = await category_repository.get_by_id(db, category_id)
        return category.name if category else None

    @staticmethod
    def _visible_to(note: Note, caller_id: Optional[str]) -> bool:
        return not settings.scope_reads_to_owner or note.user_id == caller_id


note_service = NoteService()
