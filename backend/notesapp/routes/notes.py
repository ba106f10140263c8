"""
NotesApp Backend — Notes Route Handlers
=========================================

What:  CRUD endpoints under /api/notes. Every route requires a session.
How:   Extract the body and path id, attach the caller's id, delegate to
       note_service and unwrap the result.

Update body semantics (PUT /api/notes/{id}):
    title / content     omitted, null or "" leave the field unchanged
    categoryId          omitted or null → unchanged
                        ""              → note no longer has a category
                        "<uuid>"        → move to that category (must exist)
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.auth.session import SessionPrincipal, get_current_user
from notesapp.commands import (
    CreateNoteCommand,
    DeleteNoteCommand,
    GetAllNotesQuery,
    GetNoteByIdQuery,
    UpdateNoteCommand,
)
from notesapp.database import get_db_session
from notesapp.exceptions import NotFoundError
from notesapp.schemas.common import ErrorResponse
from notesapp.schemas.note import NoteCreateRequest, NoteDto, NoteUpdateRequest
from notesapp.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notes", tags=["Notes"])

_errors = {
    400: {"description": "Rejected", "model": ErrorResponse},
    401: {"description": "Not signed in or not the owner", "model": ErrorResponse},
    404: {"description": "Note or category not found", "model": ErrorResponse},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteDto,
    responses=_errors,
    summary="Create a note",
)
async def create_note(
    body: NoteCreateRequest,
    request: Request,
    response: Response,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteDto:
    """Create a note for the signed-in user; Location points at the new note."""
    result = await note_service.create_note(
        db,
        CreateNoteCommand(
            title=body.title,
            content_markdown=body.content_markdown,
            category_id=body.category_id,
            caller_id=user.user_id,
        ),
    )
    note = result.unwrap()
    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id))
    return note


@router.get(
    "",
    response_model=List[NoteDto],
    responses=_errors,
    summary="List all notes",
)
async def list_notes(
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteDto]:
    """All notes, newest first, with their category names."""
    result = await note_service.list_notes(db, GetAllNotesQuery(caller_id=user.user_id))
    return result.unwrap()


@router.get(
    "/{note_id}",
    response_model=NoteDto,
    responses=_errors,
    summary="Get a single note by ID",
)
async def get_note(
    note_id: UUID,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteDto:
    """A single note with its category name."""
    result = await note_service.get_note(
        db, GetNoteByIdQuery(note_id=note_id, caller_id=user.user_id)
    )
    return result.unwrap()


@router.put(
    "/{note_id}",
    response_model=NoteDto,
    responses=_errors,
    summary="Partially update a note",
)
async def update_note(
    note_id: UUID,
    body: NoteUpdateRequest,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteDto:
    """Partial update; see NoteUpdateRequest for the categoryId states."""
    result = await note_service.update_note(
        db,
        UpdateNoteCommand(
            note_id=note_id,
            caller_id=user.user_id,
            title=body.title,
            content=body.content,
            category=body.category_change(),
        ),
    )
    return result.unwrap()


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_errors,
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    user: SessionPrincipal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> None:
    """Owner-only delete."""
    result = await note_service.delete_note(
        db, DeleteNoteCommand(note_id=note_id, caller_id=user.user_id)
    )
    if not result.unwrap():
        raise NotFoundError("note", note_id)
