"""Entity → DTO projections shared by the note and category handlers."""

from datetime import datetime, timezone
from typing import Optional

from notesapp.models.category import Category
from notesapp.models.note import Note
from notesapp.schemas.category import CategoryDto
from notesapp.schemas.note import NoteDto


def as_utc(value: datetime) -> datetime:
    """SQLite drops the offset on read; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_category_dto(category: Category) -> CategoryDto:
    return CategoryDto(
        id=category.id,
        name=category.name,
        created=as_utc(category.created),
        last_modified=as_utc(category.last_modified),
    )


def to_note_dto(note: Note, category_name: Optional[str] = None) -> NoteDto:
    return NoteDto(
        id=note.id,
        title=note.title,
        content=note.content_markdown,
        category_id=str(note.category_id) if note.category_id else "",
        category_name=category_name or "",
        created=as_utc(note.created),
        last_modified=as_utc(note.last_modified),
    )
