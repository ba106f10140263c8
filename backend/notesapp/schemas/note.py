"""
NotesApp Backend — Note Request/Response Schemas
==================================================

What:  Pydantic models defining the notes API contract.
Why:   Request validation, camelCase serialization and OpenAPI generation.

Partial updates:
    PUT /api/notes/{id} distinguishes three states for `categoryId`:
        absent or null   → leave the association unchanged
        ""               → clear the association
        "<uuid>"         → move the note to that category
    `NoteUpdateRequest.category_change()` turns the request into the explicit
    `CategoryChange` value the update handler consumes.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from notesapp.commands import CLEARED, UNCHANGED, CategoryChange, SetTo
from notesapp.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreateRequest(CamelModel):
    """Body of POST /api/notes."""
    title: Optional[str] = Field(
        default=None,
        description="Note title (required, max 200 chars)",
    )
    content_markdown: Optional[str] = Field(
        default=None,
        description="Markdown body; defaults to an empty document",
    )
    category_id: Optional[uuid.UUID] = Field(
        default=None,
        description="Existing category to place the note in",
    )

    @field_validator("category_id", mode="before")
    @classmethod
    def empty_category_is_none(cls, v):
        """Clients commonly send "" for 'no category'."""
        if v == "":
            return None
        return v


class NoteUpdateRequest(CamelModel):
    """
    Body of PUT /api/notes/{id}.

    Empty or missing title/content leave the stored value unchanged.
    """
    title: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)
    category_id: Optional[str] = Field(
        default=None,
        description="Category UUID to set, \"\" to clear, omit to keep",
    )

    @field_validator("category_id")
    @classmethod
    def validate_category_id(cls, v: Optional[str]) -> Optional[str]:
        """Rejects values that are neither empty nor a UUID."""
        if v:
            try:
                uuid.UUID(v)
            except ValueError:
                raise ValueError(f"Invalid categoryId '{v}'. Must be a UUID or an empty string.")
        return v

    def category_change(self) -> CategoryChange:
        if self.category_id is None:
            return UNCHANGED
        if self.category_id == "":
            return CLEARED
        return SetTo(uuid.UUID(self.category_id))


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteDto(CamelModel):
    """
    What:  External representation of a note.
    Who:   Returned by every notes endpoint and embedded in CategoryWithNotesDto.

    categoryId / categoryName are empty strings when the note has no category.
    """
    id: uuid.UUID
    title: str
    content: str
    category_id: str = ""
    category_name: str = ""
    created: datetime
    last_modified: datetime
