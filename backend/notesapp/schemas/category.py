"""
NotesApp Backend — Category Request/Response Schemas
======================================================
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from notesapp.schemas.common import CamelModel
from notesapp.schemas.note import NoteDto


class CategoryCreateRequest(CamelModel):
    """Body of POST /api/categories."""
    name: Optional[str] = Field(
        default=None,
        description="Category name (required, max 100 chars)",
    )


class CategoryUpdateRequest(CamelModel):
    """Body of PUT /api/categories/{id}. An empty name leaves the name unchanged."""
    name: Optional[str] = Field(default=None)


class CategoryDto(CamelModel):
    id: uuid.UUID
    name: str
    created: datetime
    last_modified: datetime


class CategoryWithNotesDto(CamelModel):
    """A category together with every note that references it."""
    id: uuid.UUID
    name: str
    notes: List[NoteDto] = Field(default_factory=list)
