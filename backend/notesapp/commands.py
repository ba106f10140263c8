"""
NotesApp Backend — Commands and Queries
=========================================

What:  Plain request objects consumed by the handlers in `notesapp.services`.
Why:   The HTTP boundary builds one of these per request, stamping the
       authenticated caller's id onto it. Handlers never look at the request
       context themselves.

CategoryChange:
    A note update must tell apart "leave the category alone", "remove the
    category" and "move to category X". Each is its own type:

        Unchanged()      → keep note.category_id as is
        Cleared()        → note.category_id = None
        SetTo(id)        → note.category_id = id (category must exist)
"""

from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID


# ── Note category change (sum type) ──────────────────────────────────────

@dataclass(frozen=True)
class Unchanged:
    pass


@dataclass(frozen=True)
class Cleared:
    pass


@dataclass(frozen=True)
class SetTo:
    category_id: UUID


CategoryChange = Union[Unchanged, Cleared, SetTo]

UNCHANGED = Unchanged()
CLEARED = Cleared()


# ── Auth ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RegisterCommand:
    email: str
    password: str
    username: str


@dataclass(frozen=True)
class LoginCommand:
    email: str
    password: str


# ── Categories ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateCategoryCommand:
    name: Optional[str]
    caller_id: Optional[str]


@dataclass(frozen=True)
class GetCategoryByIdQuery:
    category_id: UUID
    caller_id: Optional[str] = None


@dataclass(frozen=True)
class GetAllCategoriesQuery:
    caller_id: Optional[str] = None


@dataclass(frozen=True)
class UpdateCategoryCommand:
    category_id: UUID
    name: Optional[str]
    caller_id: Optional[str]


@dataclass(frozen=True)
class DeleteCategoryCommand:
    category_id: UUID
    caller_id: Optional[str]


# ── Notes ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CreateNoteCommand:
    title: Optional[str]
    caller_id: Optional[str]
    content_markdown: Optional[str] = None
    category_id: Optional[UUID] = None


@dataclass(frozen=True)
class GetNoteByIdQuery:
    note_id: UUID
    caller_id: Optional[str] = None


@dataclass(frozen=True)
class GetAllNotesQuery:
    caller_id: Optional[str] = None


@dataclass(frozen=True)
class UpdateNoteCommand:
    note_id: UUID
    caller_id: Optional[str]
    title: Optional[str] = None
    content: Optional[str] = None
    category: CategoryChange = UNCHANGED


@dataclass(frozen=True)
class DeleteNoteCommand:
    note_id: UUID
    caller_id: Optional[str]
