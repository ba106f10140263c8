"""
NotesApp Backend — Authentication Schemas
===========================================
"""

from typing import List

from pydantic import Field

from notesapp.schemas.common import CamelModel


class RegisterRequest(CamelModel):
    email: str
    password: str
    username: str


class LoginRequest(CamelModel):
    email: str
    password: str


class RegisterErrorResponse(CamelModel):
    """400 body of POST /api/auth/register: one message per failed rule."""
    errors: List[str] = Field(default_factory=list)
