"""
NotesApp Backend — Custom Exception Hierarchy
===============================================

What:  Defines application-specific error kinds for different failure scenarios.
Why:   Each kind maps to exactly one HTTP status code at the API boundary.
How:   Each exception class carries a message, an optional context dict and a
       machine-readable error code. Handlers RETURN these wrapped in
       `notesapp.results.Err`; routes unwrap results, which raises the error,
       and the global exception handlers registered in main.py turn it into a
       structured JSON response.

Exception Hierarchy:
    NotesAppError (base)
    ├── NotFoundError            → 404 Not Found
    ├── UnauthorizedError        → 401 Unauthorized (not owner / not signed in)
    ├── InvalidOperationError    → 400 Bad Request (e.g. delete non-empty category)
    ├── NoteOperationError       → 400 Bad Request
    └── CategoryOperationError   → 400 Bad Request

Database failures are not wrapped: SQLAlchemyError propagates to its own
handler (500, generic message).
"""

from typing import Any, Dict, Optional
from uuid import UUID


class NotesAppError(Exception):
    """
    Base exception for all NotesApp application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    error_code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(NotesAppError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found

    The message is derived from the resource name and id unless an explicit
    message is supplied (e.g. "Invalid CategoryId." when a note references a
    category that does not exist).
    """

    error_code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource.capitalize()} with ID {resource_id} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class UnauthorizedError(NotesAppError):
    """
    Raised when the caller is not authenticated or does not own the resource.

    HTTP: 401 Unauthorized
    """

    error_code = "unauthorized"

    def __init__(
        self,
        message: str = "You do not have permission to perform this action.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InvalidOperationError(NotesAppError):
    """
    Raised when an operation is not allowed in the resource's current state.

    HTTP: 400 Bad Request
    When: Deleting a category that still has notes.
    """

    error_code = "invalid_operation"

    def __init__(
        self,
        message: str = "The operation is not valid for the current state.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NoteOperationError(NotesAppError):
    """Raised when a note cannot be created or persisted. HTTP 400."""

    error_code = "note_operation_error"

    def __init__(
        self,
        message: str = "The note operation failed.",
        note_id: Optional[UUID] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if note_id is not None:
            ctx["note_id"] = str(note_id)
        super().__init__(message=message, context=ctx)
        self.note_id = note_id


class CategoryOperationError(NotesAppError):
    """Raised when a category cannot be created or persisted. HTTP 400."""

    error_code = "category_operation_error"

    def __init__(
        self,
        message: str = "The category operation failed.",
        category_id: Optional[UUID] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if category_id is not None:
            ctx["category_id"] = str(category_id)
        super().__init__(message=message, context=ctx)
        self.category_id = category_id
