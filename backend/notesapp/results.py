"""
NotesApp Backend — Handler Results
====================================

What:  Tagged result type returned by every command/query handler.
Why:   Not-found, ownership and validation outcomes are ordinary results of a
       handler, not exceptional control flow. The HTTP boundary decides how
       each outcome is rendered.
How:   A handler returns `Ok(value)` or `Err(error)` where `error` is one of the
       kinds in `notesapp.exceptions`. Routes call `unwrap()`: Ok yields its
       value, Err raises its error for the registered exception handlers.

Example:
    result = await note_service.get_note(db, query)
    if result.is_ok:
        ...
    note = result.unwrap()  # raises NotFoundError etc. on Err
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from notesapp.exceptions import NotesAppError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: NotesAppError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err]
