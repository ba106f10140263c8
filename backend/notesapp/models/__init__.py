# Models package init
"""
Importing this package registers every table with Base.metadata
(used by Alembic autogenerate and by the test suite's create_all).
"""

from notesapp.models.user import User
from notesapp.models.category import Category
from notesapp.models.note import Note

__all__ = ["User", "Category", "Note"]
