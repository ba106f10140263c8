"""
NotesApp Backend — Category SQLAlchemy Model
==============================================

What:  ORM model representing the `categories` table.

Lifecycle:
    1. Created by its owner
    2. Renamed by its owner (last_modified refreshed by the repository)
    3. Deleted by its owner only while no note references it. The guard lives
       in the category handlers, not in a database cascade.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notesapp.database import Base, utcnow

CATEGORY_NAME_MAX_LENGTH = 100


class Category(Base):
    """A named grouping of notes, owned by exactly one user."""

    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(
        String(CATEGORY_NAME_MAX_LENGTH),
        nullable=False,
    )

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    last_modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    # Owner. Explicit foreign key; resolved through the user repository.
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', user_id='{self.user_id}')>"
