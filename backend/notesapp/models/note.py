"""
NotesApp Backend — Note SQLAlchemy Model
==========================================

What:  ORM model representing the `notes` table.
Who:   Used by the note repository for CRUD operations and by Alembic for
       schema management.

Table Design Rationale:
    - UUID primary key: non-sequential, cannot be enumerated
    - content_markdown: TEXT, required but may be empty
    - category_id: optional foreign key; must reference an existing category
      at assignment time (checked by the note handlers)
    - created / last_modified: timezone-aware UTC

Query Patterns:
    - Notes of one category: WHERE category_id = :id → idx_notes_category_id
    - Notes of one owner:    WHERE user_id = :id     → idx_notes_user_id
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from notesapp.database import Base, utcnow

NOTE_TITLE_MAX_LENGTH = 200


class Note(Base):
    """
    A markdown document owned by exactly one user, optionally placed in one
    category.

    Lifecycle:
        1. Created by the owner (optionally with a category)
        2. Any subset of title, content and category updated by the owner
        3. Deleted by the owner
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        String(NOTE_TITLE_MAX_LENGTH),
        nullable=False,
    )

    content_markdown: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
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

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=False,
    )

    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        ForeignKey("categories.id"),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_notes_user_id", "user_id"),
        Index("idx_notes_category_id", "category_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title='{self.title}', "
            f"category_id={self.category_id})>"
        )
