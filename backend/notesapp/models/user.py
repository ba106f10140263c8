"""
NotesApp Backend — User SQLAlchemy Model
==========================================

What:  ORM model representing the `users` table.
Who:   Written by the identity collaborator at registration; read at login.

Table Design Rationale:
    - id: opaque string (UUID text) so session claims carry it verbatim
    - normalized_email / normalized_username: lower-cased lookup keys with
      unique indexes; the display values keep the casing the user typed
    - password_hash: passlib-encoded hash string, never the plaintext
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from notesapp.database import Base, utcnow


def normalize_key(value: str) -> str:
    """Lookup key for emails and usernames (case-insensitive uniqueness)."""
    return value.strip().lower()


class User(Base):
    """
    Identity subject. Owns notes and categories through their user_id columns;
    there are no ORM back-references.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )

    username: Mapped[str] = mapped_column(String(256), nullable=False)
    normalized_username: Mapped[str] = mapped_column(
        String(256), nullable=False, unique=True, index=True,
    )

    email: Mapped[str] = mapped_column(String(256), nullable=False)
    normalized_email: Mapped[str] = mapped_column(
        String(256), nullable=False, unique=True, index=True,
    )

    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
