"""
NotesApp Backend — Note Repository
====================================

What:  Data access for the `notes` table. No business rules.

Category names:
    Note DTOs carry the name of their category. Listing queries resolve it
    with a LEFT OUTER JOIN and return (note, category_name) pairs, where the
    name is None for notes without a category.

Query plans:
    list_by_category / count_by_category → idx_notes_category_id
    list_all(owner_id=...)               → idx_notes_user_id
"""

import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import delete, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from notesapp.database import utcnow
from notesapp.models.category import Category
from notesapp.models.note import Note

logger = logging.getLogger(__name__)


class NoteRepository:

    async def create(self, db: AsyncSession, note: Note) -> Note:
        db.add(note)
        await db.flush()
        return note

    async def list_all(
        self, db: AsyncSession, owner_id: Optional[str] = None
    ) -> List[Tuple[Note, Optional[str]]]:
        """Every note with its category name, newest first."""
        query = (
            select(Note, Category.name)
            .outerjoin(Category, Note.category_id == Category.id)
            .order_by(desc(Note.created))
        )
        if owner_id is not None:
            query = query.where(Note.user_id == owner_id)
        result = await db.execute(query)
        return [(note, category_name) for note, category_name in result.all()]

    async def list_by_category(self, db: AsyncSession, category_id: UUID) -> List[Note]:
        result = await db.execute(
            select(Note)
            .where(Note.category_id == category_id)
            .order_by(desc(Note.created))
        )
        return list(result.scalars().all())

    async def count_by_category(self, db: AsyncSession, category_id: UUID) -> int:
        result = await db.execute(
            select(func.count(Note.id)).where(Note.category_id == category_id)
        )
        return result.scalar() or 0

    async def get_by_id(self, db: AsyncSession, note_id: UUID) -> Optional[Note]:
        result = await db.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def update(self, db: AsyncSession, note: Note) -> Optional[Note]:
        """
        Persists pending changes and refreshes last_modified.

        Returns None when the row no longer exists at flush time.
        """
        note.last_modified = utcnow()
        try:
            await db.flush()
        except StaleDataError:
            logger.warning("Note %s vanished before update could be flushed", note.id)
            return None
        return note

    async def delete(self, db: AsyncSession, note_id: UUID) -> bool:
        result = await db.execute(delete(Note).where(Note.id == note_id))
        return result.rowcount > 0


# ── Singleton Instance ────────────────────────────────────────────────────
note_repository = NoteRepository()
