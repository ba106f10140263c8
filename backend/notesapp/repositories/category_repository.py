"""
NotesApp Backend — Category Repository
========================================

What:  Data access for the `categories` table. No business rules.
How:   Stateless; every method receives the request's AsyncSession and
       flushes (never commits). The session dependency commits at the end of
       the request.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, desc, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from notesapp.database import utcnow
from notesapp.models.category import Category

logger = logging.getLogger(__name__)


class CategoryRepository:

    async def create(self, db: AsyncSession, category: Category) -> Category:
        db.add(category)
        await db.flush()  # Assigns defaults and surfaces constraint errors now
        return category

    async def list_all(
        self, db: AsyncSession, owner_id: Optional[str] = None
    ) -> List[Category]:
        """Every category, newest first; restricted to one owner when given."""
        query = select(Category).order_by(desc(Category.created))
        if owner_id is not None:
            query = query.where(Category.user_id == owner_id)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, db: AsyncSession, category_id: UUID) -> Optional[Category]:
        result = await db.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def update(self, db: AsyncSession, category: Category) -> Optional[Category]:
        """
        Persists pending changes and refreshes last_modified.

        Returns None when the row no longer exists (deleted by a concurrent
        request between load and flush).
        """
        category.last_modified = utcnow()
        try:
            await db.flush()
        except StaleDataError:
            logger.warning("Category %s vanished before update could be flushed", category.id)
            return None
        return category

    async def delete(self, db: AsyncSession, category_id: UUID) -> bool:
        """Deletes by id. False when no row matched."""
        result = await db.execute(
            delete(Category).where(Category.id == category_id)
        )
        return result.rowcount > 0


# ── Singleton Instance ────────────────────────────────────────────────────
category_repository = CategoryRepository()
