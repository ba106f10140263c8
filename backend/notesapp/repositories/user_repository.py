"""
NotesApp Backend — User Repository
====================================

Lookups go through the normalized (lower-cased) columns so email and username
matching is case-insensitive.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.models.user import User, normalize_key


class UserRepository:

    async def get_by_id(self, db: AsyncSession, user_id: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(
            select(User).where(User.normalized_email == normalize_key(email))
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(
            select(User).where(User.normalized_username == normalize_key(username))
        )
        return result.scalar_one_or_none()

    async def add(self, db: AsyncSession, user: User) -> User:
        db.add(user)
        await db.flush()
        return user


user_repository = UserRepository()
