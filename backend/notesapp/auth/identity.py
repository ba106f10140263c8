"""
NotesApp Backend — Identity Management
========================================

What:  Creates and verifies user accounts.
Why:   Account rules (email shape, username alphabet, password policy,
       hashing) live here so the auth handlers only orchestrate.
How:   `UserManager.create()` returns an IdentityResult instead of raising:
       every failed rule becomes one human-readable message that the
       register endpoint returns verbatim.
"""

import logging
import string
from dataclasses import dataclass, field
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.auth.passwords import (
    dummy_verify,
    hash_password,
    validate_password,
    verify_password,
)
from notesapp.models.user import User, normalize_key
from notesapp.repositories.user_repository import user_repository

logger = logging.getLogger(__name__)

ALLOWED_USERNAME_CHARACTERS = frozenset(string.ascii_letters + string.digits + "-._@+")


@dataclass
class IdentityResult:
    succeeded: bool
    errors: List[str] = field(default_factory=list)

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, errors: List[str]) -> "IdentityResult":
        return cls(succeeded=False, errors=list(errors))


def _is_valid_email(email: str) -> bool:
    """Syntax check only; no DNS lookup for the domain."""
    if not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


class UserManager:
    """
    Account operations used by the auth handlers.

    Email uniqueness is checked by the register handler before calling
    create(); the unique index still guards against concurrent registrations.
    """

    async def find_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        if not email:
            return None
        return await user_repository.get_by_email(db, email)

    async def create(self, db: AsyncSession, user: User, password: str) -> IdentityResult:
        """Validates the account and password, then persists the user."""
        errors: List[str] = []

        if not _is_valid_email(user.email):
            errors.append(f"Email '{user.email}' is invalid.")

        if not user.username or any(
            c not in ALLOWED_USERNAME_CHARACTERS for c in user.username
        ):
            errors.append(
                f"Username '{user.username}' is invalid, can only contain letters or digits."
            )
        elif await user_repository.get_by_username(db, user.username) is not None:
            errors.append(f"Username '{user.username}' is already taken.")

        errors.extend(validate_password(password))

        if errors:
            logger.info("Registration rejected for %s: %d rule(s) failed", user.email, len(errors))
            return IdentityResult.failed(errors)

        user.normalized_email = normalize_key(user.email)
        user.normalized_username = normalize_key(user.username)
        user.password_hash = hash_password(password)

        try:
            await user_repository.add(db, user)
        except IntegrityError:
            # Lost a uniqueness race. Registration has written nothing else in
            # this transaction, so rolling it back leaves the session usable.
            await db.rollback()
            logger.warning("Concurrent registration detected for %s", user.email)
            return IdentityResult.failed(["User already exists"])

        logger.info("User %s created", user.id)
        return IdentityResult.success()

    async def check_password(self, user: Optional[User], password: str) -> bool:
        """Verifies the password; for a missing user still spends hashing time."""
        if user is None:
            dummy_verify()
            return False
        return verify_password(password, user.password_hash)


user_manager = UserManager()
