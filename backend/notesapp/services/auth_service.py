"""
NotesApp Backend — Authentication Handlers
============================================

What:  Register and Login.
How:   Both return a result object rather than raising: identity validation
       failures are expected outcomes that the API reports as structured
       error lists. On success the result carries the SessionPrincipal; the
       route turns it into the session cookie, since issuing cookies is an
       HTTP concern.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.auth.identity import user_manager
from notesapp.auth.session import SessionPrincipal
from notesapp.commands import LoginCommand, RegisterCommand
from notesapp.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
USER_ALREADY_EXISTS = "User already exists"


@dataclass
class RegisterResult:
    success: bool
    errors: List[str] = field(default_factory=list)
    principal: Optional[SessionPrincipal] = None


@dataclass
class LoginResult:
    success: bool
    message: Optional[str] = None
    principal: Optional[SessionPrincipal] = None


class AuthService:

    async def register(self, db: AsyncSession, command: RegisterCommand) -> RegisterResult:
        """
        Create an account and sign it in.

        Returns:
            success=False, errors=["User already exists"] when the email is taken;
            success=False with the identity errors when validation fails;
            success=True with the principal to issue a session for otherwise.
        """
        existing = await user_manager.find_by_email(db, command.email)
        if existing is not None:
            logger.info("Registration refused: email already registered")
            return RegisterResult(success=False, errors=[USER_ALREADY_EXISTS])

        user = User(username=command.username, email=command.email)
        identity = await user_manager.create(db, user, command.password)
        if not identity.succeeded:
            return RegisterResult(success=False, errors=identity.errors)

        return RegisterResult(
            success=True,
            principal=SessionPrincipal(
                user_id=user.id,
                email=user.email or "",
                username=user.username or "",
            ),
        )

    async def login(self, db: AsyncSession, command: LoginCommand) -> LoginResult:
        """Unknown email and wrong password are indistinguishable to the caller."""
        user = await user_manager.find_by_email(db, command.email)
        if not await user_manager.check_password(user, command.password):
            logger.info("Failed login attempt")
            return LoginResult(success=False, message=INVALID_CREDENTIALS)

        logger.info("User %s logged in", user.id)
        return LoginResult(
            success=True,
            principal=SessionPrincipal(
                user_id=user.id,
                email=user.email or "",
                username=user.username or user.email or "",
            ),
        )


auth_service = AuthService()
