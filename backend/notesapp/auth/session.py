"""
NotesApp Backend — Cookie Sessions
====================================

What:  Issues, reads and renews the login session.
How:   The session is a signed JWT (PyJWT, HS256 by default) stored in an
       HTTP-only, SameSite=Strict cookie. Claims:

           sub    user id (the only authorization key)
           email  user email
           name   username
           iat    issued-at (seconds)
           exp    expiry (iat + SESSION_LIFETIME_DAYS)

Sliding expiration:
    `get_current_user` re-issues the cookie on the outgoing response once more
    than half of the lifetime has elapsed since `iat`, so active users stay
    signed in while idle sessions still expire.

Identity flows one way: routes depend on `get_current_user` and copy
`principal.user_id` into the command they dispatch.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.config import settings
from notesapp.database import get_db_session
from notesapp.exceptions import UnauthorizedError
from notesapp.repositories.user_repository import user_repository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionPrincipal:
    user_id: str
    email: str
    username: str


def create_session_token(
    principal: SessionPrincipal, issued_at: Optional[datetime] = None
) -> str:
    now = issued_at or datetime.now(timezone.utc)
    expires = now + timedelta(days=settings.session_lifetime_days)
    payload = {
        "sub": principal.user_id,
        "email": principal.email,
        "name": principal.username,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> Dict[str, Any]:
    """Raises jwt.InvalidTokenError (or a subclass) on a bad or expired token."""
    return jwt.decode(
        token,
        settings.session_secret,
        algorithms=[settings.session_algorithm],
        options={"require": ["sub", "iat", "exp"]},
    )


def issue_session_cookie(
    response: Response,
    principal: SessionPrincipal,
    issued_at: Optional[datetime] = None,
) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(principal, issued_at),
        max_age=settings.session_lifetime_seconds,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="strict",
    )


def _should_renew(claims: Dict[str, Any]) -> bool:
    issued_at = datetime.fromtimestamp(claims["iat"], tz=timezone.utc)
    elapsed = datetime.now(timezone.utc) - issued_at
    return elapsed.total_seconds() > settings.session_lifetime_seconds / 2


async def get_current_user(
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> SessionPrincipal:
    """
    FastAPI dependency resolving the signed-in user from the session cookie.

    Raises:
        UnauthorizedError: cookie missing, tampered with, or expired, or the
            account it names no longer exists (→ 401)
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthorizedError("Authentication required.")

    try:
        claims = decode_session_token(token)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Session has expired. Please log in again.")
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected session cookie: %s", type(e).__name__)
        raise UnauthorizedError("Session is invalid. Please log in again.")

    if await user_repository.get_by_id(db, str(claims["sub"])) is None:
        logger.warning("Session cookie names unknown user %s", claims["sub"])
        raise UnauthorizedError("Session is invalid. Please log in again.")

    principal = SessionPrincipal(
        user_id=str(claims["sub"]),
        email=claims.get("email", ""),
        username=claims.get("name", ""),
    )

    if _should_renew(claims):
        issue_session_cookie(response, principal)
        logger.debug("Session renewed for user %s", principal.user_id)

    return principal
