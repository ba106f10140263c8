"""
NotesApp Backend — Authentication Routes
==========================================

What:  POST /api/auth/register, /api/auth/login and /api/auth/logout.
How:   Handlers decide the outcome; this module turns it into HTTP:
       status code, JSON body and the session cookie.

Responses:
    register  200 {"message"} + Set-Cookie   |  400 {"errors": [...]}
    login     200 {"message"} + Set-Cookie   |  401 {"message": "Invalid credentials"}
    logout    204, session cookie cleared
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.auth.session import clear_session_cookie, issue_session_cookie
from notesapp.commands import LoginCommand, RegisterCommand
from notesapp.database import get_db_session
from notesapp.schemas.auth import LoginRequest, RegisterErrorResponse, RegisterRequest
from notesapp.schemas.common import MessageResponse
from notesapp.services.auth_service import auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    responses={400: {"description": "Registration rejected", "model": RegisterErrorResponse}},
    summary="Create an account and sign in",
)
async def register(
    body: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
):
    """Create the account; on success the new user is signed in. 400 lists every failed rule."""
    result = await auth_service.register(
        db,
        RegisterCommand(email=body.email, password=body.password, username=body.username),
    )
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=RegisterErrorResponse(errors=result.errors).model_dump(by_alias=True),
        )

    issue_session_cookie(response, result.principal)
    return MessageResponse(message="Registered and logged in successfully")


@router.post(
    "/login",
    response_model=MessageResponse,
    responses={401: {"description": "Invalid credentials", "model": MessageResponse}},
    summary="Sign in with email and password",
)
async def login(
    body: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
):
    """Sign in. Unknown email and wrong password both give the same 401."""
    result = await auth_service.login(db, LoginCommand(email=body.email, password=body.password))
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content=MessageResponse(message=result.message).model_dump(by_alias=True),
        )

    issue_session_cookie(response, result.principal)
    return MessageResponse(message="Logged in successfully")


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Sign out",
)
async def logout(response: Response) -> None:
    """Expire the session cookie."""
    clear_session_cookie(response)
