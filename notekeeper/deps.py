"""
Notekeeper Backend - Dependency Injection
===========================================

What:  FastAPI dependencies that assemble stores and services per request
       and resolve the caller of protected routes.
How:   The request's AsyncSession (cached by FastAPI for the whole request)
       is wrapped in stores; services receive the stores plus settings.

Tests replace `get_db_session` through `app.dependency_overrides` and get
the whole chain pointed at their own database.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.config import settings
from notekeeper.database import get_db_session
from notekeeper.models.user import User
from notekeeper.services.auth_service import Authenticator
from notekeeper.services.note_service import NoteService
from notekeeper.stores.notes import NoteStore
from notekeeper.stores.users import UserStore

# auto_error=False: a missing or non-Bearer header reaches verify() as None
# and fails with the same 401 as a bad token
bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Session token returned by /api/register or /api/login",
)


def get_authenticator(db: AsyncSession = Depends(get_db_session)) -> Authenticator:
    """Authenticator bound to this request's credential store."""
    return Authenticator(
        users=UserStore(db),
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
        hash_rounds=settings.bcrypt_rounds,
    )


def get_note_service(db: AsyncSession = Depends(get_db_session)) -> NoteService:
    """NoteService bound to this request's note store."""
    return NoteService(notes=NoteStore(db))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    authenticator: Authenticator = Depends(get_authenticator),
) -> User:
    """
    Resolve `Authorization: Bearer <token>` to the calling User.

    Raises:
        AuthenticationError: No token, or a token verify() rejects (→ 401)
    """
    token = credentials.credentials if credentials else None
    return await authenticator.verify(token)
