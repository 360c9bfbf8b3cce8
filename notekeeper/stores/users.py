"""
Notekeeper Backend - Credential Store
=======================================

What:  Lookup and creation of User records.
Who:   Used only by the Authenticator.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import DatabaseError, DuplicateUserError
from notekeeper.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """
    Credential store backed by the `users` table.

    Args:
        session: The request's AsyncSession. The store flushes but never
                 commits; the session owner decides the transaction outcome.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_one(
        self,
        email: Optional[str] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> Optional[User]:
        """
        Return the single user matching every given filter, or None.

        Email comparison is exact; "A@x.com" and "a@x.com" are different
        accounts.
        """
        if email is None and user_id is None:
            raise ValueError("find_one() needs at least one filter")

        query = select(User)
        if email is not None:
            query = query.where(User.email == email)
        if user_id is not None:
            query = query.where(User.id == user_id)

        try:
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error looking up user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not look up the account. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def insert(self, email: str, password_hash: str) -> User:
        """
        Persist a new user and return it with its generated id.

        Raises:
            DuplicateUserError: The unique email index rejected the row
                                (a concurrent registration won the race).
            DatabaseError:      Any other database failure.
        """
        user = User(email=email, password_hash=password_hash)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            raise DuplicateUserError(email=email)
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the account. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return user
