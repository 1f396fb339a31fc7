"""Store layer for users."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import DomainError
from models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """User persistence bound to one session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def signup(
        self,
        *,
        email: str,
        hashed_password: str,
        salt: str,
    ) -> User | DomainError:
        """Insert a user. A taken email returns `already-exists`."""
        user = User(email=email, hashed_password=hashed_password, salt=salt)
        try:
            async with self._db.begin_nested():
                self._db.add(user)
            await self._db.refresh(user)
        except IntegrityError as e:
            if "uq_users_email" in str(e):
                return DomainError("user", "already-exists", "A user with this email already exists")
            logger.exception("Failed to insert user")
            return DomainError("user", "error", "There was an error creating the user")
        except SQLAlchemyError:
            logger.exception("Failed to insert user")
            return DomainError("user", "error", "There was an error creating the user")
        return user

    async def get_user_by_email(self, email: str) -> User | DomainError:
        """Look up a user by exact email."""
        try:
            result = await self._db.execute(select(User).where(User.email == email))
        except SQLAlchemyError:
            logger.exception("Failed to fetch user by email")
            return DomainError("user", "error", "There was an error fetching the user")
        user = result.scalar_one_or_none()
        if user is None:
            return DomainError("user", "does-not-exist", "User does not exist")
        return user

    async def get_user_by_id(self, user_id: UUID) -> User | DomainError:
        """Look up a user by id."""
        try:
            user = await self._db.get(User, user_id)
        except SQLAlchemyError:
            logger.exception("Failed to fetch user %s", user_id)
            return DomainError("user", "error", "There was an error fetching the user")
        if user is None:
            return DomainError("user", "does-not-exist", "User does not exist")
        return user
