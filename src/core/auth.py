"""Cookie-session authentication."""
import logging

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import ApiError, DomainError
from db.session import get_async_session
from models.user import User
from schemas.validators import parse_uuid
from stores.user_store import UserStore

logger = logging.getLogger(__name__)

# Key under which the signed session cookie stores the user's id
SESSION_USER_KEY = "user_id"


def log_in(request: Request, user: User) -> None:
    """Bind the session to `user`."""
    request.session[SESSION_USER_KEY] = str(user.id)


def log_out(request: Request) -> None:
    """Forget whoever is bound to the session."""
    request.session.clear()


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Resolve the session's user.

    Raises:
        ApiError: 400 not-logged-in when the session has no user, or names a
            user that no longer exists.
    """
    user_id = parse_uuid(request.session.get(SESSION_USER_KEY))
    if user_id is None:
        raise ApiError(400, "not-logged-in", "You must be logged in")

    user = await UserStore(db).get_user_by_id(user_id)
    if isinstance(user, DomainError):
        if user.kind != "does-not-exist":
            raise ApiError(500, "user-fetch-error", user.message)
        logger.info("Session referenced missing user %s", user_id)
        log_out(request)
        raise ApiError(400, "not-logged-in", "You must be logged in")
    return user
