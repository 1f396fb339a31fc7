"""Service layer for signup and login."""

from core.errors import DomainError
from core.security import generate_salt, hash_password, verify_password
from models.user import User
from stores.user_store import UserStore


class UserService:
    """Account operations. Owns password hashing so stores only see digests."""

    def __init__(self, store: UserStore) -> None:
        self._store = store

    async def signup(self, *, email: str, password: str) -> User | DomainError:
        """Create a user with a freshly salted password hash."""
        salt = generate_salt()
        return await self._store.signup(
            email=email,
            hashed_password=hash_password(password, salt),
            salt=salt,
        )

    async def authenticate(self, *, email: str, password: str) -> User | DomainError:
        """
        Verify credentials.

        Unknown email and wrong password both return `invalid-credentials` so
        callers cannot tell which one failed.
        """
        user = await self._store.get_user_by_email(email)
        if isinstance(user, DomainError):
            if user.kind == "does-not-exist":
                return DomainError("user", "invalid-credentials", "Invalid email or password")
            return user
        if not verify_password(user.hashed_password, password, user.salt):
            return DomainError("user", "invalid-credentials", "Invalid email or password")
        return user
