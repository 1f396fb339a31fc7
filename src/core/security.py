"""Password hashing primitives (PBKDF2-SHA256 with a per-user salt)."""
import hashlib
import hmac
import secrets

from core.config import get_settings

HASH_NAME = "sha256"
KEY_LENGTH = 32


def generate_salt() -> str:
    """Return a fresh random salt, hex encoded."""
    return secrets.token_hex(16)


def hash_password(password: str, salt: str, iterations: int | None = None) -> str:
    """Derive the hex digest stored in users.hashed_password."""
    if iterations is None:
        iterations = get_settings().password_hash_iterations
    digest = hashlib.pbkdf2_hmac(
        HASH_NAME,
        password.encode(),
        salt.encode(),
        iterations,
        dklen=KEY_LENGTH,
    )
    return digest.hex()


def verify_password(
    hashed_password: str,
    password: str,
    salt: str,
    iterations: int | None = None,
) -> bool:
    """Constant-time comparison of a stored digest against a candidate password."""
    candidate = hash_password(password, salt, iterations)
    return hmac.compare_digest(hashed_password, candidate)
