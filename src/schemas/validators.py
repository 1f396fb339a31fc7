"""
Shared validation functions for request handling.

These checks produce the specific error types the API reports (missing-url,
invalid-email, ...), so handlers call them directly instead of relying on
schema-level validation errors.
"""
import re
from urllib.parse import urlparse
from uuid import UUID

# From MDN: https://developer.mozilla.org/en-US/docs/Web/HTML/Element/input/email#basic_validation
EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$",
)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

MIN_PASSWORD_LENGTH = 8


def is_valid_url(url: str) -> bool:
    """Return True for absolute URLs with a scheme and a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


def is_valid_email(email: str) -> bool:
    """Return True if the email matches the MDN basic validation pattern."""
    return bool(EMAIL_PATTERN.match(email))


def is_valid_password(password: str) -> bool:
    """Return True if the password is long enough."""
    return len(password) >= MIN_PASSWORD_LENGTH


def parse_uuid(value: UUID | str) -> UUID | None:
    """Parse a canonical hyphenated UUID string. Returns None when malformed."""
    if isinstance(value, UUID):
        return value
    if not isinstance(value, str) or not UUID_PATTERN.match(value):
        return None
    return UUID(value)
