"""
Typed domain error values.

Stores and services never raise for expected failures. They return either the
success payload or a DomainError, and callers branch on `kind`. Only the API
layer turns these into HTTP responses (see api/helpers/errors.py).
"""
from dataclasses import dataclass
from typing import Literal

EntityName = Literal["bookmark", "label", "list", "user"]

ErrorKind = Literal[
    "error",                   # Unclassified storage failure
    "does-not-exist",          # Lookup by id found no row
    "already-exists",          # Unique constraint on the entity itself (url, email)
    "already-has-label",       # bookmark/label pair already joined
    "does-not-have-label",     # bookmark/label pair not joined
    "label-error",             # Unclassified failure on the bookmark/label join
    "already-has-bookmark",    # list/bookmark pair already joined
    "does-not-have-bookmark",  # list/bookmark pair not joined
    "invalid-credentials",     # Login with unknown email or wrong password
]


@dataclass(frozen=True)
class DomainError:
    """An expected failure of a store or service operation."""

    entity: EntityName
    kind: ErrorKind
    message: str

    @property
    def type(self) -> str:
        """Wire identifier, e.g. 'bookmark-does-not-exist' or 'list-error'."""
        return f"{self.entity}-{self.kind}"


class ApiError(Exception):
    """
    An error response.

    Raised by handlers and dependencies; the application's exception handler
    renders it as {"error": {"type": ..., "message": ...}} with `status_code`.
    """

    def __init__(self, status_code: int, error_type: str, message: str) -> None:
        self.status_code = status_code
        self.error_type = error_type
        self.message = message
        super().__init__(message)
