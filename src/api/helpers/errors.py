"""Mapping of domain error values to HTTP error responses."""
from core.errors import ApiError, DomainError, ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    "does-not-exist": 404,
    "already-exists": 400,
    "already-has-label": 400,
    "already-has-bookmark": 400,
    "does-not-have-label": 404,
    "does-not-have-bookmark": 404,
    "invalid-credentials": 400,
}


def to_api_error(error: DomainError, generic_type: str | None = None) -> ApiError:
    """
    Convert a DomainError into an ApiError.

    Unclassified kinds become 500. For those, `generic_type` replaces the
    default `<entity>-error` type so the response names the failed operation
    (e.g. 'bookmark-creation-error').
    """
    status_code = STATUS_BY_KIND.get(error.kind, 500)
    error_type = error.type
    if status_code == 500 and generic_type is not None:
        error_type = generic_type
    return ApiError(status_code, error_type, error.message)
