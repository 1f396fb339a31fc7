"""Ownership gate applied before any handler touches a referenced entity."""
from api.helpers.errors import to_api_error
from core.errors import ApiError, DomainError, EntityName


def require_ownership(result: bool | DomainError, entity: EntityName) -> None:
    """
    Interpret an `is_owner` result.

    Raises:
        ApiError: 404 `<entity>-does-not-exist` for an unknown id, 403
            `forbidden-access-to-<entity>` when another user owns it, or 500 if
            the check itself failed.
    """
    if isinstance(result, DomainError):
        raise to_api_error(result, f"{entity}-fetch-error")
    if not result:
        raise ApiError(403, f"forbidden-access-to-{entity}", f"You do not have access to this {entity}")
