"""API helper utilities."""
from api.helpers.errors import STATUS_BY_KIND, to_api_error
from api.helpers.ownership import require_ownership

__all__ = [
    "STATUS_BY_KIND",
    "require_ownership",
    "to_api_error",
]
