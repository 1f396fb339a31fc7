"""List endpoints, including list membership."""
from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_bookmark_service, get_current_user, get_list_service
from api.helpers.errors import to_api_error
from api.helpers.ownership import require_ownership
from core.errors import ApiError, DomainError
from models.user import User
from schemas.bookmark import BookmarkListResponse
from schemas.bookmark_list import (
    ListBookmarkAdd,
    ListCollectionResponse,
    ListCreate,
    ListResponse,
    ListUpdate,
    SuccessResponse,
)
from schemas.validators import parse_uuid
from services.bookmark_service import BookmarkService
from services.list_service import ListService

router = APIRouter(prefix="/lists", tags=["lists"])


async def _require_list_owner(lists: ListService, list_id: str, user: User) -> UUID:
    """Run the list ownership gate and return the parsed id."""
    require_ownership(await lists.is_owner(list_id=list_id, user_id=user.id), "list")
    return UUID(list_id)


async def _require_bookmark_owner(
    bookmarks: BookmarkService,
    bookmark_id: str,
    user: User,
) -> UUID:
    """Run the bookmark ownership gate; a malformed id counts as unknown."""
    parsed_id = parse_uuid(bookmark_id)
    if parsed_id is None:
        raise ApiError(404, "bookmark-does-not-exist", "Bookmark does not exist")
    require_ownership(
        await bookmarks.is_owner(bookmark_id=parsed_id, user_id=user.id), "bookmark",
    )
    return parsed_id


@router.get("", response_model=ListCollectionResponse)
async def get_lists(
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
) -> ListCollectionResponse:
    """Get the current user's lists, newest first."""
    result = await lists.get_lists(current_user.id)
    if isinstance(result, DomainError):
        raise to_api_error(result, "list-fetch-error")
    return ListCollectionResponse(lists=result)


@router.post("", response_model=ListResponse)
async def create_list(
    data: ListCreate,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
) -> ListResponse:
    """Create a list."""
    if not data.name:
        raise ApiError(400, "missing-name", "missing name")
    bookmark_list = await lists.create_list(
        name=data.name, user_id=current_user.id, description=data.description,
    )
    if isinstance(bookmark_list, DomainError):
        raise to_api_error(bookmark_list, "list-creation-error")
    return ListResponse(list=bookmark_list)


@router.get("/{list_id}", response_model=BookmarkListResponse)
async def get_list_bookmarks(
    list_id: str,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
) -> BookmarkListResponse:
    """Get the bookmarks in a list, in the order they were added, with their labels."""
    parsed_id = await _require_list_owner(lists, list_id, current_user)
    result = await lists.get_bookmarks_in_list(parsed_id)
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return BookmarkListResponse(bookmarks=result)


@router.put("/{list_id}", response_model=ListResponse)
async def update_list(
    list_id: str,
    data: ListUpdate,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
) -> ListResponse:
    """Update a list's name and/or description."""
    fields = data.model_dump(exclude_unset=True)
    if "name" in fields and not data.name:
        raise ApiError(400, "invalid-name", "name cannot be empty")

    parsed_id = await _require_list_owner(lists, list_id, current_user)
    bookmark_list = await lists.update_list(parsed_id, fields)
    if isinstance(bookmark_list, DomainError):
        raise to_api_error(bookmark_list)
    return ListResponse(list=bookmark_list)


@router.delete("/{list_id}", response_model=SuccessResponse)
async def delete_list(
    list_id: str,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
) -> SuccessResponse:
    """Delete a list. Its bookmarks are kept."""
    parsed_id = await _require_list_owner(lists, list_id, current_user)
    result = await lists.delete_list(parsed_id)
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()


@router.post("/{list_id}/bookmarks", response_model=SuccessResponse)
async def add_bookmark_to_list(
    list_id: str,
    data: ListBookmarkAdd,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> SuccessResponse:
    """Add one of the user's bookmarks to one of their lists."""
    if not data.bookmark_id:
        raise ApiError(400, "missing-parameters", "missing list ID or bookmark ID")

    parsed_list_id = await _require_list_owner(lists, list_id, current_user)
    parsed_bookmark_id = await _require_bookmark_owner(bookmarks, data.bookmark_id, current_user)
    result = await lists.add_bookmark_to_list(
        list_id=parsed_list_id, bookmark_id=parsed_bookmark_id,
    )
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()


@router.delete("/{list_id}/bookmarks/{bookmark_id}", response_model=SuccessResponse)
async def remove_bookmark_from_list(
    list_id: str,
    bookmark_id: str,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> SuccessResponse:
    """Remove a bookmark from a list. The bookmark itself is kept."""
    parsed_list_id = await _require_list_owner(lists, list_id, current_user)
    parsed_bookmark_id = await _require_bookmark_owner(bookmarks, bookmark_id, current_user)
    result = await lists.remove_bookmark_from_list(
        list_id=parsed_list_id, bookmark_id=parsed_bookmark_id,
    )
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()
