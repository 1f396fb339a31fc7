"""Bookmark endpoints, including attaching and detaching labels."""
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_bookmark_service,
    get_current_user,
    get_enrichment_queue,
    get_label_service,
)
from api.helpers.errors import to_api_error
from api.helpers.ownership import require_ownership
from core.errors import ApiError, DomainError
from models.user import User
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkListResponse,
    BookmarkResponse,
    BookmarkUpdate,
)
from schemas.bookmark_list import SuccessResponse
from schemas.validators import is_valid_url
from services.bookmark_service import BookmarkService
from services.label_service import LabelService
from tasks.enrichment import EnrichmentQueue

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("", response_model=BookmarkListResponse)
async def get_bookmarks(
    label_id: UUID | None = Query(default=None, alias="labelId"),
    current_user: User = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    labels: LabelService = Depends(get_label_service),
) -> BookmarkListResponse:
    """
    Get the current user's bookmarks with their labels.

    With `labelId`, only bookmarks carrying that label; the label must belong
    to the current user.
    """
    if label_id is not None:
        require_ownership(
            await labels.is_owner(label_id=label_id, user_id=current_user.id), "label",
        )
    result = await bookmarks.get_bookmarks(current_user.id, label_id)
    if isinstance(result, DomainError):
        raise to_api_error(result, "bookmark-fetch-error")
    return BookmarkListResponse(bookmarks=result)


@router.post("", response_model=BookmarkResponse)
async def create_bookmark(
    data: BookmarkCreate,
    background_tasks: BackgroundTasks,
    current_user: User = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    queue: EnrichmentQueue = Depends(get_enrichment_queue),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Save a URL.

    A missing title or thumbnail is filled in later by the enrichment worker.
    The bookmark is committed before the jobs are queued, so the worker always
    finds the row; the jobs go out after the response is sent.
    """
    if not data.url:
        raise ApiError(400, "missing-url", "missing URL")
    if not is_valid_url(data.url):
        raise ApiError(400, "invalid-url", "invalid URL provided")
    if data.thumbnail is not None and not is_valid_url(data.thumbnail):
        raise ApiError(400, "invalid-thumbnail", "invalid thumbnail URL provided")

    bookmark = await bookmarks.add_bookmark(
        url=data.url,
        user_id=current_user.id,
        title=data.title,
        thumbnail=data.thumbnail,
    )
    if isinstance(bookmark, DomainError):
        raise to_api_error(bookmark, "bookmark-creation-error")

    await db.commit()
    background_tasks.add_task(queue.enqueue_for_bookmark, bookmark)
    return BookmarkResponse(bookmark=bookmark)


@router.put("/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: UUID,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> BookmarkResponse:
    """Update url, title and/or thumbnail. Fields absent from the body are left alone."""
    fields = data.model_dump(exclude_unset=True)
    if "url" in fields and (not data.url or not is_valid_url(data.url)):
        raise ApiError(400, "invalid-url", "invalid URL provided")
    if data.thumbnail is not None and not is_valid_url(data.thumbnail):
        raise ApiError(400, "invalid-thumbnail", "invalid thumbnail URL provided")

    require_ownership(
        await bookmarks.is_owner(bookmark_id=bookmark_id, user_id=current_user.id), "bookmark",
    )
    bookmark = await bookmarks.update_bookmark(bookmark_id, fields)
    if isinstance(bookmark, DomainError):
        raise to_api_error(bookmark)
    return BookmarkResponse(bookmark=bookmark)


@router.delete("/{bookmark_id}", response_model=SuccessResponse)
async def delete_bookmark(
    bookmark_id: UUID,
    current_user: User = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> SuccessResponse:
    """Delete a bookmark."""
    require_ownership(
        await bookmarks.is_owner(bookmark_id=bookmark_id, user_id=current_user.id), "bookmark",
    )
    result = await bookmarks.delete_bookmark(bookmark_id)
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()


@router.post("/{bookmark_id}/labels/{label_id}", response_model=SuccessResponse)
async def add_label_to_bookmark(
    bookmark_id: UUID,
    label_id: UUID,
    current_user: User = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    labels: LabelService = Depends(get_label_service),
) -> SuccessResponse:
    """Attach one of the user's labels to one of their bookmarks."""
    require_ownership(
        await bookmarks.is_owner(bookmark_id=bookmark_id, user_id=current_user.id), "bookmark",
    )
    require_ownership(
        await labels.is_owner(label_id=label_id, user_id=current_user.id), "label",
    )
    result = await bookmarks.add_label_to_bookmark(bookmark_id=bookmark_id, label_id=label_id)
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()


@router.delete("/{bookmark_id}/labels/{label_id}", response_model=SuccessResponse)
async def remove_label_from_bookmark(
    bookmark_id: UUID,
    label_id: UUID,
    current_user: User = Depends(get_current_user),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    labels: LabelService = Depends(get_label_service),
) -> SuccessResponse:
    """Detach a label from a bookmark."""
    require_ownership(
        await bookmarks.is_owner(bookmark_id=bookmark_id, user_id=current_user.id), "bookmark",
    )
    require_ownership(
        await labels.is_owner(label_id=label_id, user_id=current_user.id), "label",
    )
    result = await bookmarks.remove_label_from_bookmark(
        bookmark_id=bookmark_id, label_id=label_id,
    )
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()
