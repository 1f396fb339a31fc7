"""FastAPI dependencies for injection."""
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_current_user
from core.config import get_settings
from db.session import get_async_session
from services.bookmark_service import BookmarkService
from services.import_export_service import ImportExportService
from services.label_service import LabelService
from services.list_service import ListService
from services.user_service import UserService
from stores.bookmark_store import BookmarkStore
from stores.label_store import LabelStore
from stores.list_store import ListStore
from stores.user_store import UserStore
from tasks.enrichment import EnrichmentQueue

__all__ = [
    "get_async_session",
    "get_bookmark_service",
    "get_current_user",
    "get_enrichment_queue",
    "get_import_export_service",
    "get_label_service",
    "get_list_service",
    "get_settings",
    "get_user_service",
]


def get_bookmark_service(db: AsyncSession = Depends(get_async_session)) -> BookmarkService:
    return BookmarkService(BookmarkStore(db))


def get_label_service(db: AsyncSession = Depends(get_async_session)) -> LabelService:
    return LabelService(LabelStore(db))


def get_list_service(db: AsyncSession = Depends(get_async_session)) -> ListService:
    return ListService(ListStore(db))


def get_user_service(db: AsyncSession = Depends(get_async_session)) -> UserService:
    return UserService(UserStore(db))


def get_import_export_service(
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    labels: LabelService = Depends(get_label_service),
    lists: ListService = Depends(get_list_service),
) -> ImportExportService:
    """Build the orchestrator on the request's services (and so its session)."""
    return ImportExportService(bookmarks, labels, lists)


def get_enrichment_queue(request: Request) -> EnrichmentQueue:
    """The queue created in the application lifespan."""
    return request.app.state.enrichment_queue
