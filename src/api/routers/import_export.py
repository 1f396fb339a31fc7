"""Export and import of a user's bookmarks, labels and lists."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_import_export_service
from api.helpers.errors import to_api_error
from core.errors import ApiError, DomainError
from models.user import User
from schemas.import_export import ImportResponse
from services.import_export_service import ImportExportService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["import-export"])

EXPORT_FILENAME = "bookmarks-export.json"


@router.get("/export")
async def export_data(
    current_user: User = Depends(get_current_user),
    service: ImportExportService = Depends(get_import_export_service),
) -> JSONResponse:
    """Download everything the current user owns as one JSON document."""
    document = await service.export_user_data(current_user.id)
    if isinstance(document, DomainError):
        raise to_api_error(document, "export-error")
    return JSONResponse(
        content=document.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"},
    )


@router.post("/import", response_model=ImportResponse)
async def import_data(
    document: Any = Body(default=None),
    current_user: User = Depends(get_current_user),
    service: ImportExportService = Depends(get_import_export_service),
    db: AsyncSession = Depends(get_async_session),
) -> ImportResponse:
    """
    Recreate an exported document under the current user.

    Best effort: items that fail are counted in `results` and skipped, and the
    response is 200 even if every item failed. Ids in the document are only
    used to rebuild label and list membership; new ids are assigned.

    An unexpected error aborts the import with a 500, but the items created
    before it are committed and stay.
    """
    if not isinstance(document, dict) or not document.get("version"):
        raise ApiError(400, "invalid-import-format", "Import document is missing a version")

    try:
        results = await service.import_user_data(current_user.id, document)
    except Exception as e:
        logger.exception("Import failed for user %s", current_user.id)
        try:
            await db.commit()
        except SQLAlchemyError:
            logger.exception("Could not keep partial import for user %s", current_user.id)
        raise ApiError(500, "import-error", "There was an error importing data") from e
    return ImportResponse(results=results)
