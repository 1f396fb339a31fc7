"""Label endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_current_user, get_label_service
from api.helpers.errors import to_api_error
from api.helpers.ownership import require_ownership
from core.errors import ApiError, DomainError
from models.user import User
from schemas.bookmark_list import SuccessResponse
from schemas.label import LabelCreate, LabelListResponse, LabelResponse, LabelUpdate
from services.label_service import LabelService

router = APIRouter(prefix="/labels", tags=["labels"])


@router.get("", response_model=LabelListResponse)
async def get_labels(
    current_user: User = Depends(get_current_user),
    labels: LabelService = Depends(get_label_service),
) -> LabelListResponse:
    """Get the current user's labels, newest first."""
    result = await labels.get_labels(current_user.id)
    if isinstance(result, DomainError):
        raise to_api_error(result, "label-fetch-error")
    return LabelListResponse(labels=result)


@router.post("", response_model=LabelResponse)
async def create_label(
    data: LabelCreate,
    current_user: User = Depends(get_current_user),
    labels: LabelService = Depends(get_label_service),
) -> LabelResponse:
    """Create a label. Names may repeat."""
    if not data.name:
        raise ApiError(400, "missing-name", "missing name")
    label = await labels.create_label(name=data.name, user_id=current_user.id)
    if isinstance(label, DomainError):
        raise to_api_error(label, "label-creation-error")
    return LabelResponse(label=label)


@router.put("/{label_id}", response_model=LabelResponse)
async def update_label(
    label_id: UUID,
    data: LabelUpdate,
    current_user: User = Depends(get_current_user),
    labels: LabelService = Depends(get_label_service),
) -> LabelResponse:
    """Rename a label."""
    fields = data.model_dump(exclude_unset=True)
    if "name" in fields and not data.name:
        raise ApiError(400, "invalid-name", "name cannot be empty")

    require_ownership(
        await labels.is_owner(label_id=label_id, user_id=current_user.id), "label",
    )
    label = await labels.update_label(label_id, fields)
    if isinstance(label, DomainError):
        raise to_api_error(label)
    return LabelResponse(label=label)


@router.delete("/{label_id}", response_model=SuccessResponse)
async def delete_label(
    label_id: UUID,
    current_user: User = Depends(get_current_user),
    labels: LabelService = Depends(get_label_service),
) -> SuccessResponse:
    """Delete a label. It is removed from every bookmark carrying it."""
    require_ownership(
        await labels.is_owner(label_id=label_id, user_id=current_user.id), "label",
    )
    result = await labels.delete_label(label_id)
    if isinstance(result, DomainError):
        raise to_api_error(result)
    return SuccessResponse()
