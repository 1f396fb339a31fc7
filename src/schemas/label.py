"""Pydantic schemas for label endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class LabelRead(BaseModel):
    """Schema for labels returned by the store."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class LabelCreate(BaseModel):
    """Schema for creating a label."""

    name: str | None = None


class LabelUpdate(BaseModel):
    """Schema for renaming a label."""

    name: str | None = None


class LabelResponse(BaseModel):
    """Single-label response envelope."""

    label: LabelRead


class LabelListResponse(BaseModel):
    """Label collection response envelope."""

    labels: list[LabelRead]
