"""Pydantic schemas for institutions."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class InstitutionCreate(BaseModel):
    """Request body for registering an institution."""

    name: str = Field(..., min_length=1, max_length=200)
    code: str = Field(..., min_length=1, max_length=32)
    address: str = ""
    contact_email: str = ""


class InstitutionRead(BaseModel):
    """Institution response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    code: str
    address: str
    contact_email: str
    created_at: datetime
