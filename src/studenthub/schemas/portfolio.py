"""Pydantic schemas for portfolios."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PortfolioUpsert(BaseModel):
    """Request body for generating or updating the caller's portfolio."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=4000)
    is_public: bool = False


class PortfolioRead(BaseModel):
    """Portfolio response payload."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    student_id: UUID
    title: str
    description: str
    is_public: bool
    total_points: int = Field(..., ge=0)
    generated_at: datetime
    updated_at: datetime
