"""Pydantic schemas for accounts and authentication."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..models.user import UserRole, VerificationStatus


class UserRead(BaseModel):
    """Public projection of a user row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    full_name: str
    role: str
    institution_id: Optional[UUID] = None
    student_id: Optional[str] = None
    department: Optional[str] = None
    verification_status: VerificationStatus
    created_at: datetime


class StudentSummary(BaseModel):
    """Display data for the owner of an achievement."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    student_id: Optional[str] = None


class SignUpProfile(BaseModel):
    """Profile fields captured at sign-up."""

    full_name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.STUDENT
    institution_id: Optional[UUID] = None
    student_id: Optional[str] = Field(None, max_length=64)
    department: Optional[str] = Field(None, max_length=200)

    @model_validator(mode="after")
    def _student_number_only_for_students(self) -> "SignUpProfile":
        if self.role is UserRole.STUDENT:
            if not (self.student_id or "").strip():
                raise ValueError("Student ID is required for student accounts.")
        else:
            self.student_id = None
        return self


class SignUpRequest(BaseModel):
    """Request body for creating an account."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)
    profile: SignUpProfile


class SignInRequest(BaseModel):
    """Email and password credentials."""

    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class SessionToken(BaseModel):
    """Issued bearer token with the signed-in user."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserRead


class UserVerificationUpdate(BaseModel):
    """Admin review decision on an account."""

    verification_status: VerificationStatus
