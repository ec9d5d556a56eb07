"""User listing and account review endpoints."""

from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.errors import HubError
from ...models import User, UserRole
from ...schemas import UserRead, UserVerificationUpdate
from ...services import user_service
from ..deps import http_error, require_roles

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/students", response_model=List[UserRead], summary="Verified students of my institution")
def list_students(
    user: User = Depends(require_roles(UserRole.FACULTY, action="list students")),
    db: Session = Depends(get_db),
) -> List[UserRead]:
    return list(user_service.list_verified_students(db, institution_id=user.institution_id))


@router.patch(
    "/{user_id}/verification",
    response_model=UserRead,
    summary="Review an account",
    responses={404: {"description": "User not found"}},
)
def review_account(
    user_id: UUID,
    payload: UserVerificationUpdate,
    _: User = Depends(require_roles(UserRole.ADMIN, action="review accounts")),
    db: Session = Depends(get_db),
) -> UserRead:
    """Set an account's verification status.

    Example request body::

        {"verification_status": "verified"}
    """

    try:
        user = user_service.set_verification_status(db, user_id=user_id, status=payload.verification_status)
        db.commit()
        db.refresh(user)
        return user
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc
