"""Institution endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...core.errors import HubError
from ...models import User, UserRole
from ...schemas import InstitutionCreate, InstitutionRead
from ...services import institution_service
from ..deps import http_error, require_roles

router = APIRouter(prefix="/institutions", tags=["institutions"])


@router.get("", response_model=List[InstitutionRead], summary="List institutions")
def list_institutions(db: Session = Depends(get_db)) -> List[InstitutionRead]:
    """Institutions sorted by name; public so the sign-up form can offer them."""

    return list(institution_service.list_institutions(db))


@router.post(
    "",
    response_model=InstitutionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register an institution",
    responses={409: {"description": "Name or code already taken"}},
)
def create_institution(
    payload: InstitutionCreate,
    _: User = Depends(require_roles(UserRole.ADMIN, action="register institutions")),
    db: Session = Depends(get_db),
) -> InstitutionRead:
    try:
        institution = institution_service.create_institution(
            db,
            name=payload.name,
            code=payload.code,
            address=payload.address,
            contact_email=payload.contact_email,
        )
        db.commit()
        db.refresh(institution)
        return institution
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc
