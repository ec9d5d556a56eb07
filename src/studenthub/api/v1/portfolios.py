"""Portfolio endpoints."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ...core.access import DashboardKind, has_role, select_dashboard
from ...core.database import get_db
from ...core.errors import HubError, PermissionDenied
from ...models import User, UserRole
from ...schemas import PortfolioRead, PortfolioUpsert
from ...services import portfolio_service
from ..deps import get_current_user, http_error

router = APIRouter(tags=["portfolios"])


@router.get("/portfolio", response_model=Optional[PortfolioRead], summary="My portfolio")
def my_portfolio(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Optional[PortfolioRead]:
    """Return the caller's portfolio, or ``null`` when none has been generated.

    Open to anyone on the student dashboard, so an account with an
    unrecognised role still loads it.
    """

    if select_dashboard(user) is not DashboardKind.STUDENT:
        raise http_error(PermissionDenied("Only student users may own a portfolio."))
    return portfolio_service.get_for_student(db, student_id=user.id)


@router.put("/portfolio", response_model=PortfolioRead, summary="Generate or update my portfolio")
def upsert_portfolio(
    payload: PortfolioUpsert,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> PortfolioRead:
    """Create or update the caller's portfolio; ``total_points`` is recomputed
    from verified achievements on every write."""

    try:
        portfolio = portfolio_service.upsert_portfolio(
            db,
            student=user,
            title=payload.title,
            description=payload.description,
            is_public=payload.is_public,
        )
        db.commit()
        db.refresh(portfolio)
        return portfolio
    except HubError as exc:
        db.rollback()
        raise http_error(exc) from exc


@router.get(
    "/portfolios/{student_id}",
    response_model=Optional[PortfolioRead],
    summary="View a student's portfolio",
    responses={404: {"description": "Portfolio is private"}},
)
def view_portfolio(
    student_id: UUID,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Optional[PortfolioRead]:
    """Public portfolios are visible to everyone signed in; private ones only to
    their owner, faculty and admins. ``null`` when the student has none."""

    portfolio = portfolio_service.get_for_student(db, student_id=student_id)
    if portfolio is None:
        return None
    visible = (
        portfolio.is_public or portfolio.student_id == user.id or has_role(user, UserRole.FACULTY, UserRole.ADMIN)
    )
    if not visible:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Portfolio not found")
    return portfolio
