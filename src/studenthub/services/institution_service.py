"""Institution lookups and registration."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from ..core.errors import WorkflowError
from ..models import Institution


def list_institutions(session: Session) -> Sequence[Institution]:
    """All institutions sorted by display name."""

    stmt = select(Institution).order_by(Institution.name.asc())
    return session.execute(stmt).scalars().all()


def create_institution(
    session: Session,
    *,
    name: str,
    code: str,
    address: str = "",
    contact_email: str = "",
) -> Institution:
    """Register an institution with a unique name and code."""

    name = name.strip()
    code = code.strip().upper()
    clash_stmt = select(Institution).where(or_(Institution.name == name, Institution.code == code))
    if session.execute(clash_stmt).first() is not None:
        raise WorkflowError("An institution with this name or code already exists.")

    institution = Institution(name=name, code=code, address=address, contact_email=contact_email)
    session.add(institution)
    session.flush()
    return institution
