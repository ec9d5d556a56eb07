"""Request-scoped dependencies shared by the v1 routers."""

from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from ..core.access import ensure_role
from ..core.database import get_db
from ..core.errors import HubError, PermissionDenied
from ..models import User, UserRole
from ..services import auth_service


def http_error(exc: HubError) -> HTTPException:
    """Translate a domain error into the HTTP error FastAPI returns."""

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=exc.status_code, detail=exc.detail, headers=headers)


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer ...`` header."""

    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user_optional(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Optional[User]:
    return auth_service.resolve_session(db, token)


def get_current_user(user: Optional[User] = Depends(get_current_user_optional)) -> User:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_roles(*roles: UserRole, action: str = "access this resource") -> Callable[..., User]:
    """Dependency factory rejecting identities outside ``roles`` with 403."""

    def _dependency(user: User = Depends(get_current_user)) -> User:
        try:
            ensure_role(user, *roles, action=action)
        except PermissionDenied as exc:
            raise http_error(exc) from exc
        return user

    return _dependency
