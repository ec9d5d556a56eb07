"""Authentication endpoints."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ...core.config import Settings, get_settings
from ...core.database import get_db
from ...core.errors import AuthError
from ...models import User
from ...schemas import SessionToken, SignInRequest, SignUpRequest, UserRead
from ...services import auth_service
from ..deps import get_bearer_token, get_current_user, http_error

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/sign-up",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        400: {"description": "Invalid sign-up data"},
        409: {"description": "Email already registered"},
    },
)
def sign_up(
    payload: SignUpRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> UserRead:
    """Register a new account in ``pending`` verification state.

    Example request body::

        {
            "email": "alex.rao@example.edu",
            "password": "correct-horse",
            "profile": {
                "full_name": "Alex Rao",
                "role": "student",
                "institution_id": "11111111-1111-1111-1111-111111111111",
                "student_id": "S1001",
                "department": "Computer Science"
            }
        }
    """

    try:
        user = auth_service.sign_up(
            db,
            email=payload.email,
            password=payload.password,
            profile=payload.profile,
            min_password_length=settings.min_password_length,
        )
        db.commit()
        db.refresh(user)
        return user
    except AuthError as exc:
        db.rollback()
        raise http_error(exc) from exc


@router.post(
    "/sign-in",
    response_model=SessionToken,
    summary="Sign in with email and password",
    responses={401: {"description": "Invalid login credentials"}},
)
def sign_in(
    payload: SignInRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> SessionToken:
    try:
        token, auth_session, user = auth_service.sign_in(
            db,
            email=payload.email,
            password=payload.password,
            ttl_hours=settings.session_ttl_hours,
        )
        db.commit()
    except AuthError as exc:
        db.rollback()
        raise http_error(exc) from exc
    return SessionToken(
        access_token=token,
        expires_at=auth_session.expires_at,
        user=UserRead.model_validate(user),
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT, summary="Revoke the current session")
def sign_out(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Response:
    """Revoke the bearer token if one was sent; always succeeds."""

    if token:
        auth_service.sign_out(db, token)
        db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=UserRead, summary="Current identity")
def me(user: User = Depends(get_current_user)) -> UserRead:
    return user
