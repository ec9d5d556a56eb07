"""Credential and session handling backing the Auth API."""

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import timedelta
from typing import Optional

import bcrypt
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload

from ..core.errors import AuthError
from ..models import AuthCredential, AuthSession, Institution, User, VerificationStatus
from ..schemas.user import SignUpProfile
from ..utils.datetime import utcnow

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        return False


def _token_digest(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def normalise_email(email: str) -> str:
    return email.strip().lower()


def _find_user_by_email(session: Session, email: str) -> Optional[User]:
    stmt = select(User).options(joinedload(User.credential)).where(User.email == email)
    return session.execute(stmt).scalar_one_or_none()


def sign_up(
    session: Session,
    *,
    email: str,
    password: str,
    profile: SignUpProfile,
    min_password_length: int = 6,
) -> User:
    """Create a credential and a pending user row; the caller is not signed in."""

    email = normalise_email(email)
    if "@" not in email:
        raise AuthError("A valid email address is required.", status_code=400)
    if len(password) < min_password_length:
        raise AuthError(f"Password must be at least {min_password_length} characters", status_code=400)

    if _find_user_by_email(session, email) is not None:
        raise AuthError("User already registered", status_code=409)

    if profile.institution_id is not None and session.get(Institution, profile.institution_id) is None:
        raise AuthError(f"Institution {profile.institution_id} not found", status_code=400)

    user = User(
        email=email,
        full_name=profile.full_name.strip(),
        role=profile.role.value,
        institution_id=profile.institution_id,
        student_id=profile.student_id,
        department=profile.department,
        verification_status=VerificationStatus.PENDING,
    )
    session.add(user)
    session.flush()

    session.add(AuthCredential(user_id=user.id, password_hash=hash_password(password)))
    session.flush()
    logger.info("registered %s account %s", user.role, user.id)
    return user


def sign_in(
    session: Session,
    *,
    email: str,
    password: str,
    ttl_hours: int = 8,
) -> tuple[str, AuthSession, User]:
    """Check credentials and issue a new session token."""

    user = _find_user_by_email(session, normalise_email(email))
    if user is None or user.credential is None or not verify_password(password, user.credential.password_hash):
        logger.info("rejected sign-in attempt for %s", normalise_email(email))
        raise AuthError("Invalid login credentials")

    token = secrets.token_urlsafe(32)
    now = utcnow()
    auth_session = AuthSession(
        user_id=user.id,
        token_hash=_token_digest(token),
        created_at=now,
        expires_at=now + timedelta(hours=ttl_hours),
    )
    session.add(auth_session)
    session.flush()
    return token, auth_session, user


def resolve_session(session: Session, token: Optional[str]) -> Optional[User]:
    """Return the user behind an active token, or ``None``."""

    if not token:
        return None
    stmt = (
        select(AuthSession)
        .options(joinedload(AuthSession.user))
        .where(
            AuthSession.token_hash == _token_digest(token),
            AuthSession.revoked_at.is_(None),
            AuthSession.expires_at > utcnow(),
        )
    )
    auth_session = session.execute(stmt).scalar_one_or_none()
    return auth_session.user if auth_session else None


def sign_out(session: Session, token: str) -> bool:
    """Revoke ``token``; returns whether an active session was revoked."""

    stmt = (
        update(AuthSession)
        .where(AuthSession.token_hash == _token_digest(token), AuthSession.revoked_at.is_(None))
        .values(revoked_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    return session.execute(stmt).rowcount > 0
