import os

os.environ["STUDENTHUB_DATABASE_URL"] = "sqlite://"
os.environ["STUDENTHUB_SCHEDULER_ENABLED"] = "false"

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Optional
from uuid import UUID

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from studenthub.core.database import Base, build_engine, get_db
from studenthub.main import app as hub_app
from studenthub.models import User, VerificationStatus
from studenthub.services import institution_service
from studenthub.utils.datetime import utcnow

PASSWORD = "secret123"


@dataclass
class Account:
    id: UUID
    email: str
    role: str
    institution_id: Optional[UUID]
    headers: Dict[str, str] = field(default_factory=dict)


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'hub.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def app(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    hub_app.dependency_overrides[get_db] = _get_test_db
    yield hub_app
    hub_app.dependency_overrides.clear()


@pytest.fixture()
def client(app):
    return TestClient(app)


def sign_up(client, email, *, role="student", institution_id=None, student_id=None, password=PASSWORD, full_name=None):
    profile = {
        "full_name": full_name or email.split("@")[0].replace(".", " ").title(),
        "role": role,
        "institution_id": str(institution_id) if institution_id else None,
        "student_id": student_id,
        "department": "Computer Science",
    }
    return client.post("/api/v1/auth/sign-up", json={"email": email, "password": password, "profile": profile})


def sign_in(client, email, password=PASSWORD):
    response = client.post("/api/v1/auth/sign-in", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture()
def institution(db):
    created = institution_service.create_institution(db, name="Northfield University", code="nfu")
    db.commit()
    return created.id


@pytest.fixture()
def other_institution(db):
    created = institution_service.create_institution(db, name="Southbank College", code="sbc")
    db.commit()
    return created.id


@pytest.fixture()
def make_account(client, db):
    counter = {"students": 0}

    def _make(email, role="student", institution_id=None, *, verified=False, full_name=None):
        student_id = None
        if role == "student":
            counter["students"] += 1
            student_id = f"S{1000 + counter['students']}"
        response = sign_up(
            client,
            email,
            role=role,
            institution_id=institution_id,
            student_id=student_id,
            full_name=full_name,
        )
        assert response.status_code == 201, response.text
        user_id = UUID(response.json()["id"])
        if verified:
            db.get(User, user_id).verification_status = VerificationStatus.VERIFIED
            db.commit()
        return Account(
            id=user_id,
            email=email,
            role=role,
            institution_id=institution_id,
            headers=sign_in(client, email),
        )

    return _make


@pytest.fixture()
def student(make_account, institution):
    return make_account("ana.silva@example.edu", "student", institution, full_name="Ana Silva")


@pytest.fixture()
def faculty(make_account, institution):
    return make_account("dr.okafor@example.edu", "faculty", institution, full_name="Chidi Okafor")


@pytest.fixture()
def admin(make_account, institution):
    return make_account("registrar@example.edu", "admin", institution, full_name="Registrar")


def achievement_payload(title="Dean's list", category="academic", points=10):
    return {
        "title": title,
        "description": "",
        "category": category,
        "date_achieved": "2026-03-14",
        "points": points,
    }


def event_payload(title="Robotics workshop", *, starts_in=timedelta(days=3), status="published", **extra):
    start = utcnow() + starts_in
    payload = {
        "title": title,
        "category": "workshop",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(hours=2)).isoformat(),
        "status": status,
    }
    payload.update(extra)
    return payload


def at(days: int) -> datetime:
    return utcnow() + timedelta(days=days)
