import asyncio
import logging
from types import SimpleNamespace

import httpx
import pytest

from conftest import PASSWORD, achievement_payload
from studenthub.client import (
    AdminDashboardView,
    FacultyDashboardView,
    HubApp,
    HubClient,
    StudentDashboardView,
    error_from_response,
)
from studenthub.client.api import SERVER_FAILURE, TRANSPORT_FAILURE
from studenthub.core.config import Settings, is_backend_configured
from studenthub.core.errors import AuthError, NotFound, PermissionDenied, TransportError, WorkflowError
from studenthub.models import User
from studenthub.schemas import SignUpProfile

pytestmark = pytest.mark.anyio


@pytest.fixture()
def settings():
    return Settings(api_url="http://testserver", scheduler_enabled=False)


@pytest.fixture()
async def hub(app, settings):
    hub = HubApp(settings, transport=httpx.ASGITransport(app=app))
    await hub.start()
    yield hub
    await hub.aclose()


def _log(client, account, title="Dean's list"):
    response = client.post("/api/v1/achievements", json=achievement_payload(title), headers=account.headers)
    return response.json()


async def test_sign_in_selects_student_dashboard(hub, student):
    assert hub.screen == "landing"
    hub.show_auth()
    assert hub.screen == "auth"

    error = await hub.session.sign_in(student.email, PASSWORD)

    assert error is None
    assert hub.session.identity.role == "student"
    assert hub.screen == "dashboard"
    assert isinstance(hub.view, StudentDashboardView)
    assert hub.view.loading is False
    assert hub.view.error is None
    assert hub.view.stats.total_achievements == 0
    assert set(hub.view.empty_states) == {"achievements", "events", "portfolio"}


async def test_sign_out_returns_to_landing(hub, student):
    await hub.session.sign_in(student.email, PASSWORD)
    view = hub.view

    await hub.session.sign_out()

    assert hub.session.identity is None
    assert hub.session.token is None
    assert hub.view is None
    assert view.mounted is False
    assert hub.screen == "landing"


async def test_failed_remote_sign_out_still_clears_session(hub, student, monkeypatch, caplog):
    await hub.session.sign_in(student.email, PASSWORD)

    async def _unreachable(token=None):
        raise TransportError(TRANSPORT_FAILURE)

    monkeypatch.setattr(hub.client, "sign_out", _unreachable)
    with caplog.at_level(logging.WARNING, logger="studenthub.client.session"):
        await hub.session.sign_out()

    assert hub.session.identity is None
    assert hub.session.token is None
    assert "remote sign-out failed" in caplog.text


async def test_bad_credentials_are_reported(hub, student):
    error = await hub.session.sign_in(student.email, "not-the-password")

    assert isinstance(error, AuthError)
    assert error.detail == "Invalid login credentials"
    assert hub.session.error == "Invalid login credentials"
    assert hub.session.identity is None
    assert hub.session.token is None


async def test_sign_up_validation(hub, institution):
    profile = {"full_name": "Ben Adeyemi", "role": "student", "institution_id": str(institution), "student_id": "S77"}

    mismatch = await hub.session.sign_up("ben@example.edu", PASSWORD, profile, confirm_password="other-pass")
    short = await hub.session.sign_up("ben@example.edu", "abc", profile)
    no_number = await hub.session.sign_up("ben@example.edu", PASSWORD, {**profile, "student_id": None})

    assert mismatch.detail == "Passwords do not match"
    assert short.detail == "Password must be at least 6 characters"
    assert isinstance(no_number, AuthError)

    assert await hub.session.sign_up("ben@example.edu", PASSWORD, SignUpProfile(**profile)) is None
    assert hub.session.identity is None

    duplicate = await hub.session.sign_up("ben@example.edu", PASSWORD, profile)
    assert isinstance(duplicate, AuthError)
    assert duplicate.detail == "User already registered"


async def test_initialize_restores_or_discards_token(app, settings, student):
    token = student.headers["Authorization"].split(" ", 1)[1]

    async with HubApp(settings, transport=httpx.ASGITransport(app=app)) as restored:
        await restored.start(token)
        assert restored.session.identity.email == student.email
        assert restored.screen == "dashboard"

    async with HubApp(settings, transport=httpx.ASGITransport(app=app)) as expired:
        await expired.start("stale-token")
        assert expired.session.identity is None
        assert expired.session.token is None
        assert expired.session.loading is False
        assert expired.screen == "landing"


async def test_faculty_verification_removes_only_confirmed_item(hub, client, student, faculty):
    _log(client, student, "Dean's list")
    _log(client, student, "Robotics")
    await hub.session.sign_in(faculty.email, PASSWORD)
    view = hub.view
    assert isinstance(view, FacultyDashboardView)
    assert len(view.pending) == 2
    target, remaining = view.pending

    error = await view.verify(target.id, "verified")

    assert error is None
    assert [item.id for item in view.pending] == [remaining.id]
    assert view.verifications_done == 1
    assert view.stats.pending_verifications == 1


async def test_failed_verification_leaves_queue_untouched(hub, client, student, faculty, make_account, institution):
    colleague = make_account("dr.lee@example.edu", "faculty", institution)
    achievement = _log(client, student)
    await hub.session.sign_in(faculty.email, PASSWORD)
    view = hub.view
    client.post(
        f"/api/v1/achievements/{achievement['id']}/verification",
        json={"decision": "rejected"},
        headers=colleague.headers,
    )

    error = await view.verify(view.pending[0].id, "verified")

    assert isinstance(error, WorkflowError)
    assert view.error == "Achievement has already been rejected."
    assert [str(item.id) for item in view.pending] == [achievement["id"]]
    assert view.verifications_done == 0

    await view.refresh()
    assert view.pending == []
    assert view.empty_states["pending_achievements"] == "No pending verifications."


async def test_non_faculty_is_blocked_before_any_request(hub, client, student, monkeypatch):
    achievement = _log(client, student)
    await hub.session.sign_in(student.email, PASSWORD)
    calls = []

    async def _record(*args, **kwargs):
        calls.append(args)

    monkeypatch.setattr(hub.client, "verify_achievement", _record)
    view = FacultyDashboardView(hub.client, hub.session)

    error = await view.verify(achievement["id"], "verified")

    assert isinstance(error, PermissionDenied)
    assert calls == []


async def test_admin_view(hub, client, student, admin):
    _log(client, student, "Dean's list")
    await hub.session.sign_in(admin.email, PASSWORD)

    view = hub.view

    assert isinstance(view, AdminDashboardView)
    assert view.stats.total_students == 1
    assert view.stats.pending_verifications == 1
    assert view.achievements_by_category == {"Academic": 1}
    assert view.achievements_by_status == {"Pending": 1}


class _SlowClient:
    def __init__(self, failure=None):
        self.release = asyncio.Event()
        self.failure = failure

    async def achievements(self):
        await self.release.wait()
        if self.failure:
            raise self.failure
        return [{"title": "late", "points": 5, "verification_status": "verified"}]

    async def events(self):
        return []

    async def my_portfolio(self):
        return None


@pytest.mark.parametrize("failure", [None, TransportError(TRANSPORT_FAILURE)])
async def test_results_after_unmount_are_dropped(failure):
    slow = _SlowClient(failure)
    view = StudentDashboardView(slow, SimpleNamespace(identity=None))

    task = asyncio.create_task(view.mount())
    await asyncio.sleep(0)
    await asyncio.sleep(0)
    view.unmount()
    slow.release.set()
    await task

    assert view.achievements == []
    assert view.error is None


async def test_demo_mode_issues_no_requests():
    requests = []

    def _handler(request):
        requests.append(request)
        return httpx.Response(500)

    hub = HubApp(Settings(api_url=None, scheduler_enabled=False), transport=httpx.MockTransport(_handler))
    await hub.start()

    assert hub.demo_mode is True
    assert hub.screen == "setup"
    assert hub.view is None
    assert requests == []
    await hub.aclose()


def test_placeholder_urls_are_not_configured():
    assert not is_backend_configured(Settings(api_url="https://your-project.example.com"))
    assert not is_backend_configured(Settings(api_url="  "))
    assert is_backend_configured(Settings(api_url="https://hub.example.edu"))


async def test_unreachable_backend_is_a_transport_error():
    def _handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with HubClient("http://hub.invalid", transport=httpx.MockTransport(_handler)) as client:
        with pytest.raises(TransportError) as excinfo:
            await client.institutions()

    assert excinfo.value.detail == TRANSPORT_FAILURE


def test_error_mapping():
    def _response(status, detail="nope"):
        return httpx.Response(status, json={"detail": detail})

    assert isinstance(error_from_response(_response(500)), TransportError)
    assert error_from_response(_response(502)).detail == SERVER_FAILURE
    assert isinstance(error_from_response(_response(404)), NotFound)
    assert isinstance(error_from_response(_response(403)), PermissionDenied)
    assert isinstance(error_from_response(_response(409)), WorkflowError)
    assert isinstance(error_from_response(_response(409), auth=True), AuthError)
    assert error_from_response(_response(401, "Invalid login credentials"), auth=True).detail == (
        "Invalid login credentials"
    )


async def test_unknown_role_loads_student_dashboard(hub, db, faculty):
    db.get(User, faculty.id).role = "superuser"
    db.commit()

    error = await hub.session.sign_in(faculty.email, PASSWORD)

    assert error is None
    assert isinstance(hub.view, StudentDashboardView)
    assert hub.view.error is None
    assert hub.view.loading is False
    assert hub.view.stats.total_achievements == 0
    assert hub.view.empty_states["portfolio"] == "No Portfolio Yet"


class _QueueClient:
    def __init__(self, item):
        self.item = item
        self.release = asyncio.Event()

    async def pending_achievements(self):
        await self.release.wait()
        return [self.item]

    async def events(self):
        return []

    async def verified_students(self):
        return []

    async def reviewed_achievements(self):
        return []

    async def verify_achievement(self, achievement_id, decision):
        return None


async def test_older_refresh_cannot_restore_decided_item():
    item = SimpleNamespace(id="a1")
    queue = _QueueClient(item)
    view = FacultyDashboardView(queue, SimpleNamespace(identity={"role": "faculty"}))
    view.mounted = True
    view.pending = [item]

    refresh = asyncio.create_task(view.refresh())
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    assert await view.verify("a1", "verified") is None
    queue.release.set()
    await refresh

    assert view.pending == []
    assert view.verifications_done == 1
    assert view.loading is False
