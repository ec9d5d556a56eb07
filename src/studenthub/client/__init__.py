"""Async client for the Smart Student Hub API."""

from .api import HubClient, error_from_response
from .app import HubApp
from .session import SessionStore
from .views import (
    AdminDashboardView,
    DashboardView,
    FacultyDashboardView,
    StudentDashboardView,
    build_view,
)

__all__ = [
    "AdminDashboardView",
    "DashboardView",
    "FacultyDashboardView",
    "HubApp",
    "HubClient",
    "SessionStore",
    "StudentDashboardView",
    "build_view",
    "error_from_response",
]
