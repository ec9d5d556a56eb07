"""Primary API router definition."""

from fastapi import APIRouter

from . import achievements, auth, dashboard, events, institutions, portfolios, users

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(institutions.router)
api_router.include_router(users.router)
api_router.include_router(achievements.router)
api_router.include_router(events.router)
api_router.include_router(portfolios.router)
api_router.include_router(dashboard.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health probe endpoint."""
    return {"status": "ok"}
