"""Health check endpoints router for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.runtime.context import get_config

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Basic health check endpoint - checks if app is running.

    This is a liveness probe that returns 200 OK as long as the application
    process is running. It does not check dependencies.
    """
    return {"status": "healthy", "service": "users-api"}


@router.get("/ready", response_model=None)
async def readiness(request: Request) -> dict[str, Any] | JSONResponse:
    """Readiness check - 200 once the user store is wired, 503 before."""
    app_deps: ApplicationDependencies | None = getattr(
        request.app.state, "app_dependencies", None
    )
    config = get_config()

    if app_deps is None:
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "checks": {"store": {"status": "unavailable"}},
                "environment": config.app.environment,
            },
        )

    return {
        "status": "ready",
        "checks": {
            "store": {
                "status": "healthy",
                "type": "in-memory",
                "users": app_deps.user_repository.count(),
            }
        },
        "environment": config.app.environment,
    }
