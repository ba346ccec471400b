"""FastAPI dependency implementations."""

from fastapi import HTTPException, Request

from src.users_api.api.http.app_data import ApplicationDependencies
from src.users_api.core.services import UserManagementService
from src.users_api.entities.user import UserRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependencies created at startup."""
    app_deps: ApplicationDependencies | None = getattr(
        request.app.state, "app_dependencies", None
    )
    if app_deps is None:
        raise HTTPException(status_code=503, detail="Application is not ready")
    return app_deps


def get_user_repository(request: Request) -> UserRepository:
    """Get the user store instance."""
    return get_app_dependencies(request).user_repository


def get_user_management_service(request: Request) -> UserManagementService:
    """Get the User Management service instance."""
    return get_app_dependencies(request).user_management_service
