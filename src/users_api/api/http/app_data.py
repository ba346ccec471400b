from dataclasses import dataclass

from src.users_api.core.services import UserManagementService
from src.users_api.entities.user import InMemoryUserRepository, UserRepository


@dataclass
class ApplicationDependencies:
    user_repository: UserRepository
    user_management_service: UserManagementService


def build_dependencies(
    user_repository: UserRepository | None = None,
) -> ApplicationDependencies:
    """Wire the process-wide store into the user services."""
    repository = (
        user_repository if user_repository is not None else InMemoryUserRepository()
    )
    return ApplicationDependencies(
        user_repository=repository,
        user_management_service=UserManagementService(repository),
    )
