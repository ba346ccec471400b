from loguru import logger

from src.users_api.core.exceptions import (
    InvalidInputError,
    InvalidRecordError,
    UserNotFoundError,
)
from src.users_api.core.services.user import transformation, validation
from src.users_api.entities.user.entity import User
from src.users_api.entities.user.repository import UserRepository
from src.users_api.entities.user.request import UserRequest

CSV_HEADER = ("ID", "Name", "WhatsApp", "Email", "Role")


def escape_csv_field(value: str | None) -> str:
    """Quote a CSV field when it holds a comma, a double quote or a newline."""
    if value is None:
        return ""
    if "," in value or '"' in value or "\n" in value:
        return '"' + value.replace('"', '""') + '"'
    return value


class UserManagementService:
    """Use cases over user records: validate, transform, re-validate, persist."""

    def __init__(self, user_repository: UserRepository):
        self._user_repo = user_repository

    def create_user(self, user_request: UserRequest) -> User:
        """Validate a payload and store it as a new user.

        Raises:
            InvalidInputError: The payload breaks a field rule.
            InvalidRecordError: The transformed user breaks a field rule.
        """
        result = validation.validate_user_request(user_request)
        if not result.is_valid:
            logger.bind(fields=result.fields).warning("Rejected user creation")
            raise InvalidInputError(result.violations)

        user = transformation.to_record(user_request)

        user_result = validation.validate_user(user)
        if not user_result.is_valid:
            logger.bind(user_id=user.id, fields=user_result.fields).error(
                "Transformed user failed validation"
            )
            raise InvalidRecordError(user_result.violations)

        saved = self._user_repo.save(user)
        logger.info("Created user {} with role {}", saved.id, saved.role)
        return saved

    def get_user_by_id(self, user_id: str | None) -> User | None:
        return self._user_repo.find_by_id(user_id)

    def get_all_users(self) -> list[User]:
        return self._user_repo.find_all()

    def update_user(self, user_id: str | None, user_request: UserRequest) -> User:
        """Replace every field of an existing user.

        Raises:
            InvalidInputError: The payload breaks a field rule.
            UserNotFoundError: No user is stored under ``user_id``.
            InvalidRecordError: The updated user breaks a field rule.
        """
        result = validation.validate_user_request(user_request)
        if not result.is_valid:
            logger.bind(user_id=user_id, fields=result.fields).warning(
                "Rejected user update"
            )
            raise InvalidInputError(result.violations)

        existing_user = self._user_repo.find_by_id(user_id)
        if existing_user is None:
            raise UserNotFoundError(user_id)

        updated_user = transformation.apply_update(existing_user, user_request)

        user_result = validation.validate_user(updated_user)
        if not user_result.is_valid:
            logger.bind(user_id=user_id, fields=user_result.fields).error(
                "Updated user failed validation"
            )
            raise InvalidRecordError(user_result.violations)

        saved = self._user_repo.update(updated_user)
        logger.info("Updated user {}", saved.id)
        return saved

    def delete_user(self, user_id: str | None) -> bool:
        deleted = self._user_repo.delete_by_id(user_id)
        if deleted:
            logger.info("Deleted user {}", user_id)
        return deleted

    def user_exists(self, user_id: str | None) -> bool:
        return self._user_repo.exists_by_id(user_id)

    def generate_csv_report(self) -> str:
        """Render every stored user as CSV, header line first."""
        users = self._user_repo.find_all()

        lines = [",".join(CSV_HEADER)]
        for user in users:
            fields = (user.id, user.name, user.phone, user.email, user.role)
            lines.append(",".join(escape_csv_field(field) for field in fields))

        logger.info("Generated CSV report with {} users", len(users))
        return "\n".join(lines) + "\n"
