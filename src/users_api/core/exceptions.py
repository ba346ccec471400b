"""Domain exceptions raised by the user services and the store."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from src.users_api.core.services.user.validation import Violation


class DomainError(Exception):
    """Base class for all domain-level exceptions."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# --- Validation Errors ---


class ValidationFailedError(DomainError):
    """Raised when user data breaks one or more field rules."""

    prefix = "Invalid user data"

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        details = "; ".join(v.message for v in self.violations)
        super().__init__(f"{self.prefix}: {details}")


class InvalidInputError(ValidationFailedError):
    """Raised when a submitted user request fails structural validation."""

    prefix = "Invalid user data"


class InvalidRecordError(ValidationFailedError):
    """Raised when a transformed user record fails structural validation."""

    prefix = "Invalid user after transformation"


# --- Entity Not Found Errors ---


class UserNotFoundError(DomainError):
    """Raised when an operation targets a user id that is not stored."""

    def __init__(self, user_id: str | None):
        self.user_id = user_id
        super().__init__(f"User with ID {user_id} not found")


# --- Contract Errors ---


class InvalidArgumentError(DomainError, ValueError):
    """Raised when a service or the store receives a missing or unusable argument."""
