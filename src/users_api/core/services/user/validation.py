"""Field rules for user payloads and stored users.

The same rule functions back two reporting modes:

- structural validation (``validate_user_request`` / ``validate_user``) runs
  every rule and collects all violations;
- business-rule validation (``first_violation``) stops at the first failure,
  checking required fields before formats.

Because both modes share the rules, no payload can pass one and fail the
other.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from src.users_api.entities.user.entity import UserRole

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$", re.ASCII)
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$", re.ASCII
)

ALLOWED_ROLES = frozenset(role.value for role in UserRole)

# Names used in messages; the phone number travels as "whatsapp".
WIRE_NAMES = {"name": "name", "phone": "whatsapp", "email": "email", "role": "role"}


class UserFields(Protocol):
    """Anything carrying the four user fields (requests and stored users)."""

    name: str | None
    phone: str | None
    email: str | None
    role: str | None


class ViolationKind(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_FORMAT = "invalid_format"


class Violation(BaseModel):
    """A single broken field rule."""

    model_config = ConfigDict(frozen=True)

    kind: ViolationKind
    field: str
    message: str

    @classmethod
    def missing_field(cls, field: str) -> Violation:
        if field == "user":
            message = "User data is required"
        else:
            message = f"The {WIRE_NAMES.get(field, field)} field is required"
        return cls(kind=ViolationKind.MISSING_FIELD, field=field, message=message)

    @classmethod
    def invalid_format(cls, field: str) -> Violation:
        wire = WIRE_NAMES.get(field, field)
        if field == "role":
            message = "The role must be 'admin' or 'client'"
        else:
            message = f"The {wire} field must have a valid format"
        return cls(kind=ViolationKind.INVALID_FORMAT, field=field, message=message)


class ValidationResult(BaseModel):
    """Outcome of structural validation: valid, or a list of violations."""

    violations: list[Violation] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def fields(self) -> list[str]:
        return [v.field for v in self.violations]

    def __bool__(self) -> bool:
        return self.is_valid


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


# --- Standalone predicates ---


def is_valid_email(email: str | None) -> bool:
    """Return True if the email is present and shaped like local@domain.tld."""
    if _is_blank(email):
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_phone(phone: str | None) -> bool:
    """Return True if the phone is present and E.164-like."""
    if _is_blank(phone):
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_role(role: str | None) -> bool:
    """Return True for 'admin', 'client', or an empty role."""
    if _is_blank(role):
        return True
    return role in ALLOWED_ROLES


# --- Rules ---


def _check_name(user: UserFields) -> Violation | None:
    if _is_blank(user.name):
        return Violation.missing_field("name")
    return None


def _check_email_present(user: UserFields) -> Violation | None:
    if _is_blank(user.email):
        return Violation.missing_field("email")
    return None


def _check_phone_present(user: UserFields) -> Violation | None:
    if _is_blank(user.phone):
        return Violation.missing_field("phone")
    return None


def _check_email_format(user: UserFields) -> Violation | None:
    if not _is_blank(user.email) and not is_valid_email(user.email):
        return Violation.invalid_format("email")
    return None


def _check_phone_format(user: UserFields) -> Violation | None:
    if not _is_blank(user.phone) and not is_valid_phone(user.phone):
        return Violation.invalid_format("phone")
    return None


def _check_role(user: UserFields) -> Violation | None:
    if not is_valid_role(user.role):
        return Violation.invalid_format("role")
    return None


# Field order, used for structural validation.
STRUCTURAL_RULES = (
    _check_name,
    _check_email_present,
    _check_email_format,
    _check_phone_present,
    _check_phone_format,
    _check_role,
)

# Required fields first, then formats.
BUSINESS_RULES = (
    _check_name,
    _check_email_present,
    _check_phone_present,
    _check_email_format,
    _check_phone_format,
    _check_role,
)


def _validate(user: UserFields | None) -> ValidationResult:
    if user is None:
        return ValidationResult(violations=[Violation.missing_field("user")])
    violations = [v for rule in STRUCTURAL_RULES if (v := rule(user)) is not None]
    return ValidationResult(violations=violations)


def validate_user_request(user_request: UserFields | None) -> ValidationResult:
    """Run every rule against a submitted payload and collect all violations."""
    return _validate(user_request)


def validate_user(user: UserFields | None) -> ValidationResult:
    """Run every rule against a stored (or about to be stored) user."""
    return _validate(user)


def first_violation(user_request: UserFields | None) -> Violation | None:
    """Return the first broken rule in business order, or None if valid."""
    if user_request is None:
        return Violation.missing_field("user")
    for rule in BUSINESS_RULES:
        violation = rule(user_request)
        if violation is not None:
            return violation
    return None


def is_valid_user_request(user_request: UserFields | None) -> bool:
    """Boolean form of the business-rule check."""
    return first_violation(user_request) is None
