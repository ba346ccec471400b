"""Mapping between submitted user payloads and stored users."""

from src.users_api.core.exceptions import InvalidArgumentError
from src.users_api.entities.user.entity import DEFAULT_ROLE, User
from src.users_api.entities.user.request import UserRequest


def resolve_role(role: str | None) -> str:
    """Apply the default-role rule: an empty or missing role becomes 'client'."""
    if role is None or not role.strip():
        return DEFAULT_ROLE.value
    return role


def to_record(user_request: UserRequest | None) -> User:
    """Build a new user, with a fresh id, from a submitted payload."""
    if user_request is None:
        raise InvalidArgumentError("UserRequest must not be None")

    return User(
        name=user_request.name,
        phone=user_request.phone,
        email=user_request.email,
        role=resolve_role(user_request.role),
    )


def apply_update(existing_user: User | None, user_request: UserRequest | None) -> User:
    """Overwrite every field of ``existing_user`` in place and return it.

    The id is kept; fields are replaced wholesale, not patched.
    """
    if existing_user is None:
        raise InvalidArgumentError("Existing user must not be None")
    if user_request is None:
        raise InvalidArgumentError("UserRequest must not be None")

    existing_user.name = user_request.name
    existing_user.phone = user_request.phone
    existing_user.email = user_request.email
    existing_user.role = resolve_role(user_request.role)
    return existing_user


def to_input(user: User | None) -> UserRequest:
    """Project a stored user back to a payload, dropping the id."""
    if user is None:
        raise InvalidArgumentError("User must not be None")

    return UserRequest(
        name=user.name,
        whatsapp=user.phone,
        email=user.email,
        role=user.role,
    )
