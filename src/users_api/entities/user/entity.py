"""User domain entity."""

from enum import Enum

from pydantic import Field

from src.users_api.entities._base import Entity


class UserRole(str, Enum):
    """Roles a stored user can hold."""

    ADMIN = "admin"
    CLIENT = "client"


DEFAULT_ROLE = UserRole.CLIENT


class User(Entity):
    """User entity representing a registered person.

    This is the stored shape: it always carries an id and, once it has gone
    through the transformation step, a concrete role. The phone number is
    called ``whatsapp`` on the wire.
    """

    name: str | None = Field(default=None, description="User's full name")
    phone: str | None = Field(
        default=None,
        alias="whatsapp",
        description="User's WhatsApp number in E.164-like form",
    )
    email: str | None = Field(default=None, description="User's email address")
    role: str | None = Field(
        default=None, description="User role, either 'admin' or 'client'"
    )
