"""User request payload (identity-less user data)."""

from pydantic import BaseModel, ConfigDict, Field


class UserRequest(BaseModel):
    """User data as submitted by a client, before validation.

    Every field is accepted loosely so that rule violations are reported by
    the validation service instead of the request parser. JSON numbers are
    read as text. The phone number is only read from its wire name
    ``whatsapp``; build instances with ``whatsapp=...`` too.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str | None = Field(default=None, description="User's full name")
    phone: str | None = Field(
        default=None,
        alias="whatsapp",
        description="WhatsApp number, optional '+' then 2 to 15 digits",
        examples=["+1234567890"],
    )
    email: str | None = Field(
        default=None, description="Email address", examples=["juan@example.com"]
    )
    role: str | None = Field(
        default=None,
        description="'admin' or 'client'; empty means 'client'",
        examples=["client"],
    )
