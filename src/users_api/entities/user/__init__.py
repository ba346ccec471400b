"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Stored domain entity with identity equality
- UserRequest: Identity-less payload submitted by clients
- UserRepository: Storage capability, with an in-memory implementation
"""

from .entity import DEFAULT_ROLE, User, UserRole
from .repository import InMemoryUserRepository, UserRepository
from .request import UserRequest

__all__ = [
    "DEFAULT_ROLE",
    "InMemoryUserRepository",
    "User",
    "UserRepository",
    "UserRequest",
    "UserRole",
]
