"""Entities module with entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model
- request.py: Payload accepted from clients
- repository.py: Data access layer
"""

from .user import InMemoryUserRepository, User, UserRepository, UserRequest, UserRole

__all__ = [
    "InMemoryUserRepository",
    "User",
    "UserRepository",
    "UserRequest",
    "UserRole",
]
