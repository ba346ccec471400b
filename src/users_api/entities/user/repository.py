"""User data-access layer."""

import threading
from abc import ABC, abstractmethod

from loguru import logger

from src.users_api.core.exceptions import InvalidArgumentError
from src.users_api.entities.user.entity import User


def _is_blank(user_id: str | None) -> bool:
    return user_id is None or not user_id.strip()


class UserRepository(ABC):
    """Storage capability for user records.

    Implementations must make every operation individually atomic and safe
    to call from several threads without external locking.
    """

    @abstractmethod
    def save(self, user: User) -> User:
        """Insert or overwrite a user by id and return it."""

    @abstractmethod
    def find_by_id(self, user_id: str | None) -> User | None:
        """Return the user with the given id, or None."""

    @abstractmethod
    def find_all(self) -> list[User]:
        """Return every stored user, in no particular order."""

    @abstractmethod
    def update(self, user: User) -> User:
        """Overwrite an existing user and return it."""

    @abstractmethod
    def delete_by_id(self, user_id: str | None) -> bool:
        """Remove a user; report whether anything was removed."""

    @abstractmethod
    def exists_by_id(self, user_id: str | None) -> bool:
        """Report whether a user with the given id is stored."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored users."""


class InMemoryUserRepository(UserRepository):
    """Process-lifetime user store backed by a lock-guarded dict.

    Records are copied on the way in and on the way out, so a caller that
    keeps mutating its own instance never changes what other threads read.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.RLock()

    def save(self, user: User) -> User:
        if user is None:
            raise InvalidArgumentError("User must not be None")
        with self._lock:
            self._users[user.id] = user.model_copy()
        logger.debug("Stored user {}", user.id)
        return user

    def find_by_id(self, user_id: str | None) -> User | None:
        if _is_blank(user_id):
            return None
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user is not None else None

    def find_all(self) -> list[User]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def update(self, user: User) -> User:
        if user is None:
            raise InvalidArgumentError("User must not be None")
        with self._lock:
            if user.id not in self._users:
                raise InvalidArgumentError(f"User with ID {user.id} does not exist")
            self._users[user.id] = user.model_copy()
        logger.debug("Replaced user {}", user.id)
        return user

    def delete_by_id(self, user_id: str | None) -> bool:
        if _is_blank(user_id):
            return False
        with self._lock:
            removed = self._users.pop(user_id, None)
        return removed is not None

    def exists_by_id(self, user_id: str | None) -> bool:
        if _is_blank(user_id):
            return False
        with self._lock:
            return user_id in self._users

    def count(self) -> int:
        with self._lock:
            return len(self._users)
