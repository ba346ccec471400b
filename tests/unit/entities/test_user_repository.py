"""Unit tests for the in-memory user store."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.users_api.core.exceptions import InvalidArgumentError
from src.users_api.entities.user import InMemoryUserRepository, User, UserRepository


def _user(**fields) -> User:
    defaults = {
        "name": "Ana",
        "phone": "+34600111222",
        "email": "ana@example.com",
        "role": "client",
    }
    defaults.update(fields)
    return User(**defaults)


class TestSave:
    def test_save_returns_same_record(self, repository):
        user = _user()

        assert repository.save(user) is user
        assert repository.exists_by_id(user.id)

    def test_save_overwrites_by_id(self, repository):
        user = repository.save(_user(name="Ana"))
        repository.save(_user(id=user.id, name="Ana Maria"))

        assert repository.count() == 1
        assert repository.find_by_id(user.id).name == "Ana Maria"

    def test_save_none_raises(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.save(None)

    def test_save_stores_a_copy(self, repository):
        user = repository.save(_user(name="Ana"))
        user.name = "Changed after save"

        assert repository.find_by_id(user.id).name == "Ana"


class TestFind:
    @pytest.mark.parametrize("user_id", [None, "", "   ", "missing-id"])
    def test_find_by_id_absent(self, repository, user_id):
        repository.save(_user())

        assert repository.find_by_id(user_id) is None

    def test_find_by_id_returns_stored_fields(self, repository):
        user = repository.save(_user(role="admin"))

        found = repository.find_by_id(user.id)

        assert found == user
        assert found.model_dump() == user.model_dump()

    def test_find_all_empty(self, repository):
        assert repository.find_all() == []

    def test_find_all_returns_every_user(self, repository):
        users = [repository.save(_user(name=f"User {i}")) for i in range(5)]

        assert set(repository.find_all()) == set(users)

    def test_find_all_is_a_snapshot(self, repository):
        repository.save(_user())
        snapshot = repository.find_all()

        repository.save(_user(name="Later"))

        assert len(snapshot) == 1


class TestUpdate:
    def test_update_existing(self, repository):
        user = repository.save(_user(name="Ana"))
        user.name = "Ana Maria"

        assert repository.update(user) is user
        assert repository.find_by_id(user.id).name == "Ana Maria"

    def test_update_none_raises(self, repository):
        with pytest.raises(InvalidArgumentError):
            repository.update(None)

    def test_update_missing_raises(self, repository):
        with pytest.raises(InvalidArgumentError, match="does not exist"):
            repository.update(_user())

        assert repository.count() == 0


class TestDeleteAndExists:
    def test_delete_existing(self, repository):
        user = repository.save(_user())

        assert repository.delete_by_id(user.id) is True
        assert repository.exists_by_id(user.id) is False
        assert repository.find_by_id(user.id) is None

    @pytest.mark.parametrize("user_id", [None, "", "  ", "missing-id"])
    def test_delete_absent_returns_false(self, repository, user_id):
        assert repository.delete_by_id(user_id) is False

    def test_delete_twice(self, repository):
        user = repository.save(_user())

        assert repository.delete_by_id(user.id) is True
        assert repository.delete_by_id(user.id) is False

    @pytest.mark.parametrize("user_id", [None, "", "  ", "missing-id"])
    def test_exists_absent(self, repository, user_id):
        assert repository.exists_by_id(user_id) is False


class TestConcurrency:
    def test_concurrent_saves_are_all_kept(self, repository):
        users = [_user(name=f"User {i}") for i in range(200)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(repository.save, users))

        assert repository.count() == 200
        assert set(repository.find_all()) == set(users)

    def test_concurrent_mixed_operations(self, repository):
        users = [repository.save(_user(name=f"User {i}")) for i in range(100)]

        def churn(user: User) -> None:
            repository.find_all()
            user.name = f"{user.name} (updated)"
            repository.update(user)
            repository.find_by_id(user.id)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(churn, users))
            deleted = list(pool.map(repository.delete_by_id, [u.id for u in users[:50]]))

        assert all(deleted)
        remaining = repository.find_all()
        assert len(remaining) == 50
        assert all(user.name.endswith("(updated)") for user in remaining)


def test_in_memory_store_is_a_user_repository():
    assert isinstance(InMemoryUserRepository(), UserRepository)


def test_repository_interface_cannot_be_instantiated():
    with pytest.raises(TypeError):
        UserRepository()
