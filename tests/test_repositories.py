import pytest

from entropy.config.seed_modules import seed_modules
from entropy.errors import ConflictError, NotFoundError
from entropy.repositories.module_repository import InMemoryModuleRepository


def test_update_is_all_or_nothing(users):
    user = users.create("Ana", "ana@x.com", 15, "hash")

    def boom(draft):
        draft.enrolled_module_ids.append(1)
        raise ConflictError("nope")

    with pytest.raises(ConflictError):
        users.update(user.id, boom)

    stored = users.find_by_id(user.id)
    assert stored.enrolled_module_ids == []
    assert stored.version == user.version


def test_update_bumps_version(users):
    user = users.create("Ana", "ana@x.com", 15, "hash")
    updated = users.update(user.id, lambda u: u.enrolled_module_ids.append(3))
    assert updated.version == user.version + 1
    assert users.find_by_id(user.id).enrolled_module_ids == [3]


def test_update_unknown_user(users):
    with pytest.raises(NotFoundError):
        users.update(99, lambda u: None)


def test_returned_users_are_copies(users):
    user = users.create("Ana", "ana@x.com", 15, "hash")
    user.enrolled_module_ids.append(1)
    assert users.find_by_id(user.id).enrolled_module_ids == []


def test_seed_does_not_overwrite_existing_counters():
    repo = InMemoryModuleRepository(seed_modules())
    repo.increment_enrolled(1)
    assert repo.seed(seed_modules()) == 0
    assert repo.get(1).enrolled == 1


def test_list_is_sorted_by_id():
    repo = InMemoryModuleRepository(reversed(seed_modules()))
    assert [m.id for m in repo.list()] == list(range(1, 10))


def test_increment_unknown_module():
    repo = InMemoryModuleRepository(seed_modules())
    with pytest.raises(NotFoundError):
        repo.increment_enrolled(42)
