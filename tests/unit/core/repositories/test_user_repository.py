"""Unit tests for UserRepository."""

import uuid

import pytest

from notekeeper.core.models.user import User
from notekeeper.core.repositories.user_repository import UserRepository


class FakeResult:
    def __init__(self, scalar=None):
        self._scalar = scalar

    def scalar_one_or_none(self):
        return self._scalar


class FakeSession:
    def __init__(self, result=None):
        self._result = result
        self.added = []
        self.commits = 0
        self.refreshed = []

    async def execute(self, stmt):
        return self._result

    def add(self, obj):
        self.added.append(obj)

    async def commit(self):
        self.commits += 1

    async def refresh(self, obj, attrs=None):
        self.refreshed.append(obj)


def _user(**overrides):
    data = {"email": "bob@example.com", "first_name": "Bob", "last_name": "Builder", "password_hash": "h"}
    data.update(overrides)
    return User(**data)


@pytest.mark.asyncio
async def test_create_user():
    session = FakeSession()
    repo = UserRepository(session)

    user = await repo.create_user(
        {"email": "Alice@Example.com", "first_name": "Alice", "last_name": "L", "password_hash": "h"}
    )

    assert isinstance(user, User)
    assert user.email == "alice@example.com"
    assert session.added == [user]
    assert session.commits == 1
    assert session.refreshed == [user]


@pytest.mark.asyncio
async def test_get_by_id_found_and_not_found():
    uid = uuid.uuid4()
    repo = UserRepository(FakeSession(FakeResult(_user(id=uid))))
    assert (await repo.get_by_id(uid)).id == uid

    repo = UserRepository(FakeSession(FakeResult(None)))
    assert await repo.get_by_id(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_update_user_not_found():
    session = FakeSession(FakeResult(None))

    assert await UserRepository(session).update_user(uuid.uuid4(), {"first_name": "X"}) is None
    assert session.commits == 0


@pytest.mark.asyncio
async def test_update_user_applies_fields():
    user = _user(id=uuid.uuid4())
    session = FakeSession(FakeResult(user))

    updated = await UserRepository(session).update_user(user.id, {"first_name": "Robert"})

    assert updated.first_name == "Robert"
    assert session.commits == 1


@pytest.mark.asyncio
async def test_get_by_emails_empty_skips_query():
    session = FakeSession()
    assert await UserRepository(session).get_by_emails([]) == []


@pytest.mark.asyncio
async def test_get_by_email_against_database(test_session, test_user):
    repo = UserRepository(test_session)

    assert (await repo.get_by_email(" OWNER@example.com ")).id == test_user.id
    assert await repo.get_by_email("missing@example.com") is None


@pytest.mark.asyncio
async def test_get_by_emails_against_database(test_session, test_user, other_user):
    users = await UserRepository(test_session).get_by_emails(["Friend@example.com", "ghost@example.com"])
    assert [u.id for u in users] == [other_user.id]
