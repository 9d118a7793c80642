"""Unit tests for the shared repository CRUD, pagination and search helpers."""

import pytest
from sqlmodel import select

from studentos.core.database.entities import ContactMessage
from studentos.core.database.repositories import ContactMessageRepository
from studentos.core.database.repositories.base import QueryBuilder

pytestmark = pytest.mark.asyncio


def _message(n: int, **overrides) -> ContactMessage:
    data = {"name": f"Sender {n}", "email": f"sender{n}@studentos.com", "message": f"Message {n}"}
    data.update(overrides)
    return ContactMessage(**data)


@pytest.fixture
def repository(session) -> ContactMessageRepository:
    return ContactMessageRepository(session)


class TestCrud:
    async def test_create_and_get(self, repository):
        created = await repository.create(_message(1))
        assert created.id
        fetched = await repository.get_by_id(created.id)
        assert fetched.email == "sender1@studentos.com"

    async def test_get_missing(self, repository):
        assert await repository.get_by_id("missing") is None

    async def test_update(self, repository):
        created = await repository.create(_message(1))
        updated = await repository.update(created, {"is_read": True})
        assert updated.is_read is True

    async def test_delete(self, repository):
        created = await repository.create(_message(1))
        assert await repository.delete(created.id) is True
        assert await repository.delete(created.id) is False

    async def test_count_where(self, repository):
        await repository.create(_message(1))
        await repository.create(_message(2, is_read=True))
        assert await repository.count_where() == 2
        assert await repository.count_where(ContactMessage.is_read == True) == 1  # noqa: E712


class TestPaginate:
    async def test_pages_and_total(self, repository, session):
        for n in range(5):
            await repository.create(_message(n))
        stmt = select(ContactMessage).order_by(ContactMessage.name.asc())

        rows, total = await repository.paginate(stmt, page=2, limit=2)

        assert total == 5
        assert [m.name for m in rows] == ["Sender 2", "Sender 3"]

    async def test_page_past_the_end(self, repository):
        await repository.create(_message(1))
        rows, total = await repository.paginate(select(ContactMessage), page=3, limit=10)
        assert rows == []
        assert total == 1


class TestSearch:
    async def test_case_insensitive_match_on_any_column(self, repository, session):
        await repository.create(_message(1, name="Grace Hopper"))
        await repository.create(_message(2, email="ada@lovelace.dev"))
        await repository.create(_message(3))
        stmt = QueryBuilder.apply_search(
            select(ContactMessage), [ContactMessage.name, ContactMessage.email], "HOPPER"
        )
        assert [m.name for m in (await session.execute(stmt)).scalars().all()] == ["Grace Hopper"]

        stmt = QueryBuilder.apply_search(select(ContactMessage), [ContactMessage.name, ContactMessage.email], "ada")
        assert [m.email for m in (await session.execute(stmt)).scalars().all()] == ["ada@lovelace.dev"]

    async def test_empty_search_is_noop(self):
        stmt = select(ContactMessage)
        assert QueryBuilder.apply_search(stmt, [ContactMessage.name], None) is stmt
        assert QueryBuilder.apply_search(stmt, [ContactMessage.name], "") is stmt


class TestFilters:
    async def test_equality_filters_skip_none_and_unknown_columns(self, repository, session):
        await repository.create(_message(1))
        await repository.create(_message(2, is_read=True))
        stmt = QueryBuilder.apply_filters(
            select(ContactMessage), ContactMessage, {"is_read": False, "name": None, "unknown_column": "x"}
        )
        assert [m.name for m in (await session.execute(stmt)).scalars().all()] == ["Sender 1"]
