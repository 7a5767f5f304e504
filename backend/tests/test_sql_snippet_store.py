"""
Snipnet Backend — SQL Snippet Store Tests
===========================================

What:  Tests SqlSnippetStore against a real (in-memory SQLite) database.
Why:   The controller tests use the in-memory store; this checks that the
       SQL implementation honours the same contract.
"""

import pytest
from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from snipnet.exceptions import SnippetNotFoundError, StoreError
from snipnet.schemas.snippet import SnippetData
from snipnet.services.sql_snippet_store import SqlSnippetStore


def make_snippet(snippet_id: str, user_id: str = "u1", title: str = "t") -> SnippetData:
    return SnippetData(id=snippet_id, user_id=user_id, title=title, description="d", code="c")


class TestSqlSnippetStore:

    @pytest.mark.asyncio
    async def test_create_and_get(self, sql_session):
        store = SqlSnippetStore(sql_session)

        created = await store.create_snippet(make_snippet("s1"))
        fetched = await store.get_snippet("s1")

        assert created.created_at is not None
        assert fetched.id == "s1"
        assert fetched.user_id == "u1"
        assert fetched.code == "c"

    @pytest.mark.asyncio
    async def test_get_missing_raises_not_found(self, sql_session):
        store = SqlSnippetStore(sql_session)

        with pytest.raises(SnippetNotFoundError):
            await store.get_snippet("nope")

    @pytest.mark.asyncio
    async def test_list_all_and_by_user(self, sql_session):
        store = SqlSnippetStore(sql_session)
        await store.create_snippet(make_snippet("s1", "u1"))
        await store.create_snippet(make_snippet("s2", "u2"))
        await store.create_snippet(make_snippet("s3", "u1"))

        everything = await store.get_snippets()
        mine = await store.get_snippets_user("u1")

        assert {s.id for s in everything} == {"s1", "s2", "s3"}
        assert {s.id for s in mine} == {"s1", "s3"}
        assert await store.get_snippets_user("nobody") == []

    @pytest.mark.asyncio
    async def test_update_multi_keeps_owner(self, sql_session):
        store = SqlSnippetStore(sql_session)
        await store.create_snippet(make_snippet("s1", "u1"))

        updated = await store.update_snippet_multi(
            SnippetData(id="s1", user_id="u1", title="T", description="D", code="C")
        )

        assert (updated.title, updated.description, updated.code) == ("T", "D", "C")
        assert updated.user_id == "u1"

    @pytest.mark.asyncio
    async def test_update_single(self, sql_session):
        store = SqlSnippetStore(sql_session)
        await store.create_snippet(make_snippet("s1"))

        updated = await store.update_snippet_single("s1", "title", "renamed")

        assert updated.title == "renamed"
        assert (await store.get_snippet("s1")).title == "renamed"

    @pytest.mark.asyncio
    async def test_update_single_refuses_unknown_field(self, sql_session):
        store = SqlSnippetStore(sql_session)
        await store.create_snippet(make_snippet("s1"))

        with pytest.raises(StoreError, match="cannot be updated"):
            await store.update_snippet_single("s1", "user_id", "u2")

        assert (await store.get_snippet("s1")).user_id == "u1"

    @pytest.mark.asyncio
    async def test_delete(self, sql_session):
        store = SqlSnippetStore(sql_session)
        await store.create_snippet(make_snippet("s1"))

        await store.delete_snippet("s1")

        with pytest.raises(SnippetNotFoundError):
            await store.get_snippet("s1")
        with pytest.raises(SnippetNotFoundError):
            await store.delete_snippet("s1")

    @pytest.mark.asyncio
    async def test_query_failure_wrapped_in_store_error(self):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
        store = SqlSnippetStore(db)

        with pytest.raises(StoreError) as exc_info:
            await store.get_snippets()

        assert not isinstance(exc_info.value, SnippetNotFoundError)

    @pytest.mark.asyncio
    async def test_health_check(self, sql_session):
        assert await SqlSnippetStore(sql_session).health_check() == "connected"
