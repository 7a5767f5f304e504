"""
Snipnet Backend — Endpoint Tests on the SQL Store
===================================================

What:  HTTP-level tests through the production wiring: SNIPPET_STORE=sql,
       get_snippet_store → get_db_session → SqlSnippetStore, against an
       in-memory SQLite database.
Why:   test_snippet_routes.py swaps in the in-memory store; these check that
       the per-request session commits what succeeded and rolls back what
       failed.
"""

import logging

import pytest

from snipnet.exceptions import StoreError
from snipnet.services.sql_snippet_store import SqlSnippetStore

SNIPPETS = "/api/snippets"


class TestSqlWiring:

    @pytest.mark.asyncio
    async def test_create_then_delete_scenario(self, sql_client, auth_headers):
        response = await sql_client.post(
            SNIPPETS,
            json={"title": "t", "description": "d", "code": "c"},
            headers=auth_headers("u1"),
        )
        assert response.status_code == 201
        snippet_id = response.json()["data"]["id"]

        fetched = await sql_client.get(f"{SNIPPETS}/{snippet_id}")
        assert fetched.status_code == 200
        assert fetched.json()["data"]["user_id"] == "u1"

        foreign = await sql_client.delete(f"{SNIPPETS}/{snippet_id}", headers=auth_headers("u2"))
        assert foreign.status_code == 401
        assert (await sql_client.get(f"{SNIPPETS}/{snippet_id}")).status_code == 200

        owned = await sql_client.delete(f"{SNIPPETS}/{snippet_id}", headers=auth_headers("u1"))
        assert owned.status_code == 204

        gone = await sql_client.get(f"{SNIPPETS}/{snippet_id}")
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_updates_are_committed(self, sql_client, auth_headers):
        created = await sql_client.post(
            SNIPPETS,
            json={"title": "t", "description": "d", "code": "c"},
            headers=auth_headers("u1"),
        )
        snippet_id = created.json()["data"]["id"]

        await sql_client.put(
            f"{SNIPPETS}/{snippet_id}",
            json={"title": "T", "description": "D", "code": "C"},
            headers=auth_headers("u1"),
        )
        await sql_client.patch(
            f"{SNIPPETS}/{snippet_id}",
            json={"field": "code", "value": "print(1)"},
            headers=auth_headers("u1"),
        )

        listed = await sql_client.get("/api/users/u1/snippets")
        data = listed.json()["data"]
        assert [(s["title"], s["code"]) for s in data] == [("T", "print(1)")]

    @pytest.mark.asyncio
    async def test_failed_write_leaves_no_row(self, sql_client, auth_headers, monkeypatch):
        original_create = SqlSnippetStore.create_snippet

        async def create_then_fail(self, snippet):
            await original_create(self, snippet)
            raise StoreError("constraint check failed after insert")

        monkeypatch.setattr(SqlSnippetStore, "create_snippet", create_then_fail)

        response = await sql_client.post(
            SNIPPETS,
            json={"title": "t", "description": "d", "code": "c"},
            headers=auth_headers("u1"),
        )

        assert response.status_code == 500
        listed = await sql_client.get(SNIPPETS)
        assert listed.status_code == 200
        assert listed.json()["data"] == []

    @pytest.mark.asyncio
    async def test_overlong_title_is_rejected_before_the_database(self, sql_client, auth_headers):
        created = await sql_client.post(
            SNIPPETS,
            json={"title": "t", "description": "d", "code": "c"},
            headers=auth_headers("u1"),
        )
        snippet_id = created.json()["data"]["id"]

        response = await sql_client.patch(
            f"{SNIPPETS}/{snippet_id}",
            json={"field": "title", "value": "x" * 300},
            headers=auth_headers("u1"),
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Missing parameters"
        assert [d["field"] for d in response.json()["details"]] == ["value"]
        stored = await sql_client.get(f"{SNIPPETS}/{snippet_id}")
        assert stored.json()["data"]["title"] == "t"


class TestAccessLog:

    @pytest.mark.asyncio
    async def test_logs_operation_and_user(self, sql_client, auth_headers, caplog):
        caplog.set_level(logging.INFO, logger="snipnet.access")

        await sql_client.post(
            SNIPPETS,
            json={"title": "t", "description": "d", "code": "c"},
            headers=auth_headers("u1"),
        )
        await sql_client.get(SNIPPETS)

        records = [r for r in caplog.records if r.name == "snipnet.access"]
        assert [(r.operation, r.user_id, r.status) for r in records] == [
            ("create_snippet", "u1", 201),
            ("get_all_snippets", "-", 200),
        ]
