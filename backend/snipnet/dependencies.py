"""
Snipnet Backend — FastAPI Dependencies
========================================

What:  Builds the SnippetStore and SnippetController for each request.
How:   SNIPPET_STORE=sql wraps the request's database session;
       SNIPPET_STORE=memory shares one process-wide InMemorySnippetStore.
       Tests swap the store with app.dependency_overrides[get_snippet_store].

An unused AsyncSession never opens a connection, so memory mode does not
need a reachable database.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from snipnet.config import settings
from snipnet.database import get_db_session
from snipnet.services.memory_snippet_store import InMemorySnippetStore
from snipnet.services.snippet_controller import SnippetController
from snipnet.services.snippet_store import SnippetStore
from snipnet.services.sql_snippet_store import SqlSnippetStore

_memory_store = InMemorySnippetStore()


async def get_snippet_store(
    db: AsyncSession = Depends(get_db_session),
) -> SnippetStore:
    if settings.snippet_store == "memory":
        return _memory_store
    return SqlSnippetStore(db)


async def get_snippet_controller(
    store: SnippetStore = Depends(get_snippet_store),
) -> SnippetController:
    return SnippetController(store)
