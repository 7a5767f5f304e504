"""In-memory implementation of SnippetStore."""

import asyncio
from datetime import datetime, timezone
from typing import Dict, List

from snipnet.exceptions import SnippetNotFoundError, StoreError
from snipnet.schemas.snippet import UPDATABLE_FIELDS, SnippetData
from snipnet.services.snippet_store import SnippetStore


class InMemorySnippetStore(SnippetStore):
    """Process-local store keyed by snippet id. Contents are lost on restart."""

    def __init__(self) -> None:
        self._snippets: Dict[str, SnippetData] = {}
        self._lock = asyncio.Lock()

    def _get(self, snippet_id: str) -> SnippetData:
        snippet = self._snippets.get(snippet_id)
        if snippet is None:
            raise SnippetNotFoundError(snippet_id)
        return snippet

    @staticmethod
    def _newest_first(snippets: List[SnippetData]) -> List[SnippetData]:
        return sorted(snippets, key=lambda s: s.created_at, reverse=True)

    async def get_snippet(self, snippet_id: str) -> SnippetData:
        return self._get(snippet_id).model_copy()

    async def get_snippets(self) -> List[SnippetData]:
        return [s.model_copy() for s in self._newest_first(list(self._snippets.values()))]

    async def get_snippets_user(self, user_id: str) -> List[SnippetData]:
        owned = [s for s in self._snippets.values() if s.user_id == user_id]
        return [s.model_copy() for s in self._newest_first(owned)]

    async def create_snippet(self, snippet: SnippetData) -> SnippetData:
        async with self._lock:
            if snippet.id in self._snippets:
                raise StoreError(f"snippet '{snippet.id}' already exists")
            now = datetime.now(timezone.utc)
            stored = snippet.model_copy(update={"created_at": now, "updated_at": now})
            self._snippets[stored.id] = stored
        return stored.model_copy()

    async def update_snippet_multi(self, snippet: SnippetData) -> SnippetData:
        async with self._lock:
            current = self._get(snippet.id)
            stored = current.model_copy(update={
                "title": snippet.title,
                "description": snippet.description,
                "code": snippet.code,
                "updated_at": datetime.now(timezone.utc),
            })
            self._snippets[stored.id] = stored
        return stored.model_copy()

    async def update_snippet_single(
        self, snippet_id: str, field: str, value: str
    ) -> SnippetData:
        if field not in UPDATABLE_FIELDS:
            raise StoreError(f"field '{field}' cannot be updated")
        async with self._lock:
            current = self._get(snippet_id)
            stored = current.model_copy(update={
                field: value,
                "updated_at": datetime.now(timezone.utc),
            })
            self._snippets[snippet_id] = stored
        return stored.model_copy()

    async def delete_snippet(self, snippet_id: str) -> None:
        async with self._lock:
            self._get(snippet_id)
            del self._snippets[snippet_id]

    async def health_check(self) -> str:
        return "in_memory"
