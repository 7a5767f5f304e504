"""
Snipnet Backend — SQL Snippet Store
=====================================

What:  SnippetStore backed by the `snippets` table through async SQLAlchemy.
Who:   Built per request by snipnet.dependencies with the request's session.

Error Handling Strategy:
    SQLAlchemy exceptions are logged and wrapped in StoreError, which hides
    driver details from the controller. A missing row raises
    SnippetNotFoundError. Writes are flushed, not committed: the session
    dependency commits once the request succeeds.
"""

import logging
from typing import List

from sqlalchemy import desc, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from snipnet.exceptions import SnippetNotFoundError, StoreError
from snipnet.models.snippet import Snippet, utcnow
from snipnet.schemas.snippet import UPDATABLE_FIELDS, SnippetData
from snipnet.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)


class SqlSnippetStore(SnippetStore):

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _load(self, snippet_id: str) -> Snippet:
        try:
            result = await self.db.execute(
                select(Snippet).where(Snippet.id == snippet_id)
            )
            row = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching snippet %s: %s", snippet_id, str(e))
            raise StoreError(f"could not fetch snippet '{snippet_id}'") from e

        if row is None:
            raise SnippetNotFoundError(snippet_id)
        return row

    async def get_snippet(self, snippet_id: str) -> SnippetData:
        row = await self._load(snippet_id)
        return SnippetData.model_validate(row)

    async def get_snippets(self) -> List[SnippetData]:
        try:
            result = await self.db.execute(
                select(Snippet).order_by(desc(Snippet.created_at))
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing snippets: %s", str(e), exc_info=True)
            raise StoreError("could not list snippets") from e
        return [SnippetData.model_validate(row) for row in rows]

    async def get_snippets_user(self, user_id: str) -> List[SnippetData]:
        try:
            result = await self.db.execute(
                select(Snippet)
                .where(Snippet.user_id == user_id)
                .order_by(desc(Snippet.created_at))
            )
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing snippets of %s: %s", user_id, str(e))
            raise StoreError(f"could not list snippets of user '{user_id}'") from e
        return [SnippetData.model_validate(row) for row in rows]

    async def create_snippet(self, snippet: SnippetData) -> SnippetData:
        now = utcnow()
        row = Snippet(
            id=snippet.id,
            user_id=snippet.user_id,
            title=snippet.title,
            description=snippet.description,
            code=snippet.code,
            created_at=now,
            updated_at=now,
        )
        try:
            self.db.add(row)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating snippet %s: %s", snippet.id, str(e))
            raise StoreError(f"could not create snippet '{snippet.id}'") from e
        return SnippetData.model_validate(row)

    async def update_snippet_multi(self, snippet: SnippetData) -> SnippetData:
        row = await self._load(snippet.id)
        row.title = snippet.title
        row.description = snippet.description
        row.code = snippet.code
        row.updated_at = utcnow()
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating snippet %s: %s", snippet.id, str(e))
            raise StoreError(f"could not update snippet '{snippet.id}'") from e
        return SnippetData.model_validate(row)

    async def update_snippet_single(
        self, snippet_id: str, field: str, value: str
    ) -> SnippetData:
        # The field name becomes an attribute write, so it is checked here too
        if field not in UPDATABLE_FIELDS:
            raise StoreError(f"field '{field}' cannot be updated")

        row = await self._load(snippet_id)
        setattr(row, field, value)
        row.updated_at = utcnow()
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating %s of snippet %s: %s", field, snippet_id, str(e))
            raise StoreError(f"could not update snippet '{snippet_id}'") from e
        return SnippetData.model_validate(row)

    async def delete_snippet(self, snippet_id: str) -> None:
        row = await self._load(snippet_id)
        try:
            await self.db.delete(row)
            await self.db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting snippet %s: %s", snippet_id, str(e))
            raise StoreError(f"could not delete snippet '{snippet_id}'") from e

    async def health_check(self) -> str:
        try:
            await self.db.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Health check: database unreachable: %s", str(e))
            return "disconnected"
        return "connected"
