"""
Snipnet Backend — Snippet Controller (Business Logic)
=======================================================

What:  The seven snippet operations: validation, ownership and id rules
       in front of a SnippetStore.
Why:   Keeps HTTP concerns out of the rules so they can be tested with a
       plain store and a Session, no server involved.
How:   Each operation raises a typed SnipnetError on failure; the global
       exception handlers turn those into status codes and envelopes.
Who:   Called by the route handlers in snipnet.routes.snippets.

Operation Flow (mutations):
    validate body → load existing → ownership check → pin id/user_id → store call

Status mapping of store failures:
    get one / list / list for user → 404 (lookup and query failures alike)
    create / replace / delete      → 500
    single-field update            → 400
    The last two rows differ on purpose; see DESIGN.md before "fixing" it.

The ownership read and the following write are separate store calls; a
concurrent delete between them surfaces as the write's store error.
"""

import logging
import uuid
from typing import Any, List

from snipnet.auth import Session
from snipnet.exceptions import (
    BadRequestError,
    InternalError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
)
from snipnet.schemas.snippet import (
    UPDATABLE_FIELDS,
    FieldViolation,
    SnippetData,
    SnippetPayload,
    UpdateOneData,
)
from snipnet.services.snippet_store import SnippetStore
from snipnet.validation import describe, validate_snippet, validate_update_one

logger = logging.getLogger(__name__)


def _reject_invalid(violations: List[FieldViolation]) -> None:
    if violations:
        raise BadRequestError(
            message="Missing parameters",
            detail=describe(violations),
            violations=[v.model_dump() for v in violations],
        )


class SnippetController:
    """
    Snippet business rules over an injected SnippetStore.

    Invariants:
        - id is generated here on create and never read from the client
        - user_id comes from the Session on create and from the stored
          record on update
        - every mutation requires session.user_id == snippet.user_id
    """

    def __init__(self, store: SnippetStore):
        self.store = store

    async def _load(self, snippet_id: str) -> SnippetData:
        try:
            return await self.store.get_snippet(snippet_id)
        except StoreError as e:
            raise NotFoundError(
                message=f"Snippet with {snippet_id} not found",
                detail=e.message,
                context={"snippet_id": snippet_id},
            )

    @staticmethod
    def _authorize(session: Session, snippet: SnippetData) -> None:
        if session.user_id != snippet.user_id:
            raise UnauthorizedError(
                detail="Not authorized",
                context={"user_id": session.user_id, "snippet_id": snippet.id},
            )

    async def create_snippet(self, session: Session, body: Any) -> SnippetData:
        """
        Create a snippet owned by the caller.

        Client-supplied id/user_id are dropped by the payload schema; a fresh
        UUID and the session's user id are used instead.

        Raises:
            BadRequestError: Body fails validation (400)
            InternalError: Store failed to persist (500)
        """
        _reject_invalid(validate_snippet(body))
        payload = SnippetPayload.model_validate(body)

        snippet = SnippetData(
            id=str(uuid.uuid4()),
            user_id=session.user_id,
            **payload.model_dump(),
        )

        try:
            created = await self.store.create_snippet(snippet)
        except StoreError as e:
            raise InternalError(
                message="An error occurred while creating snippet",
                detail=e.message,
            )

        logger.info("Snippet %s created by %s", created.id, session.user_id)
        return created

    async def get_snippet_by_id(self, snippet_id: str) -> SnippetData:
        """Public read. Raises NotFoundError (404) when the id is unknown."""
        return await self._load(snippet_id)

    async def get_all_snippets(self) -> List[SnippetData]:
        """Public read of every snippet. Any store failure is reported as 404."""
        try:
            return await self.store.get_snippets()
        except StoreError as e:
            raise NotFoundError(message="Error fetching snippets", detail=e.message)

    async def get_all_user_snippets(self, user_id: str) -> List[SnippetData]:
        """Public read of one user's snippets. Any store failure is reported as 404."""
        try:
            return await self.store.get_snippets_user(user_id)
        except StoreError as e:
            raise NotFoundError(
                message="Error fetching snippets",
                detail=e.message,
                context={"user_id": user_id},
            )

    async def update_snippet_multi(
        self, session: Session, snippet_id: str, body: Any
    ) -> SnippetData:
        """
        Replace title, description and code of a snippet the caller owns.

        Raises:
            BadRequestError: Body fails validation (400)
            NotFoundError: Unknown id (404)
            UnauthorizedError: Caller is not the owner (401)
            InternalError: Store failed to write (500)
        """
        _reject_invalid(validate_snippet(body))
        payload = SnippetPayload.model_validate(body)

        existing = await self._load(snippet_id)
        self._authorize(session, existing)

        replacement = SnippetData(
            id=existing.id,
            user_id=existing.user_id,
            created_at=existing.created_at,
            **payload.model_dump(),
        )

        try:
            updated = await self.store.update_snippet_multi(replacement)
        except StoreError as e:
            raise InternalError(message="Unable to update snippet", detail=e.message)

        logger.info("Snippet %s replaced by %s", snippet_id, session.user_id)
        return updated

    async def update_snippet_one(
        self, session: Session, snippet_id: str, body: Any
    ) -> SnippetData:
        """
        Replace one allow-listed field of a snippet the caller owns.

        Raises:
            BadRequestError: Body fails validation, field not in
                UPDATABLE_FIELDS, or the store rejected the write (400)
            NotFoundError: Unknown id (404)
            UnauthorizedError: Caller is not the owner (401)
        """
        _reject_invalid(validate_update_one(body))
        data = UpdateOneData.model_validate(body)

        existing = await self._load(snippet_id)
        self._authorize(session, existing)

        if data.field not in UPDATABLE_FIELDS:
            raise BadRequestError(
                message="You can't update that parameter",
                detail="Invalid field value",
                context={"field": data.field},
            )

        try:
            updated = await self.store.update_snippet_single(snippet_id, data.field, data.value)
        except StoreError as e:
            raise BadRequestError(
                message="An error occurred while updating the resource",
                detail=e.message,
            )

        logger.info("Snippet %s field %s updated by %s", snippet_id, data.field, session.user_id)
        return updated

    async def delete_snippet(self, session: Session, snippet_id: str) -> None:
        """
        Delete a snippet the caller owns.

        Raises:
            NotFoundError: Unknown id (404)
            UnauthorizedError: Caller is not the owner (401)
            InternalError: Store failed to delete (500)
        """
        existing = await self._load(snippet_id)
        self._authorize(session, existing)

        try:
            await self.store.delete_snippet(snippet_id)
        except StoreError as e:
            raise InternalError(
                message="An error occurred while deleting snippet",
                detail=e.message,
            )

        logger.info("Snippet %s deleted by %s", snippet_id, session.user_id)
