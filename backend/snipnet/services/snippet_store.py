"""
Snipnet Backend — Abstract Snippet Store Interface
====================================================

What:  Abstract base class defining the persistence contract for snippets.
Why:   The controller only needs these seven operations; the concrete storage
       (SQL database, in-memory dict) can be swapped without touching it.
How:   Concrete implementations inherit from SnippetStore and implement every method.
Who:   Called by SnippetController.
"""

from abc import ABC, abstractmethod
from typing import List

from snipnet.schemas.snippet import SnippetData


class SnippetStore(ABC):
    """
    Abstract interface for snippet persistence.

    Contract:
        - Failures are raised, never returned: SnippetNotFoundError when an id
          does not exist, StoreError for any other query or write failure
        - Implementation-specific errors are wrapped in StoreError
        - Stores trust the id and user_id they are given; the controller owns
          those invariants

    Implementations:
        - SqlSnippetStore: async SQLAlchemy, one instance per request session
        - InMemorySnippetStore: process-local dict, used by tests and local runs
    """

    @abstractmethod
    async def get_snippet(self, snippet_id: str) -> SnippetData:
        """
        Fetch one snippet.

        Raises:
            SnippetNotFoundError: No snippet has this id.
            StoreError: The lookup failed.
        """
        ...

    @abstractmethod
    async def get_snippets(self) -> List[SnippetData]:
        """Fetch every snippet, newest first."""
        ...

    @abstractmethod
    async def get_snippets_user(self, user_id: str) -> List[SnippetData]:
        """Fetch the snippets owned by `user_id`, newest first."""
        ...

    @abstractmethod
    async def create_snippet(self, snippet: SnippetData) -> SnippetData:
        """Persist a new snippet and return it as stored (timestamps filled in)."""
        ...

    @abstractmethod
    async def update_snippet_multi(self, snippet: SnippetData) -> SnippetData:
        """
        Replace title, description and code of the snippet with `snippet.id`.

        id, user_id and created_at are kept as stored.
        """
        ...

    @abstractmethod
    async def update_snippet_single(
        self, snippet_id: str, field: str, value: str
    ) -> SnippetData:
        """
        Replace one field of a snippet.

        Raises:
            StoreError: `field` is not one of UPDATABLE_FIELDS, or the write failed.
        """
        ...

    @abstractmethod
    async def delete_snippet(self, snippet_id: str) -> None:
        """Delete a snippet. Raises SnippetNotFoundError if it does not exist."""
        ...

    async def health_check(self) -> str:
        """
        Report store connectivity for the health endpoint.

        Returns one of: connected, disconnected, in_memory.
        """
        return "connected"
