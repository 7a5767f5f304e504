"""
Snipnet Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for each error kind the API reports.
Why:   Handlers raise one typed error instead of writing responses themselves;
       the HTTP status is chosen once, by the global exception handlers.
How:   Each exception carries a user-facing message, a `detail` describing the
       underlying cause, and an optional context dict for logs.
Who:   Raised by the controller, the auth dependency and the stores.
When:  During request processing when a request cannot be completed.

Exception Hierarchy:
    SnipnetError (base)
    ├── BadRequestError     → 400 Bad Request
    ├── UnauthorizedError   → 401 Unauthorized
    │   └── UnauthenticatedError  (adds WWW-Authenticate: Bearer)
    ├── NotFoundError       → 404 Not Found
    └── InternalError       → 500 Internal Server Error

    StoreError (raised by SnippetStore implementations, never by routes)
    └── SnippetNotFoundError
"""

from typing import Any, Dict, List, Optional


class SnipnetError(Exception):
    """
    Base exception for all Snipnet application errors.

    Attributes:
        status_code: HTTP status the global handler responds with
        message:     User-facing error description
        detail:      Short description of the cause, returned as `error`
        context:     Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.detail = detail or self.message
        self.context = context or {}
        super().__init__(self.message)


class BadRequestError(SnipnetError):
    """
    Raised when the request body is missing, malformed or fails validation.

    HTTP: 400 Bad Request

    `violations` lists field-level problems when validation produced them:
        [{"field": "title", "problem": "Field required"}]
    """

    status_code = 400
    default_message = "Bad request"

    def __init__(
        self,
        message: Optional[str] = None,
        detail: Optional[str] = None,
        violations: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, detail=detail, context=context)
        self.violations = violations or []


class UnauthorizedError(SnipnetError):
    """
    Raised when the caller may not act on a resource, or is not authenticated.

    HTTP: 401 Unauthorized
    """

    status_code = 401
    default_message = "You are not authorized to access this resource"


class UnauthenticatedError(UnauthorizedError):
    """
    Raised when the request carries no usable bearer token.

    HTTP: 401 Unauthorized, with a `WWW-Authenticate: Bearer` challenge.
    An authenticated caller who does not own a resource gets the plain
    UnauthorizedError instead.
    """

    default_message = "Unauthenticated"


class NotFoundError(SnipnetError):
    """
    Raised when a requested resource does not exist or could not be fetched.

    HTTP: 404 Not Found
    """

    status_code = 404
    default_message = "The requested resource was not found"


class InternalError(SnipnetError):
    """
    Raised when the store fails while creating, replacing or deleting.

    HTTP: 500 Internal Server Error

    The cause in `detail` is logged server-side; the response replaces it
    with a generic `error` string.
    """

    status_code = 500
    default_message = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Store Errors
# ══════════════════════════════════════════════════════════════════════════


class StoreError(Exception):
    """
    Raised by a SnippetStore when a query or write fails.

    The controller decides which HTTP-facing error a StoreError becomes;
    stores never know about status codes.
    """

    def __init__(self, message: str = "Snippet store operation failed"):
        self.message = message
        super().__init__(message)


class SnippetNotFoundError(StoreError):
    """Raised by a SnippetStore when no snippet has the requested id."""

    def __init__(self, snippet_id: str):
        super().__init__(f"snippet '{snippet_id}' does not exist")
        self.snippet_id = snippet_id
