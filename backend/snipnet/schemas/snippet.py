"""
Snipnet Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract for snippets.
Why:   Strict input validation, automatic serialization, and OpenAPI doc generation.
How:   Request bodies are checked by the validators in snipnet.validation;
       responses are wrapped in the {message, data} envelope.
Who:   Used by the controller, the stores and the route handlers.

Design Decision:
    Schemas are separate from the SQLAlchemy model because the in-memory
    store has no ORM rows, and because the API decides which fields exist
    on the wire independently of the table.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

# Fields a single-field update may touch; id, user_id and timestamps are never writable
UPDATABLE_FIELDS = ("title", "description", "code")

# Column widths of the snippets table
TITLE_MAX_LENGTH = 255
USER_ID_MAX_LENGTH = 255


# ══════════════════════════════════════════════════════════════════════════
# Domain Record
# ══════════════════════════════════════════════════════════════════════════


class SnippetData(BaseModel):
    """
    What:  A snippet as exchanged between controller, stores and clients.

    id and user_id are always filled in by the server: a fresh UUID on
    create, the existing record's values on update.
    """
    id: str = Field(description="Unique snippet identifier (UUID)")
    user_id: str = Field(description="Id of the user who owns the snippet")
    title: str = Field(description="Short name of the snippet")
    description: str = Field(description="What the snippet does")
    code: str = Field(description="The snippet body")
    created_at: Optional[datetime] = Field(default=None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(default=None, description="Last modification time (UTC)")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class SnippetPayload(BaseModel):
    """
    What:  Body of POST /api/snippets and PUT /api/snippets/{id}.

    Unknown keys are ignored, so a client-supplied `id` or `user_id`
    never reaches the store.
    """
    title: str = Field(
        min_length=1, max_length=TITLE_MAX_LENGTH, description="Short name of the snippet"
    )
    description: str = Field(min_length=1, description="What the snippet does")
    code: str = Field(min_length=1, description="The snippet body")

    model_config = {"extra": "ignore"}


class UpdateOneData(BaseModel):
    """
    What:  Body of PATCH /api/snippets/{id}: replace one field.

    `field` must be one of UPDATABLE_FIELDS; the controller checks this
    after ownership so that non-owners learn nothing about the field rules.
    """
    field: str = Field(min_length=1, description="Name of the field to replace")
    value: str = Field(min_length=1, description="New value of the field")

    model_config = {"extra": "ignore"}


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class SnippetEnvelope(BaseModel):
    message: str = Field(description="Human-readable outcome")
    data: SnippetData


class SnippetListEnvelope(BaseModel):
    message: str = Field(description="Human-readable outcome")
    data: List[SnippetData]


class FieldViolation(BaseModel):
    """One field-level validation problem."""
    field: str = Field(description="Dotted path of the offending field")
    problem: str = Field(description="What is wrong with it")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error envelope for all API errors.

    Example:
        {
            "message": "Missing parameters",
            "error": "title: Field required",
            "details": [{"field": "title", "problem": "Field required"}],
            "request_id": "a1b2c3d4"
        }
    """
    message: str = Field(description="Human-readable error description")
    error: str = Field(description="Underlying cause")
    details: Optional[List[FieldViolation]] = Field(default=None, description="Field violations")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health for monitoring and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected, in_memory")
    uptime_seconds: float = Field(description="Seconds since service started")
