"""
Snipnet Backend — Snippet Route Handlers
==========================================

What:  HTTP surface of the seven snippet operations.
How:   Extracts the session, path parameters and raw JSON body, delegates to
       SnippetController, and wraps results in the {message, data} envelope.
       Errors raised by the controller are formatted by the global handlers
       registered in snipnet.main.

Route Inventory:
    POST   /api/snippets                 create (auth)
    GET    /api/snippets                 list all
    GET    /api/snippets/{id}            get one
    PUT    /api/snippets/{id}            replace title/description/code (auth, owner)
    PATCH  /api/snippets/{id}            replace one field (auth, owner)
    DELETE /api/snippets/{id}            delete (auth, owner)
    GET    /api/users/{userid}/snippets  list one user's snippets

Why bodies are read as raw JSON:
    The controller validates bodies itself (after auth, before the store) and
    reports violations as 400. The schemas are still published to OpenAPI
    through openapi_extra.
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request, Response

from snipnet.auth import Session, get_session
from snipnet.dependencies import get_snippet_controller
from snipnet.exceptions import BadRequestError
from snipnet.schemas.snippet import (
    ErrorResponse,
    SnippetEnvelope,
    SnippetListEnvelope,
    SnippetPayload,
    UpdateOneData,
)
from snipnet.services.snippet_controller import SnippetController

router = APIRouter(prefix="/api", tags=["Snippets"])


def _json_body(schema) -> dict:
    """openapi_extra describing a JSON request body of the given schema."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


async def read_json(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Raises:
        BadRequestError: Empty body or invalid JSON (400)
    """
    raw = await request.body()
    if not raw:
        raise BadRequestError(message="No payload attached to req", detail="Empty request body")
    try:
        return json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise BadRequestError(message="No payload attached to req", detail=f"Invalid JSON: {e}")


@router.post(
    "/snippets",
    status_code=201,
    response_model=SnippetEnvelope,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        401: {"description": "Not authenticated", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Create a snippet owned by the caller",
    openapi_extra=_json_body(SnippetPayload),
)
async def create_snippet(
    request: Request,
    session: Session = Depends(get_session),
    controller: SnippetController = Depends(get_snippet_controller),
) -> SnippetEnvelope:
    body = await read_json(request)
    snippet = await controller.create_snippet(session, body)
    return SnippetEnvelope(message="Snippet created", data=snippet)


@router.get(
    "/snippets",
    response_model=SnippetListEnvelope,
    responses={404: {"description": "Snippets could not be fetched", "model": ErrorResponse}},
    summary="List every snippet",
)
async def get_all_snippets(
    controller: SnippetController = Depends(get_snippet_controller),
) -> SnippetListEnvelope:
    snippets = await controller.get_all_snippets()
    return SnippetListEnvelope(message="Snippets found", data=snippets)


@router.get(
    "/snippets/{snippet_id}",
    response_model=SnippetEnvelope,
    responses={404: {"description": "Snippet not found", "model": ErrorResponse}},
    summary="Get a single snippet by ID",
)
async def get_snippet_by_id(
    snippet_id: str,
    controller: SnippetController = Depends(get_snippet_controller),
) -> SnippetEnvelope:
    snippet = await controller.get_snippet_by_id(snippet_id)
    return SnippetEnvelope(message="Snippet found", data=snippet)


@router.get(
    "/users/{user_id}/snippets",
    response_model=SnippetListEnvelope,
    responses={404: {"description": "Snippets could not be fetched", "model": ErrorResponse}},
    summary="List the snippets of one user",
)
async def get_all_user_snippets(
    user_id: str,
    controller: SnippetController = Depends(get_snippet_controller),
) -> SnippetListEnvelope:
    snippets = await controller.get_all_user_snippets(user_id)
    return SnippetListEnvelope(message="User's snippets found", data=snippets)


@router.put(
    "/snippets/{snippet_id}",
    response_model=SnippetEnvelope,
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorResponse},
        401: {"description": "Not authenticated or not the owner", "model": ErrorResponse},
        404: {"description": "Snippet not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Replace title, description and code of a snippet",
    openapi_extra=_json_body(SnippetPayload),
)
async def update_snippet_multi(
    snippet_id: str,
    request: Request,
    session: Session = Depends(get_session),
    controller: SnippetController = Depends(get_snippet_controller),
) -> SnippetEnvelope:
    body = await read_json(request)
    snippet = await controller.update_snippet_multi(session, snippet_id, body)
    return SnippetEnvelope(message="Updated snippet", data=snippet)


@router.patch(
    "/snippets/{snippet_id}",
    response_model=SnippetEnvelope,
    responses={
        400: {"description": "Invalid body, field, or store rejection", "model": ErrorResponse},
        401: {"description": "Not authenticated or not the owner", "model": ErrorResponse},
        404: {"description": "Snippet not found", "model": ErrorResponse},
    },
    summary="Replace one field of a snippet",
    openapi_extra=_json_body(UpdateOneData),
)
async def update_snippet_one(
    snippet_id: str,
    request: Request,
    session: Session = Depends(get_session),
    controller: SnippetController = Depends(get_snippet_controller),
) -> SnippetEnvelope:
    body = await read_json(request)
    snippet = await controller.update_snippet_one(session, snippet_id, body)
    return SnippetEnvelope(message="Updated snippet", data=snippet)


@router.delete(
    "/snippets/{snippet_id}",
    status_code=204,
    response_class=Response,
    responses={
        401: {"description": "Not authenticated or not the owner", "model": ErrorResponse},
        404: {"description": "Snippet not found", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="Delete a snippet",
)
async def delete_snippet(
    snippet_id: str,
    session: Session = Depends(get_session),
    controller: SnippetController = Depends(get_snippet_controller),
) -> Response:
    await controller.delete_snippet(session, snippet_id)
    return Response(status_code=204)
