"""
Snipnet Backend — Request Body Validation
===========================================

What:  One validation function per input shape, each returning the list of
       field-level violations (empty list = valid).
Why:   The controller decides how to report violations; validators never raise.
How:   Runs the pydantic request schema and flattens its errors into
       FieldViolation records.
"""

from typing import Any, List, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from snipnet.schemas.snippet import (
    TITLE_MAX_LENGTH,
    FieldViolation,
    SnippetPayload,
    UpdateOneData,
)


def _violations(schema: Type[BaseModel], data: Any) -> List[FieldViolation]:
    if not isinstance(data, dict):
        return [FieldViolation(field="body", problem="Expected a JSON object")]
    try:
        schema.model_validate(data)
    except PydanticValidationError as exc:
        return [
            FieldViolation(
                field=".".join(str(part) for part in err["loc"]) or "body",
                problem=err["msg"],
            )
            for err in exc.errors()
        ]
    return []


def validate_snippet(data: Any) -> List[FieldViolation]:
    """Check a create / multi-field update body: title, description and code are required."""
    return _violations(SnippetPayload, data)


def validate_update_one(data: Any) -> List[FieldViolation]:
    """
    Check a single-field update body: field and value are required.

    A new title is held to the same length limit as on create.
    """
    violations = _violations(UpdateOneData, data)
    if violations:
        return violations
    if data["field"] == "title" and len(data["value"]) > TITLE_MAX_LENGTH:
        violations.append(FieldViolation(
            field="value",
            problem=f"String should have at most {TITLE_MAX_LENGTH} characters",
        ))
    return violations


def describe(violations: List[FieldViolation]) -> str:
    """Render violations as one line, e.g. "title: Field required; code: Field required"."""
    return "; ".join(f"{v.field}: {v.problem}" for v in violations)
