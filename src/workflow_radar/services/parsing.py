"""
Strict parsing of reasoning capability output.

The capability is never trusted to produce valid JSON: text is parsed as-is
(no fence stripping, no partial recovery) and then validated against a model.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from workflow_radar.core.exceptions import MalformedResponseError, SchemaViolationError

ModelT = TypeVar("ModelT", bound=BaseModel)

EXCERPT_CHARS = 200


def parse_json_object(text: Any, label: str) -> dict[str, Any]:
    """
    Parse ``text`` strictly as a JSON object.

    Raises:
        MalformedResponseError: text is not parseable JSON
        SchemaViolationError: JSON parses but is not an object
    """
    if not isinstance(text, str):
        raise MalformedResponseError(f"{label} response is not text")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedResponseError(
            f"{label} response is not valid JSON: {e.msg} at position {e.pos}",
            response_excerpt=text[:EXCERPT_CHARS],
        ) from e

    if not isinstance(data, dict):
        raise SchemaViolationError(
            f"{label} response must be a JSON object",
            violations=[f"<root>: expected object, got {type(data).__name__}"],
        )
    return data


def format_validation_errors(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into ``path: message`` strings."""
    violations = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "<root>"
        violations.append(f"{path}: {item['msg']}")
    return violations


def validate_payload(model: type[ModelT], data: dict[str, Any], label: str) -> ModelT:
    """
    Validate parsed JSON against ``model`` with no type coercion.

    Runs in strict JSON mode: ``"7"`` is not an int and ``"yes"`` is not a
    bool, while enum fields still accept their string values.

    Raises:
        SchemaViolationError: required fields, types, enums, ranges or counts are violated
    """
    try:
        return model.model_validate_json(json.dumps(data), strict=True)
    except ValidationError as e:
        violations = format_validation_errors(e)
        raise SchemaViolationError(
            f"{label} response violates the expected schema ({len(violations)} problem(s))",
            violations=violations,
        ) from e
