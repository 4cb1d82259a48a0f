"""Parsing and merging of model responses."""

import json
from typing import Any

from candidate_evaluation.errors import LLMMalformedResponseError, ResponseParseError


def parse_json_object(raw: str, label: str) -> dict[str, Any]:
    """Parse a response that must be exactly one JSON object.

    No attempt is made to recover JSON from surrounding text: a wrong parse
    would be recorded as a successful evaluation.

    Raises:
        ResponseParseError: raw is not valid JSON, or not an object
    """
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(
            f"Model returned invalid JSON for {label}: {exc.msg} at position {exc.pos}"
        ) from exc
    if not isinstance(parsed, dict):
        raise ResponseParseError(
            f"Model returned a JSON {type(parsed).__name__} for {label}, expected an object"
        )
    return parsed


def merge_results(*parts: dict[str, Any]) -> dict[str, Any]:
    """Shallow-merge evaluation objects into one flat result.

    A key repeated with the same value is harmless; a key repeated with a
    different value means one of the responses strayed from its schema.

    Raises:
        LLMMalformedResponseError: conflicting values for the same key
    """
    merged: dict[str, Any] = {}
    for part in parts:
        for key, value in part.items():
            if key in merged and merged[key] != value:
                raise LLMMalformedResponseError(
                    f"Conflicting values for '{key}' across evaluation responses."
                )
            merged[key] = value
    return merged
