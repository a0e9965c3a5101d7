"""JSON Schema validation utilities.

Input shapes are plain JSON Schema (draft 7) documents. The builders below
keep the per-tool constraint tables short; every object they produce is
closed unless it explicitly allows extra properties.
"""

from typing import Any, Optional

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError as JsonSchemaError


def validate_schema(data: Any, schema: dict[str, Any]) -> tuple[bool, list[str]]:
    """
    Validate data against a JSON Schema, checking string formats too.

    Args:
        data: The data to validate
        schema: JSON Schema to validate against

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    if not schema:
        return True, []

    validator = Draft7Validator(schema, format_checker=Draft7Validator.FORMAT_CHECKER)
    errors = sorted(validator.iter_errors(data), key=lambda e: e.json_path)

    if not errors:
        return True, []

    error_messages = [
        f"{'.'.join(str(p) for p in e.path)}: {_reason(e)}" if e.path else _reason(e)
        for e in errors
    ]

    return False, error_messages


def _reason(error: JsonSchemaError) -> str:
    """
    Describe a violation without quoting the rejected value.

    jsonschema's own messages embed the offending instance, which may be a
    card number or security code. Only required and additionalProperties
    messages are kept as-is since they name properties, never values.
    """
    kind = error.validator
    limit = error.validator_value

    if kind in ("required", "additionalProperties"):
        return error.message
    if kind == "type":
        return f"expected {limit}"
    if kind == "pattern":
        return "does not match pattern"
    if kind == "format":
        return f"invalid {limit}"
    if kind == "enum":
        return f"must be one of {', '.join(str(v) for v in limit)}"
    if kind == "minLength":
        return f"must be at least {limit} characters"
    if kind == "maxLength":
        return f"must be at most {limit} characters"
    if kind == "minimum":
        return f"must be greater than or equal to {limit}"
    if kind == "maximum":
        return f"must be less than or equal to {limit}"
    if kind == "exclusiveMinimum":
        return f"must be greater than {limit}"
    if kind == "minItems":
        return f"must contain at least {limit} items"
    return "is invalid"


def _drop_none(schema: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in schema.items() if value is not None}


def string(
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    format: Optional[str] = None,
    enum: Optional[list[str]] = None,
    description: Optional[str] = None,
) -> dict[str, Any]:
    """String field with optional length, pattern, format or enum constraints."""
    return _drop_none({
        "type": "string",
        "minLength": min_length,
        "maxLength": max_length,
        "pattern": pattern,
        "format": format,
        "enum": enum,
        "description": description,
    })


def integer(
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    description: Optional[str] = None,
) -> dict[str, Any]:
    return _drop_none({
        "type": "integer",
        "minimum": minimum,
        "maximum": maximum,
        "description": description,
    })


def number(
    *,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    positive: bool = False,
    description: Optional[str] = None,
) -> dict[str, Any]:
    return _drop_none({
        "type": "number",
        "minimum": minimum,
        "maximum": maximum,
        "exclusiveMinimum": 0 if positive else None,
        "description": description,
    })


def boolean(description: Optional[str] = None) -> dict[str, Any]:
    return _drop_none({"type": "boolean", "description": description})


def array(
    items: dict[str, Any],
    *,
    min_items: Optional[int] = None,
    description: Optional[str] = None,
) -> dict[str, Any]:
    return _drop_none({
        "type": "array",
        "items": items,
        "minItems": min_items,
        "description": description,
    })


def closed_object(
    properties: dict[str, Any],
    required: Optional[list[str]] = None,
    *,
    allow_extra: bool = False,
    description: Optional[str] = None,
) -> dict[str, Any]:
    """
    Object schema that rejects undeclared properties.

    Args:
        properties: Mapping of property name to schema
        required: Names of required properties
        allow_extra: Accept properties not listed in properties
        description: Optional description

    Returns:
        JSON Schema dictionary
    """
    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": allow_extra,
    }
    if required:
        schema["required"] = list(required)
    if description:
        schema["description"] = description
    return schema
