"""Input validation for tool calls.

One generic validator interprets a table of JSON Schemas keyed by tool name.
Validation is opt-in: a tool without a schema is passed through unchecked.
"""

import copy
from typing import Any, Optional

from shared.errors import ValidationError
from shared.logging import get_logger
from shared.schema import validate_schema

from mcp_server.registry import ToolRegistry

logger = get_logger(__name__)


class InputValidator:
    """Validates tool arguments against per-tool schemas."""

    def __init__(self, schemas: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self._schemas: dict[str, dict[str, Any]] = dict(schemas or {})

    @classmethod
    def from_registry(cls, registry: ToolRegistry) -> "InputValidator":
        """Build the schema table from every tool that declares an input schema."""
        return cls({
            tool.name: tool.input_schema
            for tool in registry.list_tools()
            if tool.input_schema
        })

    def has_schema(self, tool_name: str) -> bool:
        return tool_name in self._schemas

    def validate(self, tool_name: str, arguments: Optional[dict[str, Any]]) -> dict[str, Any]:
        """
        Validate arguments for a tool.

        Args:
            tool_name: Name of the tool being called
            arguments: Raw arguments from the caller

        Returns:
            A copy of the validated arguments

        Raises:
            ValidationError: Listing every violated field and the reason
        """
        arguments = {} if arguments is None else arguments
        schema = self._schemas.get(tool_name)

        if schema is None:
            logger.warning("No validation schema found for tool", tool=tool_name)
            return arguments

        is_valid, errors = validate_schema(arguments, schema)
        if not is_valid:
            logger.error("Validation error", tool=tool_name, errors=errors)
            raise ValidationError(tool_name, errors)

        return copy.deepcopy(arguments)
