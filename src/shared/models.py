"""Core data models for the PayPal MCP Server.

This module defines the shared data structures passed between the
credential cache, the tool registry and the dispatcher.
"""

import uuid
from enum import Enum
from typing import Any, Awaitable, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Async callable bound to a tool: (validated arguments, gateway) -> result.
# The gateway is typed loosely here to keep shared free of client imports.
ToolOperation = Callable[[dict[str, Any], Any], Awaitable[Any]]


class Credential(BaseModel):
    """
    OAuth2 bearer credential obtained from the client-credentials exchange.

    Replaced wholesale on refresh; never mutated.
    """
    model_config = ConfigDict(frozen=True)

    access_token: str
    token_type: str = "Bearer"
    expires_at: float = Field(..., description="Absolute expiry, epoch seconds")
    app_id: Optional[str] = None
    scope: Optional[str] = None

    def is_valid(self, now: float) -> bool:
        """Return True while now is before the expiry instant."""
        return now < self.expires_at


class ToolDefinition(BaseModel):
    """
    Complete definition of an MCP tool.

    Tools are declarative and discoverable. Names are unique across all
    domains; the domain only groups tools for organization.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(..., description="Unique tool name")
    domain: str = Field(..., description="Business area the tool belongs to")
    description: str = Field(..., description="Shown to clients in tools/list")
    input_schema: dict[str, Any] = Field(
        default_factory=dict,
        description="JSON Schema for input validation"
    )
    operation: Optional[ToolOperation] = Field(default=None, exclude=True)

    def describe(self) -> dict[str, Any]:
        """Protocol view of the tool, as returned by tools/list."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema or {
                "type": "object",
                "properties": {},
            },
        }


class DispatchState(str, Enum):
    """Steps a tool call passes through, in order."""
    RECEIVED = "received"
    TOKEN_ENSURED = "token-ensured"
    HANDLER_RESOLVED = "handler-resolved"
    VALIDATED = "validated"
    INVOKED = "invoked"
    RESPONDED = "responded"


class RequestContext(BaseModel):
    """Transient per-invocation state owned by the call in progress."""
    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)
    validated_arguments: Optional[dict[str, Any]] = None
    state: DispatchState = DispatchState.RECEIVED


class TextContent(BaseModel):
    """A text block in a tool call result."""
    type: Literal["text"] = "text"
    text: str


class CallToolResult(BaseModel):
    """Result envelope returned by tools/call."""
    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "CallToolResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    def to_protocol(self) -> dict[str, Any]:
        result = self.model_dump(by_alias=True)
        if not self.is_error:
            result.pop("isError")
        return result
