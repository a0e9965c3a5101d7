"""JSON-RPC 2.0 envelopes for the MCP endpoint."""

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "paypal-mcp-server"
SERVER_VERSION = "0.1.0"


class RPCRequest(BaseModel):
    """Generic JSON-RPC request. method determines which params to expect."""
    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[Union[str, int]] = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)


class CallToolParams(BaseModel):
    name: str
    arguments: Optional[dict[str, Any]] = None


class RPCError(BaseModel):
    code: int
    message: str
    data: Optional[Any] = None


class RPCResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    id: Optional[Union[str, int]] = None
    result: Optional[Any] = None
    error: Optional[RPCError] = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result
        return body


def initialize_result() -> dict[str, Any]:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {"tools": {}},
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
    }
