"""Exception hierarchy for the PayPal MCP Server.

All application errors inherit from PayPalMCPError, which carries a short
error code used in logs and protocol error mapping.
"""

from typing import Any, Optional


class ErrorCode:
    """JSON-RPC error codes used by the MCP protocol."""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class PayPalMCPError(Exception):
    """Base exception for all PayPal MCP Server errors."""

    def __init__(self, message: str, *, code: str = "INTERNAL_ERROR") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class ConfigError(PayPalMCPError):
    """Missing or invalid required configuration. Fatal at startup."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIG_ERROR")


class AuthFailure(PayPalMCPError):
    """The client-credentials exchange was rejected or unreachable."""

    def __init__(
        self,
        message: str = "Failed to authenticate with PayPal API",
        *,
        status_code: Optional[int] = None,
        detail: Any = None,
    ) -> None:
        super().__init__(message, code="AUTH_FAILURE")
        self.status_code = status_code
        self.detail = detail


class ValidationError(PayPalMCPError):
    """Tool arguments do not conform to the tool's input schema."""

    def __init__(self, tool_name: str, errors: list[str]) -> None:
        super().__init__(
            f"Invalid parameters for {tool_name}: {', '.join(errors)}",
            code="VALIDATION_ERROR",
        )
        self.tool_name = tool_name
        self.errors = errors


class RemoteCallError(PayPalMCPError):
    """A resource endpoint call failed (non-2xx response or transport error)."""

    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message, code="REMOTE_CALL_ERROR")
        self.method = method
        self.path = path
        self.status_code = status_code
        self.payload = payload

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class ToolExecutionError(PayPalMCPError):
    """A tool operation failed; the message is safe to show to the caller."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="TOOL_ERROR")


class ProtocolError(PayPalMCPError):
    """Request-level failure surfaced as a JSON-RPC error object."""

    def __init__(self, rpc_code: int, message: str, data: Any = None) -> None:
        super().__init__(message, code="PROTOCOL_ERROR")
        self.rpc_code = rpc_code
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        error: dict[str, Any] = {"code": self.rpc_code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error
