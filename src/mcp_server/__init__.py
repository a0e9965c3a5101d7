"""MCP Server - tool registry, input validation and call dispatch.

Exposes the PayPal tools over JSON-RPC. Tool calls are validated here and
executed through the authenticated PayPal gateway.
"""

from mcp_server.dispatcher import Dispatcher
from mcp_server.registry import ToolRegistry, build_registry
from mcp_server.validation import InputValidator

__all__ = [
    "Dispatcher",
    "InputValidator",
    "ToolRegistry",
    "build_registry",
]
