"""Shared utilities and models for the PayPal MCP Server."""

from shared.config import Settings, get_settings, load_settings
from shared.errors import (
    AuthFailure,
    ConfigError,
    ProtocolError,
    RemoteCallError,
    ToolExecutionError,
    ValidationError,
)
from shared.logging import get_logger, setup_logging
from shared.models import CallToolResult, Credential, RequestContext, ToolDefinition

__all__ = [
    "AuthFailure",
    "CallToolResult",
    "ConfigError",
    "Credential",
    "ProtocolError",
    "RemoteCallError",
    "RequestContext",
    "Settings",
    "ToolDefinition",
    "ToolExecutionError",
    "ValidationError",
    "get_logger",
    "get_settings",
    "load_settings",
    "setup_logging",
]
