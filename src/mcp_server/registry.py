"""Tool Registry for the PayPal MCP Server.

Manages registration, discovery, and lookup of tools from all domains.
Tools are registered once at startup and never change afterwards.
"""

from typing import Any, Optional

from shared.logging import get_logger
from shared.models import ToolDefinition

logger = get_logger(__name__)


class ToolRegistry:
    """
    Central registry for all PayPal tools.

    Responsibilities:
    - Register tools from domains
    - Reject duplicate tool names
    - Lookup tools by name
    - Describe tools for the tools/list protocol call
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}
        self._domains: set[str] = set()

    def register(self, tool: ToolDefinition) -> None:
        """
        Register a tool in the registry.

        Args:
            tool: Tool definition to register

        Raises:
            ValueError: If tool name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")

        self._tools[tool.name] = tool
        self._domains.add(tool.domain)

        logger.debug("Tool registered", tool=tool.name, domain=tool.domain)

    def register_many(self, tools: list[ToolDefinition]) -> None:
        """Register multiple tools at once."""
        for tool in tools:
            self.register(tool)

    def get(self, tool_name: str) -> Optional[ToolDefinition]:
        """
        Get a tool by name.

        Returns:
            ToolDefinition if found, None otherwise
        """
        return self._tools.get(tool_name)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def list_tools(self, domain: Optional[str] = None) -> list[ToolDefinition]:
        """List registered tools in registration order, optionally for one domain."""
        tools = list(self._tools.values())
        if domain:
            tools = [t for t in tools if t.domain == domain]
        return tools

    def list_domains(self) -> list[str]:
        """List all registered domains."""
        return sorted(self._domains)

    def describe_tools(self) -> list[dict[str, Any]]:
        """Flattened {name, description, inputSchema} view of every tool."""
        return [tool.describe() for tool in self._tools.values()]

    def get_tool_count(self) -> dict[str, int]:
        """Get count of tools per domain."""
        counts: dict[str, int] = {}
        for tool in self._tools.values():
            counts[tool.domain] = counts.get(tool.domain, 0) + 1
        return counts


def build_registry() -> ToolRegistry:
    """Create a registry holding every PayPal domain's tools."""
    from domains import load_all_domains

    registry = ToolRegistry()
    load_all_domains(registry)
    logger.info(
        "Tool registry built",
        domains=registry.list_domains(),
        tool_count=len(registry),
    )
    return registry
