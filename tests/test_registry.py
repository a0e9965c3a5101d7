"""Tests for the tool registry."""

import pytest

from shared.models import ToolDefinition

from mcp_server.registry import ToolRegistry, build_registry

EXPECTED_TOOLS = {
    "payments": [
        "create_payment_token",
        "create_order",
        "capture_order",
        "create_payment",
        "create_subscription",
    ],
    "business": [
        "create_product",
        "create_invoice",
        "create_payout",
        "get_product",
        "get_invoice",
    ],
    "identity": [
        "get_userinfo",
        "create_web_profile",
        "get_web_profiles",
        "get_web_profile",
        "update_web_profile",
        "delete_web_profile",
    ],
}


class TestToolRegistry:
    """Tests for the ToolRegistry."""

    def test_register_tool(self):
        """Test registering a tool."""
        registry = ToolRegistry()
        tool = ToolDefinition(name="test_action", domain="test", description="A test tool")

        registry.register(tool)

        assert registry.get("test_action") is tool
        assert "test_action" in registry
        assert "test" in registry.list_domains()

    def test_register_duplicate_tool_raises(self):
        """Test that registering a duplicate name raises, even across domains."""
        registry = ToolRegistry()
        registry.register(ToolDefinition(name="shared", domain="one", description="A"))

        with pytest.raises(ValueError, match="already registered"):
            registry.register(ToolDefinition(name="shared", domain="two", description="B"))

    def test_list_tools_by_domain(self):
        """Test listing tools filtered by domain."""
        registry = ToolRegistry()
        registry.register_many([
            ToolDefinition(name="a", domain="first", description="A"),
            ToolDefinition(name="b", domain="second", description="B"),
            ToolDefinition(name="c", domain="first", description="C"),
        ])

        assert [t.name for t in registry.list_tools("first")] == ["a", "c"]
        assert registry.get_tool_count() == {"first": 2, "second": 1}

    def test_get_unknown_tool(self):
        """Test that unknown names resolve to None."""
        assert ToolRegistry().get("missing") is None

    def test_describe_defaults_empty_schema(self):
        """Test that tools without a schema describe an empty object input."""
        registry = ToolRegistry()
        registry.register(ToolDefinition(name="a", domain="d", description="A"))

        assert registry.describe_tools() == [{
            "name": "a",
            "description": "A",
            "inputSchema": {"type": "object", "properties": {}},
        }]


class TestBuiltRegistry:
    """Tests for the registry built from all PayPal domains."""

    def test_all_domains_registered(self):
        """Test that every domain contributes its tools."""
        registry = build_registry()

        assert registry.list_domains() == ["business", "identity", "payments"]
        for domain, names in EXPECTED_TOOLS.items():
            assert [t.name for t in registry.list_tools(domain)] == names

    def test_tool_count(self):
        """Test the total number of tools."""
        assert len(build_registry()) == 16

    def test_every_tool_has_operation_and_closed_schema(self):
        """Test that each tool is bound to a handler and rejects extra fields."""
        for tool in build_registry().list_tools():
            assert tool.operation is not None, tool.name
            assert tool.input_schema["type"] == "object", tool.name
            assert tool.input_schema["additionalProperties"] is False, tool.name

    def test_describe_uses_protocol_field_names(self):
        """Test that descriptions expose inputSchema and hide the handler."""
        described = build_registry().describe_tools()

        order = next(d for d in described if d["name"] == "create_order")
        assert set(order) == {"name", "description", "inputSchema"}
        assert "purchase_units" in order["inputSchema"]["required"]
