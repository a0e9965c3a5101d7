"""Tests for the tool call dispatcher."""

import json

import httpx
import pytest

from shared.errors import ErrorCode, ProtocolError
from shared.models import ToolDefinition
from shared.schema import closed_object, string

from mcp_server.dispatcher import Dispatcher
from mcp_server.registry import ToolRegistry, build_registry
from mcp_server.validation import InputValidator

from conftest import bearer

ORDER_ARGS = {
    "intent": "CAPTURE",
    "purchase_units": [{"amount": {"currency_code": "USD", "value": "100.00"}}],
}


@pytest.fixture
def dispatcher(gateway):
    return Dispatcher(build_registry(), gateway)


class TestListTools:
    """Tests for tools/list."""

    def test_list_tools_needs_no_token(self, paypal_api, dispatcher):
        """Test that listing tools makes no network calls."""
        tools = dispatcher.list_tools()

        assert len(tools) == 16
        assert paypal_api.requests == []


class TestCallTool:
    """Tests for tools/call."""

    @pytest.mark.asyncio
    async def test_create_order_success(self, paypal_api, dispatcher):
        """Test a successful call returns the API response as indented JSON text."""
        paypal_api.add("POST", "/v2/checkout/orders", httpx.Response(201, json={
            "id": "5O190127TN364715T",
            "status": "CREATED",
        }))

        result = await dispatcher.call_tool("create_order", ORDER_ARGS)

        assert not result.is_error
        [content] = result.content
        assert content.type == "text"
        assert json.loads(content.text) == {"id": "5O190127TN364715T", "status": "CREATED"}
        assert content.text == json.dumps(
            {"id": "5O190127TN364715T", "status": "CREATED"}, indent=2
        )
        assert [r.method for r in paypal_api.resource_calls] == ["POST"]

    @pytest.mark.asyncio
    async def test_missing_purchase_units_is_invalid_params(self, paypal_api, dispatcher):
        """Test that invalid arguments fail before any resource call."""
        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.call_tool("create_order", {"intent": "CAPTURE"})

        error = exc_info.value
        assert error.rpc_code == ErrorCode.INVALID_PARAMS
        assert "purchase_units" in error.message
        assert paypal_api.resource_calls == []

    @pytest.mark.asyncio
    async def test_unknown_tool_is_method_not_found(self, paypal_api, dispatcher):
        """Test that an unregistered name is rejected after the token check."""
        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.call_tool("refund_everything", {})

        assert exc_info.value.rpc_code == ErrorCode.METHOD_NOT_FOUND
        assert exc_info.value.message == "Unknown tool: refund_everything"
        assert len(paypal_api.token_calls) == 1

    @pytest.mark.asyncio
    async def test_auth_failure_is_internal_error(self, paypal_api, dispatcher):
        """Test that a failed token exchange aborts the call before resolution."""
        paypal_api.fail_token(httpx.Response(401, json={"error": "invalid_client"}))

        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.call_tool("create_order", ORDER_ARGS)

        assert exc_info.value.rpc_code == ErrorCode.INTERNAL_ERROR
        assert exc_info.value.message == "Failed to authenticate with PayPal API"
        assert paypal_api.resource_calls == []

    @pytest.mark.asyncio
    async def test_expired_credential_is_renewed(self, paypal_api, dispatcher, clock):
        """Test that a stale token is replaced before create_product runs."""
        paypal_api.add("POST", "/v1/catalogs/products", httpx.Response(201, json={"id": "PROD-1"}))
        await dispatcher.gateway.credentials.ensure_valid()
        clock.advance(40000)

        result = await dispatcher.call_tool("create_product", {"name": "Widget", "type": "DIGITAL"})

        assert not result.is_error
        assert len(paypal_api.token_calls) == 2
        [request] = paypal_api.resource_calls
        assert bearer(request) == "token-2"

    @pytest.mark.asyncio
    async def test_401_then_200_succeeds(self, paypal_api, dispatcher):
        """Test that a rejected token is refreshed and the call replayed once."""
        await dispatcher.gateway.credentials.ensure_valid()
        paypal_api.add(
            "GET", "/v1/catalogs/products/PROD-1",
            httpx.Response(401, json={"error": "invalid_token"}),
            httpx.Response(200, json={"id": "PROD-1"}),
        )

        result = await dispatcher.call_tool("get_product", {"product_id": "PROD-1"})

        assert not result.is_error
        assert json.loads(result.content[0].text) == {"id": "PROD-1"}
        assert [bearer(r) for r in paypal_api.resource_calls] == ["token-1", "token-2"]
        assert len(paypal_api.token_calls) == 2

    @pytest.mark.asyncio
    async def test_remote_failure_is_error_result(self, paypal_api, dispatcher):
        """Test that tool failures come back as isError content, not protocol errors."""
        paypal_api.add("POST", "/v2/checkout/orders", httpx.Response(400, json={
            "name": "INVALID_REQUEST",
        }))

        result = await dispatcher.call_tool("create_order", ORDER_ARGS)

        assert result.is_error
        assert result.content[0].text == "Error: Failed to create order"
        assert result.to_protocol()["isError"] is True

    @pytest.mark.asyncio
    async def test_tool_receives_validated_copy(self, gateway):
        """Test that the operation sees validated arguments, not the caller's dict."""
        received = {}

        async def echo(arguments, gw):
            received["arguments"] = arguments
            return {"ok": True}

        registry = ToolRegistry()
        registry.register(ToolDefinition(
            name="echo",
            domain="test",
            description="Echo",
            input_schema=closed_object({"value": string()}),
            operation=echo,
        ))
        dispatcher = Dispatcher(registry, gateway)
        arguments = {"value": "x"}

        await dispatcher.call_tool("echo", arguments)

        assert received["arguments"] == arguments
        assert received["arguments"] is not arguments

    @pytest.mark.asyncio
    async def test_tool_without_schema_runs_unchecked(self, gateway):
        """Test that a tool outside the schema table receives raw arguments."""
        async def echo(arguments, gw):
            return arguments

        registry = ToolRegistry()
        registry.register(ToolDefinition(
            name="raw", domain="test", description="Raw", operation=echo,
        ))
        dispatcher = Dispatcher(registry, gateway, InputValidator())

        result = await dispatcher.call_tool("raw", {"anything": 1})

        assert json.loads(result.content[0].text) == {"anything": 1}

    @pytest.mark.asyncio
    async def test_invalid_params_data_omits_card_values(self, paypal_api, dispatcher):
        """Test that invalid-params detail lists fields without their rejected values."""
        args = {
            "customer": {"id": "C-1"},
            "payment_source": {
                "card": {
                    "number": "4111 1111 1111 1111",
                    "expiry": "2712",
                    "name": "Jane Doe",
                    "security_code": "12",
                },
            },
        }

        with pytest.raises(ProtocolError) as exc_info:
            await dispatcher.call_tool("create_payment_token", args)

        error = exc_info.value
        assert error.rpc_code == ErrorCode.INVALID_PARAMS
        assert error.data == [
            "payment_source.card.number: does not match pattern",
            "payment_source.card.security_code: does not match pattern",
        ]
        assert "4111" not in error.message
        assert paypal_api.resource_calls == []
