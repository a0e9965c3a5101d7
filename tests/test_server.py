"""Tests for the JSON-RPC HTTP endpoint."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from shared.config import ServerSettings
from shared.errors import ErrorCode

from mcp_server.dispatcher import Dispatcher
from mcp_server.main import create_app, verify_credentials
from mcp_server.protocol import PROTOCOL_VERSION
from mcp_server.registry import build_registry


@pytest.fixture
def client(gateway):
    app = create_app(Dispatcher(build_registry(), gateway))
    return TestClient(app)


def rpc(client, method, params=None, request_id=1):
    body = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body)


class TestHttpEndpoints:
    """Tests for the plain HTTP helpers."""

    def test_health(self, client):
        """Test the health check payload."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["tool_count"] == 16
        assert data["domains"] == ["business", "identity", "payments"]

    def test_tools(self, client):
        """Test the tool listing endpoint."""
        data = client.get("/tools").json()

        assert data["count"] == 16
        assert {t["name"] for t in data["tools"]} >= {"create_order", "get_userinfo"}

    def test_uninitialized_server(self):
        """Test that requests fail cleanly before a dispatcher exists."""
        app = create_app()

        response = TestClient(app).get("/tools")

        assert response.status_code == 500


class TestJsonRpc:
    """Tests for the MCP JSON-RPC endpoint."""

    def test_initialize(self, client):
        """Test the initialize handshake."""
        data = rpc(client, "initialize", {"protocolVersion": PROTOCOL_VERSION}).json()

        assert data["id"] == 1
        assert data["result"]["protocolVersion"] == PROTOCOL_VERSION
        assert data["result"]["capabilities"] == {"tools": {}}

    def test_tools_list(self, client, paypal_api):
        """Test tools/list without any PayPal call."""
        data = rpc(client, "tools/list").json()

        tools = data["result"]["tools"]
        assert len(tools) == 16
        assert all("inputSchema" in tool for tool in tools)
        assert paypal_api.requests == []

    def test_tools_call_success(self, client, paypal_api):
        """Test a successful tools/call round trip."""
        paypal_api.add("POST", "/v2/checkout/orders", httpx.Response(201, json={
            "id": "5O190127TN364715T",
            "status": "CREATED",
        }))

        data = rpc(client, "tools/call", {
            "name": "create_order",
            "arguments": {
                "intent": "CAPTURE",
                "purchase_units": [{"amount": {"currency_code": "USD", "value": "100.00"}}],
            },
        }).json()

        result = data["result"]
        assert "isError" not in result
        assert json.loads(result["content"][0]["text"])["status"] == "CREATED"

    def test_tools_call_invalid_params(self, client):
        """Test that schema violations map to -32602."""
        data = rpc(client, "tools/call", {
            "name": "create_order",
            "arguments": {"intent": "CAPTURE"},
        }).json()

        assert data["error"]["code"] == ErrorCode.INVALID_PARAMS
        assert "purchase_units" in data["error"]["message"]
        assert data["error"]["data"]

    def test_tools_call_unknown_tool(self, client):
        """Test that unknown tools map to -32601."""
        data = rpc(client, "tools/call", {"name": "nope", "arguments": {}}).json()

        assert data["error"] == {"code": ErrorCode.METHOD_NOT_FOUND, "message": "Unknown tool: nope"}

    def test_tools_call_tool_failure(self, client, paypal_api):
        """Test that a failing tool yields an isError result, not an RPC error."""
        paypal_api.add("GET", "/v1/catalogs/products/P-1", httpx.Response(404, json={}))

        data = rpc(client, "tools/call", {"name": "get_product", "arguments": {"product_id": "P-1"}}).json()

        assert "error" not in data
        assert data["result"]["isError"] is True

    def test_tools_call_missing_name(self, client):
        """Test that malformed tools/call params map to -32602."""
        data = rpc(client, "tools/call", {"arguments": {}}).json()

        assert data["error"]["code"] == ErrorCode.INVALID_PARAMS

    def test_unknown_method(self, client):
        """Test that unknown RPC methods map to -32601."""
        data = rpc(client, "resources/list").json()

        assert data["error"]["code"] == ErrorCode.METHOD_NOT_FOUND

    def test_parse_error(self, client):
        """Test that a non-JSON body maps to -32700."""
        response = client.post(
            "/mcp", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.json()["error"]["code"] == ErrorCode.PARSE_ERROR
        assert response.json()["id"] is None

    def test_invalid_request(self, client):
        """Test that a body without a method maps to -32600."""
        data = client.post("/mcp", json={"jsonrpc": "2.0", "id": 7}).json()

        assert data["error"]["code"] == ErrorCode.INVALID_REQUEST
        assert data["id"] == 7

    def test_notification_accepted(self, client):
        """Test that notifications get no JSON-RPC response."""
        response = client.post(
            "/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"}
        )

        assert response.status_code == 202
        assert response.content == b""


class TestVerifyCredentials:
    """Tests for startup credential verification."""

    @pytest.mark.asyncio
    async def test_verified_first_attempt(self, credentials, paypal_api):
        """Test that valid credentials verify without retries."""
        server = ServerSettings(max_retries=2, retry_delay=0)

        assert await verify_credentials(credentials, server) is True
        assert len(paypal_api.token_calls) == 1

    @pytest.mark.asyncio
    async def test_retries_until_success(self, credentials, paypal_api):
        """Test that transient failures are retried."""
        paypal_api.fail_token(httpx.Response(503, text="unavailable"))
        paypal_api.fail_token(lambda request: paypal_api._issue_token())
        server = ServerSettings(max_retries=2, retry_delay=0)

        assert await verify_credentials(credentials, server) is True
        assert len(paypal_api.token_calls) == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self, credentials, paypal_api):
        """Test that verification reports failure after max_retries + 1 attempts."""
        paypal_api.fail_token(httpx.Response(401, json={"error": "invalid_client"}))
        server = ServerSettings(max_retries=2, retry_delay=0)

        assert await verify_credentials(credentials, server) is False
        assert len(paypal_api.token_calls) == 3
