"""
Pytest configuration and fixtures for the PayPal MCP Server tests.

The PayPal REST API is replaced by PayPalAPIMock, an httpx.MockTransport
handler that records every request and answers from per-route queues.

Usage:
    @pytest.mark.asyncio
    async def test_something(paypal_api, gateway):
        paypal_api.add("POST", "/v2/checkout/orders", httpx.Response(201, json={"id": "O-1"}))
        result = await gateway.post("/v2/checkout/orders", json={})
        assert result["id"] == "O-1"
"""

import json
from typing import Any, Callable, Optional, Union

import httpx
import pytest

from paypal_client.credentials import TOKEN_PATH, CredentialCache
from paypal_client.gateway import AuthenticatedGateway

BASE_URL = "https://api-m.sandbox.paypal.com"

QueuedResponse = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class PayPalAPIMock:
    """
    In-memory stand-in for the PayPal REST API.

    The token endpoint issues token-1, token-2, ... unless responses are
    queued for it. Resource routes answer from their queue; the last queued
    response keeps being returned once the others are used up.
    """

    def __init__(self, expires_in: int = 32400) -> None:
        self.expires_in = expires_in
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[QueuedResponse]] = {}
        self._issued = 0

    def add(self, method: str, path: str, *responses: QueuedResponse) -> None:
        """Queue responses for a route."""
        self._routes.setdefault((method.upper(), path), []).extend(responses)

    def fail_token(self, *responses: QueuedResponse) -> None:
        """Queue responses for the token endpoint instead of issuing tokens."""
        self.add("POST", TOKEN_PATH, *responses)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> list[httpx.Request]:
        return [
            r for r in self.requests
            if (method is None or r.method == method.upper())
            and (path is None or r.url.path == path)
        ]

    @property
    def token_calls(self) -> list[httpx.Request]:
        return self.calls("POST", TOKEN_PATH)

    @property
    def resource_calls(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path != TOKEN_PATH]

    def _next(self, key: tuple[str, str]) -> Optional[QueuedResponse]:
        queue = self._routes.get(key)
        if not queue:
            return None
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def _issue_token(self) -> httpx.Response:
        self._issued += 1
        return httpx.Response(200, json={
            "scope": "https://uri.paypal.com/services/invoicing",
            "access_token": f"token-{self._issued}",
            "token_type": "Bearer",
            "app_id": "APP-80W284485P519543T",
            "expires_in": self.expires_in,
            "nonce": "2024-01-01T00:00:00Z",
        })

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queued = self._next((request.method, request.url.path))
        if queued is None:
            if request.url.path == TOKEN_PATH:
                return self._issue_token()
            return httpx.Response(404, json={"name": "RESOURCE_NOT_FOUND"})
        if callable(queued):
            return queued(request)
        return queued

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(self.handler))


def bearer(request: httpx.Request) -> Optional[str]:
    """Token carried by a request's Authorization header, if any."""
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header[len("Bearer "):]
    return None


def json_body(request: httpx.Request) -> Any:
    return json.loads(request.content) if request.content else None


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def paypal_api() -> PayPalAPIMock:
    return PayPalAPIMock()


@pytest.fixture
def http_client(paypal_api: PayPalAPIMock) -> httpx.AsyncClient:
    return paypal_api.client()


@pytest.fixture
def credentials(http_client: httpx.AsyncClient, clock: FakeClock) -> CredentialCache:
    return CredentialCache(
        http_client,
        client_id="client-id",
        client_secret="client-secret",
        clock=clock,
    )


@pytest.fixture
def gateway(http_client: httpx.AsyncClient, credentials: CredentialCache) -> AuthenticatedGateway:
    return AuthenticatedGateway(http_client, credentials)
