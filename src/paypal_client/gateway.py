"""Authenticated request gateway for PayPal resource endpoints.

Every outbound call passes through AuthenticatedGateway.with_auth, which
attaches a valid bearer token and replays the call once if the API answers
401. Everything else is surfaced to the caller untouched.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional

import httpx

from paypal_client.credentials import CredentialCache
from shared.errors import RemoteCallError
from shared.logging import get_logger
from shared.redaction import redact

logger = get_logger(__name__)


@dataclass(frozen=True)
class OutboundRequest:
    """One resource call, replayable as-is."""
    method: str
    path: str
    json: Any = None
    params: Optional[dict[str, Any]] = None
    headers: dict[str, str] = field(default_factory=dict)
    retried: bool = False


class AuthenticatedGateway:
    """
    Sends requests to PayPal resource endpoints with a bearer token attached.

    Recovery is limited to one class of failure: a 401 on a call that has not
    been replayed yet triggers a credential refresh and exactly one replay.
    """

    def __init__(self, client: httpx.AsyncClient, credentials: CredentialCache) -> None:
        self._client = client
        self.credentials = credentials

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Make an authenticated request and return the decoded JSON body.

        Returns:
            Decoded JSON, or None when the response has no body

        Raises:
            AuthFailure: If no token could be obtained
            RemoteCallError: On a non-2xx response or transport failure
        """
        outbound = OutboundRequest(method=method.upper(), path=path, json=json, params=params)
        response = await self.with_auth(outbound)
        return _decode(response)

    async def get(self, path: str, **kwargs: Any) -> Any:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> Any:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PUT", path, **kwargs)

    async def patch(self, path: str, **kwargs: Any) -> Any:
        return await self.request("PATCH", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> Any:
        return await self.request("DELETE", path, **kwargs)

    async def with_auth(self, outbound: OutboundRequest) -> httpx.Response:
        """
        Send a request with a bearer token, replaying once on 401.

        A 401 on the replay is terminal; it never starts another refresh.
        """
        token = await self.credentials.ensure_valid()
        response = await self._send(outbound, token)

        if response.status_code == 401 and not outbound.retried:
            self._log_failure(outbound, response)
            logger.info("Access token rejected, refreshing", method=outbound.method, path=outbound.path)
            token = await self.credentials.refresh(token)
            outbound = replace(outbound, retried=True)
            response = await self._send(outbound, token)

        if not response.is_success:
            self._log_failure(outbound, response)
            raise RemoteCallError(
                f"PayPal API returned {response.status_code} for {outbound.method} {outbound.path}",
                method=outbound.method,
                path=outbound.path,
                status_code=response.status_code,
                payload=_decode(response),
            )

        return response

    async def _send(self, outbound: OutboundRequest, token: str) -> httpx.Response:
        headers = {
            "Accept": "application/json",
            **outbound.headers,
            "Authorization": f"Bearer {token}",
        }
        try:
            return await self._client.request(
                outbound.method,
                outbound.path,
                json=outbound.json,
                params=outbound.params,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.error(
                "PayPal API request timed out",
                method=outbound.method,
                path=outbound.path,
                request=redact(outbound.json),
            )
            raise RemoteCallError(
                f"Request timed out: {outbound.method} {outbound.path}",
                method=outbound.method,
                path=outbound.path,
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "PayPal API request failed",
                method=outbound.method,
                path=outbound.path,
                error=str(e),
                request=redact(outbound.json),
            )
            raise RemoteCallError(
                f"Request failed: {outbound.method} {outbound.path}",
                method=outbound.method,
                path=outbound.path,
            ) from e

    def _log_failure(self, outbound: OutboundRequest, response: httpx.Response) -> None:
        logger.error(
            "PayPal API error",
            status_code=response.status_code,
            method=outbound.method,
            path=outbound.path,
            payload=redact(_decode(response)),
            retried=outbound.retried,
        )


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
