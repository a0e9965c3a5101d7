"""OAuth2 credential cache for the PayPal REST API.

Owns the single bearer credential, its expiry, and the client-credentials
exchange that obtains or renews it.
"""

import asyncio
import time
from typing import Callable, Optional

import httpx

from shared.errors import AuthFailure
from shared.logging import get_logger
from shared.models import Credential
from shared.redaction import redact

logger = get_logger(__name__)

TOKEN_PATH = "/v1/oauth2/token"

# Subtracted from the reported lifetime to absorb clock skew and in-flight latency
SAFETY_MARGIN_SECONDS = 60


class CredentialCache:
    """
    Caches one PayPal access token and renews it when it goes stale.

    The token exchange is the only call that does not carry a bearer token;
    it authenticates with HTTP Basic credentials instead.

    Acquisition is single-flight: concurrent callers that find the
    credential stale wait on one exchange rather than each starting their own.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        token_cache_seconds: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Args:
            client: HTTP client whose base URL points at the PayPal API
            client_id: REST app client ID
            client_secret: REST app client secret
            token_cache_seconds: Optional upper bound on cache lifetime
            clock: Source of the current time in epoch seconds
        """
        self._client = client
        self._auth = httpx.BasicAuth(client_id, client_secret)
        self.token_cache_seconds = token_cache_seconds
        self._clock = clock
        self._credential: Optional[Credential] = None
        self._lock = asyncio.Lock()

    @property
    def credential(self) -> Optional[Credential]:
        """The cached credential, valid or stale."""
        return self._credential

    def is_valid(self) -> bool:
        return self._credential is not None and self._credential.is_valid(self._clock())

    def invalidate(self) -> None:
        """Drop the cached credential so the next call acquires a new one."""
        self._credential = None

    async def ensure_valid(self) -> str:
        """
        Return a non-expired access token, acquiring one if needed.

        Callers should use the token for the call at hand only.

        Raises:
            AuthFailure: If a new token had to be acquired and the exchange failed
        """
        credential = self._credential
        if credential is not None and credential.is_valid(self._clock()):
            return credential.access_token

        async with self._lock:
            # Another caller may have refreshed while we waited
            credential = self._credential
            if credential is not None and credential.is_valid(self._clock()):
                return credential.access_token
            credential = await self._exchange()
            return credential.access_token

    async def refresh(self, rejected_token: str) -> str:
        """
        Replace a token the API rejected and return the new one.

        If the cached token already differs from rejected_token, another
        caller refreshed it in the meantime and that token is returned.

        Raises:
            AuthFailure: If the exchange failed
        """
        async with self._lock:
            credential = self._credential
            if (
                credential is not None
                and credential.access_token != rejected_token
                and credential.is_valid(self._clock())
            ):
                return credential.access_token
            self.invalidate()
            credential = await self._exchange()
            return credential.access_token

    async def acquire(self) -> Credential:
        """
        Exchange the client credentials for a new access token.

        Raises:
            AuthFailure: On network error, non-2xx response or malformed body
        """
        async with self._lock:
            return await self._exchange()

    async def verify(self) -> bool:
        """Check that the configured credentials can obtain a token."""
        try:
            await self.acquire()
            return True
        except AuthFailure as e:
            logger.error(
                "Failed to verify PayPal credentials",
                status_code=e.status_code,
                detail=e.detail,
            )
            return False

    async def _exchange(self) -> Credential:
        """Perform the token request. Caller must hold the lock."""
        logger.debug("Requesting new access token")

        try:
            response = await self._client.post(
                TOKEN_PATH,
                data={"grant_type": "client_credentials"},
                auth=self._auth,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/x-www-form-urlencoded",
                },
            )
        except httpx.HTTPError as e:
            self.invalidate()
            logger.error("Token request failed", error=str(e))
            raise AuthFailure(detail=str(e)) from e

        if not response.is_success:
            self.invalidate()
            detail = _response_detail(response)
            logger.error(
                "Token request rejected",
                status_code=response.status_code,
                method="POST",
                path=TOKEN_PATH,
                payload=redact(detail),
            )
            raise AuthFailure(status_code=response.status_code, detail=detail)

        try:
            data = response.json()
            expires_in = int(data["expires_in"])
            lifetime = expires_in - SAFETY_MARGIN_SECONDS
            if self.token_cache_seconds is not None:
                lifetime = min(lifetime, self.token_cache_seconds)
            credential = Credential(
                access_token=data["access_token"],
                token_type=data.get("token_type", "Bearer"),
                expires_at=self._clock() + lifetime,
                app_id=data.get("app_id"),
                scope=data.get("scope"),
            )
        except (ValueError, KeyError, TypeError) as e:
            self.invalidate()
            logger.error("Malformed token response", error=str(e))
            raise AuthFailure(
                status_code=response.status_code,
                detail="Malformed token response",
            ) from e

        self._credential = credential
        logger.info("Obtained new access token", expires_in=expires_in)
        return credential


def _response_detail(response: httpx.Response):
    """Decoded error body, falling back to raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text
