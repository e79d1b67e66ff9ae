"""Client-credentials access token acquisition with caching."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from ..config import Credentials
from ..errors import TokenError

logger = logging.getLogger(__name__)

# Fixed deadline for the token call, independent of any caller deadline.
TOKEN_REQUEST_TIMEOUT = 20.0

# Tokens are treated as expired this many seconds early.
EXPIRY_DELTA = 10.0


class TokenResponse(BaseModel):
    """Body returned by the Vipps token endpoint.

    Vipps sends ``expires_in`` as a string; lax validation coerces it.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


@dataclass(frozen=True)
class Token:
    access_token: str
    expires_at: Optional[float] = None

    def valid(self, now: float) -> bool:
        if not self.access_token:
            return False
        if self.expires_at is None:
            return True
        return now < self.expires_at - EXPIRY_DELTA


class TokenProvider:
    """Fetches, caches and refreshes a client-credentials bearer token.

    The token request is sent through ``transport``, which should be the same
    :class:`~vipps_sdk.auth.transport.VippsAuthTransport` used for API calls so
    the credential headers are added there and nowhere else.

    The cached :class:`Token` is replaced with a single assignment while
    holding ``_lock``; concurrent callers that find it expired queue on the
    lock and reuse whatever the first refresh produced.
    """

    def __init__(
        self,
        credentials: Credentials,
        token_url: str,
        transport: httpx.AsyncBaseTransport,
        *,
        timeout: float = TOKEN_REQUEST_TIMEOUT,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._credentials = credentials
        self._token_url = token_url
        self._timeout = timeout
        self._clock = clock
        self._http_client = httpx.AsyncClient(transport=transport, timeout=timeout)
        self._token: Optional[Token] = None
        self._lock = asyncio.Lock()

    async def token(self) -> str:
        """Return a valid access token, refreshing it first if needed."""
        async with self._lock:
            current = self._token
            if current is not None and current.valid(self._clock()):
                return current.access_token
            return (await self._replace()).access_token

    async def refresh(self) -> Token:
        """Unconditionally fetch a new token and cache it."""
        async with self._lock:
            return await self._replace()

    def invalidate(self, access_token: Optional[str] = None) -> None:
        """Drop the cached token.

        With ``access_token`` the cache is dropped only while it still holds
        that token.
        """
        current = self._token
        if current is None:
            return
        if access_token is None or current.access_token == access_token:
            logger.info("Dropping cached access token")
            self._token = None

    async def _replace(self) -> Token:
        fresh = await self._fetch()
        self._token = fresh
        return fresh

    async def _fetch(self) -> Token:
        logger.debug(
            "Requesting access token for client %s from %s",
            self._credentials.client_id,
            self._token_url,
        )
        try:
            async with asyncio.timeout(self._timeout):
                response = await self._http_client.post(
                    self._token_url,
                    data={"grant_type": "client_credentials"},
                )
        except TimeoutError as exc:
            raise TokenError(
                f"token request to {self._token_url} timed out after {self._timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise TokenError(f"token request failed: {exc}") from exc

        if not response.is_success:
            raise TokenError(
                f"token endpoint responded with status {response.status_code}",
                status=response.status_code,
                body=response.content,
            )

        try:
            payload = TokenResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise TokenError(
                "token endpoint returned an invalid body",
                status=response.status_code,
                body=response.content,
            ) from exc
        if not payload.access_token:
            raise TokenError(
                "token endpoint did not return an access token",
                status=response.status_code,
                body=response.content,
            )

        expires_at = None
        if payload.expires_in:
            expires_at = self._clock() + payload.expires_in
        logger.info("Obtained access token (expires in %ss)", payload.expires_in)
        return Token(access_token=payload.access_token, expires_at=expires_at)
