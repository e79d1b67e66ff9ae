"""httpx transports that authenticate requests against the Vipps APIs."""

from __future__ import annotations

import httpx

from ..config import TOKEN_ENDPOINT, Credentials
from .token import TokenProvider

SUBSCRIPTION_KEY_HEADER = "Ocp-Apim-Subscription-Key"
CLIENT_ID_HEADER = "client_id"
CLIENT_SECRET_HEADER = "client_secret"


class VippsAuthTransport(httpx.AsyncBaseTransport):
    """Adds the headers Vipps requires before handing a request on.

    Every request gets the API subscription key. Requests to the token
    endpoint additionally get the client id and secret as plain headers,
    which is how Vipps authenticates the client-credentials call.

    Example::

        transport = VippsAuthTransport(
            wrapped=httpx.AsyncHTTPTransport(),
            credentials=credentials,
        )
    """

    def __init__(
        self,
        wrapped: httpx.AsyncBaseTransport,
        credentials: Credentials,
        token_endpoint: str = TOKEN_ENDPOINT,
    ) -> None:
        self._wrapped = wrapped
        self._credentials = credentials
        self._token_endpoint = token_endpoint

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == self._token_endpoint:
            request.headers[CLIENT_ID_HEADER] = self._credentials.client_id
            request.headers[CLIENT_SECRET_HEADER] = self._credentials.client_secret
        request.headers[SUBSCRIPTION_KEY_HEADER] = self._credentials.subscription_key
        return await self._wrapped.handle_async_request(request)

    async def aclose(self) -> None:
        await self._wrapped.aclose()


class BearerTokenTransport(httpx.AsyncBaseTransport):
    """Attaches ``Authorization: Bearer <token>`` from a :class:`TokenProvider`.

    Requests that already carry an ``Authorization`` header, such as the
    Vipps Login userinfo call made with a user's token, are sent unchanged.

    If the provider cannot produce a token the :class:`~vipps_sdk.errors.TokenError`
    propagates and the wrapped transport is never called. A 401 answer drops
    the cached token so the next request fetches a new one; the request itself
    is not retried.
    """

    def __init__(
        self,
        wrapped: httpx.AsyncBaseTransport,
        token_provider: TokenProvider,
    ) -> None:
        self._wrapped = wrapped
        self._token_provider = token_provider

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if "Authorization" in request.headers:
            return await self._wrapped.handle_async_request(request)

        token = await self._token_provider.token()
        request.headers["Authorization"] = f"Bearer {token}"
        response = await self._wrapped.handle_async_request(request)
        if response.status_code == 401:
            self._token_provider.invalidate(token)
        return response

    async def aclose(self) -> None:
        await self._wrapped.aclose()
