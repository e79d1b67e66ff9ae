"""Factory for an httpx client that authenticates against Vipps."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from ..config import Credentials, Environment
from .token import TOKEN_REQUEST_TIMEOUT, TokenProvider
from .transport import BearerTokenTransport, VippsAuthTransport


def create_vipps_http_client(
    environment: Environment,
    credentials: Credentials,
    *,
    base_transport: Optional[httpx.AsyncBaseTransport] = None,
    token_timeout: float = TOKEN_REQUEST_TIMEOUT,
    **httpx_kwargs: Any,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` that authenticates every request.

    Requests made with the returned client carry a bearer token (fetched and
    renewed on expiry) and the API subscription key. The token request itself
    goes through the same :class:`VippsAuthTransport`, so it carries the
    subscription key and the client id/secret headers.

    Args:
        environment: Selects the testing or production token endpoint.
        credentials: Client id, client secret and subscription key.
        base_transport: Transport doing the network I/O. A new
            ``httpx.AsyncHTTPTransport`` is created when omitted.
        token_timeout: Deadline for each token request, in seconds.
        **httpx_kwargs: Extra keyword arguments forwarded to
            ``httpx.AsyncClient`` (e.g. ``timeout``, ``headers``).

    Returns:
        A configured ``httpx.AsyncClient``.

    Example::

        async with create_vipps_http_client(
            Environment.TESTING, Credentials.from_env()
        ) as client:
            resp = await client.get(
                "https://apitest.vipps.no/recurring/v2/agreements"
            )
    """
    auth_transport = VippsAuthTransport(
        wrapped=base_transport or httpx.AsyncHTTPTransport(),
        credentials=credentials,
    )
    token_provider = TokenProvider(
        credentials,
        environment.token_url,
        auth_transport,
        timeout=token_timeout,
    )
    transport = BearerTokenTransport(
        wrapped=auth_transport,
        token_provider=token_provider,
    )
    return httpx.AsyncClient(transport=transport, **httpx_kwargs)
