"""Generic request/response helper shared by every Vipps API surface."""

from __future__ import annotations

import json
import time
from types import TracebackType
from typing import Any, Dict, Mapping, Optional, Self

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .auth.factory import create_vipps_http_client
from .config import ClientConfig
from .errors import DecodeError, HTTPResponseError
from .log import LogArgument, Logger, StdlibLogger, new_arg


def _encode_body(body: Any) -> bytes:
    if isinstance(body, BaseModel):
        return body.model_dump_json(by_alias=True, exclude_none=True).encode()
    return json.dumps(body).encode()


class ApiClient:
    """Builds JSON requests, sends them, logs, classifies and decodes.

    Every call is attempted exactly once. Exceptions raised while sending
    (network errors, token failures) are logged and re-raised unchanged; a
    status outside 200-299 raises :class:`HTTPResponseError`, which API
    surfaces translate into their own error types.

    Usage::

        async with ApiClient.from_config(ClientConfig.from_env()) as api:
            agreements = await api.execute(
                "GET", "/recurring/v2/agreements", result_type=List[Agreement]
            )
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
        logger: Optional[Logger] = None,
    ) -> None:
        self._http_client = http_client
        self._base_url = base_url.rstrip("/")
        self._logger = logger or StdlibLogger()

    @classmethod
    def from_config(cls, config: ClientConfig) -> "ApiClient":
        http_client = create_vipps_http_client(
            config.environment,
            config.credentials,
            base_transport=config.base_transport,
            **config.httpx_options,
        )
        return cls(
            http_client,
            base_url=config.environment.base_url,
            logger=config.logger,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    def new_request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        *,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Request:
        """Create a request with a JSON body.

        ``endpoint`` is resolved against the base URL unless it is already an
        absolute URL. With ``body=None`` the request carries no content.
        """
        url = endpoint if "://" in endpoint else f"{self._base_url}{endpoint}"
        request_headers: Dict[str, str] = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        content = _encode_body(body) if body is not None else None
        return self._http_client.build_request(
            method,
            url,
            params=params,
            headers=request_headers,
            content=content,
        )

    async def do(
        self,
        request: httpx.Request,
        result_type: Any = None,
        *,
        context: Dict[str, Any] | None = None,
    ) -> Any:
        """Send ``request`` and decode the body into ``result_type``.

        Returns ``None`` without reading the body when ``result_type`` is None.
        """
        start = time.perf_counter()
        try:
            response = await self._http_client.send(request)
        except Exception:
            self._logger.error(
                context,
                "error executing Vipps HTTP request",
                *self._log_arguments(request, start),
            )
            raise
        log_arguments = self._log_arguments(request, start)
        self._logger.info(context, "executed Vipps HTTP request", *log_arguments)

        if not 200 <= response.status_code <= 299:
            raise HTTPResponseError(body=response.content, status=response.status_code)

        if result_type is None:
            return None

        try:
            return TypeAdapter(result_type).validate_json(response.content)
        except ValidationError as exc:
            self._logger.error(context, "error unmarshalling body", *log_arguments)
            raise DecodeError(
                f"could not decode response from {request.method} {request.url}: {exc}"
            ) from exc

    async def execute(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        result_type: Any = None,
        *,
        params: Optional[Mapping[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        context: Dict[str, Any] | None = None,
    ) -> Any:
        request = self.new_request(
            method, endpoint, body, params=params, headers=headers
        )
        return await self.do(request, result_type, context=context)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()

    @staticmethod
    def _log_arguments(request: httpx.Request, start: float) -> tuple[LogArgument, ...]:
        return (
            new_arg("method", request.method),
            new_arg("url", str(request.url)),
            new_arg("durationMS", int((time.perf_counter() - start) * 1000)),
        )
