"""Credentials, environments and client configuration."""

from __future__ import annotations

import os
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigError
from .log import Logger

BASE_URL = "https://api.vipps.no"
BASE_URL_TESTING = "https://apitest.vipps.no"

TOKEN_ENDPOINT = "/accessToken/get"

_ENV_CLIENT_ID = "VIPPS_CLIENT_ID"
_ENV_CLIENT_SECRET = "VIPPS_CLIENT_SECRET"
_ENV_SUBSCRIPTION_KEY = "VIPPS_SUBSCRIPTION_KEY"
_ENV_ENVIRONMENT = "VIPPS_ENVIRONMENT"
_ENV_MERCHANT_SERIAL_NUMBER = "VIPPS_MERCHANT_SERIAL_NUMBER"


def _require(environ: Mapping[str, str], key: str) -> str:
    value = environ.get(key, "").strip()
    if not value:
        raise ConfigError(f"{key} must be set")
    return value


class Environment(str, Enum):
    """Target Vipps environment."""

    TESTING = "testing"
    PRODUCTION = "production"

    @property
    def base_url(self) -> str:
        if self is Environment.PRODUCTION:
            return BASE_URL
        return BASE_URL_TESTING

    @property
    def token_url(self) -> str:
        return self.base_url + TOKEN_ENDPOINT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Environment":
        environ = os.environ if environ is None else environ
        raw = environ.get(_ENV_ENVIRONMENT, cls.TESTING.value).strip().lower()
        try:
            return cls(raw)
        except ValueError as exc:
            raise ConfigError(
                f"{_ENV_ENVIRONMENT} must be 'testing' or 'production', got '{raw}'"
            ) from exc


class Credentials(BaseModel):
    """Client id, client secret and API subscription key issued by Vipps."""

    client_id: str
    client_secret: str = Field(repr=False)
    subscription_key: str = Field(repr=False)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Credentials":
        environ = os.environ if environ is None else environ
        return cls(
            client_id=_require(environ, _ENV_CLIENT_ID),
            client_secret=_require(environ, _ENV_CLIENT_SECRET),
            subscription_key=_require(environ, _ENV_SUBSCRIPTION_KEY),
        )


class ClientConfig(BaseModel):
    """Everything needed to build an authenticated :class:`ApiClient`.

    ``base_transport`` is the transport that performs network I/O; when
    omitted a fresh :class:`httpx.AsyncHTTPTransport` is created per client.
    ``httpx_options`` is forwarded to :class:`httpx.AsyncClient`.
    """

    credentials: Credentials
    environment: Environment = Environment.TESTING
    logger: Optional[Logger] = None
    base_transport: Optional[httpx.AsyncBaseTransport] = None
    merchant_serial_number: Optional[str] = None
    httpx_options: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "ClientConfig":
        """Build a config from ``environ``; keyword overrides take precedence.

        A value given in ``overrides`` is never looked up in the environment,
        so ``credentials=`` works without any ``VIPPS_*`` variable set.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = dict(overrides)
        if "credentials" not in values:
            values["credentials"] = Credentials.from_env(environ)
        if "environment" not in values:
            values["environment"] = Environment.from_env(environ)
        if "merchant_serial_number" not in values:
            values["merchant_serial_number"] = (
                environ.get(_ENV_MERCHANT_SERIAL_NUMBER) or None
            )
        return cls(**values)
