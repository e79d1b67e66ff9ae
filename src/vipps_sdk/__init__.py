"""
Vipps SDK - async clients for the Vipps eCom, Recurring and Login APIs.

Quick start:
    from vipps_sdk import ApiClient, ClientConfig
    from vipps_sdk.recurring import RecurringClient

    async with ApiClient.from_config(ClientConfig.from_env()) as api:
        agreements = await RecurringClient(api).list_agreements()

Errors:
    Every call either returns the decoded model or raises. API error lists
    arrive as ``EcomError`` / ``RecurringError``; responses that are not a
    recognised error list arrive as ``UnexpectedResponseError``.
"""

from .auth import create_vipps_http_client
from .client import ApiClient
from .config import (
    BASE_URL,
    BASE_URL_TESTING,
    ClientConfig,
    Credentials,
    Environment,
)
from .errors import (
    APIErrors,
    ConfigError,
    DecodeError,
    ErrorTranslator,
    HTTPResponseError,
    TokenError,
    UnexpectedResponseError,
    VippsError,
)
from .log import LogArgument, Logger, NopLogger, StdlibLogger, StdOutLogger, new_arg

__version__ = "0.1.0"

__all__ = [
    # Client and configuration
    "ApiClient",
    "ClientConfig",
    "Credentials",
    "Environment",
    "BASE_URL",
    "BASE_URL_TESTING",
    "create_vipps_http_client",
    # Errors
    "VippsError",
    "APIErrors",
    "ConfigError",
    "DecodeError",
    "ErrorTranslator",
    "HTTPResponseError",
    "TokenError",
    "UnexpectedResponseError",
    # Logging
    "LogArgument",
    "Logger",
    "NopLogger",
    "StdOutLogger",
    "StdlibLogger",
    "new_arg",
]
