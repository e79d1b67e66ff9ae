from .factory import create_vipps_http_client
from .token import EXPIRY_DELTA, TOKEN_REQUEST_TIMEOUT, Token, TokenProvider
from .transport import (
    SUBSCRIPTION_KEY_HEADER,
    BearerTokenTransport,
    VippsAuthTransport,
)

__all__ = [
    "BearerTokenTransport",
    "EXPIRY_DELTA",
    "SUBSCRIPTION_KEY_HEADER",
    "TOKEN_REQUEST_TIMEOUT",
    "Token",
    "TokenProvider",
    "VippsAuthTransport",
    "create_vipps_http_client",
]
