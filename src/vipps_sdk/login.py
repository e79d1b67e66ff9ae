"""Helpers for Vipps Login (OpenID Connect).

Only the pieces that run over the shared :class:`~vipps_sdk.client.ApiClient`
are provided: building the authorization URL and fetching the userinfo claims
for a user access token. Exchanging the authorization code and verifying the
ID token is left to a dedicated OIDC library.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Optional, Sequence
from urllib.parse import urlencode

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .client import ApiClient
from .errors import HTTPResponseError, UnexpectedResponseError
from .log import Logger


class IssuerURL(str, Enum):
    TESTING = "https://apitest.vipps.no/access-management-1.0/access/"
    PRODUCTION = "https://api.vipps.no/access-management-1.0/access/"


# Scopes supported by Vipps Login.
SCOPE_OPENID = "openid"
SCOPE_ADDRESS = "address"
SCOPE_BIRTH_DATE = "birthDate"
SCOPE_EMAIL = "email"
SCOPE_NAME = "name"
SCOPE_PHONE_NUMBER = "phoneNumber"
SCOPE_NNIN = "nnin"
SCOPE_ACCOUNT_NUMBERS = "accountNumbers"
# Selects version 2 of the userinfo format.
SCOPE_API_V2 = "api_version_2"

AUTHORIZATION_PATH = "oauth2/auth"
USERINFO_PATH = "userinfo"


def _issuer(issuer_url: "IssuerURL | str") -> str:
    if isinstance(issuer_url, IssuerURL):
        return issuer_url.value
    return issuer_url


class Address(BaseModel):
    country: str = ""
    street_address: str = ""
    address_type: str = ""
    formatted: str = ""
    postal_code: str = ""
    region: str = ""


class Claims(BaseModel):
    """Claims returned by the userinfo endpoint."""

    user_id: str = Field(validation_alias="sub")
    address: Optional[Address] = None
    other_addresses: List[Address] = Field(
        default_factory=list, validation_alias="other_address"
    )
    nin: str = ""
    phone_number: str = ""
    name: str = ""
    birthdate: Optional[date] = None
    given_name: str = ""
    family_name: str = ""
    email: str = ""
    email_verified: bool = False

    model_config = ConfigDict(validate_by_name=True)


class LoginClient:
    """Vipps Login client for a single OAuth client id and redirect URL."""

    def __init__(
        self,
        api_client: ApiClient,
        *,
        client_id: str,
        redirect_url: str,
        scopes: Sequence[str] = (),
        issuer_url: IssuerURL | str = IssuerURL.TESTING,
    ) -> None:
        self._api = api_client
        self._client_id = client_id
        self._redirect_url = redirect_url
        self._issuer_url = _issuer(issuer_url)
        self._scopes = [SCOPE_OPENID, SCOPE_API_V2, *scopes]

    @classmethod
    def create(
        cls,
        *,
        client_id: str,
        redirect_url: str,
        scopes: Sequence[str] = (),
        issuer_url: IssuerURL | str = IssuerURL.TESTING,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[Logger] = None,
    ) -> "LoginClient":
        issuer = _issuer(issuer_url)
        api = ApiClient(
            http_client or httpx.AsyncClient(),
            base_url=issuer,
            logger=logger,
        )
        return cls(
            api,
            client_id=client_id,
            redirect_url=redirect_url,
            scopes=scopes,
            issuer_url=issuer,
        )

    @property
    def scopes(self) -> List[str]:
        return list(self._scopes)

    def auth_code_url(self, state: str) -> str:
        """URL of the consent page asking for the configured scopes."""
        params = {
            "client_id": self._client_id,
            "redirect_uri": self._redirect_url,
            "response_type": "code",
            "scope": " ".join(self._scopes),
            "state": state,
        }
        return f"{self._issuer_url}{AUTHORIZATION_PATH}?{urlencode(params)}"

    async def get_userinfo(self, access_token: str) -> Claims:
        """Fetch the claims of the user owning ``access_token``."""
        try:
            return await self._api.execute(
                "GET",
                f"{self._issuer_url}{USERINFO_PATH}",
                result_type=Claims,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except HTTPResponseError as err:
            raise UnexpectedResponseError(body=err.body, status=err.status) from err

    async def aclose(self) -> None:
        await self._api.aclose()
