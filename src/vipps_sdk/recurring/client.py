"""Client for the Vipps Recurring Payments v2 API."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional

from ..client import ApiClient
from ..errors import HTTPResponseError
from .errors import wrap_error
from .types import (
    Agreement,
    AgreementReference,
    AgreementStatus,
    AgreementUpdate,
    Charge,
    ChargeReference,
    ChargeRequest,
    DraftAgreement,
    DraftAgreementResponse,
)

AGREEMENTS_ENDPOINT = "/recurring/v2/agreements"


class RecurringClient:
    """Manage recurring agreements and their charges.

    Non-2xx responses raise :class:`~vipps_sdk.recurring.errors.RecurringError`,
    or :class:`~vipps_sdk.errors.UnexpectedResponseError` when the body is
    not a Recurring error list.
    """

    def __init__(self, api_client: ApiClient) -> None:
        self._api = api_client

    async def _execute(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        result_type: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        try:
            return await self._api.execute(
                method, endpoint, body, result_type, params=params
            )
        except HTTPResponseError as err:
            raise wrap_error(err) from err

    async def list_agreements(
        self, status: Optional[AgreementStatus] = None
    ) -> List[Agreement]:
        """List agreements, optionally only those with ``status``."""
        params = {"status": AgreementStatus(status).value} if status else None
        return await self._execute(
            "GET", AGREEMENTS_ENDPOINT, result_type=List[Agreement], params=params
        )

    async def get_agreement(self, agreement_id: str) -> Agreement:
        return await self._execute(
            "GET", f"{AGREEMENTS_ENDPOINT}/{agreement_id}", result_type=Agreement
        )

    async def create_agreement(self, draft: DraftAgreement) -> DraftAgreementResponse:
        """Draft an agreement; the customer confirms it at the returned URL."""
        return await self._execute(
            "POST", AGREEMENTS_ENDPOINT, draft, DraftAgreementResponse
        )

    async def update_agreement(
        self, agreement_id: str, update: AgreementUpdate
    ) -> AgreementReference:
        return await self._execute(
            "PATCH",
            f"{AGREEMENTS_ENDPOINT}/{agreement_id}",
            update,
            AgreementReference,
        )

    async def stop_agreement(self, agreement_id: str) -> AgreementReference:
        return await self.update_agreement(
            agreement_id, AgreementUpdate(status=AgreementStatus.STOPPED)
        )

    async def list_charges(self, agreement_id: str) -> List[Charge]:
        return await self._execute(
            "GET",
            f"{AGREEMENTS_ENDPOINT}/{agreement_id}/charges",
            result_type=List[Charge],
        )

    async def get_charge(self, agreement_id: str, charge_id: str) -> Charge:
        return await self._execute(
            "GET",
            f"{AGREEMENTS_ENDPOINT}/{agreement_id}/charges/{charge_id}",
            result_type=Charge,
        )

    async def create_charge(
        self,
        agreement_id: str,
        *,
        amount: int,
        description: str,
        due: date,
        retry_days: int = 0,
        currency: str = "NOK",
    ) -> ChargeReference:
        """Schedule a charge. ``due`` must be at least two days ahead."""
        body = ChargeRequest(
            amount=amount,
            currency=currency,
            description=description,
            due=due,
            retry_days=retry_days,
        )
        return await self._execute(
            "POST",
            f"{AGREEMENTS_ENDPOINT}/{agreement_id}/charges",
            body,
            ChargeReference,
        )

    async def cancel_charge(self, agreement_id: str, charge_id: str) -> None:
        await self._execute(
            "DELETE", f"{AGREEMENTS_ENDPOINT}/{agreement_id}/charges/{charge_id}"
        )
