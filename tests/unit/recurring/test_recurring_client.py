"""Unit tests for RecurringClient."""

import json
from datetime import date
from typing import Callable

import httpx
import pytest
from vipps_sdk.client import ApiClient
from vipps_sdk.errors import UnexpectedResponseError
from vipps_sdk.log import NopLogger
from vipps_sdk.recurring import (
    AgreementStatus,
    AgreementUpdate,
    ChargeStatus,
    DraftAgreement,
    RecurringClient,
    RecurringError,
)

BASE_URL = "https://apitest.vipps.no"

AGREEMENT = {
    "id": "agr_5kSeqz",
    "start": "2024-01-01T00:00:00Z",
    "stop": None,
    "status": "ACTIVE",
    "productName": "Premium",
    "price": 29900,
    "productDescription": "Monthly premium subscription",
    "interval": "MONTH",
    "intervalCount": 1,
    "currency": "NOK",
    "campaign": None,
}

CHARGE = {
    "id": "chr-1",
    "status": "CHARGED",
    "due": "2024-02-01",
    "amount": 29900,
    "amountRefunded": 0,
    "transactionId": "5001419121",
    "description": "February",
    "type": "RECURRING",
}


class FakeTransport(httpx.AsyncBaseTransport):
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


def _recurring(status: int, body: object) -> tuple[RecurringClient, FakeTransport]:
    content = body if isinstance(body, bytes) else json.dumps(body).encode()
    transport = FakeTransport(lambda request: httpx.Response(status, content=content))
    api = ApiClient(
        httpx.AsyncClient(transport=transport), base_url=BASE_URL, logger=NopLogger()
    )
    return RecurringClient(api), transport


@pytest.mark.asyncio
class TestAgreements:
    async def test_list_agreements(self) -> None:
        recurring, transport = _recurring(200, [AGREEMENT])

        agreements = await recurring.list_agreements()

        assert len(agreements) == 1
        assert agreements[0].id == "agr_5kSeqz"
        assert agreements[0].status is AgreementStatus.ACTIVE
        assert agreements[0].price == 29900
        request = transport.requests[0]
        assert request.method == "GET"
        assert request.url.path == "/recurring/v2/agreements"
        assert "status" not in request.url.params

    async def test_list_agreements_by_status(self) -> None:
        recurring, transport = _recurring(200, [])

        assert await recurring.list_agreements(AgreementStatus.STOPPED) == []
        assert transport.requests[0].url.params["status"] == "STOPPED"

    async def test_get_agreement(self) -> None:
        recurring, transport = _recurring(200, AGREEMENT)

        agreement = await recurring.get_agreement("agr_5kSeqz")

        assert agreement.product_name == "Premium"
        assert agreement.start is not None
        assert transport.requests[0].url.path == "/recurring/v2/agreements/agr_5kSeqz"

    async def test_create_agreement(self) -> None:
        recurring, transport = _recurring(
            201,
            {
                "agreementResource": "https://apitest.vipps.no/recurring/v2/agreements/agr_1",
                "agreementId": "agr_1",
                "vippsConfirmationUrl": "https://apitest.vipps.no/v2/register/page?token=x",
            },
        )

        response = await recurring.create_agreement(
            DraftAgreement(
                interval="MONTH",
                interval_count=1,
                merchant_redirect_url="https://shop.example.com/redirect",
                merchant_agreement_url="https://shop.example.com/agreement",
                price=29900,
                product_name="Premium",
            )
        )

        assert response.agreement_id == "agr_1"
        body = json.loads(transport.requests[0].content)
        assert body["productName"] == "Premium"
        assert body["intervalCount"] == 1
        assert "initialCharge" not in body

    async def test_stop_agreement_patches_status(self) -> None:
        recurring, transport = _recurring(200, {"agreementId": "agr_1"})

        reference = await recurring.stop_agreement("agr_1")

        assert reference.agreement_id == "agr_1"
        request = transport.requests[0]
        assert request.method == "PATCH"
        assert json.loads(request.content) == {"status": "STOPPED"}

    async def test_update_agreement(self) -> None:
        recurring, transport = _recurring(200, {"agreementId": "agr_1"})

        await recurring.update_agreement("agr_1", AgreementUpdate(price=19900))

        assert json.loads(transport.requests[0].content) == {"price": 19900}


@pytest.mark.asyncio
class TestCharges:
    async def test_list_charges(self) -> None:
        recurring, transport = _recurring(200, [CHARGE])

        charges = await recurring.list_charges("agr_1")

        assert charges[0].status is ChargeStatus.CHARGED
        assert charges[0].due == date(2024, 2, 1)
        assert transport.requests[0].url.path == "/recurring/v2/agreements/agr_1/charges"

    async def test_get_charge(self) -> None:
        recurring, transport = _recurring(200, CHARGE)

        charge = await recurring.get_charge("agr_1", "chr-1")

        assert charge.id == "chr-1"
        assert (
            transport.requests[0].url.path
            == "/recurring/v2/agreements/agr_1/charges/chr-1"
        )

    async def test_create_charge(self) -> None:
        recurring, transport = _recurring(200, {"chargeId": "chr-2"})

        reference = await recurring.create_charge(
            "agr_1",
            amount=29900,
            description="March",
            due=date(2024, 3, 1),
            retry_days=5,
        )

        assert reference.charge_id == "chr-2"
        request = transport.requests[0]
        assert request.method == "POST"
        assert json.loads(request.content) == {
            "amount": 29900,
            "currency": "NOK",
            "description": "March",
            "due": "2024-03-01",
            "retryDays": 5,
        }

    async def test_cancel_charge_ignores_body(self) -> None:
        recurring, transport = _recurring(200, b"")

        assert await recurring.cancel_charge("agr_1", "chr-1") is None
        assert transport.requests[0].method == "DELETE"


@pytest.mark.asyncio
class TestErrors:
    async def test_api_errors_are_translated(self) -> None:
        recurring, _ = _recurring(
            400,
            [
                {"field": "price", "code": "c1", "message": "too low", "contextId": "x"},
                {"field": "due", "code": "c2", "message": "too soon", "contextId": "x"},
            ],
        )

        with pytest.raises(RecurringError) as exc_info:
            await recurring.create_charge(
                "agr_1", amount=1, description="d", due=date(2024, 1, 1)
            )

        assert len(exc_info.value) == 2
        assert str(exc_info.value).startswith("vipps: multiple errors: field price")

    async def test_not_json_yields_unexpected_response(self) -> None:
        recurring, _ = _recurring(500, b"not json")

        with pytest.raises(UnexpectedResponseError) as exc_info:
            await recurring.list_agreements()

        assert exc_info.value.status == 500
        assert exc_info.value.body == b"not json"
