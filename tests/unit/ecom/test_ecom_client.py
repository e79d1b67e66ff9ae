"""Unit tests for EcomClient."""

import json
from typing import Callable

import httpx
import pytest
from vipps_sdk.client import ApiClient
from vipps_sdk.config import ClientConfig, Credentials
from vipps_sdk.ecom import EcomClient, EcomError
from vipps_sdk.errors import ConfigError, UnexpectedResponseError
from vipps_sdk.log import NopLogger

BASE_URL = "https://apitest.vipps.no"
MSN = "123456"

MODIFICATION_RESPONSE = {
    "orderId": "order-1",
    "transactionInfo": {
        "amount": 1000,
        "status": "Captured",
        "timeStamp": "2024-03-01T12:00:00.000Z",
        "transactionId": "5001420062",
        "transactionText": "Shoes",
    },
    "transactionSummary": {
        "capturedAmount": 1000,
        "refundedAmount": 0,
        "remainingAmountToCapture": 0,
        "remainingAmountToRefund": 1000,
    },
}


class FakeTransport(httpx.AsyncBaseTransport):
    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)


def _ecom(status: int, body: object) -> tuple[EcomClient, FakeTransport]:
    content = body if isinstance(body, bytes) else json.dumps(body).encode()
    transport = FakeTransport(lambda request: httpx.Response(status, content=content))
    api = ApiClient(
        httpx.AsyncClient(transport=transport), base_url=BASE_URL, logger=NopLogger()
    )
    return EcomClient(api, merchant_serial_number=MSN), transport


@pytest.mark.asyncio
class TestEcomClient:
    async def test_initiate_payment(self) -> None:
        ecom, transport = _ecom(
            200, {"orderId": "order-1", "url": "https://api.vipps.no/dwo-api-application/v1/deeplink/vippsgateway?token=x"}
        )

        reference = await ecom.initiate_payment(
            order_id="order-1",
            amount=1000,
            transaction_text="Shoes",
            callback_prefix="https://shop.example.com/vipps",
            fallback="https://shop.example.com/done",
            mobile_number="91234567",
        )

        assert reference.order_id == "order-1"
        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/ecomm/v2/payments"
        assert json.loads(request.content) == {
            "customerInfo": {"mobileNumber": "91234567"},
            "merchantInfo": {
                "merchantSerialNumber": MSN,
                "callbackPrefix": "https://shop.example.com/vipps",
                "fallBack": "https://shop.example.com/done",
            },
            "transaction": {
                "orderId": "order-1",
                "amount": 1000,
                "transactionText": "Shoes",
            },
        }

    async def test_get_payment_details(self) -> None:
        ecom, transport = _ecom(
            200,
            {
                "orderId": "order-1",
                "transactionLogHistory": [
                    {"amount": 1000, "operation": "RESERVE", "operationSuccess": True}
                ],
            },
        )

        details = await ecom.get_payment_details("order-1")

        assert details.transaction_log_history[0].operation == "RESERVE"
        assert transport.requests[0].method == "GET"
        assert transport.requests[0].url.path == "/ecomm/v2/payments/order-1/details"

    async def test_capture_sends_request_id(self) -> None:
        ecom, transport = _ecom(200, MODIFICATION_RESPONSE)

        result = await ecom.capture_payment(
            "order-1", amount=1000, transaction_text="Shoes", request_id="req-1"
        )

        assert result.transaction_info.status == "Captured"
        assert result.transaction_summary is not None
        assert result.transaction_summary.captured_amount == 1000
        request = transport.requests[0]
        assert request.url.path == "/ecomm/v2/payments/order-1/capture"
        assert request.headers["X-Request-Id"] == "req-1"
        assert json.loads(request.content) == {
            "merchantInfo": {"merchantSerialNumber": MSN},
            "transaction": {"amount": 1000, "transactionText": "Shoes"},
        }

    async def test_cancel_uses_put(self) -> None:
        ecom, transport = _ecom(200, MODIFICATION_RESPONSE)

        await ecom.cancel_payment("order-1", transaction_text="Out of stock")

        request = transport.requests[0]
        assert request.method == "PUT"
        assert request.url.path == "/ecomm/v2/payments/order-1/cancel"
        assert "X-Request-Id" not in request.headers

    async def test_refund(self) -> None:
        ecom, transport = _ecom(200, MODIFICATION_RESPONSE)

        await ecom.refund_payment("order-1", amount=500, transaction_text="Partial")

        request = transport.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/ecomm/v2/payments/order-1/refund"

    async def test_api_errors_are_translated(self) -> None:
        ecom, _ = _ecom(
            400, [{"errorGroup": "G", "errorMessage": "bad", "errorCode": "E1"}]
        )

        with pytest.raises(EcomError) as exc_info:
            await ecom.get_payment_details("order-1")

        assert str(exc_info.value) == "vipps: [G] bad (code E1)"
        assert exc_info.value.__cause__ is not None

    async def test_unparseable_error_is_unexpected_response(self) -> None:
        ecom, _ = _ecom(500, b"<html>oops</html>")

        with pytest.raises(UnexpectedResponseError) as exc_info:
            await ecom.get_payment_details("order-1")

        assert exc_info.value.status == 500
        assert exc_info.value.body == b"<html>oops</html>"


CREDENTIALS = Credentials(client_id="id", client_secret="secret", subscription_key="key")


@pytest.mark.asyncio
class TestFromConfig:
    async def test_uses_merchant_serial_number_from_config(self) -> None:
        transport = FakeTransport(
            lambda request: httpx.Response(
                200, content=json.dumps(MODIFICATION_RESPONSE).encode()
            )
        )
        api = ApiClient(
            httpx.AsyncClient(transport=transport), base_url=BASE_URL, logger=NopLogger()
        )
        config = ClientConfig.from_env(
            {}, credentials=CREDENTIALS, merchant_serial_number="987654"
        )

        ecom = EcomClient.from_config(api, config)
        await ecom.refund_payment("order-1", amount=100, transaction_text="Refund")

        body = json.loads(transport.requests[0].content)
        assert body["merchantInfo"] == {"merchantSerialNumber": "987654"}

    async def test_missing_merchant_serial_number_raises(self) -> None:
        api = ApiClient(httpx.AsyncClient(), base_url=BASE_URL, logger=NopLogger())
        config = ClientConfig(credentials=CREDENTIALS)

        with pytest.raises(ConfigError, match="VIPPS_MERCHANT_SERIAL_NUMBER"):
            EcomClient.from_config(api, config)
