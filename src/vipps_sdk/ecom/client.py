"""Client for the Vipps eCom v2 API."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..client import ApiClient
from ..config import ClientConfig
from ..errors import ConfigError, HTTPResponseError
from .errors import wrap_error
from .types import (
    CustomerInfo,
    InitiatePaymentCommand,
    MerchantInfo,
    ModificationCommand,
    ModifyTransaction,
    PaymentDetails,
    PaymentModification,
    PaymentReference,
    Transaction,
)

PAYMENTS_ENDPOINT = "/ecomm/v2/payments"


class EcomClient:
    """Initiate, inspect, capture, cancel and refund eCom payments.

    Non-2xx responses raise :class:`~vipps_sdk.ecom.errors.EcomError`, or
    :class:`~vipps_sdk.errors.UnexpectedResponseError` when the body is not
    an eCom error list.
    """

    def __init__(self, api_client: ApiClient, merchant_serial_number: str) -> None:
        self._api = api_client
        self._merchant_serial_number = merchant_serial_number

    @classmethod
    def from_config(cls, api_client: ApiClient, config: ClientConfig) -> "EcomClient":
        """Use the merchant serial number from ``config``."""
        if not config.merchant_serial_number:
            raise ConfigError(
                "merchant_serial_number (VIPPS_MERCHANT_SERIAL_NUMBER) must be set"
            )
        return cls(api_client, config.merchant_serial_number)

    async def _execute(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        result_type: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        try:
            return await self._api.execute(
                method, endpoint, body, result_type, headers=headers
            )
        except HTTPResponseError as err:
            raise wrap_error(err) from err

    def _merchant_info(self, **kwargs: Any) -> MerchantInfo:
        return MerchantInfo(merchant_serial_number=self._merchant_serial_number, **kwargs)

    async def initiate_payment(
        self,
        *,
        order_id: str,
        amount: int,
        transaction_text: str,
        callback_prefix: str,
        fallback: str,
        mobile_number: Optional[str] = None,
        is_app: Optional[bool] = None,
    ) -> PaymentReference:
        """Start a payment. Returns the URL the customer is sent to."""
        command = InitiatePaymentCommand(
            customer_info=CustomerInfo(mobile_number=mobile_number)
            if mobile_number
            else None,
            merchant_info=self._merchant_info(
                callback_prefix=callback_prefix,
                fallback=fallback,
                is_app=is_app,
            ),
            transaction=Transaction(
                order_id=order_id,
                amount=amount,
                transaction_text=transaction_text,
            ),
        )
        return await self._execute(
            "POST", PAYMENTS_ENDPOINT, command, PaymentReference
        )

    async def get_payment_details(self, order_id: str) -> PaymentDetails:
        return await self._execute(
            "GET", f"{PAYMENTS_ENDPOINT}/{order_id}/details", result_type=PaymentDetails
        )

    async def capture_payment(
        self,
        order_id: str,
        *,
        amount: int,
        transaction_text: str,
        request_id: Optional[str] = None,
    ) -> PaymentModification:
        """Capture ``amount`` of a reserved payment.

        ``amount=0`` captures the full remaining amount. ``request_id`` is
        sent as ``X-Request-Id`` and makes the capture idempotent.
        """
        return await self._modify(
            "POST",
            order_id,
            "capture",
            ModifyTransaction(amount=amount, transaction_text=transaction_text),
            request_id,
        )

    async def cancel_payment(
        self, order_id: str, *, transaction_text: str
    ) -> PaymentModification:
        command = ModificationCommand(
            merchant_info=self._merchant_info(),
            transaction=ModifyTransaction(amount=0, transaction_text=transaction_text),
        )
        return await self._execute(
            "PUT",
            f"{PAYMENTS_ENDPOINT}/{order_id}/cancel",
            command,
            PaymentModification,
        )

    async def refund_payment(
        self,
        order_id: str,
        *,
        amount: int,
        transaction_text: str,
        request_id: Optional[str] = None,
    ) -> PaymentModification:
        return await self._modify(
            "POST",
            order_id,
            "refund",
            ModifyTransaction(amount=amount, transaction_text=transaction_text),
            request_id,
        )

    async def _modify(
        self,
        method: str,
        order_id: str,
        operation: str,
        transaction: ModifyTransaction,
        request_id: Optional[str],
    ) -> PaymentModification:
        command = ModificationCommand(
            merchant_info=self._merchant_info(), transaction=transaction
        )
        headers = {"X-Request-Id": request_id} if request_id else None
        return await self._execute(
            method,
            f"{PAYMENTS_ENDPOINT}/{order_id}/{operation}",
            command,
            PaymentModification,
            headers=headers,
        )
