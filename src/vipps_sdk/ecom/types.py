"""Request and response models for the Vipps eCom v2 API."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(validate_by_name=True)


class CustomerInfo(_Model):
    mobile_number: Optional[str] = Field(default=None, alias="mobileNumber")


class MerchantInfo(_Model):
    merchant_serial_number: str = Field(alias="merchantSerialNumber")
    callback_prefix: Optional[str] = Field(default=None, alias="callbackPrefix")
    fallback: Optional[str] = Field(default=None, alias="fallBack")
    is_app: Optional[bool] = Field(default=None, alias="isApp")
    auth_token: Optional[str] = Field(default=None, alias="authToken")
    payment_type: Optional[str] = Field(default=None, alias="paymentType")


class Transaction(_Model):
    order_id: Optional[str] = Field(default=None, alias="orderId")
    amount: int
    transaction_text: str = Field(alias="transactionText")
    skip_landing_page: Optional[bool] = Field(default=None, alias="skipLandingPage")


class InitiatePaymentCommand(_Model):
    """Body of ``POST /ecomm/v2/payments``. ``amount`` is in øre."""

    customer_info: Optional[CustomerInfo] = Field(default=None, alias="customerInfo")
    merchant_info: MerchantInfo = Field(alias="merchantInfo")
    transaction: Transaction


class PaymentReference(_Model):
    order_id: str = Field(alias="orderId")
    url: str


class ModifyTransaction(_Model):
    amount: int
    transaction_text: str = Field(alias="transactionText")


class ModificationCommand(_Model):
    """Body for capture, cancel and refund."""

    merchant_info: MerchantInfo = Field(alias="merchantInfo")
    transaction: Optional[ModifyTransaction] = None


class TransactionInfo(_Model):
    amount: int = 0
    status: str = ""
    time_stamp: Optional[datetime] = Field(default=None, alias="timeStamp")
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    transaction_text: Optional[str] = Field(default=None, alias="transactionText")


class TransactionSummary(_Model):
    captured_amount: int = Field(default=0, alias="capturedAmount")
    refunded_amount: int = Field(default=0, alias="refundedAmount")
    remaining_amount_to_capture: int = Field(
        default=0, alias="remainingAmountToCapture"
    )
    remaining_amount_to_refund: int = Field(default=0, alias="remainingAmountToRefund")


class PaymentModification(_Model):
    """Response to capture, cancel and refund."""

    order_id: str = Field(alias="orderId")
    transaction_info: TransactionInfo = Field(alias="transactionInfo")
    transaction_summary: Optional[TransactionSummary] = Field(
        default=None, alias="transactionSummary"
    )


class TransactionLogEntry(_Model):
    amount: int = 0
    operation: str = ""
    operation_success: bool = Field(default=False, alias="operationSuccess")
    request_id: Optional[str] = Field(default=None, alias="requestId")
    time_stamp: Optional[datetime] = Field(default=None, alias="timeStamp")
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    transaction_text: Optional[str] = Field(default=None, alias="transactionText")


class PaymentDetails(_Model):
    order_id: str = Field(alias="orderId")
    transaction_summary: Optional[TransactionSummary] = Field(
        default=None, alias="transactionSummary"
    )
    transaction_log_history: List[TransactionLogEntry] = Field(
        default_factory=list, alias="transactionLogHistory"
    )
