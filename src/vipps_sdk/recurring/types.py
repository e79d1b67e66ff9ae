"""Request and response models for the Vipps Recurring Payments v2 API."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    model_config = ConfigDict(validate_by_name=True)


class AgreementStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    STOPPED = "STOPPED"
    EXPIRED = "EXPIRED"


class ChargeStatus(str, Enum):
    PENDING = "PENDING"
    DUE = "DUE"
    PROCESSING = "PROCESSING"
    CHARGED = "CHARGED"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIALLY_REFUNDED = "PARTIALLY_REFUNDED"
    RESERVED = "RESERVED"
    CANCELLED = "CANCELLED"


class Campaign(_Model):
    campaign_price: int = Field(alias="campaignPrice")
    end: Optional[datetime] = None


class Agreement(_Model):
    """An agreement as returned by the API. Prices are in øre."""

    id: str
    status: AgreementStatus
    product_name: str = Field(default="", alias="productName")
    product_description: Optional[str] = Field(default=None, alias="productDescription")
    price: int = 0
    currency: str = "NOK"
    interval: str = ""
    interval_count: int = Field(default=1, alias="intervalCount")
    start: Optional[datetime] = None
    stop: Optional[datetime] = None
    campaign: Optional[Campaign] = None


class InitialCharge(_Model):
    amount: int
    currency: str = "NOK"
    description: str
    transaction_type: str = Field(default="DIRECT_CAPTURE", alias="transactionType")


class DraftAgreement(_Model):
    """Body of ``POST /recurring/v2/agreements``."""

    currency: str = "NOK"
    customer_phone_number: Optional[str] = Field(
        default=None, alias="customerPhoneNumber"
    )
    interval: str
    interval_count: int = Field(alias="intervalCount")
    is_app: bool = Field(default=False, alias="isApp")
    merchant_redirect_url: str = Field(alias="merchantRedirectUrl")
    merchant_agreement_url: str = Field(alias="merchantAgreementUrl")
    price: int
    product_name: str = Field(alias="productName")
    product_description: Optional[str] = Field(default=None, alias="productDescription")
    initial_charge: Optional[InitialCharge] = Field(default=None, alias="initialCharge")
    campaign: Optional[Campaign] = None


class DraftAgreementResponse(_Model):
    agreement_id: str = Field(alias="agreementId")
    agreement_resource: Optional[str] = Field(default=None, alias="agreementResource")
    vipps_confirmation_url: str = Field(alias="vippsConfirmationUrl")
    charge_id: Optional[str] = Field(default=None, alias="chargeId")


class AgreementUpdate(_Model):
    """Body of ``PATCH /recurring/v2/agreements/{id}``. Unset fields are left alone."""

    product_name: Optional[str] = Field(default=None, alias="productName")
    product_description: Optional[str] = Field(default=None, alias="productDescription")
    price: Optional[int] = None
    status: Optional[AgreementStatus] = None
    campaign: Optional[Campaign] = None


class AgreementReference(_Model):
    agreement_id: str = Field(alias="agreementId")


class Charge(_Model):
    id: str
    status: ChargeStatus
    amount: int = 0
    amount_refunded: int = Field(default=0, alias="amountRefunded")
    description: str = ""
    due: Optional[date] = None
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    type: Optional[str] = None
    failure_reason: Optional[str] = Field(default=None, alias="failureReason")
    failure_description: Optional[str] = Field(
        default=None, alias="failureDescription"
    )


class ChargeRequest(_Model):
    """Body of ``POST /recurring/v2/agreements/{id}/charges``."""

    amount: int
    currency: str = "NOK"
    description: str
    due: date
    retry_days: int = Field(default=0, alias="retryDays")


class ChargeReference(_Model):
    charge_id: str = Field(alias="chargeId")
