from .client import RecurringClient
from .errors import RecurringAPIError, RecurringError, wrap_error
from .types import (
    Agreement,
    AgreementReference,
    AgreementStatus,
    AgreementUpdate,
    Campaign,
    Charge,
    ChargeReference,
    ChargeRequest,
    ChargeStatus,
    DraftAgreement,
    DraftAgreementResponse,
    InitialCharge,
)

__all__ = [
    "RecurringClient",
    "RecurringAPIError",
    "RecurringError",
    "wrap_error",
    "Agreement",
    "AgreementReference",
    "AgreementStatus",
    "AgreementUpdate",
    "Campaign",
    "Charge",
    "ChargeReference",
    "ChargeRequest",
    "ChargeStatus",
    "DraftAgreement",
    "DraftAgreementResponse",
    "InitialCharge",
]
