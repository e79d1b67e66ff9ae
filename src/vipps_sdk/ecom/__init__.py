from .client import EcomClient
from .errors import EcomAPIError, EcomError, wrap_error
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
    TransactionInfo,
    TransactionLogEntry,
    TransactionSummary,
)

__all__ = [
    "EcomClient",
    "EcomAPIError",
    "EcomError",
    "wrap_error",
    "CustomerInfo",
    "InitiatePaymentCommand",
    "MerchantInfo",
    "ModificationCommand",
    "ModifyTransaction",
    "PaymentDetails",
    "PaymentModification",
    "PaymentReference",
    "Transaction",
    "TransactionInfo",
    "TransactionLogEntry",
    "TransactionSummary",
]
