"""
GPay Wallet - signed client for the GPay online wallet API.

Every request is signed with a salted HMAC-SHA256 and every response
signature is verified before any data is returned.
"""
from .client import GPayClient
from .config import Settings, configure_logging, settings
from .exceptions import (
    ConfigurationError,
    GPayError,
    InvalidRequestError,
    MalformedFieldError,
    RandomnessUnavailableError,
    TransportError,
    UnknownDiscriminantError,
    VerificationFailedError,
)
from .models import (
    Balance,
    Credentials,
    OperationType,
    OutstandingTransaction,
    OutstandingTransactions,
    PaymentRequest,
    PaymentStatus,
    SendMoneyResult,
    SignedRequest,
    Statement,
    StatementTransaction,
    TransactionStatus,
    WalletCheck,
)
from .services import sign_request, verify_response

__version__ = "0.1.0"
__all__ = [
    "GPayClient",
    "Settings",
    "configure_logging",
    "settings",
    "ConfigurationError",
    "GPayError",
    "InvalidRequestError",
    "MalformedFieldError",
    "RandomnessUnavailableError",
    "TransportError",
    "UnknownDiscriminantError",
    "VerificationFailedError",
    "Balance",
    "Credentials",
    "OperationType",
    "OutstandingTransaction",
    "OutstandingTransactions",
    "PaymentRequest",
    "PaymentStatus",
    "SendMoneyResult",
    "SignedRequest",
    "Statement",
    "StatementTransaction",
    "TransactionStatus",
    "WalletCheck",
    "sign_request",
    "verify_response",
]
