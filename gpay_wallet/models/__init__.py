"""
GPay models package.

Exports credentials, signature and wallet response models.
"""
from .credentials import Credentials
from .enums import OperationType, TransactionStatus
from .payments import PaymentRequest, PaymentStatus, SendMoneyResult
from .signatures import SignedRequest, SignatureEncoding
from .statements import (
    OutstandingTransaction,
    OutstandingTransactions,
    Statement,
    StatementTransaction,
)
from .wallet import Balance, WalletCheck

__all__ = [
    "Credentials",
    "OperationType",
    "TransactionStatus",
    "PaymentRequest",
    "PaymentStatus",
    "SendMoneyResult",
    "SignedRequest",
    "SignatureEncoding",
    "OutstandingTransaction",
    "OutstandingTransactions",
    "Statement",
    "StatementTransaction",
    "Balance",
    "WalletCheck",
]
