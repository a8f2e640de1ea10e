"""
Pydantic Statement Models

Day statements and outstanding transaction listings. Individual
transaction rows are not covered by the response signature; only the
aggregate balances are.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator

from .base import WalletModel, parse_epoch_millis
from .enums import OperationType, TransactionStatus


def _strict_enums(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get("strict_enums"))


class TransactionRow(WalletModel):
    """
    One transaction line.

    display_datetime is the server's preformatted datetime text
    (payload key "datetime").
    """
    transaction_id: str
    display_datetime: str = Field(alias="datetime")
    timestamp: Optional[datetime] = None
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    balance: Optional[Decimal] = None
    reference_no: Optional[str] = None
    op_type_id: Optional[OperationType] = None
    status: Optional[TransactionStatus] = None
    created_at: Optional[datetime] = None

    @field_validator("timestamp", "created_at", mode="before")
    @classmethod
    def parse_timestamps(cls, v):
        return parse_epoch_millis(v)

    @field_validator("op_type_id", mode="before")
    @classmethod
    def parse_op_type(cls, v, info: ValidationInfo):
        if v is None:
            return None
        return OperationType.from_value(v, strict=_strict_enums(info))

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v, info: ValidationInfo):
        if v is None:
            return None
        return TransactionStatus.from_value(v, strict=_strict_enums(info))


class StatementTransaction(TransactionRow):
    """Transaction on a day statement."""


class OutstandingTransaction(TransactionRow):
    """Transaction not yet applied to the available balance."""


class Statement(WalletModel):
    """Balances and transactions for a single day."""
    available_balance: Decimal
    outstanding_credit: Decimal
    outstanding_debit: Decimal
    day_balance: Decimal
    day_total_in: Decimal
    day_total_out: Decimal
    response_timestamp: datetime
    day_statement: List[StatementTransaction] = Field(default_factory=list)

    @field_validator("response_timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        return parse_epoch_millis(v)

    @field_validator("day_statement", mode="before")
    @classmethod
    def default_rows(cls, v):
        return v if isinstance(v, list) else []


class OutstandingTransactions(WalletModel):
    """Outstanding credit and debit totals with the pending rows behind them."""
    outstanding_credit: Decimal
    outstanding_debit: Decimal
    response_timestamp: datetime
    outstanding_transactions: List[OutstandingTransaction] = Field(default_factory=list)

    @field_validator("response_timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        return parse_epoch_millis(v)

    @field_validator("outstanding_transactions", mode="before")
    @classmethod
    def default_rows(cls, v):
        return v if isinstance(v, list) else []
