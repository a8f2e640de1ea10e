"""
Pydantic Payment Models

Payment request creation, payment status and send-money results.
All monetary values are Decimal in LYD.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import field_validator

from .base import WalletModel, parse_epoch_millis


class PaymentRequest(WalletModel):
    """A payment request created by this wallet, to be paid by another."""
    requester_username: str
    request_id: str
    request_time: datetime
    amount: Decimal
    reference_no: Optional[str] = None
    response_timestamp: datetime

    @field_validator("request_time", "response_timestamp", mode="before")
    @classmethod
    def parse_timestamps(cls, v):
        return parse_epoch_millis(v)


class PaymentStatus(WalletModel):
    """
    Status of a previously created payment request.

    transaction_id and payment_timestamp are only set once the request
    has been paid.
    """
    request_id: str
    transaction_id: Optional[str] = None
    amount: Decimal
    payment_timestamp: Optional[datetime] = None
    reference_no: Optional[str] = None
    description: Optional[str] = None
    is_paid: Optional[bool] = None
    response_timestamp: datetime

    @field_validator("payment_timestamp", "response_timestamp", mode="before")
    @classmethod
    def parse_timestamps(cls, v):
        return parse_epoch_millis(v)


class SendMoneyResult(WalletModel):
    """Outcome of a transfer to another wallet, with balances before and after."""
    amount: Decimal
    sender_fee: Decimal
    transaction_id: str
    old_balance: Decimal
    new_balance: Decimal
    timestamp: datetime
    reference_no: Optional[str] = None
    response_timestamp: datetime

    @field_validator("timestamp", "response_timestamp", mode="before")
    @classmethod
    def parse_timestamps(cls, v):
        return parse_epoch_millis(v)
