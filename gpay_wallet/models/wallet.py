"""
Pydantic Wallet Info Models

Balance and wallet lookup results.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from .base import WalletModel, parse_epoch_millis


class Balance(WalletModel):
    """Current available wallet balance (LYD)."""
    balance: Decimal
    response_timestamp: datetime

    @field_validator("response_timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        return parse_epoch_millis(v)


class WalletCheck(WalletModel):
    """
    Result of looking up another wallet by gateway ID.

    wallet_name and user_account_name are None when the wallet does
    not exist.
    """
    exists: bool
    wallet_gateway_id: str
    wallet_name: Optional[str] = None
    user_account_name: Optional[str] = None
    can_receive_money: bool = Field(description="Whether a send_money to this wallet can succeed")
    response_timestamp: datetime

    @field_validator("response_timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, v):
        return parse_epoch_millis(v)
