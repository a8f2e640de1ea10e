"""
Shared Parsing for Wallet Response Models

Wallet payloads carry timestamps as epoch milliseconds (number or numeric
string) and amounts as decimal literals.
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from pydantic import BaseModel


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_epoch_millis(v):
    """Convert epoch milliseconds to an aware UTC datetime; pass through None and datetimes."""
    if v is None or isinstance(v, datetime):
        return v
    if v == "":
        return None
    return EPOCH + timedelta(milliseconds=int(Decimal(str(v))))


class WalletModel(BaseModel):
    """Base for parsed wallet responses: extra payload keys are ignored."""

    model_config = {
        "extra": "ignore",
        "populate_by_name": True
    }
