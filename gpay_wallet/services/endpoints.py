"""
Wallet API Endpoint Catalogue

Path and signed response field set for each business endpoint. The
field sets must match, name for name, what the server signs; adding,
dropping or renaming a field breaks verification for genuine responses.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, FrozenSet, Mapping, Tuple

from ..exceptions import MalformedFieldError


@dataclass(frozen=True)
class Endpoint:
    """One wallet API operation."""
    name: str
    path: str
    signed_fields: Tuple[str, ...]
    nullable_fields: FrozenSet[str] = field(default_factory=frozenset)


BALANCE = Endpoint(
    name="get_wallet_balance",
    path="/info/balance",
    signed_fields=("balance", "response_timestamp"),
)

CREATE_PAYMENT_REQUEST = Endpoint(
    name="create_payment_request",
    path="/payment/create-payment-request",
    signed_fields=(
        "requester_username", "request_id", "request_time",
        "amount", "reference_no", "response_timestamp",
    ),
    nullable_fields=frozenset({"reference_no"}),
)

CHECK_PAYMENT_STATUS = Endpoint(
    name="check_payment_status",
    path="/payment/check-payment-status",
    signed_fields=(
        "request_id", "transaction_id", "amount", "payment_timestamp",
        "reference_no", "description", "is_paid", "response_timestamp",
    ),
    nullable_fields=frozenset({
        "transaction_id", "payment_timestamp", "reference_no", "description", "is_paid",
    }),
)

SEND_MONEY = Endpoint(
    name="send_money",
    path="/payment/send-money",
    signed_fields=(
        "amount", "sender_fee", "transaction_id", "old_balance",
        "new_balance", "timestamp", "reference_no", "response_timestamp",
    ),
    nullable_fields=frozenset({"reference_no"}),
)

STATEMENT = Endpoint(
    name="get_statement",
    path="/info/statement",
    signed_fields=(
        "available_balance", "outstanding_credit", "outstanding_debit",
        "day_balance", "day_total_in", "day_total_out", "response_timestamp",
    ),
)

CHECK_WALLET = Endpoint(
    name="check_wallet",
    path="/info/check-wallet",
    signed_fields=(
        "exists", "wallet_gateway_id", "wallet_name",
        "user_account_name", "can_receive_money", "response_timestamp",
    ),
    nullable_fields=frozenset({"wallet_name", "user_account_name"}),
)

OUTSTANDING_TRANSACTIONS = Endpoint(
    name="get_outstanding_transactions",
    path="/info/outstanding-transactions",
    signed_fields=("outstanding_credit", "outstanding_debit", "response_timestamp"),
)

ENDPOINTS = {
    endpoint.path: endpoint
    for endpoint in (
        BALANCE,
        CREATE_PAYMENT_REQUEST,
        CHECK_PAYMENT_STATUS,
        SEND_MONEY,
        STATEMENT,
        CHECK_WALLET,
        OUTSTANDING_TRANSACTIONS,
    )
}


class JsonNumber(Decimal):
    """
    Decimal that remembers the literal text it was decoded from.

    str() returns that text unchanged, so 1e3 stays "1e3" and 10.50 stays
    "10.50" when signed. Use as parse_float and parse_int for json.loads.
    """

    def __new__(cls, literal: str):
        number = super().__new__(cls, literal)
        number.literal = literal
        return number

    def __str__(self) -> str:
        return self.literal


def stringify_value(value: Any) -> str:
    """
    Render a decoded JSON value the way the server renders it for signing.

    - None -> ""
    - bool -> "true" / "false"
    - JsonNumber -> the literal text the server wrote
    - anything else -> str()
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def extract_signed_fields(endpoint: Endpoint, data: Mapping[str, Any]) -> Dict[str, str]:
    """
    Build the signed field set for an endpoint from a response payload.

    Raises:
        MalformedFieldError: If a non-nullable signed field is absent or null
    """
    fields = {}
    for name in endpoint.signed_fields:
        value = data.get(name)
        if value is None and name not in endpoint.nullable_fields:
            raise MalformedFieldError(
                f"Response for {endpoint.name} is missing signed field '{name}'",
                {"endpoint": endpoint.name, "field": name}
            )
        fields[name] = stringify_value(value)
    return fields
