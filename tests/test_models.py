from datetime import datetime, timezone
from decimal import Decimal

import pytest

from gpay_wallet.exceptions import MalformedFieldError, UnknownDiscriminantError
from gpay_wallet.mocks.wallet_server import DEFAULT_PAYLOADS
from gpay_wallet.models import (
    Balance,
    OperationType,
    OutstandingTransactions,
    PaymentStatus,
    Statement,
    TransactionStatus,
)
from gpay_wallet.services.endpoints import (
    CHECK_PAYMENT_STATUS,
    CHECK_WALLET,
    ENDPOINTS,
    SEND_MONEY,
    JsonNumber,
    extract_signed_fields,
    stringify_value,
)


# ============================================================================
# Enumerations
# ============================================================================

def test_operation_type_codes():
    assert OperationType.from_value(1) is OperationType.DIRECT_TRANSFER
    assert OperationType.from_value("6") is OperationType.LOCAL_TRANSFER
    assert OperationType.from_value(OperationType.BANK_DEPOSIT) is OperationType.BANK_DEPOSIT


def test_transaction_status_codes():
    assert TransactionStatus.from_value(0) is TransactionStatus.PENDING
    assert TransactionStatus.from_value(2) is TransactionStatus.APPLIED


@pytest.mark.parametrize("value", [99, -1, "x", None])
def test_unknown_code_degrades(value):
    assert TransactionStatus.from_value(value) is TransactionStatus.UNKNOWN


def test_unknown_code_strict():
    with pytest.raises(UnknownDiscriminantError) as exc_info:
        OperationType.from_value(42, strict=True)
    assert exc_info.value.details == {"enum": "OperationType", "value": 42}


# ============================================================================
# Response models
# ============================================================================

def test_balance_parses_epoch_millis():
    balance = Balance.model_validate({"balance": "12.30", "response_timestamp": 1700000000000})
    assert balance.balance == Decimal("12.30")
    assert balance.response_timestamp == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


def test_epoch_millis_accepts_strings():
    balance = Balance.model_validate({"balance": "1", "response_timestamp": "1700000000123"})
    assert balance.response_timestamp.microsecond == 123000


def test_payment_status_nullable_fields():
    status = PaymentStatus.model_validate(DEFAULT_PAYLOADS["/payment/check-payment-status"])
    assert status.transaction_id is None
    assert status.payment_timestamp is None
    assert status.is_paid is False


def test_statement_rows():
    statement = Statement.model_validate(DEFAULT_PAYLOADS["/info/statement"])
    assert len(statement.day_statement) == 2
    row = statement.day_statement[0]
    assert row.display_datetime == "2023-11-14 22:13:19"
    assert row.op_type_id is OperationType.DIRECT_TRANSFER
    assert row.status is TransactionStatus.COMPLETED
    assert row.amount == Decimal("-25.00")


def test_statement_without_rows():
    data = dict(DEFAULT_PAYLOADS["/info/statement"], day_statement=None)
    assert Statement.model_validate(data).day_statement == []


def _outstanding_with_status(status):
    data = dict(DEFAULT_PAYLOADS["/info/outstanding-transactions"])
    data["outstanding_transactions"] = [
        dict(data["outstanding_transactions"][0], status=status, op_type_id=77)
    ]
    return data


def test_unknown_row_codes_degrade_by_default():
    parsed = OutstandingTransactions.model_validate(_outstanding_with_status(9))
    row = parsed.outstanding_transactions[0]
    assert row.status is TransactionStatus.UNKNOWN
    assert row.op_type_id is OperationType.UNKNOWN
    assert row.balance is None


def test_unknown_row_codes_raise_in_strict_context():
    with pytest.raises(UnknownDiscriminantError):
        OutstandingTransactions.model_validate(
            _outstanding_with_status(9),
            context={"strict_enums": True}
        )


# ============================================================================
# Signed field extraction
# ============================================================================

def test_every_endpoint_has_default_payload():
    assert set(ENDPOINTS) == set(DEFAULT_PAYLOADS)


@pytest.mark.parametrize("value,expected", [
    (None, ""),
    (True, "true"),
    (False, "false"),
    (Decimal("10.50"), "10.50"),
    (1700000000000, "1700000000000"),
    ("abc", "abc"),
    (JsonNumber("1e3"), "1e3"),
    (JsonNumber("1.0E2"), "1.0E2"),
    (JsonNumber("1700000000000"), "1700000000000"),
])
def test_stringify_value(value, expected):
    assert stringify_value(value) == expected


def test_extract_signed_fields_normalizes_nulls():
    fields = extract_signed_fields(CHECK_PAYMENT_STATUS, DEFAULT_PAYLOADS["/payment/check-payment-status"])
    assert fields == {
        "request_id": "5f0c6b1e-8a4d-4c1e-9d0b-2a7f3e9c1d42",
        "transaction_id": "",
        "amount": "10.50",
        "payment_timestamp": "",
        "reference_no": "INV_1001",
        "description": "Order 1001",
        "is_paid": "false",
        "response_timestamp": "1700000000000",
    }


def test_extract_signed_fields_ignores_unsigned_keys():
    data = dict(DEFAULT_PAYLOADS["/info/check-wallet"], note="unsigned")
    assert "note" not in extract_signed_fields(CHECK_WALLET, data)


def test_extract_signed_fields_requires_non_nullable():
    data = dict(DEFAULT_PAYLOADS["/payment/send-money"])
    del data["sender_fee"]
    with pytest.raises(MalformedFieldError) as exc_info:
        extract_signed_fields(SEND_MONEY, data)
    assert exc_info.value.details["field"] == "sender_fee"
    assert exc_info.value.error_code == "gpay:response:malformed_field"


def test_extract_signed_fields_rejects_null_required():
    data = dict(DEFAULT_PAYLOADS["/payment/send-money"], transaction_id=None)
    with pytest.raises(MalformedFieldError):
        extract_signed_fields(SEND_MONEY, data)


def test_missing_nullable_field_becomes_empty():
    data = dict(DEFAULT_PAYLOADS["/payment/send-money"])
    del data["reference_no"]
    assert extract_signed_fields(SEND_MONEY, data)["reference_no"] == ""


def test_json_number_is_a_decimal():
    number = JsonNumber("1e3")
    assert number == Decimal("1000")
    assert number + 1 == Decimal("1001")
