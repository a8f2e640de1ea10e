from unittest.mock import patch

import pytest

from gpay_wallet.models.credentials import Credentials
from gpay_wallet.services.signature_service import (
    build_request_headers,
    compute_signature,
    sign_request,
    verify_response,
)

from signing_vectors import FIXED_SALT, SCENARIO_BASE64, SCENARIO_FIELDS, SCENARIO_HEX


def _flip(value: str) -> str:
    """Change the first character to a different character of the same alphabet."""
    replacement = "b" if value[0] != "b" else "c"
    return replacement + value[1:]


# ============================================================================
# Signing properties
# ============================================================================

def test_signing_is_deterministic(credentials):
    first = compute_signature(FIXED_SALT, SCENARIO_FIELDS, credentials)
    second = compute_signature(FIXED_SALT, SCENARIO_FIELDS, credentials)
    assert first == second
    assert first.hex() == SCENARIO_HEX


@pytest.mark.parametrize("change", [
    lambda f: f.update(amount="10.51"),
    lambda f: f.update(extra="1"),
    lambda f: f.pop("reference_no"),
    lambda f: f.update(reference_no="X"),
])
def test_any_field_change_alters_signature(credentials, change):
    fields = dict(SCENARIO_FIELDS)
    change(fields)
    assert compute_signature(FIXED_SALT, fields, credentials).hex() != SCENARIO_HEX


def test_salt_change_alters_signature(credentials):
    other_salt = "BAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
    assert compute_signature(other_salt, SCENARIO_FIELDS, credentials).hex() != SCENARIO_HEX


def test_insertion_order_does_not_matter(credentials):
    reordered = dict(reversed(list(SCENARIO_FIELDS.items())))
    assert list(reordered) != list(SCENARIO_FIELDS)
    assert compute_signature(FIXED_SALT, reordered, credentials).hex() == SCENARIO_HEX


def test_null_and_empty_sign_identically(credentials):
    with_none = dict(SCENARIO_FIELDS, reference_no=None)
    assert compute_signature(FIXED_SALT, with_none, credentials).hex() == SCENARIO_HEX


def test_sign_request_uses_fresh_salt_and_base64(credentials):
    with patch("gpay_wallet.services.signature_service.generate_salt", return_value=FIXED_SALT):
        signed = sign_request(SCENARIO_FIELDS, credentials)

    assert signed.salt == FIXED_SALT
    assert signed.signature == SCENARIO_BASE64
    assert signed.to_headers() == {
        "X-Signature-Salt": FIXED_SALT,
        "X-Signature-Hash": SCENARIO_BASE64,
    }


def test_sign_request_hex_encoding(credentials):
    with patch("gpay_wallet.services.signature_service.generate_salt", return_value=FIXED_SALT):
        signed = sign_request(SCENARIO_FIELDS, credentials, encoding="hex")
    assert signed.signature == SCENARIO_HEX


def test_consecutive_requests_use_different_salts(credentials):
    first = sign_request(SCENARIO_FIELDS, credentials)
    second = sign_request(SCENARIO_FIELDS, credentials)
    assert first.salt != second.salt
    assert first.signature != second.signature


def test_request_headers(credentials):
    signed = sign_request({}, credentials)
    headers = build_request_headers(signed, credentials, language="ar")

    assert headers["Authorization"] == "Bearer test_api_key_123"
    assert headers["Accept-Language"] == "ar"
    assert headers["X-Signature-Salt"] == signed.salt
    assert headers["X-Signature-Hash"] == signed.signature


@pytest.mark.parametrize("language", [None, ""])
def test_request_headers_default_language(credentials, language):
    signed = sign_request({}, credentials)
    assert build_request_headers(signed, credentials, language)["Accept-Language"] == "en"


def test_credentials_do_not_leak_secrets(credentials):
    text = repr(credentials) + str(credentials)
    assert "s3cr3t" not in text
    assert "p@ss" not in text


# ============================================================================
# Verification
# ============================================================================

def test_round_trip_base64(credentials):
    signed = sign_request(SCENARIO_FIELDS, credentials)
    assert verify_response(credentials, signed.to_headers(), SCENARIO_FIELDS, encoding="base64")


def test_round_trip_hex(credentials):
    signed = sign_request(SCENARIO_FIELDS, credentials, encoding="hex")
    assert verify_response(credentials, signed.to_headers(), SCENARIO_FIELDS, encoding="hex")


def test_pinned_response_verifies(credentials):
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX}
    assert verify_response(credentials, headers, SCENARIO_FIELDS)


def test_hex_comparison_ignores_case(credentials):
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX.upper()}
    assert verify_response(credentials, headers, SCENARIO_FIELDS)


def test_header_names_are_case_insensitive(credentials):
    headers = {"x-signature-salt": FIXED_SALT, "X-SIGNATURE-HASH": SCENARIO_HEX}
    assert verify_response(credentials, headers, SCENARIO_FIELDS)


def test_tampered_signature_fails(credentials):
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": _flip(SCENARIO_HEX)}
    assert verify_response(credentials, headers, SCENARIO_FIELDS) is False


def test_tampered_field_fails(credentials):
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX}
    fields = dict(SCENARIO_FIELDS, amount="100.50")
    assert verify_response(credentials, headers, fields) is False


def test_extra_client_field_fails(credentials):
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX}
    fields = dict(SCENARIO_FIELDS, description="")
    assert verify_response(credentials, headers, fields) is False


@pytest.mark.parametrize("headers", [
    {},
    {"X-Signature-Salt": FIXED_SALT},
    {"X-Signature-Hash": SCENARIO_HEX},
    {"X-Signature-Salt": "", "X-Signature-Hash": SCENARIO_HEX},
    {"X-Signature-Salt": "%%not-base64%%", "X-Signature-Hash": SCENARIO_HEX},
    {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX[:40]},
    {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": "g" * 64},
])
def test_missing_or_malformed_headers_fail(credentials, headers):
    assert verify_response(credentials, headers, SCENARIO_FIELDS) is False


def test_wrong_encoding_fails(credentials):
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX}
    assert verify_response(credentials, headers, SCENARIO_FIELDS, encoding="base64") is False


def test_wrong_password_fails(credentials):
    other = Credentials(api_key="test_api_key_123", shared_secret="s3cr3t", password="other")
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX}
    assert verify_response(other, headers, SCENARIO_FIELDS) is False


def test_wrong_secret_fails(credentials):
    other = Credentials(api_key="test_api_key_123", shared_secret="other", password="p@ss")
    headers = {"X-Signature-Salt": FIXED_SALT, "X-Signature-Hash": SCENARIO_HEX}
    assert verify_response(other, headers, SCENARIO_FIELDS) is False
