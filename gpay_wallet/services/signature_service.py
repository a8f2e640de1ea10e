"""
Signature Service for GPay Request Signing and Response Verification

Implements the salted HMAC-SHA256 scheme shared with the wallet server:

    signature = HMAC-SHA256(shared_secret, salt + password + canonical(fields))

Outbound: a fresh salt is generated per request and sent with the
signature in X-Signature-Salt / X-Signature-Hash.
Inbound: the server's salt and signature are read from the same headers
and the signature is recomputed over the endpoint's signed field subset.

Nothing here keeps state between calls; credentials are passed in
explicitly each time.
"""
import hmac
import logging
from typing import Dict, Mapping, Optional

from requests.structures import CaseInsensitiveDict

from ..crypto import (
    build_signing_string,
    decode_digest,
    derive_hash_token,
    encode_digest,
    generate_salt,
    hmac_sha256,
    is_valid_salt,
)
from ..config import DEFAULT_LANGUAGE
from ..models.credentials import Credentials
from ..models.signatures import (
    AUTHORIZATION_HEADER,
    LANGUAGE_HEADER,
    SALT_HEADER,
    SIGNATURE_HEADER,
    SignatureEncoding,
    SignedRequest,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Signing
# ============================================================================

def compute_signature(
    salt: str,
    fields: Mapping[str, Optional[str]],
    credentials: Credentials
) -> bytes:
    """
    Compute the raw HMAC-SHA256 digest for a salt and field set.

    Args:
        salt: Base64 salt (generated locally or taken from a response)
        fields: Signed field name to value mapping
        credentials: Caller credentials

    Returns:
        32-byte digest
    """
    hash_token = derive_hash_token(salt, credentials.password.get_secret_value())
    message = build_signing_string(hash_token, fields)
    return hmac_sha256(
        message.encode("utf-8"),
        credentials.shared_secret.get_secret_value()
    )


def sign_request(
    fields: Mapping[str, Optional[str]],
    credentials: Credentials,
    encoding: SignatureEncoding = "base64"
) -> SignedRequest:
    """
    Sign an outbound request.

    Args:
        fields: Request parameters; the same mapping must be sent as the body
        credentials: Caller credentials
        encoding: Wire encoding of the signature ("base64" or "hex")

    Returns:
        SignedRequest with the new salt and the signature

    Raises:
        RandomnessUnavailableError: If no salt can be generated
        ConfigurationError: If the shared secret is missing
    """
    salt = generate_salt()
    digest = compute_signature(salt, fields, credentials)
    return SignedRequest(
        salt=salt,
        signature=encode_digest(digest, encoding)
    )


def build_request_headers(
    signed: SignedRequest,
    credentials: Credentials,
    language: Optional[str] = None
) -> Dict[str, str]:
    """Full header set for a signed request: bearer key, language, salt, signature."""
    headers = {
        AUTHORIZATION_HEADER: f"Bearer {credentials.api_key}",
        LANGUAGE_HEADER: language or DEFAULT_LANGUAGE,
    }
    headers.update(signed.to_headers())
    return headers


# ============================================================================
# Verification
# ============================================================================

def verify_response(
    credentials: Credentials,
    headers: Mapping[str, str],
    fields: Mapping[str, Optional[str]],
    encoding: SignatureEncoding = "hex"
) -> bool:
    """
    Verify a response signature.

    Args:
        credentials: Caller credentials
        headers: Response headers (looked up case-insensitively)
        fields: The endpoint's signed response fields, nulls as "" or None
        encoding: Encoding the server used for X-Signature-Hash

    Returns:
        True if the signature matches, False otherwise (including missing
        or malformed salt/signature headers)

    Uses constant-time comparison on the decoded digests, so hex case
    does not matter.
    """
    lookup = CaseInsensitiveDict(headers)
    salt = lookup.get(SALT_HEADER)
    received = lookup.get(SIGNATURE_HEADER)

    if not salt or not received:
        logger.warning("Response is missing signature headers")
        return False

    if not is_valid_salt(salt):
        logger.warning("Response salt header is not valid Base64")
        return False

    received_digest = decode_digest(received.strip(), encoding)
    if received_digest is None:
        logger.warning(f"Response signature header is not a valid {encoding} SHA-256 digest")
        return False

    expected_digest = compute_signature(salt, fields, credentials)

    # Constant-time comparison
    if not hmac.compare_digest(expected_digest, received_digest):
        logger.warning(f"Response signature mismatch over fields {sorted(fields)}")
        return False

    return True
