"""
Cryptographic Primitives for GPay Request Signing

Salt generation, hash token derivation, canonical field encoding and
HMAC-SHA256 signing. Everything here is a pure function of its inputs
(apart from generate_salt's random source) and safe to call from many
threads at once.

Signing string layout:
    {salt}{password}key1=val1&key2=val2&...&keyN=valN

Keys are sorted by code point. Values are not escaped, so a value that
contains '&' or '=' can collide with a different field set. Signed
free-text fields are therefore validated before they get here.
"""
import base64
import binascii
import hashlib
import hmac
import os
from typing import Mapping, Optional

from .exceptions import ConfigurationError, RandomnessUnavailableError


SALT_BYTES = 32
DIGEST_BYTES = hashlib.sha256().digest_size


# ============================================================================
# Salt and Hash Token
# ============================================================================

def generate_salt() -> str:
    """
    Generate a fresh single-use salt.

    Returns:
        32 bytes from the operating system CSPRNG, Base64 encoded

    Raises:
        RandomnessUnavailableError: If the OS random source is unavailable
    """
    try:
        raw = os.urandom(SALT_BYTES)
    except (NotImplementedError, OSError) as e:
        raise RandomnessUnavailableError(
            "Secure random source unavailable, refusing to sign",
            {"reason": type(e).__name__}
        ) from e
    return base64.b64encode(raw).decode("ascii")


def derive_hash_token(salt: str, password: str) -> str:
    """Bind salt and password into the per-request token (plain concatenation)."""
    return salt + password


# ============================================================================
# Canonical Encoding
# ============================================================================

def canonical_encode(fields: Mapping[str, Optional[str]]) -> str:
    """
    Serialize a field mapping into its canonical signing form.

    Ensures consistent serialization:
    - Keys sorted by code point (locale independent)
    - None values encode as empty string, the key is kept
    - Pairs joined with '&', no leading or trailing separator

    Args:
        fields: Field name to string value (or None)

    Returns:
        Canonical string, "" for an empty mapping
    """
    return "&".join(
        f"{name}={'' if fields[name] is None else fields[name]}"
        for name in sorted(fields)
    )


def build_signing_string(hash_token: str, fields: Mapping[str, Optional[str]]) -> str:
    """Prepend the hash token to the canonical field encoding."""
    return hash_token + canonical_encode(fields)


# ============================================================================
# HMAC-SHA256
# ============================================================================

def hmac_sha256(data: bytes, secret: str) -> bytes:
    """
    Compute HMAC-SHA256 of data keyed by secret.

    Raises:
        ConfigurationError: If the secret is missing or empty
    """
    if not secret:
        raise ConfigurationError("Shared secret is not configured, cannot sign")
    return hmac.new(secret.encode("utf-8"), data, hashlib.sha256).digest()


def to_hex(digest: bytes) -> str:
    """Lowercase hex presentation (64 chars for SHA-256)."""
    return digest.hex()


def to_base64(digest: bytes) -> str:
    """Standard Base64 presentation with padding."""
    return base64.b64encode(digest).decode("ascii")


def encode_digest(digest: bytes, encoding: str) -> str:
    """Present a digest in the named wire encoding ("hex" or "base64")."""
    if encoding == "hex":
        return to_hex(digest)
    if encoding == "base64":
        return to_base64(digest)
    raise ConfigurationError(
        f"Unsupported signature encoding: {encoding}",
        {"encoding": encoding}
    )


def decode_digest(value: str, encoding: str) -> Optional[bytes]:
    """
    Parse a received signature back to raw digest bytes.

    Hex is accepted in either case. Returns None when the value is not
    well-formed in the given encoding or has the wrong length.
    """
    try:
        if encoding == "hex":
            raw = bytes.fromhex(value)
        elif encoding == "base64":
            raw = base64.b64decode(value.encode("ascii"), validate=True)
        else:
            raise ConfigurationError(
                f"Unsupported signature encoding: {encoding}",
                {"encoding": encoding}
            )
    except (ValueError, binascii.Error):
        return None

    if len(raw) != DIGEST_BYTES:
        return None
    return raw


def is_valid_salt(salt: str) -> bool:
    """True when salt is non-empty, well-formed Base64."""
    if not salt:
        return False
    try:
        base64.b64decode(salt.encode("ascii"), validate=True)
    except (ValueError, binascii.Error):
        return False
    return True
