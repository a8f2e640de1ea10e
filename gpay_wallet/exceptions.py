"""
GPay Exception Hierarchy

Error codes use the gpay: prefix so callers can branch on a stable string
instead of exception class names.

Secret material (shared secret, password, hash token) must never be placed
in a message or in details.
"""
from typing import Optional, Dict, Any


class GPayError(Exception):
    """
    Base exception for all GPay client errors.

    Every error carries a machine-readable error_code, a human-readable
    message and optional details for diagnostics.
    """

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to an error payload."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class ConfigurationError(GPayError):
    """
    Client configuration is unusable.

    Examples:
    - Shared secret is empty
    - Unknown environment name
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("gpay:config:invalid", message, details)


class RandomnessUnavailableError(GPayError):
    """
    The secure random source could not produce a salt.

    Fatal and never retried. Signing is aborted rather than falling back
    to a weaker source.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("gpay:signing:randomness_unavailable", message, details)


class InvalidRequestError(GPayError):
    """
    Outbound parameter rejected before signing.

    Examples:
    - Non-positive amount
    - Description containing '&' or '='
    - Reference number with characters outside [A-Za-z0-9 _]
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("gpay:request:invalid", message, details)


class TransportError(GPayError):
    """
    HTTP exchange failed.

    Examples:
    - Connection refused or timed out
    - Non-success HTTP status (status_code in details)
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("gpay:transport:failed", message, details)


class VerificationFailedError(GPayError):
    """
    Response signature verification failed.

    Examples:
    - Computed signature does not match X-Signature-Hash
    - Salt or signature header missing or malformed

    Always fatal to the current call: either the transport corrupted the
    payload or the response was forged.
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: str = "gpay:response:verification_failed"
    ):
        super().__init__(error_code, message, details)


class MalformedFieldError(VerificationFailedError):
    """
    A required signed field is absent from the response payload.

    Distinct from a field that is present but null, which normalizes to
    the empty string.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, error_code="gpay:response:malformed_field")


class UnknownDiscriminantError(GPayError):
    """
    Server sent an operation type or transaction status this client does
    not know, and strict enum parsing is enabled.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("gpay:model:unknown_discriminant", message, details)
