"""
Pydantic Signature Models

Header values produced by request signing.
"""
from typing import Dict, Literal

from pydantic import BaseModel, Field


SignatureEncoding = Literal["base64", "hex"]

AUTHORIZATION_HEADER = "Authorization"
LANGUAGE_HEADER = "Accept-Language"
SALT_HEADER = "X-Signature-Salt"
SIGNATURE_HEADER = "X-Signature-Hash"


class SignedRequest(BaseModel):
    """
    Salt and signature for one outbound request.

    Both values are created fresh per call and discarded after the
    request is sent.
    """
    salt: str = Field(description="Base64 encoded 32-byte random salt")
    signature: str = Field(description="HMAC-SHA256 digest in the configured encoding")

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    def to_headers(self) -> Dict[str, str]:
        """Signature headers ready to merge into an HTTP request."""
        return {
            SALT_HEADER: self.salt,
            SIGNATURE_HEADER: self.signature,
        }
