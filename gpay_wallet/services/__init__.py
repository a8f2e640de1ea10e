"""
GPay services package.

Request signing, response verification and the endpoint catalogue.
"""
from .endpoints import ENDPOINTS, Endpoint, JsonNumber, extract_signed_fields, stringify_value
from .signature_service import (
    build_request_headers,
    compute_signature,
    sign_request,
    verify_response,
)

__all__ = [
    "ENDPOINTS",
    "Endpoint",
    "JsonNumber",
    "extract_signed_fields",
    "stringify_value",
    "build_request_headers",
    "compute_signature",
    "sign_request",
    "verify_response",
]
