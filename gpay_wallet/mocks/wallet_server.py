"""
Mock Wallet Server

In-process stand-in for the GPay wallet API. It checks request
signatures exactly as the real server does, answers each endpoint with
a canned payload and signs the response with a fresh salt.

MockWalletAdapter plugs the server into requests, so a GPayClient can be
exercised end to end without network access:

    server = MockWalletServer(credentials)
    client = GPayClient(credentials, session=server.session())

Test hooks:
- payloads: per-path response data, editable before a call
- tamper: callback(data, headers) run after signing, to corrupt a response
- force_status: reply with this HTTP status instead of handling the call
- received: every verified request field set, in order
"""
import copy
import hmac
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from ..crypto import decode_digest, encode_digest, generate_salt
from ..models.credentials import Credentials
from ..models.signatures import (
    AUTHORIZATION_HEADER,
    SALT_HEADER,
    SIGNATURE_HEADER,
    SignatureEncoding,
)
from ..services.endpoints import ENDPOINTS, Endpoint, extract_signed_fields
from ..services.signature_service import compute_signature

logger = logging.getLogger(__name__)


RESPONSE_TIMESTAMP = 1700000000000

DEFAULT_PAYLOADS: Dict[str, Dict[str, Any]] = {
    "/info/balance": {
        "balance": "1250.75",
        "response_timestamp": RESPONSE_TIMESTAMP,
    },
    "/payment/create-payment-request": {
        "requester_username": "merchant_demo",
        "request_id": "5f0c6b1e-8a4d-4c1e-9d0b-2a7f3e9c1d42",
        "request_time": 1699999999000,
        "amount": "10.50",
        "reference_no": None,
        "response_timestamp": RESPONSE_TIMESTAMP,
    },
    "/payment/check-payment-status": {
        "request_id": "5f0c6b1e-8a4d-4c1e-9d0b-2a7f3e9c1d42",
        "transaction_id": None,
        "amount": "10.50",
        "payment_timestamp": None,
        "reference_no": "INV_1001",
        "description": "Order 1001",
        "is_paid": False,
        "response_timestamp": RESPONSE_TIMESTAMP,
    },
    "/payment/send-money": {
        "amount": "25.00",
        "sender_fee": "0.25",
        "transaction_id": "b7e2d4a0-1c3f-4e5a-8b9d-0f1e2d3c4b5a",
        "old_balance": "1250.75",
        "new_balance": "1225.50",
        "timestamp": 1699999999500,
        "reference_no": "RENT_NOV",
        "response_timestamp": RESPONSE_TIMESTAMP,
    },
    "/info/statement": {
        "available_balance": "1225.50",
        "outstanding_credit": "0.00",
        "outstanding_debit": "10.00",
        "day_balance": "1225.50",
        "day_total_in": "100.00",
        "day_total_out": "25.25",
        "response_timestamp": RESPONSE_TIMESTAMP,
        "day_statement": [
            {
                "transaction_id": "b7e2d4a0-1c3f-4e5a-8b9d-0f1e2d3c4b5a",
                "datetime": "2023-11-14 22:13:19",
                "timestamp": 1699999999500,
                "description": "Transfer to landlord",
                "amount": "-25.00",
                "balance": "1225.75",
                "reference_no": "RENT_NOV",
                "op_type_id": 1,
                "status": 1,
                "created_at": 1699999999500,
            },
            {
                "transaction_id": "c1d2e3f4-0000-4000-8000-000000000001",
                "datetime": "2023-11-14 22:13:19",
                "timestamp": 1699999999500,
                "description": "Transfer fee",
                "amount": "-0.25",
                "balance": "1225.50",
                "reference_no": None,
                "op_type_id": 5,
                "status": 2,
                "created_at": 1699999999500,
            },
        ],
    },
    "/info/check-wallet": {
        "exists": True,
        "wallet_gateway_id": "9a8b7c6d-5e4f-4a3b-2c1d-0e9f8a7b6c5d",
        "wallet_name": "Tripoli Books",
        "user_account_name": "Salem Ali",
        "can_receive_money": True,
        "response_timestamp": RESPONSE_TIMESTAMP,
    },
    "/info/outstanding-transactions": {
        "outstanding_credit": "0.00",
        "outstanding_debit": "10.00",
        "response_timestamp": RESPONSE_TIMESTAMP,
        "outstanding_transactions": [
            {
                "transaction_id": "d4c3b2a1-0000-4000-8000-000000000002",
                "datetime": "2023-11-14 20:00:00",
                "timestamp": 1699992000000,
                "description": "Bank withdrawal",
                "amount": "-10.00",
                "balance": None,
                "reference_no": None,
                "op_type_id": 4,
                "status": 0,
                "created_at": 1699992000000,
            },
        ],
    },
}


@dataclass
class MockReply:
    """HTTP reply produced by the mock server."""
    status_code: int
    headers: Dict[str, str]
    body: str


class MockWalletServer:
    """Wallet API counter-party sharing credentials with the client under test."""

    def __init__(
        self,
        credentials: Credentials,
        request_signature_encoding: SignatureEncoding = "base64",
        response_signature_encoding: SignatureEncoding = "hex",
    ):
        self.credentials = credentials
        self.request_signature_encoding = request_signature_encoding
        self.response_signature_encoding = response_signature_encoding
        self.payloads = copy.deepcopy(DEFAULT_PAYLOADS)
        self.received: List[Dict[str, str]] = []
        self.received_headers: List[Dict[str, str]] = []
        self.tamper: Optional[Callable[[Dict[str, Any], Dict[str, str]], None]] = None
        self.force_status: Optional[int] = None

    def session(self) -> requests.Session:
        """A requests.Session with this server mounted for all URLs."""
        session = requests.Session()
        adapter = MockWalletAdapter(self)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    # ------------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------------

    def _error(self, status_code: int, message: str) -> MockReply:
        body = json.dumps({"status": "error", "message": message})
        return MockReply(status_code, {"Content-Type": "application/json"}, body)

    def verify_request(self, headers: Dict[str, str], fields: Dict[str, str]) -> bool:
        """Server-side check of an inbound request signature."""
        lookup = CaseInsensitiveDict(headers)
        salt = lookup.get(SALT_HEADER)
        received = lookup.get(SIGNATURE_HEADER)
        if not salt or not received:
            return False

        received_digest = decode_digest(received, self.request_signature_encoding)
        if received_digest is None:
            return False
        expected = compute_signature(salt, fields, self.credentials)
        return hmac.compare_digest(expected, received_digest)

    def sign_response(self, endpoint: Endpoint, data: Dict[str, Any]) -> Dict[str, str]:
        """Salt and signature headers for a response payload."""
        salt = generate_salt()
        fields = extract_signed_fields(endpoint, data)
        digest = compute_signature(salt, fields, self.credentials)
        return {
            SALT_HEADER: salt,
            SIGNATURE_HEADER: encode_digest(digest, self.response_signature_encoding),
        }

    def handle(self, path: str, headers: Dict[str, str], body: Optional[bytes]) -> MockReply:
        """Process one POST and produce the reply."""
        if self.force_status is not None:
            return self._error(self.force_status, "Forced failure")

        endpoint = next(
            (ep for ep_path, ep in ENDPOINTS.items() if path.endswith(ep_path)),
            None
        )
        if endpoint is None:
            return self._error(404, f"Unknown endpoint {path}")

        lookup = CaseInsensitiveDict(headers)
        if lookup.get(AUTHORIZATION_HEADER) != f"Bearer {self.credentials.api_key}":
            return self._error(401, "Invalid API key")

        try:
            fields = json.loads(body or b"{}")
        except ValueError:
            return self._error(400, "Body is not JSON")

        if not self.verify_request(headers, fields):
            logger.warning(f"Mock server rejected request signature for {endpoint.name}")
            return self._error(401, "Invalid request signature")

        self.received.append(fields)
        self.received_headers.append(dict(headers))

        data = copy.deepcopy(self.payloads[endpoint.path])
        response_headers = {"Content-Type": "application/json"}
        response_headers.update(self.sign_response(endpoint, data))

        if self.tamper is not None:
            self.tamper(data, response_headers)

        body_text = json.dumps({"status": "success", "data": data})
        return MockReply(200, response_headers, body_text)


class MockWalletAdapter(BaseAdapter):
    """requests transport adapter that routes every request to a MockWalletServer."""

    def __init__(self, server: MockWalletServer):
        super().__init__()
        self.server = server

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        body = request.body
        if isinstance(body, str):
            body = body.encode("utf-8")

        reply = self.server.handle(urlparse(request.url).path, dict(request.headers), body)
        return build_response(request, reply.status_code, reply.headers, reply.body)

    def close(self):
        pass


def build_response(
    request: requests.PreparedRequest,
    status_code: int,
    headers: Dict[str, str],
    body: str
) -> requests.Response:
    """Assemble a requests.Response from raw parts."""
    response = requests.Response()
    response.status_code = status_code
    response.headers = CaseInsensitiveDict(headers)
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    response.url = request.url
    response.request = request
    response.reason = "OK" if status_code < 400 else "Error"
    return response

