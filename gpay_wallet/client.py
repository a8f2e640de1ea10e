"""
GPay Wallet API Client

Signs every request, verifies every response and returns parsed models.

Authentication:
- API key: Bearer token in the Authorization header
- Shared secret: HMAC-SHA256 key for request and response signatures
- Password: concatenated with a per-request random salt (hash token)

Usage:
    credentials = Credentials(api_key=..., shared_secret=..., password=...)
    with GPayClient(credentials, environment="staging") as client:
        balance = client.get_wallet_balance()

A response whose signature does not verify raises VerificationFailedError;
its data is never returned.
"""
import logging
import re
import time
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

import requests
from dateutil import parser as date_parser
from pydantic import ValidationError

from .config import BASE_URLS, DEFAULT_LANGUAGE, Settings
from .exceptions import (
    ConfigurationError,
    InvalidRequestError,
    MalformedFieldError,
    TransportError,
    VerificationFailedError,
)
from .models.base import WalletModel
from .models.credentials import Credentials
from .models.payments import PaymentRequest, PaymentStatus, SendMoneyResult
from .models.signatures import SignatureEncoding
from .models.statements import OutstandingTransactions, Statement
from .models.wallet import Balance, WalletCheck
from .services import endpoints
from .services.endpoints import Endpoint, JsonNumber, extract_signed_fields
from .services.signature_service import build_request_headers, sign_request, verify_response

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=WalletModel)

AmountLike = Union[Decimal, int, str]

REFERENCE_NO_PATTERN = re.compile(r"^[A-Za-z0-9 _]*$")
DESCRIPTION_MAX_LENGTH = 255
SIGNING_SEPARATORS = ("&", "=")


# ============================================================================
# Outbound Parameter Validation
# ============================================================================

def _format_amount(amount: AmountLike) -> str:
    """Positive decimal amount as plain text (e.g. "10.50")."""
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation as e:
        raise InvalidRequestError(f"Amount is not a decimal number: {amount!r}") from e

    if not value.is_finite() or value <= 0:
        raise InvalidRequestError(f"Amount must be a positive number: {amount!r}")
    return str(value)


def _check_no_separators(name: str, value: str) -> str:
    """Signed values are not escaped, so '&' and '=' are refused outright."""
    if any(sep in value for sep in SIGNING_SEPARATORS):
        raise InvalidRequestError(
            f"{name} must not contain '&' or '='",
            {"field": name}
        )
    return value


def _format_reference_no(reference_no: Optional[str]) -> str:
    if reference_no is None:
        return ""
    if not REFERENCE_NO_PATTERN.match(reference_no):
        raise InvalidRequestError(
            "reference_no may only contain letters, digits, spaces and underscores",
            {"field": "reference_no"}
        )
    return reference_no


def _format_description(description: Optional[str]) -> str:
    if description is None:
        return ""
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise InvalidRequestError(
            f"description exceeds {DESCRIPTION_MAX_LENGTH} characters",
            {"field": "description", "length": len(description)}
        )
    return _check_no_separators("description", description)


def _format_identifier(name: str, value: str) -> str:
    if not value:
        raise InvalidRequestError(f"{name} is required", {"field": name})
    return _check_no_separators(name, value)


def _format_statement_date(value: Union[date, str]) -> str:
    """Normalize a statement date to YYYY-MM-DD."""
    if isinstance(value, date):
        return value.isoformat()[:10]
    try:
        return date_parser.isoparse(value).date().isoformat()
    except (TypeError, ValueError) as e:
        raise InvalidRequestError(
            f"Statement date must be YYYY-MM-DD: {value!r}",
            {"field": "date"}
        ) from e


# ============================================================================
# Client
# ============================================================================

class GPayClient:
    """
    Client for the GPay online wallet API.

    Every method issues one signed POST and returns a verified model.
    The client holds only immutable configuration and a requests.Session,
    so one instance can be shared between threads.
    """

    def __init__(
        self,
        credentials: Credentials,
        environment: str = "staging",
        base_url: Optional[str] = None,
        language: Optional[str] = None,
        timeout: float = 30.0,
        request_signature_encoding: SignatureEncoding = "base64",
        response_signature_encoding: SignatureEncoding = "hex",
        strict_enums: bool = False,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.time,
    ):
        if not credentials.shared_secret.get_secret_value():
            raise ConfigurationError("Shared secret is required")
        if base_url is None and environment not in BASE_URLS:
            raise ConfigurationError(
                f"Unknown environment: {environment}",
                {"environment": environment}
            )

        self.credentials = credentials
        self.base_url = (base_url or BASE_URLS[environment]).rstrip("/")
        self.language = language or DEFAULT_LANGUAGE
        self.timeout = timeout
        self.request_signature_encoding = request_signature_encoding
        self.response_signature_encoding = response_signature_encoding
        self.strict_enums = strict_enums
        self.session = session or requests.Session()
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "GPayClient":
        """Build a client from Settings; keyword arguments override."""
        options = {
            "base_url": settings.resolved_base_url(),
            "language": settings.language,
            "timeout": settings.timeout_seconds,
            "request_signature_encoding": settings.request_signature_encoding,
            "response_signature_encoding": settings.response_signature_encoding,
            "strict_enums": settings.strict_enums,
        }
        options.update(kwargs)
        return cls(Credentials.from_settings(settings), **options)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GPayClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"GPayClient(base_url={self.base_url!r}, language={self.language!r})"

    # ------------------------------------------------------------------------
    # Request pipeline
    # ------------------------------------------------------------------------

    def _request_timestamp(self) -> str:
        return str(int(self._clock() * 1000))

    def _post(self, endpoint: Endpoint, params: Dict[str, str]) -> requests.Response:
        """Sign params and POST them; the signed dict is the JSON body."""
        fields = dict(params)
        fields["request_timestamp"] = self._request_timestamp()

        signed = sign_request(fields, self.credentials, self.request_signature_encoding)
        headers = build_request_headers(signed, self.credentials, self.language)

        url = f"{self.base_url}{endpoint.path}"
        logger.debug(f"POST {endpoint.path} ({endpoint.name})")

        try:
            response = self.session.post(url, json=fields, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{endpoint.name} transport failure: {type(e).__name__}")
            raise TransportError(
                f"Request to {endpoint.path} failed: {e}",
                {"endpoint": endpoint.name}
            ) from e

        if not response.ok:
            logger.error(f"{endpoint.name} returned HTTP {response.status_code}")
            raise TransportError(
                f"HTTP error: {response.status_code} - {response.reason}",
                {"endpoint": endpoint.name, "status_code": response.status_code}
            )

        return response

    def _parse_data(self, endpoint: Endpoint, response: requests.Response) -> Dict[str, Any]:
        try:
            payload = response.json(parse_float=JsonNumber, parse_int=JsonNumber)
        except ValueError as e:
            raise MalformedFieldError(
                f"Response for {endpoint.name} is not valid JSON",
                {"endpoint": endpoint.name}
            ) from e

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise MalformedFieldError(
                f"Response for {endpoint.name} has no data object",
                {"endpoint": endpoint.name}
            )
        return data

    def _verified_data(self, endpoint: Endpoint, response: requests.Response) -> Dict[str, Any]:
        """Return the response data object only if its signature verifies."""
        data = self._parse_data(endpoint, response)
        fields = extract_signed_fields(endpoint, data)

        if not verify_response(
            self.credentials,
            response.headers,
            fields,
            self.response_signature_encoding
        ):
            raise VerificationFailedError(
                f"Response verification failed for {endpoint.name}",
                {"endpoint": endpoint.name}
            )

        logger.debug(f"{endpoint.name} response verified")
        return data

    def _call(self, endpoint: Endpoint, params: Dict[str, str], model: Type[ModelT]) -> ModelT:
        response = self._post(endpoint, params)
        data = self._verified_data(endpoint, response)
        try:
            return model.model_validate(data, context={"strict_enums": self.strict_enums})
        except (ValidationError, ArithmeticError, ValueError) as e:
            raise MalformedFieldError(
                f"Response for {endpoint.name} has an unparseable value",
                {"endpoint": endpoint.name}
            ) from e

    # ------------------------------------------------------------------------
    # Wallet info
    # ------------------------------------------------------------------------

    def get_wallet_balance(self) -> Balance:
        """Retrieve the current wallet balance."""
        return self._call(endpoints.BALANCE, {}, Balance)

    def get_statement(self, statement_date: Union[date, str]) -> Statement:
        """
        Retrieve the statement for one day.

        Args:
            statement_date: date or "YYYY-MM-DD" string

        Returns:
            Statement with day balances and transactions
        """
        params = {"date": _format_statement_date(statement_date)}
        return self._call(endpoints.STATEMENT, params, Statement)

    def check_wallet(self, wallet_gateway_id: str) -> WalletCheck:
        """Check whether a wallet exists and can receive money."""
        params = {"wallet_gateway_id": _format_identifier("wallet_gateway_id", wallet_gateway_id)}
        return self._call(endpoints.CHECK_WALLET, params, WalletCheck)

    def get_outstanding_transactions(self) -> OutstandingTransactions:
        """Retrieve outstanding credits, debits and the transactions behind them."""
        return self._call(endpoints.OUTSTANDING_TRANSACTIONS, {}, OutstandingTransactions)

    # ------------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------------

    def create_payment_request(
        self,
        amount: AmountLike,
        reference_no: Optional[str] = None,
        description: Optional[str] = None
    ) -> PaymentRequest:
        """
        Create a payment request for another wallet to pay.

        Args:
            amount: Positive decimal amount
            reference_no: Optional reference (letters, digits, spaces, underscores)
            description: Optional description, at most 255 characters

        Returns:
            PaymentRequest with the server-assigned request_id
        """
        params = {
            "amount": _format_amount(amount),
            "reference_no": _format_reference_no(reference_no),
            "description": _format_description(description),
        }
        return self._call(endpoints.CREATE_PAYMENT_REQUEST, params, PaymentRequest)

    def check_payment_status(self, request_id: str) -> PaymentStatus:
        """Check whether a payment request has been paid."""
        params = {"request_id": _format_identifier("request_id", request_id)}
        return self._call(endpoints.CHECK_PAYMENT_STATUS, params, PaymentStatus)

    def send_money(
        self,
        amount: AmountLike,
        wallet_gateway_id: str,
        reference_no: Optional[str] = None,
        description: Optional[str] = None
    ) -> SendMoneyResult:
        """
        Send money to another wallet.

        Args:
            amount: Positive decimal amount
            wallet_gateway_id: Recipient wallet gateway ID
            reference_no: Optional reference
            description: Optional description

        Returns:
            SendMoneyResult with fee and balances before and after
        """
        params = {
            "amount": _format_amount(amount),
            "wallet_gateway_id": _format_identifier("wallet_gateway_id", wallet_gateway_id),
            "reference_no": _format_reference_no(reference_no),
            "description": _format_description(description),
        }
        return self._call(endpoints.SEND_MONEY, params, SendMoneyResult)
