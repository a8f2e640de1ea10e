"""
Wallet Enumerations

Operation types and transaction statuses carried as integer codes in
statement and outstanding transaction payloads.

Unknown codes degrade to UNKNOWN by default so a new server-side status
does not fail the whole response parse. Pass strict=True to raise
UnknownDiscriminantError instead.
"""
from enum import IntEnum
import logging

from ..exceptions import UnknownDiscriminantError

logger = logging.getLogger(__name__)


class _WalletCode(IntEnum):
    """Shared lookup for integer-coded wallet enums."""

    @classmethod
    def from_value(cls, value, strict: bool = False):
        """
        Resolve a server code to a member.

        Args:
            value: Integer code (ints or numeric strings accepted)
            strict: Raise on unknown codes instead of returning UNKNOWN

        Returns:
            Matching member, or UNKNOWN

        Raises:
            UnknownDiscriminantError: If strict and the code is not recognised
        """
        if isinstance(value, cls):
            return value

        try:
            code = int(value)
        except (TypeError, ValueError):
            code = None

        if code is not None and code != cls.UNKNOWN.value:
            try:
                return cls(code)
            except ValueError:
                pass

        if strict:
            raise UnknownDiscriminantError(
                f"Unknown {cls.__name__} value: {value}",
                {"enum": cls.__name__, "value": value}
            )

        logger.warning(f"Unknown {cls.__name__} value {value!r}, using UNKNOWN")
        return cls.UNKNOWN


class OperationType(_WalletCode):
    """Kind of wallet operation behind a transaction."""
    UNKNOWN = -1
    DIRECT_TRANSFER = 1
    PAYMENT_REQUEST = 2
    BANK_DEPOSIT = 3
    BANK_WITHDRAW = 4
    TRANSACTION_FEE = 5
    LOCAL_TRANSFER = 6


class TransactionStatus(_WalletCode):
    """Settlement state of a transaction."""
    UNKNOWN = -1
    PENDING = 0
    COMPLETED = 1
    APPLIED = 2
