import re
from decimal import Decimal, InvalidOperation, getcontext
from typing import Sequence

from errors import FieldParseError, TooFewFields, UnknownTxType
from models import Transaction, TransactionType

CLIENT_ID_BITS = 16
TRANSACTION_ID_BITS = 32

_UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")


def parse_record(record: Sequence[str]) -> Transaction:
    """
    Parse one CSV record (type, client, tx[, amount]) into a Transaction.

    Fields are matched by position and whitespace-trimmed. A missing or empty
    amount yields amount=None; deposits and withdrawals without an amount are
    rejected later by the ledger, not here.

    Raises:
        TooFewFields: fewer than 3 fields
        UnknownTxType: type is not one of the five known kinds
        FieldParseError: client, tx or amount is not a valid number
    """
    fields = [field.strip() for field in record]

    if len(fields) < 3:
        raise TooFewFields(fields)

    transaction_type = _parse_type(fields[0])
    client_id = _parse_unsigned(fields[1], "client_id", CLIENT_ID_BITS)
    transaction_id = _parse_unsigned(fields[2], "tx_id", TRANSACTION_ID_BITS)

    amount = None
    if len(fields) >= 4 and fields[3]:
        amount = _parse_amount(fields[3])

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def _parse_type(value: str) -> TransactionType:
    try:
        return TransactionType(value.lower())
    except ValueError:
        raise UnknownTxType(value.lower()) from None


def _parse_unsigned(value: str, field: str, bits: int) -> int:
    if not _UNSIGNED_PATTERN.fullmatch(value):
        raise FieldParseError(field, ValueError(f"invalid unsigned integer {value!r}"))

    number = int(value)
    if number >= 2 ** bits:
        raise FieldParseError(field, ValueError(f"{value} does not fit in {bits} bits"))
    return number


def _parse_amount(value: str) -> Decimal:
    if "_" in value:
        raise FieldParseError("amount", ValueError(f"invalid decimal {value!r}"))

    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise FieldParseError("amount", ValueError(f"invalid decimal {value!r}")) from None

    if not amount.is_finite():
        raise FieldParseError("amount", ValueError(f"amount must be finite, got {value!r}"))

    # Amounts stay within half the context exponent range so balance sums cannot overflow.
    if amount.adjusted() > getcontext().Emax // 2:
        raise FieldParseError("amount", ValueError(f"amount out of range: {value!r}"))
    return amount
