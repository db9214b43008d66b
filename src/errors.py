"""Error families for each processing layer.

Parse errors come from turning a raw record into a Transaction, ledger errors
from applying a Transaction, and stream errors from opening or reading an
input file. Per-record errors are logged and skipped; stream errors are fatal.
"""
from decimal import Decimal
from typing import List


class TransactionParseError(Exception):
    """Raised when a raw record cannot be turned into a Transaction."""


class TooFewFields(TransactionParseError):
    def __init__(self, fields: List[str]):
        self.fields = fields
        super().__init__(f"Too few fields: {fields}")


class UnknownTxType(TransactionParseError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Unknown transaction type: {value}")


class FieldParseError(TransactionParseError):
    def __init__(self, field: str, cause: Exception):
        self.field = field
        self.cause = cause
        super().__init__(f"Failed to parse {field}: {cause}")


class LedgerError(Exception):
    """Raised when a transaction cannot be applied. The ledger is left unchanged."""


class ClientNotFound(LedgerError):
    def __init__(self, client_id: int):
        self.client_id = client_id
        super().__init__(f"Client {client_id} not found")


class MalformedRequest(LedgerError):
    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"Malformed transaction request (tx {transaction_id})")


class NotEnoughFunds(LedgerError):
    def __init__(self, client: int, requested: Decimal, available: Decimal):
        self.client = client
        self.requested = requested
        self.available = available
        super().__init__(f"Client {client}: insufficient funds (requested {requested}, available {available})")


class InvalidDispute(LedgerError):
    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"Invalid dispute for tx {transaction_id}")


class AccountLocked(LedgerError):
    def __init__(self, client_id: int):
        self.client_id = client_id
        super().__init__(f"Client {client_id}: account is locked")


class StreamError(Exception):
    """Raised when an input stream cannot be opened or read."""

    def __init__(self, source: str, cause: Exception):
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to read '{source}': {cause}")
