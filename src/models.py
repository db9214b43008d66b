import threading
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class DisputeStatus(Enum):
    UNDISPUTED = "undisputed"
    DISPUTED = "disputed"


@dataclass
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount


@dataclass
class LedgerEntry:
    """Stored deposit or withdrawal, referenced later by dispute/resolve/chargeback."""

    client_id: int
    transaction_type: TransactionType
    amount: Optional[Decimal]
    status: DisputeStatus = DisputeStatus.UNDISPUTED

    @property
    def is_disputed(self) -> bool:
        return self.status is DisputeStatus.DISPUTED


class ProcessingStats:
    """Thread-safe counters for tracking processing statistics."""

    def __init__(self):
        self._lock = threading.Lock()
        self.applied = 0
        self.rejected = 0
        self.unparseable = 0

    def record_applied(self):
        with self._lock:
            self.applied += 1

    def record_rejected(self):
        with self._lock:
            self.rejected += 1

    def record_unparseable(self):
        with self._lock:
            self.unparseable += 1

    def __repr__(self) -> str:
        return f"Applied: {self.applied}, Rejected: {self.rejected}, Unparseable: {self.unparseable}"
