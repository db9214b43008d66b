import logging
from typing import Dict, Optional, Tuple

from client_registry import ClientRegistry
from errors import (
    AccountLocked,
    ClientNotFound,
    InvalidDispute,
    MalformedRequest,
    NotEnoughFunds,
)
from models import ClientAccount, DisputeStatus, LedgerEntry, Transaction, TransactionType

logger = logging.getLogger(__name__)


class Ledger:
    """
    Applies transactions to client accounts and tracks deposits/withdrawals for disputes.

    Every rule validates before it mutates, so a rejected transaction leaves
    accounts and entries exactly as they were.
    Caller is responsible for serializing calls to apply().
    """

    def __init__(
        self,
        registry: Optional[ClientRegistry] = None,
        strict_disputes: bool = False,
        freeze_locked_accounts: bool = False,
    ):
        self._registry = registry if registry is not None else ClientRegistry()
        self._entries: Dict[int, LedgerEntry] = {}
        self._strict_disputes = strict_disputes
        self._freeze_locked_accounts = freeze_locked_accounts

    @property
    def registry(self) -> ClientRegistry:
        return self._registry

    def get_entry(self, transaction_id: int) -> Optional[LedgerEntry]:
        """Retrieve stored deposit/withdrawal by ID."""
        return self._entries.get(transaction_id)

    def apply(self, transaction: Transaction) -> None:
        """
        Apply a single transaction.

        Raises:
            MalformedRequest: deposit/withdrawal without an amount
            NotEnoughFunds: withdrawal larger than the available balance
            ClientNotFound: dispute/resolve/chargeback for an unknown client
            InvalidDispute: referenced tx missing, or not in the required dispute state
            AccountLocked: account was charged back and freeze_locked_accounts is on
        """
        if self._freeze_locked_accounts:
            existing = self._registry.find(transaction.client_id)
            if existing is not None and existing.locked:
                raise AccountLocked(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(transaction)

    def _handle_deposit(self, transaction: Transaction) -> None:
        account = self._registry.get_or_create(transaction.client_id)

        if transaction.amount is None:
            raise MalformedRequest(transaction.transaction_id)

        if transaction.transaction_id in self._entries:
            logger.debug(f"Deposit tx {transaction.transaction_id}: replacing existing ledger entry")

        account.credit(transaction.amount)
        self._store_entry(transaction)

    def _handle_withdrawal(self, transaction: Transaction) -> None:
        account = self._registry.get_or_create(transaction.client_id)

        if transaction.amount is None:
            raise MalformedRequest(transaction.transaction_id)

        if account.available < transaction.amount:
            raise NotEnoughFunds(
                client=transaction.client_id,
                requested=transaction.amount,
                available=account.available,
            )

        account.debit(transaction.amount)
        self._store_entry(transaction)

    def _handle_dispute(self, transaction: Transaction) -> None:
        account, entry = self._lookup_dispute_target(transaction)

        # Without strict disputes a second dispute holds the amount again.
        if self._strict_disputes and entry.is_disputed:
            logger.debug(f"Dispute for tx {transaction.transaction_id}: transaction already disputed")
            raise InvalidDispute(transaction.transaction_id)

        if entry.amount is None:
            raise MalformedRequest(transaction.transaction_id)

        account.hold(entry.amount)
        entry.status = DisputeStatus.DISPUTED

    def _handle_resolve(self, transaction: Transaction) -> None:
        account, entry = self._lookup_dispute_target(transaction)

        if not entry.is_disputed:
            raise InvalidDispute(transaction.transaction_id)

        if entry.amount is None:
            raise MalformedRequest(transaction.transaction_id)

        account.release_hold(entry.amount)
        entry.status = DisputeStatus.UNDISPUTED

    def _handle_chargeback(self, transaction: Transaction) -> None:
        account, entry = self._lookup_dispute_target(transaction)

        if not entry.is_disputed:
            raise InvalidDispute(transaction.transaction_id)

        if entry.amount is None:
            raise MalformedRequest(transaction.transaction_id)

        # Entry stays DISPUTED: a charged-back transaction is terminal.
        account.remove_held(entry.amount)
        account.locked = True

    def _lookup_dispute_target(self, transaction: Transaction) -> Tuple[ClientAccount, LedgerEntry]:
        account = self._registry.find(transaction.client_id)
        if account is None:
            raise ClientNotFound(transaction.client_id)

        entry = self._entries.get(transaction.transaction_id)
        if entry is None:
            raise InvalidDispute(transaction.transaction_id)

        if self._strict_disputes and entry.client_id != transaction.client_id:
            logger.debug(
                f"{transaction.transaction_type.value.capitalize()} for tx {transaction.transaction_id}: "
                f"client mismatch (expected {entry.client_id}, got {transaction.client_id})"
            )
            raise InvalidDispute(transaction.transaction_id)

        return account, entry

    def _store_entry(self, transaction: Transaction) -> None:
        self._entries[transaction.transaction_id] = LedgerEntry(
            client_id=transaction.client_id,
            transaction_type=transaction.transaction_type,
            amount=transaction.amount,
        )
