import logging
from decimal import Decimal
from typing import List, Optional

from account_store import AccountStore
from errors import (
    AccountLocked,
    ClientNotFound,
    DuplicatedTransaction,
    NegativeAmount,
    NotEnoughAvailableFunds,
    TransactionAlreadyDisputed,
    TransactionNotDisputed,
    TransactionNotFound,
)
from models import AccountSnapshot, ClientAccount, Transaction, TransactionRecord, TransactionType
from report import build_report

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Applies transactions to client accounts, one at a time.

    Every rejection is raised as a LedgerError subclass before any state is
    touched, so a failed transaction has no effect and the caller can simply
    move on to the next one. Accounts are only ever opened by a deposit.
    """

    def __init__(self):
        self._accounts = AccountStore()

    def process_transaction(self, transaction: Transaction) -> None:
        """
        Apply a single transaction.

        Raises:
            LedgerError: the transaction was rejected and nothing changed.
        """
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(transaction.client_id, transaction.transaction_id, transaction.amount)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(transaction.client_id, transaction.transaction_id, transaction.amount)
            case TransactionType.DISPUTE:
                self._handle_dispute(transaction.client_id, transaction.transaction_id)
            case TransactionType.RESOLVE:
                self._handle_resolve(transaction.client_id, transaction.transaction_id)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(transaction.client_id, transaction.transaction_id)

    def snapshot(self) -> List[AccountSnapshot]:
        """Rounded view of every account. Safe to call any number of times."""
        return build_report(self._accounts)

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        """Read-only access for diagnostics; do not mutate the returned account."""
        return self._accounts.get_account(client_id)

    def __len__(self) -> int:
        return len(self._accounts)

    def _handle_deposit(self, client_id: int, transaction_id: int, amount: Decimal) -> None:
        if amount < 0:
            raise NegativeAmount()

        account = self._accounts.get_or_create_account(client_id)
        if account.locked:
            raise AccountLocked(client_id)
        if account.has_transaction(transaction_id):
            raise DuplicatedTransaction(transaction_id)

        account.credit(transaction_id, amount)

    def _handle_withdrawal(self, client_id: int, transaction_id: int, amount: Decimal) -> None:
        if amount < 0:
            raise NegativeAmount()

        account = self._existing_account(client_id)
        if account.locked:
            raise AccountLocked(client_id)
        if account.has_transaction(transaction_id):
            raise DuplicatedTransaction(transaction_id)
        if account.available < amount:
            raise NotEnoughAvailableFunds()

        account.debit(transaction_id, amount)

    def _handle_dispute(self, client_id: int, transaction_id: int) -> None:
        account = self._existing_account(client_id)
        if account.locked:
            raise AccountLocked(client_id)

        record = self._recorded_transaction(account, transaction_id)
        if record.in_dispute:
            raise TransactionAlreadyDisputed(client_id, transaction_id)

        # A withdrawal's record is negative, so disputing one moves funds
        # from held back into available.
        account.hold(record)

    # Resolve and chargeback ignore the lock so disputes opened before a
    # chargeback can still be settled.

    def _handle_resolve(self, client_id: int, transaction_id: int) -> None:
        account = self._existing_account(client_id)
        record = self._disputed_transaction(account, transaction_id)
        account.release(record)

    def _handle_chargeback(self, client_id: int, transaction_id: int) -> None:
        account = self._existing_account(client_id)
        self._disputed_transaction(account, transaction_id)
        account.charge_back(transaction_id)
        logger.info(f"Client {client_id}: account locked after chargeback of tx {transaction_id}")

    def _existing_account(self, client_id: int) -> ClientAccount:
        account = self._accounts.get_account(client_id)
        if account is None:
            raise ClientNotFound(client_id)
        return account

    def _recorded_transaction(self, account: ClientAccount, transaction_id: int) -> TransactionRecord:
        record = account.history.get(transaction_id)
        if record is None:
            raise TransactionNotFound(transaction_id)
        return record

    def _disputed_transaction(self, account: ClientAccount, transaction_id: int) -> TransactionRecord:
        record = self._recorded_transaction(account, transaction_id)
        if not record.in_dispute:
            raise TransactionNotDisputed(account.client_id, transaction_id)
        return record
