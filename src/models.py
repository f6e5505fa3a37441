from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def is_monetary(self) -> bool:
        """Deposits and withdrawals move money and carry an amount."""
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


@dataclass(frozen=True)
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __post_init__(self):
        if self.transaction_type.is_monetary and self.amount is None:
            raise ValueError(f"{self.transaction_type.value} requires an amount")
        if not self.transaction_type.is_monetary and self.amount is not None:
            raise ValueError(f"{self.transaction_type.value} does not take an amount")

    @classmethod
    def deposit(cls, client_id: int, transaction_id: int, amount: Decimal) -> "Transaction":
        return cls(TransactionType.DEPOSIT, client_id, transaction_id, amount)

    @classmethod
    def withdrawal(cls, client_id: int, transaction_id: int, amount: Decimal) -> "Transaction":
        return cls(TransactionType.WITHDRAWAL, client_id, transaction_id, amount)

    @classmethod
    def dispute(cls, client_id: int, transaction_id: int) -> "Transaction":
        return cls(TransactionType.DISPUTE, client_id, transaction_id)

    @classmethod
    def resolve(cls, client_id: int, transaction_id: int) -> "Transaction":
        return cls(TransactionType.RESOLVE, client_id, transaction_id)

    @classmethod
    def chargeback(cls, client_id: int, transaction_id: int) -> "Transaction":
        return cls(TransactionType.CHARGEBACK, client_id, transaction_id)

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class Funds:
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.available + self.held


@dataclass
class TransactionRecord:
    """
    A deposit or withdrawal kept in an account's history.
    The amount is positive for deposits and negative for withdrawals, so
    disputes move the same signed value whatever the original kind was.
    """

    amount: Decimal
    in_dispute: bool = False


@dataclass
class ClientAccount:
    client_id: int
    locked: bool = False
    funds: Funds = field(default_factory=Funds)
    history: Dict[int, TransactionRecord] = field(default_factory=dict)

    @property
    def available(self) -> Decimal:
        return self.funds.available

    @property
    def held(self) -> Decimal:
        return self.funds.held

    @property
    def total(self) -> Decimal:
        return self.funds.total

    def has_transaction(self, transaction_id: int) -> bool:
        return transaction_id in self.history

    def credit(self, transaction_id: int, amount: Decimal) -> None:
        self.funds.available += amount
        self.history[transaction_id] = TransactionRecord(amount)

    def debit(self, transaction_id: int, amount: Decimal) -> None:
        self.funds.available -= amount
        self.history[transaction_id] = TransactionRecord(-amount)

    def hold(self, record: TransactionRecord) -> None:
        record.in_dispute = True
        self.funds.available -= record.amount
        self.funds.held += record.amount

    def release(self, record: TransactionRecord) -> None:
        record.in_dispute = False
        self.funds.held -= record.amount
        self.funds.available += record.amount

    def charge_back(self, transaction_id: int) -> None:
        record = self.history.pop(transaction_id)
        self.funds.held -= record.amount
        self.locked = True


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


class ProcessingStats:
    """Counters for one run, reported once processing is complete."""

    def __init__(self):
        self.processed = 0
        self.malformed = 0
        self.rejected: Dict[str, int] = {}

    @property
    def rejected_total(self) -> int:
        return sum(self.rejected.values())

    def record_success(self):
        self.processed += 1

    def record_malformed(self):
        self.malformed += 1

    def record_rejection(self, error: Exception):
        name = type(error).__name__
        self.rejected[name] = self.rejected.get(name, 0) + 1

    def __str__(self) -> str:
        return f"Processed: {self.processed}, Rejected: {self.rejected_total}, Malformed: {self.malformed}"
