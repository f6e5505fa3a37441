from typing import Optional, Sequence


class LedgerError(Exception):
    """
    Base class for transactions rejected by the ledger.
    A rejected transaction never changes account state. Subclasses carry the
    client and/or transaction id involved in their context.
    """

    message = "Transaction rejected"

    def __init__(self, *context: int):
        self.context = context
        super().__init__(self.message.format(*context))

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.context == other.context

    def __hash__(self) -> int:
        return hash((type(self), self.context))


class NegativeAmount(LedgerError):
    message = "Invalid negative amount"


class NotEnoughAvailableFunds(LedgerError):
    message = "Not enough available funds"


class AccountLocked(LedgerError):
    message = "Account is locked: {0}"

    def __init__(self, client_id: int):
        super().__init__(client_id)
        self.client_id = client_id


class ClientNotFound(LedgerError):
    message = "Client not found: {0}"

    def __init__(self, client_id: int):
        super().__init__(client_id)
        self.client_id = client_id


class DuplicatedTransaction(LedgerError):
    message = "Duplicated transaction: {0}"

    def __init__(self, transaction_id: int):
        super().__init__(transaction_id)
        self.transaction_id = transaction_id


class TransactionNotFound(LedgerError):
    message = "Transaction not found: {0}"

    def __init__(self, transaction_id: int):
        super().__init__(transaction_id)
        self.transaction_id = transaction_id


class TransactionAlreadyDisputed(LedgerError):
    message = "Transaction {1} for client {0} already disputed"

    def __init__(self, client_id: int, transaction_id: int):
        super().__init__(client_id, transaction_id)
        self.client_id = client_id
        self.transaction_id = transaction_id


class TransactionNotDisputed(LedgerError):
    message = "Transaction {1} for client {0} is not disputed"

    def __init__(self, client_id: int, transaction_id: int):
        super().__init__(client_id, transaction_id)
        self.client_id = client_id
        self.transaction_id = transaction_id


class TransactionParseError(ValueError):
    """A CSV row that could not be turned into a Transaction."""

    def __init__(self, reason: str, line_number: Optional[int] = None, row: Optional[Sequence[str]] = None):
        self.reason = reason
        self.line_number = line_number
        self.row = list(row) if row is not None else None
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}{reason}")
