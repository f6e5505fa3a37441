import csv
import re
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Iterator, List, TextIO, Union

from errors import TransactionParseError
from models import AccountSnapshot, Transaction, TransactionType
from report import format_amount

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

ID_PATTERN = re.compile(r"[0-9]+")
AMOUNT_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]+)?")

REPORT_HEADER = ["client", "available", "held", "total", "locked"]

ReadResult = Union[Transaction, TransactionParseError]


class TransactionsReader(ABC):
    """Source of transactions in some external format."""

    @abstractmethod
    def read_transactions(self) -> Iterator[ReadResult]:
        """
        Yield one item per input record: a Transaction when the record is
        well formed, otherwise the TransactionParseError describing why not.
        Row-level problems are yielded, never raised.
        """


class AccountsReportWriter(ABC):
    """Destination for the final account report."""

    @abstractmethod
    def write_accounts_report(self, report: Iterable[AccountSnapshot]) -> None:
        """Persist every snapshot. I/O failures are raised as OSError."""


class CsvTransactionsReader(TransactionsReader):
    """
    Reads `type, client, tx, amount` rows from a text stream.
    The first row is a header and is skipped. The amount column may be left
    out entirely for disputes, resolves and chargebacks.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream

    def read_transactions(self) -> Iterator[ReadResult]:
        reader = csv.reader(self._stream)
        header_seen = False
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as e:
                yield TransactionParseError(f"unreadable record: {e}", line_number=reader.line_num)
                continue

            fields = [value.strip() for value in row]
            if fields in ([], [""]):
                continue
            if not header_seen:
                header_seen = True
                continue
            try:
                result = parse_row(fields)
            except TransactionParseError as e:
                result = TransactionParseError(e.reason, line_number=reader.line_num, row=row)
            yield result


class CsvAccountsReportWriter(AccountsReportWriter):
    def __init__(self, stream: TextIO):
        self._stream = stream

    def write_accounts_report(self, report: Iterable[AccountSnapshot]) -> None:
        writer = csv.writer(self._stream, lineterminator="\n")
        header_written = False
        for snapshot in report:
            if not header_written:
                writer.writerow(REPORT_HEADER)
                header_written = True
            writer.writerow(format_snapshot(snapshot))
        self._stream.flush()


def format_snapshot(snapshot: AccountSnapshot) -> List[str]:
    return [
        str(snapshot.client_id),
        format_amount(snapshot.available),
        format_amount(snapshot.held),
        format_amount(snapshot.total),
        str(snapshot.locked).lower(),
    ]


def parse_row(fields: List[str]) -> Transaction:
    """Turn already-trimmed CSV fields into a Transaction."""
    if len(fields) not in (3, 4):
        raise TransactionParseError(f"expected 3 or 4 columns, got {len(fields)}")
    if not all(_is_decodable(value) for value in fields):
        raise TransactionParseError("invalid encoding")

    type_str, client_str, tx_str = fields[:3]
    amount_str = fields[3] if len(fields) == 4 else ""

    try:
        transaction_type = TransactionType(type_str.lower())
    except ValueError:
        raise TransactionParseError(f"unknown transaction type {type_str!r}") from None

    client_id = _parse_id(client_str, "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(tx_str, "tx", MAX_TRANSACTION_ID)

    if not transaction_type.is_monetary:
        return Transaction(transaction_type, client_id, transaction_id)

    if not amount_str:
        raise TransactionParseError(f"missing amount for {transaction_type.value}")
    return Transaction(transaction_type, client_id, transaction_id, _parse_amount(amount_str))


def _parse_id(value: str, column: str, maximum: int) -> int:
    if not ID_PATTERN.fullmatch(value):
        raise TransactionParseError(f"invalid {column} {value!r}")
    digits = value.lstrip("0") or "0"
    if len(digits) > len(str(maximum)) or int(digits) > maximum:
        raise TransactionParseError(f"{column} {digits} out of range")
    return int(digits)


def _parse_amount(value: str) -> Decimal:
    if not AMOUNT_PATTERN.fullmatch(value):
        raise TransactionParseError(f"invalid amount {value!r}")
    return Decimal(value)


def _is_decodable(value: str) -> bool:
    # undecodable input bytes arrive as lone surrogates (errors="surrogateescape")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True
