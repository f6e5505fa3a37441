import logging

from csv_io import AccountsReportWriter, TransactionsReader
from errors import LedgerError, TransactionParseError
from ledger import LedgerEngine
from models import ProcessingStats

logger = logging.getLogger(__name__)


def run(reader: TransactionsReader, engine: LedgerEngine, writer: AccountsReportWriter) -> ProcessingStats:
    """
    Feed every transaction from reader into engine, then write the report.

    Malformed records and rejected transactions are logged and skipped; they
    never stop the run. Only I/O errors from the reader or writer propagate.
    In a real deployment the rejections would be worth routing to a fraud
    detection system rather than a log.
    """
    stats = ProcessingStats()

    for item in reader.read_transactions():
        if isinstance(item, TransactionParseError):
            stats.record_malformed()
            logger.warning(f"Skipping malformed record: {item}")
            continue

        try:
            engine.process_transaction(item)
        except LedgerError as e:
            stats.record_rejection(e)
            logger.info(f"Rejected {item}: {e}")
        else:
            stats.record_success()

    writer.write_accounts_report(engine.snapshot())

    logger.info(f"Processing complete. {stats}")
    if stats.rejected:
        logger.info(f"Rejections by reason: {stats.rejected}")
    return stats
