import csv
import logging
import threading
from typing import Dict, List, Sequence

from errors import LedgerError, StreamError, TransactionParseError
from ledger import Ledger
from models import ClientAccount, ProcessingStats
from transaction_parser import parse_record

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Orchestrates ingestion of one or more CSV streams into a single ledger.
    Each stream is read and parsed on its own thread; applying a transaction
    is serialized through one ledger lock.
    """

    def __init__(self, strict_disputes: bool = False, freeze_locked_accounts: bool = False):
        self._ledger = Ledger(
            strict_disputes=strict_disputes,
            freeze_locked_accounts=freeze_locked_accounts,
        )
        self._ledger_lock = threading.Lock()
        self._stats = ProcessingStats()

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def accounts(self) -> Dict[int, ClientAccount]:
        with self._ledger_lock:
            return self._ledger.registry.get_all_accounts()

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process a single CSV file sequentially and return final account states."""
        self._ingest_stream(filepath)
        logger.info(f"Processing complete. {self._stats}")
        return self.accounts()

    def process_files(self, filepaths: Sequence[str]) -> Dict[int, ClientAccount]:
        """
        Process CSV files concurrently (one reader thread per file) and return final account states.
        All readers are joined before returning, then the first stream failure, if any, is raised.
        """
        if len(filepaths) == 1:
            return self.process_file(filepaths[0])

        logger.info(f"Starting {len(filepaths)} reader threads")

        failures: List[StreamError] = []
        failures_lock = threading.Lock()

        def run_reader(filepath: str) -> None:
            try:
                self._ingest_stream(filepath)
            except StreamError as e:
                logger.error(f"Aborting ingestion of {filepath}: {e.cause}")
                with failures_lock:
                    failures.append(e)
            except Exception as e:
                logger.exception(f"Aborting ingestion of {filepath}: unexpected error")
                with failures_lock:
                    failures.append(StreamError(filepath, e))

        reader_threads = []
        for filepath in filepaths:
            reader_thread = threading.Thread(target=run_reader, args=(filepath,), name=f"reader:{filepath}")
            reader_thread.start()
            reader_threads.append(reader_thread)

        for reader_thread in reader_threads:
            reader_thread.join()

        logger.info(f"Processing complete. {self._stats}")

        if failures:
            raise failures[0]
        return self.accounts()

    def _ingest_stream(self, filepath: str) -> None:
        """Read CSV records from filepath and apply each one. The first row is the header."""
        try:
            with open(filepath, "r", newline="", encoding="utf-8") as f:
                reader = csv.reader(f)
                next(reader, None)
                for record in reader:
                    if not record:
                        continue
                    self._process_record(record, f"{filepath}:{reader.line_num}")
        except (OSError, csv.Error, UnicodeDecodeError) as e:
            raise StreamError(filepath, e) from e

    def _process_record(self, record: List[str], location: str) -> None:
        try:
            transaction = parse_record(record)
        except TransactionParseError as e:
            self._stats.record_unparseable()
            logger.warning(f"{location}: error processing record {record}: {e}")
            return

        try:
            with self._ledger_lock:
                self._ledger.apply(transaction)
        except LedgerError as e:
            self._stats.record_rejected()
            logger.warning(f"{location}: error applying {transaction}: {e}")
            return

        self._stats.record_applied()
