"""
Ledger Persistence

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the ledger itself free of any file handling
2. Swap the flat text file for something else later
3. Point tests at a temporary directory

Load and save are whole-file operations: read everything then parse,
or render everything then write it in one pass. There is no
partial-write recovery.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Union

import structlog

from finance_tracker.errors import IOFailureError
from finance_tracker.models.transaction import Transaction
from finance_tracker.store import codec


logger = structlog.get_logger(__name__)


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger persistence.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self) -> list[Transaction]:
        """
        Read every valid record.

        Returns:
            Records in stored order (bad entries already dropped)

        Raises:
            IOFailureError: If the backing store cannot be read
        """
        pass

    @abstractmethod
    def save(self, transactions: Iterable[Transaction]) -> int:
        """
        Replace the stored records.

        Returns:
            Number of records written

        Raises:
            IOFailureError: If the backing store cannot be written
        """
        pass

    @abstractmethod
    def exists(self) -> bool:
        """Check whether anything has been stored yet."""
        pass


class TextFileLedgerStorage(LedgerStorageInterface):
    """
    Flat text file implementation of ledger storage.

    One '|'-separated line per record, see finance_tracker.store.codec.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> list[Transaction]:
        try:
            text = self.path.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise IOFailureError(self.path, "read", "file does not exist") from e
        except (OSError, UnicodeDecodeError, LookupError) as e:
            raise IOFailureError(self.path, "read", str(e)) from e

        transactions = codec.deserialize(text)
        logger.debug("ledger_file_read", path=str(self.path), count=len(transactions))
        return transactions

    def save(self, transactions: Iterable[Transaction]) -> int:
        transactions = list(transactions)
        text = codec.serialize(transactions)
        try:
            # Encode before opening so a bad character leaves the old file intact
            data = text.encode(self.encoding)
            with open(self.path, "wb") as f:
                f.write(data)
        except (OSError, UnicodeEncodeError, LookupError) as e:
            raise IOFailureError(self.path, "write", str(e)) from e

        logger.debug("ledger_file_written", path=str(self.path), count=len(transactions))
        return len(transactions)
