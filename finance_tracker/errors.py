"""
Ledger Exceptions

Every failure the ledger can report is one of these.
All of them are recoverable: the library never exits the process,
it is up to the caller (the UI) to turn them into user-facing messages.
"""

from pathlib import Path
from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger operations."""
    pass


class CapacityExceededError(LedgerError):
    """The ledger already holds its maximum number of records."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Storage full: the ledger holds at most {capacity} records")


class InvalidAmountError(LedgerError):
    """Amount is not acceptable (must be strictly positive when adding)."""
    pass


class InvalidDateError(LedgerError):
    """Date is not a valid calendar date between 1900 and 3000."""
    pass


class IndexOutOfRangeError(LedgerError):
    """Record index does not exist in the ledger."""

    def __init__(self, index: int, count: int):
        self.index = index
        self.count = count
        if count == 0:
            message = f"Index {index} is out of range: the ledger is empty"
        else:
            message = f"Index {index} is out of range [0..{count - 1}]"
        super().__init__(message)


class IOFailureError(LedgerError):
    """The data file could not be opened for reading or writing."""

    def __init__(self, path: Path, operation: str, reason: Optional[str] = None):
        self.path = path
        self.operation = operation
        self.reason = reason
        message = f"Could not {operation} '{path}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
