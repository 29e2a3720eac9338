"""
Ledger Store

The in-memory record collection and every query the UI needs.

GUARANTEES:
- Never holds more than `capacity` records
- Records added through add() have a strictly positive amount
- Insertion order is kept until an explicit sort()
- Any failed operation leaves the ledger unchanged

Indices reported by search/filter are positions at query time.
A delete, sort or load renumbers the records.
"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Iterator, Optional, Union

import structlog

from finance_tracker.errors import (
    CapacityExceededError,
    IndexOutOfRangeError,
    InvalidAmountError,
    InvalidDateError,
)
from finance_tracker.models.transaction import (
    IndexedTransaction,
    LedgerSummary,
    SearchField,
    SortKey,
    Transaction,
    TransactionKind,
    check_date,
    make_date,
    to_amount,
    to_decimal,
)
from finance_tracker.store import codec


DEFAULT_CAPACITY = 2000

DateQuery = Union[date, tuple[int, int, int]]

logger = structlog.get_logger(__name__)


class LedgerStore:
    """
    Bounded, ordered collection of transactions.

    The store exclusively owns its records. Callers get the records
    themselves (they are immutable) but never the underlying list.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        transactions: Optional[Iterable[Transaction]] = None,
    ):
        if capacity < 1:
            raise ValueError(f"Capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._transactions: list[Transaction] = []
        if transactions is not None:
            self.replace_all(transactions)

    # -------------------------------------------------------------------------
    # Size and access
    # -------------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        return len(self._transactions)

    @property
    def is_full(self) -> bool:
        return self.count >= self._capacity

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions))

    def __getitem__(self, index: int) -> Transaction:
        self._check_index(index)
        return self._transactions[index]

    def _check_index(self, index: int) -> None:
        # Negative indices are not positions in the ledger
        if not 0 <= index < self.count:
            raise IndexOutOfRangeError(index, self.count)

    def list_all(self) -> Iterator[Transaction]:
        """
        Iterate over all records in current order.

        Every call returns a fresh iterator over a snapshot, so mutating
        the ledger while iterating is safe.
        """
        return iter(self)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, transaction: Transaction) -> int:
        """
        Append a record.

        Returns:
            Index of the new record

        Raises:
            CapacityExceededError: the ledger is full
            InvalidAmountError: amount is zero (or below)
            InvalidDateError: date outside the supported range
        """
        if self.is_full:
            raise CapacityExceededError(self._capacity)
        if transaction.amount <= 0:
            raise InvalidAmountError(
                f"Amount must be positive, got {transaction.amount}"
            )
        check_date(transaction.transaction_date)

        self._transactions.append(transaction)
        index = self.count - 1
        logger.debug("transaction_added", index=index, count=self.count)
        return index

    def add_entry(
        self,
        year: int,
        month: int,
        day: int,
        kind: Union[TransactionKind, str],
        category: str,
        amount: Union[Decimal, int, float, str],
        note: str = "",
    ) -> int:
        """
        Build a record from raw input and add it.

        A blank category is replaced by the default for the kind.
        Same errors as add().
        """
        if self.is_full:
            raise CapacityExceededError(self._capacity)
        value = to_amount(amount)
        if value <= 0:
            raise InvalidAmountError(f"Amount must be positive, got {amount}")
        transaction_date = make_date(year, month, day)

        transaction = Transaction(
            transaction_date=transaction_date,
            kind=kind,
            category=category,
            amount=value,
            note=note,
        )
        return self.add(transaction)

    def delete(self, index: int) -> Transaction:
        """
        Remove the record at index; later records shift down by one.

        Returns:
            The removed record

        Raises:
            IndexOutOfRangeError: no record at that index
        """
        self._check_index(index)
        removed = self._transactions.pop(index)
        logger.debug("transaction_deleted", index=index, count=self.count)
        return removed

    def replace_all(self, transactions: Iterable[Transaction]) -> int:
        """
        Swap the whole content for a freshly loaded set.

        Zero amounts are allowed here. Records beyond capacity are dropped.

        Returns:
            Number of records kept
        """
        loaded = list(transactions)
        if len(loaded) > self._capacity:
            logger.warning(
                "ledger_capacity_truncated",
                capacity=self._capacity,
                dropped=len(loaded) - self._capacity,
            )
            loaded = loaded[:self._capacity]
        self._transactions = loaded
        return self.count

    def clear(self) -> None:
        self._transactions = []

    def sort(self, key: SortKey) -> None:
        """
        Reorder the ledger in place.

        The sort is stable: records with equal keys keep their
        relative order.
        """
        if key is SortKey.BY_DATE_ASC:
            self._transactions.sort(key=lambda t: t.transaction_date)
        elif key is SortKey.BY_AMOUNT_DESC:
            self._transactions.sort(key=lambda t: t.amount, reverse=True)
        else:
            raise ValueError(f"Unknown sort key: {key}")

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def _matching(self, predicate) -> list[IndexedTransaction]:
        return [
            IndexedTransaction(index=i, transaction=t)
            for i, t in enumerate(self._transactions)
            if predicate(t)
        ]

    def search(
        self,
        field: SearchField,
        query: Union[str, DateQuery],
    ) -> list[IndexedTransaction]:
        """
        Find records by category, note or date.

        Category and note match on case-insensitive substring.
        Date matches exactly; query is a date or a (year, month, day) tuple.

        Raises:
            InvalidDateError: the date query is not a valid date
        """
        if field is SearchField.DATE:
            return self.search_date(query)
        if not isinstance(query, str):
            raise TypeError(f"Text search needs a string, got {type(query).__name__}")
        return self.search_text(field, query)

    def search_text(self, field: SearchField, text: str) -> list[IndexedTransaction]:
        needle = text.casefold()
        if field is SearchField.CATEGORY:
            return self._matching(lambda t: needle in t.category.casefold())
        if field is SearchField.NOTE:
            return self._matching(lambda t: needle in t.note.casefold())
        raise ValueError(f"Not a text field: {field}")

    def search_date(self, query: DateQuery) -> list[IndexedTransaction]:
        if isinstance(query, date):
            target = check_date(query)
        elif isinstance(query, tuple) and len(query) == 3:
            target = make_date(*query)
        else:
            raise InvalidDateError(f"Not a date: {query!r}")
        return self._matching(lambda t: t.transaction_date == target)

    def filter_expenses_above(
        self,
        threshold: Union[Decimal, int, float, str],
    ) -> list[IndexedTransaction]:
        """Expenses strictly above threshold, in ledger order."""
        limit = to_decimal(threshold)
        return self._matching(lambda t: t.is_expense and t.amount > limit)

    def summary(self) -> LedgerSummary:
        """All-time income, expense and net savings."""
        income = Decimal("0.00")
        expense = Decimal("0.00")
        for t in self._transactions:
            if t.is_income:
                income += t.amount
            else:
                expense += t.amount
        return LedgerSummary(total_income=income, total_expense=expense)

    def monthly_expense_totals(self, year: int) -> list[Decimal]:
        """
        Expense sums per month of one year.

        Returns:
            12 values, January first; months without expenses are 0.00
        """
        sums = [Decimal("0.00")] * 12
        for t in self._transactions:
            if t.is_expense and t.transaction_date.year == year:
                sums[t.transaction_date.month - 1] += t.amount
        return sums

    # -------------------------------------------------------------------------
    # Text format
    # -------------------------------------------------------------------------

    def serialize(self) -> str:
        return codec.serialize(self._transactions)

    @staticmethod
    def deserialize(text: str) -> list[Transaction]:
        return codec.deserialize(text)

    def load_text(self, text: str) -> int:
        """Replace the content with the records parsed from text."""
        return self.replace_all(codec.deserialize(text))
