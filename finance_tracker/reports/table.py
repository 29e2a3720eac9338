"""
Text renderings of ledger listings and totals.
"""

from typing import Iterable, Union

from finance_tracker.models.transaction import (
    IndexedTransaction,
    LedgerSummary,
    Transaction,
)

TABLE_HEADER = (
    "Idx  Date        Type     Category               Amount      Note\n"
    "---- ----------- -------- ---------------------- ----------- ------------------------------"
)

Row = Union[IndexedTransaction, Transaction]


def format_row(index: int, transaction: Transaction) -> str:
    return (
        f"{index:<4d} {transaction.transaction_date.isoformat()} "
        f"{transaction.kind.label:<8} {transaction.category:<22} "
        f"{transaction.amount:11.2f} {transaction.note}"
    ).rstrip()


def format_transaction_table(rows: Iterable[Row]) -> str:
    """
    Render a listing as a fixed-width table.

    Plain transactions are numbered by position; search and filter
    hits keep the ledger index they were found at.
    """
    lines = [TABLE_HEADER]
    for position, row in enumerate(rows):
        if isinstance(row, IndexedTransaction):
            lines.append(format_row(row.index, row.transaction))
        else:
            lines.append(format_row(position, row))
    return "\n".join(lines)


def transaction_rows(rows: Iterable[Row]) -> list[dict]:
    """Listing as plain dicts, one per record, for dataframe widgets."""
    result = []
    for position, row in enumerate(rows):
        if isinstance(row, IndexedTransaction):
            index, transaction = row.index, row.transaction
        else:
            index, transaction = position, row
        result.append({
            "Idx": index,
            "Date": transaction.transaction_date.isoformat(),
            "Type": transaction.kind.label,
            "Category": transaction.category,
            "Amount": f"{transaction.amount:.2f}",
            "Note": transaction.note,
        })
    return result


def format_summary(summary: LedgerSummary) -> str:
    return (
        f"Income = {summary.total_income:.2f} | "
        f"Expense = {summary.total_expense:.2f} | "
        f"Savings = {summary.net_savings:.2f}"
    )
