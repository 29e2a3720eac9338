"""
Ledger Text Format

One record per line, fields separated by '|':

    <year>|<month>|<day>|<kind flag>|<category>|<amount>|<note>

- kind flag is 0 for income, 1 for expense
- amount always has two decimal digits
- note may be missing entirely (six fields means an empty note)

No header, no trailer.

DESIGN DECISION: Reading is split in two explicit steps, a tokenizer
and a per-field validator. A line that fails either step is skipped,
never fatal: loading a file always succeeds with whatever valid
subset it contains.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

import structlog
from pydantic import ValidationError

from finance_tracker.models.transaction import (
    FIELD_DELIMITER,
    Transaction,
    TransactionKind,
    is_valid_date,
)


MIN_FIELDS = 6
MAX_FIELDS = 7

logger = structlog.get_logger(__name__)


def format_line(transaction: Transaction) -> str:
    """Render one record as a newline-terminated line."""
    d = transaction.transaction_date
    fields = [
        str(d.year),
        str(d.month),
        str(d.day),
        str(transaction.kind.flag),
        transaction.category,
        f"{transaction.amount:.2f}",
        transaction.note,
    ]
    return FIELD_DELIMITER.join(fields) + "\n"


def serialize(transactions: Iterable[Transaction]) -> str:
    """Render the whole ledger, in order."""
    return "".join(format_line(t) for t in transactions)


def tokenize(line: str) -> list[str]:
    """
    Split a line into fields.

    Anything after the seventh field is dropped.
    """
    line = line.rstrip("\r\n")
    if not line:
        return []
    return line.split(FIELD_DELIMITER)[:MAX_FIELDS]


def _parse_int(token: str) -> Optional[int]:
    try:
        return int(token)
    except ValueError:
        return None


def _parse_amount(token: str) -> Optional[Decimal]:
    try:
        amount = Decimal(token.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < 0:
        return None
    return amount


def parse_fields(fields: list[str]) -> Optional[Transaction]:
    """
    Validate tokenized fields and build a record.

    Returns None when the line must be skipped:
    too few fields, a non-numeric number, an unknown kind flag,
    a blank category, an invalid date or a negative amount.
    """
    if len(fields) < MIN_FIELDS:
        return None

    year, month, day, flag = (_parse_int(f) for f in fields[:4])
    if year is None or month is None or day is None or flag is None:
        return None
    if not is_valid_date(year, month, day):
        return None

    try:
        kind = TransactionKind.from_flag(flag)
    except ValueError:
        return None

    category = fields[4]
    if not category.strip():
        return None

    amount = _parse_amount(fields[5])
    if amount is None:
        return None

    note = fields[6] if len(fields) == MAX_FIELDS else ""

    try:
        return Transaction(
            transaction_date=date(year, month, day),
            kind=kind,
            category=category,
            amount=amount,
            note=note,
        )
    except ValidationError:
        return None


def parse_line(line: str) -> Optional[Transaction]:
    """Tokenize and validate a single line. None means "skip this line"."""
    return parse_fields(tokenize(line))


def deserialize(text: str) -> list[Transaction]:
    """
    Parse a whole file's contents.

    Bad lines are dropped; the result holds every valid record in file order.
    Only a newline character ends a record; other line separators stay
    inside text fields.
    """
    transactions = []
    skipped = 0

    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        transaction = parse_line(line)
        if transaction is None:
            skipped += 1
            logger.debug("ledger_line_skipped", line_number=line_number)
            continue
        transactions.append(transaction)

    if skipped:
        logger.info(
            "ledger_lines_skipped",
            skipped=skipped,
            loaded=len(transactions),
        )

    return transactions
