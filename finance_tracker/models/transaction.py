"""
Core Data Models for Finance Tracker

These models define the schema of every record held by the ledger.
They are designed to:
1. Enforce the record invariants at construction time
2. Keep text fields safe for the line-oriented data file
3. Compare by value, so a saved and reloaded record equals the original

DESIGN DECISION: Amounts are Decimal values quantized to cents.
The data file stores two decimal digits, so holding anything finer
in memory would make save/load lossy.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from finance_tracker.errors import InvalidAmountError, InvalidDateError


MIN_YEAR = 1900
MAX_YEAR = 3000

CATEGORY_MAX_LENGTH = 63
NOTE_MAX_LENGTH = 127

# The data file separates fields with this character, so it may never
# appear inside a text field.
FIELD_DELIMITER = "|"
DELIMITER_REPLACEMENT = "/"

CENT = Decimal("0.01")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionKind(str, Enum):
    """
    Income or expense.

    The data file encodes the kind as a flag: 0 for income, 1 for expense.
    """
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def flag(self) -> int:
        """Numeric flag used by the data file."""
        return 1 if self is TransactionKind.EXPENSE else 0

    @property
    def default_category(self) -> str:
        """Category used when the user leaves it blank."""
        return "Salary" if self is TransactionKind.INCOME else "Misc"

    @property
    def label(self) -> str:
        return self.value.upper()

    @classmethod
    def from_flag(cls, flag: int) -> "TransactionKind":
        """Decode the data file flag."""
        if flag == 0:
            return cls.INCOME
        if flag == 1:
            return cls.EXPENSE
        raise ValueError(f"Unknown transaction kind flag: {flag}")


class SortKey(str, Enum):
    """Orderings the ledger can be sorted by."""
    BY_DATE_ASC = "date_asc"
    BY_AMOUNT_DESC = "amount_desc"


class SearchField(str, Enum):
    """Fields the ledger can be searched on."""
    CATEGORY = "category"
    NOTE = "note"
    DATE = "date"


# =============================================================================
# VALIDATION HELPERS
# =============================================================================

def is_valid_date(year: int, month: int, day: int) -> bool:
    """Check a (year, month, day) triple against the Gregorian calendar."""
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def make_date(year: int, month: int, day: int) -> date:
    """
    Build a date from its parts.

    Raises:
        InvalidDateError: if the year is outside [1900..3000] or the
            day does not exist in that month (leap years included)
    """
    if not is_valid_date(year, month, day):
        raise InvalidDateError(
            f"Invalid date: {year:04d}-{month:02d}-{day:02d}"
        )
    return date(year, month, day)


def check_date(value: date) -> date:
    """Ensure an existing date object is within the supported year range."""
    if not MIN_YEAR <= value.year <= MAX_YEAR:
        raise InvalidDateError(
            f"Invalid date: {value.isoformat()} (year must be in [{MIN_YEAR}..{MAX_YEAR}])"
        )
    return value


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """
    Convert user input to a finite Decimal, without rounding.

    Raises:
        InvalidAmountError: if the value is not a finite number
    """
    try:
        number = Decimal(str(value).strip())
    except ArithmeticError:
        raise InvalidAmountError(f"Amount is not a number: {value!r}")
    if not number.is_finite():
        raise InvalidAmountError(f"Amount is not a finite number: {value!r}")
    return number


def to_amount(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert user input to a cent-quantized Decimal (see to_decimal)."""
    return quantize_amount(to_decimal(value))


def quantize_amount(amount: Decimal) -> Decimal:
    """Round to cents (half-up) and fold negative zero into zero."""
    amount = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    if not amount:
        return Decimal("0.00")
    return amount


def sanitize_text(value: str, max_length: int) -> str:
    """
    Make a text field safe for the data file.

    The delimiter becomes '/', line breaks become spaces, and the
    result is cut to max_length characters.
    """
    cleaned = value.replace(FIELD_DELIMITER, DELIMITER_REPLACEMENT)
    cleaned = cleaned.replace("\r", " ").replace("\n", " ")
    return cleaned[:max_length].rstrip()


# =============================================================================
# CORE TRANSACTION MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense entry.

    Records are immutable: the ledger reorders them when sorting
    but never edits one in place.

    Zero amounts are accepted here because they may come from the
    data file. The ledger's add operation is stricter and rejects them.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    transaction_date: date = Field(
        ...,
        description="Calendar date of the transaction"
    )
    kind: TransactionKind = Field(
        ...,
        description="Income or expense"
    )
    category: str = Field(
        ...,
        description="Short label such as Salary, Food or Rent"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Non-negative amount, two decimal places"
    )
    note: str = Field(
        default="",
        description="Optional free text"
    )

    @model_validator(mode='before')
    @classmethod
    def default_category(cls, data: Any) -> Any:
        """Fill a blank category with the default for the kind."""
        if not isinstance(data, dict):
            return data
        category = data.get("category")
        if category is not None and str(category).strip():
            return data
        try:
            kind = TransactionKind(data.get("kind"))
        except ValueError:
            # Let field validation report the bad kind
            return data
        return {**data, "category": kind.default_category}

    @field_validator('transaction_date')
    @classmethod
    def validate_year_range(cls, v: date) -> date:
        if not MIN_YEAR <= v.year <= MAX_YEAR:
            raise ValueError(
                f"Year must be between {MIN_YEAR} and {MAX_YEAR}, got {v.year}"
            )
        return v

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_float_amount(cls, v: Any) -> Any:
        """Go through str() so 0.1 becomes Decimal('0.1'), not its binary expansion."""
        if isinstance(v, float):
            return str(v)
        return v

    @field_validator('amount')
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        return quantize_amount(v)

    @field_validator('category')
    @classmethod
    def sanitize_category(cls, v: str) -> str:
        return sanitize_text(v, CATEGORY_MAX_LENGTH)

    @field_validator('note', mode='before')
    @classmethod
    def none_note_is_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator('note')
    @classmethod
    def sanitize_note(cls, v: str) -> str:
        return sanitize_text(v, NOTE_MAX_LENGTH)

    @property
    def is_income(self) -> bool:
        return self.kind is TransactionKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "date": self.transaction_date.isoformat(),
            "kind": self.kind.value,
            "category": self.category,
            "amount": str(self.amount),
            "note": self.note,
        }


# =============================================================================
# QUERY RESULT MODELS
# =============================================================================

class IndexedTransaction(BaseModel):
    """
    A search or filter hit.

    The index is the record's position in the ledger at query time.
    Any delete, sort or load invalidates it.
    """
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    transaction: Transaction


class LedgerSummary(BaseModel):
    """All-time totals across the whole ledger."""
    model_config = ConfigDict(frozen=True)

    total_income: Decimal = Field(
        default=Decimal("0.00"),
        description="Sum of income amounts"
    )
    total_expense: Decimal = Field(
        default=Decimal("0.00"),
        description="Sum of expense amounts"
    )

    @property
    def net_savings(self) -> Decimal:
        """Income minus expenses (negative when overspending)."""
        return self.total_income - self.total_expense

    def as_tuple(self) -> tuple[Decimal, Decimal, Decimal]:
        return (self.total_income, self.total_expense, self.net_savings)
