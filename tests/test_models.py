"""
Tests for Finance Tracker models

Test strategy:
1. Unit tests for the record model and its validators
2. Ledger and file tests live in their own modules
3. No real user data (temporary directories only)
"""

import pytest
from datetime import date
from decimal import Decimal
from uuid import uuid4

from finance_tracker.errors import InvalidAmountError, InvalidDateError
from finance_tracker.models.transaction import (
    CATEGORY_MAX_LENGTH,
    NOTE_MAX_LENGTH,
    LedgerSummary,
    Transaction,
    TransactionKind,
    is_valid_date,
    make_date,
    to_amount,
    to_decimal,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)


class TestTransactionModel:
    """Tests for the Transaction model."""

    def test_transaction_creation(self):
        """Test Transaction model creation."""
        t = Transaction(
            transaction_date=date(2025, 1, 15),
            kind=TransactionKind.EXPENSE,
            category="Food",
            amount=Decimal("12.50"),
            note="Lunch",
        )
        assert t.category == "Food"
        assert t.amount == Decimal("12.50")
        assert t.is_expense is True
        assert t.is_income is False

    def test_blank_income_category_defaults_to_salary(self):
        """Test blank income category becomes Salary."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.INCOME,
            category="   ",
            amount=Decimal("100"),
        )
        assert t.category == "Salary"

    def test_blank_expense_category_defaults_to_misc(self):
        """Test blank expense category becomes Misc."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind="expense",
            category="",
            amount=Decimal("5"),
        )
        assert t.category == "Misc"

    def test_delimiter_is_replaced(self):
        """Test '|' never survives in category or note."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="Food|Drink",
            amount=Decimal("5"),
            note="a|b|c",
        )
        assert t.category == "Food/Drink"
        assert t.note == "a/b/c"

    def test_line_breaks_are_replaced(self):
        """Test a note can never span two lines."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="Food",
            amount=Decimal("5"),
            note="first\nsecond\r\nthird",
        )
        assert "\n" not in t.note
        assert "\r" not in t.note
        assert t.note.startswith("first second")

    def test_long_text_is_truncated(self):
        """Test category and note are cut to their maximum length."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="c" * 100,
            amount=Decimal("5"),
            note="n" * 300,
        )
        assert len(t.category) == CATEGORY_MAX_LENGTH
        assert len(t.note) == NOTE_MAX_LENGTH

    def test_none_note_is_empty(self):
        """Test a missing note is stored as an empty string."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.INCOME,
            category="Salary",
            amount=Decimal("5"),
            note=None,
        )
        assert t.note == ""

    def test_amount_rounded_to_cents(self):
        """Test amounts are quantized half-up to two decimals."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="Food",
            amount=Decimal("10.005"),
        )
        assert t.amount == Decimal("10.01")
        assert str(t.amount) == "10.01"

    def test_float_amount_is_exact(self):
        """Test float amounts go through their decimal representation."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="Food",
            amount=0.1,
        )
        assert t.amount == Decimal("0.10")

    def test_zero_amount_allowed_on_model(self):
        """Test zero is a valid stored amount (loading tolerates it)."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="Food",
            amount=Decimal("0"),
        )
        assert t.amount == Decimal("0.00")

    def test_rejects_negative_amount(self):
        """Test that negative amounts are rejected."""
        with pytest.raises(ValueError):
            Transaction(
                transaction_date=date(2025, 1, 1),
                kind=TransactionKind.EXPENSE,
                category="Food",
                amount=Decimal("-1"),
            )

    def test_rejects_nan_amount(self):
        """Test that NaN is not an amount."""
        with pytest.raises(ValueError):
            Transaction(
                transaction_date=date(2025, 1, 1),
                kind=TransactionKind.EXPENSE,
                category="Food",
                amount=Decimal("NaN"),
            )

    def test_rejects_year_out_of_range(self):
        """Test years before 1900 are rejected."""
        with pytest.raises(ValueError, match="Year must be between"):
            Transaction(
                transaction_date=date(1899, 12, 31),
                kind=TransactionKind.EXPENSE,
                category="Food",
                amount=Decimal("1"),
            )

    def test_transaction_is_immutable(self):
        """Test records cannot be edited in place."""
        t = Transaction(
            transaction_date=date(2025, 1, 1),
            kind=TransactionKind.EXPENSE,
            category="Food",
            amount=Decimal("1"),
        )
        with pytest.raises(ValueError):
            t.amount = Decimal("2")

    def test_to_log_dict(self):
        """Test conversion to log dictionary."""
        t = Transaction(
            transaction_date=date(2025, 2, 3),
            kind=TransactionKind.INCOME,
            category="Salary",
            amount=Decimal("1000"),
        )
        log_dict = t.to_log_dict()
        assert log_dict["date"] == "2025-02-03"
        assert log_dict["kind"] == "income"
        assert log_dict["amount"] == "1000.00"


class TestTransactionKind:
    """Tests for the kind enum and its file flag."""

    def test_flags(self):
        """Test income is 0 and expense is 1."""
        assert TransactionKind.INCOME.flag == 0
        assert TransactionKind.EXPENSE.flag == 1

    def test_from_flag(self):
        """Test decoding flags."""
        assert TransactionKind.from_flag(0) is TransactionKind.INCOME
        assert TransactionKind.from_flag(1) is TransactionKind.EXPENSE

    def test_from_unknown_flag(self):
        """Test unknown flags are rejected."""
        with pytest.raises(ValueError):
            TransactionKind.from_flag(2)


class TestDateHelpers:
    """Tests for calendar validation."""

    @pytest.mark.parametrize("year,month,day", [
        (2024, 2, 29),
        (2000, 2, 29),
        (1900, 1, 1),
        (3000, 12, 31),
    ])
    def test_valid_dates(self, year, month, day):
        """Test valid dates, including leap days."""
        assert is_valid_date(year, month, day) is True
        assert make_date(year, month, day) == date(year, month, day)

    @pytest.mark.parametrize("year,month,day", [
        (2023, 2, 29),
        (1900, 2, 29),
        (2025, 4, 31),
        (2025, 13, 1),
        (2025, 0, 10),
        (2025, 1, 0),
        (1899, 12, 31),
        (3001, 1, 1),
    ])
    def test_invalid_dates(self, year, month, day):
        """Test invalid dates raise InvalidDateError."""
        assert is_valid_date(year, month, day) is False
        with pytest.raises(InvalidDateError):
            make_date(year, month, day)


class TestAmountHelpers:
    """Tests for amount parsing."""

    def test_to_amount_from_string(self):
        """Test parsing amounts from user text."""
        assert to_amount(" 12.345 ") == Decimal("12.35")

    def test_to_decimal_keeps_precision(self):
        """Test thresholds are not rounded."""
        assert to_decimal("9.999") == Decimal("9.999")

    def test_to_amount_rejects_text(self):
        """Test non-numeric input."""
        with pytest.raises(InvalidAmountError):
            to_amount("twelve")

    def test_to_amount_rejects_infinity(self):
        """Test non-finite input."""
        with pytest.raises(InvalidAmountError):
            to_amount("Infinity")


class TestLedgerSummary:
    """Tests for the summary model."""

    def test_net_savings(self):
        """Test savings are income minus expenses."""
        summary = LedgerSummary(
            total_income=Decimal("100.00"),
            total_expense=Decimal("150.00"),
        )
        assert summary.net_savings == Decimal("-50.00")
        assert summary.as_tuple() == (Decimal("100.00"), Decimal("150.00"), Decimal("-50.00"))


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.LEDGER_SORTED,
            description="Ledger sorted",
        )
        assert event.event_type == AuditEventType.LEDGER_SORTED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            description="Saved",
            details={"path": "finance_data.txt", "count": 3},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "ledger_saved"
        assert log_dict["details"]["count"] == 3

    def test_builder_transaction_added(self):
        """Test AuditEventBuilder.transaction_added."""
        correlation_id = uuid4()
        event = AuditEventBuilder.transaction_added(
            index=4,
            transaction={"kind": "expense", "amount": "12.00"},
            correlation_id=correlation_id,
        )
        assert event.event_type == AuditEventType.TRANSACTION_ADDED
        assert event.correlation_id == correlation_id
        assert event.details["index"] == 4
        assert event.is_user_action is True

    def test_builder_save_failed_is_error(self):
        """Test AuditEventBuilder.save_failed severity."""
        event = AuditEventBuilder.save_failed(
            path="/nowhere/file.txt",
            error_message="No such directory",
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "No such directory"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
