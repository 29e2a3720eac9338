"""Text reports: listings, totals and the monthly expense chart."""

from finance_tracker.reports.chart import (
    DEFAULT_CHART_WIDTH,
    MONTH_NAMES,
    bar_lengths,
    has_expenses,
    render_monthly_chart,
)
from finance_tracker.reports.table import (
    TABLE_HEADER,
    format_row,
    format_summary,
    format_transaction_table,
    transaction_rows,
)

__all__ = [
    "DEFAULT_CHART_WIDTH",
    "MONTH_NAMES",
    "TABLE_HEADER",
    "bar_lengths",
    "format_row",
    "format_summary",
    "format_transaction_table",
    "has_expenses",
    "render_monthly_chart",
    "transaction_rows",
]
