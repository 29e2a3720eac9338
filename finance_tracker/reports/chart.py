"""
ASCII Monthly Expense Chart

Turns the twelve monthly expense totals of one year into a text bar chart.
The longest bar belongs to the most expensive month and is `width`
characters long; every other bar is scaled against it.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DEFAULT_CHART_WIDTH = 50
BAR_CHAR = "#"


def bar_lengths(
    totals: Sequence[Decimal],
    width: int = DEFAULT_CHART_WIDTH,
) -> list[int]:
    """
    Scale monthly totals to bar lengths.

    Each bar is round(total / max_total * width), rounding halves up.
    Returns all zeros when no month has expenses.
    """
    peak = max(totals, default=Decimal("0"))
    if peak <= 0:
        return [0] * len(totals)
    lengths = []
    for total in totals:
        scaled = Decimal(total) / Decimal(peak) * width
        lengths.append(max(0, int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))))
    return lengths


def has_expenses(totals: Sequence[Decimal]) -> bool:
    return any(total > 0 for total in totals)


def render_monthly_chart(
    totals: Sequence[Decimal],
    year: int,
    width: int = DEFAULT_CHART_WIDTH,
) -> str:
    """
    Render the chart as text.

    Example row:  "Jan | ##########  125.00"
    """
    if len(totals) != 12:
        raise ValueError(f"Expected 12 monthly totals, got {len(totals)}")
    if not has_expenses(totals):
        return f"No expenses recorded for {year}."

    lines = [f"Monthly Expense Chart for {year} (each {BAR_CHAR} ~ scaled)"]
    for name, total, length in zip(MONTH_NAMES, totals, bar_lengths(totals, width)):
        lines.append(f"{name:>3} | {BAR_CHAR * length}  {total:.2f}")
    lines.append("")
    lines.append(f"Total expenses in {year}: {sum(totals, Decimal('0')):.2f}")
    return "\n".join(lines)
