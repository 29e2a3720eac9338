"""
Streamlit Frontend for Finance Tracker

The interactive shell around the ledger. Every page maps to one ledger
operation; input validation is done by the widgets themselves
(bounded integers, positive amounts, text with defaults) before the
ledger is called.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Clear error messages in simple language
3. Nothing is written to disk without an explicit "Save" action
"""

from datetime import date
from decimal import Decimal

import streamlit as st

from finance_tracker.audit import create_correlation_id
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.errors import IOFailureError, LedgerError
from finance_tracker.models.transaction import (
    MAX_YEAR,
    MIN_YEAR,
    SearchField,
    SortKey,
    TransactionKind,
)
from finance_tracker.orchestrator import LedgerSession, create_session
from finance_tracker.reports import (
    format_summary,
    render_monthly_chart,
    transaction_rows,
)


# Page configuration
st.set_page_config(
    page_title="Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)


def get_session() -> LedgerSession:
    """Get or create this browser session's ledger, loading the data file once."""
    if "ledger_session" not in st.session_state:
        session = create_session()
        count = session.start()
        st.session_state.ledger_session = session
        st.session_state.startup_message = (
            f"Welcome! {count} existing record(s) loaded from {session.storage_location}."
        )
    return st.session_state.ledger_session


def show_rows(rows, empty_message: str) -> None:
    rows = list(rows)
    if not rows:
        st.info(empty_message)
        return
    st.dataframe(transaction_rows(rows), use_container_width=True, hide_index=True)


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [
            "➕ Add Transaction",
            "📋 Transactions",
            "🔍 Search",
            "💸 Large Expenses",
            "📊 Monthly Chart",
            "🧮 Summary",
            "💾 Save / Load",
            "⚙️ Settings",
        ],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"**Records:** {session.store.count} / {session.store.capacity}"
    )
    if st.session_state.get("startup_message"):
        st.sidebar.caption(st.session_state.startup_message)

    if page == "➕ Add Transaction":
        render_add_page(session)
    elif page == "📋 Transactions":
        render_list_page(session)
    elif page == "🔍 Search":
        render_search_page(session)
    elif page == "💸 Large Expenses":
        render_filter_page(session)
    elif page == "📊 Monthly Chart":
        render_chart_page(session)
    elif page == "🧮 Summary":
        render_summary_page(session)
    elif page == "💾 Save / Load":
        render_storage_page(session)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_add_page(session: LedgerSession):
    """Render the add transaction form."""
    st.title("➕ Add Transaction")

    if session.store.is_full:
        st.error("Storage full. Delete some records before adding new ones.")
        return

    with st.form("add_transaction", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            tx_date = st.date_input(
                "Date",
                value=date.today(),
                min_value=date(MIN_YEAR, 1, 1),
                max_value=date(MAX_YEAR, 12, 31),
            )
            kind = st.selectbox(
                "Type",
                options=list(TransactionKind),
                format_func=lambda k: k.value.title(),
            )
        with col2:
            category = st.text_input(
                "Category",
                placeholder="e.g., Salary, Food, Rent",
                help="Left blank: Salary for income, Misc for expenses",
            )
            amount = st.number_input(
                "Amount",
                min_value=0.0,
                step=1.0,
                format="%.2f",
            )
        note = st.text_input("Note (optional)")

        submitted = st.form_submit_button("Add", type="primary")

    if submitted:
        try:
            index = session.add_entry(
                year=tx_date.year,
                month=tx_date.month,
                day=tx_date.day,
                kind=kind,
                category=category,
                amount=Decimal(str(amount)),
                note=note,
                correlation_id=create_correlation_id(),
            )
        except LedgerError as e:
            st.error(str(e))
        else:
            st.success(f"Transaction added at index {index}. Total = {session.store.count}")


def render_list_page(session: LedgerSession):
    """Render the full listing with sort and delete controls."""
    st.title("📋 Transactions")

    if session.store.count == 0:
        st.info("No transactions.")
        return

    col1, col2 = st.columns(2)
    with col1:
        sort_key = st.selectbox(
            "Sort by",
            options=list(SortKey),
            format_func=lambda k: {
                SortKey.BY_DATE_ASC: "Date (ascending)",
                SortKey.BY_AMOUNT_DESC: "Amount (descending)",
            }[k],
        )
        if st.button("↕️ Sort"):
            session.sort(sort_key, correlation_id=create_correlation_id())
            st.success("Sorted.")
    with col2:
        index = st.number_input(
            "Index to delete",
            min_value=0,
            max_value=session.store.count - 1,
            step=1,
        )
        if st.button("🗑️ Delete"):
            try:
                session.delete(int(index), correlation_id=create_correlation_id())
            except LedgerError as e:
                st.error(str(e))
            else:
                st.success(f"Deleted. Remaining = {session.store.count}")
                st.rerun()

    st.markdown("---")
    show_rows(session.store.list_all(), "No transactions.")


def render_search_page(session: LedgerSession):
    """Render the search page."""
    st.title("🔍 Search")

    field = st.radio(
        "Search by",
        options=list(SearchField),
        format_func=lambda f: {
            SearchField.CATEGORY: "Category contains text",
            SearchField.NOTE: "Note contains text",
            SearchField.DATE: "Date equals",
        }[f],
        horizontal=True,
    )

    if field is SearchField.DATE:
        query = st.date_input(
            "Date",
            value=date.today(),
            min_value=date(MIN_YEAR, 1, 1),
            max_value=date(MAX_YEAR, 12, 31),
        )
    else:
        query = st.text_input("Text")

    if st.button("Search", type="primary"):
        try:
            matches = session.store.search(field, query)
        except LedgerError as e:
            st.error(str(e))
            return
        show_rows(matches, "No matches.")


def render_filter_page(session: LedgerSession):
    """Render the expenses-over-threshold filter."""
    st.title("💸 Large Expenses")

    threshold = st.number_input(
        "Show expenses over amount",
        min_value=0.0,
        step=10.0,
        format="%.2f",
    )
    matches = session.store.filter_expenses_above(Decimal(str(threshold)))
    show_rows(matches, "No expenses above that amount.")


def render_chart_page(session: LedgerSession):
    """Render the ASCII monthly expense chart."""
    st.title("📊 Monthly Expense Chart")

    year = st.number_input(
        "Year",
        min_value=MIN_YEAR,
        max_value=MAX_YEAR,
        value=date.today().year,
        step=1,
    )
    totals = session.store.monthly_expense_totals(int(year))
    chart = render_monthly_chart(totals, int(year), width=get_settings().app.chart_width)
    st.code(chart, language=None)


def render_summary_page(session: LedgerSession):
    """Render all-time totals."""
    st.title("🧮 Summary")

    summary = session.store.summary()
    col1, col2, col3 = st.columns(3)
    col1.metric("Income", f"{summary.total_income:,.2f}")
    col2.metric("Expense", f"{summary.total_expense:,.2f}")
    col3.metric("Savings", f"{summary.net_savings:,.2f}")

    st.caption(f"Summary (all time): {format_summary(summary)}")


def render_storage_page(session: LedgerSession):
    """Render explicit save and reload actions."""
    st.title("💾 Save / Load")
    st.markdown(f"Data file: `{session.storage_location}`")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("💾 Save to file", type="primary"):
            try:
                count = session.save(correlation_id=create_correlation_id())
            except IOFailureError as e:
                st.error(f"Save failed. {e}")
            else:
                st.success(f"Saved {count} record(s) to '{session.storage_location}'.")
    with col2:
        if st.button("📂 Load from file"):
            try:
                count = session.load(correlation_id=create_correlation_id())
            except IOFailureError as e:
                st.error(f"Load failed. {e}")
            else:
                st.success(f"Loaded from '{session.storage_location}'. {count} records.")

    st.markdown("---")
    st.markdown("### Recent Activity")
    events = session.audit_logger.recent_events(limit=20)
    if not events:
        st.info("Nothing has happened yet in this session.")
    for event in events:
        st.markdown(
            f"- `{event.timestamp.strftime('%H:%M:%S')}` {event.description}"
        )


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Storage", "storage"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    if status.get("app", False):
        app_settings = get_settings().app
        st.markdown(f"- Capacity: {app_settings.max_transactions} records")
        st.markdown(f"- Chart width: {app_settings.chart_width} characters")
        st.markdown(f"- Log level: {app_settings.log_level}")

    st.markdown("---")
    st.markdown(
        "To configure the application, set `FINANCE_TRACKER_*` environment "
        "variables or create a `.env` file."
    )


if __name__ == "__main__":
    main()
