"""
Streamlit Frontend for the Accounting Ledger

This is the screen users interact with day to day.
Run with: streamlit run app/main.py

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Clear error messages in simple language
3. Visual feedback for all operations
4. No hidden actions: every saved entry is shown back to the user

The UI holds no ledger logic. Everything goes through LedgerSession.
"""

from datetime import date

import streamlit as st

from accounting_ledger.audit import create_correlation_id
from accounting_ledger.models.transaction import ReportResult, ReportType
from accounting_ledger.orchestrator import LedgerSession, create_app_components
from accounting_ledger.services.storage import PersistenceError
from accounting_ledger.validation import InputValidationError


# Page configuration
st.set_page_config(
    page_title="Accounting Ledger",
    page_icon="📒",
    layout="wide",
    initial_sidebar_state="expanded",
)


CANNED_REPORTS = {
    "Month To Date": ReportType.MONTH_TO_DATE,
    "Previous Month": ReportType.PREVIOUS_MONTH,
    "Year To Date": ReportType.YEAR_TO_DATE,
    "Previous Year": ReportType.PREVIOUS_YEAR,
}

LEDGER_VIEWS = {
    "All Transactions": ReportType.ALL,
    "Deposits Only": ReportType.DEPOSITS,
    "Payments Only": ReportType.PAYMENTS,
}


@st.cache_resource
def get_session() -> LedgerSession:
    """Create the session and load the ledger once per server process."""
    session, _ = create_app_components()
    return session


def main():
    """Main application entry point."""
    session = get_session()

    st.sidebar.title("📒 Accounting Ledger")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["🏠 Home", "📒 Ledger", "📊 Reports", "🕘 Activity", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    st.sidebar.metric("Transactions", len(session.ledger))
    st.sidebar.metric("Balance", f"${session.ledger.balance:,.2f}")

    if session.load_error:
        st.error(f"Error loading transactions: {session.load_error}")
        st.info("Starting with an empty ledger.")
    elif session.warnings:
        with st.expander(f"⚠️ {len(session.warnings)} lines were skipped while loading"):
            for warning in session.warnings:
                st.markdown(f"- {warning}")

    if page == "🏠 Home":
        render_home_page(session)
    elif page == "📒 Ledger":
        render_ledger_page(session)
    elif page == "📊 Reports":
        render_reports_page(session)
    elif page == "🕘 Activity":
        render_activity_page(session)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_home_page(session: LedgerSession):
    """Deposit and payment entry."""
    st.title("🏠 Home")

    deposit_tab, payment_tab = st.tabs(["➕ Add Deposit", "➖ Make Payment"])

    with deposit_tab:
        render_entry_form(session, kind="deposit")

    with payment_tab:
        render_entry_form(session, kind="payment")


def render_entry_form(session: LedgerSession, kind: str):
    """One form for both entry kinds; the amount is always typed positive."""
    with st.form(f"{kind}_form", clear_on_submit=True):
        description = st.text_input("Description *", key=f"{kind}_description")
        vendor = st.text_input("Vendor *", key=f"{kind}_vendor")
        amount = st.text_input(
            "Amount ($) *",
            key=f"{kind}_amount",
            help="Enter a positive number; payments are stored as negative amounts",
        )
        submitted = st.form_submit_button(
            "Save Deposit" if kind == "deposit" else "Save Payment",
            type="primary",
        )

    if not submitted:
        return

    record = session.add_deposit if kind == "deposit" else session.make_payment
    try:
        transaction, validation = record(
            description, vendor, amount, correlation_id=create_correlation_id()
        )
    except InputValidationError as e:
        st.error(session.validator.get_user_friendly_summary(e.result))
        return
    except PersistenceError as e:
        st.error(f"Error saving {kind}: {e}")
        return

    st.success(f"✓ {kind.capitalize()} recorded successfully!")
    st.code(str(transaction))
    for warning in validation.warnings:
        st.warning(warning)


def render_ledger_page(session: LedgerSession):
    """All / deposits / payments, newest first."""
    st.title("📒 Ledger")

    view = st.radio("Show", list(LEDGER_VIEWS), horizontal=True)
    render_report(session.run_report(LEDGER_VIEWS[view]))


def render_reports_page(session: LedgerSession):
    """Canned reports, vendor search and custom search."""
    st.title("📊 Reports")

    canned_tab, vendor_tab, custom_tab = st.tabs(
        ["📅 Date Reports", "🏪 Search by Vendor", "🔍 Custom Search"]
    )

    with canned_tab:
        choice = st.selectbox("Report", list(CANNED_REPORTS))
        today = st.date_input("As of", value=date.today())
        render_report(session.run_report(CANNED_REPORTS[choice], today=today))

    with vendor_tab:
        with st.form("vendor_search_form"):
            vendor = st.text_input("Enter vendor name")
            submitted = st.form_submit_button("Search", type="primary")
        if submitted:
            try:
                render_report(session.search_by_vendor(vendor))
            except InputValidationError as e:
                st.error(session.validator.get_user_friendly_summary(e.result))

    with custom_tab:
        st.markdown("Enter search criteria (leave blank to skip):")
        with st.form("custom_search_form"):
            col1, col2 = st.columns(2)
            with col1:
                start_date = st.text_input("Start Date (YYYY-MM-DD)")
                description = st.text_input("Description")
                min_amount = st.text_input("Minimum Amount ($)")
            with col2:
                end_date = st.text_input("End Date (YYYY-MM-DD)")
                vendor = st.text_input("Vendor")
                max_amount = st.text_input("Maximum Amount ($)")
            submitted = st.form_submit_button("Search", type="primary")
        if submitted:
            try:
                render_report(session.custom_search(
                    start_date=start_date,
                    end_date=end_date,
                    description=description,
                    vendor=vendor,
                    min_amount=min_amount,
                    max_amount=max_amount,
                ))
            except InputValidationError as e:
                st.error(session.validator.get_user_friendly_summary(e.result))


def render_report(result: ReportResult):
    """Render a report table with its totals."""
    st.subheader(result.title)
    if result.description:
        st.caption(result.description)

    if not result.success:
        st.error(result.error_message)
        return

    if not result.data_found:
        st.info("No transactions found.")
        return

    st.dataframe(
        [row.model_dump(mode="json") for row in result.rows],
        use_container_width=True,
        hide_index=True,
    )

    summary = result.summary
    col1, col2, col3 = st.columns(3)
    col1.metric("Balance", f"${summary.total_amount:,.2f}", f"{summary.total_count} transactions")
    col2.metric("Deposits", f"${summary.deposit_total:,.2f}", f"{summary.deposit_count}")
    col3.metric("Payments", f"${summary.payment_total:,.2f}", f"{summary.payment_count}")


def render_activity_page(session: LedgerSession):
    """Recent audit events of this session."""
    st.title("🕘 Activity")

    audit_logger = session.audit_logger
    if audit_logger is None or audit_logger.storage is None:
        st.info("Activity history is not enabled.")
        return

    events = audit_logger.storage.get_recent_events(limit=100)
    if not events:
        st.info("No activity yet.")
        return

    for event in events:
        icon = {"warning": "⚠️", "error": "❌", "critical": "❌"}.get(event.severity.value, "✅")
        st.markdown(
            f"{icon} `{event.timestamp.strftime('%H:%M:%S')}` **{event.event_type.value}** "
            f"{event.description}"
        )
        if event.error_message:
            st.caption(event.error_message)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    from accounting_ledger.config import get_settings, validate_all_settings

    status = validate_all_settings()

    for name, key in [("Ledger File", "ledger"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            st.error(f"❌ {name} - {status.get(f'{key}_error', 'Not configured')}")

    if status.get("ledger"):
        st.markdown(f"**Ledger file:** `{get_settings().ledger.file_path}`")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "Settings are read from environment variables or a `.env` file, "
        "e.g. `LEDGER_FILE_PATH=~/ledger/transactions.csv`."
    )


if __name__ == "__main__":
    main()
