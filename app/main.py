"""
Streamlit Frontend for spendlog

A small UI over the same flows the CLI uses:
- Add Transaction: form for name, category and amount
- Spending Summary: category/interval filters and the text report

DESIGN PRINCIPLES:
1. Nothing is written until the user presses "Save"
2. Errors are shown exactly as the CLI reports them
3. The ledger file is the only state; refreshing the page is always safe

Run with:
    streamlit run app/main.py
"""

import streamlit as st

from spendlog.audit import configure_logging
from spendlog.config import get_settings
from spendlog.errors import LedgerError
from spendlog.orchestrator import (
    AppendTransactionFlow,
    SummaryFlow,
    create_app_components,
    describe_error,
)
from spendlog.queries import format_currency


st.set_page_config(
    page_title="spendlog",
    page_icon="💰",
    layout="centered",
)


@st.cache_resource
def get_components():
    """Initialize app components (cached)."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    append_flow, summary_flow, storage = create_app_components(settings=settings)
    return append_flow, summary_flow, storage


def main():
    """Main application entry point."""
    append_flow, summary_flow, storage = get_components()

    st.sidebar.title("💰 spendlog")
    st.sidebar.markdown("---")
    page = st.sidebar.radio(
        "Go to",
        ["➕ Add Transaction", "📊 Spending Summary"],
        label_visibility="collapsed",
    )
    st.sidebar.markdown("---")
    st.sidebar.caption(f"Ledger: `{storage.location}`")

    if page == "➕ Add Transaction":
        render_add_page(append_flow)
    else:
        render_summary_page(summary_flow)


def render_add_page(append_flow: AppendTransactionFlow):
    """Render the add-transaction form."""
    st.title("➕ Add Transaction")

    with st.form("add_transaction", clear_on_submit=True):
        name = st.text_input("Name", placeholder="Coffee")
        category = st.text_input(
            "Category",
            placeholder="Food",
            help="Matched exactly: 'Food' and 'food' are different categories.",
        )
        amount = st.text_input("Amount", placeholder="3.50")
        submitted = st.form_submit_button("💾 Save", type="primary")

    if not submitted:
        return

    try:
        record, record_count = append_flow.append(
            {"name": name, "category": category, "amount": amount}
        )
    except LedgerError as e:
        st.error("\n\n".join(describe_error(e, "add")))
        return

    st.success(
        f"Saved **{record.name}** ({record.category}) for "
        f"{format_currency(record.amount_minor_units)}. "
        f"The ledger now holds {record_count} transaction(s)."
    )


def render_summary_page(summary_flow: SummaryFlow):
    """Render the spending summary with optional filters."""
    st.title("📊 Spending Summary")

    col1, col2 = st.columns(2)
    with col1:
        category = st.text_input("Category (optional)", placeholder="All categories")
    with col2:
        interval = st.text_input(
            "Interval (optional)",
            placeholder="e.g. 30d, 3m, 1n",
            help="d = days, m = calendar months, n = calendar years",
        )

    try:
        summary = summary_flow.summarize(
            category=category or None,
            interval=interval or None,
        )
    except LedgerError as e:
        st.error("\n\n".join(describe_error(e, "summary")))
        return

    if not summary.is_empty:
        cols = st.columns(len(summary.categories) + 1)
        cols[0].metric("Total", format_currency(summary.grand_total_minor_units))
        for col, accumulator in zip(cols[1:], summary.categories.values()):
            col.metric(accumulator.category, format_currency(accumulator.total_minor_units))

    st.code(summary_flow.render(summary), language=None)


if __name__ == "__main__":
    main()
