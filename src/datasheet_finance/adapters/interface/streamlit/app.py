"""Streamlit interface for the datasheet finance widgets."""

import asyncio
from collections.abc import Sequence

import altair as alt
import streamlit as st

from datasheet_finance.application.use_cases.get_financial_summary import (
    DashboardView,
    GetFinancialSummaryUseCase,
)
from datasheet_finance.application.use_cases.line_items import (
    AddRecordUseCase,
    GetRecordTreeUseCase,
    SplitLineItemsUseCase,
)
from datasheet_finance.application.use_cases.split_transaction import (
    EDITING,
    IDLE,
    CommitGate,
    ListSplitCandidatesUseCase,
    SplitSession,
)
from datasheet_finance.domain.constants import GROUP_BY_OPTIONS
from datasheet_finance.domain.errors import DatasheetFinanceError
from datasheet_finance.domain.models import (
    ChartBucket,
    FieldRoleMap,
    FinancialSummary,
    SetupIncomplete,
    Transaction,
)
from datasheet_finance.domain.services.finance import (
    chart_title,
    format_currency,
)
from datasheet_finance.domain.services.reprocessing import ReprocessingGuard
from datasheet_finance.infrastructure.container import (
    build_field_role_resolver,
    build_record_store,
)
from datasheet_finance.infrastructure.settings import DashboardSettings


ROLE_DESCRIPTIONS = {
    "title": "Text field for transaction descriptions",
    "type": 'Single select field with "Revenue" and "Expense" options',
    "amount": "Number or currency field for transaction amounts",
    "product": "Text field for comma-separated product list, or a link field",
}

GROUP_BY_LABELS = {
    "type": "Type (Revenue/Expense)",
    "merchant": "Merchant",
    "category": "Category",
    "date": "Date (Monthly)",
}

SERIES_COLORS = {"Revenue": "#28a745", "Expenses": "#dc3545"}

FLASH_KEY = "flash_message"


@st.cache_resource(show_spinner=False)
def _load_services():
    """Build the record store, role resolver and settings once per process."""
    settings = DashboardSettings.from_env()
    return (
        build_record_store(settings),
        build_field_role_resolver(settings),
        settings,
    )


def _session_value(key: str, factory):
    """Return a per-browser-session value, creating it on first use."""
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def _queue_flash(message: str) -> None:
    """Keep a success message for the run after the next rerun."""
    st.session_state[FLASH_KEY] = message


def _show_flash() -> None:
    """Show and clear the message queued before the last rerun."""
    message = st.session_state.pop(FLASH_KEY, None)
    if message:
        st.success(message)


def _prepare_chart_data(
    buckets: Sequence[ChartBucket],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Flatten buckets into one row per label and series for Altair.

    Args:
        buckets: Chart buckets in display order.
        currency_code: Currency used for the tooltip labels.

    Returns:
        list[dict[str, str | float]]: Revenue and expense rows per bucket.
    """
    data: list[dict[str, str | float]] = []
    for order, bucket in enumerate(buckets):
        for series, amount in (
            ("Revenue", bucket.revenue),
            ("Expenses", bucket.expenses),
        ):
            data.append(
                {
                    "label": bucket.label,
                    "series": series,
                    "amount": float(amount),
                    "order": order,
                    "amount_label": format_currency(amount, currency_code),
                    "net_label": format_currency(bucket.net, currency_code),
                    "count": bucket.count,
                }
            )
    return data


def _transaction_rows(
    transactions: Sequence[Transaction],
    currency_code: str,
) -> list[dict[str, str]]:
    """Return table rows for the transaction list."""
    return [
        {
            "Title": tx.title,
            "Type": tx.kind,
            "Amount": format_currency(tx.amount, currency_code),
            "Category": tx.category,
            "Merchant": tx.merchant,
            "Date": tx.date or "No date",
        }
        for tx in transactions
    ]


def _render_setup_required(missing_roles: Sequence[str]) -> None:
    """Explain which fields the datasheet is missing."""
    st.error("Setup Required")
    lines = [
        f"- **{role.title()}:** {ROLE_DESCRIPTIONS.get(role, 'Required field')}"
        for role in missing_roles
    ]
    st.markdown(
        "This widget requires a datasheet with these fields:\n\n"
        + "\n".join(lines)
    )


def _render_summary_metrics(
    summary: FinancialSummary,
    currency_code: str,
) -> None:
    revenue_col, expenses_col, net_col, margin_col = st.columns(4)
    revenue_col.metric(
        "Total Revenue",
        format_currency(summary.total_revenue, currency_code),
        f"{len(summary.revenue_transactions)} transactions",
        delta_color="off",
    )
    expenses_col.metric(
        "Total Expenses",
        format_currency(summary.total_expenses, currency_code),
        f"{len(summary.expense_transactions)} transactions",
        delta_color="off",
    )
    net_col.metric(
        "Net Profit",
        format_currency(summary.net_profit, currency_code),
    )
    margin_col.metric("Profit Margin", f"{summary.profit_margin:.1f}%")


def _render_chart(view: DashboardView, currency_code: str) -> None:
    """Render grouped revenue and expense bars per bucket."""
    st.subheader(chart_title(view.group_by))
    if not view.chart:
        st.info("No data available for the selected grouping")
        return
    data = _prepare_chart_data(view.chart, currency_code)
    chart = alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X(
            "label:N",
            title=None,
            sort=alt.SortField("order", order="ascending"),
        ),
        xOffset=alt.XOffset("series:N"),
        y=alt.Y("amount:Q", title=None),
        color=alt.Color(
            "series:N",
            scale=alt.Scale(
                domain=list(SERIES_COLORS),
                range=list(SERIES_COLORS.values()),
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("label:N"),
            alt.Tooltip("series:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("net_label:N"),
            alt.Tooltip("count:Q"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _render_dashboard(store, resolver, settings: DashboardSettings) -> None:
    group_by = st.sidebar.selectbox(
        "Group chart by",
        options=list(GROUP_BY_OPTIONS),
        index=list(GROUP_BY_OPTIONS).index(settings.group_by),
        format_func=lambda option: GROUP_BY_LABELS[option],
    )
    show_transactions = st.sidebar.checkbox(
        "Show detailed transaction list",
        value=settings.show_transactions,
    )
    view = GetFinancialSummaryUseCase(store, resolver).execute(group_by)
    if not view.setup_complete:
        _render_setup_required(view.missing_roles)
        return
    _render_summary_metrics(view.summary, settings.currency)
    _render_chart(view, settings.currency)
    if show_transactions:
        st.subheader("Transactions")
        st.dataframe(
            _transaction_rows(view.summary.transactions, settings.currency),
            width="stretch",
            hide_index=True,
        )


def _split_session(store, roles: FieldRoleMap) -> SplitSession:
    """Return this browser session's split session, rebuilt on role changes."""
    guard = _session_value("reprocessing_guard", ReprocessingGuard)
    gate = _session_value("commit_gate", CommitGate)
    session = st.session_state.get("split_session")
    if session is None or (session.state == IDLE and session.roles != roles):
        session = SplitSession(store, roles, guard=guard, gate=gate)
        st.session_state["split_session"] = session
    return session


def _render_split_editor(session: SplitSession, currency_code: str) -> None:
    transaction = session.transaction
    st.subheader(f"Split: {transaction.title}")
    st.caption(
        f"{transaction.kind} · {transaction.category} · "
        f"{transaction.merchant} · {transaction.date or 'No date'} · "
        f"Original: {format_currency(transaction.amount, currency_code)}"
    )
    for allocation in session.allocations:
        amount = st.number_input(
            f"Product: {allocation.product.name}",
            min_value=0.0,
            step=0.01,
            value=float(allocation.edited_amount),
            key=f"split-{allocation.original_id}-{allocation.product_key}",
        )
        if amount != allocation.edited_amount:
            session.edit_amount(allocation.product_key, amount)
    total = sum(item.edited_amount for item in session.allocations)
    st.caption(
        f"Allocated {format_currency(total, currency_code)} of "
        f"{format_currency(transaction.amount, currency_code)}"
    )

    commit_col, cancel_col = st.columns(2)
    if commit_col.button("Create split records", type="primary"):
        try:
            result = asyncio.run(session.commit())
        except DatasheetFinanceError as exc:
            st.error(f"Error creating split transactions: {exc}")
        else:
            _queue_flash(
                f"Successfully created {result.created_count} split "
                "transactions! Original transaction is now hidden. You can "
                "manually mark it as reconciled."
            )
            st.rerun()
    if cancel_col.button("Cancel"):
        session.cancel()
        st.rerun()


def _render_split_page(store, resolver, settings: DashboardSettings) -> None:
    guard = _session_value("reprocessing_guard", ReprocessingGuard)
    use_case = ListSplitCandidatesUseCase(store, resolver, guard)
    candidates = use_case.execute()
    if isinstance(candidates, SetupIncomplete):
        _render_setup_required(candidates.missing_roles)
        return

    session = _split_session(store, use_case.resolve_roles())
    if session.state == EDITING:
        _render_split_editor(session, settings.currency)
        return

    st.caption(f"{len(candidates)} transactions with multiple products")
    if not candidates:
        st.info("No transactions need splitting.")
        return
    for tx in candidates:
        label_col, action_col = st.columns([4, 1])
        label_col.markdown(
            f"**{tx.title}** · {tx.product_count} products · "
            f"{format_currency(tx.amount, settings.currency)}"
        )
        if action_col.button("Split", key=f"select-{tx.id}"):
            session.select(tx)
            st.rerun()


def _render_line_items_page(store, resolver) -> None:
    roles = resolver.resolve(store.fetch_fields())
    title = st.text_input("New transaction", placeholder="Transaction name")
    if st.button("Add"):
        try:
            asyncio.run(AddRecordUseCase(store).execute(title, roles))
        except DatasheetFinanceError as exc:
            st.warning(str(exc))
        else:
            st.rerun()

    tree = GetRecordTreeUseCase(store, resolver).execute()
    if isinstance(tree, SetupIncomplete):
        _render_setup_required(tree.missing_roles)
        return
    if not tree.parents:
        st.info("No records with multiple line items.")
        return
    gate = _session_value("commit_gate", CommitGate)
    for parent in tree.parents:
        children = tree.children_for(parent.record_id)
        with st.expander(
            f"{parent.title or 'Untitled Transaction'} "
            f"({len(children)} children)"
        ):
            for child in children:
                st.write(child.title)
            if st.button("Split line items", key=f"items-{parent.record_id}"):
                try:
                    created = asyncio.run(
                        SplitLineItemsUseCase(store, gate=gate).execute(
                            parent,
                            roles,
                        )
                    )
                except DatasheetFinanceError as exc:
                    st.error(f"Failed to split transaction: {exc}")
                else:
                    _queue_flash(f"Created {created} line-item records")
                    st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Datasheet Finance", layout="wide")
    st.title("Datasheet Finance")
    _show_flash()

    store, resolver, settings = _load_services()
    page = st.sidebar.selectbox(
        "Page",
        ["Dashboard", "Split Expenses", "Line Items"],
    )
    if page == "Dashboard":
        _render_dashboard(store, resolver, settings)
    elif page == "Split Expenses":
        _render_split_page(store, resolver, settings)
    else:
        _render_line_items_page(store, resolver)


if __name__ == "__main__":  # pragma: no cover
    main()
