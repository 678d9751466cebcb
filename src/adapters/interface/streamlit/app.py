"""Streamlit viewer for monthly reports."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

import streamlit as st
import altair as alt

from src.domain.errors import MalformedPeriod, ReportNotFound
from src.domain.models.reports import (
    MonthlyReport,
    PageRequest,
    PeriodRangeSummary,
    ReportPage,
)
from src.domain.services.periods import derive_period
from src.infrastructure.container import (
    build_delete_report_use_case,
    build_list_reports_use_case,
    build_summarize_range_use_case,
)


def _fetch_summary(
    user_id: str,
    start_period: str,
    end_period: str,
) -> PeriodRangeSummary:
    """Fetch the range summary from the reports database."""
    use_case = build_summarize_range_use_case()
    return use_case.execute(user_id, start_period, end_period)


def _fetch_reports_page(user_id: str, page: int, size: int) -> ReportPage:
    """Fetch one page of reports from the reports database."""
    use_case = build_list_reports_use_case()
    return use_case.execute(user_id, PageRequest(page=page, size=size))


def _delete_report(user_id: str, period: str) -> None:
    """Delete a report through the administrative use case."""
    use_case = build_delete_report_use_case()
    use_case.execute(user_id, period)


def _format_currency(value: Decimal) -> str:
    """Format money values for display."""
    return f"{value:,.2f}"


def _default_range(today: date) -> tuple[str, str]:
    """Return the January-to-current-month range of the current year."""
    return f"{today.year:04d}-01", derive_period(today)


def _report_rows(reports: Sequence[MonthlyReport]) -> list[dict[str, str]]:
    """Convert reports into table rows."""
    return [
        {
            "Period": report.period,
            "Income": _format_currency(report.total_income),
            "Expense": _format_currency(report.total_expense),
            "Balance": _format_currency(report.balance),
        }
        for report in reports
    ]


def _prepare_chart_data(
    reports: Sequence[MonthlyReport],
) -> list[dict[str, str | float]]:
    """Return long-form chart data with one row per period and kind."""
    data: list[dict[str, str | float]] = []
    for report in reports:
        data.append(
            {
                "period": report.period,
                "kind": "Income",
                "amount": float(report.total_income),
            }
        )
        data.append(
            {
                "period": report.period,
                "kind": "Expense",
                "amount": float(report.total_expense),
            }
        )
    return data


def _render_monthly_chart(reports: Sequence[MonthlyReport]) -> None:
    """Render grouped income and expense bars per month."""
    if not reports:
        st.info("No reports in the selected range.")
        return
    chart = alt.Chart(alt.Data(values=_prepare_chart_data(reports))).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("period:N", title=None),
        xOffset="kind:N",
        y=alt.Y("amount:Q", title="Amount"),
        color=alt.Color(
            "kind:N",
            scale=alt.Scale(
                domain=["Income", "Expense"],
                range=["#2e7d32", "#e76f51"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("period:N"),
            alt.Tooltip("kind:N"),
            alt.Tooltip("amount:Q", format=",.2f"),
        ],
    )
    st.altair_chart(chart, width="stretch")


def _render_summary(user_id: str) -> None:
    """Render range totals, the monthly chart and the breakdown table."""
    default_start, default_end = _default_range(date.today())
    start_col, end_col = st.columns(2)
    start_period = start_col.text_input("From (YYYY-MM)", value=default_start)
    end_period = end_col.text_input("To (YYYY-MM)", value=default_end)
    try:
        summary = _fetch_summary(user_id, start_period, end_period)
    except MalformedPeriod as exc:
        st.error(str(exc))
        return

    income_col, expense_col, balance_col = st.columns(3)
    income_col.metric("Income", _format_currency(summary.total_income))
    expense_col.metric("Expense", _format_currency(summary.total_expense))
    balance_col.metric("Balance", _format_currency(summary.balance))
    _render_monthly_chart(summary.reports)
    st.dataframe(
        _report_rows(summary.reports),
        width="stretch",
        hide_index=True,
    )


def _render_reports(user_id: str) -> None:
    """Render a paginated list of reports with a delete action."""
    page_number = int(st.number_input("Page", min_value=1, value=1)) - 1
    page = _fetch_reports_page(user_id, page_number, size=12)
    st.caption(
        f"{page.total_elements} reports, page {page.page + 1} "
        f"of {max(page.total_pages, 1)}"
    )
    if not page.items:
        st.warning("No reports found for this user.")
        return
    st.dataframe(_report_rows(page.items), width="stretch", hide_index=True)

    period = st.selectbox(
        "Report to delete",
        options=[report.period for report in page.items],
    )
    if st.button("Delete report"):
        try:
            _delete_report(user_id, period)
        except ReportNotFound as exc:
            st.warning(str(exc))
            return
        st.success(f"Deleted report {period}.")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Monthly Reports", layout="wide")
    st.title("Monthly Reports")

    user_id = st.sidebar.text_input("User ID").strip()
    page = st.sidebar.selectbox("Page", ["Summary", "Reports"])
    if not user_id:
        st.warning("Enter a user ID to load reports.")
        return

    if page == "Summary":
        _render_summary(user_id)
    else:
        _render_reports(user_id)


if __name__ == "__main__":  # pragma: no cover
    main()
