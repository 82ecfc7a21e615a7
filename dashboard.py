"""
dashboard.py

Folio Dashboard with Interactive Charts
Renders an extracted folio as header details, a category distribution donut,
a top-expenses bar chart and a filterable transaction table.

Features:
- Header card with guest/stay details and the document total
- Plotly charts fed by the date-range-only chart subset
- Click a slice or bar to filter the table by that category
- Search, category and date-range filters on the table
- CSV export of the filtered rows
"""

from __future__ import annotations

from functools import partial
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from aggregator import aggregate_by_category, top_n
from csv_exporter import CSV_MIME, export_filename, to_csv
from currency import convert, convert_transactions, format_currency
from filter_engine import filter_for_charts, filter_for_table, toggle_category_filter
from folio_types import (
    ALL_CATEGORIES,
    AnalysisResult,
    Category,
    CategoryTotal,
    ConvertedTransaction,
    Currency,
    FilterState,
    Language,
    category_color,
    category_label,
)

SEARCH_KEY = "search_term"
CATEGORY_KEY = "category_filter"
START_KEY = "start_date"
END_KEY = "end_date"
TOP_EXPENSES = 5


def clicked_category(event) -> Optional[str]:
    """Category of the first selected point in a Plotly selection event.

    Returns ``None`` when nothing is selected (a background click).
    """
    if not event:
        return None
    selection = event.get("selection") or {}
    points = selection.get("points") or []
    if not points:
        return None
    point = points[0]
    for key in ("customdata", "label", "y"):
        value = point.get(key)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value:
            return str(value)
    return None


def _dimmed(hex_color: str, alpha: float = 0.3) -> str:
    r, g, b = (int(hex_color[i:i + 2], 16) for i in (1, 3, 5))
    return f"rgba({r},{g},{b},{alpha})"


def build_category_pie(
    data: Mapping[str, float], selected: str, currency: Currency, language: Language
) -> go.Figure:
    names = list(data.keys())
    values = list(data.values())
    fig = go.Figure(data=[go.Pie(
        labels=[category_label(name, language) for name in names],
        values=values,
        customdata=names,
        hole=0.6,
        sort=False,
        marker=dict(
            colors=[
                category_color(name) if selected in (ALL_CATEGORIES, name) else _dimmed(category_color(name))
                for name in names
            ],
            line=dict(
                color=["#000000" if name == selected else "rgba(0,0,0,0)" for name in names],
                width=2,
            ),
        ),
        text=[format_currency(v, currency) for v in values],
        hovertemplate='<b>%{label}</b><br>%{text}<br>%{percent}<extra></extra>',
        textinfo='percent',
    )])
    fig.update_layout(
        height=320,
        margin=dict(t=10, b=10, l=10, r=10),
        showlegend=True,
        legend=dict(orientation="h", yanchor="top", y=-0.05),
    )
    return fig


def build_top_expenses_bar(
    ranked: Sequence[CategoryTotal], selected: str, currency: Currency, language: Language
) -> go.Figure:
    names = [item.name for item in ranked]
    values = [item.value for item in ranked]
    fig = go.Figure(data=[go.Bar(
        x=values,
        y=[category_label(name, language) for name in names],
        customdata=names,
        orientation='h',
        marker=dict(
            color=[category_color(name) for name in names],
            opacity=[1.0 if selected in (ALL_CATEGORIES, name) else 0.3 for name in names],
        ),
        text=[format_currency(v, currency) for v in values],
        hovertemplate='<b>%{y}</b><br>%{text}<extra></extra>',
        textposition='none',
    )])
    fig.update_layout(
        height=320,
        margin=dict(t=10, b=10, l=10, r=10),
        xaxis=dict(visible=False),
        yaxis=dict(autorange="reversed"),
    )
    return fig


def build_table_frame(rows: Sequence[ConvertedTransaction], language: Language) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "date": tx.date,
                "clean_name": tx.clean_name,
                "original_description": tx.original_description,
                "category": category_label(tx.category, language),
                "converted_amount": tx.converted_amount,
            }
            for tx in rows
        ],
        columns=["date", "clean_name", "original_description", "category", "converted_amount"],
    )


class FolioDashboard:
    """Dashboard for one extracted folio, re-rendered on every Streamlit run."""

    def __init__(
        self,
        result: AnalysisResult,
        language: Language,
        currency: Currency,
        labels: Dict[str, str],
        mismatch: Optional[float] = None,
    ):
        self.result = result
        self.language = language
        self.currency = currency
        self.labels = labels
        self.mismatch = mismatch
        self.transactions = convert_transactions(result, currency)

    @staticmethod
    def init_state() -> None:
        st.session_state.setdefault(CATEGORY_KEY, ALL_CATEGORIES)
        st.session_state.setdefault("_last_click_pie", None)
        st.session_state.setdefault("_last_click_bar", None)

    @staticmethod
    def clear_filters() -> None:
        """Button callback resetting every table filter."""
        st.session_state[SEARCH_KEY] = ""
        st.session_state[CATEGORY_KEY] = ALL_CATEGORIES
        st.session_state[START_KEY] = None
        st.session_state[END_KEY] = None

    def current_filter_state(self) -> FilterState:
        # Widget values from the previous run; the widgets are drawn below the charts
        return FilterState(
            search_term=st.session_state.get(SEARCH_KEY) or "",
            category_filter=st.session_state.get(CATEGORY_KEY, ALL_CATEGORIES),
            start_date=st.session_state.get(START_KEY),
            end_date=st.session_state.get(END_KEY),
        )

    def render(self) -> None:
        self.init_state()
        self.render_header()
        state = self.current_filter_state()
        self.render_charts(state)
        self.render_transactions_table()

    def render_header(self) -> None:
        r = self.result
        t = self.labels
        col_title, col_total = st.columns([3, 1])
        with col_title:
            st.header(r.hotel_name)
        with col_total:
            st.metric(t["totalSpend"], format_currency(convert(r.total_amount, r.detected_currency, self.currency), self.currency))

        if self.mismatch is not None:
            st.caption(t["totalMismatch"].format(
                sum=format_currency(convert(r.transaction_sum(), r.detected_currency, self.currency), self.currency)
            ))
        if r.skipped_records:
            st.caption(t["skippedRecords"].format(count=r.skipped_records))

        col1, col2 = st.columns(2)
        with col1:
            st.markdown(f"**{t['guest']}:** {r.guest_name}")
            st.markdown(f"**{t['room']}:** {r.room_number}")
            st.markdown(f"**{t['folio']}:** {r.confirmation_number}")
        with col2:
            st.markdown(f"**{t['checkIn']}:** {r.check_in}")
            st.markdown(f"**{t['checkOut']}:** {r.check_out}")
            st.markdown(f"**{t['address']}:** {r.hotel_address}")

    @staticmethod
    def apply_chart_click(chart: str) -> None:
        """Selection callback of the ``pie`` or ``bar`` chart.

        Runs before the rerun, so both figures are drawn with the new filter.
        """
        # Selections persist across reruns; only a changed selection counts as a click
        clicked = clicked_category(st.session_state.get(f"{chart}_chart"))
        last_key = f"_last_click_{chart}"
        if clicked == st.session_state.get(last_key):
            return
        st.session_state[last_key] = clicked
        st.session_state[CATEGORY_KEY] = toggle_category_filter(
            st.session_state.get(CATEGORY_KEY, ALL_CATEGORIES), clicked
        )

    def render_charts(self, state: FilterState) -> None:
        chart_rows = filter_for_charts(self.transactions, state.start_date, state.end_date)
        aggregated = aggregate_by_category(chart_rows)
        ranked = top_n(aggregated, TOP_EXPENSES)
        selected = state.category_filter

        col1, col2 = st.columns(2)
        with col1:
            st.subheader(self.labels["categoryDistribution"])
            if aggregated:
                st.plotly_chart(
                    build_category_pie(aggregated, selected, self.currency, self.language),
                    use_container_width=True,
                    key="pie_chart",
                    on_select=partial(self.apply_chart_click, "pie"),
                    selection_mode="points",
                )
            st.caption(self.labels["chartHint"])
        with col2:
            st.subheader(self.labels["topExpenses"])
            if ranked:
                st.plotly_chart(
                    build_top_expenses_bar(ranked, selected, self.currency, self.language),
                    use_container_width=True,
                    key="bar_chart",
                    on_select=partial(self.apply_chart_click, "bar"),
                    selection_mode="points",
                )
            st.caption(self.labels["chartHint"])

    def render_filters(self) -> None:
        t = self.labels
        col_search, col_category, col_start, col_end, col_clear = st.columns([3, 2, 1, 1, 1])
        with col_search:
            st.text_input(t["search"], key=SEARCH_KEY, placeholder=t["search"], label_visibility="collapsed")
        with col_category:
            options: List[str] = [ALL_CATEGORIES] + [c.value for c in Category]
            st.selectbox(
                t["category"],
                options=options,
                key=CATEGORY_KEY,
                format_func=lambda v: t["allCategories"] if v == ALL_CATEGORIES else category_label(v, self.language),
                label_visibility="collapsed",
            )
        with col_start:
            st.date_input(t["startDate"], value=None, key=START_KEY, format="DD/MM/YYYY")
        with col_end:
            st.date_input(t["endDate"], value=None, key=END_KEY, format="DD/MM/YYYY")
        with col_clear:
            st.button("✕", help=t["clearFilters"], on_click=self.clear_filters)

    def render_transactions_table(self) -> None:
        t = self.labels
        st.subheader(t["transactions"])
        self.render_filters()

        rows = filter_for_table(self.transactions, self.current_filter_state())
        if not rows:
            st.info(t["noResults"])
        else:
            st.dataframe(
                build_table_frame(rows, self.language),
                use_container_width=True,
                hide_index=True,
                column_config={
                    'date': st.column_config.TextColumn(t["date"], width='small'),
                    'clean_name': st.column_config.TextColumn(t["cleanName"], width='medium'),
                    'original_description': st.column_config.TextColumn(t["description"], width='large'),
                    'category': st.column_config.TextColumn(t["category"], width='small'),
                    'converted_amount': st.column_config.NumberColumn(
                        f"{t['amount']} ({self.currency.value})", format="%.2f"
                    ),
                },
            )

        st.download_button(
            label=f"📥 {t['exportCSV']}",
            data=to_csv(rows, self.currency, t).encode("utf-8"),
            file_name=export_filename(self.result.hotel_name),
            mime=CSV_MIME,
        )
