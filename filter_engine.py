"""
filter_engine.py

Derives the two views of the transaction list shown on the dashboard:

* the table rows, filtered by search term, category and date range
* the chart rows, filtered by date range only, so the category overview stays
  stable while the user drills into the table

Unparseable transaction dates are handled differently by the two paths and
the two date predicates are kept separate on purpose.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple, Union

from date_parsing import parse_display_date, parse_input_date
from folio_types import ALL_CATEGORIES, ConvertedTransaction, FilterState

DateBound = Union[date, str, None]


def _resolve_bound(bound: DateBound) -> Optional[date]:
    if isinstance(bound, datetime):
        return bound.date()
    if bound is None or isinstance(bound, date):
        return bound
    return parse_input_date(bound)


def _resolve_range(start: DateBound, end: DateBound) -> Tuple[Optional[date], Optional[date]]:
    return _resolve_bound(start), _resolve_bound(end)


def _within(tx_date: date, start: Optional[date], end: Optional[date]) -> bool:
    if start is not None and tx_date < start:
        return False
    if end is not None and tx_date > end:
        return False
    return True


def table_date_predicate(tx: ConvertedTransaction, start: Optional[date], end: Optional[date]) -> bool:
    """Date check for table rows.

    Once any bound is set, a row whose date cannot be parsed is excluded.
    """
    if start is None and end is None:
        return True
    tx_date = parse_display_date(tx.date)
    if tx_date is None:
        return False
    return _within(tx_date, start, end)


def chart_date_predicate(tx: ConvertedTransaction, start: Optional[date], end: Optional[date]) -> bool:
    """Date check for chart rows.

    A row whose date cannot be parsed is included only while no range is
    requested at all.
    """
    tx_date = parse_display_date(tx.date)
    if tx_date is None:
        return start is None and end is None
    return _within(tx_date, start, end)


def matches_search(tx: ConvertedTransaction, search_term: str) -> bool:
    term = (search_term or "").lower()
    return term in tx.clean_name.lower() or term in tx.original_description.lower()


def matches_category(tx: ConvertedTransaction, category_filter: str) -> bool:
    return category_filter == ALL_CATEGORIES or tx.category == category_filter


def filter_for_table(
    transactions: Sequence[ConvertedTransaction], filter_state: FilterState
) -> List[ConvertedTransaction]:
    """Rows for the transaction table and the CSV export, in document order."""
    start, end = _resolve_range(filter_state.start_date, filter_state.end_date)
    return [
        tx
        for tx in transactions
        if matches_search(tx, filter_state.search_term)
        and matches_category(tx, filter_state.category_filter)
        and table_date_predicate(tx, start, end)
    ]


def filter_for_charts(
    transactions: Sequence[ConvertedTransaction],
    start_date: DateBound = None,
    end_date: DateBound = None,
) -> List[ConvertedTransaction]:
    """Rows feeding the charts; search and category never apply here."""
    start, end = _resolve_range(start_date, end_date)
    return [tx for tx in transactions if chart_date_predicate(tx, start, end)]


def toggle_category_filter(current: str, clicked: Optional[str]) -> str:
    """New category filter after a click on a chart.

    Clicking the selected category or the chart background resets to "All".
    """
    if not clicked or clicked == current:
        return ALL_CATEGORIES
    return clicked
