"""
Tests for the dashboard helpers that do not need a running Streamlit session.

Tests cover:
- Reading the clicked category from Plotly selection events
- Donut and bar figure construction, including selection highlighting
- Table frame columns and localized category labels
- Chart-click callbacks updating the category filter before figures are drawn
"""

import pytest

import dashboard
from aggregator import aggregate_by_category, top_n
from currency import convert_transactions
from dashboard import (
    CATEGORY_KEY,
    FolioDashboard,
    build_category_pie,
    build_table_frame,
    build_top_expenses_bar,
    clicked_category,
)
from folio_types import ALL_CATEGORIES, Category, Currency, Language, category_color


def test_clicked_category_reads_customdata():
    event = {'selection': {'points': [{'customdata': Category.TAX.value, 'label': 'Tax'}]}}
    assert clicked_category(event) == Category.TAX.value


def test_clicked_category_accepts_list_customdata():
    event = {'selection': {'points': [{'customdata': [Category.ROOM.value], 'y': 'Room'}]}}
    assert clicked_category(event) == Category.ROOM.value


def test_clicked_category_falls_back_to_label():
    event = {'selection': {'points': [{'label': Category.SERVICE.value}]}}
    assert clicked_category(event) == Category.SERVICE.value


def test_background_click_selects_nothing():
    assert clicked_category(None) is None
    assert clicked_category({}) is None
    assert clicked_category({'selection': {'points': []}}) is None


def test_pie_uses_localized_labels_and_category_keys(sample_result):
    data = aggregate_by_category(convert_transactions(sample_result, Currency.MXN))
    fig = build_category_pie(data, ALL_CATEGORIES, Currency.MXN, Language.EN)
    pie = fig.data[0]

    assert list(pie.labels) == ['Room', 'Discount', 'Tax']
    assert list(pie.customdata) == list(data)
    assert pie.hole == 0.6
    assert list(pie.marker.colors) == [category_color(name) for name in data]


def test_pie_dims_unselected_slices(sample_result):
    data = aggregate_by_category(convert_transactions(sample_result, Currency.MXN))
    fig = build_category_pie(data, Category.TAX.value, Currency.MXN, Language.ES)
    colors = list(fig.data[0].marker.colors)

    assert colors[2] == category_color(Category.TAX.value)
    assert colors[0].startswith('rgba(')
    assert colors[1].startswith('rgba(')


def test_bar_follows_ranking_and_highlights_selection(sample_result):
    ranked = top_n(aggregate_by_category(convert_transactions(sample_result, Currency.MXN)), 5)
    fig = build_top_expenses_bar(ranked, Category.ROOM.value, Currency.MXN, Language.ES)
    bar = fig.data[0]

    assert bar.orientation == 'h'
    assert list(bar.x) == [100.0, 35.0, 20.0]
    assert list(bar.y) == ['Habitación', 'Impuestos', 'Descuento']
    assert list(bar.marker.opacity) == [1.0, 0.3, 0.3]
    assert bar.text[0] == '$100.00 MXN'


def test_table_frame(sample_result):
    rows = convert_transactions(sample_result, Currency.USD)
    frame = build_table_frame(rows, Language.EN)

    assert list(frame.columns) == ['date', 'clean_name', 'original_description', 'category', 'converted_amount']
    assert list(frame['category']) == ['Room', 'Discount', 'Tax']
    assert frame['converted_amount'].iloc[0] == rows[0].converted_amount


def test_empty_table_frame_keeps_columns():
    frame = build_table_frame([], Language.ES)
    assert frame.empty
    assert 'converted_amount' in frame.columns


@pytest.fixture
def session_state(monkeypatch):
    state = {CATEGORY_KEY: ALL_CATEGORIES}
    monkeypatch.setattr(dashboard.st, 'session_state', state)
    return state


def selection(category):
    points = [{'customdata': category}] if category else []
    return {'selection': {'points': points}}


def test_chart_click_updates_filter_used_for_highlighting(session_state, sample_result):
    session_state['pie_chart'] = selection(Category.TAX.value)
    FolioDashboard.apply_chart_click('pie')

    board = FolioDashboard(sample_result, Language.EN, Currency.MXN, {})
    selected = board.current_filter_state().category_filter
    assert selected == Category.TAX.value

    data = aggregate_by_category(board.transactions)
    colors = list(build_category_pie(data, selected, Currency.MXN, Language.EN).data[0].marker.colors)
    assert colors[2] == category_color(Category.TAX.value)
    assert colors[0].startswith('rgba(')


def test_unchanged_selection_is_not_a_new_click(session_state):
    session_state['bar_chart'] = selection(Category.ROOM.value)
    FolioDashboard.apply_chart_click('bar')
    FolioDashboard.apply_chart_click('bar')
    assert session_state[CATEGORY_KEY] == Category.ROOM.value


def test_background_click_resets_filter(session_state):
    session_state['bar_chart'] = selection(Category.ROOM.value)
    FolioDashboard.apply_chart_click('bar')
    session_state['bar_chart'] = selection(None)
    FolioDashboard.apply_chart_click('bar')
    assert session_state[CATEGORY_KEY] == ALL_CATEGORIES
