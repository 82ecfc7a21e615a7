"""
Tests for per-category totals and the top-N ranking.
"""

import pytest

from aggregator import aggregate_by_category, top_n
from currency import convert_transactions
from folio_types import Category, CategoryTotal, Currency


def test_aggregate_uses_magnitudes(sample_result):
    rows = convert_transactions(sample_result, Currency.MXN)
    totals = aggregate_by_category(rows)

    assert totals == {
        Category.ROOM.value: 100.0,
        Category.DISCOUNT.value: 20.0,
        Category.TAX.value: 35.0,
    }
    assert all(value >= 0 for value in totals.values())


def test_aggregate_sums_within_category_in_first_seen_order(make_tx):
    rows = [
        make_tx(category=Category.TAX, amount=10),
        make_tx(category=Category.ROOM, amount=50),
        make_tx(category=Category.TAX, amount=-5),
    ]
    totals = aggregate_by_category(rows)
    assert list(totals) == [Category.TAX.value, Category.ROOM.value]
    assert totals[Category.TAX.value] == pytest.approx(15.0)


def test_aggregate_omits_zero_buckets(make_tx):
    rows = [make_tx(category=Category.OTHER, amount=0), make_tx(category=Category.ROOM, amount=1)]
    assert list(aggregate_by_category(rows)) == [Category.ROOM.value]


def test_aggregate_uses_converted_amounts(make_tx):
    rows = [make_tx(amount=1000, converted_amount=58.0)]
    assert aggregate_by_category(rows) == {Category.ROOM.value: 58.0}


def test_aggregate_empty():
    assert aggregate_by_category([]) == {}


def test_top_n_orders_descending(sample_result):
    totals = aggregate_by_category(convert_transactions(sample_result, Currency.MXN))

    assert top_n(totals, 2) == [
        CategoryTotal(Category.ROOM.value, 100.0),
        CategoryTotal(Category.TAX.value, 35.0),
    ]


def test_top_n_never_exceeds_n():
    totals = {c.value: float(i + 1) for i, c in enumerate(Category)}
    assert len(top_n(totals, 5)) == 5
    assert len(top_n(totals, 10)) == len(totals)
    assert top_n(totals, 0) == []
    assert top_n({}, 5) == []


def test_top_n_ties_keep_first_seen_order():
    totals = {'b': 10.0, 'a': 10.0, 'c': 30.0, 'd': 10.0}
    assert [item.name for item in top_n(totals, 3)] == ['c', 'b', 'a']
