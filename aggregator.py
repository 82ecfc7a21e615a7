"""
aggregator.py

Per-category magnitude totals for the distribution and top-N charts.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

import pandas as pd

from folio_types import CategoryTotal, ConvertedTransaction


def aggregate_by_category(transactions: Sequence[ConvertedTransaction]) -> Dict[str, float]:
    """
    Sum ``abs(converted_amount)`` per category.

    Keys keep the order in which categories first appear; categories whose
    total is exactly zero are left out.
    """
    if not transactions:
        return {}

    df = pd.DataFrame(
        {
            "category": [str(tx.category) for tx in transactions],
            "magnitude": [abs(tx.converted_amount) for tx in transactions],
        }
    )
    totals = df.groupby("category", sort=False)["magnitude"].sum()
    totals = totals[totals != 0]
    return {name: float(value) for name, value in totals.items()}


def top_n(aggregated: Mapping[str, float], n: int = 5) -> List[CategoryTotal]:
    """Largest ``n`` buckets, descending; ties keep first-seen order."""
    if not aggregated or n <= 0:
        return []
    series = pd.Series(aggregated, dtype="float64")
    ranked = series.sort_values(ascending=False, kind="stable").head(n)
    return [CategoryTotal(name=name, value=float(value)) for name, value in ranked.items()]
