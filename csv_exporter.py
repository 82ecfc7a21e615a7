"""
csv_exporter.py

Serializes the filtered table rows into a spreadsheet-friendly CSV text.

Only the free-text columns (merchant name and original description) are
quoted. Date, category, amount and currency never contain commas.
"""

from __future__ import annotations

import re
from typing import Mapping, Sequence

from folio_types import ConvertedTransaction, Currency

UTF8_BOM = "\ufeff"
CSV_MIME = "text/csv"


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def to_csv(rows: Sequence[ConvertedTransaction], currency_code: Currency, labels: Mapping[str, str]) -> str:
    """Build the CSV export text, prefixed with a UTF-8 byte-order mark."""
    code = Currency(currency_code).value
    header = [
        labels["date"],
        labels["cleanName"],
        labels["description"],
        labels["category"],
        labels["amount"],
        "Currency",
    ]
    lines = [",".join(header)]
    for tx in rows:
        lines.append(
            ",".join(
                [
                    tx.date,
                    _quote(tx.clean_name),
                    _quote(tx.original_description),
                    str(tx.category),
                    f"{tx.converted_amount:.2f}",
                    code,
                ]
            )
        )
    return UTF8_BOM + "\n".join(lines)


def export_filename(hotel_name: str) -> str:
    """``Hotel Río Azul`` -> ``hotel_r_o_azul_export.csv``."""
    safe = re.sub(r"[^a-z0-9]", "_", hotel_name or "", flags=re.IGNORECASE).lower()
    return f"{safe}_export.csv"
