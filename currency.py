"""
currency.py

Display-currency conversion using static exchange rates.

Rates are configuration constants, not fetched live. An unrecognized detected
currency is displayed 1:1, which is a known simplification.
"""

from __future__ import annotations

from typing import Optional, Tuple

from folio_types import AnalysisResult, ConvertedTransaction, Currency

EXCHANGE_RATE_MXN_TO_USD = 0.058
EXCHANGE_RATE_USD_TO_MXN = 17.20


def convert(amount: float, detected_currency: Optional[str], display_currency: Currency) -> float:
    """Convert ``amount`` from the document currency to the display currency."""
    detected = detected_currency or ""
    if "MXN" in detected and display_currency == Currency.USD:
        return amount * EXCHANGE_RATE_MXN_TO_USD
    if "USD" in detected and display_currency == Currency.MXN:
        return amount * EXCHANGE_RATE_USD_TO_MXN
    return amount


def convert_transactions(
    result: AnalysisResult, display_currency: Currency
) -> Tuple[ConvertedTransaction, ...]:
    """Attach a converted amount to every transaction, keeping document order."""
    return tuple(
        ConvertedTransaction(
            transaction=tx,
            converted_amount=convert(tx.amount, result.detected_currency, display_currency),
        )
        for tx in result.transactions
    )


def format_currency(value: float, currency: Currency) -> str:
    """Format ``value`` for display, e.g. ``$1,234.56 MXN`` or ``-$20.00 USD``.

    es-MX and en-US share comma thousands separators and a dot for decimals.
    """
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f} {Currency(currency).value}"
