"""
Pytest configuration and shared fixtures.

This file contains pytest fixtures that are available to all test files.
"""

import os
import sys
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from folio_types import AnalysisResult, Category, ConvertedTransaction, Transaction


@pytest.fixture(scope='function')
def clean_env(monkeypatch):
    """Ensure tests run with clean environment variables."""
    # Remove sensitive env vars during tests
    for name in ('OPENAI_API_KEY', 'FOLIO_OPENAI_MODEL', 'FOLIO_MAX_UPLOAD_MB',
                 'FOLIO_TOTAL_TOLERANCE', 'FOLIO_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def make_tx():
    """Factory for converted transactions with sensible defaults."""
    def _make(date='19/01/2026', clean_name='Room', amount=100.0,
              category=Category.ROOM, original_description=None, converted_amount=None):
        tx = Transaction(
            date=date,
            original_description=original_description or clean_name.upper(),
            clean_name=clean_name,
            amount=amount,
            category=category,
            currency='MXN',
        )
        return ConvertedTransaction(tx, amount if converted_amount is None else converted_amount)

    return _make


@pytest.fixture
def sample_payload():
    """Provide an extraction payload in the camelCase response shape."""
    return {
        'hotelName': 'Hotel Río Azul',
        'hotelAddress': 'Av. del Mar 12, Cancún',
        'guestName': 'Ana Pérez',
        'roomNumber': '1204',
        'checkIn': '19/01/2026',
        'checkOut': '21/01/2026',
        'confirmationNumber': 'F-99812',
        'detectedCurrency': 'MXN',
        'totalAmount': 115.0,
        'transactions': [
            {'date': '19/01/2026', 'originalDescription': 'HAB 1204 TARIFA', 'cleanName': 'Room',
             'amount': 100.0, 'currency': 'MXN', 'category': 'Habitación/Room'},
            {'date': '20/01/2026', 'originalDescription': 'ABONO PROMO', 'cleanName': 'Promo',
             'amount': -20.0, 'currency': 'MXN', 'category': 'Descuento/Discount'},
            {'date': '21/01/2026', 'originalDescription': 'ISH 3%', 'cleanName': 'ISH',
             'amount': 35.0, 'currency': 'MXN', 'category': 'Impuestos/Tax'},
        ],
    }


@pytest.fixture
def sample_result():
    """Provide the three-line MXN folio used across the filter and chart tests."""
    return AnalysisResult(
        hotel_name='Hotel Río Azul',
        guest_name='Ana Pérez',
        transactions=(
            Transaction('19/01/2026', 'HAB 1204 TARIFA', 'Room', 100.0, Category.ROOM, 'MXN'),
            Transaction('20/01/2026', 'ABONO PROMO', 'Promo', -20.0, Category.DISCOUNT, 'MXN'),
            Transaction('21/01/2026', 'ISH 3%', 'ISH', 35.0, Category.TAX, 'MXN'),
        ),
        total_amount=115.0,
        detected_currency='MXN',
    )
