"""
folio_types.py

Core data types for the Hotel Folio Analyzer.

The extraction service produces an :class:`AnalysisResult`; everything the
dashboard renders is derived from it without mutating it. Categories form a
closed set whose values are the bilingual labels returned by the model
(``"Habitación/Room"``), so they compare equal to the raw strings used as
filter keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple

ALL_CATEGORIES = "All"
DEFAULT_CATEGORY_COLOR = "#9CA3AF"


class Category(str, Enum):
    FOOD_AND_BEVERAGE = "Alimentos y Bebidas/Food & Beverage"
    ROOM = "Habitación/Room"
    TAX = "Impuestos/Tax"
    DISCOUNT = "Descuento/Discount"
    SERVICE = "Servicio/Service"
    OTHER = "Otros/Other"

    def __str__(self) -> str:
        return self.value


class Currency(str, Enum):
    MXN = "MXN"
    USD = "USD"

    def __str__(self) -> str:
        return self.value


class Language(str, Enum):
    ES = "ES"
    EN = "EN"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CategoryInfo:
    es: str
    en: str
    color: str

    def label(self, language: Language) -> str:
        return self.es if language == Language.ES else self.en


CATEGORY_INFO: Dict[Category, CategoryInfo] = {
    Category.FOOD_AND_BEVERAGE: CategoryInfo("Alimentos y Bebidas", "Food & Beverage", "#0D9488"),
    Category.ROOM: CategoryInfo("Habitación", "Room", "#3B82F6"),
    Category.TAX: CategoryInfo("Impuestos", "Tax", "#EF4444"),
    Category.DISCOUNT: CategoryInfo("Descuento", "Discount", "#F59E0B"),
    Category.SERVICE: CategoryInfo("Servicio", "Service", "#8B5CF6"),
    Category.OTHER: CategoryInfo("Otros", "Other", "#64748B"),
}


def coerce_category(value) -> Optional[Category]:
    """Return the matching :class:`Category` or ``None`` for unknown labels."""
    try:
        return Category(value)
    except ValueError:
        return None


def category_label(category: str, language: Language) -> str:
    """Localized half of a category label; unknown values are returned as-is."""
    known = coerce_category(category)
    if known is None:
        return str(category)
    return CATEGORY_INFO[known].label(language)


def category_color(category: str) -> str:
    known = coerce_category(category)
    if known is None:
        return DEFAULT_CATEGORY_COLOR
    return CATEGORY_INFO[known].color


@dataclass(frozen=True)
class Transaction:
    """A single folio line item as returned by the extraction step."""

    date: str
    original_description: str
    clean_name: str
    amount: float
    category: Category
    currency: str = ""


@dataclass(frozen=True)
class ConvertedTransaction:
    """A transaction paired with its amount in the display currency."""

    transaction: Transaction
    converted_amount: float

    @property
    def date(self) -> str:
        return self.transaction.date

    @property
    def original_description(self) -> str:
        return self.transaction.original_description

    @property
    def clean_name(self) -> str:
        return self.transaction.clean_name

    @property
    def amount(self) -> float:
        return self.transaction.amount

    @property
    def category(self) -> Category:
        return self.transaction.category

    def to_row(self) -> Dict:
        return {
            "date": self.date,
            "clean_name": self.clean_name,
            "original_description": self.original_description,
            "category": self.category.value,
            "amount": self.amount,
            "converted_amount": self.converted_amount,
        }


@dataclass(frozen=True)
class AnalysisResult:
    """
    Header details and transactions of one folio.

    ``total_amount`` is the total printed on the statement. It is not required
    to equal the sum of the transaction amounts and is never recomputed.
    """

    hotel_name: str
    guest_name: str
    transactions: Tuple[Transaction, ...]
    total_amount: float
    hotel_address: str = ""
    room_number: str = ""
    check_in: str = ""
    check_out: str = ""
    confirmation_number: str = ""
    detected_currency: str = ""
    skipped_records: int = 0

    def transaction_sum(self) -> float:
        return sum(tx.amount for tx in self.transactions)

    def to_dict(self) -> Dict:
        """Serialize back to the camelCase shape of the extraction schema."""
        return {
            "hotelName": self.hotel_name,
            "hotelAddress": self.hotel_address,
            "guestName": self.guest_name,
            "roomNumber": self.room_number,
            "checkIn": self.check_in,
            "checkOut": self.check_out,
            "confirmationNumber": self.confirmation_number,
            "detectedCurrency": self.detected_currency,
            "totalAmount": self.total_amount,
            "transactions": [
                {
                    "date": tx.date,
                    "originalDescription": tx.original_description,
                    "cleanName": tx.clean_name,
                    "amount": tx.amount,
                    "currency": tx.currency,
                    "category": tx.category.value,
                }
                for tx in self.transactions
            ],
        }


@dataclass(frozen=True)
class FilterState:
    """Search, category and date-range selections driving the derived views."""

    search_term: str = ""
    category_filter: str = ALL_CATEGORIES
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None


@dataclass(frozen=True)
class CategoryTotal:
    name: str
    value: float


class UploadRejectedError(ValueError):
    """Raised when an upload is refused locally, before any network call.

    ``message_key`` names the translation shown to the user.
    """

    def __init__(self, message: str, message_key: str = "invalidFile"):
        super().__init__(message)
        self.message_key = message_key


class ExtractionError(RuntimeError):
    """Raised when the extraction service fails or returns unusable data."""

