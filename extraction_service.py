"""
extraction_service.py

Sends a folio PDF to the OpenAI Responses API and turns the structured
reply into an :class:`AnalysisResult`.

The request carries the PDF as a base64 ``input_file`` part, a fixed set of
instructions and a strict JSON schema. The reply is validated again here
rather than trusting the service's conformance: payloads missing header
fields fail as a whole, while individual malformed line items are skipped
and counted.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from openai import OpenAI, OpenAIError

from folio_types import AnalysisResult, Category, ExtractionError, Transaction, coerce_category
from pdf_intake import pdf_data_url
from settings import DEFAULT_TOTAL_TOLERANCE, Settings, load_settings

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTIONS = """
You are an expert financial analyst for hotel operations.
Your task is to extract transaction data and header details from a hotel account statement PDF with perfect accuracy.

CRITICAL RULES:
1. Header Information: Extract Hotel Name, Address, Guest Name, Room Number, Folio/Confirmation number accurately from the top of the document. For dates like Check-In and Check-Out, convert formats like '19-01-26' to a standard 'DD/MM/YYYY' format (e.g., '19/01/2026'). Use an empty string for any header field that is not present.
2. Transactions: Extract the Date (DD/MM/YYYY), Description, and Amount for each line item in the main table, in document order.
3. 'cleanName': From the original description, create a simplified commercial name. Remove dates, transaction codes, room numbers, and any other non-essential text. For example, 'REST EL PATIO 23423' should become 'El Patio'.
4. 'category': Categorize strictly into:
   - Alimentos y Bebidas/Food & Beverage (Restaurants, Breakfast, Dinner, Bar, Lobby Bar, Minibar, Room Service Food)
   - Habitación/Room (Room charge, Upgrades, Early check-in)
   - Impuestos/Tax (Look specifically for 'Dersan', 'ISH', 'IVA', 'TUA', or generic tax descriptions)
   - Descuento/Discount (Any negative values, credits, or items labeled 'Abonos')
   - Servicio/Service (Tips, Laundry, Spa, Telephone, Transport, Valet Parking)
   - Otros/Other (Any other charge)
5. Amounts: Handle negative numbers correctly for the 'amount' field. Credits and discounts must be negative.
6. Currency: Accurately detect the currency of the document (e.g., MXN, USD).
7. Total Amount: This is the most important field. Find the final total printed on the statement (e.g., 'Total MxN', 'Total Charges'). Use this value for the 'totalAmount' field. THIS IS THE SOURCE OF TRUTH AND IS MORE ACCURATE THAN MANUALLY SUMMING THE TRANSACTION LINES. For example, if the document shows 'Total MxN 25,224.10', you must use 25224.10.
""".strip()

USER_PROMPT = "Analyze this hotel statement PDF and extract the data according to the JSON schema."

HEADER_FIELDS = (
    "hotelName",
    "hotelAddress",
    "guestName",
    "roomNumber",
    "checkIn",
    "checkOut",
    "confirmationNumber",
    "detectedCurrency",
)
REQUIRED_HEADER_FIELDS = ("hotelName", "guestName", "transactions", "totalAmount")
REQUIRED_TRANSACTION_FIELDS = ("date", "originalDescription", "cleanName", "amount", "category")

_TRANSACTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "date": {"type": "string", "description": "Transaction date (DD/MM/YYYY)"},
        "originalDescription": {"type": "string"},
        "cleanName": {
            "type": "string",
            "description": (
                "Simplified commercial name. Remove dates, transaction codes, room numbers. "
                "E.g., 'REST EL PATIO 23423' -> 'El Patio'"
            ),
        },
        "amount": {"type": "number"},
        "currency": {"type": "string"},
        "category": {
            "type": "string",
            "enum": [c.value for c in Category],
            "description": "Categorize based on description. 'Dersan' or 'ISH' are Impuestos/Tax.",
        },
    },
    "required": ["date", "originalDescription", "cleanName", "amount", "currency", "category"],
    "additionalProperties": False,
}

RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "hotelName": {"type": "string", "description": "Name of the hotel found in the header"},
        "hotelAddress": {"type": "string", "description": "Address of the hotel"},
        "guestName": {"type": "string", "description": "Name of the guest"},
        "roomNumber": {"type": "string", "description": "Room number"},
        "checkIn": {"type": "string", "description": "Arrival date (DD/MM/YYYY)"},
        "checkOut": {"type": "string", "description": "Departure date (DD/MM/YYYY)"},
        "confirmationNumber": {"type": "string", "description": "Folio or confirmation number"},
        "detectedCurrency": {
            "type": "string",
            "description": "Currency symbol or code detected (MXN, USD, $)",
        },
        "transactions": {"type": "array", "items": _TRANSACTION_SCHEMA},
        "totalAmount": {"type": "number"},
    },
    # Strict structured outputs require every property to be listed here
    "required": list(HEADER_FIELDS) + ["transactions", "totalAmount"],
    "additionalProperties": False,
}


def build_response_format() -> Dict[str, Any]:
    return {
        "format": {
            "type": "json_schema",
            "name": "folio_analysis",
            "schema": RESPONSE_SCHEMA,
            "strict": True,
        }
    }


def build_input(pdf_bytes: bytes, filename: str) -> List[Dict[str, Any]]:
    return [
        {
            "role": "user",
            "content": [
                {"type": "input_file", "filename": filename, "file_data": pdf_data_url(pdf_bytes)},
                {"type": "input_text", "text": USER_PROMPT},
            ],
        }
    ]


def _as_float(value: Any) -> Optional[float]:
    """Finite float from a JSON number or numeric string, else ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_transaction(raw: Any) -> Tuple[Optional[Transaction], Optional[str]]:
    """Validate one line item. Returns ``(transaction, None)`` or ``(None, reason)``."""
    if not isinstance(raw, dict):
        return None, "not an object"
    missing = [name for name in REQUIRED_TRANSACTION_FIELDS if raw.get(name) is None]
    if missing:
        return None, f"missing {', '.join(missing)}"
    amount = _as_float(raw["amount"])
    if amount is None:
        return None, f"non-numeric or non-finite amount {raw['amount']!r}"
    category = coerce_category(raw["category"])
    if category is None:
        return None, f"unknown category {raw['category']!r}"
    return (
        Transaction(
            date=_as_text(raw["date"]),
            original_description=_as_text(raw["originalDescription"]),
            clean_name=_as_text(raw["cleanName"]),
            amount=amount,
            category=category,
            currency=_as_text(raw.get("currency")),
        ),
        None,
    )


def parse_analysis_result(payload: Any) -> AnalysisResult:
    """Strictly validate a decoded extraction payload."""
    if not isinstance(payload, dict):
        raise ExtractionError("Extraction response is not a JSON object")

    missing = [name for name in REQUIRED_HEADER_FIELDS if payload.get(name) is None]
    if missing:
        raise ExtractionError(f"Extraction response missing required fields: {', '.join(missing)}")
    if not isinstance(payload["transactions"], list):
        raise ExtractionError("Extraction response 'transactions' is not a list")
    total = _as_float(payload["totalAmount"])
    if total is None:
        raise ExtractionError(f"Extraction response has non-numeric or non-finite totalAmount {payload['totalAmount']!r}")

    transactions: List[Transaction] = []
    skipped = 0
    for position, raw in enumerate(payload["transactions"]):
        tx, reason = parse_transaction(raw)
        if tx is None:
            skipped += 1
            logger.warning("Skipping transaction #%d: %s", position, reason)
            continue
        transactions.append(tx)

    return AnalysisResult(
        hotel_name=_as_text(payload.get("hotelName")),
        hotel_address=_as_text(payload.get("hotelAddress")),
        guest_name=_as_text(payload.get("guestName")),
        room_number=_as_text(payload.get("roomNumber")),
        check_in=_as_text(payload.get("checkIn")),
        check_out=_as_text(payload.get("checkOut")),
        confirmation_number=_as_text(payload.get("confirmationNumber")),
        detected_currency=_as_text(payload.get("detectedCurrency")),
        transactions=tuple(transactions),
        total_amount=total,
        skipped_records=skipped,
    )


def parse_response_text(text: Optional[str]) -> AnalysisResult:
    if not text or not text.strip():
        raise ExtractionError("No response from AI")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"AI response is not valid JSON: {e}") from e
    return parse_analysis_result(payload)


def total_mismatch(result: AnalysisResult, tolerance: float = DEFAULT_TOTAL_TOLERANCE) -> Optional[float]:
    """Absolute gap between line-item sum and document total, if above ``tolerance``."""
    difference = abs(result.transaction_sum() - result.total_amount)
    return difference if difference > tolerance else None


def check_total_consistency(
    result: AnalysisResult, tolerance: float = DEFAULT_TOTAL_TOLERANCE
) -> Optional[float]:
    """
    Compare the line-item sum with the document total.

    Returns the absolute difference when it exceeds ``tolerance`` (after
    logging a warning), otherwise ``None``. The document total is never
    corrected; it stays authoritative for display.
    """
    difference = total_mismatch(result, tolerance)
    if difference is not None:
        logger.warning(
            "Sum of transactions (%.2f) does not match the extracted total amount (%.2f). "
            "The extracted total will be used.",
            result.transaction_sum(),
            result.total_amount,
        )
    return difference


def analyze_statement(
    pdf_bytes: bytes,
    filename: str = "statement.pdf",
    client: Optional[Any] = None,
    settings: Optional[Settings] = None,
) -> AnalysisResult:
    """Extract an :class:`AnalysisResult` from a folio PDF.

    Raises :class:`ExtractionError` for a missing API key, transport or
    service failures and unusable responses.
    """
    settings = settings or load_settings()
    if client is None:
        if not settings.openai_api_key:
            raise ExtractionError("OPENAI_API_KEY is not configured")
        client = OpenAI(api_key=settings.openai_api_key)

    logger.info("Requesting extraction for %s (%d bytes) with %s", filename, len(pdf_bytes), settings.openai_model)
    try:
        response = client.responses.create(
            model=settings.openai_model,
            instructions=SYSTEM_INSTRUCTIONS,
            input=build_input(pdf_bytes, filename),
            text=build_response_format(),
        )
    except OpenAIError as e:
        raise ExtractionError(f"OpenAI request failed: {e}") from e

    result = parse_response_text(getattr(response, "output_text", None))
    logger.info(
        "Extracted %d transaction(s), %d skipped, total %.2f %s",
        len(result.transactions),
        result.skipped_records,
        result.total_amount,
        result.detected_currency or "?",
    )
    check_total_consistency(result, settings.total_tolerance)
    return result
