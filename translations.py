"""
translations.py

Static ES/EN label sets for the dashboard. Switching language only swaps the
labels attached to the same underlying values; nothing is re-requested.
"""

from __future__ import annotations

from typing import Dict

from folio_types import Language

TRANSLATIONS: Dict[Language, Dict[str, str]] = {
    Language.ES: {
        "title": "Analizador de Estados de Cuenta",
        "uploadPrompt": "Sube tu estado de cuenta (PDF) para comenzar",
        "uploadButton": "Seleccionar PDF",
        "maxSize": "PDF, máx. {max_mb} MB",
        "analyzing": "Analizando documento con IA...",
        "analyzingDetail": "La IA está extrayendo tablas, limpiando descripciones y categorizando gastos...",
        "totalSpend": "Gasto Total",
        "transactions": "Detalle de Transacciones",
        "categoryDistribution": "Distribución de Gastos",
        "topExpenses": "Principales Gastos (y Descuentos)",
        "chartHint": "Haz clic en un segmento para filtrar el detalle",
        "date": "Fecha",
        "description": "Descripción Original",
        "amount": "Monto",
        "category": "Categoría",
        "cleanName": "Nombre Comercial",
        "search": "Buscar...",
        "allCategories": "Todas las categorías",
        "clearFilters": "Limpiar filtros",
        "noResults": "No se encontraron transacciones con estos filtros.",
        "errorGeneric": "Ocurrió un error al procesar el archivo. Por favor intente de nuevo.",
        "invalidFile": "Por favor selecciona un archivo PDF.",
        "fileTooLarge": "El archivo excede el tamaño máximo permitido.",
        "unreadablePdf": "No se pudo leer el PDF. Verifica que el archivo no esté dañado.",
        "totalMismatch": "La suma de las transacciones ({sum}) no coincide con el total del documento; se muestra el total del documento.",
        "skippedRecords": "Se omitieron {count} renglones incompletos del documento.",
        "reset": "Analizar otro archivo",
        "guest": "Huésped",
        "room": "Habitación",
        "checkIn": "Llegada",
        "checkOut": "Salida",
        "folio": "Folio",
        "address": "Dirección",
        "startDate": "Desde",
        "endDate": "Hasta",
        "exportCSV": "Exportar a CSV",
        "language": "Idioma",
        "currency": "Moneda",
        "apiKey": "Clave de API de OpenAI",
        "stepExtract": "1. Extraer",
        "stepExtractDetail": "La IA lee las tablas del PDF",
        "stepClean": "2. Limpiar",
        "stepCleanDetail": "Normaliza nombres comerciales",
        "stepCategorize": "3. Categorizar",
        "stepCategorizeDetail": "Agrupa por tipo de gasto",
    },
    Language.EN: {
        "title": "Hotel Statement Analyzer",
        "uploadPrompt": "Upload your hotel statement (PDF) to start",
        "uploadButton": "Select PDF",
        "maxSize": "PDF, max {max_mb} MB",
        "analyzing": "Analyzing document with AI...",
        "analyzingDetail": "The AI is extracting tables, cleaning descriptions, and categorizing expenses...",
        "totalSpend": "Total Spend",
        "transactions": "Transaction Details",
        "categoryDistribution": "Expense Distribution",
        "topExpenses": "Top Expenses (& Discounts)",
        "chartHint": "Click segments to filter details",
        "date": "Date",
        "description": "Original Description",
        "amount": "Amount",
        "category": "Category",
        "cleanName": "Merchant Name",
        "search": "Search...",
        "allCategories": "All Categories",
        "clearFilters": "Clear filters",
        "noResults": "No transactions found matching your filters.",
        "errorGeneric": "An error occurred while processing the file. Please try again.",
        "invalidFile": "Please select a PDF file.",
        "fileTooLarge": "The file exceeds the maximum allowed size.",
        "unreadablePdf": "The PDF could not be read. Check that the file is not damaged.",
        "totalMismatch": "The sum of the transactions ({sum}) does not match the document total; the document total is shown.",
        "skippedRecords": "{count} incomplete rows from the document were skipped.",
        "reset": "Analyze another file",
        "guest": "Guest",
        "room": "Room",
        "checkIn": "Check In",
        "checkOut": "Check Out",
        "folio": "Folio",
        "address": "Address",
        "startDate": "From",
        "endDate": "To",
        "exportCSV": "Export to CSV",
        "language": "Language",
        "currency": "Currency",
        "apiKey": "OpenAI API key",
        "stepExtract": "1. Extract",
        "stepExtractDetail": "AI reads tables from PDF",
        "stepClean": "2. Clean",
        "stepCleanDetail": "Normalizes merchant names",
        "stepCategorize": "3. Categorize",
        "stepCategorizeDetail": "Groups by spending type",
    },
}


def get_translations(language: Language) -> Dict[str, str]:
    """Return the label set for ``language`` (Spanish when unrecognized)."""
    try:
        return TRANSLATIONS[Language(language)]
    except ValueError:
        return TRANSLATIONS[Language.ES]
