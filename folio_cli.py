"""
folio_cli.py - Command-line access to the folio analyzer without the web UI.

Usage:
    folio-analyzer analyze statement.pdf --output folio.json
    folio-analyzer export folio.json --currency USD --language EN
    folio-analyzer export folio.json --start 2026-01-19 --end 2026-01-21 --category "Impuestos/Tax"
"""

from __future__ import annotations

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import List, Optional

from aggregator import aggregate_by_category, top_n
from csv_exporter import export_filename, to_csv
from currency import convert, convert_transactions, format_currency
from date_parsing import parse_input_date
from extraction_service import analyze_statement, check_total_consistency, parse_analysis_result
from filter_engine import filter_for_charts, filter_for_table
from folio_types import (
    ALL_CATEGORIES,
    Category,
    Currency,
    ExtractionError,
    FilterState,
    Language,
    UploadRejectedError,
)
from pdf_intake import validate_upload
from settings import configure_logging, load_settings
from translations import get_translations

logger = logging.getLogger(__name__)


def _input_date(value: str):
    parsed = parse_input_date(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="folio-analyzer",
        description="Extract hotel folio statements and export filtered transactions.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:", 1)[1],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Send a folio PDF for extraction and save the JSON result")
    analyze.add_argument("pdf", type=Path, help="Path to the folio PDF")
    analyze.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Where to write the extraction JSON (default: stdout)",
    )

    export = sub.add_parser("export", help="Filter an extraction JSON and write the CSV export")
    export.add_argument("result", type=Path, help="Extraction JSON produced by 'analyze'")
    export.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="CSV path (default: <hotel-name>_export.csv in the current directory)",
    )
    export.add_argument("--currency", choices=[c.value for c in Currency], default=Currency.MXN.value)
    export.add_argument("--language", choices=[lang.value for lang in Language], default=Language.ES.value)
    export.add_argument("--search", default="", help="Case-insensitive text to match in names/descriptions")
    export.add_argument(
        "--category",
        choices=[ALL_CATEGORIES] + [c.value for c in Category],
        default=ALL_CATEGORIES,
    )
    export.add_argument("--start", type=_input_date, default=None, metavar="YYYY-MM-DD")
    export.add_argument("--end", type=_input_date, default=None, metavar="YYYY-MM-DD")
    export.add_argument(
        "--top",
        type=int,
        default=5,
        metavar="N",
        help="Number of categories in the printed ranking (default: 5)",
    )
    return parser


def cmd_analyze(args: argparse.Namespace) -> int:
    settings = load_settings()
    try:
        data = args.pdf.read_bytes()
    except OSError as e:
        print(f"Error: cannot read {args.pdf}: {e}", file=sys.stderr)
        return 1

    mime_type = mimetypes.guess_type(args.pdf.name)[0] or ""
    try:
        validate_upload(data, mime_type, settings.max_upload_bytes)
        result = analyze_statement(data, filename=args.pdf.name, settings=settings)
    except UploadRejectedError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ExtractionError as e:
        logger.debug("Extraction failed", exc_info=True)
        print(f"Error: extraction failed: {e}", file=sys.stderr)
        return 1

    text = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if args.output is None:
        print(text)
    else:
        args.output.write_text(text, encoding="utf-8")
        print(f"Saved {len(result.transactions)} transaction(s) to {args.output}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    try:
        payload = json.loads(args.result.read_text(encoding="utf-8"))
        result = parse_analysis_result(payload)
    except (OSError, json.JSONDecodeError, ExtractionError) as e:
        print(f"Error: cannot load {args.result}: {e}", file=sys.stderr)
        return 1

    check_total_consistency(result, load_settings().total_tolerance)
    currency = Currency(args.currency)
    labels = get_translations(Language(args.language))
    transactions = convert_transactions(result, currency)

    state = FilterState(
        search_term=args.search,
        category_filter=args.category,
        start_date=args.start,
        end_date=args.end,
    )
    rows = filter_for_table(transactions, state)
    output = args.output or Path(export_filename(result.hotel_name))
    output.write_text(to_csv(rows, currency, labels), encoding="utf-8")

    total = convert(result.total_amount, result.detected_currency, currency)
    print(f"{labels['totalSpend']}: {format_currency(total, currency)}")
    ranked = top_n(aggregate_by_category(filter_for_charts(transactions, args.start, args.end)), args.top)
    for item in ranked:
        print(f"  {item.name:<40} {format_currency(item.value, currency)}")
    print(f"Wrote {len(rows)} of {len(transactions)} row(s) to {output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)
    if args.command == "analyze":
        return cmd_analyze(args)
    return cmd_export(args)


if __name__ == "__main__":
    sys.exit(main())
