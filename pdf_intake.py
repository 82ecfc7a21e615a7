"""
pdf_intake.py

Local checks on an uploaded folio before it is sent anywhere, and the base64
encoding the extraction request needs.
"""

from __future__ import annotations

import base64
import io
import logging

import pdfplumber

from folio_types import UploadRejectedError

PDF_MIME = "application/pdf"

logger = logging.getLogger(__name__)


def count_pdf_pages(data: bytes) -> int:
    """Open ``data`` with pdfplumber and return its page count."""
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        return len(pdf.pages)


def validate_upload(data: bytes, mime_type: str, max_bytes: int) -> int:
    """
    Reject anything that is not a readable PDF within the size limit.

    Returns the page count. Raises :class:`UploadRejectedError` whose
    ``message_key`` names the translation to show.
    """
    if (mime_type or "").lower() != PDF_MIME:
        raise UploadRejectedError(f"Unsupported file type: {mime_type!r}", "invalidFile")
    if not data:
        raise UploadRejectedError("Uploaded file is empty", "unreadablePdf")
    if len(data) > max_bytes:
        raise UploadRejectedError(
            f"File is {len(data)} bytes, limit is {max_bytes}", "fileTooLarge"
        )

    try:
        pages = count_pdf_pages(data)
    except Exception as e:
        raise UploadRejectedError(f"PDF could not be opened: {e}", "unreadablePdf") from e
    if pages == 0:
        raise UploadRejectedError("PDF has no pages", "unreadablePdf")

    logger.info("Accepted PDF upload: %d bytes, %d page(s)", len(data), pages)
    return pages


def encode_pdf(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def pdf_data_url(data: bytes) -> str:
    return f"data:{PDF_MIME};base64,{encode_pdf(data)}"
