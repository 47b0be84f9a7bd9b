"""PDF and image text extraction.

PDFs combine the embedded text layer with an OCR pass over the whole file.
OCR is best effort for PDFs: a failed pass leaves the text layer alone.
Images go straight to OCR.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional

import PyPDF2
import requests

from app.errors import ConfigurationError, EmptyContentError, OcrError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"

NO_TEXT_IN_PDF = "No text found in PDF. The PDF may be empty or contain unsupported content."
NO_TEXT_IN_IMAGE = "No text found in image. Please ensure the image contains clear, readable text."


@dataclass
class OcrOutcome:
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def extract_text_layer(data: bytes) -> str:
    try:
        reader = PyPDF2.PdfReader(io.BytesIO(data))
        parts: List[str] = []
        for page in reader.pages:
            parts.append(page.extract_text() or "")
    except Exception as e:
        # corrupt xref/trailer data surfaces as ValueError or KeyError, not only PdfReadError
        logger.warning("Could not read PDF text layer: %s: %s", type(e).__name__, e)
        return ""
    return "\n".join(parts)


def attempt_ocr(ocr_client, data: bytes, mime_type: str) -> OcrOutcome:
    try:
        return OcrOutcome(text=ocr_client.extract_text(data, mime_type))
    except (OcrError, ConfigurationError, requests.RequestException) as e:
        return OcrOutcome(error=f"{type(e).__name__}: {e}")


def dedupe_lines(text: str) -> str:
    seen = dict.fromkeys(line for line in (text or "").split("\n") if line.strip())
    return "\n".join(seen)


def extract_from_pdf(data: bytes, ocr_client) -> str:
    text = extract_text_layer(data)
    logger.info("Extracted %d chars from PDF text layer", len(text))

    outcome = attempt_ocr(ocr_client, data, PDF_MIME_TYPE)
    if not outcome.ok:
        logger.warning("OCR on PDF failed, using text layer only: %s", outcome.error)
    elif outcome.text.strip():
        logger.info("Extracted %d chars from PDF via OCR", len(outcome.text))
        text = text + "\n\n" + outcome.text

    if not text.strip():
        raise EmptyContentError(NO_TEXT_IN_PDF)

    return dedupe_lines(text)


def extract_from_image(data: bytes, mime_type: str, ocr_client) -> str:
    text = ocr_client.extract_text(data, mime_type)
    if not (text or "").strip():
        raise EmptyContentError(NO_TEXT_IN_IMAGE)
    return text
