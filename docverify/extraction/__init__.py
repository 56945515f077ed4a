"""Text Extraction.

This module turns document bytes into plain text: structural parsing for PDFs
and Tesseract OCR (after adaptive preprocessing) for raster images.

Core Components:
    - types: Transcript, SourceKind, ExtractionOptions
    - engine_tesseract: Scoped Tesseract engine (open_engine)
    - pdf_extractor: pdfplumber-based structural extraction
    - extractor: MIME dispatch and failure handling

Example:
    >>> from docverify.extraction import TextExtractor
    >>> outcome = TextExtractor().extract(pdf_bytes, "application/pdf")
    >>> transcript = outcome.to_transcript()
"""

from .engine_tesseract import TesseractEngine, open_engine
from .extractor import TextExtractor, extract_text
from .pdf_extractor import PdfTextExtractor
from .types import (
    ExtractionOptions,
    ExtractionOutcome,
    PdfExtraction,
    SourceKind,
    Transcript,
)

__all__ = [
    # Types
    "SourceKind",
    "Transcript",
    "ExtractionOptions",
    "ExtractionOutcome",
    "PdfExtraction",
    # Engines
    "TesseractEngine",
    "open_engine",
    "PdfTextExtractor",
    # Extraction
    "TextExtractor",
    "extract_text",
]
