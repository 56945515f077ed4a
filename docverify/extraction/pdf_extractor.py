"""Structural PDF text extraction with pdfplumber.

Text items are read from the PDF's content streams, not recognised from
pixels, so scanned (image-only) PDFs yield no text. Those are counted so the
caller can be told why the transcript is empty.
"""

import io
import logging

import pdfplumber

from docverify.config_loader import PDFConfig
from docverify.exceptions import ExtractionError

from .types import PdfExtraction

logger = logging.getLogger(__name__)


class PdfTextExtractor:
    """Extracts embedded text from PDF bytes using pdfplumber."""

    def __init__(self, config: PDFConfig):
        self.config = config

    def extract(self, pdf_bytes: bytes) -> PdfExtraction:
        """Extract text page by page.

        Text items on a page are joined with the word separator; pages are
        joined with the page separator.

        Raises:
            ExtractionError: if the bytes cannot be parsed as a PDF.
        """
        # TODO: rasterize image-only pages (page.to_image) and OCR them instead of
        # reporting the document as scanned.
        try:
            page_texts = []
            image_only_pages = 0
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                page_count = len(pdf.pages)
                for page in pdf.pages:
                    words = page.extract_words()
                    if not words and page.images:
                        image_only_pages += 1
                    page_texts.append(
                        self.config.word_separator.join(word["text"] for word in words)
                    )
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc

        text = self.config.page_separator.join(page_texts).strip()
        logger.debug(
            f"PDF parsed: {page_count} page(s), {len(text)} chars, "
            f"{image_only_pages} image-only page(s)"
        )
        return PdfExtraction(
            text=text,
            page_count=page_count,
            image_only_pages=image_only_pages,
        )
