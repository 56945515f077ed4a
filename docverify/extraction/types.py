"""Type definitions for the Text Extractor.

This module defines the transcript produced for a document and the options
that tune OCR for a given document type.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from docverify.common.types import DocumentTypeHint


class SourceKind(Enum):
    """How a transcript was produced."""

    OCR = "ocr"
    PDF_STRUCTURAL = "pdf-structural"


@dataclass(frozen=True)
class Transcript:
    """Plain text recovered from a document.

    Attributes:
        text: Extracted text (never empty when a Transcript is returned by the pipeline)
        source_kind: OCR for raster images, PDF_STRUCTURAL for PDFs
    """

    text: str
    source_kind: SourceKind


@dataclass(frozen=True)
class ExtractionOptions:
    """Per-call OCR options.

    Attributes:
        language: Tesseract language code; None uses the configured default
        char_whitelist: Only these characters may be emitted (None = no restriction)
        char_blacklist: Characters never emitted; None uses the configured default
        document_type_hint: Selects preprocessing path and page segmentation mode
    """

    language: Optional[str] = None
    char_whitelist: Optional[str] = None
    char_blacklist: Optional[str] = None
    document_type_hint: DocumentTypeHint = DocumentTypeHint.GENERIC


@dataclass(frozen=True)
class PdfExtraction:
    """Result of structural PDF parsing.

    Attributes:
        text: Page texts joined with the configured page separator
        page_count: Number of pages in the document
        image_only_pages: Pages with no text items but at least one embedded image
    """

    text: str
    page_count: int
    image_only_pages: int = 0

    @property
    def is_scanned(self) -> bool:
        """True when the PDF has no text and every page is an embedded image."""
        return not self.text and self.page_count > 0 and self.image_only_pages == self.page_count


@dataclass(frozen=True)
class ExtractionOutcome:
    """What the extractor produced, plus a note explaining an empty result.

    Attributes:
        text: Extracted text ("" when nothing could be extracted)
        source_kind: Extraction route, None for unsupported MIME types
        note: Human-readable reason when text is empty
    """

    text: str
    source_kind: Optional[SourceKind]
    note: Optional[str] = None

    def to_transcript(self) -> Optional[Transcript]:
        if not self.text or self.source_kind is None:
            return None
        return Transcript(text=self.text, source_kind=self.source_kind)
