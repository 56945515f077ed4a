"""Text Extractor - plain-text transcripts from PDFs and raster images.

Branches purely on MIME type:
    - application/pdf: structural parse (pdfplumber), no OCR
    - image/*: Image Normalizer, then Tesseract OCR
    - anything else: no-op, empty text

Extraction never raises for document-quality problems. Failures are logged and
reported as an empty transcript with a note the orchestrator records.

Example:
    >>> from docverify.extraction import extract_text, ExtractionOptions
    >>> text = extract_text(pdf_bytes, "application/pdf")
    >>> text = extract_text(png_bytes, "image/png", ExtractionOptions(language="eng"))
"""

import logging
from typing import Optional

from docverify.common.types import (
    IMAGE_MIME_PREFIX,
    PDF_MIME_TYPE,
    DocumentTypeHint,
    normalize_mime_type,
)
from docverify.config_loader import Config, get_default_config
from docverify.exceptions import ExtractionError
from docverify.preprocessing import ImageNormalizer
from docverify.utils.io import decode_image

from .engine_tesseract import open_engine
from .pdf_extractor import PdfTextExtractor
from .types import ExtractionOptions, ExtractionOutcome, SourceKind

logger = logging.getLogger(__name__)


class TextExtractor:
    """Produces transcripts for PDFs and raster images.

    Args:
        config: Full configuration. If None, uses the bundled defaults.

    Attributes:
        config: Configuration object
        normalizer: Image preprocessor run before OCR
        pdf_extractor: Structural PDF reader
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config if config is not None else get_default_config()
        self.normalizer = ImageNormalizer(config=self.config.preprocessing)
        self.pdf_extractor = PdfTextExtractor(config=self.config.pdf)

    def page_segmentation_mode(self, hint: DocumentTypeHint) -> int:
        """Single-column mode for ID cards and bills, uniform block otherwise."""
        if hint in (DocumentTypeHint.ID, DocumentTypeHint.UTILITY):
            return self.config.ocr.psm_column
        return self.config.ocr.psm_block

    def extract(
        self,
        data: bytes,
        mime_type: str,
        options: Optional[ExtractionOptions] = None,
    ) -> ExtractionOutcome:
        """Extract text and explain an empty result.

        Args:
            data: Raw document bytes
            mime_type: Declared MIME type
            options: OCR options (language, character filters, hint)

        Returns:
            ExtractionOutcome with text, route and an optional note
        """
        options = options or ExtractionOptions()
        mime = normalize_mime_type(mime_type)

        if mime == PDF_MIME_TYPE:
            return self._extract_pdf(data)
        if mime.startswith(IMAGE_MIME_PREFIX):
            return self._extract_image(data, options)

        logger.info(f"Unsupported document type '{mime}', no text extracted")
        return ExtractionOutcome(
            text="",
            source_kind=None,
            note=f"Unsupported MIME type '{mime}'; no text extracted",
        )

    def _extract_pdf(self, data: bytes) -> ExtractionOutcome:
        try:
            result = self.pdf_extractor.extract(data)
        except ExtractionError as e:
            logger.error(f"PDF text extraction failed: {e}", exc_info=True)
            return ExtractionOutcome(
                text="", source_kind=SourceKind.PDF_STRUCTURAL, note=str(e)
            )

        if result.text:
            logger.info(
                f"Extracted {len(result.text)} characters from "
                f"{result.page_count}-page PDF"
            )
            return ExtractionOutcome(text=result.text, source_kind=SourceKind.PDF_STRUCTURAL)

        if result.is_scanned:
            note = (
                f"PDF has no embedded text layer ({result.page_count} scanned page(s)); "
                "scanned PDFs are not OCR'd, so no transcript is available"
            )
        else:
            note = f"PDF contains no extractable text ({result.page_count} page(s))"
        logger.warning(note)
        return ExtractionOutcome(text="", source_kind=SourceKind.PDF_STRUCTURAL, note=note)

    def _extract_image(self, data: bytes, options: ExtractionOptions) -> ExtractionOutcome:
        hint = options.document_type_hint
        blacklist = (
            options.char_blacklist
            if options.char_blacklist is not None
            else self.config.ocr.char_blacklist
        )

        try:
            processed = self.normalizer.normalize(data, hint)
            image = decode_image(processed, grayscale=True)
            if image is None:
                raise ExtractionError("Image bytes could not be decoded for OCR")

            with open_engine(self.config.ocr, language=options.language) as engine:
                text = engine.extract_text(
                    image,
                    psm=self.page_segmentation_mode(hint),
                    char_whitelist=options.char_whitelist,
                    char_blacklist=blacklist,
                )
        except Exception as e:
            logger.error(f"OCR extraction failed: {e}", exc_info=True)
            return ExtractionOutcome(
                text="", source_kind=SourceKind.OCR, note=f"OCR failed: {e}"
            )

        if not text:
            logger.warning("OCR returned no text")
            return ExtractionOutcome(
                text="", source_kind=SourceKind.OCR, note="OCR returned no text"
            )

        logger.info(f"Successfully extracted {len(text)} characters via OCR")
        logger.debug(f"Text sample: {text[:200]}{'...' if len(text) > 200 else ''}")
        return ExtractionOutcome(text=text, source_kind=SourceKind.OCR)


def extract_text(
    data: bytes,
    mime_type: str,
    options: Optional[ExtractionOptions] = None,
    config: Optional[Config] = None,
) -> str:
    """Extract a plain-text transcript; returns "" when nothing can be extracted."""
    return TextExtractor(config=config).extract(data, mime_type, options).text
