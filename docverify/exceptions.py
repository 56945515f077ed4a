"""Exception hierarchy for the document verification core.

Only contract errors (:class:`InvalidDocumentInputError`) and configuration
errors escape the public API. Extraction errors are raised by the PDF and OCR
adapters and caught by the extractor, which degrades to an empty transcript.
"""


class DocVerifyError(Exception):
    """Base exception for all document verification errors."""


class InvalidDocumentInputError(DocVerifyError, ValueError):
    """Raised when a caller passes a malformed document (no bytes, no MIME type)."""


class ConfigurationError(DocVerifyError):
    """Raised when a configuration file cannot be parsed or fails validation."""


class ExtractionError(DocVerifyError):
    """Raised when text extraction from a PDF or image fails."""


class EngineUnavailableError(ExtractionError):
    """Raised when the Tesseract binary is missing or misconfigured."""


class EngineClosedError(ExtractionError):
    """Raised when a terminated OCR engine is asked to do more work."""
