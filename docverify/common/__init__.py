"""
Common types shared across all modules.

This module provides the standardized input type for the document verification
pipeline, ensuring every stage sees the same validated bytes, MIME type and hint.
"""

from docverify.common.types import (
    IMAGE_MIME_PREFIX,
    PDF_MIME_TYPE,
    DocumentInput,
    DocumentTypeHint,
    normalize_mime_type,
)

__all__ = [
    "DocumentInput",
    "DocumentTypeHint",
    "normalize_mime_type",
    "PDF_MIME_TYPE",
    "IMAGE_MIME_PREFIX",
]
