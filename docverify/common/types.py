"""
Common type definitions for the document verification pipeline.

This module provides the Pydantic-based input model shared by every stage:
the raw document bytes, their MIME type and the caller's document-type hint.

These types provide:
- Fail-fast validation of caller input (a malformed document is a caller bug)
- MIME type normalisation so every stage branches on the same string
- Immutability for the duration of one analysis call
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from docverify.exceptions import InvalidDocumentInputError

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_PREFIX = "image/"


class DocumentTypeHint(Enum):
    """Caller-supplied document category used to tune preprocessing and OCR."""

    CERTIFICATE = "certificate"  # Certificate of occupancy, survey plan, deed
    ID = "id"  # Government-issued identity card
    UTILITY = "utility"  # Utility bill used as proof of address
    GENERIC = "generic"  # No hint - branch on measured image statistics

    @classmethod
    def parse(cls, value: Union["DocumentTypeHint", str, None]) -> "DocumentTypeHint":
        """Coerce a hint from an enum member, a string or None.

        Args:
            value: Hint as enum, case-insensitive string, or None for generic.

        Returns:
            Matching DocumentTypeHint.

        Raises:
            InvalidDocumentInputError: If the string names no known hint.

        Example:
            >>> DocumentTypeHint.parse("Certificate")
            <DocumentTypeHint.CERTIFICATE: 'certificate'>
        """
        if value is None:
            return cls.GENERIC
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            allowed = ", ".join(member.value for member in cls)
            raise InvalidDocumentInputError(
                f"Unknown document type hint '{value}'. Expected one of: {allowed}"
            ) from e


def normalize_mime_type(mime_type: str) -> str:
    """Lower-case a MIME type and drop parameters such as '; charset=utf-8'."""
    return mime_type.split(";", 1)[0].strip().lower()


class DocumentInput(BaseModel):
    """
    Immutable document handed to the pipeline by the surrounding application.

    Attributes:
        data: Raw file bytes (PDF or raster image).
        mime_type: Normalised MIME type, e.g. "application/pdf" or "image/png".
        document_type_hint: Document category, defaults to GENERIC.

    Example:
        >>> doc = DocumentInput.create(png_bytes, "image/PNG", "id")
        >>> doc.mime_type, doc.is_image
        ('image/png', True)
    """

    model_config = ConfigDict(frozen=True)

    data: bytes
    mime_type: str
    document_type_hint: DocumentTypeHint = DocumentTypeHint.GENERIC

    @field_validator("data")
    @classmethod
    def _validate_data(cls, v: bytes) -> bytes:
        if not v:
            raise ValueError("Document bytes are empty")
        return v

    @field_validator("mime_type")
    @classmethod
    def _validate_mime_type(cls, v: str) -> str:
        normalized = normalize_mime_type(v)
        if not normalized:
            raise ValueError("Document MIME type is empty")
        return normalized

    @field_validator("document_type_hint", mode="before")
    @classmethod
    def _coerce_hint(cls, v: Any) -> DocumentTypeHint:
        return DocumentTypeHint.parse(v)

    @classmethod
    def create(
        cls,
        data: Optional[bytes],
        mime_type: Optional[str],
        document_type_hint: Union[DocumentTypeHint, str, None] = None,
    ) -> "DocumentInput":
        """Build a DocumentInput, converting validation failures to contract errors.

        Raises:
            InvalidDocumentInputError: If bytes or MIME type are missing, or the
                hint is unknown.
        """
        if data is None:
            raise InvalidDocumentInputError("Document bytes are required")
        if mime_type is None:
            raise InvalidDocumentInputError("Document MIME type is required")

        hint = DocumentTypeHint.parse(document_type_hint)
        try:
            return cls(data=data, mime_type=mime_type, document_type_hint=hint)
        except ValidationError as e:
            messages = "; ".join(err["msg"] for err in e.errors())
            raise InvalidDocumentInputError(
                f"Invalid document input: {messages}"
            ) from e

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith(IMAGE_MIME_PREFIX)
