"""
Image Normalizer

Adaptive preprocessing of raster images for OCR legibility: brightness and
contrast correction, sharpening, grayscale conversion and upscaling.

Example:
    >>> from docverify.preprocessing import normalize
    >>> from docverify.common import DocumentTypeHint
    >>>
    >>> processed_png = normalize(image_bytes, DocumentTypeHint.CERTIFICATE)
"""

from .normalizer import (
    ImageNormalizer,
    adjust_gamma,
    compute_statistics,
    normalize,
    select_profile,
    upscale_size,
)
from .types import ImageStatistics, PreprocessingProfile, ProcessingPath

__all__ = [
    "normalize",
    "ImageNormalizer",
    "adjust_gamma",
    "compute_statistics",
    "select_profile",
    "upscale_size",
    "ImageStatistics",
    "PreprocessingProfile",
    "ProcessingPath",
]
