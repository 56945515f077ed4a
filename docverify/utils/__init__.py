"""
Shared Utilities

Common functions used across all modules.
"""

from docverify.utils.io import decode_image, encode_png, sniff_image_format, to_uint8

__all__ = [
    "decode_image",
    "encode_png",
    "sniff_image_format",
    "to_uint8",
]
