"""
I/O Utilities

In-memory image decoding/encoding, format sniffing and JSON/YAML helpers.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import cv2
import numpy as np
import yaml

# Leading bytes of the raster formats OpenCV can decode
IMAGE_SIGNATURES = {
    b"\x89PNG\r\n\x1a\n": "png",
    b"\xff\xd8\xff": "jpeg",
    b"GIF87a": "gif",
    b"GIF89a": "gif",
    b"BM": "bmp",
    b"II*\x00": "tiff",
    b"MM\x00*": "tiff",
}


def sniff_image_format(data: bytes) -> Optional[str]:
    """Identify a raster format from its magic bytes.

    Args:
        data: Raw file bytes.

    Returns:
        Format name ("png", "jpeg", "gif", "bmp", "tiff", "webp") or None.

    Example:
        >>> sniff_image_format(b"\\x89PNG\\r\\n\\x1a\\n...")
        'png'
    """
    if not data:
        return None
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "webp"
    for signature, name in IMAGE_SIGNATURES.items():
        if data.startswith(signature):
            return name
    return None


def to_uint8(image: np.ndarray) -> np.ndarray:
    """Rescale a decoded image to 8-bit depth.

    16-bit images are scaled from 0-65535 to 0-255; other non-uint8 arrays
    (float TIFFs) are min-max stretched to 0-255.

    Example:
        >>> to_uint8(np.full((2, 2), 65535, dtype=np.uint16)).max()
        255
    """
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        return cv2.convertScaleAbs(image, alpha=255.0 / 65535.0)
    return cv2.normalize(image, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)


def decode_image(data: bytes, grayscale: bool = False) -> Optional[np.ndarray]:
    """Decode encoded image bytes into a numpy array.

    Args:
        data: Encoded image (PNG, JPEG, ...).
        grayscale: Decode straight to a single channel.

    Returns:
        Decoded image (H, W) or (H, W, C) uint8, or None if OpenCV
        cannot decode the bytes.
    """
    if not data:
        return None
    buffer = np.frombuffer(data, dtype=np.uint8)
    flags = cv2.IMREAD_GRAYSCALE if grayscale else cv2.IMREAD_UNCHANGED
    image = cv2.imdecode(buffer, flags)
    if image is None or image.size == 0:
        return None
    return to_uint8(image)


def encode_png(image: np.ndarray) -> bytes:
    """Encode an image array as PNG bytes.

    Raises:
        ValueError: If OpenCV fails to encode the array.
    """
    ok, encoded = cv2.imencode(".png", image)
    if not ok:
        raise ValueError(f"Failed to encode image with shape {image.shape} as PNG")
    return encoded.tobytes()


def load_yaml(file_path: Path) -> Dict[str, Any]:
    """Load YAML file."""
    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def save_json(data: Dict[str, Any], file_path: Path, indent: int = 2):
    """Save data to JSON file."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
