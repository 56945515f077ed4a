"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules: synthetic document images (numpy + OpenCV) and
generated PDFs (reportlab).
"""

import io

import cv2
import numpy as np
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


def encode(image: np.ndarray, ext: str = ".png") -> bytes:
    """Encode an image array with OpenCV."""
    ok, buffer = cv2.imencode(ext, image)
    assert ok
    return buffer.tobytes()


def textured_image(height: int, width: int) -> np.ndarray:
    """Smooth sinusoidal texture: high variance, visible gradients, no seams."""
    ys, xs = np.mgrid[0:height, 0:width]
    texture = 128 + 60 * np.sin(xs / 3.0) * np.cos(ys / 3.0)
    return texture.astype(np.uint8)


@pytest.fixture
def blank_image():
    """Uniform white grayscale image (every region flat)."""
    return np.full((256, 256), 255, dtype=np.uint8)


@pytest.fixture
def texture_image():
    """Natural-looking texture that should not trigger tamper flags."""
    return textured_image(256, 256)


@pytest.fixture
def document_image():
    """Fake certificate: white page with black printed address lines."""
    image = np.ones((1000, 1000, 3), dtype=np.uint8) * 255
    cv2.putText(
        image,
        "CERTIFICATE OF OCCUPANCY",
        (80, 200),
        cv2.FONT_HERSHEY_SIMPLEX,
        1.5,
        (0, 0, 0),
        3,
    )
    cv2.putText(
        image,
        "123 Main Street Lagos",
        (80, 400),
        cv2.FONT_HERSHEY_SIMPLEX,
        1.2,
        (0, 0, 0),
        2,
    )
    return image


@pytest.fixture
def document_png(document_image):
    """PNG bytes of the fake certificate."""
    return encode(document_image)


@pytest.fixture
def small_color_image():
    """Small BGR photo (400 wide x 600 tall) that must be upscaled."""
    image = np.zeros((600, 400, 3), dtype=np.uint8)
    image[:, :, 0] = 90
    image[:, :, 1] = 140
    image[:, :, 2] = 200
    cv2.rectangle(image, (50, 50), (350, 150), (20, 20, 20), -1)
    return image


@pytest.fixture
def text_pdf_bytes() -> bytes:
    """Single-page PDF containing a known address line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "123 Main Street Lagos Ikeja")
    c.save()
    return buf.getvalue()


@pytest.fixture
def multi_page_pdf_bytes() -> bytes:
    """Two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a blank page and no text."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture
def scanned_pdf_bytes(document_png) -> bytes:
    """PDF whose only page is an embedded raster scan (no text layer)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawImage(ImageReader(io.BytesIO(document_png)), 72, 200, width=400, height=400)
    c.showPage()
    c.save()
    return buf.getvalue()
