"""Tesseract OCR engine wrapper with scoped lifecycle.

This module provides a high-level interface to Tesseract OCR for document
transcription. An engine is acquired for one language and released on every
exit path through the :func:`open_engine` context manager, so callers never
manage acquisition and release by hand.

Example:
    >>> from docverify.extraction.engine_tesseract import open_engine
    >>> with open_engine(config.ocr, language="eng") as engine:
    ...     text = engine.extract_text(gray_image, psm=6)
"""

import logging
import shlex
from contextlib import contextmanager
from typing import Iterator, Optional

import numpy as np
import pytesseract

from docverify.config_loader import OCRConfig
from docverify.exceptions import (
    EngineClosedError,
    EngineUnavailableError,
    ExtractionError,
)

logger = logging.getLogger(__name__)


class TesseractEngine:
    """Wrapper for Tesseract OCR bound to a single language.

    The engine must be opened before use and refuses work once closed.

    Args:
        config: OCR engine configuration.
        language: Tesseract language code; defaults to ``config.language``.

    Attributes:
        config: Engine configuration instance.
        language: Language the engine was acquired for.
    """

    def __init__(self, config: OCRConfig, language: Optional[str] = None):
        self.config = config
        self.language = language or config.language
        self._version: Optional[str] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._version is not None and not self._closed

    def open(self) -> None:
        """Acquire the engine by verifying the Tesseract binary.

        Raises:
            EngineClosedError: If the engine was already terminated.
            EngineUnavailableError: If Tesseract is not installed or not on PATH.
        """
        if self._closed:
            raise EngineClosedError("Cannot reopen a terminated Tesseract engine")

        if self.config.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.config.tesseract_cmd

        try:
            self._version = str(pytesseract.get_tesseract_version())
        except Exception as e:
            logger.error(f"Tesseract not found or not properly configured: {e}")
            raise EngineUnavailableError(
                "Tesseract not available. Install tesseract-ocr and make sure it "
                "is on PATH (or set ocr.tesseract_cmd)."
            ) from e

        logger.info(
            f"Tesseract engine acquired: version {self._version}, lang={self.language}"
        )

    def close(self) -> None:
        """Terminate the engine. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        logger.debug(f"Tesseract engine terminated (lang={self.language})")

    def build_config(
        self,
        psm: int,
        char_whitelist: Optional[str] = None,
        char_blacklist: Optional[str] = None,
    ) -> str:
        """Build the Tesseract command-line configuration string.

        Args:
            psm: Page segmentation mode.
            char_whitelist: Characters Tesseract may emit.
            char_blacklist: Characters Tesseract must not emit.

        Returns:
            Configuration string for pytesseract.

        Example:
            >>> engine.build_config(6, char_blacklist="|~")
            "--psm 6 -c preserve_interword_spaces=1 -c 'tessedit_char_blacklist=|~'"
        """
        parts = [f"--psm {psm}"]
        if self.config.preserve_interword_spaces:
            parts.append("-c preserve_interword_spaces=1")
        if char_whitelist:
            parts.append("-c " + shlex.quote(f"tessedit_char_whitelist={char_whitelist}"))
        if char_blacklist:
            parts.append("-c " + shlex.quote(f"tessedit_char_blacklist={char_blacklist}"))
        return " ".join(parts)

    def extract_text(
        self,
        image: np.ndarray,
        psm: int,
        char_whitelist: Optional[str] = None,
        char_blacklist: Optional[str] = None,
    ) -> str:
        """Run Tesseract on a preprocessed image.

        Args:
            image: Grayscale image as numpy array (H, W).
            psm: Page segmentation mode.
            char_whitelist: Optional whitelist.
            char_blacklist: Optional blacklist.

        Returns:
            Recognised text, stripped of surrounding whitespace.

        Raises:
            EngineClosedError: If the engine is not open.
            ExtractionError: If the image is empty or Tesseract fails/times out.
        """
        if not self.is_open:
            raise EngineClosedError("Tesseract engine is not open")

        if image is None or image.size == 0:
            raise ExtractionError("Cannot run OCR on an empty image")

        tesseract_config = self.build_config(psm, char_whitelist, char_blacklist)
        logger.debug(f"Running Tesseract with config: {tesseract_config}")

        try:
            text = pytesseract.image_to_string(
                image,
                lang=self.language,
                config=tesseract_config,
                timeout=self.config.timeout_seconds,
            )
        except pytesseract.TesseractError as e:
            raise ExtractionError(f"Tesseract failed: {e}") from e
        except RuntimeError as e:
            # TesseractError subclasses RuntimeError; a bare RuntimeError is a timeout
            raise ExtractionError(f"Tesseract timed out or was killed: {e}") from e

        return text.strip()


@contextmanager
def open_engine(config: OCRConfig, language: Optional[str] = None) -> Iterator[TesseractEngine]:
    """Acquire a Tesseract engine for the duration of a ``with`` block.

    The engine is terminated when the block exits, whether normally or by
    exception.

    Raises:
        EngineUnavailableError: If Tesseract cannot be acquired.
    """
    engine = TesseractEngine(config, language=language)
    engine.open()
    try:
        yield engine
    finally:
        engine.close()
