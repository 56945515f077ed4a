"""Pipeline Orchestrator - one document in, structured findings out.

This module sequences the verification stages for a single document:
    1. INPUT: sanity-check the declared MIME type against the magic bytes
    2. EXTRACT: transcript via PDF parsing or preprocessing + OCR
    3. MATCH: corroborate the declared address (only with a transcript)
    4. TAMPER: region blur/seam heuristic (raster images only)

Every stage is guarded independently. A failed or empty stage leaves its
field as None and records an entry in AnalysisResult.errors; analyze() always
returns. Only caller contract errors (no bytes, no MIME type, unknown hint)
raise, and they do so before any stage runs.

Example:
    >>> from docverify import analyze
    >>> result = analyze(pdf_bytes, "application/pdf", "14 Adeola Odeku Street, Lagos")
    >>> if result.address_match:
    ...     print(f"Address score: {result.address_match.score:.2f}")
    >>> for error in result.errors:
    ...     print(error.stage.value, error.message)
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union

from docverify.address import match_address
from docverify.common.types import DocumentInput, DocumentTypeHint
from docverify.config_loader import Config, get_default_config, load_config
from docverify.extraction import ExtractionOptions, ExtractionOutcome, TextExtractor
from docverify.tamper import TamperDetector, TamperResult
from docverify.utils.io import sniff_image_format

from .types import AnalysisResult, PipelineStage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StageTimeoutError(Exception):
    """Raised internally when a stage exceeds its wall-clock budget."""


def run_with_timeout(func: Callable[[], T], timeout_seconds: float, stage: str) -> T:
    """Run func on a worker thread and wait at most timeout_seconds.

    A timed-out worker is abandoned, not killed; the call returns immediately.
    A timeout of 0 runs func inline with no limit.

    Raises:
        StageTimeoutError: If func does not finish in time
    """
    if timeout_seconds <= 0:
        return func()

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"docverify-{stage}")
    future = executor.submit(func)
    try:
        return future.result(timeout=timeout_seconds)
    except FutureTimeoutError as e:
        future.cancel()
        raise StageTimeoutError(
            f"{stage} stage timed out after {timeout_seconds:g}s"
        ) from e
    finally:
        executor.shutdown(wait=False)


class DocumentAnalyzer:
    """Runs the EXTRACT -> MATCH -> TAMPER pipeline.

    The analyzer holds configuration and stateless stage components only, so
    one instance can serve concurrent analyze() calls.

    Args:
        config: Configuration object. Takes precedence over config_path.
        config_path: Optional path to a YAML config. If both are None, uses defaults.

    Attributes:
        config: Full configuration object
        extractor: Text extractor (PDF parsing and OCR)
        tamper_detector: Region-based tamper heuristic
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        config_path: Optional[Path] = None,
    ):
        if config is not None:
            self.config = config
        elif config_path is not None:
            self.config = load_config(config_path)
        else:
            self.config = get_default_config()

        self.extractor = TextExtractor(config=self.config)
        self.tamper_detector = TamperDetector(config=self.config.tamper)

    def analyze(self, document: DocumentInput, declared_address: str) -> AnalysisResult:
        """Analyze one document against a declared address.

        Args:
            document: Validated document input
            declared_address: Address the user declared (may be empty)

        Returns:
            AnalysisResult with whatever stages succeeded and a log of the rest
        """
        start_time = time.perf_counter()
        result = AnalysisResult()

        logger.info(
            f"Analyzing {document.mime_type} document "
            f"({len(document.data)} bytes, hint={document.document_type_hint.value})"
        )

        self._check_input(document, result)
        self._run_extract(document, result)
        self._run_match(declared_address or "", result)
        self._run_tamper(document, result)

        result.processing_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"Analysis complete in {result.processing_time_ms:.1f}ms: "
            f"transcript={'yes' if result.transcript else 'no'}, "
            f"address_score="
            f"{result.address_match.score if result.address_match else 'n/a'}, "
            f"tamper_score={result.tamper.score if result.tamper else 'n/a'}, "
            f"errors={len(result.errors)}"
        )
        return result

    def _check_input(self, document: DocumentInput, result: AnalysisResult) -> None:
        if not document.is_image:
            return
        if sniff_image_format(document.data) is None:
            message = (
                f"Declared type {document.mime_type} but the content does not start "
                "with a known image signature"
            )
            logger.warning(message)
            result.record_error(PipelineStage.INPUT, message)

    def _run_extract(self, document: DocumentInput, result: AnalysisResult) -> None:
        options = ExtractionOptions(
            language=self.config.ocr.language,
            document_type_hint=document.document_type_hint,
        )

        try:
            outcome: ExtractionOutcome = run_with_timeout(
                lambda: self.extractor.extract(document.data, document.mime_type, options),
                self.config.pipeline.stage_timeout_seconds,
                PipelineStage.EXTRACT.value,
            )
        except StageTimeoutError as e:
            logger.error(str(e))
            result.record_error(PipelineStage.EXTRACT, str(e))
            return
        except Exception as e:
            logger.error(f"Extraction stage failed: {e}", exc_info=True)
            result.record_error(PipelineStage.EXTRACT, f"Extraction failed: {e}")
            return

        result.transcript = outcome.to_transcript()
        if result.transcript is None:
            result.record_error(
                PipelineStage.EXTRACT, outcome.note or "No text could be extracted"
            )

    def _run_match(self, declared_address: str, result: AnalysisResult) -> None:
        if result.transcript is None:
            logger.debug("No transcript, skipping address matching")
            return

        try:
            result.address_match = match_address(
                result.transcript.text, declared_address, self.config.address
            )
        except Exception as e:
            logger.error(f"Address matching failed: {e}", exc_info=True)
            result.record_error(PipelineStage.MATCH, f"Address matching failed: {e}")

    def _run_tamper(self, document: DocumentInput, result: AnalysisResult) -> None:
        if not document.is_image:
            logger.debug(f"Skipping tamper analysis for {document.mime_type}")
            return

        try:
            tamper: TamperResult = run_with_timeout(
                lambda: self.tamper_detector.detect(document.data),
                self.config.pipeline.stage_timeout_seconds,
                PipelineStage.TAMPER.value,
            )
        except StageTimeoutError as e:
            logger.error(str(e))
            result.record_error(PipelineStage.TAMPER, str(e))
            return
        except Exception as e:
            logger.error(f"Tamper stage failed: {e}", exc_info=True)
            result.record_error(PipelineStage.TAMPER, f"Tamper detection failed: {e}")
            return

        result.tamper = tamper


def analyze(
    data: bytes,
    mime_type: str,
    declared_address: str,
    document_type_hint: Union[DocumentTypeHint, str, None] = None,
    config: Optional[Config] = None,
) -> AnalysisResult:
    """Analyze raw document bytes against a declared address.

    Args:
        data: Raw file bytes (PDF or raster image)
        mime_type: Declared MIME type, e.g. "application/pdf" or "image/jpeg"
        declared_address: Address the user declared
        document_type_hint: "certificate", "id", "utility", "generic" or None
        config: Optional configuration; defaults to the bundled config.yaml

    Returns:
        AnalysisResult (never raises for document-quality problems)

    Raises:
        InvalidDocumentInputError: If bytes or MIME type are missing or the hint is unknown
    """
    document = DocumentInput.create(data, mime_type, document_type_hint)
    return DocumentAnalyzer(config=config).analyze(document, declared_address)
