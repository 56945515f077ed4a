"""Pipeline Orchestration.

Sequences extraction, address matching and tamper detection for one document
and aggregates the findings into an AnalysisResult.

Example:
    >>> from docverify.pipeline import DocumentAnalyzer
    >>> from docverify.common import DocumentInput
    >>> analyzer = DocumentAnalyzer()
    >>> result = analyzer.analyze(DocumentInput.create(data, "image/png"), address)
"""

from .orchestrator import DocumentAnalyzer, StageTimeoutError, analyze, run_with_timeout
from .types import AnalysisResult, PipelineStage, StageError

__all__ = [
    "DocumentAnalyzer",
    "analyze",
    "run_with_timeout",
    "StageTimeoutError",
    "AnalysisResult",
    "PipelineStage",
    "StageError",
]
