"""Document verification core.

Turns an uploaded land-title document (PDF or raster image) and a declared
address into structured findings: a text transcript, an address-match score
and a tamper-likelihood score.

Example:
    >>> import docverify
    >>> result = docverify.analyze(data, "image/jpeg", "12 Broad Street, Lagos", "certificate")
    >>> print(result.to_dict())
"""

from .common import DocumentInput, DocumentTypeHint
from .config_loader import Config, get_default_config, load_config
from .exceptions import (
    ConfigurationError,
    DocVerifyError,
    InvalidDocumentInputError,
)
from .pipeline import AnalysisResult, DocumentAnalyzer, PipelineStage, StageError, analyze

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "DocumentAnalyzer",
    "AnalysisResult",
    "PipelineStage",
    "StageError",
    "DocumentInput",
    "DocumentTypeHint",
    "Config",
    "load_config",
    "get_default_config",
    "DocVerifyError",
    "InvalidDocumentInputError",
    "ConfigurationError",
]
