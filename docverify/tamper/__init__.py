"""Tamper Detection.

Region-based heuristics for localized blur inconsistency and splice seams
on document images.

Example:
    >>> from docverify.tamper import TamperDetector
    >>> result = TamperDetector().detect(jpeg_bytes)
    >>> print(result.score, result.suspicious_edges)
"""

from .detector import (
    TamperDetector,
    analyze_regions,
    boundary_difference,
    detect_tampering,
    region_edge_strength,
    region_variance,
    score_regions,
)
from .types import RegionMetrics, TamperResult

__all__ = [
    "TamperDetector",
    "detect_tampering",
    "analyze_regions",
    "score_regions",
    "region_variance",
    "region_edge_strength",
    "boundary_difference",
    "TamperResult",
    "RegionMetrics",
]
