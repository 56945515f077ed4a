"""Type definitions for tamper detection."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RegionMetrics:
    """Per-region measurements.

    Attributes:
        row: Region row index (0-based)
        col: Region column index (0-based)
        variance: Pixel intensity variance (blur proxy)
        edge_strength: Mean |dx| + |dy| at interior pixels
        boundary_difference: Normalised seam difference (None for first row/column)
    """

    row: int
    col: int
    variance: float
    edge_strength: float
    boundary_difference: Optional[float] = None


@dataclass(frozen=True)
class TamperResult:
    """Likelihood that an image is unaltered.

    Attributes:
        score: Value in [0, 1]; higher means more likely authentic
        blurred_regions_detected: At least one flat, edge-less region was found
        inconsistent_region_count: Number of flat, edge-less regions
        suspicious_edges: At least one abrupt region seam was found
        edge_anomaly_count: Number of abrupt region seams
        regions_analyzed: Number of full regions scanned
    """

    score: float
    blurred_regions_detected: bool = False
    inconsistent_region_count: int = 0
    suspicious_edges: bool = False
    edge_anomaly_count: int = 0
    regions_analyzed: int = 0

    @classmethod
    def neutral(cls, score: float = 0.5) -> "TamperResult":
        """Inconclusive result: neutral score, no flags raised."""
        return cls(score=score)
