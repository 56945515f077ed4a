"""
Tamper Detector - Region Blur and Seam Analysis.

Scans a grayscale image in non-overlapping square regions looking for two
signals of digital splicing:

    1. Inconsistent quality: regions that are both smooth (low variance) and
       edge-less (low gradient), as left behind by a pasted or smoothed patch.
    2. Suspicious edges: abrupt intensity seams along region boundaries.

The heuristic is advisory. Unreadable images and internal errors produce a
neutral result rather than an exception.

Example:
    >>> from docverify.tamper import detect_tampering
    >>> result = detect_tampering(png_bytes)
    >>> print(f"Score: {result.score:.2f}, blurred: {result.blurred_regions_detected}")
"""

import logging
from typing import List, Optional

import numpy as np

from docverify.config_loader import TamperConfig, get_default_config
from docverify.utils.io import decode_image

from .types import RegionMetrics, TamperResult

logger = logging.getLogger(__name__)


def region_variance(region: np.ndarray) -> float:
    """Pixel intensity variance of a region."""
    return float(np.var(region, dtype=np.float64))


def region_edge_strength(region: np.ndarray) -> float:
    """
    Mean horizontal plus vertical gradient at interior pixels.

    Uses a central difference (1-pixel offset either side), so the outermost
    ring of pixels is excluded.

    Example:
        >>> region_edge_strength(np.zeros((32, 32), dtype=np.uint8))
        0.0
    """
    if region.shape[0] < 3 or region.shape[1] < 3:
        return 0.0

    pixels = region.astype(np.int32)
    dx = np.abs(pixels[1:-1, 2:] - pixels[1:-1, :-2])
    dy = np.abs(pixels[2:, 1:-1] - pixels[:-2, 1:-1])
    return float(np.mean(dx + dy))


def boundary_difference(gray: np.ndarray, top: int, left: int, size: int) -> float:
    """
    Normalised seam strength along a region's left and top boundaries.

    Sums absolute differences between the region's first column and the column
    before it, and between its first row and the row above, then divides the
    larger sum by the region size.

    Args:
        gray: Full grayscale image
        top: Region top row (must be > 0)
        left: Region left column (must be > 0)
        size: Region side length

    Returns:
        Mean per-pixel seam difference of the stronger boundary
    """
    pixels = gray.astype(np.int32)
    horizontal = np.abs(
        pixels[top : top + size, left] - pixels[top : top + size, left - 1]
    ).sum()
    vertical = np.abs(pixels[top, left : left + size] - pixels[top - 1, left : left + size]).sum()
    return float(max(horizontal, vertical)) / size


def analyze_regions(gray: np.ndarray, config: TamperConfig) -> List[RegionMetrics]:
    """
    Measure every full region, left-to-right then top-to-bottom.

    Partial regions at the right and bottom edges are skipped. Regions in the
    first row or column have no preceding neighbour and carry no seam metric.
    """
    size = config.region_size
    height, width = gray.shape[:2]
    rows, cols = height // size, width // size

    metrics: List[RegionMetrics] = []
    for row in range(rows):
        top = row * size
        for col in range(cols):
            left = col * size
            region = gray[top : top + size, left : left + size]

            seam = None
            if row > 0 and col > 0:
                seam = boundary_difference(gray, top, left, size)

            metrics.append(
                RegionMetrics(
                    row=row,
                    col=col,
                    variance=region_variance(region),
                    edge_strength=region_edge_strength(region),
                    boundary_difference=seam,
                )
            )
    return metrics


def score_regions(metrics: List[RegionMetrics], config: TamperConfig) -> TamperResult:
    """
    Aggregate region measurements into a TamperResult.

    Formula:
        quality = max(0, 1 - inconsistent / max_inconsistent_regions)
        edge = max(0, 1 - anomalies / max_edge_anomalies)
        score = round(quality_weight * quality + edge_weight * edge, 2)
    """
    inconsistent = sum(
        1
        for m in metrics
        if m.variance < config.variance_threshold
        and m.edge_strength < config.edge_strength_threshold
    )
    anomalies = sum(
        1
        for m in metrics
        if m.boundary_difference is not None
        and m.boundary_difference > config.boundary_threshold
    )

    quality_score = max(0.0, 1.0 - inconsistent / config.max_inconsistent_regions)
    edge_score = max(0.0, 1.0 - anomalies / config.max_edge_anomalies)
    score = config.quality_weight * quality_score + config.edge_weight * edge_score
    score = round(min(1.0, max(0.0, score)), 2)

    return TamperResult(
        score=score,
        blurred_regions_detected=inconsistent > 0,
        inconsistent_region_count=inconsistent,
        suspicious_edges=anomalies > 0,
        edge_anomaly_count=anomalies,
        regions_analyzed=len(metrics),
    )


class TamperDetector:
    """Region-based tamper heuristic.

    Args:
        config: Tamper detection parameters. If None, uses the bundled defaults.
    """

    def __init__(self, config: Optional[TamperConfig] = None):
        self.config = config if config is not None else get_default_config().tamper

    def detect_array(self, gray: np.ndarray) -> TamperResult:
        """Run the heuristic on an already-decoded grayscale image."""
        if gray is None or gray.ndim != 2 or gray.size == 0:
            logger.warning("Image dimensions unavailable, tamper analysis inconclusive")
            return TamperResult.neutral(self.config.neutral_score)

        metrics = analyze_regions(gray, self.config)
        if not metrics:
            logger.warning(
                f"Image {gray.shape[1]}x{gray.shape[0]} smaller than one "
                f"{self.config.region_size}px region, tamper analysis inconclusive"
            )
            return TamperResult.neutral(self.config.neutral_score)

        result = score_regions(metrics, self.config)

        logger.info(
            f"Tamper analysis: score={result.score:.2f}, "
            f"inconsistent={result.inconsistent_region_count}, "
            f"edge_anomalies={result.edge_anomaly_count}, "
            f"regions={result.regions_analyzed}"
        )
        return result

    def detect(self, image_bytes: bytes) -> TamperResult:
        """
        Analyze encoded image bytes for tampering.

        Args:
            image_bytes: Encoded raster image (PNG, JPEG, ...)

        Returns:
            TamperResult; the neutral result if the image cannot be analyzed
        """
        try:
            gray = decode_image(image_bytes, grayscale=True)
            return self.detect_array(gray)
        except Exception as e:
            logger.error(f"Tamper detection failed: {e}", exc_info=True)
            return TamperResult.neutral(self.config.neutral_score)


def detect_tampering(
    image_bytes: bytes, config: Optional[TamperConfig] = None
) -> TamperResult:
    """Analyze image bytes for blur inconsistencies and seams (never raises)."""
    return TamperDetector(config=config).detect(image_bytes)
