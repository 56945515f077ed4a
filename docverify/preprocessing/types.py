"""
Data structures for the Image Normalizer.

A PreprocessingProfile records which enhancement path was chosen for an image
and the parameters that path applies. It is recomputed on every call from the
measured statistics and the caller's hint, and never persisted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ProcessingPath(Enum):
    """Enhancement path selected for an image."""

    CERTIFICATE = "certificate"
    ID_UTILITY = "id_utility"
    DARK = "dark"  # Mean luminance below dark threshold
    BRIGHT = "bright"  # Washed-out scan, mean above bright threshold
    LOW_CONTRAST = "low_contrast"  # Narrow luminance spread
    STANDARD = "standard"


@dataclass(frozen=True)
class ImageStatistics:
    """Global metadata and per-channel statistics of a decoded image."""

    width: int
    height: int
    channel_means: Tuple[float, ...]
    channel_stds: Tuple[float, ...]

    @property
    def mean(self) -> float:
        """Brightness proxy: average of the channel means (0-255)."""
        return float(sum(self.channel_means) / len(self.channel_means))

    @property
    def std(self) -> float:
        """Contrast proxy: average of the channel standard deviations."""
        return float(sum(self.channel_stds) / len(self.channel_stds))


@dataclass(frozen=True)
class PreprocessingProfile:
    """
    Per-call enhancement parameters.

    Attributes:
        path: Selected processing path
        mean: Measured brightness that drove the choice
        std: Measured contrast that drove the choice
        normalize: Stretch the dynamic range to the full 0-255 range
        brightness: Multiplicative brightness factor (1.0 = unchanged)
        gamma: Gamma applied as out = in ** (1 / gamma); None skips the step
        sharpen_sigma: Gaussian sigma for unsharp masking (0 disables)
        contrast_factor: Linear stretch around the mean; None skips the step
        desaturate: Collapse colour before the other adjustments
    """

    path: ProcessingPath
    mean: float
    std: float
    normalize: bool = False
    brightness: float = 1.0
    gamma: Optional[float] = None
    sharpen_sigma: float = 0.0
    contrast_factor: Optional[float] = None
    desaturate: bool = False
