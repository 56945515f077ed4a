"""Configuration loader with Pydantic validation for the verification pipeline.

This module provides type-safe configuration loading from YAML files using
Pydantic models for validation and default values. Every empirically chosen
threshold (brightness cut-offs, region size, variance limits, score weights)
lives here so it can be tuned without touching the algorithms.
"""

import logging
from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, ValidationError

from docverify.exceptions import ConfigurationError
from docverify.utils.io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class PreprocessingConfig(BaseModel):
    """Image normalization configuration.

    Attributes:
        dark_mean_threshold: Mean luminance below which an image counts as dark
        bright_mean_threshold: Mean luminance above which an image is washed out
        low_contrast_std_threshold: Stddev below which an image is low-contrast
        min_dimension: Width/height below which the image is upscaled
        upscale_target: Size the smaller dimension is scaled towards
        certificate_brightness: Brightness multiplier for certificates
        certificate_gamma: Gamma for certificates (< 1 deepens text strokes)
        certificate_sharpen_sigma: Unsharp-mask sigma for certificates
        id_utility_brightness: Brightness multiplier for ID cards and bills
        id_utility_sharpen_sigma: Unsharp-mask sigma for ID cards and bills
        dark_brightness: Brightness multiplier for dark images
        dark_gamma: Gamma for dark images (> 1 lifts midtones)
        dark_sharpen_sigma: Unsharp-mask sigma for dark images
        bright_brightness: Brightness multiplier for washed-out images
        bright_gamma: Gamma for washed-out images
        bright_sharpen_sigma: Unsharp-mask sigma for washed-out images
        low_contrast_factor: Linear stretch factor around the mean
        low_contrast_sharpen_sigma: Unsharp-mask sigma for low-contrast images
        standard_sharpen_sigma: Unsharp-mask sigma for everything else
    """

    dark_mean_threshold: float = Field(default=100.0, ge=0.0, le=255.0)
    bright_mean_threshold: float = Field(default=220.0, ge=0.0, le=255.0)
    low_contrast_std_threshold: float = Field(default=15.0, ge=0.0)
    min_dimension: int = Field(default=800, gt=0)
    upscale_target: int = Field(default=1200, gt=0)

    certificate_brightness: float = Field(default=1.1, gt=0.0)
    certificate_gamma: float = Field(default=0.9, gt=0.0)
    certificate_sharpen_sigma: float = Field(default=1.0, ge=0.0)

    id_utility_brightness: float = Field(default=1.05, gt=0.0)
    id_utility_sharpen_sigma: float = Field(default=0.5, ge=0.0)

    dark_brightness: float = Field(default=1.3, gt=0.0)
    dark_gamma: float = Field(default=1.2, gt=0.0)
    dark_sharpen_sigma: float = Field(default=1.0, ge=0.0)

    bright_brightness: float = Field(default=0.9, gt=0.0)
    bright_gamma: float = Field(default=0.8, gt=0.0)
    bright_sharpen_sigma: float = Field(default=1.0, ge=0.0)

    low_contrast_factor: float = Field(default=1.5, gt=0.0)
    low_contrast_sharpen_sigma: float = Field(default=1.5, ge=0.0)

    standard_sharpen_sigma: float = Field(default=0.5, ge=0.0)


class OCRConfig(BaseModel):
    """Tesseract OCR configuration.

    Attributes:
        language: Tesseract language code(s), e.g. "eng" or "eng+yor"
        psm_block: Page segmentation mode for certificates and generic documents
        psm_column: Page segmentation mode for ID cards and utility bills
        preserve_interword_spaces: Keep runs of spaces between words
        char_blacklist: Characters Tesseract must never emit (OCR noise)
        timeout_seconds: Per-call Tesseract subprocess timeout (0 disables)
        tesseract_cmd: Optional explicit path to the tesseract binary
    """

    language: str = "eng"
    psm_block: int = Field(default=6, ge=0, le=13)
    psm_column: int = Field(default=4, ge=0, le=13)
    preserve_interword_spaces: bool = True
    char_blacklist: str = "{}[]<>^`~|"
    timeout_seconds: float = Field(default=30.0, ge=0.0)
    tesseract_cmd: str = ""


class PDFConfig(BaseModel):
    """Structural PDF extraction configuration.

    Attributes:
        page_separator: String placed between consecutive pages
        word_separator: String placed between text items on a page
    """

    page_separator: str = "\n\n"
    word_separator: str = " "


class AddressMatchConfig(BaseModel):
    """Address matching configuration.

    Attributes:
        stop_words: Tokens never used as evidence
        min_token_length: Tokens shorter than this are discarded
        context_window: Characters captured on each side of a match
        max_token_weight: Upper bound for a token's length-based weight
        length_divisor: Token length is divided by this to get its weight
        digit_multiplier: Extra weight for tokens containing a digit
        consecutive_bonus: Multiplier when one snippet holds 2+ adjacent tokens
        consecutive_min_words: Adjacent tokens needed for the bonus
    """

    stop_words: List[str] = ["and", "the", "or", "of", "in", "at", "to", "by"]
    min_token_length: int = Field(default=2, ge=1)
    context_window: int = Field(default=50, ge=0)
    max_token_weight: float = Field(default=2.0, gt=0.0)
    length_divisor: float = Field(default=3.0, gt=0.0)
    digit_multiplier: float = Field(default=1.5, gt=0.0)
    consecutive_bonus: float = Field(default=1.3, ge=1.0)
    consecutive_min_words: int = Field(default=2, ge=2)


class TamperConfig(BaseModel):
    """Tamper detection configuration.

    Attributes:
        region_size: Side length of the square analysis regions (pixels)
        variance_threshold: Regions below this intensity variance look flattened
        edge_strength_threshold: Regions below this mean gradient look edge-less
        boundary_threshold: Normalised seam difference that counts as suspicious
        max_inconsistent_regions: Inconsistent regions that drive quality to 0
        max_edge_anomalies: Seam anomalies that drive the edge score to 0
        quality_weight: Weight of the quality score in the final score
        edge_weight: Weight of the edge score in the final score
        neutral_score: Score reported when analysis is inconclusive
    """

    region_size: int = Field(default=32, ge=4)
    variance_threshold: float = Field(default=100.0, ge=0.0)
    edge_strength_threshold: float = Field(default=10.0, ge=0.0)
    boundary_threshold: float = Field(default=50.0, ge=0.0)
    max_inconsistent_regions: int = Field(default=10, gt=0)
    max_edge_anomalies: int = Field(default=20, gt=0)
    quality_weight: float = Field(default=0.7, ge=0.0, le=1.0)
    edge_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    neutral_score: float = Field(default=0.5, ge=0.0, le=1.0)


class PipelineConfig(BaseModel):
    """Orchestrator configuration.

    Attributes:
        stage_timeout_seconds: Wall-clock limit for EXTRACT and TAMPER (0 disables)
    """

    stage_timeout_seconds: float = Field(default=60.0, ge=0.0)


class Config(BaseModel):
    """Root configuration container."""

    preprocessing: PreprocessingConfig = PreprocessingConfig()
    ocr: OCRConfig = OCRConfig()
    pdf: PDFConfig = PDFConfig()
    address: AddressMatchConfig = AddressMatchConfig()
    tamper: TamperConfig = TamperConfig()
    pipeline: PipelineConfig = PipelineConfig()


def load_config(config_path: Path) -> Config:
    """Load and validate configuration from YAML file.

    Sections missing from the file keep their defaults.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file does not exist
        ConfigurationError: If YAML parsing or validation fails

    Example:
        >>> config = load_config(Path("docverify/config.yaml"))
        >>> print(config.tamper.region_size)
        32
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.debug(f"Loading configuration from {config_path}")

    try:
        config_dict = load_yaml(config_path) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {config_path}, "
            f"got {type(config_dict).__name__}"
        )

    try:
        return Config(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e


def get_default_config() -> Config:
    """Get default configuration from bundled config.yaml file.

    Returns:
        Config object loaded from docverify/config.yaml
    """
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    else:
        # Fallback to hardcoded defaults if config file is missing
        return Config()
