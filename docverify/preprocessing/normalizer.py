"""
Image Normalizer - Adaptive preprocessing for OCR legibility.

This module measures global image statistics (size, per-channel mean and
standard deviation), selects an enhancement path from those statistics and the
caller's document-type hint, and produces a single-channel image that is at
least as large as the input.

Pipeline:
    1. Decode bytes and measure statistics
    2. Select PreprocessingProfile (hint first, then brightness/contrast)
    3. Desaturate / normalize / stretch / brighten / gamma / sharpen
    4. Convert to grayscale (always)
    5. Upscale small images

Normalization is best-effort: on any failure the original bytes are returned.
"""

import logging
from typing import Optional, Tuple

import cv2
import numpy as np

from docverify.common.types import DocumentTypeHint
from docverify.config_loader import PreprocessingConfig, get_default_config
from docverify.utils.io import decode_image, encode_png, to_uint8

from .types import ImageStatistics, PreprocessingProfile, ProcessingPath

logger = logging.getLogger(__name__)


def _drop_alpha(image: np.ndarray) -> np.ndarray:
    """Return an 8-bit 2D grayscale or 3-channel BGR view of a decoded image.

    Transparent pixels are composited onto a white page.
    """
    image = to_uint8(image)
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 1:
        return image[:, :, 0]
    if image.ndim == 3 and image.shape[2] == 4:
        alpha = image[:, :, 3:4].astype(np.float32) / 255.0
        composited = image[:, :, :3].astype(np.float32) * alpha + 255.0 * (1.0 - alpha)
        return np.clip(np.round(composited), 0, 255).astype(np.uint8)
    if image.ndim == 3 and image.shape[2] == 3:
        return image
    raise ValueError(f"Unsupported image shape: {image.shape}")


def _to_gray(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def compute_statistics(image: np.ndarray) -> ImageStatistics:
    """
    Measure size and per-channel brightness/contrast of an image.

    Args:
        image: Decoded image (H, W) or (H, W, C), uint8

    Returns:
        ImageStatistics with width, height and per-channel mean/std

    Example:
        >>> stats = compute_statistics(np.full((10, 20), 50, dtype=np.uint8))
        >>> stats.width, stats.height, stats.mean, stats.std
        (20, 10, 50.0, 0.0)
    """
    working = _drop_alpha(image)
    height, width = working.shape[:2]
    means, stds = cv2.meanStdDev(working)
    return ImageStatistics(
        width=int(width),
        height=int(height),
        channel_means=tuple(float(m) for m in means.flatten()),
        channel_stds=tuple(float(s) for s in stds.flatten()),
    )


def select_profile(
    stats: ImageStatistics,
    hint: DocumentTypeHint,
    config: PreprocessingConfig,
) -> PreprocessingProfile:
    """
    Choose the enhancement path for an image.

    Hints take precedence; without a hint the image is classified by its
    measured brightness (dark, washed-out) and then contrast.

    Args:
        stats: Measured image statistics
        hint: Caller's document-type hint
        config: Preprocessing thresholds and parameters

    Returns:
        PreprocessingProfile describing the adjustments to apply
    """
    mean, std = stats.mean, stats.std

    if hint == DocumentTypeHint.CERTIFICATE:
        return PreprocessingProfile(
            path=ProcessingPath.CERTIFICATE,
            mean=mean,
            std=std,
            normalize=True,
            brightness=config.certificate_brightness,
            gamma=config.certificate_gamma,
            sharpen_sigma=config.certificate_sharpen_sigma,
        )

    if hint in (DocumentTypeHint.ID, DocumentTypeHint.UTILITY):
        return PreprocessingProfile(
            path=ProcessingPath.ID_UTILITY,
            mean=mean,
            std=std,
            normalize=True,
            brightness=config.id_utility_brightness,
            sharpen_sigma=config.id_utility_sharpen_sigma,
            desaturate=True,
        )

    if mean < config.dark_mean_threshold:
        return PreprocessingProfile(
            path=ProcessingPath.DARK,
            mean=mean,
            std=std,
            brightness=config.dark_brightness,
            gamma=config.dark_gamma,
            sharpen_sigma=config.dark_sharpen_sigma,
        )

    if mean > config.bright_mean_threshold:
        return PreprocessingProfile(
            path=ProcessingPath.BRIGHT,
            mean=mean,
            std=std,
            brightness=config.bright_brightness,
            gamma=config.bright_gamma,
            sharpen_sigma=config.bright_sharpen_sigma,
        )

    if std < config.low_contrast_std_threshold:
        return PreprocessingProfile(
            path=ProcessingPath.LOW_CONTRAST,
            mean=mean,
            std=std,
            contrast_factor=config.low_contrast_factor,
            sharpen_sigma=config.low_contrast_sharpen_sigma,
        )

    return PreprocessingProfile(
        path=ProcessingPath.STANDARD,
        mean=mean,
        std=std,
        normalize=True,
        sharpen_sigma=config.standard_sharpen_sigma,
    )


def adjust_gamma(image: np.ndarray, gamma: float) -> np.ndarray:
    """Apply out = in ** (1 / gamma) through a lookup table."""
    inv = 1.0 / gamma
    table = np.round(
        np.array([((i / 255.0) ** inv) * 255.0 for i in range(256)])
    ).clip(0, 255).astype(np.uint8)
    return cv2.LUT(image, table)


def stretch_contrast(image: np.ndarray, factor: float, mean: float) -> np.ndarray:
    """Linear contrast stretch around the measured mean."""
    stretched = (image.astype(np.float32) - mean) * factor + mean
    return np.clip(stretched, 0, 255).astype(np.uint8)


def unsharp_mask(image: np.ndarray, sigma: float, amount: float = 1.0) -> np.ndarray:
    """Sharpen by subtracting a Gaussian-blurred copy."""
    if sigma <= 0:
        return image
    blurred = cv2.GaussianBlur(image, (0, 0), sigma)
    return cv2.addWeighted(image, 1.0 + amount, blurred, -amount, 0)


def upscale_size(width: int, height: int, min_dimension: int, target: int) -> Tuple[int, int]:
    """
    Compute output size for small images.

    Both dimensions are scaled by the shared factor min(target / width,
    target / height). The factor is never below 1, so images only grow.

    Example:
        >>> upscale_size(400, 600, 800, 1200)
        (800, 1200)
    """
    if width >= min_dimension and height >= min_dimension:
        return width, height
    scale = max(1.0, min(target / width, target / height))
    return int(round(width * scale)), int(round(height * scale))


class ImageNormalizer:
    """
    Adaptive image preprocessing for OCR.

    Attributes:
        config: Preprocessing configuration (thresholds and parameters)
    """

    def __init__(self, config: Optional[PreprocessingConfig] = None):
        self.config = config if config is not None else get_default_config().preprocessing

    def normalize_image(
        self,
        image: np.ndarray,
        hint: DocumentTypeHint = DocumentTypeHint.GENERIC,
    ) -> Tuple[np.ndarray, PreprocessingProfile]:
        """
        Enhance a decoded image and return it as a single-channel array.

        Args:
            image: Decoded image (H, W) or (H, W, C), uint8
            hint: Document-type hint

        Returns:
            Tuple of (processed grayscale image, profile that was applied)
        """
        working = _drop_alpha(image)
        stats = compute_statistics(working)
        profile = select_profile(stats, hint, self.config)

        logger.debug(
            f"Preprocessing path={profile.path.value} "
            f"(mean={stats.mean:.1f}, std={stats.std:.1f}, "
            f"size={stats.width}x{stats.height}, hint={hint.value})"
        )

        if profile.desaturate:
            working = _to_gray(working)

        if profile.normalize:
            working = cv2.normalize(working, None, 0, 255, cv2.NORM_MINMAX)

        if profile.contrast_factor is not None:
            working = stretch_contrast(working, profile.contrast_factor, profile.mean)

        if profile.brightness != 1.0:
            working = cv2.convertScaleAbs(working, alpha=profile.brightness, beta=0)

        if profile.gamma is not None:
            working = adjust_gamma(working, profile.gamma)

        working = unsharp_mask(working, profile.sharpen_sigma)

        gray = _to_gray(working)

        new_width, new_height = upscale_size(
            stats.width,
            stats.height,
            self.config.min_dimension,
            self.config.upscale_target,
        )
        if (new_width, new_height) != (stats.width, stats.height):
            gray = cv2.resize(gray, (new_width, new_height), interpolation=cv2.INTER_CUBIC)
            logger.info(
                f"Upscaled image from {stats.width}x{stats.height} to "
                f"{new_width}x{new_height} for OCR"
            )

        return gray, profile

    def normalize(
        self,
        image_bytes: bytes,
        hint: DocumentTypeHint = DocumentTypeHint.GENERIC,
    ) -> bytes:
        """
        Normalize encoded image bytes for OCR.

        Args:
            image_bytes: Encoded raster image
            hint: Document-type hint

        Returns:
            PNG-encoded single-channel image, or the original bytes if the
            image cannot be decoded or processing fails.
        """
        try:
            image = decode_image(image_bytes)
            if image is None:
                logger.warning("Image could not be decoded, skipping normalization")
                return image_bytes

            processed, profile = self.normalize_image(image, hint)
            logger.info(
                f"Normalized image via '{profile.path.value}' path "
                f"-> {processed.shape[1]}x{processed.shape[0]} grayscale"
            )
            return encode_png(processed)

        except Exception as e:
            logger.warning(f"Image normalization failed, using original bytes: {e}")
            return image_bytes


def normalize(
    image_bytes: bytes,
    document_type_hint: DocumentTypeHint = DocumentTypeHint.GENERIC,
    config: Optional[PreprocessingConfig] = None,
) -> bytes:
    """
    Convenience function for one-shot normalization.

    Example:
        >>> processed = normalize(png_bytes, DocumentTypeHint.CERTIFICATE)
    """
    return ImageNormalizer(config=config).normalize(image_bytes, document_type_hint)
