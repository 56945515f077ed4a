"""Unit tests for the Image Normalizer."""

from unittest.mock import patch

import cv2
import numpy as np
import pytest

from docverify.common import DocumentTypeHint
from docverify.config_loader import PreprocessingConfig
from docverify.preprocessing import (
    ImageNormalizer,
    ImageStatistics,
    ProcessingPath,
    adjust_gamma,
    compute_statistics,
    normalize,
    select_profile,
    upscale_size,
)
from docverify.utils import decode_image, to_uint8


def decode(data: bytes) -> np.ndarray:
    return cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_UNCHANGED)


def encode_png(image: np.ndarray) -> bytes:
    ok, buffer = cv2.imencode(".png", image)
    assert ok
    return buffer.tobytes()


def stats(mean: float, std: float) -> ImageStatistics:
    return ImageStatistics(width=1000, height=1000, channel_means=(mean,), channel_stds=(std,))


@pytest.fixture
def config():
    return PreprocessingConfig()


class TestComputeStatistics:
    """Test statistics measurement."""

    def test_uniform_gray(self):
        result = compute_statistics(np.full((10, 20), 50, dtype=np.uint8))

        assert result.width == 20
        assert result.height == 10
        assert result.mean == pytest.approx(50.0)
        assert result.std == pytest.approx(0.0)

    def test_color_channels_averaged(self):
        image = np.zeros((10, 10, 3), dtype=np.uint8)
        image[:, :, 0] = 30
        image[:, :, 1] = 60
        image[:, :, 2] = 90

        result = compute_statistics(image)

        assert result.channel_means == pytest.approx((30.0, 60.0, 90.0))
        assert result.mean == pytest.approx(60.0)

    def test_opaque_alpha_keeps_color(self):
        image = np.full((10, 10, 4), 200, dtype=np.uint8)
        image[:, :, 3] = 255

        assert compute_statistics(image).mean == pytest.approx(200.0)

    def test_transparent_pixels_composited_on_white(self):
        """Hidden color under alpha=0 must not leak into the statistics."""
        image = np.zeros((10, 10, 4), dtype=np.uint8)

        result = compute_statistics(image)

        assert result.channel_means == pytest.approx((255.0, 255.0, 255.0))

    def test_half_transparent_blends(self):
        image = np.zeros((10, 10, 4), dtype=np.uint8)
        image[:, :, 3] = 128

        assert compute_statistics(image).mean == pytest.approx(127.0)


class TestSelectProfile:
    """Test processing path selection."""

    def test_certificate_hint(self, config):
        profile = select_profile(stats(50, 5), DocumentTypeHint.CERTIFICATE, config)

        assert profile.path == ProcessingPath.CERTIFICATE
        assert profile.brightness == 1.1
        assert profile.gamma == 0.9
        assert profile.normalize is True

    @pytest.mark.parametrize("hint", [DocumentTypeHint.ID, DocumentTypeHint.UTILITY])
    def test_id_and_utility_hint(self, config, hint):
        profile = select_profile(stats(150, 40), hint, config)

        assert profile.path == ProcessingPath.ID_UTILITY
        assert profile.brightness == 1.05
        assert profile.desaturate is True

    def test_dark_image(self, config):
        profile = select_profile(stats(60, 40), DocumentTypeHint.GENERIC, config)

        assert profile.path == ProcessingPath.DARK
        assert profile.brightness > 1.0
        assert profile.gamma == 1.2

    def test_bright_image(self, config):
        profile = select_profile(stats(240, 40), DocumentTypeHint.GENERIC, config)

        assert profile.path == ProcessingPath.BRIGHT
        assert profile.brightness < 1.0
        assert profile.gamma == 0.8

    def test_low_contrast_image(self, config):
        profile = select_profile(stats(150, 5), DocumentTypeHint.GENERIC, config)

        assert profile.path == ProcessingPath.LOW_CONTRAST
        assert profile.contrast_factor == 1.5
        assert profile.sharpen_sigma == 1.5

    def test_standard_image(self, config):
        profile = select_profile(stats(150, 50), DocumentTypeHint.GENERIC, config)

        assert profile.path == ProcessingPath.STANDARD

    def test_thresholds_configurable(self):
        """Custom thresholds move the dark/standard boundary."""
        config = PreprocessingConfig(dark_mean_threshold=160)

        profile = select_profile(stats(150, 50), DocumentTypeHint.GENERIC, config)

        assert profile.path == ProcessingPath.DARK


class TestHelpers:
    """Test the individual adjustments."""

    def test_gamma_identity(self):
        image = np.arange(256, dtype=np.uint8).reshape(16, 16)
        np.testing.assert_array_equal(adjust_gamma(image, 1.0), image)

    def test_gamma_above_one_lifts_midtones(self):
        image = np.full((4, 4), 64, dtype=np.uint8)
        assert adjust_gamma(image, 2.0)[0, 0] > 64

    def test_gamma_below_one_deepens_midtones(self):
        image = np.full((4, 4), 128, dtype=np.uint8)
        assert adjust_gamma(image, 0.9)[0, 0] < 128

    def test_upscale_small_image(self):
        assert upscale_size(400, 600, 800, 1200) == (800, 1200)

    def test_large_image_unchanged(self):
        assert upscale_size(1000, 900, 800, 1200) == (1000, 900)

    def test_upscale_never_shrinks(self):
        """A narrow but tall image is not shrunk on its long side."""
        width, height = upscale_size(300, 2000, 800, 1200)
        assert width >= 300
        assert height >= 2000


class TestImageNormalizer:
    """Test end-to-end normalization on encoded bytes."""

    def test_output_is_single_channel(self, document_png):
        result = decode(ImageNormalizer().normalize(document_png, DocumentTypeHint.CERTIFICATE))

        assert result.ndim == 2
        assert result.shape == (1000, 1000)

    def test_small_image_upscaled(self, small_color_image):
        result = decode(ImageNormalizer().normalize(encode_png(small_color_image)))

        assert result.ndim == 2
        assert result.shape == (1200, 800)

    @pytest.mark.parametrize("hint", list(DocumentTypeHint))
    def test_never_shrinks(self, small_color_image, hint):
        result = decode(ImageNormalizer().normalize(encode_png(small_color_image), hint))

        assert result.shape[0] >= small_color_image.shape[0]
        assert result.shape[1] >= small_color_image.shape[1]

    def test_undecodable_bytes_returned_unchanged(self):
        data = b"definitely not an image"
        assert ImageNormalizer().normalize(data) == data

    def test_processing_error_returns_original(self, document_png):
        """Failures inside the pipeline fall back to the original bytes."""
        normalizer = ImageNormalizer()
        with patch.object(normalizer, "normalize_image", side_effect=RuntimeError("boom")):
            assert normalizer.normalize(document_png) == document_png

    def test_grayscale_input_accepted(self):
        image = np.full((900, 900), 40, dtype=np.uint8)
        processed, profile = ImageNormalizer().normalize_image(image)

        assert profile.path == ProcessingPath.DARK
        assert processed.ndim == 2
        assert processed.mean() > 40

    def test_module_level_normalize(self, document_png):
        result = decode(normalize(document_png, DocumentTypeHint.ID))
        assert result.ndim == 2


class TestTransparentImages:
    """Transparent backgrounds are read as a white page."""

    def test_black_text_on_transparent_background(self):
        image = np.zeros((900, 900, 4), dtype=np.uint8)
        cv2.putText(
            image, "PLOT 12 BROAD STREET", (50, 450), cv2.FONT_HERSHEY_SIMPLEX, 2, (0, 0, 0, 255), 5
        )

        result = decode(ImageNormalizer().normalize(encode_png(image)))

        assert result.ndim == 2
        assert np.median(result) > 200
        assert result.min() < 128


class TestHighBitDepth:
    """16-bit and float inputs are brought to 8-bit before processing."""

    @pytest.fixture
    def document_16bit(self):
        image = np.full((900, 900), 230 * 257, dtype=np.uint16)
        cv2.putText(
            image, "PLOT 12 BROAD STREET", (50, 450), cv2.FONT_HERSHEY_SIMPLEX, 2, (0,), 5
        )
        return image

    def test_to_uint8_scales_16bit(self):
        image = np.array([[0, 257, 65535]], dtype=np.uint16)

        result = to_uint8(image)

        assert result.dtype == np.uint8
        assert result.tolist() == [[0, 1, 255]]

    def test_to_uint8_stretches_float(self):
        result = to_uint8(np.array([[0.0, 0.5, 1.0]], dtype=np.float32))

        assert result.dtype == np.uint8
        assert result[0, 0] == 0
        assert result[0, 2] == 255

    def test_to_uint8_passes_uint8_through(self, blank_image):
        assert to_uint8(blank_image) is blank_image

    def test_decode_returns_8bit(self, document_16bit):
        result = decode_image(encode_png(document_16bit))

        assert result.dtype == np.uint8
        assert result.max() == 230

    def test_16bit_text_survives_normalization(self, document_16bit):
        result = decode(ImageNormalizer().normalize(encode_png(document_16bit)))

        assert result.dtype == np.uint8
        assert result.std() > 0
        assert result.min() < 128

    def test_statistics_on_8bit_scale(self, document_16bit):
        assert compute_statistics(document_16bit).mean < 255
