"""
Unit tests for the simulated classifier.

System role: Verification of image validation and catalog classification
"""

import random

import pytest

from ecocycle.core.detection import EWASTE_CATALOG, WasteClassifier, sniff_image_type
from ecocycle.core.exceptions import FileTooLargeError, UnsupportedImageError
from ecocycle.core.impact import compute_co2_saved_kg, estimate_weight_kg


class TestSniffImageType:
    def test_jpeg(self, jpeg_bytes: bytes) -> None:
        assert sniff_image_type(jpeg_bytes) == "image/jpeg"

    def test_png(self, png_bytes: bytes) -> None:
        assert sniff_image_type(png_bytes) == "image/png"

    def test_webp(self) -> None:
        assert sniff_image_type(b"RIFF\x24\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_unknown(self) -> None:
        assert sniff_image_type(b"GIF89a") is None
        assert sniff_image_type(b"") is None


class TestWasteClassifier:
    def test_rejects_oversize_image(self, jpeg_bytes: bytes) -> None:
        classifier = WasteClassifier(max_file_size=16)

        with pytest.raises(FileTooLargeError):
            classifier.classify(jpeg_bytes)

    def test_rejects_non_image(self) -> None:
        with pytest.raises(UnsupportedImageError):
            WasteClassifier().classify(b"%PDF-1.7 not an image")

    def test_result_comes_from_catalog(self, jpeg_bytes: bytes) -> None:
        classifier = WasteClassifier(rng=random.Random(7))
        names = {entry.item for entry in EWASTE_CATALOG}

        for _ in range(20):
            result = classifier.classify(jpeg_bytes)
            assert result.item in names
            assert 75 <= result.confidence <= 99

    def test_result_is_enriched_with_impact(self, png_bytes: bytes) -> None:
        result = WasteClassifier(rng=random.Random(1)).classify(png_bytes)

        weight = estimate_weight_kg(result.category, result.item).weight_kg
        assert result.weight_kg == weight
        assert result.co2_saved_kg == compute_co2_saved_kg(result.category, weight)
        assert result.sorting.steps

    def test_same_seed_same_result(self, jpeg_bytes: bytes) -> None:
        first = WasteClassifier(rng=random.Random(42)).classify(jpeg_bytes)
        second = WasteClassifier(rng=random.Random(42)).classify(jpeg_bytes)

        assert first == second
