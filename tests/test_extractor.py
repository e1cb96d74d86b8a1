"""Tests for vector path extraction from binarized buffers."""

import numpy as np
import pytest

from colorpage.errors import ExtractionError
from colorpage.image_processing.buffer import PixelBuffer
from colorpage.models import ExtractionLimits, VectorPath
from colorpage.vectorization import VectorExtractor

from conftest import make_binary_buffer


class TestVectorExtractor:

    def test_square_yields_one_path_inside_the_square(self, square_buffer):
        paths = VectorExtractor().extract(square_buffer)

        assert len(paths) == 1
        (path,) = paths
        assert isinstance(path, VectorPath)
        assert path.length > 0
        assert path.path_data.startswith("M ")
        bounds = path.bounds
        assert abs(bounds.x - 3) <= 1
        assert abs(bounds.y - 3) <= 1
        assert abs(bounds.width - 3) <= 1
        assert abs(bounds.height - 3) <= 1

    def test_default_tolerance_keeps_square_extent(self, square_buffer):
        """A coarse tolerance collapses the square; the default must not."""
        (path,) = VectorExtractor().extract(square_buffer)
        (coarse,) = VectorExtractor(ExtractionLimits(simplify_tolerance=2.0)).extract(
            square_buffer
        )
        assert path.bounds.width >= 2
        assert len(path.points) > len(coarse.points)

    def test_blank_buffer_yields_nothing(self):
        paths, stats = VectorExtractor().extract_with_stats(PixelBuffer.blank(30, 30))
        assert paths == []
        assert stats.contours_traced == 0

    def test_rejects_non_binarized_buffer(self, random_buffer):
        with pytest.raises(ExtractionError):
            VectorExtractor().extract(random_buffer)

    def test_paths_follow_tracing_order(self):
        buffer = make_binary_buffer(30, 30, ink_rects=[(20, 2, 25, 6), (2, 15, 6, 20)])
        first, second = VectorExtractor().extract(buffer)
        assert first.bounds.x > second.bounds.x
        assert first.bounds.y < second.bounds.y

    def test_degenerate_contours_are_counted(self):
        buffer = make_binary_buffer(10, 10, ink_pixels=[(5, 5)])
        extractor = VectorExtractor(ExtractionLimits(min_contour_points=1))
        paths, stats = extractor.extract_with_stats(buffer)
        assert paths == []
        assert stats.paths_degenerate == 1
        assert stats.contours_dropped == 1

    def test_failing_contour_is_skipped_not_fatal(self, monkeypatch):
        buffer = make_binary_buffer(30, 30, ink_rects=[(2, 2, 6, 6), (15, 15, 20, 20)])
        extractor = VectorExtractor()
        real_simplify = extractor.simplifier.simplify
        calls = []

        def flaky_simplify(points, tolerance=None):
            calls.append(len(points))
            if len(calls) == 1:
                raise ValueError("bad contour")
            return real_simplify(points, tolerance)

        monkeypatch.setattr(extractor.simplifier, "simplify", flaky_simplify)
        paths, stats = extractor.extract_with_stats(buffer)

        assert len(paths) == 1
        assert stats.paths_failed == 1
        assert stats.failure_reasons == ["contour 0: bad contour"]

    def test_path_cap_drops_extra_contours(self):
        buffer = make_binary_buffer(30, 30, ink_rects=[(2, 2, 6, 6), (15, 15, 20, 20)])
        extractor = VectorExtractor(ExtractionLimits(max_paths_per_image=1))
        paths, stats = extractor.extract_with_stats(buffer)

        assert len(paths) == 1
        assert stats.paths_built == 1
        assert stats.paths_failed == 1
        assert "contour 1" in stats.failure_reasons[0]

    def test_input_buffer_untouched(self, square_buffer):
        before = square_buffer.data.copy()
        VectorExtractor().extract(square_buffer)
        assert np.array_equal(square_buffer.data, before)
