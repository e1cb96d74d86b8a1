"""Binarized buffer to vector paths.

AIDEV-NOTE: Orchestrates RegionTracer -> ContourSmoother -> PathSimplifier
-> CurveBuilder. Contours are independent of each other: a contour that
fails is dropped and counted, never allowed to abort the image.
"""

from colorpage.errors import ExtractionError, ResourceExhaustedError
from colorpage.image_processing.buffer import PixelBuffer
from colorpage.models import ExtractionLimits, ExtractionStats, Point, VectorPath

from .curves import CurveBuilder
from .simplify import PathSimplifier
from .smoothing import ContourSmoother
from .tracer import RegionTracer


class VectorExtractor:
    """Extracts smooth, simplified vector paths from line art."""

    def __init__(self, limits: ExtractionLimits | None = None):
        self.limits = limits or ExtractionLimits()
        self.tracer = RegionTracer(self.limits)
        self.smoother = ContourSmoother()
        self.simplifier = PathSimplifier(self.limits.simplify_tolerance)
        self.curve_builder = CurveBuilder()

    def extract(self, buffer: PixelBuffer) -> "list[VectorPath]":
        """Return the vector paths found in a binarized buffer.

        Raises:
            ExtractionError: If the buffer holds values other than 0 and 255
        """
        paths, _ = self.extract_with_stats(buffer)
        return paths

    def extract_with_stats(
        self, buffer: PixelBuffer
    ) -> "tuple[list[VectorPath], ExtractionStats]":
        """Extract paths and account for every contour that was dropped.

        Returns:
            Tuple of (paths in tracing order, extraction statistics)

        Raises:
            ExtractionError: If the buffer is not binarized
        """
        if not buffer.is_binarized():
            raise ExtractionError(
                "Vector extraction requires a binarized buffer "
                "(every channel 0 or 255); run the pixel pipeline first"
            )

        contours, stats = self.tracer.trace_with_stats(buffer)
        paths: "list[VectorPath]" = []

        for index, contour in enumerate(contours):
            try:
                if len(paths) >= self.limits.max_paths_per_image:
                    raise ResourceExhaustedError(
                        f"image already has {self.limits.max_paths_per_image} paths"
                    )
                path = self.vectorize_contour(contour)
            except (ResourceExhaustedError, ValueError) as e:
                stats.paths_failed += 1
                stats.failure_reasons.append(f"contour {index}: {e}")
                continue

            if path is None:
                stats.paths_degenerate += 1
                continue

            paths.append(path)
            stats.paths_built += 1

        return paths, stats

    def vectorize_contour(self, contour: "list[Point]") -> VectorPath | None:
        """Smooth, simplify and curve-fit one raw contour."""
        smoothed = self.smoother.smooth(contour)
        simplified = self.simplifier.simplify(smoothed)
        return self.curve_builder.build(simplified)
