"""Connected ink region tracing.

AIDEV-NOTE: Despite the "contour" naming used throughout vectorization,
the tracer collects every pixel of an 8-connected ink region, interior
included, not just its outer border. Smoothing and curve fitting are tuned
for that dense point cloud, so do not swap this for border following
without retuning them.
"""

import numpy as np

from colorpage.image_processing.buffer import PixelBuffer
from colorpage.models import ExtractionLimits, ExtractionStats, Point

# 8-connectivity (Moore neighborhood), as (dx, dy)
NEIGHBOR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0),           (1, 0),
    (-1, 1),  (0, 1),  (1, 1),
)

RawContour = list[Point]


class RegionTracer:
    """Finds 8-connected ink regions in a binarized buffer."""

    def __init__(self, limits: ExtractionLimits | None = None):
        self.limits = limits or ExtractionLimits()

    def trace(self, buffer: PixelBuffer) -> "list[RawContour]":
        """Return one point list per ink region large enough to keep."""
        contours, _ = self.trace_with_stats(buffer)
        return contours

    def trace_with_stats(
        self, buffer: PixelBuffer
    ) -> "tuple[list[RawContour], ExtractionStats]":
        """Trace regions and count the ones dropped or truncated.

        Seeds are scanned in row-major order. A region that reaches
        max_contour_points stops growing; its remaining pixels stay
        unvisited and seed further regions later in the scan.
        """
        stats = ExtractionStats()
        ink = buffer.ink_mask()
        visited = np.zeros_like(ink, dtype=bool)
        contours: "list[RawContour]" = []

        # Only ink pixels can seed a region
        seeds_y, seeds_x = np.nonzero(ink)
        for y, x in zip(seeds_y.tolist(), seeds_x.tolist()):
            if visited[y, x]:
                continue

            contour, truncated = self._flood(ink, visited, x, y)
            if truncated:
                stats.contours_truncated += 1

            if len(contour) >= self.limits.min_contour_points:
                contours.append(contour)
                stats.contours_traced += 1
            else:
                stats.contours_discarded += 1

        return contours, stats

    def _flood(
        self, ink: np.ndarray, visited: np.ndarray, start_x: int, start_y: int
    ) -> "tuple[RawContour, bool]":
        """Iterative stack-based flood fill from one seed.

        Returns:
            Tuple of (visited points in traversal order, hit point cap)
        """
        height, width = ink.shape
        max_points = self.limits.max_contour_points
        contour: RawContour = []
        stack = [(start_x, start_y)]

        while stack:
            x, y = stack.pop()
            if visited[y, x]:
                continue

            # Only an unvisited pixel left over means the region was cut short
            if len(contour) >= max_points:
                return contour, True

            visited[y, x] = True
            contour.append(Point(float(x), float(y)))

            for dx, dy in NEIGHBOR_OFFSETS:
                nx = x + dx
                ny = y + dy
                if 0 <= nx < width and 0 <= ny < height and ink[ny, nx] and not visited[ny, nx]:
                    stack.append((nx, ny))

        return contour, False
