"""Douglas-Peucker polyline simplification."""

import math
from typing import Sequence

from colorpage.image_processing.utils import perpendicular_distance
from colorpage.models import Point


class PathSimplifier:
    """Reduces a point sequence to the fewest points within a tolerance."""

    def __init__(self, tolerance: float = 1.0):
        self.tolerance = tolerance

    def simplify(
        self, points: "Sequence[Point]", tolerance: float | None = None
    ) -> "list[Point]":
        """Douglas-Peucker simplification.

        Args:
            points: Ordered points, treated as an open polyline
            tolerance: Max perpendicular deviation in px; defaults to the
                simplifier's tolerance. 0 keeps every point, infinity
                keeps only the endpoints.

        Returns:
            Subsequence of points (never longer than the input)

        Raises:
            ValueError: If tolerance is negative or NaN
        """
        tolerance = self.tolerance if tolerance is None else tolerance
        if math.isnan(tolerance) or tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {tolerance}")

        points = list(points)
        if len(points) <= 2 or tolerance == 0:
            return points

        return [points[i] for i in self._kept_indices(points, tolerance)]

    def _kept_indices(self, points: "list[Point]", tolerance: float) -> "list[int]":
        """Indices surviving simplification, in order.

        AIDEV-NOTE: Uses an explicit stack of (start, end) spans instead of
        recursion so 1000-point contours can't hit the recursion limit. A
        split point is kept once, shared by both halves.
        """
        last = len(points) - 1
        keep = [False] * len(points)
        keep[0] = keep[last] = True

        spans = [(0, last)]
        while spans:
            start, end = spans.pop()
            if end - start < 2:
                continue

            max_distance = 0.0
            max_index = start
            for i in range(start + 1, end):
                d = perpendicular_distance(points[i], points[start], points[end])
                if d > max_distance:
                    max_distance = d
                    max_index = i

            if max_distance > tolerance:
                keep[max_index] = True
                spans.append((max_index, end))
                spans.append((start, max_index))

        return [i for i, kept in enumerate(keep) if kept]


def simplify_path(points: "Sequence[Point]", tolerance: float = 1.0) -> "list[Point]":
    """Module-level shortcut for PathSimplifier().simplify()."""
    return PathSimplifier(tolerance).simplify(points)
