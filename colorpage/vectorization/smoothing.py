"""Circular moving-average smoothing of traced point sequences."""

from typing import Sequence

from colorpage.models import Point

MIN_SMOOTH_POINTS = 5
MAX_HALF_WINDOW = 5


class ContourSmoother:
    """Moving average that treats every sequence as a closed loop.

    AIDEV-NOTE: Indices wrap around because traced regions are closed
    shapes; the half-window grows with the sequence (len // 10) up to 5.
    """

    def smooth(self, points: "Sequence[Point]") -> "list[Point]":
        """Return a smoothed copy of points with the same length.

        Sequences shorter than 5 points are returned unchanged.
        """
        count = len(points)
        if count < MIN_SMOOTH_POINTS:
            return list(points)

        half_window = min(MAX_HALF_WINDOW, count // 10)
        if half_window == 0:
            return [Point(float(p[0]), float(p[1])) for p in points]

        window = 2 * half_window + 1
        smoothed = []
        for i in range(count):
            sum_x = sum_y = 0.0
            for j in range(-half_window, half_window + 1):
                x, y = points[(i + j) % count]
                sum_x += x
                sum_y += y
            smoothed.append(Point(sum_x / window, sum_y / window))

        return smoothed


def smooth_contour(points: "Sequence[Point]") -> "list[Point]":
    """Module-level shortcut for ContourSmoother().smooth()."""
    return ContourSmoother().smooth(points)
