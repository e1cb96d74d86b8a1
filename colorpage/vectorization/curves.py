"""Quadratic curve generation for simplified paths."""

from typing import Sequence

from colorpage.image_processing.utils import (
    calculate_bounds,
    calculate_path_length,
    format_coordinate,
)
from colorpage.models import Point, VectorPath


def _pair(point: "Point") -> str:
    return f"{format_coordinate(point[0])} {format_coordinate(point[1])}"


def generate_path_data(points: "Sequence[Point]") -> str:
    """Build a curve-command string through points.

    Each interior point becomes the control point of a quadratic segment
    ending halfway to the next point, which gives a smooth curve without
    computing tangents. A final line reaches the last point.
    """
    if len(points) < 2:
        return ""

    commands = [f"M {_pair(points[0])}"]

    if len(points) == 2:
        commands.append(f"L {_pair(points[1])}")
        return " ".join(commands)

    for i in range(1, len(points) - 1):
        current = points[i]
        following = points[i + 1]
        midpoint = Point(
            (current[0] + following[0]) / 2, (current[1] + following[1]) / 2
        )
        commands.append(f"Q {_pair(current)} {_pair(midpoint)}")

    commands.append(f"L {_pair(points[-1])}")
    return " ".join(commands)


class CurveBuilder:
    """Turns simplified points into an immutable VectorPath."""

    def build(self, points: "Sequence[Point]") -> VectorPath | None:
        """Return the path, or None if fewer than 2 points are given.

        Length and bounds are measured on the simplified points, before
        curve fitting.
        """
        if len(points) < 2:
            return None

        frozen = tuple(Point(float(p[0]), float(p[1])) for p in points)
        return VectorPath(
            points=frozen,
            path_data=generate_path_data(frozen),
            length=calculate_path_length(frozen),
            bounds=calculate_bounds(frozen),
        )
