"""Utility functions for image scaling and point geometry.

AIDEV-NOTE: This module contains helper functions for scaling, distance
and bounding-box calculations used by both the pixel pipeline and the
vectorization stage.
"""

import math
from typing import TYPE_CHECKING, Sequence

from PIL import Image

from colorpage.models import MAX_IMAGE_DIMENSION, BoundingBox

if TYPE_CHECKING:
    from colorpage.models import ImageResult, Point


def scale_image_to_fit(
    image: Image.Image, max_dimension: int = MAX_IMAGE_DIMENSION
) -> "tuple[Image.Image, float]":
    """Scale image down to fit a square bound while maintaining aspect ratio.

    Args:
        image: Input PIL image
        max_dimension: Longest allowed side in pixels

    Returns:
        Tuple of (scaled_image, scale_factor)

    AIDEV-NOTE: Never upscales; large photos are reduced to keep filter
    buffers at a predictable size.
    """
    orig_width, orig_height = image.size
    if orig_width == 0 or orig_height == 0:
        return image, 1.0

    scale = min(max_dimension / orig_width, max_dimension / orig_height)
    if scale >= 1.0:
        return image, 1.0

    new_width = max(1, round(orig_width * scale))
    new_height = max(1, round(orig_height * scale))
    scaled_image = image.resize((new_width, new_height), Image.Resampling.LANCZOS)

    return scaled_image, scale


def distance(a: "Point", b: "Point") -> float:
    """Euclidean distance between two points."""
    return math.hypot(b[0] - a[0], b[1] - a[1])


def perpendicular_distance(point: "Point", line_start: "Point", line_end: "Point") -> float:
    """Distance from point to the infinite line through line_start and line_end.

    Falls back to point-to-point distance when the two line points
    coincide.
    """
    dx = line_end[0] - line_start[0]
    dy = line_end[1] - line_start[1]
    chord = math.hypot(dx, dy)
    if chord == 0.0:
        return distance(point, line_start)
    cross = dx * (line_start[1] - point[1]) - dy * (line_start[0] - point[0])
    return abs(cross) / chord


def calculate_path_length(points: "Sequence[Point]") -> float:
    """Sum of distances between consecutive points."""
    total = 0.0
    for i in range(1, len(points)):
        total += distance(points[i - 1], points[i])
    return total


def calculate_bounds(points: "Sequence[Point]") -> BoundingBox:
    """Axis-aligned bounding box of points; a zero box at the origin if empty."""
    if not points:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)

    min_x = min(p[0] for p in points)
    max_x = max(p[0] for p in points)
    min_y = min(p[1] for p in points)
    max_y = max(p[1] for p in points)

    return BoundingBox(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def calculate_total_length(results: "Sequence[ImageResult]") -> float:
    """Calculate total path length across processed images, in px."""
    return sum(result.total_length for result in results)


def count_paths(results: "Sequence[ImageResult]") -> int:
    """Count total number of paths across processed images."""
    return sum(result.path_count for result in results)


def format_coordinate(value: float) -> str:
    """Compact number for path data: at most 2 decimals, no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
