"""Tests for smoothing, simplification and curve generation."""

import math

import pytest

from colorpage.image_processing.utils import (
    calculate_bounds,
    calculate_path_length,
    format_coordinate,
    perpendicular_distance,
)
from colorpage.models import BoundingBox, Point
from colorpage.vectorization.curves import CurveBuilder, generate_path_data
from colorpage.vectorization.simplify import PathSimplifier, simplify_path
from colorpage.vectorization.smoothing import ContourSmoother, smooth_contour


class TestSmoothing:

    def test_short_sequences_unchanged(self):
        points = [Point(0, 0), Point(5, 1), Point(2, 9), Point(7, 7)]
        assert ContourSmoother().smooth(points) == points

    def test_length_preserved(self):
        points = [Point(i, (i * 7) % 5) for i in range(37)]
        assert len(smooth_contour(points)) == 37

    def test_small_sequences_skip_averaging(self):
        # 9 points gives a half window of 0
        points = [Point(i, i * i) for i in range(9)]
        assert smooth_contour(points) == [Point(float(i), float(i * i)) for i in range(9)]

    def test_average_wraps_around(self):
        # 10 points, half window 1: the first point averages with the last
        points = [Point(float(i), 0.0) for i in range(10)]
        smoothed = smooth_contour(points)
        assert smoothed[0].x == pytest.approx((9 + 0 + 1) / 3)
        assert smoothed[5].x == pytest.approx(5.0)

    def test_constant_sequence_is_fixed_point(self):
        points = [Point(3.0, 4.0)] * 40
        assert smooth_contour(points) == points


class TestSimplify:

    def test_zero_tolerance_keeps_every_point(self):
        points = [Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 0)]
        assert PathSimplifier().simplify(points, 0) == points

    def test_infinite_tolerance_keeps_endpoints(self):
        points = [Point(0, 0), Point(1, 5), Point(2, -3), Point(6, 1)]
        assert simplify_path(points, math.inf) == [Point(0, 0), Point(6, 1)]

    def test_near_collinear_point_removed(self):
        points = [Point(0, 0), Point(1, 0.1), Point(2, 0), Point(3, 0)]
        assert simplify_path(points, 0.5) == [Point(0, 0), Point(3, 0)]

    def test_corner_kept(self):
        points = [Point(0, 0), Point(5, 0), Point(5, 5)]
        assert simplify_path(points, 1.0) == points

    def test_closed_loop_with_coincident_endpoints(self):
        square = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4), Point(0, 0)]
        assert simplify_path(square, 1.0) == square

    def test_never_adds_points(self, rng):
        points = [Point(float(x), float(y)) for x, y in rng.integers(0, 50, size=(60, 2))]
        for tolerance in (0.5, 2.0, 10.0):
            result = simplify_path(points, tolerance)
            assert 2 <= len(result) <= len(points)
            assert result[0] == points[0] and result[-1] == points[-1]

    def test_two_points_unchanged(self):
        points = [Point(0, 0), Point(1, 1)]
        assert simplify_path(points, 100.0) == points

    @pytest.mark.parametrize("tolerance", [-1.0, math.nan])
    def test_invalid_tolerance_rejected(self, tolerance):
        with pytest.raises(ValueError):
            simplify_path([Point(0, 0), Point(1, 1), Point(2, 0)], tolerance)

    def test_long_contour_does_not_recurse(self):
        # Zig-zag keeps every point and splits one index at a time
        points = [Point(float(i), float(i % 2) * 10) for i in range(1000)]
        assert len(simplify_path(points, 1.0)) == 1000


class TestGeometryHelpers:

    def test_perpendicular_distance_uses_infinite_line(self):
        assert perpendicular_distance(Point(10, 3), Point(0, 0), Point(1, 0)) == pytest.approx(3)

    def test_perpendicular_distance_degenerate_line(self):
        assert perpendicular_distance(Point(3, 4), Point(0, 0), Point(0, 0)) == pytest.approx(5)

    def test_bounds_of_empty_sequence(self):
        assert calculate_bounds([]) == BoundingBox(0.0, 0.0, 0.0, 0.0)

    def test_path_length(self):
        assert calculate_path_length([Point(0, 0), Point(3, 4), Point(3, 10)]) == pytest.approx(11)

    @pytest.mark.parametrize(
        "value, expected",
        [(1.0, "1"), (1.234, "1.23"), (2.5, "2.5"), (10.0, "10"), (-0.001, "0"), (-3.456, "-3.46")],
    )
    def test_format_coordinate(self, value, expected):
        assert format_coordinate(value) == expected


class TestCurves:

    def test_two_points_make_a_line(self):
        path = CurveBuilder().build([Point(0, 0), Point(3, 4)])
        assert path.path_data == "M 0 0 L 3 4"
        assert path.length == pytest.approx(5.0)

    def test_interior_points_become_quadratic_controls(self):
        path = CurveBuilder().build([Point(0, 0), Point(2, 2), Point(4, 0)])
        assert path.path_data == "M 0 0 Q 2 2 3 1 L 4 0"
        assert path.bounds == BoundingBox(0.0, 0.0, 4.0, 2.0)
        assert path.length == pytest.approx(2 * math.sqrt(8))

    def test_segment_count(self):
        points = [Point(float(i), float(i % 3)) for i in range(6)]
        data = generate_path_data(points)
        assert data.startswith("M ")
        assert data.count("Q") == 4
        assert data.count("L") == 1

    @pytest.mark.parametrize("points", [[], [Point(1, 1)]])
    def test_degenerate_input_builds_nothing(self, points):
        assert CurveBuilder().build(points) is None
        assert generate_path_data(points) == ""

    def test_path_is_immutable_snapshot(self):
        points = [Point(0, 0), Point(1, 1)]
        path = CurveBuilder().build(points)
        points.append(Point(5, 5))
        assert len(path.points) == 2
        assert isinstance(path.points, tuple)
