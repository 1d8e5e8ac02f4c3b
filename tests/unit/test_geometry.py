"""Unit tests for geometry utility functions.

Tests the pure geometry functions in stroke_recognition.utils.geometry:
    - point_distance: Euclidean distance between two points
    - segment_angle: Direction of a segment
    - angle_difference: Angle difference normalized to [0, pi]
    - turn_angle / turn_angles: Direction change along a polyline
    - path_length: Total polyline length
    - is_angle_within_tolerance: Direction comparison with tolerance
"""

import math
import unittest

from stroke_recognition.domain.geometry import Point
from stroke_recognition.utils.geometry import (
    angle_difference,
    is_angle_within_tolerance,
    path_length,
    point_distance,
    segment_angle,
    turn_angle,
    turn_angles,
)


class TestPointDistance(unittest.TestCase):
    """Tests for point_distance function."""

    def test_same_point_zero_distance(self):
        p = Point(10.0, 20.0)
        self.assertEqual(point_distance(p, p), 0.0)

    def test_diagonal_distance(self):
        """Distance along diagonal (3-4-5 triangle)."""
        self.assertEqual(point_distance(Point(0, 0), Point(3, 4)), 5.0)

    def test_symmetry(self):
        p1, p2 = Point(-3.0, 7.0), Point(2.5, -1.0)
        self.assertEqual(point_distance(p1, p2), point_distance(p2, p1))


class TestSegmentAngle(unittest.TestCase):

    def test_cardinal_directions(self):
        origin = Point(0, 0)
        self.assertAlmostEqual(segment_angle(origin, Point(1, 0)), 0.0)
        self.assertAlmostEqual(segment_angle(origin, Point(0, 1)), math.pi / 2)
        self.assertAlmostEqual(segment_angle(origin, Point(-1, 0)), math.pi)
        self.assertAlmostEqual(segment_angle(origin, Point(0, -1)), -math.pi / 2)


class TestAngleDifference(unittest.TestCase):
    """Tests for angle_difference normalization."""

    def test_simple_difference(self):
        self.assertAlmostEqual(angle_difference(0.5, 0.2), 0.3)

    def test_order_does_not_matter(self):
        self.assertAlmostEqual(angle_difference(0.2, 1.4), angle_difference(1.4, 0.2))

    def test_wraps_around_pi(self):
        """Directions just either side of the negative x axis are close."""
        diff = angle_difference(-math.pi + 0.1, math.pi - 0.1)
        self.assertAlmostEqual(diff, 0.2)

    def test_result_never_exceeds_pi(self):
        for a1 in (-3.0, -1.0, 0.0, 2.0, 3.1, 6.0):
            for a2 in (-3.1, 0.5, 3.0, 9.0):
                diff = angle_difference(a1, a2)
                self.assertGreaterEqual(diff, 0.0)
                self.assertLessEqual(diff, math.pi + 1e-12)

    def test_opposite_directions(self):
        self.assertAlmostEqual(angle_difference(0.0, math.pi), math.pi)


class TestTurnAngles(unittest.TestCase):
    """Tests for turn_angle and turn_angles."""

    def test_straight_line_has_no_turn(self):
        self.assertAlmostEqual(turn_angle(Point(0, 0), Point(1, 0), Point(2, 0)), 0.0)

    def test_right_angle(self):
        self.assertAlmostEqual(turn_angle(Point(0, 0), Point(1, 0), Point(1, 1)), math.pi / 2)

    def test_reversal(self):
        self.assertAlmostEqual(turn_angle(Point(0, 0), Point(1, 0), Point(0, 0)), math.pi)

    def test_turn_angles_needs_three_points(self):
        self.assertEqual(turn_angles([]), [])
        self.assertEqual(turn_angles([Point(0, 0), Point(1, 1)]), [])

    def test_turn_angles_one_per_interior_point(self):
        points = [Point(0, 0), Point(1, 0), Point(1, 1), Point(2, 1)]
        angles = turn_angles(points)
        self.assertEqual(len(angles), 2)
        self.assertAlmostEqual(angles[0], math.pi / 2)
        self.assertAlmostEqual(angles[1], math.pi / 2)


class TestPathLength(unittest.TestCase):

    def test_empty_and_single_point(self):
        self.assertEqual(path_length([]), 0.0)
        self.assertEqual(path_length([Point(5, 5)]), 0.0)

    def test_polyline(self):
        points = [Point(0, 0), Point(3, 4), Point(3, 10)]
        self.assertAlmostEqual(path_length(points), 11.0)


class TestAngleTolerance(unittest.TestCase):

    def test_within_default_tolerance(self):
        self.assertTrue(is_angle_within_tolerance(0.0, math.radians(25)))

    def test_outside_default_tolerance(self):
        self.assertFalse(is_angle_within_tolerance(0.0, math.radians(40)))

    def test_custom_tolerance(self):
        self.assertTrue(is_angle_within_tolerance(0.0, math.radians(40), math.radians(45)))

    def test_wraparound(self):
        self.assertTrue(is_angle_within_tolerance(math.radians(175), math.radians(-175)))


if __name__ == '__main__':
    unittest.main()
