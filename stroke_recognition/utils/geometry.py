"""Geometric utility functions.

This module provides the scalar geometry primitives shared by the
normalizer, the feature extractor and the scoring policies. Functions
accept anything with ``x`` and ``y`` attributes (usually domain Points).

The module provides the following functions:
    point_distance: Euclidean distance between two points.
    segment_angle: Direction of the segment p1 -> p2 in radians.
    angle_difference: Absolute difference of two angles, folded into [0, pi].
    turn_angle: Direction change at the middle point of a triple.
    path_length: Total length of a polyline.
    turn_angles: Turn angle at every interior point of a polyline.
    is_angle_within_tolerance: Compare two directions with a tolerance.

Example usage:
    Turn angles::

        from stroke_recognition.domain import Point
        from stroke_recognition.utils.geometry import turn_angle

        turn_angle(Point(0, 0), Point(1, 0), Point(1, 1))  # pi / 2
"""

from __future__ import annotations

import math
from typing import Sequence

from ..config import ANGLE_TOLERANCE


def point_distance(p1, p2) -> float:
    """Euclidean distance between two points.

    Example:
        >>> point_distance(Point(0, 0), Point(3, 4))
        5.0
    """
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def segment_angle(p1, p2) -> float:
    """Direction of the segment from p1 to p2, as returned by atan2."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def angle_difference(a1: float, a2: float) -> float:
    """Absolute difference between two angles, normalized to [0, pi].

    Args:
        a1: First angle in radians.
        a2: Second angle in radians.

    Returns:
        The smaller of the two arcs between the directions. Directions
        that differ by more than pi wrap around, so -3 and 3 radians are
        about 0.28 apart rather than 6.

    Example:
        >>> round(angle_difference(-math.pi + 0.1, math.pi - 0.1), 6)
        0.2
    """
    diff = abs(a1 - a2) % (2 * math.pi)
    if diff > math.pi:
        diff = 2 * math.pi - diff
    return diff


def turn_angle(p1, p2, p3) -> float:
    """Direction change at p2 between segments p1->p2 and p2->p3, in [0, pi]."""
    return angle_difference(segment_angle(p1, p2), segment_angle(p2, p3))


def path_length(points: Sequence) -> float:
    """Total length of a polyline."""
    total = 0.0
    for i in range(1, len(points)):
        total += point_distance(points[i - 1], points[i])
    return total


def turn_angles(points: Sequence) -> list[float]:
    """Turn angle at every interior point of a polyline.

    Returns an empty list for fewer than three points.
    """
    return [
        turn_angle(points[i - 2], points[i - 1], points[i])
        for i in range(2, len(points))
    ]


def is_angle_within_tolerance(actual: float, expected: float,
                              tolerance: float = ANGLE_TOLERANCE) -> bool:
    """Check whether two directions agree within a tolerance (default 30 degrees)."""
    return angle_difference(actual, expected) <= tolerance
