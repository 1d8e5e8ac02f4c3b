"""Utility functions for stroke recognition.

Geometry utilities:
    point_distance: Euclidean distance between two points.
    segment_angle: Direction of a segment in radians.
    angle_difference: Angle difference folded into [0, pi].
    turn_angle: Direction change at the middle of three points.
    turn_angles: All turn angles along a polyline.
    path_length: Total polyline length.
    is_angle_within_tolerance: Direction comparison with tolerance.

Example usage:
    Geometric calculations::

        from stroke_recognition.utils import angle_difference, path_length

        angle_difference(0.0, math.pi / 2)  # pi/2
"""

from .geometry import (
    angle_difference,
    is_angle_within_tolerance,
    path_length,
    point_distance,
    segment_angle,
    turn_angle,
    turn_angles,
)

__all__ = [
    'point_distance', 'segment_angle', 'angle_difference',
    'turn_angle', 'turn_angles', 'path_length', 'is_angle_within_tolerance',
]
