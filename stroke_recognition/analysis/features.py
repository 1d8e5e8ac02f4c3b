"""Shape descriptors for normalized strokes.

All thresholds operate in unit-box space, i.e. on strokes produced by
StrokeNormalizer. The extractor derives:
    - three boolean flags (horizontal line, vertical line, curve)
    - a complexity estimate from path length and direction changes
    - smoothness and drawing speed, used by the lenient scoring policy
"""

from __future__ import annotations

import math
from typing import Sequence

from ..config import (
    COMPLEXITY_MAX_CHANGES,
    COMPLEXITY_MAX_LENGTH,
    CURVE_TURN_ANGLE,
    DEFAULT_SPEED,
    DIRECTION_CHANGE_ANGLE,
    LINE_MAX_DRIFT,
    LINE_MIN_DELTA,
    REFERENCE_SPEED,
)
from ..domain.geometry import Stroke
from ..domain.recognition import ShapeFeatures
from ..utils.geometry import path_length, turn_angles


class FeatureExtractor:
    """Heuristic feature detection on normalized strokes.

    Attributes:
        line_min_delta: Minimum movement along an axis for a line segment.
        line_max_drift: Maximum movement across that axis.
        curve_turn_angle: Turn (radians) above which a curve is reported.
        direction_change_angle: Turn (radians) counted as a direction
            change by calculate_complexity.

    Example:
        >>> extractor = FeatureExtractor()
        >>> features = extractor.extract_features(preprocessed.normalized_strokes)
        >>> features.has_curve
        True
    """

    def __init__(self, line_min_delta: float = LINE_MIN_DELTA,
                 line_max_drift: float = LINE_MAX_DRIFT,
                 curve_turn_angle: float = CURVE_TURN_ANGLE,
                 direction_change_angle: float = DIRECTION_CHANGE_ANGLE):
        self.line_min_delta = line_min_delta
        self.line_max_drift = line_max_drift
        self.curve_turn_angle = curve_turn_angle
        self.direction_change_angle = direction_change_angle

    def extract_features(self, strokes: Sequence[Stroke]) -> ShapeFeatures:
        """Detect horizontal lines, vertical lines and curves.

        A consecutive point pair is a horizontal piece when it moves more
        than line_min_delta in x and less than line_max_drift in y (and the
        transpose for vertical). A triple whose turn angle exceeds
        curve_turn_angle marks a curve.

        Args:
            strokes: Normalized strokes.

        Returns:
            ShapeFeatures with every flag False unless detected.
        """
        horizontal = vertical = curve = False

        for stroke in strokes:
            points = stroke.points
            for i in range(1, len(points)):
                dx = abs(points[i].x - points[i - 1].x)
                dy = abs(points[i].y - points[i - 1].y)
                if dx > self.line_min_delta and dy < self.line_max_drift:
                    horizontal = True
                if dy > self.line_min_delta and dx < self.line_max_drift:
                    vertical = True
            if not curve and any(a > self.curve_turn_angle for a in turn_angles(points)):
                curve = True

        return ShapeFeatures(horizontal, vertical, curve)

    def calculate_complexity(self, strokes: Sequence[Stroke]) -> float:
        """Complexity in [0, 1] from path length and direction changes.

        The mean of total length clipped to COMPLEXITY_MAX_LENGTH (scaled to
        [0, 1]) and the count of turns above direction_change_angle clipped
        to COMPLEXITY_MAX_CHANGES (scaled to [0, 1]). Empty input yields 0.
        """
        if not strokes:
            return 0.0

        total_length = 0.0
        direction_changes = 0
        for stroke in strokes:
            if len(stroke) < 2:
                continue
            total_length += path_length(stroke.points)
            direction_changes += sum(
                1 for a in turn_angles(stroke.points) if a > self.direction_change_angle
            )

        length_complexity = min(1.0, max(0.0, total_length) / COMPLEXITY_MAX_LENGTH)
        change_complexity = min(1.0, direction_changes / COMPLEXITY_MAX_CHANGES)
        return (length_complexity + change_complexity) / 2

    def calculate_smoothness(self, strokes: Sequence[Stroke]) -> float:
        """Average local smoothness in [0, 1].

        Each segment scores 1 - turn/pi; scores are averaged per stroke and
        then across strokes with at least three points. Returns 0 when no
        stroke qualifies.
        """
        per_stroke = []
        for stroke in strokes:
            angles = turn_angles(stroke.points)
            if not angles:
                continue
            per_stroke.append(sum(1 - a / math.pi for a in angles) / len(angles))
        return sum(per_stroke) / len(per_stroke) if per_stroke else 0.0

    def calculate_drawing_speed(self, strokes: Sequence[Stroke]) -> float:
        """Drawing speed relative to REFERENCE_SPEED, clamped to [0, 1].

        Speed is total path length over total elapsed time between
        timestamped consecutive points. Without timing data the neutral
        DEFAULT_SPEED is returned.
        """
        if not strokes:
            return 0.0

        total_distance = 0.0
        total_time = 0.0
        for stroke in strokes:
            points = stroke.points
            for i in range(1, len(points)):
                prev, curr = points[i - 1], points[i]
                total_distance += prev.distance_to(curr)
                if prev.timestamp is not None and curr.timestamp is not None:
                    total_time += curr.timestamp - prev.timestamp

        if total_time == 0:
            return DEFAULT_SPEED

        speed = total_distance / total_time
        return max(0.0, min(1.0, speed / REFERENCE_SPEED))
