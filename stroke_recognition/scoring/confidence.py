"""Confidence calibration.

Maps a similarity value plus raw drawing-quality signals to the final
confidence in [0, 1]. The strict calibrator only discounts; the lenient
calibrator floors confidence for any attempt and adds effort and
child-friendliness bonuses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..analysis.features import FeatureExtractor
from ..config import (
    EXCELLENT_THRESHOLD,
    FAIR_THRESHOLD,
    LENIENT_ATTEMPT_FLOOR,
    LENIENT_FINAL_FLOOR,
    LENIENT_FINAL_FLOOR_MIN_POINTS,
    REASONABLE_MAX_AREA,
    REASONABLE_MIN_AREA,
    STRICT_MAX_AREA,
    STRICT_MAX_POINTS,
    STRICT_MIN_AREA,
    STRICT_MIN_POINTS,
)
from ..domain.geometry import BBox
from ..domain.recognition import (
    CharacterTemplate,
    EncouragementLevel,
    PreprocessedDrawing,
    ShapeFeatures,
)
from .similarity import clamp_unit, is_number


def encouragement_level(confidence: float) -> EncouragementLevel:
    """Band a confidence: >= 0.5 excellent, >= 0.2 fair, otherwise poor."""
    if confidence >= EXCELLENT_THRESHOLD:
        return EncouragementLevel.EXCELLENT
    if confidence >= FAIR_THRESHOLD:
        return EncouragementLevel.FAIR
    return EncouragementLevel.POOR


def has_basic_shape_match(actual: ShapeFeatures, expected: ShapeFeatures) -> bool:
    """True when at least half of the shape flags (2 of 3) agree."""
    return actual.matches(expected) / len(ShapeFeatures.FIELDS) >= 0.5


def is_reasonable_size(bbox: BBox | None) -> bool:
    if bbox is None:
        return False
    return REASONABLE_MIN_AREA <= bbox.area <= REASONABLE_MAX_AREA


class ConfidenceCalibrator(ABC):
    """Base class for confidence calibration policies."""

    name = 'base'

    @abstractmethod
    def calibrate(self, similarity: float, drawing: PreprocessedDrawing,
                  template: CharacterTemplate) -> float:
        """Return the calibrated confidence in [0, 1]."""
        pass


class StrictConfidence(ConfidenceCalibrator):
    """Discount similarity for too few/many points and odd drawing sizes."""

    name = 'strict'

    def calibrate(self, similarity, drawing, template):
        confidence = similarity

        if drawing.stroke_count == 0:
            confidence = 0.0
        elif drawing.total_points < STRICT_MIN_POINTS:
            confidence *= 0.5
        elif drawing.total_points > STRICT_MAX_POINTS:
            confidence *= 0.8

        if drawing.bounding_box is not None:
            area = drawing.bounding_box.area
            if area < STRICT_MIN_AREA:
                confidence *= 0.7
            elif area > STRICT_MAX_AREA:
                confidence *= 0.8

        return clamp_unit(confidence)


class LenientConfidence(ConfidenceCalibrator):
    """Encouraging calibration for child users.

    Steps, in order:
        1. Floor at 0.25 when any stroke was drawn.
        2. Child-friendliness bonus (complexity, smoothness, speed).
        3. +0.1 when at least half of the expected strokes were drawn.
        4. +0.15 when at least 2 of 3 shape flags agree.
        5. +0.05 for a reasonably sized drawing.
        6. Floor at 0.2 when there are strokes and more than 5 points.

    Attributes:
        extractor: Provides smoothness and speed of the normalized strokes.
    """

    name = 'lenient'

    def __init__(self, extractor: FeatureExtractor | None = None):
        self.extractor = extractor or FeatureExtractor()

    def child_friendly_bonus(self, drawing: PreprocessedDrawing,
                             template: CharacterTemplate) -> float:
        bonus = 0.0

        if is_number(drawing.complexity) and is_number(template.complexity):
            if abs(drawing.complexity - template.complexity) < 0.3:
                bonus += 0.1

        if self.extractor.calculate_smoothness(drawing.normalized_strokes) > 0.6:
            bonus += 0.05

        speed = self.extractor.calculate_drawing_speed(drawing.normalized_strokes)
        if 0.3 < speed < 0.8:
            bonus += 0.05

        return bonus

    def calibrate(self, similarity, drawing, template):
        confidence = similarity

        if drawing.stroke_count > 0:
            confidence = max(confidence, LENIENT_ATTEMPT_FLOOR)

        confidence += self.child_friendly_bonus(drawing, template)

        if drawing.stroke_count >= template.stroke_count * 0.5:
            confidence += 0.1

        if has_basic_shape_match(drawing.features, template.features):
            confidence += 0.15

        if is_reasonable_size(drawing.bounding_box):
            confidence += 0.05

        if drawing.stroke_count > 0 and drawing.total_points > LENIENT_FINAL_FLOOR_MIN_POINTS:
            confidence = max(confidence, LENIENT_FINAL_FLOOR)

        return clamp_unit(confidence)
