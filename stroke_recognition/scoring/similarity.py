"""Similarity between a preprocessed drawing and a character template.

This module implements the weighted multi-factor similarity used by the
recognition service. Both policies combine the same sub-metrics:

    - Stroke-count similarity: how close the stroke count is to the
      template's expected count
    - Feature similarity: agreement of the three boolean shape flags
    - Complexity similarity: closeness of the complexity estimates

The lenient policy uses banded, floored variants of these metrics and adds
an effort score that rewards attempting the character at all.

Design Patterns:
    Each policy is a SimilarityScorer subclass that only declares its
    weights and how to compute each component. SimilarityScorer.score
    combines them, so the two policies cannot drift apart in how weights
    are applied or results are clamped.

Typical usage:
    from stroke_recognition.scoring.similarity import StrictSimilarity

    scorer = StrictSimilarity()
    similarity = scorer.score(preprocessed, template)
    parts = scorer.components(preprocessed, template)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from numbers import Real

from ..analysis.features import FeatureExtractor
from ..config import (
    LENIENT_COMPLEXITY_DEFAULT,
    LENIENT_FEATURE_BASE,
    LENIENT_WEIGHTS,
    STRICT_COMPLEXITY_DEFAULT,
    STRICT_WEIGHTS,
)
from ..domain.recognition import CharacterTemplate, PreprocessedDrawing, ShapeFeatures


def clamp_unit(value: float) -> float:
    """Clamp to [0, 1]; NaN maps to 0."""
    if value != value:
        return 0.0
    return max(0.0, min(1.0, value))


def is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


# ---------------------------------------------------------------------------
# Strict sub-metrics
# ---------------------------------------------------------------------------

def stroke_count_similarity(actual: int, expected: int) -> float:
    """1 - |actual - expected| / max(actual, expected).

    Both zero gives 1; expected zero with strokes drawn gives 0.
    """
    if expected == 0:
        return 1.0 if actual == 0 else 0.0
    difference = abs(actual - expected)
    return max(0.0, 1 - difference / max(actual, expected))


def feature_similarity(actual: ShapeFeatures | None, expected: ShapeFeatures | None) -> float:
    """Fraction of the three shape flags that match exactly."""
    if actual is None or expected is None:
        return 0.0
    return actual.matches(expected) / len(ShapeFeatures.FIELDS)


def complexity_similarity(actual, expected, default: float = STRICT_COMPLEXITY_DEFAULT) -> float:
    """max(0, 1 - |actual - expected|), or default when either is not a number."""
    if not is_number(actual) or not is_number(expected):
        return default
    return max(0.0, 1 - abs(actual - expected))


# ---------------------------------------------------------------------------
# Lenient sub-metrics
# ---------------------------------------------------------------------------

def lenient_stroke_count_similarity(actual: int, expected: int) -> float:
    """Step function of the stroke difference that never drops below 0.2."""
    if expected == 0:
        return 1.0 if actual == 0 else 0.5

    difference = abs(actual - expected)
    if difference == 0:
        return 1.0
    if difference == 1:
        return 0.8
    if difference == 2:
        return 0.6
    if difference <= expected:
        return 0.4
    return 0.2


def is_partial_feature_match(feature: str, actual: bool, expected: bool) -> bool:
    """Whether a mismatched flag still earns partial credit.

    A drawn line counts partially toward any expected line flag; a curve
    expectation is always partially satisfied.
    """
    if feature in ('has_horizontal_line', 'has_vertical_line'):
        return actual is True
    if feature == 'has_curve':
        return True
    return False


def lenient_feature_similarity(actual: ShapeFeatures | None, expected: ShapeFeatures | None,
                               base: float = LENIENT_FEATURE_BASE) -> float:
    """Exact matches score 1, partial matches 0.5, plus a flat base, capped at 1."""
    if actual is None or expected is None:
        return 0.3

    matches = 0
    partial = 0
    total = len(ShapeFeatures.FIELDS)
    for name in ShapeFeatures.FIELDS:
        a = getattr(actual, name)
        e = getattr(expected, name)
        if a == e:
            matches += 1
        elif is_partial_feature_match(name, a, e):
            partial += 1

    return min(1.0, matches / total + (partial / total) * 0.5 + base)


def lenient_complexity_similarity(actual, expected,
                                  default: float = LENIENT_COMPLEXITY_DEFAULT) -> float:
    """Banded complexity similarity that never drops below 0.4."""
    if not is_number(actual) or not is_number(expected):
        return default

    difference = abs(actual - expected)
    if difference < 0.2:
        return 1.0
    if difference < 0.4:
        return 0.8
    if difference < 0.6:
        return 0.6
    return 0.4


def effort_score(drawing: PreprocessedDrawing, extractor: FeatureExtractor) -> float:
    """Reward for attempting the character, in [0, 1].

    +0.3 for any stroke, +0.2 for at least 10 captured points, +0.2 for a
    drawing speed in (0.1, 0.9), +0.3 for smoothness above 0.3.
    """
    score = 0.0
    if drawing.stroke_count > 0:
        score += 0.3
    if drawing.total_points >= 10:
        score += 0.2

    speed = extractor.calculate_drawing_speed(drawing.normalized_strokes)
    if 0.1 < speed < 0.9:
        score += 0.2

    smoothness = extractor.calculate_smoothness(drawing.normalized_strokes)
    if smoothness > 0.3:
        score += 0.3

    return min(1.0, score)


# ---------------------------------------------------------------------------
# Scoring policies
# ---------------------------------------------------------------------------

class SimilarityScorer(ABC):
    """Base class for similarity policies.

    Subclasses provide weights and compute one value per weighted
    component. score() returns the weighted mean, clamped to [0, 1].

    Attributes:
        weights: Component name -> weight.
    """

    name = 'base'

    def __init__(self, weights: dict[str, float]):
        self.weights = dict(weights)

    @abstractmethod
    def components(self, drawing: PreprocessedDrawing,
                   template: CharacterTemplate) -> dict[str, float]:
        """Compute every weighted component, keyed like self.weights."""
        pass

    def score(self, drawing: PreprocessedDrawing | None,
              template: CharacterTemplate | None) -> float:
        """Weighted similarity in [0, 1]; 0 when either side is missing."""
        if drawing is None or template is None:
            return 0.0

        parts = self.components(drawing, template)
        total_weight = sum(self.weights.values())
        if total_weight <= 0:
            return 0.0
        weighted = sum(parts[key] * weight for key, weight in self.weights.items())
        return clamp_unit(weighted / total_weight)


class StrictSimilarity(SimilarityScorer):
    """Baseline similarity: stroke 30%, features 50%, complexity 20%."""

    name = 'strict'

    def __init__(self, weights: dict[str, float] | None = None):
        super().__init__(weights or STRICT_WEIGHTS)

    def components(self, drawing, template):
        return {
            'stroke': stroke_count_similarity(drawing.stroke_count, template.stroke_count),
            'feature': feature_similarity(drawing.features, template.features),
            'complexity': complexity_similarity(drawing.complexity, template.complexity),
        }


class LenientSimilarity(SimilarityScorer):
    """Child-friendly similarity: stroke 20%, features 40%, complexity 15%, effort 25%."""

    name = 'lenient'

    def __init__(self, weights: dict[str, float] | None = None,
                 extractor: FeatureExtractor | None = None):
        super().__init__(weights or LENIENT_WEIGHTS)
        self.extractor = extractor or FeatureExtractor()

    def components(self, drawing, template):
        return {
            'stroke': lenient_stroke_count_similarity(drawing.stroke_count, template.stroke_count),
            'feature': lenient_feature_similarity(drawing.features, template.features),
            'complexity': lenient_complexity_similarity(drawing.complexity, template.complexity),
            'effort': effort_score(drawing, self.extractor),
        }
