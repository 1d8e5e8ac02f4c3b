"""Similarity scoring and confidence calibration.

This module provides the two interchangeable scoring policies of the
recognition engine.

Similarity classes:
    SimilarityScorer: Base class combining weighted components.
    StrictSimilarity: Stroke 30%, features 50%, complexity 20%.
    LenientSimilarity: Stroke 20%, features 40%, complexity 15%, effort 25%.

Confidence classes:
    ConfidenceCalibrator: Base class for calibration.
    StrictConfidence: Discounts for poor drawing quality.
    LenientConfidence: Floors and bonuses for child users.

Policies:
    ScoringPolicy: Scorer, calibrator and thresholds for one mode.
    default_policies: Strict and lenient policies keyed by mode.

Example usage:
    Scoring a preprocessed drawing::

        from stroke_recognition.scoring import StrictSimilarity, StrictConfidence

        similarity = StrictSimilarity().score(pre, template)
        confidence = StrictConfidence().calibrate(similarity, pre, template)
"""

from .confidence import (
    ConfidenceCalibrator,
    LenientConfidence,
    StrictConfidence,
    encouragement_level,
)
from .policy import ScoringPolicy, default_policies, lenient_policy, strict_policy
from .similarity import LenientSimilarity, SimilarityScorer, StrictSimilarity

__all__ = [
    'SimilarityScorer', 'StrictSimilarity', 'LenientSimilarity',
    'ConfidenceCalibrator', 'StrictConfidence', 'LenientConfidence',
    'encouragement_level',
    'ScoringPolicy', 'default_policies', 'strict_policy', 'lenient_policy',
]
