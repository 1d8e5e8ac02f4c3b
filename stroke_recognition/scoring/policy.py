"""Per-mode scoring policies.

A ScoringPolicy bundles everything the recognition service needs to treat
a mode differently: the similarity scorer, the confidence calibrator, the
recognition threshold and the graceful-failure confidence.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..analysis.features import FeatureExtractor
from ..config import (
    LENIENT_FALLBACK_CONFIDENCE,
    LENIENT_RECOGNITION_THRESHOLD,
    STRICT_FALLBACK_CONFIDENCE,
    STRICT_RECOGNITION_THRESHOLD,
)
from ..domain.recognition import RecognitionMode
from .confidence import ConfidenceCalibrator, LenientConfidence, StrictConfidence
from .similarity import LenientSimilarity, SimilarityScorer, StrictSimilarity


@dataclass
class ScoringPolicy:
    """Scoring configuration for one recognition mode.

    Attributes:
        mode: The mode this policy implements.
        similarity: Similarity scorer.
        calibrator: Confidence calibrator.
        threshold: Recognition threshold.
        inclusive: If True, confidence >= threshold is recognized,
            otherwise confidence must exceed it.
        fallback_confidence: Confidence reported when recognition fails
            unexpectedly.
    """
    mode: RecognitionMode
    similarity: SimilarityScorer
    calibrator: ConfidenceCalibrator
    threshold: float
    inclusive: bool
    fallback_confidence: float

    @property
    def child_friendly(self) -> bool:
        return self.mode is RecognitionMode.LENIENT

    def is_recognized(self, confidence: float) -> bool:
        if self.inclusive:
            return confidence >= self.threshold
        return confidence > self.threshold


def strict_policy() -> ScoringPolicy:
    return ScoringPolicy(
        mode=RecognitionMode.STRICT,
        similarity=StrictSimilarity(),
        calibrator=StrictConfidence(),
        threshold=STRICT_RECOGNITION_THRESHOLD,
        inclusive=False,
        fallback_confidence=STRICT_FALLBACK_CONFIDENCE,
    )


def lenient_policy(extractor: FeatureExtractor | None = None) -> ScoringPolicy:
    extractor = extractor or FeatureExtractor()
    return ScoringPolicy(
        mode=RecognitionMode.LENIENT,
        similarity=LenientSimilarity(extractor=extractor),
        calibrator=LenientConfidence(extractor=extractor),
        threshold=LENIENT_RECOGNITION_THRESHOLD,
        inclusive=True,
        fallback_confidence=LENIENT_FALLBACK_CONFIDENCE,
    )


def default_policies(extractor: FeatureExtractor | None = None) -> dict:
    """Create the strict and lenient policies keyed by RecognitionMode."""
    return {
        RecognitionMode.STRICT: strict_policy(),
        RecognitionMode.LENIENT: lenient_policy(extractor),
    }
