"""Unit tests for similarity scoring and confidence calibration.

Tests the weighted-component scoring pattern implementation including:
- Strict sub-metrics: stroke count, features, complexity
- Lenient sub-metrics: banded variants, partial feature credit, effort
- SimilarityScorer: weighted mean and clamping
- StrictConfidence / LenientConfidence: discounts, floors and bonuses
- ScoringPolicy: recognition thresholds per mode
"""

import math
import unittest

from stroke_recognition.analysis.features import FeatureExtractor
from stroke_recognition.domain import (
    BBox,
    CharacterTemplate,
    EncouragementLevel,
    PreprocessedDrawing,
    RecognitionMode,
    ShapeFeatures,
    Stroke,
)
from stroke_recognition.scoring import (
    LenientConfidence,
    LenientSimilarity,
    StrictConfidence,
    StrictSimilarity,
    default_policies,
    encouragement_level,
)
from stroke_recognition.scoring.confidence import has_basic_shape_match, is_reasonable_size
from stroke_recognition.scoring.similarity import (
    clamp_unit,
    complexity_similarity,
    effort_score,
    feature_similarity,
    is_partial_feature_match,
    lenient_complexity_similarity,
    lenient_feature_similarity,
    lenient_stroke_count_similarity,
    stroke_count_similarity,
)

ALL = ShapeFeatures(True, True, True)
NONE = ShapeFeatures(False, False, False)


def make_preprocessed(stroke_count=1, total_points=20, features=ALL, complexity=0.5,
                      bbox=BBox(0, 0, 100, 100), normalized_strokes=None) -> PreprocessedDrawing:
    """Create a PreprocessedDrawing without running the normalizer."""
    return PreprocessedDrawing(
        normalized_strokes=normalized_strokes or [],
        bounding_box=bbox,
        stroke_count=stroke_count,
        total_points=total_points,
        features=features,
        complexity=complexity,
    )


class TestStrictSubMetrics(unittest.TestCase):

    def test_stroke_count_similarity(self):
        self.assertEqual(stroke_count_similarity(3, 3), 1.0)
        self.assertAlmostEqual(stroke_count_similarity(1, 3), 1 - 2 / 3)
        self.assertAlmostEqual(stroke_count_similarity(6, 3), 0.5)
        self.assertEqual(stroke_count_similarity(0, 0), 1.0)
        self.assertEqual(stroke_count_similarity(2, 0), 0.0)

    def test_feature_similarity(self):
        self.assertEqual(feature_similarity(ALL, ALL), 1.0)
        self.assertAlmostEqual(feature_similarity(ShapeFeatures(True, False, False), ALL), 1 / 3)
        self.assertEqual(feature_similarity(None, ALL), 0.0)

    def test_complexity_similarity(self):
        self.assertAlmostEqual(complexity_similarity(0.5, 0.7), 0.8)
        self.assertEqual(complexity_similarity(0.0, 5.0), 0.0)
        self.assertEqual(complexity_similarity(None, 0.7), 0.5)
        self.assertEqual(complexity_similarity(math.nan, 0.7), 0.5)

    def test_clamp_unit(self):
        self.assertEqual(clamp_unit(-1.0), 0.0)
        self.assertEqual(clamp_unit(2.0), 1.0)
        self.assertEqual(clamp_unit(math.nan), 0.0)


class TestLenientSubMetrics(unittest.TestCase):

    def test_stroke_bands(self):
        self.assertEqual(lenient_stroke_count_similarity(3, 3), 1.0)
        self.assertEqual(lenient_stroke_count_similarity(2, 3), 0.8)
        self.assertEqual(lenient_stroke_count_similarity(5, 3), 0.6)
        self.assertEqual(lenient_stroke_count_similarity(1, 4), 0.4)
        self.assertEqual(lenient_stroke_count_similarity(10, 3), 0.2)

    def test_stroke_zero_expected(self):
        self.assertEqual(lenient_stroke_count_similarity(0, 0), 1.0)
        self.assertEqual(lenient_stroke_count_similarity(2, 0), 0.5)

    def test_partial_feature_match(self):
        self.assertTrue(is_partial_feature_match('has_horizontal_line', True, False))
        self.assertFalse(is_partial_feature_match('has_vertical_line', False, True))
        self.assertTrue(is_partial_feature_match('has_curve', False, True))
        self.assertFalse(is_partial_feature_match('unknown', True, False))

    def test_feature_similarity_with_partial_credit(self):
        # Only the curve mismatch earns partial credit
        self.assertAlmostEqual(lenient_feature_similarity(NONE, ALL), 0.5 / 3 + 0.2)

    def test_feature_similarity_capped(self):
        self.assertEqual(lenient_feature_similarity(ALL, ALL), 1.0)

    def test_feature_similarity_missing(self):
        self.assertEqual(lenient_feature_similarity(None, ALL), 0.3)

    def test_complexity_bands(self):
        self.assertEqual(lenient_complexity_similarity(0.5, 0.6), 1.0)
        self.assertEqual(lenient_complexity_similarity(0.2, 0.5), 0.8)
        self.assertEqual(lenient_complexity_similarity(0.0, 0.5), 0.6)
        self.assertEqual(lenient_complexity_similarity(0.0, 0.9), 0.4)
        self.assertEqual(lenient_complexity_similarity(None, 0.9), 0.6)

    def test_effort_score(self):
        extractor = FeatureExtractor()
        straight = [Stroke.from_tuples([(0, 0), (0.5, 0), (1, 0)])]
        drawing = make_preprocessed(total_points=12, normalized_strokes=straight)
        # stroke 0.3 + points 0.2 + neutral speed 0.2 + smooth 0.3
        self.assertAlmostEqual(effort_score(drawing, extractor), 1.0)

        bare = make_preprocessed(stroke_count=0, total_points=0)
        self.assertEqual(effort_score(bare, extractor), 0.0)


class TestSimilarityScorers(unittest.TestCase):

    def test_strict_perfect_match(self):
        template = CharacterTemplate(1, ALL, 0.5)
        self.assertAlmostEqual(StrictSimilarity().score(make_preprocessed(), template), 1.0)

    def test_strict_weighting(self):
        template = CharacterTemplate(2, ALL, 0.5)
        drawing = make_preprocessed(stroke_count=1, features=NONE, complexity=0.5)
        # stroke 0.5 * 0.3 + features 0 * 0.5 + complexity 1 * 0.2
        self.assertAlmostEqual(StrictSimilarity().score(drawing, template), 0.35)

    def test_components_keyed_by_weight(self):
        scorer = LenientSimilarity()
        parts = scorer.components(make_preprocessed(), CharacterTemplate(1, ALL, 0.5))
        self.assertEqual(set(parts), set(scorer.weights))

    def test_missing_inputs(self):
        template = CharacterTemplate.fallback()
        self.assertEqual(StrictSimilarity().score(None, template), 0.0)
        self.assertEqual(LenientSimilarity().score(make_preprocessed(), None), 0.0)

    def test_zero_weights(self):
        scorer = StrictSimilarity(weights={'stroke': 0, 'feature': 0, 'complexity': 0})
        self.assertEqual(scorer.score(make_preprocessed(), CharacterTemplate.fallback()), 0.0)

    def test_adversarial_template_stays_in_range(self):
        for template in (CharacterTemplate(0, NONE, 99.0),
                         CharacterTemplate(50, ALL, -5.0),
                         CharacterTemplate(1, ALL, math.nan)):
            for scorer in (StrictSimilarity(), LenientSimilarity()):
                value = scorer.score(make_preprocessed(complexity=2.0), template)
                self.assertGreaterEqual(value, 0.0)
                self.assertLessEqual(value, 1.0)


class TestStrictConfidence(unittest.TestCase):

    def setUp(self):
        self.calibrator = StrictConfidence()
        self.template = CharacterTemplate(1, ALL, 0.5)

    def test_good_drawing_unchanged(self):
        self.assertAlmostEqual(self.calibrator.calibrate(0.8, make_preprocessed(), self.template), 0.8)

    def test_no_strokes(self):
        drawing = make_preprocessed(stroke_count=0)
        self.assertEqual(self.calibrator.calibrate(0.8, drawing, self.template), 0.0)

    def test_too_few_points(self):
        drawing = make_preprocessed(total_points=5)
        self.assertAlmostEqual(self.calibrator.calibrate(0.8, drawing, self.template), 0.4)

    def test_too_many_points(self):
        drawing = make_preprocessed(total_points=1500)
        self.assertAlmostEqual(self.calibrator.calibrate(0.8, drawing, self.template), 0.64)

    def test_tiny_area(self):
        drawing = make_preprocessed(bbox=BBox(0, 0, 5, 5))
        self.assertAlmostEqual(self.calibrator.calibrate(0.8, drawing, self.template), 0.56)

    def test_huge_area(self):
        drawing = make_preprocessed(bbox=BBox(0, 0, 300, 300))
        self.assertAlmostEqual(self.calibrator.calibrate(0.8, drawing, self.template), 0.64)

    def test_discounts_compound(self):
        drawing = make_preprocessed(total_points=3, bbox=BBox(0, 0, 5, 5))
        self.assertAlmostEqual(self.calibrator.calibrate(1.0, drawing, self.template), 0.35)


class TestLenientConfidence(unittest.TestCase):

    def setUp(self):
        self.calibrator = LenientConfidence()

    def test_attempt_floor(self):
        # No bonus applies: complexity far off, too few strokes, shapes differ, small box
        drawing = make_preprocessed(stroke_count=1, total_points=3, features=NONE,
                                    complexity=0.9, bbox=BBox(0, 0, 10, 10))
        template = CharacterTemplate(4, ALL, 0.1)
        self.assertAlmostEqual(self.calibrator.calibrate(0.0, drawing, template), 0.25)

    def test_bonuses_accumulate(self):
        drawing = make_preprocessed(stroke_count=2, total_points=30, features=ALL,
                                    complexity=0.5, bbox=BBox(0, 0, 100, 100))
        template = CharacterTemplate(3, ALL, 0.6)
        # complexity 0.1 + strokes 0.1 + shape 0.15 + size 0.05
        self.assertAlmostEqual(self.calibrator.calibrate(0.4, drawing, template), 0.8)

    def test_clamped_to_one(self):
        drawing = make_preprocessed(features=ALL)
        template = CharacterTemplate(1, ALL, 0.5)
        self.assertEqual(self.calibrator.calibrate(0.95, drawing, template), 1.0)

    def test_no_strokes_no_floor(self):
        drawing = make_preprocessed(stroke_count=0, total_points=0, features=NONE,
                                    complexity=0.9, bbox=None)
        template = CharacterTemplate(4, ALL, 0.1)
        self.assertEqual(self.calibrator.calibrate(0.0, drawing, template), 0.0)

    def test_child_friendly_bonus_ignores_bad_complexity(self):
        drawing = make_preprocessed(complexity=math.nan)
        template = CharacterTemplate(1, ALL, 0.5)
        self.assertEqual(self.calibrator.child_friendly_bonus(drawing, template), 0.0)


class TestConfidenceHelpers(unittest.TestCase):

    def test_encouragement_levels(self):
        self.assertIs(encouragement_level(0.9), EncouragementLevel.EXCELLENT)
        self.assertIs(encouragement_level(0.5), EncouragementLevel.EXCELLENT)
        self.assertIs(encouragement_level(0.2), EncouragementLevel.FAIR)
        self.assertIs(encouragement_level(0.19), EncouragementLevel.POOR)

    def test_basic_shape_match(self):
        self.assertTrue(has_basic_shape_match(ShapeFeatures(True, True, False), ALL))
        self.assertFalse(has_basic_shape_match(ShapeFeatures(True, False, False), ALL))

    def test_reasonable_size(self):
        self.assertTrue(is_reasonable_size(BBox(0, 0, 100, 100)))
        self.assertFalse(is_reasonable_size(BBox(0, 0, 10, 10)))
        self.assertFalse(is_reasonable_size(BBox(0, 0, 1000, 1000)))
        self.assertFalse(is_reasonable_size(None))


class TestScoringPolicies(unittest.TestCase):

    def setUp(self):
        self.policies = default_policies()

    def test_strict_threshold_is_exclusive(self):
        policy = self.policies[RecognitionMode.STRICT]
        self.assertFalse(policy.is_recognized(0.3))
        self.assertTrue(policy.is_recognized(0.31))
        self.assertFalse(policy.child_friendly)

    def test_lenient_threshold_is_inclusive(self):
        policy = self.policies[RecognitionMode.LENIENT]
        self.assertTrue(policy.is_recognized(0.2))
        self.assertFalse(policy.is_recognized(0.19))
        self.assertTrue(policy.child_friendly)

    def test_fallback_confidences(self):
        self.assertEqual(self.policies[RecognitionMode.STRICT].fallback_confidence, 0.3)
        self.assertEqual(self.policies[RecognitionMode.LENIENT].fallback_confidence, 0.25)


if __name__ == '__main__':
    unittest.main()
