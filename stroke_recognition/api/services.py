"""Service layer for character recognition.

This module provides the RecognitionService class, the public entry point
of the engine. It sequences normalization, template retrieval, similarity
scoring and confidence calibration, and degrades gracefully: recognition
always produces a usable, confidence-scored result instead of raising.

Example usage:
    Strict and child-friendly recognition::

        import asyncio
        from stroke_recognition.api import RecognitionService
        from stroke_recognition.domain import Drawing, RecognitionMode

        service = RecognitionService()
        drawing = Drawing.from_strokes([[(10, 10), (50, 10)], [(30, 5), (30, 60)]])

        result = asyncio.run(service.recognize(drawing, 'た'))
        child = asyncio.run(service.recognize(drawing, 'た', RecognitionMode.LENIENT))
        print(result.confidence, child.details['encouragement_level'])

    Checking input before recognizing::

        report = service.validate_recognition_data(drawing, 'た')
        if not report.valid:
            print(report.issues)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Union

from ..analysis.normalizer import StrokeNormalizer
from ..config import (
    DEFAULT_MAX_CACHE_SIZE,
    DEFAULT_TARGET_CHARACTER,
    HEURISTIC_BASE_CONFIDENCE,
    HEURISTIC_MAX_CONFIDENCE,
    MAX_REASONABLE_STROKES,
    RecognitionSettings,
)
from ..domain.geometry import BBox, Drawing
from ..domain.recognition import (
    EncouragementLevel,
    PreprocessedDrawing,
    RecognitionMode,
    RecognitionResult,
    ShapeFeatures,
    ValidationReport,
)
from ..scoring.confidence import encouragement_level
from ..scoring.policy import ScoringPolicy, default_policies
from ..templates.repository import TemplateStore

# Logger for service errors
_logger = logging.getLogger(__name__)

ErrorCallback = Callable[[Dict[str, Any]], None]


class RecognitionService:
    """Recognize hand-drawn characters against reference templates.

    The service is stateless per call; the template store is the only
    state shared between calls.

    Attributes:
        template_store: TemplateStore serving reference templates.
        normalizer: StrokeNormalizer used to preprocess drawings.
        policies: RecognitionMode -> ScoringPolicy.
        on_error: Optional callback notified when recognition fails
            unexpectedly. Receives a dictionary with 'type', 'message',
            'service' and 'target_character' keys.

    Example:
        >>> service = RecognitionService()
        >>> result = await service.recognize(None, 'あ')
        >>> (result.confidence, result.recognized)
        (0.0, False)
    """

    def __init__(self, template_store: Optional[TemplateStore] = None,
                 normalizer: Optional[StrokeNormalizer] = None,
                 policies: Optional[Dict[RecognitionMode, ScoringPolicy]] = None,
                 on_error: Optional[ErrorCallback] = None):
        self.template_store = template_store or TemplateStore()
        self.normalizer = normalizer or StrokeNormalizer()
        self.policies = policies or default_policies(self.normalizer.extractor)
        self.on_error = on_error
        _logger.info("RecognitionService initialized (lazy template loading)")

    def policy_for(self, mode: Union[RecognitionMode, str]) -> ScoringPolicy:
        """Look up the scoring policy for a mode given as enum or string.

        Raises:
            ValueError: If the mode is not a known RecognitionMode.
        """
        return self.policies[RecognitionMode(mode)]

    async def recognize(self, drawing: Union[Drawing, dict, None],
                        target_character: str = DEFAULT_TARGET_CHARACTER,
                        mode: Union[RecognitionMode, str] = RecognitionMode.STRICT,
                        ) -> RecognitionResult:
        """Judge how closely a drawing matches the target character.

        Args:
            drawing: Captured Drawing, or its dictionary form.
            target_character: Character the user was asked to draw.
            mode: RecognitionMode.STRICT or RecognitionMode.LENIENT.

        Returns:
            RecognitionResult. Empty drawings yield confidence 0 and
            recognized False in both modes. Unexpected failures yield the
            mode's fallback result (0.3 strict, 0.25 lenient, recognized).
            Unknown modes are scored strictly.
        """
        try:
            policy = self.policy_for(mode)
        except (ValueError, KeyError):
            _logger.warning("Unknown recognition mode %r, using strict", mode)
            policy = self.policies[RecognitionMode.STRICT]

        try:
            if isinstance(drawing, dict):
                drawing = Drawing.from_dict(drawing)

            if drawing is None or not drawing.strokes:
                return self._empty_result(policy, 'No drawing data')

            preprocessed = self.normalizer.normalize(drawing)
            if preprocessed is None:
                return self._empty_result(policy, 'Preprocessing failed')

            template = await self.template_store.get(target_character)

            similarity = policy.similarity.score(preprocessed, template)
            confidence = policy.calibrator.calibrate(similarity, preprocessed, template)

            details = {
                'similarity': similarity,
                'stroke_count': preprocessed.stroke_count,
                'total_points': preprocessed.total_points,
                'expected_strokes': template.stroke_count,
                'features': preprocessed.features.to_dict(),
            }
            if policy.child_friendly:
                details['child_friendly_score'] = confidence
                details['encouragement_level'] = encouragement_level(confidence).value
                details['normalized_for_child'] = True

            result = RecognitionResult(
                character=target_character,
                confidence=confidence,
                recognized=policy.is_recognized(confidence),
                details=details,
            )
            _logger.debug("Recognition (%s) for %r: confidence=%.3f recognized=%s",
                          policy.mode.value, target_character, confidence, result.recognized)
            return result

        except Exception as e:
            return self._handle_recognition_error(e, target_character, policy)

    async def recognize_character(self, drawing, target_character: str = DEFAULT_TARGET_CHARACTER
                                  ) -> RecognitionResult:
        """Strict recognition."""
        return await self.recognize(drawing, target_character, RecognitionMode.STRICT)

    async def recognize_character_for_child(self, drawing,
                                            target_character: str = DEFAULT_TARGET_CHARACTER
                                            ) -> RecognitionResult:
        """Lenient, child-friendly recognition."""
        return await self.recognize(drawing, target_character, RecognitionMode.LENIENT)

    def _empty_result(self, policy: ScoringPolicy, message: str) -> RecognitionResult:
        details: Dict[str, Any] = {'message': message}
        if policy.child_friendly:
            details['encouragement_level'] = EncouragementLevel.POOR.value
            details['child_friendly_score'] = 0.0
        return RecognitionResult(character=None, confidence=0.0, recognized=False,
                                 details=details)

    def _handle_recognition_error(self, error: Exception, target_character: str,
                                  policy: ScoringPolicy) -> RecognitionResult:
        """Convert an unexpected failure into the mode's fallback result."""
        _logger.error("Recognition error (%s) for %r: %s", policy.mode.value,
                      target_character, error, exc_info=True)

        confidence = policy.fallback_confidence
        details: Dict[str, Any] = {
            'error': str(error),
            'fallback': True,
            'similarity': confidence,
            'stroke_count': 0,
            'expected_strokes': 'unknown',
        }
        event = {
            'type': 'recognition',
            'message': str(error),
            'service': type(self).__name__,
            'target_character': target_character,
        }
        if policy.child_friendly:
            details.update({
                'child_friendly_score': confidence,
                'encouragement_level': EncouragementLevel.FAIR.value,
                'normalized_for_child': True,
                'message': 'Something went wrong, but you tried your best!',
            })
            event['type'] = 'child-recognition'
            event['handled_gracefully'] = True

        self._notify_error(event)
        return RecognitionResult(character=target_character, confidence=confidence,
                                 recognized=True, details=details)

    def _notify_error(self, event: Dict[str, Any]) -> None:
        if self.on_error is None:
            return
        try:
            self.on_error(event)
        except Exception as e:
            _logger.warning("Error callback failed: %s", e)

    def safe_preprocess(self, drawing: Optional[Drawing]) -> PreprocessedDrawing:
        """Preprocess a drawing, returning a minimal record instead of failing.

        Args:
            drawing: Captured drawing, possibly malformed or empty.

        Returns:
            The normalizer's PreprocessedDrawing, or a neutral one (no
            features, complexity 0.5, a 100x100 box) when preprocessing is
            impossible.
        """
        try:
            preprocessed = self.normalizer.normalize(drawing)
            if preprocessed is not None:
                return preprocessed
        except Exception as e:
            _logger.warning("Preprocessing failed, using minimal data: %s", e)

        strokes = list(getattr(drawing, 'strokes', None) or [])
        return PreprocessedDrawing(
            normalized_strokes=strokes,
            bounding_box=getattr(drawing, 'bounding_box', None) or BBox(0, 0, 100, 100),
            stroke_count=len(strokes),
            total_points=0,
            features=ShapeFeatures(),
            complexity=0.5,
        )

    def fallback_recognition(self, drawing: Optional[Drawing],
                             target_character: str) -> RecognitionResult:
        """Template-free recognition from basic drawing-quality heuristics.

        Starts at 0.3 and adds 0.2 for 1-5 strokes, 0.1 for complexity in
        (0.1, 0.9) and 0.1 for 10-500 points, capped at 0.6.
        """
        preprocessed = self.safe_preprocess(drawing)

        confidence = HEURISTIC_BASE_CONFIDENCE
        if 1 <= preprocessed.stroke_count <= 5:
            confidence += 0.2
        if 0.1 < preprocessed.complexity < 0.9:
            confidence += 0.1
        if 10 < preprocessed.total_points < 500:
            confidence += 0.1
        confidence = min(HEURISTIC_MAX_CONFIDENCE, confidence)

        return RecognitionResult(
            character=target_character,
            confidence=confidence,
            recognized=confidence > HEURISTIC_BASE_CONFIDENCE,
            details={
                'fallback': True,
                'stroke_count': preprocessed.stroke_count,
                'expected_strokes': 'unknown',
                'similarity': confidence,
                'features': preprocessed.features.to_dict(),
                'message': 'Heuristic recognition without template',
            },
        )

    def validate_recognition_data(self, drawing: Optional[Drawing],
                                  target_character: Optional[str]) -> ValidationReport:
        """Collect problems that would make recognition meaningless."""
        issues = []

        if drawing is None:
            issues.append('No drawing data provided')
        else:
            if not drawing.strokes:
                issues.append('Drawing has no strokes')
            elif len(drawing.strokes) > MAX_REASONABLE_STROKES:
                issues.append('Drawing has too many strokes')

        if not target_character:
            issues.append('No target character specified')
        elif not self.template_store.is_supported(target_character):
            issues.append(f'No template for character: {target_character}')

        return ValidationReport(valid=not issues, issues=issues)

    def settings(self) -> dict:
        return RecognitionSettings().to_dict()

    def cleanup_template_cache(self, max_cache_size: int = DEFAULT_MAX_CACHE_SIZE) -> int:
        return self.template_store.cleanup(max_cache_size)

    def clear_cache(self) -> None:
        self.template_store.clear()

    def memory_usage(self) -> dict:
        return self.template_store.memory_usage()
