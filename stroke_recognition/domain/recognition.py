"""Recognition-related domain objects.

This module provides the records that flow through the recognition
pipeline: reference templates, the derived preprocessing result, and the
final recognition result handed to the scoring/feedback component.

The module provides the following classes:
    RecognitionMode: Strict or lenient (child-friendly) scoring policy.
    EncouragementLevel: Coarse confidence band used by feedback logic.
    ShapeFeatures: Boolean shape descriptors of a drawing or template.
    CharacterTemplate: Reference description of one supported character.
    PreprocessedDrawing: Normalized strokes plus extracted features.
    RecognitionResult: Confidence-scored judgment for one drawing.
    ValidationReport: Issues found before running recognition.

Example usage:
    Building a template::

        from stroke_recognition.domain import CharacterTemplate, ShapeFeatures

        template = CharacterTemplate(3, ShapeFeatures(True, True, True), 0.7)
        print(template.to_dict())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .geometry import BBox, Stroke


class RecognitionMode(Enum):
    """Scoring policies.

    STRICT: Baseline matching; recognized when confidence exceeds 0.3.
    LENIENT: Child-friendly matching that floors and boosts confidence;
        recognized when confidence reaches 0.2.
    """
    STRICT = 'strict'
    LENIENT = 'lenient'


class EncouragementLevel(Enum):
    EXCELLENT = 'excellent'
    FAIR = 'fair'
    POOR = 'poor'


@dataclass(frozen=True)
class ShapeFeatures:
    """Boolean shape descriptors."""
    has_horizontal_line: bool = False
    has_vertical_line: bool = False
    has_curve: bool = False

    FIELDS = ('has_horizontal_line', 'has_vertical_line', 'has_curve')

    def as_tuple(self) -> tuple:
        return (self.has_horizontal_line, self.has_vertical_line, self.has_curve)

    def matches(self, other: ShapeFeatures) -> int:
        """Number of flags equal in both feature sets."""
        return sum(1 for a, b in zip(self.as_tuple(), other.as_tuple()) if a == b)

    def to_dict(self) -> dict:
        return {
            'has_horizontal_line': self.has_horizontal_line,
            'has_vertical_line': self.has_vertical_line,
            'has_curve': self.has_curve,
        }


@dataclass(frozen=True)
class CharacterTemplate:
    """Reference shape description for one character.

    Attributes:
        stroke_count: Expected number of strokes, never negative.
        features: Expected shape flags.
        complexity: Expected complexity, nominally in [0, 1].
    """
    stroke_count: int
    features: ShapeFeatures
    complexity: float

    def __post_init__(self):
        if self.stroke_count < 0:
            raise ValueError(f"stroke_count must be >= 0, got {self.stroke_count}")

    @classmethod
    def fallback(cls) -> CharacterTemplate:
        """Generic template used for characters without a registered one."""
        return cls(2, ShapeFeatures(has_curve=True), 0.5)

    def to_dict(self) -> dict:
        features = self.features.to_dict()
        features['complexity'] = self.complexity
        return {'stroke_count': self.stroke_count, 'features': features}


@dataclass
class PreprocessedDrawing:
    """Derived view of a drawing, owned by the call that produced it.

    stroke_count and total_points describe the input as captured; the
    normalized strokes may hold more points because of gap completion.
    """
    normalized_strokes: List[Stroke]
    bounding_box: Optional[BBox]
    stroke_count: int
    total_points: int
    features: ShapeFeatures
    complexity: float


@dataclass
class RecognitionResult:
    """Confidence-scored judgment of one drawing against one character."""
    character: Optional[str]
    confidence: float
    recognized: bool
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'character': self.character,
            'confidence': self.confidence,
            'recognized': self.recognized,
            'details': dict(self.details),
        }


@dataclass
class ValidationReport:
    valid: bool
    issues: List[str] = field(default_factory=list)
