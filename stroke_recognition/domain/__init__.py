"""Domain objects for stroke recognition.

This module provides the core value objects and records used throughout
the recognition package.

Geometry classes:
    Point: Immutable 2D point with optional timestamp.
    BBox: Immutable bounding box (origin plus size).
    Stroke: Sequence of points from one continuous gesture.
    Drawing: Strokes of one recognition attempt plus bounding box.

Recognition classes:
    RecognitionMode: Strict or lenient scoring policy.
    EncouragementLevel: Confidence band for feedback.
    ShapeFeatures: Boolean shape descriptors.
    CharacterTemplate: Reference description of a character.
    PreprocessedDrawing: Normalized strokes plus features.
    RecognitionResult: Final confidence-scored judgment.
    ValidationReport: Pre-recognition input issues.

Example usage:
    Building a drawing::

        from stroke_recognition.domain import Drawing

        drawing = Drawing.from_strokes([
            [(10, 10), (50, 10)],
            [(30, 5), (30, 60)],
        ])
        print(drawing.bounding_box)
"""

from .geometry import BBox, Drawing, Point, Stroke
from .recognition import (
    CharacterTemplate,
    EncouragementLevel,
    PreprocessedDrawing,
    RecognitionMode,
    RecognitionResult,
    ShapeFeatures,
    ValidationReport,
)

__all__ = [
    'Point', 'BBox', 'Stroke', 'Drawing',
    'RecognitionMode', 'EncouragementLevel', 'ShapeFeatures',
    'CharacterTemplate', 'PreprocessedDrawing', 'RecognitionResult',
    'ValidationReport',
]
