"""Hiragana Stroke Recognition Package.

Judges how closely a hand-drawn character, captured as timed pen strokes,
matches a target hiragana character. Recognition compares a small set of
structural features of the drawing against a per-character reference
template and reports a confidence in [0, 1].

Architecture Overview:
    Two scoring policies share one pipeline: a strict policy that rewards
    accurate drawings, and a lenient policy that floors confidence and adds
    effort bonuses so young learners are encouraged rather than rejected.

    - stroke_recognition.domain provides typed data structures (Point,
      Stroke, Drawing, CharacterTemplate, RecognitionResult)
    - stroke_recognition.analysis normalizes strokes and extracts shape
      features
    - stroke_recognition.templates holds the 46 hiragana templates and a
      lazily populated, bounded cache
    - stroke_recognition.scoring combines sub-metrics into similarity and
      calibrates confidence
    - stroke_recognition.api offers the RecognitionService entry point

The package is organized into the following modules:
    domain: Value objects for drawings, templates and results.
    analysis: StrokeNormalizer (five-stage normalization) and
        FeatureExtractor (shape flags, complexity, smoothness, speed).
    templates: Template registry and the async TemplateStore.
    scoring: Strict and lenient similarity scorers and confidence
        calibrators, bundled as ScoringPolicy objects.
    utils: Geometry helpers for distances and angles.
    api: RecognitionService.
    config: Tunable constants and RecognitionSettings.
    logging_config: configure_logging() for host applications.

Example usage:
    Recognize a drawing::

        import asyncio
        from stroke_recognition import Drawing, RecognitionService

        service = RecognitionService()
        drawing = Drawing.from_strokes([
            [(10, 20), (50, 20), (90, 20)],
            [(50, 5), (50, 50), (50, 95)],
        ])
        result = asyncio.run(service.recognize_character(drawing, 'あ'))
        print(f"{result.confidence:.2f} recognized={result.recognized}")

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .analysis import FeatureExtractor, StrokeNormalizer
from .api import RecognitionService
from .domain import (
    BBox,
    CharacterTemplate,
    Drawing,
    EncouragementLevel,
    Point,
    PreprocessedDrawing,
    RecognitionMode,
    RecognitionResult,
    ShapeFeatures,
    Stroke,
    ValidationReport,
)
from .templates import HIRAGANA_TEMPLATES, TemplateStore

__all__ = [
    # Domain objects
    'Point', 'BBox', 'Stroke', 'Drawing',
    'RecognitionMode', 'EncouragementLevel', 'ShapeFeatures',
    'CharacterTemplate', 'PreprocessedDrawing', 'RecognitionResult',
    'ValidationReport',
    # Analysis
    'StrokeNormalizer', 'FeatureExtractor',
    # Templates
    'HIRAGANA_TEMPLATES', 'TemplateStore',
    # Services
    'RecognitionService',
]

__version__ = '2.0.0'
