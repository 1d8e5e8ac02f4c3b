"""Shared configuration for the recognition engine.

This module centralizes the thresholds and weights used by:
    - analysis.normalizer (tolerance model)
    - analysis.features (shape descriptors)
    - templates.repository (cache policy)
    - scoring.similarity / scoring.confidence (strict and lenient policies)
    - api.services (recognition thresholds and fallbacks)

Having these values in one place keeps the strict and lenient policies
consistent and makes it easy to retune the engine. Components take these
values as constructor defaults, so callers can still override them.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field

# --- Normalizer ---
TREMOR_MIN_POINTS = 3            # Strokes shorter than this are not smoothed
TREMOR_DISTANCE = 2.0            # Smoothed point this close to prev is pulled back
GAP_DISTANCE = 20.0              # Pairs further apart than this get filled
GAP_STEP = 10.0                  # Spacing of interpolated points
POSITION_TOLERANCE = 0.5         # +-50% of bbox width/height around center
STANDARD_SIZE = 100.0            # Reference character size in capture units
SIZE_TOLERANCE = 0.4             # Accept sizes within +-40% of STANDARD_SIZE

# --- Feature extraction (unit-box space) ---
LINE_MIN_DELTA = 0.1             # Movement along the line axis
LINE_MAX_DRIFT = 0.05            # Movement across the line axis
CURVE_TURN_ANGLE = math.pi / 4   # Turn that marks a curve
DIRECTION_CHANGE_ANGLE = math.pi / 6
COMPLEXITY_MAX_LENGTH = 4.0
COMPLEXITY_MAX_CHANGES = 10
REFERENCE_SPEED = 0.01           # Unit-box distance per millisecond
DEFAULT_SPEED = 0.5              # Reported when no timing data is available

# --- Template cache ---
BASIC_CHARACTERS = ('あ', 'い', 'う', 'え', 'お')
DEFAULT_MAX_CACHE_SIZE = 20
DEFAULT_TARGET_CHARACTER = 'あ'

# --- Strict policy ---
STRICT_WEIGHTS = {'stroke': 0.3, 'feature': 0.5, 'complexity': 0.2}
STRICT_COMPLEXITY_DEFAULT = 0.5
STRICT_MIN_POINTS = 10
STRICT_MAX_POINTS = 1000
STRICT_MIN_AREA = 100
STRICT_MAX_AREA = 50000
STRICT_RECOGNITION_THRESHOLD = 0.3   # confidence must exceed this
STRICT_FALLBACK_CONFIDENCE = 0.3

# --- Lenient (child-friendly) policy ---
LENIENT_WEIGHTS = {'stroke': 0.2, 'feature': 0.4, 'complexity': 0.15, 'effort': 0.25}
LENIENT_COMPLEXITY_DEFAULT = 0.6
LENIENT_FEATURE_BASE = 0.2
LENIENT_ATTEMPT_FLOOR = 0.25         # Any stroke earns at least this
LENIENT_FINAL_FLOOR = 0.2            # Applied when strokes > 0 and points > 5
LENIENT_FINAL_FLOOR_MIN_POINTS = 5
REASONABLE_MIN_AREA = 500
REASONABLE_MAX_AREA = 100000
LENIENT_RECOGNITION_THRESHOLD = 0.2  # confidence must reach this
LENIENT_FALLBACK_CONFIDENCE = 0.25

# --- Encouragement levels ---
EXCELLENT_THRESHOLD = 0.5
FAIR_THRESHOLD = 0.2

# --- Validation ---
MAX_REASONABLE_STROKES = 20

# --- Template-less heuristic recognition ---
HEURISTIC_BASE_CONFIDENCE = 0.3
HEURISTIC_MAX_CONFIDENCE = 0.6

# --- Angle tolerance ---
ANGLE_TOLERANCE = math.pi / 6


@dataclass(frozen=True)
class RecognitionSettings:
    """Snapshot of the engine's tolerance model and thresholds.

    Attributes:
        lenient_mode: Whether child-friendly scoring is the default policy.
        confidence_thresholds: Lower bounds of each encouragement level.
        tolerances: Position and size tolerances as fractions, angle in
            degrees.
        child_friendly_features: Which tolerance stages are active.
    """
    lenient_mode: bool = True
    confidence_thresholds: dict = field(default_factory=lambda: {
        'excellent': EXCELLENT_THRESHOLD,
        'fair': FAIR_THRESHOLD,
        'poor': 0.0,
    })
    tolerances: dict = field(default_factory=lambda: {
        'position': POSITION_TOLERANCE,
        'angle': round(math.degrees(ANGLE_TOLERANCE)),
        'size': SIZE_TOLERANCE,
    })
    child_friendly_features: dict = field(default_factory=lambda: {
        'tremor_smoothing': True,
        'line_completion': True,
        'effort_evaluation': True,
        'encouraging_feedback': True,
    })

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for JSON serialization."""
        return asdict(self)
