"""Stroke preprocessing under the child-friendly tolerance model.

This module turns a captured Drawing into a PreprocessedDrawing. The
pipeline works on numpy copies of every stroke, so the caller's data is
never mutated:

    1. smooth_tremor: 3-point moving average, pulling near-stationary
       points back toward their predecessor.
    2. complete_gaps: linear interpolation across large jumps between
       consecutive samples.
    3. clamp_position: clamp deviations from the box center to +-50% of
       the box size.
    4. normalize_size: rescale drawings outside +-40% of the standard size.
    5. to_unit_box: map the working points into [0, 1] x [0, 1].

Stroke and point counts reported on the result always describe the
captured input, not the working copy.

Example usage:
    Preprocessing a drawing::

        from stroke_recognition.analysis import StrokeNormalizer
        from stroke_recognition.domain import Drawing

        normalizer = StrokeNormalizer()
        pre = normalizer.normalize(Drawing.from_strokes([[(0, 0), (80, 0)]]))
        print(pre.features, pre.complexity)
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from ..config import (
    GAP_DISTANCE,
    GAP_STEP,
    POSITION_TOLERANCE,
    SIZE_TOLERANCE,
    STANDARD_SIZE,
    TREMOR_DISTANCE,
    TREMOR_MIN_POINTS,
)
from ..domain.geometry import BBox, Drawing, Point, Stroke
from ..domain.recognition import PreprocessedDrawing
from .features import FeatureExtractor

_logger = logging.getLogger(__name__)

# Working representation of a stroke: (N, 2) float coordinates and (N,)
# float timestamps with NaN marking a missing timestamp.
StrokeArrays = Tuple[np.ndarray, np.ndarray]


def stroke_to_arrays(stroke: Stroke) -> StrokeArrays:
    """Copy a stroke into coordinate and timestamp arrays."""
    xy = np.array([(p.x, p.y) for p in stroke.points], dtype=float).reshape(-1, 2)
    ts = np.array(
        [np.nan if p.timestamp is None else p.timestamp for p in stroke.points],
        dtype=float,
    )
    return xy, ts


def arrays_to_stroke(xy: np.ndarray, ts: np.ndarray) -> Stroke:
    """Build a Stroke from working arrays."""
    return Stroke([
        Point(float(x), float(y), None if np.isnan(t) else float(t))
        for (x, y), t in zip(xy, ts)
    ])


def smooth_tremor(strokes: List[StrokeArrays],
                  min_points: int = TREMOR_MIN_POINTS,
                  tremor_distance: float = TREMOR_DISTANCE) -> List[StrokeArrays]:
    """Suppress small involuntary movements.

    Every interior point is replaced by the mean of itself and its two
    original neighbours. When that mean lies within tremor_distance of the
    original previous point it is pulled halfway toward it. Endpoints and
    timestamps are kept.

    Args:
        strokes: Working stroke arrays.
        min_points: Strokes with fewer points are returned unchanged.
        tremor_distance: Distance below which a point counts as jitter.

    Returns:
        New list of stroke arrays.
    """
    result = []
    for xy, ts in strokes:
        if len(xy) < min_points:
            result.append((xy.copy(), ts.copy()))
            continue

        prev = xy[:-2]
        smoothed = (prev + xy[1:-1] + xy[2:]) / 3.0
        dist_to_prev = np.linalg.norm(smoothed - prev, axis=1)
        jitter = dist_to_prev < tremor_distance
        smoothed[jitter] = (prev[jitter] + smoothed[jitter]) / 2.0

        out = np.concatenate([xy[:1], smoothed, xy[-1:]], axis=0)
        result.append((out, ts.copy()))
    return result


def complete_gaps(strokes: List[StrokeArrays],
                  gap_distance: float = GAP_DISTANCE,
                  step: float = GAP_STEP) -> List[StrokeArrays]:
    """Fill large jumps between consecutive points.

    For every pair further apart than gap_distance, ceil(d / step) - 1
    evenly spaced points are inserted between them. Timestamps are
    interpolated when both endpoints carry one.
    """
    result = []
    for xy, ts in strokes:
        if len(xy) < 2:
            result.append((xy.copy(), ts.copy()))
            continue

        xy_parts = [xy[:1]]
        ts_parts = [ts[:1]]
        for i in range(1, len(xy)):
            p0, p1 = xy[i - 1], xy[i]
            distance = float(np.linalg.norm(p1 - p0))
            if distance > gap_distance:
                steps = math.ceil(distance / step)
                frac = np.arange(1, steps) / steps
                xy_parts.append(p0 + np.outer(frac, p1 - p0))
                # NaN propagates, so a missing endpoint timestamp yields NaN
                ts_parts.append(ts[i - 1] + frac * (ts[i] - ts[i - 1]))
            xy_parts.append(xy[i:i + 1])
            ts_parts.append(ts[i:i + 1])

        result.append((np.concatenate(xy_parts, axis=0), np.concatenate(ts_parts)))
    return result


def clamp_position(strokes: List[StrokeArrays], bbox: Optional[BBox],
                   tolerance: float = POSITION_TOLERANCE) -> List[StrokeArrays]:
    """Clamp each point's deviation from the box center to +-tolerance of the box size."""
    if bbox is None:
        return [(xy.copy(), ts.copy()) for xy, ts in strokes]

    center = np.array([bbox.center.x, bbox.center.y])
    limit = np.array([bbox.width * tolerance, bbox.height * tolerance])
    return [
        (center + np.clip(xy - center, -limit, limit), ts.copy())
        for xy, ts in strokes
    ]


def size_scale_factor(bbox: Optional[BBox],
                      standard_size: float = STANDARD_SIZE,
                      tolerance: float = SIZE_TOLERANCE) -> float:
    """Factor that brings max(width, height) into the accepted size band.

    Returns 1.0 when the box is missing, degenerate, or already within
    [standard * (1 - tolerance), standard * (1 + tolerance)].
    """
    if bbox is None or bbox.is_degenerate:
        return 1.0

    current = max(bbox.width, bbox.height)
    min_size = standard_size * (1 - tolerance)
    max_size = standard_size * (1 + tolerance)
    if current < min_size:
        return min_size / current
    if current > max_size:
        return max_size / current
    return 1.0


def normalize_size(strokes: List[StrokeArrays], bbox: Optional[BBox],
                   standard_size: float = STANDARD_SIZE,
                   tolerance: float = SIZE_TOLERANCE) -> List[StrokeArrays]:
    """Rescale about the box center when the drawing is too small or too large."""
    factor = size_scale_factor(bbox, standard_size, tolerance)
    if factor == 1.0:
        return [(xy.copy(), ts.copy()) for xy, ts in strokes]

    center = np.array([bbox.center.x, bbox.center.y])
    return [(center + (xy - center) * factor, ts.copy()) for xy, ts in strokes]


def to_unit_box(strokes: List[StrokeArrays]) -> List[StrokeArrays]:
    """Map working points into [0, 1] x [0, 1] using their own bounding box.

    Strokes pass through unchanged when the box has zero width or height.
    """
    non_empty = [xy for xy, _ in strokes if len(xy)]
    if not non_empty:
        return [(xy.copy(), ts.copy()) for xy, ts in strokes]

    all_xy = np.concatenate(non_empty, axis=0)
    origin = all_xy.min(axis=0)
    size = all_xy.max(axis=0) - origin
    if size[0] == 0 or size[1] == 0:
        return [(xy.copy(), ts.copy()) for xy, ts in strokes]

    return [((xy - origin) / size, ts.copy()) for xy, ts in strokes]


class StrokeNormalizer:
    """Preprocess drawings for feature extraction and scoring.

    Attributes:
        extractor: FeatureExtractor applied to the normalized strokes.
        gap_distance: Jump length that triggers gap completion.
        position_tolerance: Allowed deviation from center, as a fraction.
        size_tolerance: Allowed deviation from STANDARD_SIZE, as a fraction.

    Example:
        >>> normalizer = StrokeNormalizer()
        >>> pre = normalizer.normalize(drawing)
        >>> pre.stroke_count == drawing.stroke_count
        True
    """

    def __init__(self, extractor: FeatureExtractor | None = None,
                 gap_distance: float = GAP_DISTANCE,
                 position_tolerance: float = POSITION_TOLERANCE,
                 size_tolerance: float = SIZE_TOLERANCE):
        self.extractor = extractor or FeatureExtractor()
        self.gap_distance = gap_distance
        self.position_tolerance = position_tolerance
        self.size_tolerance = size_tolerance

    def normalize_strokes(self, strokes: List[Stroke], bbox: Optional[BBox]) -> List[Stroke]:
        """Run all five stages and return normalized strokes."""
        working = [stroke_to_arrays(s) for s in strokes]
        working = smooth_tremor(working)
        working = complete_gaps(working, gap_distance=self.gap_distance)
        working = clamp_position(working, bbox, tolerance=self.position_tolerance)
        working = normalize_size(working, bbox, tolerance=self.size_tolerance)
        working = to_unit_box(working)
        return [arrays_to_stroke(xy, ts) for xy, ts in working]

    def normalize(self, drawing: Optional[Drawing]) -> Optional[PreprocessedDrawing]:
        """Preprocess a drawing.

        Args:
            drawing: Captured drawing. A missing bounding box is computed
                from the points.

        Returns:
            PreprocessedDrawing, or None when the drawing is None or has
            no strokes.
        """
        if drawing is None or not drawing.strokes:
            return None

        stroke_count = len(drawing.strokes)
        total_points = sum(len(s) for s in drawing.strokes)
        bbox = drawing.bounding_box or drawing.calculate_bounding_box()

        normalized = self.normalize_strokes(drawing.strokes, bbox)
        features = self.extractor.extract_features(normalized)
        complexity = self.extractor.calculate_complexity(normalized)

        _logger.debug("Normalized drawing: strokes=%d points=%d -> %d working points",
                      stroke_count, total_points, sum(len(s) for s in normalized))

        return PreprocessedDrawing(
            normalized_strokes=normalized,
            bounding_box=bbox,
            stroke_count=stroke_count,
            total_points=total_points,
            features=features,
            complexity=complexity,
        )
