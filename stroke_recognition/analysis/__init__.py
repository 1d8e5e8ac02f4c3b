"""Drawing preprocessing and shape analysis.

This module provides the two analysis stages of the recognition pipeline:

Classes:
    StrokeNormalizer: Tremor smoothing, gap completion, position and size
        tolerance, and unit-box normalization.
    FeatureExtractor: Horizontal/vertical/curve flags, complexity,
        smoothness and drawing speed of normalized strokes.

Example usage:
    Preprocessing and inspecting a drawing::

        from stroke_recognition.analysis import StrokeNormalizer

        pre = StrokeNormalizer().normalize(drawing)
        if pre is not None:
            print(pre.features.has_curve, pre.complexity)
"""

from .features import FeatureExtractor
from .normalizer import StrokeNormalizer

__all__ = ['StrokeNormalizer', 'FeatureExtractor']
