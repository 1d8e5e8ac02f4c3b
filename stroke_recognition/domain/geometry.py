"""Geometric value objects for captured drawings."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Point:
    """Immutable 2D point with an optional capture time in milliseconds."""
    x: float
    y: float
    timestamp: Optional[float] = None

    def distance_to(self, other: Point) -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        d = {'x': float(self.x), 'y': float(self.y)}
        if self.timestamp is not None:
            d['timestamp'] = self.timestamp
        return d

    @classmethod
    def from_dict(cls, d: dict) -> Point:
        """Create from a capture dictionary with 'x', 'y' and optional 'timestamp'."""
        return cls(d['x'], d['y'], d.get('timestamp'))


@dataclass(frozen=True)
class BBox:
    """Immutable axis-aligned bounding box stored as origin plus size."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_degenerate(self) -> bool:
        """True when the box has no width or no height."""
        return self.width == 0 or self.height == 0

    def to_dict(self) -> dict:
        center = self.center
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'centerX': center.x,
            'centerY': center.y,
        }

    @classmethod
    def from_dict(cls, d: dict) -> BBox:
        return cls(d['x'], d['y'], d['width'], d['height'])

    @classmethod
    def from_points(cls, points: List[Point]) -> Optional[BBox]:
        """Create bounding box containing all points, or None for no points."""
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        x_min, y_min = min(xs), min(ys)
        return cls(x_min, y_min, max(xs) - x_min, max(ys) - y_min)


@dataclass
class Stroke:
    """One continuous pointer-down to pointer-up sequence of points."""
    points: List[Point] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def __getitem__(self, idx) -> Point:
        return self.points[idx]

    @property
    def bbox(self) -> Optional[BBox]:
        return BBox.from_points(self.points)

    def length(self) -> float:
        """Total arc length of stroke."""
        total = 0.0
        for i in range(1, len(self.points)):
            total += self.points[i].distance_to(self.points[i - 1])
        return total

    def to_list(self) -> List[dict]:
        return [p.to_dict() for p in self.points]

    @classmethod
    def from_list(cls, lst: List[dict]) -> Stroke:
        return cls([Point.from_dict(p) for p in lst])

    @classmethod
    def from_tuples(cls, tuples) -> Stroke:
        """Create from (x, y) or (x, y, timestamp) tuples."""
        return cls([Point(*t) for t in tuples])


def _now_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class Drawing:
    """All strokes captured for one recognition attempt.

    The bounding box covers every point of every stroke. A drawing without
    strokes has no bounding box and cannot be recognized.

    Attributes:
        strokes: Strokes in drawing order.
        bounding_box: Box covering all points, None when there are no strokes.
        timestamp: Capture time in milliseconds since the epoch.

    Example:
        >>> drawing = Drawing.from_strokes([[(10, 10), (50, 10)]])
        >>> drawing.bounding_box.width
        40
    """
    strokes: List[Stroke] = field(default_factory=list)
    bounding_box: Optional[BBox] = None
    timestamp: int = field(default_factory=_now_millis)

    @property
    def stroke_count(self) -> int:
        return len(self.strokes)

    @property
    def total_points(self) -> int:
        return sum(len(s) for s in self.strokes)

    def is_empty(self) -> bool:
        return len(self.strokes) == 0

    def all_points(self) -> List[Point]:
        return [p for stroke in self.strokes for p in stroke]

    def add_stroke(self, stroke: Stroke) -> None:
        """Append a stroke and refresh the bounding box.

        Empty strokes are not strokes; they are ignored with a warning.
        """
        if not stroke or len(stroke) == 0:
            _logger.warning("Ignoring empty stroke")
            return
        self.strokes.append(stroke)
        self.bounding_box = self.calculate_bounding_box()
        _logger.debug("Stroke added: %d points", len(stroke))

    def calculate_bounding_box(self) -> Optional[BBox]:
        return BBox.from_points(self.all_points())

    def clear(self) -> None:
        self.strokes = []
        self.bounding_box = None

    def complexity(self) -> float:
        """Rough capture complexity from stroke count, point count and area."""
        if self.is_empty():
            return 0.0
        area = self.bounding_box.area if self.bounding_box else 0.0
        stroke_complexity = min(self.stroke_count / 10, 1.0)
        point_complexity = min(self.total_points / 100, 1.0)
        area_complexity = min(area / 10000, 1.0)
        return (stroke_complexity + point_complexity + area_complexity) / 3

    def summary(self) -> dict:
        return {
            'stroke_count': self.stroke_count,
            'point_count': self.total_points,
            'complexity': self.complexity(),
            'bounding_box': self.bounding_box.to_dict() if self.bounding_box else None,
            'timestamp': self.timestamp,
            'is_empty': self.is_empty(),
        }

    def to_dict(self) -> dict:
        """Convert to the capture collaborator's dictionary shape."""
        return {
            'strokes': [s.to_list() for s in self.strokes],
            'boundingBox': self.bounding_box.to_dict() if self.bounding_box else None,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Drawing:
        """Create from the capture collaborator's dictionary shape.

        Empty strokes are dropped. A missing bounding box is computed from
        the points.
        """
        drawing = cls(timestamp=data.get('timestamp') or _now_millis())
        for raw in data.get('strokes') or []:
            if not raw:
                _logger.warning("Ignoring empty stroke in drawing data")
                continue
            drawing.strokes.append(Stroke.from_list(raw))
        box = data.get('boundingBox')
        if box is not None and drawing.strokes:
            drawing.bounding_box = BBox.from_dict(box)
        else:
            drawing.bounding_box = drawing.calculate_bounding_box()
        return drawing

    @classmethod
    def from_strokes(cls, strokes, timestamp: Optional[int] = None) -> Drawing:
        """Create from Stroke objects or sequences of point tuples."""
        built = [s if isinstance(s, Stroke) else Stroke.from_tuples(s) for s in strokes]
        built = [s for s in built if len(s) > 0]
        drawing = cls(strokes=built)
        if timestamp is not None:
            drawing.timestamp = timestamp
        drawing.bounding_box = drawing.calculate_bounding_box()
        return drawing
