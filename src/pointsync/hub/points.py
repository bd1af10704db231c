"""PointStore — the authoritative, deduplicated point set.

Learn: Two points are the same entity when their coordinates quantize to
the same canonical key. Quantization is an integer grid: the exact value
of each coordinate times 10**precision, rounded half-to-even. Using
Fraction keeps the arithmetic exact, so it collides exactly where
"%.6f" formatting would, without overflowing on huge coordinates and
without telling -0.0 apart from 0.0.
"""

import threading
from fractions import Fraction
from typing import Optional

from pointsync.schemas.points import Point

DEFAULT_PRECISION = 6

PointKey = tuple[int, int, int]


def canonical_key(point: Point, precision: int = DEFAULT_PRECISION) -> PointKey:
    """Quantize a point's coordinates to an integer grid key."""
    scale = 10**precision
    return (
        round(Fraction(point.x) * scale),
        round(Fraction(point.y) * scale),
        round(Fraction(point.z) * scale),
    )


class PointStore:
    """Mapping canonical key → Point with atomic check-then-mutate."""

    def __init__(
        self,
        lock: Optional[threading.Lock] = None,
        precision: int = DEFAULT_PRECISION,
    ):
        self._lock = lock or threading.Lock()
        self._precision = precision
        self._points: dict[PointKey, Point] = {}

    @property
    def precision(self) -> int:
        return self._precision

    def key(self, point: Point) -> PointKey:
        return canonical_key(point, self._precision)

    def add(self, point: Point) -> bool:
        """Insert the point. Returns False if its key is already present."""
        key = self.key(point)
        with self._lock:
            if key in self._points:
                return False
            self._points[key] = point
            return True

    def remove(self, point: Point) -> bool:
        """Delete the point's key. Returns False if it was absent."""
        key = self.key(point)
        with self._lock:
            if key not in self._points:
                return False
            del self._points[key]
            return True

    def snapshot(self) -> list[Point]:
        """Copy of the current contents, in no particular order."""
        with self._lock:
            return list(self._points.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)

    def __contains__(self, point: Point) -> bool:
        key = self.key(point)
        with self._lock:
            return key in self._points
