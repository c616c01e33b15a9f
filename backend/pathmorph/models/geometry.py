"""Curve model shared by the parser, the aligner and the curve interpolator.

Everything here is immutable so parsed and aligned documents can be cached and
shared between interpolators.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

Point = tuple[float, float]


@dataclass(frozen=True)
class CubicSegment:
    """One cubic Bezier from ``p0`` to ``p3`` with control points ``p1``, ``p2``."""

    p0: Point
    p1: Point
    p2: Point
    p3: Point

    @property
    def points(self) -> tuple[Point, Point, Point, Point]:
        return (self.p0, self.p1, self.p2, self.p3)

    @property
    def is_degenerate(self) -> bool:
        return self.p0 == self.p1 == self.p2 == self.p3

    def as_array(self) -> NDArray[np.float64]:
        """4x2 array of the control points."""
        return np.array(self.points, dtype=np.float64)


# One M...Z contour. Non-empty when produced by the parser.
Subpath = tuple[CubicSegment, ...]

# Ordered contours of one path string. Order drives pairing by index.
PathDocument = tuple[Subpath, ...]


def degenerate_subpath(x: float, y: float) -> Subpath:
    """A single zero-length segment standing in for a contour with no counterpart."""
    p = (x, y)
    return (CubicSegment(p, p, p, p),)


def subpath_is_closed(subpath: Subpath, tolerance: float) -> bool:
    """First start point and last end point agree within ``tolerance`` on both axes."""
    if not subpath:
        return False
    first = subpath[0].p0
    last = subpath[-1].p3
    return abs(first[0] - last[0]) < tolerance and abs(first[1] - last[1]) < tolerance


def subpath_to_array(subpath: Subpath) -> NDArray[np.float64]:
    """Nx4x2 array of a subpath's control points."""
    if not subpath:
        return np.empty((0, 4, 2), dtype=np.float64)
    return np.array([seg.points for seg in subpath], dtype=np.float64)


def count_segments(document: PathDocument) -> list[int]:
    return [len(sp) for sp in document]
