"""Point sampling of path strings for the polygon-based strategies.

Paths go through the cubic parser and are measured and sampled with
svgpathtools: samples are spread evenly by arc length. Jumps between subpaths
do not count towards the length.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray
from svgpathtools import CubicBezier, Path

from pathmorph.engine.align import ROTATION_TOLERANCE
from pathmorph.models.geometry import subpath_to_array
from pathmorph.svg.path_parser import PathParseError, parse_path_data

logger = logging.getLogger(__name__)

# Arc-length inversion tolerance, in path units
ILENGTH_TOLERANCE = 1e-7

Segments = NDArray[np.float64]  # Nx4x2 control points


def load_path(path_data: str) -> Segments | None:
    """Control points of every segment; None when the data is malformed or draws nothing."""
    try:
        document = parse_path_data(path_data)
    except PathParseError as e:
        logger.warning("Failed to sample path %.60r: %s", path_data, e)
        return None
    if not document:
        return None
    return np.concatenate([subpath_to_array(sp) for sp in document])


def to_svg_path(segments: Segments) -> Path:
    return Path(*(CubicBezier(*(complex(x, y) for x, y in seg)) for seg in segments))


def sample_count(segments: Segments, precision: float, minimum: int = 3) -> int:
    """Points needed to sample the path every ``precision`` length units."""
    total = to_svg_path(segments).length()
    if precision <= 0 or not math.isfinite(total):
        return minimum
    # Tolerate float noise in the integrated length
    return max(minimum, math.ceil(total / precision - 1e-9))


def sample_path(segments: Segments, count: int) -> NDArray[np.float64]:
    """``count`` points along the path; the end point is left out since rings close implicitly."""
    path = to_svg_path(segments)
    total = path.length()
    if total <= 1e-12:
        return np.tile(segments[0, 0], (count, 1)).astype(np.float64)

    points = np.empty((count, 2), dtype=np.float64)
    for k, s in enumerate(np.linspace(0.0, total, count, endpoint=False)):
        pt = path.point(path.ilength(min(float(s), total), s_tol=ILENGTH_TOLERANCE))
        points[k] = (pt.real, pt.imag)
    return points


def best_rotation(a: NDArray[np.float64], b: NDArray[np.float64]) -> int:
    """Shift of ``b`` (for ``np.roll(b, -shift)``) with the smallest squared distance to ``a``.

    Ties keep the smaller shift.
    """
    best_shift = 0
    best_distance = float(np.sum((a - b) ** 2))
    for shift in range(1, len(b)):
        d = float(np.sum((a - np.roll(b, -shift, axis=0)) ** 2))
        if d < best_distance - ROTATION_TOLERANCE * max(1.0, best_distance):
            best_distance = d
            best_shift = shift
    return best_shift


def add_points(ring: NDArray[np.float64], target: int) -> NDArray[np.float64]:
    """Insert midpoints into the longest edges (closing edge included) until ``target`` points."""
    points = [tuple(p) for p in ring]
    while len(points) < target:
        arr = np.array(points)
        edges = np.roll(arr, -1, axis=0) - arr
        i = int(np.argmax(np.sum(edges * edges, axis=1)))
        nxt = points[(i + 1) % len(points)]
        points.insert(i + 1, ((points[i][0] + nxt[0]) / 2, (points[i][1] + nxt[1]) / 2))
    return np.array(points, dtype=np.float64)
