"""Subpath/segment alignment.

Makes two parsed documents structurally comparable so their control points can
be interpolated one-to-one:

1. equal subpath counts (surplus contours collapse to a point at their centroid)
2. equal segment counts per subpath pair (exact De Casteljau subdivision)
3. optionally, the cyclic rotation of each closed "from" subpath that moves its
   control points the least
"""

from __future__ import annotations

import logging
import math

import numpy as np

from pathmorph.models.geometry import (
    PathDocument,
    Subpath,
    degenerate_subpath,
    subpath_is_closed,
    subpath_to_array,
)
from pathmorph.utils.bezier import subdivide_segment

logger = logging.getLogger(__name__)

# Relative margin a rotation must win by; smaller gaps are summation noise
ROTATION_TOLERANCE = 1e-9


def subpath_centroid(subpath: Subpath) -> tuple[float, float]:
    """Mean of every segment's start and end point."""
    if not subpath:
        return (0.0, 0.0)
    ends = np.array([(seg.p0, seg.p3) for seg in subpath], dtype=np.float64).reshape(-1, 2)
    return (float(np.mean(ends[:, 0])), float(np.mean(ends[:, 1])))


def align_subpath_counts(
    a: PathDocument, b: PathDocument
) -> tuple[PathDocument, PathDocument]:
    """Pair subpaths by index; each surplus subpath gets a degenerate twin at its centroid."""
    result_a: list[Subpath] = []
    result_b: list[Subpath] = []

    for i in range(max(len(a), len(b))):
        if i < len(a) and i < len(b):
            result_a.append(a[i])
            result_b.append(b[i])
        elif i < len(a):
            result_a.append(a[i])
            result_b.append(degenerate_subpath(*subpath_centroid(a[i])))
        else:
            result_a.append(degenerate_subpath(*subpath_centroid(b[i])))
            result_b.append(b[i])

    return tuple(result_a), tuple(result_b)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def subdivide_subpath(subpath: Subpath, target_count: int) -> Subpath:
    """Split segments until the subpath has ``target_count`` of them.

    Segment ``i`` of ``n`` is cut into
    ``round(target*(i+1)/n) - round(target*i/n)`` equal-parameter pieces, so the
    extra segments spread evenly along the contour.
    """
    n = len(subpath)
    if n == 0 or n >= target_count:
        return subpath

    ratio = target_count / n
    result = []
    allocated = 0
    for i, seg in enumerate(subpath):
        ideal_end = _round_half_up(ratio * (i + 1))
        result.extend(subdivide_segment(seg, ideal_end - allocated))
        allocated = ideal_end
    return tuple(result)


def align_segment_counts(a: Subpath, b: Subpath) -> tuple[Subpath, Subpath]:
    """Subdivide the shorter subpath of a pair up to the longer one's segment count."""
    # An empty side has nothing to split: collapse it onto the other side's centroid
    if not a and not b:
        return a, b
    if not a:
        a = degenerate_subpath(*subpath_centroid(b))
    if not b:
        b = degenerate_subpath(*subpath_centroid(a))

    if len(a) == len(b):
        return a, b
    target = max(len(a), len(b))
    return subdivide_subpath(a, target), subdivide_subpath(b, target)


def control_point_distance(a: Subpath, b: Subpath) -> float:
    """Sum of squared distances between corresponding control points."""
    n = min(len(a), len(b))
    if n == 0:
        return 0.0
    diff = subpath_to_array(a[:n]) - subpath_to_array(b[:n])
    return float(np.sum(diff * diff))


def rotate_to_minimize_distance(
    from_subpath: Subpath, to_subpath: Subpath, close_tolerance: float = 0.5
) -> Subpath:
    """Rotate a closed subpath's segment order to best match ``to_subpath``.

    Every rotation is tried; ties keep the original order. Open subpaths are
    returned unchanged since rotating them would tear the contour.
    """
    if len(from_subpath) <= 1 or not subpath_is_closed(from_subpath, close_tolerance):
        return from_subpath

    n = min(len(from_subpath), len(to_subpath))
    src = subpath_to_array(from_subpath)
    dst = subpath_to_array(to_subpath)[:n]

    best_rotation = 0
    best_distance = float(np.sum((src[:n] - dst) ** 2))
    for r in range(1, len(from_subpath)):
        rotated = np.roll(src, -r, axis=0)[:n]
        d = float(np.sum((rotated - dst) ** 2))
        if d < best_distance - ROTATION_TOLERANCE * max(1.0, best_distance):
            best_distance = d
            best_rotation = r

    if best_rotation == 0:
        return from_subpath
    logger.debug("Rotated subpath by %d of %d segments", best_rotation, len(from_subpath))
    return from_subpath[best_rotation:] + from_subpath[:best_rotation]


def align_documents(
    from_doc: PathDocument,
    to_doc: PathDocument,
    *,
    rotate: bool = True,
    close_tolerance: float = 0.5,
) -> tuple[PathDocument, PathDocument]:
    """Reconcile two documents so both have the same subpath and segment counts."""
    from_doc, to_doc = align_subpath_counts(from_doc, to_doc)

    aligned_from: list[Subpath] = []
    aligned_to: list[Subpath] = []
    for sp_from, sp_to in zip(from_doc, to_doc):
        sp_from, sp_to = align_segment_counts(sp_from, sp_to)
        if rotate:
            sp_from = rotate_to_minimize_distance(sp_from, sp_to, close_tolerance)
        aligned_from.append(sp_from)
        aligned_to.append(sp_to)

    return tuple(aligned_from), tuple(aligned_to)
