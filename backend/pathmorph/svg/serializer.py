"""Write path data back out from cubic subpaths or point rings."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np
from numpy.typing import NDArray

from pathmorph.models.geometry import Point


def format_number(value: float) -> str:
    """Shortest round-tripping text for a coordinate; integral values drop the ``.0``."""
    value = float(value)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e15:
        return str(int(value))
    return repr(value)


def _pair(x: float, y: float) -> str:
    return f"{format_number(x)},{format_number(y)}"


def cubic_arrays_to_path(subpaths: Iterable[NDArray[np.float64]]) -> str:
    """Serialize Nx4x2 control-point arrays as one ``M`` plus one ``C`` per segment."""
    parts: list[str] = []
    for segs in subpaths:
        if len(segs) == 0:
            continue
        parts.append(f"M{_pair(*segs[0, 0])}")
        for seg in segs:
            parts.append(f"C{_pair(*seg[1])} {_pair(*seg[2])} {_pair(*seg[3])}")
    return "".join(parts)


def polygon_to_path(points: Sequence[Point] | NDArray[np.float64]) -> str:
    """Closed polyline ``M…L…Z``; empty input gives an empty string."""
    if len(points) == 0:
        return ""
    first, *rest = points
    return f"M{_pair(*first)}" + "".join(f"L{_pair(*p)}" for p in rest) + "Z"

