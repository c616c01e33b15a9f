"""Uniform-resampling strategy.

Only the anchor vertices of each path are used; curvature is ignored. The two
vertex lists are stretched to a common length by linear index mapping and then
interpolated pairwise.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from pathmorph.engine.config import MorphConfig
from pathmorph.engine.morphers.base import Interpolator
from pathmorph.engine.registry import morpher
from pathmorph.svg.path_parser import COMMAND_ARITY, PathParseError, iter_commands
from pathmorph.svg.serializer import polygon_to_path

logger = logging.getLogger(__name__)

# Argument offset of the end point inside one repetition of each command
_END_POINT_OFFSET = {"M": 0, "L": 0, "C": 4, "S": 2, "Q": 2, "T": 0, "A": 5}


def extract_vertices(path_data: str) -> NDArray[np.float64]:
    """Anchor points of every drawing command, in order (Nx2)."""
    try:
        commands = list(iter_commands(path_data))
    except PathParseError as e:
        logger.warning("Failed to read vertices of %.60r: %s", path_data, e)
        return np.empty((0, 2), dtype=np.float64)

    points: list[tuple[float, float]] = []
    x = y = 0.0
    start = (0.0, 0.0)
    for cmd in commands:
        kind = cmd.upper
        rel = cmd.is_relative
        a = cmd.args
        if kind == "Z":
            x, y = start
        elif kind == "H":
            for value in a:
                x = x + value if rel else value
                points.append((x, y))
        elif kind == "V":
            for value in a:
                y = y + value if rel else value
                points.append((x, y))
        else:
            step = COMMAND_ARITY[kind]
            offset = _END_POINT_OFFSET[kind]
            for i in range(0, len(a), step):
                if rel:
                    x, y = x + a[i + offset], y + a[i + offset + 1]
                else:
                    x, y = a[i + offset], a[i + offset + 1]
                points.append((x, y))
                if kind == "M" and i == 0:
                    start = (x, y)
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def normalize_points(points: NDArray[np.float64], target: int) -> NDArray[np.float64]:
    """Resample to ``target`` points by linear index mapping with fractional interpolation."""
    if len(points) == target:
        return points
    if len(points) == 0:
        return np.zeros((target, 2), dtype=np.float64)
    if target < 2:
        return points[:target]

    idx = np.arange(target) * ((len(points) - 1) / (target - 1))
    lower = np.floor(idx).astype(int)
    upper = np.minimum(np.ceil(idx).astype(int), len(points) - 1)
    frac = (idx - lower)[:, None]
    return points[lower] + (points[upper] - points[lower]) * frac


class ResampleMorpher:
    def create_interpolator(self, from_path: str, to_path: str) -> Interpolator:
        src = extract_vertices(from_path)
        dst = extract_vertices(to_path)
        size = max(len(src), len(dst))
        a = normalize_points(src, size)
        b = normalize_points(dst, size)
        delta = b - a

        def interpolate(progress: float) -> str:
            if progress <= 0:
                return from_path
            if progress >= 1:
                return to_path
            if len(src) == 0 or len(dst) == 0 or size < 2:
                return from_path

            points = a + delta * progress
            points = points[np.all(np.isfinite(points), axis=1)]
            if len(points) < 2:
                return from_path
            return polygon_to_path(points) or from_path

        return interpolate


@morpher(name="resample", description="Anchor vertices resampled to a common count")
def resample_morpher(config: MorphConfig) -> ResampleMorpher:
    return ResampleMorpher()
