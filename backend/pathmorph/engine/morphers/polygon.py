"""Polygon-sampling strategy.

Both paths are flattened into point rings of the same cardinality, the target
ring is rotated to the start point closest to the source, and the rings are
interpolated point by point.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pathmorph.engine.cache import GeometryCache
from pathmorph.engine.config import MorphConfig
from pathmorph.engine.morphers.base import Interpolator, snap_interpolator, with_exact_endpoints
from pathmorph.engine.registry import morpher
from pathmorph.engine.sampling import best_rotation, load_path, sample_count, sample_path
from pathmorph.svg.serializer import polygon_to_path

PolygonPair = tuple[NDArray[np.float64], NDArray[np.float64]]


class PolygonMorpher:
    def __init__(self, config: MorphConfig | None = None, *, precision: float | None = None) -> None:
        self.config = config or MorphConfig()
        self.precision = precision or self.config.polygon_precision
        self.cache: GeometryCache[PolygonPair | None] = GeometryCache(
            "polygon", self.config.cache_max_entries
        )

    def interpolation_points(self, from_path: str, to_path: str) -> PolygonPair | None:
        """Matched point rings for both paths, or None when either cannot be sampled."""
        return self.cache.get_or_compute(
            (from_path, to_path, self.precision),
            lambda: self._compute_points(from_path, to_path),
        )

    def _compute_points(self, from_path: str, to_path: str) -> PolygonPair | None:
        src = load_path(from_path)
        dst = load_path(to_path)
        if src is None or dst is None:
            return None

        minimum = self.config.min_polygon_points
        count = max(
            sample_count(src, self.precision, minimum),
            sample_count(dst, self.precision, minimum),
        )
        a = sample_path(src, count)
        b = sample_path(dst, count)
        b = np.roll(b, -best_rotation(a, b), axis=0)
        return a, b

    def create_interpolator(self, from_path: str, to_path: str) -> Interpolator:
        points = self.interpolation_points(from_path, to_path)
        if points is None:
            return snap_interpolator(from_path, to_path)

        a, b = points
        delta = b - a

        def interpolate(progress: float) -> str:
            return polygon_to_path(a + delta * progress)

        return with_exact_endpoints(from_path, to_path, interpolate)

    def dispose(self) -> None:
        self.cache.clear()


@morpher(name="polygon", description="Equal-count point rings sampled along both paths")
def polygon_morpher(config: MorphConfig, *, precision: float | None = None) -> PolygonMorpher:
    return PolygonMorpher(config, precision=precision)
