"""External-library strategy: ring morphing on shapely geometry.

Each path is sampled into a ring, handed to shapely for densification
(no edge longer than ``max_segment_length``) and orientation (counter-clockwise
exterior), then the rings are padded to equal size by bisecting their longest
edges and rotated onto each other before point-wise interpolation.
"""

from __future__ import annotations

import logging

import numpy as np
import shapely
from numpy.typing import NDArray
from shapely.geometry import LinearRing, Polygon
from shapely.geometry.polygon import orient

from pathmorph.engine.cache import GeometryCache
from pathmorph.engine.config import MorphConfig
from pathmorph.engine.morphers.base import Interpolator, snap_interpolator, with_exact_endpoints
from pathmorph.engine.registry import morpher
from pathmorph.engine.sampling import add_points, best_rotation, load_path, sample_count, sample_path
from pathmorph.svg.serializer import polygon_to_path

logger = logging.getLogger(__name__)

RingPair = tuple[NDArray[np.float64], NDArray[np.float64]]


def path_to_ring(path_data: str, max_segment_length: float, minimum: int = 3) -> NDArray[np.float64] | None:
    """Densified, counter-clockwise ring for a path (closing point dropped)."""
    path = load_path(path_data)
    if path is None:
        return None

    coords = sample_path(path, sample_count(path, max_segment_length, minimum))
    try:
        ring = shapely.segmentize(LinearRing(coords), max_segment_length)
        exterior = orient(Polygon(ring), sign=1.0).exterior
    except Exception as e:
        logger.warning("Failed to build ring for %.60r: %s", path_data, e)
        return None

    return np.asarray(exterior.coords, dtype=np.float64)[:-1]


class RingMorpher:
    def __init__(self, config: MorphConfig | None = None, *, max_segment_length: float | None = None) -> None:
        self.config = config or MorphConfig()
        self.max_segment_length = max_segment_length or self.config.ring_max_segment_length
        self.cache: GeometryCache[RingPair | None] = GeometryCache("ring", self.config.cache_max_entries)

    def rings(self, from_path: str, to_path: str) -> RingPair | None:
        return self.cache.get_or_compute(
            (from_path, to_path, self.max_segment_length),
            lambda: self._compute_rings(from_path, to_path),
        )

    def _compute_rings(self, from_path: str, to_path: str) -> RingPair | None:
        minimum = self.config.min_polygon_points
        a = path_to_ring(from_path, self.max_segment_length, minimum)
        b = path_to_ring(to_path, self.max_segment_length, minimum)
        if a is None or b is None or len(a) == 0 or len(b) == 0:
            return None

        size = max(len(a), len(b))
        a = add_points(a, size)
        b = add_points(b, size)
        b = np.roll(b, -best_rotation(a, b), axis=0)
        return a, b

    def create_interpolator(self, from_path: str, to_path: str) -> Interpolator:
        rings = self.rings(from_path, to_path)
        if rings is None:
            return snap_interpolator(from_path, to_path)

        a, b = rings
        delta = b - a

        def interpolate(progress: float) -> str:
            return polygon_to_path(a + delta * progress)

        return with_exact_endpoints(from_path, to_path, interpolate)

    def dispose(self) -> None:
        self.cache.clear()


@morpher(name="ring", description="Shapely-densified rings matched by best rotation")
def ring_morpher(config: MorphConfig, *, max_segment_length: float | None = None) -> RingMorpher:
    return RingMorpher(config, max_segment_length=max_segment_length)
