"""Curve-subdivision strategy.

Both paths are normalized to cubic subpaths, aligned to identical structure, and
every control point is interpolated linearly. The in-between shape keeps the
curvature of both endpoints instead of flattening them to polygons.
"""

from __future__ import annotations

import logging

from pathmorph.engine.align import align_documents
from pathmorph.engine.cache import GeometryCache
from pathmorph.engine.config import MorphConfig
from pathmorph.engine.morphers.base import Interpolator, snap_interpolator, with_exact_endpoints
from pathmorph.engine.registry import morpher
from pathmorph.models.geometry import PathDocument, subpath_to_array
from pathmorph.svg.path_parser import PathParseError, parse_path_data
from pathmorph.svg.serializer import cubic_arrays_to_path

logger = logging.getLogger(__name__)


class CurveMorpher:
    def __init__(self, config: MorphConfig | None = None, *, align_points: bool | None = None) -> None:
        self.config = config or MorphConfig()
        self.align_points = self.config.align_rotation if align_points is None else align_points
        self.parse_cache: GeometryCache[PathDocument] = GeometryCache(
            "parse", self.config.cache_max_entries
        )
        self.alignment_cache: GeometryCache[tuple[PathDocument, PathDocument]] = GeometryCache(
            "alignment", self.config.cache_max_entries
        )

    def parse(self, path_data: str) -> PathDocument:
        """Parse through the cache; malformed data is reported and becomes empty."""
        return self.parse_cache.get_or_compute(path_data, lambda: self._parse_or_empty(path_data))

    @staticmethod
    def _parse_or_empty(path_data: str) -> PathDocument:
        try:
            return parse_path_data(path_data)
        except PathParseError as e:
            logger.warning("Failed to parse path data %.60r: %s", path_data, e)
            return ()

    def align(self, from_path: str, to_path: str) -> tuple[PathDocument, PathDocument]:
        key = (from_path, to_path, self.align_points, self.config.close_tolerance)
        return self.alignment_cache.get_or_compute(
            key,
            lambda: align_documents(
                self.parse(from_path),
                self.parse(to_path),
                rotate=self.align_points,
                close_tolerance=self.config.close_tolerance,
            ),
        )

    def create_interpolator(self, from_path: str, to_path: str) -> Interpolator:
        from_doc = self.parse(from_path)
        to_doc = self.parse(to_path)
        if not from_doc or not to_doc:
            return snap_interpolator(from_path, to_path)

        aligned_from, aligned_to = self.align(from_path, to_path)
        starts = [subpath_to_array(sp) for sp in aligned_from]
        ends = [subpath_to_array(sp) for sp in aligned_to]
        deltas = [dst - src for src, dst in zip(starts, ends)]

        def interpolate(progress: float) -> str:
            return cubic_arrays_to_path(src + delta * progress for src, delta in zip(starts, deltas))

        return with_exact_endpoints(from_path, to_path, interpolate)

    def dispose(self) -> None:
        self.parse_cache.clear()
        self.alignment_cache.clear()


@morpher(name="curve", description="Cubic subdivision with per-control-point interpolation")
def curve_morpher(config: MorphConfig, *, align_points: bool | None = None) -> CurveMorpher:
    return CurveMorpher(config, align_points=align_points)
