"""Engine configuration: tunables for alignment, sampling and transition timing."""

from __future__ import annotations

from dataclasses import dataclass

from pathmorph.config import Settings, settings


@dataclass(frozen=True)
class MorphConfig:
    """Controls morpher behavior and the transition timeline."""

    # Rotate closed "from" subpaths to the cheapest starting segment
    align_rotation: bool = True
    close_tolerance: float = 0.5  # per-axis, path units

    # Geometry caches, 0 = unbounded
    cache_max_entries: int = 0

    # Sampling strategies
    polygon_precision: float = 10.0  # path units per sample
    ring_max_segment_length: float = 10.0
    min_polygon_points: int = 3

    # Transition phases as fractions of the duration
    beginning: float = 0.2  # matched nodes start interpolating
    ending: float = 0.8  # matched nodes finish
    overlap: float = 0.15  # crossfade reach into the main window

    # Fragment mapping: share of the duration a dropped fragment takes to fade out
    fragment_fade_out: float = 0.3

    @classmethod
    def from_settings(cls, config: Settings | None = None) -> MorphConfig:
        config = config or settings
        return cls(
            close_tolerance=config.close_tolerance,
            cache_max_entries=config.cache_max_entries,
            polygon_precision=config.polygon_precision,
            ring_max_segment_length=config.ring_max_segment_length,
        )
