"""Library configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    log_level: str = "info"

    # Strategy used when create_morpher() is called without a name
    default_morpher: str = "curve"

    # Max per-axis gap between a subpath's first and last point to count as closed
    close_tolerance: float = 0.5

    # 0 = unbounded geometry caches
    cache_max_entries: int = 0

    # Path length units per sample point (polygon strategy)
    polygon_precision: float = 10.0
    # Longest ring edge before densification (ring strategy)
    ring_max_segment_length: float = 10.0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "PATHMORPH_"}


settings = Settings()
