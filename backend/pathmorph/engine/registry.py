"""Morpher registry: every strategy is a factory registered via decorator.

Usage:
    @morpher(name="curve", description="Cubic subdivision with control-point lerp")
    def curve_morpher(config: MorphConfig, *, align_points: bool | None = None) -> PathMorpher:
        return CurveMorpher(config, align_points=align_points)

Adding a new strategy = creating one module with the decorator and importing it
from ``pathmorph.engine.morphers``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from pathmorph.config import settings
from pathmorph.engine.config import MorphConfig

if TYPE_CHECKING:
    from pathmorph.engine.morphers.base import PathMorpher

logger = logging.getLogger(__name__)

MorpherFactory = Callable[..., "PathMorpher"]


@dataclass
class MorpherSpec:
    name: str
    factory: MorpherFactory
    description: str = ""


class MorpherRegistry:
    """Registry of named morpher factories."""

    def __init__(self) -> None:
        self._morphers: dict[str, MorpherSpec] = {}

    def register(self, spec: MorpherSpec) -> None:
        if spec.name in self._morphers:
            raise ValueError(f"Duplicate morpher name: {spec.name}")
        self._morphers[spec.name] = spec
        logger.debug("Registered morpher %s", spec.name)

    def get(self, name: str) -> MorpherSpec:
        try:
            return self._morphers[name]
        except KeyError:
            raise KeyError(f"Unknown morpher {name!r}; registered: {self.names()}") from None

    def names(self) -> list[str]:
        return sorted(self._morphers)

    def create(self, name: str, config: MorphConfig | None = None, **options: Any) -> PathMorpher:
        spec = self.get(name)
        return spec.factory(config or MorphConfig.from_settings(), **options)

    @property
    def count(self) -> int:
        return len(self._morphers)


# Module-level singleton
_registry = MorpherRegistry()


def get_registry() -> MorpherRegistry:
    return _registry


def morpher(*, name: str, description: str = ""):
    """Decorator to register a morpher factory."""

    def decorator(factory: MorpherFactory):
        _registry.register(MorpherSpec(name=name, factory=factory, description=description))
        return factory

    return decorator


def create_morpher(name: str | None = None, config: MorphConfig | None = None, **options: Any) -> PathMorpher:
    """Build a registered strategy; ``name`` defaults to ``PATHMORPH_DEFAULT_MORPHER``."""
    # Strategy modules register themselves on import
    import pathmorph.engine.morphers  # noqa: F401

    return _registry.create(name or settings.default_morpher, config, **options)
