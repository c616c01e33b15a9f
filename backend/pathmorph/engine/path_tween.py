"""Path-data tween for a single node.

Holds on to the interpolator while the same ``(from, to)`` pair is animated, so a
tween sampled every frame parses and aligns its paths only once.
"""

from __future__ import annotations

import logging

from pathmorph.engine.easing import TimingFunction, linear
from pathmorph.engine.morphers.base import Interpolator, PathMorpher, release_morpher

logger = logging.getLogger(__name__)


class PathTween:
    def __init__(self, morpher: PathMorpher, timing: TimingFunction = linear) -> None:
        self.morpher = morpher
        self.timing = timing
        self._interpolator: Interpolator | None = None
        self._from_path: str | None = None
        self._to_path: str | None = None

    def interpolator(self, from_path: str, to_path: str) -> Interpolator:
        if (
            self._interpolator is not None
            and self._from_path == from_path
            and self._to_path == to_path
        ):
            return self._interpolator

        self._interpolator = self.morpher.create_interpolator(from_path, to_path)
        self._from_path = from_path
        self._to_path = to_path
        return self._interpolator

    def sample(self, from_path: str, to_path: str, value: float) -> str:
        """Path data at linear time ``value`` in [0, 1], eased by the tween's timing."""
        if value >= 1:
            return self.complete(to_path)
        return self.interpolator(from_path, to_path)(self.timing(value))

    def complete(self, to_path: str) -> str:
        """Finish the tween: drop the cached interpolator and settle on ``to_path``."""
        self.clear()
        return to_path

    def clear(self) -> None:
        self._interpolator = None
        self._from_path = None
        self._to_path = None

    @property
    def is_cached(self) -> bool:
        return self._interpolator is not None

    def dispose(self) -> None:
        """Release the cached interpolator and the morpher's own resources."""
        self.clear()
        release_morpher(self.morpher)
        logger.debug("Disposed path tween using %s", type(self.morpher).__name__)
