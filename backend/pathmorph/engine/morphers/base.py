"""The capability every morphing strategy implements."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

# progress -> path data; progress <= 0 gives the "from" string, >= 1 the "to" string
Interpolator = Callable[[float], str]


@runtime_checkable
class PathMorpher(Protocol):
    def create_interpolator(self, from_path: str, to_path: str) -> Interpolator: ...


def release_morpher(morpher: PathMorpher | None) -> None:
    """Call the optional ``dispose()`` of a strategy holding resources."""
    dispose = getattr(morpher, "dispose", None)
    if dispose is not None:
        dispose()


def snap_interpolator(from_path: str, to_path: str) -> Interpolator:
    """Fallback for inputs that cannot be morphed: jump at the midpoint."""

    def interpolate(progress: float) -> str:
        return from_path if progress < 0.5 else to_path

    return interpolate


def with_exact_endpoints(from_path: str, to_path: str, inner: Interpolator) -> Interpolator:
    """Return the input strings verbatim outside the open interval (0, 1)."""

    def interpolate(progress: float) -> str:
        if progress <= 0:
            return from_path
        if progress >= 1:
            return to_path
        return inner(progress)

    return interpolate
