"""Morphing strategies. Importing this package registers all of them."""

from pathmorph.engine.morphers.base import Interpolator, PathMorpher, release_morpher
from pathmorph.engine.morphers.curve import CurveMorpher
from pathmorph.engine.morphers.polygon import PolygonMorpher
from pathmorph.engine.morphers.resample import ResampleMorpher
from pathmorph.engine.morphers.ring import RingMorpher

__all__ = [
    "Interpolator",
    "PathMorpher",
    "release_morpher",
    "CurveMorpher",
    "PolygonMorpher",
    "ResampleMorpher",
    "RingMorpher",
]
