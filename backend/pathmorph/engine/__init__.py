"""Path morphing engine: strategies, alignment and document transitions."""

from pathmorph.engine.registry import create_morpher, get_registry, morpher
from pathmorph.engine.config import MorphConfig
from pathmorph.engine.morphers import Interpolator, PathMorpher, release_morpher
from pathmorph.engine.diff import MatchedPair, TransitionPlan, plan_transition
from pathmorph.engine.path_tween import PathTween
from pathmorph.engine.transition import (
    CommitResult,
    Frame,
    NodeFrame,
    Transition,
    calculate_wrapper_scale,
    run_transition,
)
from pathmorph.engine.fragments import (
    FragmentPlan,
    FragmentTransition,
    pair_by_index,
    plan_fragment_mapping,
    run_fragment_transition,
)

__all__ = [
    "create_morpher",
    "get_registry",
    "morpher",
    "MorphConfig",
    "Interpolator",
    "PathMorpher",
    "release_morpher",
    "MatchedPair",
    "TransitionPlan",
    "plan_transition",
    "PathTween",
    "CommitResult",
    "Frame",
    "NodeFrame",
    "Transition",
    "calculate_wrapper_scale",
    "run_transition",
    "FragmentPlan",
    "FragmentTransition",
    "pair_by_index",
    "plan_fragment_mapping",
    "run_fragment_transition",
]
