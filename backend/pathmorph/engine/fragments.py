"""Fragment-level morphing driven by an explicit index mapping.

A fragment is the list of drawable shapes under one top-level node. A mapping
sends source fragment ``i`` to a list of target fragment indices:

* the first target morphs the source shapes themselves,
* every further target morphs clones of the source shapes,
* a source with an empty mapping fades out over the first part of the time,
* targets nobody maps to fade in over the whole time.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from pathmorph.engine.config import MorphConfig
from pathmorph.engine.diff import NodeKey
from pathmorph.engine.easing import TimingFunction, clamp_remap, linear
from pathmorph.engine.morphers.base import PathMorpher
from pathmorph.engine.path_tween import PathTween
from pathmorph.engine.registry import create_morpher
from pathmorph.engine.transition import (
    CommitResult,
    NodeFrame,
    NodeStatus,
    Timeline,
    TransitionState,
    release_tweens,
)
from pathmorph.engine.tweening import tween_attributes
from pathmorph.models.document import NodeKind, ShapeDocument, ShapeNode

logger = logging.getLogger(__name__)

Fragment = list[ShapeNode]

MORPHABLE_KINDS = frozenset({NodeKind.PATH, NodeKind.RECT})


class FragmentAction(str, enum.Enum):
    MORPH = "morph"
    CROSSFADE = "crossfade"  # kinds differ: fade the source out, fade the target in late
    FADE_OUT = "fade_out"
    FADE_IN = "fade_in"


@dataclass(frozen=True)
class FragmentMorph:
    action: FragmentAction
    from_node: ShapeNode | None = None
    to_node: ShapeNode | None = None
    cloned: bool = False  # from_node is a copy made for an extra target


@dataclass(frozen=True)
class FragmentPlan:
    morphs: tuple[FragmentMorph, ...] = ()
    skipped: tuple[int, ...] = ()  # out-of-range target indices

    def by_action(self, action: FragmentAction) -> list[FragmentMorph]:
        return [m for m in self.morphs if m.action == action]


def fragment_shapes(document: ShapeDocument) -> list[Fragment]:
    """Drawable shapes per top-level node: its children, or the node itself."""
    fragments: list[Fragment] = []
    for node in document.nodes:
        candidates = node.children if node.children else [node]
        fragments.append([c for c in candidates if c.kind in MORPHABLE_KINDS])
    return fragments


def pair_by_index(
    sources: Sequence[ShapeNode],
    targets: Sequence[ShapeNode],
    *,
    cloned: bool = False,
) -> list[FragmentMorph]:
    """Pair two flat shape lists position by position."""
    morphs: list[FragmentMorph] = []
    for i in range(max(len(sources), len(targets))):
        src = sources[i] if i < len(sources) else None
        dst = targets[i] if i < len(targets) else None
        if src is not None and dst is not None:
            action = FragmentAction.MORPH if src.kind == dst.kind else FragmentAction.CROSSFADE
            morphs.append(FragmentMorph(action, src, dst, cloned))
        elif src is not None:
            morphs.append(FragmentMorph(FragmentAction.FADE_OUT, src, None, cloned))
        else:
            morphs.append(FragmentMorph(FragmentAction.FADE_IN, None, dst))
    return morphs


def plan_fragment_mapping(
    source_fragments: Sequence[Fragment],
    target_fragments: Sequence[Fragment],
    mapping: Sequence[Sequence[int]],
) -> FragmentPlan:
    morphs: list[FragmentMorph] = []
    skipped: list[int] = []
    mapped: set[int] = set()

    for src_idx, target_indices in enumerate(mapping):
        src_shapes = source_fragments[src_idx] if src_idx < len(source_fragments) else []
        if not src_shapes:
            continue

        if not target_indices:
            morphs.extend(FragmentMorph(FragmentAction.FADE_OUT, shape) for shape in src_shapes)
            continue

        first = True
        for tgt_idx in target_indices:
            if tgt_idx < 0 or tgt_idx >= len(target_fragments):
                logger.warning(
                    "Fragment target index %d is out of bounds (0-%d)",
                    tgt_idx, len(target_fragments) - 1,
                )
                skipped.append(tgt_idx)
                continue

            mapped.add(tgt_idx)
            morphs.extend(pair_by_index(src_shapes, target_fragments[tgt_idx], cloned=not first))
            first = False

    for tgt_idx, tgt_shapes in enumerate(target_fragments):
        if tgt_idx not in mapped:
            morphs.extend(FragmentMorph(FragmentAction.FADE_IN, None, shape) for shape in tgt_shapes)

    logger.info("Planned fragment mapping: %d shape animations, %d skipped indices", len(morphs), len(skipped))
    return FragmentPlan(tuple(morphs), tuple(skipped))


def _address(node: ShapeNode) -> tuple[NodeKey, ...]:
    return ((node.id, 0),)


class FragmentTransition(Timeline):
    """Samples a ``FragmentPlan``; every animation spans the whole duration."""

    def __init__(
        self,
        plan: FragmentPlan,
        duration: float,
        timing: TimingFunction = linear,
        *,
        target: ShapeDocument,
        morpher: PathMorpher | None = None,
        config: MorphConfig | None = None,
    ) -> None:
        super().__init__(duration, timing)
        self.plan = plan
        self.target = target
        self.config = config or MorphConfig.from_settings()
        self._owns_morpher = morpher is None
        self.morpher = morpher if morpher is not None else create_morpher(config=self.config)
        self._tweens = [PathTween(self.morpher, timing) for _ in plan.morphs]

    def sample_progress(self, value: float) -> list[NodeFrame]:
        self._ensure_running()
        progress = self.timing(value)
        fade = self.config.fragment_fade_out
        fade_out = 1 - self.timing(clamp_remap(0, fade, 0, 1, value))
        late_fade_in = self.timing(clamp_remap(1 - fade, 1, 0, 1, value))

        nodes: list[NodeFrame] = []
        for morph, tween in zip(self.plan.morphs, self._tweens):
            src, dst = morph.from_node, morph.to_node
            if morph.action == FragmentAction.MORPH:
                attributes = tween_attributes(src, dst, value, tween, timing=self.timing, include_style=False)
                nodes.append(
                    NodeFrame(src.id, _address(src), NodeStatus.MATCHED, src.kind, attributes, morph.cloned)
                )
                continue

            if src is not None:
                attributes = dict(src.attributes, opacity=src.attributes.get("opacity", 1.0) * fade_out)
                nodes.append(
                    NodeFrame(src.id, _address(src), NodeStatus.DELETED, src.kind, attributes, morph.cloned)
                )
            if dst is not None:
                opacity = late_fade_in if morph.action == FragmentAction.CROSSFADE else progress
                attributes = dict(dst.attributes, opacity=opacity)
                nodes.append(NodeFrame(dst.id, _address(dst), NodeStatus.INSERTED, dst.kind, attributes, True))
        return nodes

    def commit(self) -> CommitResult:
        self._ensure_running()
        released = [m.from_node for m in self.plan.morphs if m.from_node is not None]
        self.state = TransitionState.COMMITTED
        self._release()
        self.result = CommitResult(document=self.target, released=released)
        return self.result

    def _release(self) -> None:
        release_tweens(self._tweens, self._owns_morpher)


def run_fragment_transition(
    source: ShapeDocument,
    target: ShapeDocument,
    mapping: Sequence[Sequence[int]],
    duration: float,
    timing: TimingFunction = linear,
    *,
    morpher: PathMorpher | None = None,
    config: MorphConfig | None = None,
) -> FragmentTransition:
    """Plan a fragment mapping between two documents and start sampling it."""
    plan = plan_fragment_mapping(fragment_shapes(source), fragment_shapes(target), mapping)
    return FragmentTransition(plan, duration, timing, target=target, morpher=morpher, config=config)
