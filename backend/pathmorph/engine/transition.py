"""Sampling driver for a planned document transition.

A ``Transition`` is a pure function of progress until it is committed or
cancelled: every call to ``sample_progress`` evaluates all node tweens, the
container size and the wrapper scale from the same progress snapshot.

Timeline, as fractions of the duration:

    matched nodes     [beginning, ending]          eased with the caller's timing
    deleted nodes     [0, beginning + overlap]     opacity 1 -> 0
    inserted nodes    [ending - overlap, 1]        opacity 0 -> 1
    container size    [beginning, ending]          ease-in-out-sine
    wrapper scale     [0, 1]                       eased with the caller's timing
"""

from __future__ import annotations

import abc
import enum
import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from pathmorph.engine.config import MorphConfig
from pathmorph.engine.diff import MatchedPair, NodeKey, TransitionPlan
from pathmorph.engine.easing import TimingFunction, clamp, clamp_remap, ease_in_out_sine, linear
from pathmorph.engine.morphers.base import PathMorpher
from pathmorph.engine.path_tween import PathTween
from pathmorph.engine.registry import create_morpher
from pathmorph.engine.tweening import tween_attributes
from pathmorph.models.document import NodeKind, ShapeDocument, ShapeNode
from pathmorph.utils.bezier import lerp

logger = logging.getLogger(__name__)

Size = tuple[float, float]


class NodeStatus(str, enum.Enum):
    MATCHED = "matched"
    INSERTED = "inserted"
    DELETED = "deleted"


class TransitionState(str, enum.Enum):
    RUNNING = "running"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


@dataclass
class NodeFrame:
    """Attribute values of one node for one frame."""

    node_id: str
    address: tuple[NodeKey, ...]  # (id, occurrence) keys from the top level down to this node
    status: NodeStatus
    kind: NodeKind
    attributes: dict[str, Any]
    cloned: bool = False

    @property
    def opacity(self) -> float:
        return self.attributes.get("opacity", 1.0)


@dataclass
class Frame:
    progress: float  # linear time fraction
    size: Size
    scale: Size
    nodes: list[NodeFrame] = field(default_factory=list)

    def get(self, node_id: str) -> NodeFrame | None:
        """First frame entry for ``node_id`` at any depth."""
        for node in self.nodes:
            if node.node_id == node_id:
                return node
        return None


@dataclass
class CommitResult:
    document: ShapeDocument
    released: list[ShapeNode]

    @property
    def released_ids(self) -> list[str]:
        return [node.id for node in self.released]


def calculate_wrapper_scale(document_size: Size, parent_size: tuple[float | None, float | None]) -> Size:
    """Scale that fits a document into an explicitly sized parent.

    Both dimensions fixed: each axis scales independently. One fixed: that
    axis decides and the other follows to keep the aspect ratio. Neither: 1.
    Zero-sized documents keep a scale of 1 on the affected axis.
    """
    doc_w, doc_h = document_size
    parent_w, parent_h = parent_size
    sx = parent_w / doc_w if parent_w and doc_w else None
    sy = parent_h / doc_h if parent_h and doc_h else None

    if parent_w and parent_h:
        return (sx or 1.0, sy or 1.0)
    if parent_w:
        return (sx or 1.0, sx or 1.0)
    if parent_h:
        return (sy or 1.0, sy or 1.0)
    return (1.0, 1.0)


class Timeline(abc.ABC):
    """Duration, lifecycle and frame driving shared by transition kinds."""

    def __init__(self, duration: float, timing: TimingFunction = linear) -> None:
        self.duration = duration
        self.timing = timing
        self.state = TransitionState.RUNNING
        self.result: CommitResult | None = None

    @property
    def is_running(self) -> bool:
        return self.state == TransitionState.RUNNING

    def _ensure_running(self) -> None:
        if not self.is_running:
            raise RuntimeError(f"Transition is {self.state.value}")

    def progress_at(self, time: float) -> float:
        if self.duration <= 0:
            return 1.0
        return clamp(time / self.duration)

    def sample(self, time: float):
        """Frame at ``time`` seconds after the start."""
        return self.sample_progress(self.progress_at(time))

    @abc.abstractmethod
    def sample_progress(self, value: float):
        """Frame at linear progress ``value`` in [0, 1]."""

    def frames(self, fps: float = 60.0) -> Iterator:
        """Yield one frame per tick from 0 through exactly 1, then commit.

        A driver that stops iterating early should call ``cancel()``.
        """
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        ticks = max(1, math.ceil(self.duration * fps))
        for tick in range(ticks + 1):
            yield self.sample_progress(tick / ticks)
        self.result = self.commit()

    @abc.abstractmethod
    def commit(self) -> CommitResult:
        """Finish the transition and release what it no longer needs."""

    def cancel(self) -> None:
        self._ensure_running()
        self.state = TransitionState.CANCELLED
        self._release()
        logger.debug("Cancelled %s", type(self).__name__)

    def _release(self) -> None:
        """Drop interpolators; subclasses own the details."""


def release_tweens(tweens: Iterable[PathTween], owns_morpher: bool) -> None:
    """Drop cached interpolators; disposing also releases the shared morpher, so only its owner does."""
    for tween in tweens:
        if owns_morpher:
            tween.dispose()
        else:
            tween.clear()


class Transition(Timeline):
    def __init__(
        self,
        plan: TransitionPlan,
        duration: float,
        timing: TimingFunction = linear,
        *,
        morpher: PathMorpher | None = None,
        fixed_width: float | None = None,
        fixed_height: float | None = None,
        config: MorphConfig | None = None,
    ) -> None:
        if plan.source is None or plan.target is None:
            raise ValueError("Transition needs a plan built by plan_transition()")
        super().__init__(duration, timing)
        self.plan = plan
        self.config = config or MorphConfig.from_settings()
        self._owns_morpher = morpher is None
        self.morpher = morpher if morpher is not None else create_morpher(config=self.config)

        self.fixed_width = fixed_width
        self.fixed_height = fixed_height
        self.from_size: Size = plan.source.size
        self.to_size: Size = plan.target.size
        parent = (fixed_width, fixed_height)
        self.from_scale = calculate_wrapper_scale(self.from_size, parent)
        self.to_scale = calculate_wrapper_scale(self.to_size, parent)

        self._tweens: dict[tuple[NodeKey, ...], PathTween] = {}

    def _tween_for(self, address: tuple[NodeKey, ...]) -> PathTween:
        tween = self._tweens.get(address)
        if tween is None:
            tween = PathTween(self.morpher, self.timing)
            self._tweens[address] = tween
        return tween

    def sample_progress(self, value: float) -> Frame:
        self._ensure_running()
        value = clamp(value)
        cfg = self.config
        progress = self.timing(value)

        # Every sub-animation below reads this one snapshot
        scale = (
            lerp(self.from_scale[0], self.to_scale[0], progress),
            lerp(self.from_scale[1], self.to_scale[1], progress),
        )
        sized = ease_in_out_sine(clamp_remap(cfg.beginning, cfg.ending, 0, 1, progress))
        width = (
            self.fixed_width
            if self.fixed_width is not None
            else lerp(self.from_size[0], self.to_size[0], sized) * scale[0]
        )
        height = (
            self.fixed_height
            if self.fixed_height is not None
            else lerp(self.from_size[1], self.to_size[1], sized) * scale[1]
        )

        local = clamp_remap(cfg.beginning, cfg.ending, 0, 1, value)
        deleted_opacity = clamp_remap(0, cfg.beginning + cfg.overlap, 1, 0, progress)
        inserted_opacity = clamp_remap(cfg.ending - cfg.overlap, 1, 0, 1, progress)

        frame = Frame(progress=value, size=(width, height), scale=scale)
        self._sample_plan(self.plan, (), local, deleted_opacity, inserted_opacity, frame.nodes)
        return frame

    def _sample_plan(
        self,
        plan: TransitionPlan,
        parent: tuple[NodeKey, ...],
        local: float,
        deleted_opacity: float,
        inserted_opacity: float,
        out: list[NodeFrame],
    ) -> None:
        for pair in plan.matched:
            out.append(self._sample_pair(pair, parent, local))
            if pair.children is not None:
                self._sample_plan(
                    pair.children, parent + (pair.key,), local, deleted_opacity, inserted_opacity, out
                )

        for key, node in plan.keyed_deleted():
            attributes = dict(node.attributes, opacity=deleted_opacity)
            out.append(NodeFrame(node.id, parent + (key,), NodeStatus.DELETED, node.kind, attributes))

        for key, node in plan.keyed_inserted():
            attributes = dict(node.attributes, opacity=inserted_opacity)
            out.append(NodeFrame(node.id, parent + (key,), NodeStatus.INSERTED, node.kind, attributes))

    def _sample_pair(self, pair: MatchedPair, parent: tuple[NodeKey, ...], local: float) -> NodeFrame:
        address = parent + (pair.key,)
        tween = self._tween_for(address) if pair.to_node.kind == NodeKind.PATH else None
        attributes = tween_attributes(pair.from_node, pair.to_node, local, tween, timing=self.timing)
        return NodeFrame(pair.node_id, address, NodeStatus.MATCHED, pair.to_node.kind, attributes)

    def commit(self) -> CommitResult:
        """Finish: release deleted and matched source nodes and settle on the target document."""
        self._ensure_running()
        released = self.plan.iter_deleted() + [pair.from_node for pair in self.plan.iter_matched()]
        self.state = TransitionState.COMMITTED
        self._release()
        self.result = CommitResult(document=self.plan.target, released=released)
        logger.debug("Committed transition, released %d nodes", len(released))
        return self.result

    def _release(self) -> None:
        release_tweens(self._tweens.values(), self._owns_morpher)
        self._tweens.clear()


def run_transition(
    plan: TransitionPlan,
    duration: float,
    timing: TimingFunction = linear,
    *,
    morpher: PathMorpher | None = None,
    fixed_width: float | None = None,
    fixed_height: float | None = None,
    config: MorphConfig | None = None,
) -> Transition:
    """Start a transition over ``duration`` seconds.

    Without a ``morpher`` the configured default strategy is created and
    released again when the transition ends.
    """
    return Transition(
        plan,
        duration,
        timing,
        morpher=morpher,
        fixed_width=fixed_width,
        fixed_height=fixed_height,
        config=config,
    )
