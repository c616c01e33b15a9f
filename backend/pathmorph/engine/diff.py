"""Identity diff between two shape trees.

Nodes are matched on ``(id, occurrence)`` where ``occurrence`` counts earlier
siblings carrying the same id, so duplicated ids pair up in document order.
Matched containers are diffed again on their children.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from pathmorph.models.document import ShapeDocument, ShapeNode

logger = logging.getLogger(__name__)

NodeKey = tuple[str, int]


@dataclass(frozen=True)
class MatchedPair:
    from_node: ShapeNode
    to_node: ShapeNode
    children: TransitionPlan | None = None
    occurrence: int = 0  # earlier siblings with the same id

    @property
    def node_id(self) -> str:
        return self.to_node.id

    @property
    def key(self) -> NodeKey:
        return (self.to_node.id, self.occurrence)


@dataclass(frozen=True)
class TransitionPlan:
    """Which nodes interpolate, appear and disappear between two trees.

    Matched and deleted nodes keep the source order, inserted nodes the
    target order. ``source`` and ``target`` are only set on the top-level plan.
    """

    matched: tuple[MatchedPair, ...] = ()
    inserted: tuple[ShapeNode, ...] = ()
    deleted: tuple[ShapeNode, ...] = ()
    source: ShapeDocument | None = field(default=None, compare=False)
    target: ShapeDocument | None = field(default=None, compare=False)
    inserted_keys: tuple[NodeKey, ...] = field(default=(), compare=False)
    deleted_keys: tuple[NodeKey, ...] = field(default=(), compare=False)

    @property
    def matched_ids(self) -> list[str]:
        return [pair.node_id for pair in self.matched]

    @property
    def inserted_ids(self) -> list[str]:
        return [node.id for node in self.inserted]

    @property
    def deleted_ids(self) -> list[str]:
        return [node.id for node in self.deleted]

    @property
    def is_empty(self) -> bool:
        return not (self.matched or self.inserted or self.deleted)

    def keyed_inserted(self) -> list[tuple[NodeKey, ShapeNode]]:
        return list(zip(self.inserted_keys or keyed_nodes(self.inserted), self.inserted))

    def keyed_deleted(self) -> list[tuple[NodeKey, ShapeNode]]:
        return list(zip(self.deleted_keys or keyed_nodes(self.deleted), self.deleted))

    def iter_deleted(self) -> list[ShapeNode]:
        """Deleted nodes at every depth, parents before their matched descendants."""
        nodes = list(self.deleted)
        for pair in self.matched:
            if pair.children is not None:
                nodes.extend(pair.children.iter_deleted())
        return nodes

    def iter_matched(self) -> list[MatchedPair]:
        """Matched pairs at every depth."""
        pairs: list[MatchedPair] = []
        for pair in self.matched:
            pairs.append(pair)
            if pair.children is not None:
                pairs.extend(pair.children.iter_matched())
        return pairs


def keyed_nodes(nodes: Sequence[ShapeNode]) -> dict[NodeKey, ShapeNode]:
    """Index siblings by ``(id, occurrence)``, preserving document order."""
    seen: dict[str, int] = {}
    keyed: dict[NodeKey, ShapeNode] = {}
    for node in nodes:
        occurrence = seen.get(node.id, 0)
        seen[node.id] = occurrence + 1
        keyed[(node.id, occurrence)] = node
    return keyed


def diff_nodes(from_nodes: Sequence[ShapeNode], to_nodes: Sequence[ShapeNode]) -> TransitionPlan:
    source = keyed_nodes(from_nodes)
    target = keyed_nodes(to_nodes)

    matched: list[MatchedPair] = []
    deleted: dict[NodeKey, ShapeNode] = {}
    for key, node in source.items():
        other = target.get(key)
        if other is None:
            deleted[key] = node
            continue
        children = None
        if node.is_container and other.is_container:
            children = diff_nodes(node.children, other.children)
        matched.append(MatchedPair(node, other, children, occurrence=key[1]))

    inserted = {key: node for key, node in target.items() if key not in source}
    return TransitionPlan(
        tuple(matched),
        tuple(inserted.values()),
        tuple(deleted.values()),
        inserted_keys=tuple(inserted),
        deleted_keys=tuple(deleted),
    )


def plan_transition(from_tree: ShapeDocument, to_tree: ShapeDocument) -> TransitionPlan:
    """Diff two documents into matched, inserted and deleted node sets."""
    plan = diff_nodes(from_tree.nodes, to_tree.nodes)
    plan = replace(plan, source=from_tree, target=to_tree)
    logger.info(
        "Planned transition: %d matched, %d inserted, %d deleted",
        len(plan.matched), len(plan.inserted), len(plan.deleted),
    )
    return plan
