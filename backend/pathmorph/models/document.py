"""Shape document tree exchanged with the host scene graph."""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, Field


class NodeKind(str, enum.Enum):
    PATH = "path"
    RECT = "rect"
    CIRCLE = "circle"
    LINE = "line"
    IMAGE = "image"
    GROUP = "group"


# Kinds whose ``size`` attribute takes part in a transition
LAYOUT_KINDS = frozenset({NodeKind.RECT, NodeKind.CIRCLE, NodeKind.IMAGE})


class ShapeNode(BaseModel):
    """One shape of a document.

    ``attributes`` holds what the host reads and writes per frame:
    ``position`` (x, y), ``scale`` (sx, sy), ``rotation`` (degrees), ``data``
    (path string, PATH nodes), ``size`` (w, h), ``fill``, ``stroke``,
    ``line_width`` and ``opacity``.
    """

    id: str
    kind: NodeKind = NodeKind.PATH
    attributes: dict[str, Any] = Field(default_factory=dict)
    children: list[ShapeNode] = Field(default_factory=list)

    @property
    def is_container(self) -> bool:
        return self.kind == NodeKind.GROUP or bool(self.children)

    @property
    def path_data(self) -> str | None:
        return self.attributes.get("data")


class ShapeDocument(BaseModel):
    """A parsed SVG document: its natural size and top-level nodes."""

    size: tuple[float, float] = (0.0, 0.0)
    nodes: list[ShapeNode] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get_nodes_by_id(self, node_id: str) -> list[ShapeNode]:
        return [node for node in self.nodes if node.id == node_id]
