"""Shared test fixtures."""

from __future__ import annotations

import pytest

from pathmorph.engine.config import MorphConfig
from pathmorph.models.document import NodeKind, ShapeDocument, ShapeNode


# Sample path data

SQUARE = "M0,0 L100,0 L100,100 L0,100 Z"
DIAMOND = "M50,0 L100,50 L50,100 L0,50 Z"
TRIANGLE = "M0,0 L10,0 L10,10 Z"
TWO_TRIANGLES = "M0,0 L10,0 L10,10 Z M20,20 L30,20 L30,30 Z"
OPEN_POLYLINE = "M0,0 L10,0 L20,5"

# Lucide-style icon paths: arcs, relative commands, smooth curves
HOME_PATH = (
    "M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999"
    "A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"
)
SMILE_PATH = "M8 14s1.5 2 4 2 4-2 4-2"
CIRCLE_PATH = "M22 12a10 10 0 1 1-20 0a10 10 0 1 1 20 0z"
STAR_PATH = (
    "M12 2l3.09 6.26L22 9.27l-5 4.87 1.18 6.88L12 17.77l-6.18 3.25L7 14.14"
    " 2 9.27l6.91-1.01L12 2z"
)
WAVE_PATH = "M0 10Q5 0 10 10T20 10T30 10"

MALFORMED = "M0,0 L10"
GARBAGE = "hello world"


def path_node(node_id: str, data: str, **attributes) -> ShapeNode:
    return ShapeNode(id=node_id, kind=NodeKind.PATH, attributes={"data": data, **attributes})


@pytest.fixture
def square() -> str:
    return SQUARE


@pytest.fixture
def diamond() -> str:
    return DIAMOND


@pytest.fixture
def config() -> MorphConfig:
    return MorphConfig()


@pytest.fixture
def abc_document() -> ShapeDocument:
    return ShapeDocument(
        size=(100.0, 100.0),
        nodes=[
            path_node("a", SQUARE, position=(0.0, 0.0)),
            path_node("b", TRIANGLE, position=(10.0, 10.0), fill="#ff0000"),
            path_node("c", STAR_PATH, position=(0.0, 0.0), rotation=0.0),
        ],
    )


@pytest.fixture
def bcd_document() -> ShapeDocument:
    return ShapeDocument(
        size=(200.0, 50.0),
        nodes=[
            path_node("b", DIAMOND, position=(30.0, 50.0), fill="#0000ff"),
            path_node("c", STAR_PATH, position=(0.0, 0.0), rotation=90.0),
            path_node("d", CIRCLE_PATH, position=(5.0, 5.0)),
        ],
    )
