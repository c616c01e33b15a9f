"""Tests for the identity diff between shape trees."""

from tests.conftest import SQUARE, TRIANGLE, path_node

from pathmorph.engine.diff import diff_nodes, keyed_nodes, plan_transition
from pathmorph.models.document import NodeKind, ShapeDocument, ShapeNode


def _group(node_id, *children):
    return ShapeNode(id=node_id, kind=NodeKind.GROUP, children=list(children))


def test_abc_to_bcd(abc_document, bcd_document):
    plan = plan_transition(abc_document, bcd_document)
    assert plan.matched_ids == ["b", "c"]
    assert plan.deleted_ids == ["a"]
    assert plan.inserted_ids == ["d"]
    assert plan.source is abc_document
    assert plan.target is bcd_document


def test_matched_pair_holds_both_nodes(abc_document, bcd_document):
    plan = plan_transition(abc_document, bcd_document)
    pair = plan.matched[0]
    assert pair.from_node.attributes["data"] == TRIANGLE
    assert pair.to_node is bcd_document.nodes[0]
    assert pair.children is None


def test_identical_documents_match_everything(abc_document):
    plan = plan_transition(abc_document, abc_document)
    assert plan.matched_ids == ["a", "b", "c"]
    assert not plan.inserted and not plan.deleted


def test_empty_documents():
    plan = plan_transition(ShapeDocument(), ShapeDocument())
    assert plan.is_empty


def test_duplicate_ids_match_by_occurrence():
    source = [path_node("x", SQUARE), path_node("x", TRIANGLE)]
    target = [path_node("x", TRIANGLE)]
    keyed = keyed_nodes(source)
    assert list(keyed) == [("x", 0), ("x", 1)]

    plan = diff_nodes(source, target)
    assert len(plan.matched) == 1
    assert plan.matched[0].from_node.attributes["data"] == SQUARE
    assert plan.deleted[0].attributes["data"] == TRIANGLE
    assert plan.matched[0].key == ("x", 0)
    assert [key for key, _ in plan.keyed_deleted()] == [("x", 1)]


def test_inserted_duplicates_keep_their_occurrence():
    plan = diff_nodes([path_node("x", SQUARE)], [path_node("x", SQUARE), path_node("x", TRIANGLE)])
    assert [key for key, _ in plan.keyed_inserted()] == [("x", 1)]


def test_containers_recurse():
    source = [_group("g", path_node("a", SQUARE), path_node("b", SQUARE))]
    target = [_group("g", path_node("b", TRIANGLE), path_node("c", TRIANGLE))]
    plan = diff_nodes(source, target)

    assert plan.matched_ids == ["g"]
    children = plan.matched[0].children
    assert children.matched_ids == ["b"]
    assert children.deleted_ids == ["a"]
    assert children.inserted_ids == ["c"]


def test_recursive_iterators():
    source = [_group("g", path_node("a", SQUARE), path_node("b", SQUARE)), path_node("z", SQUARE)]
    target = [_group("g", path_node("b", TRIANGLE))]
    plan = diff_nodes(source, target)
    assert [n.id for n in plan.iter_deleted()] == ["z", "a"]
    assert [p.node_id for p in plan.iter_matched()] == ["g", "b"]


def test_container_against_leaf_does_not_recurse():
    source = [_group("g", path_node("a", SQUARE))]
    target = [path_node("g", SQUARE)]
    plan = diff_nodes(source, target)
    assert plan.matched[0].children is None


def test_plan_is_logged(abc_document, bcd_document, caplog):
    with caplog.at_level("INFO"):
        plan_transition(abc_document, bcd_document)
    assert "2 matched, 1 inserted, 1 deleted" in caplog.text
