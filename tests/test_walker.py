"""Tests for the ancestor-aware tree walker."""

import pytest

from jsprobe.errors import WalkerError
from jsprobe.parser import node_text
from jsprobe.walker import iter_with_lineage, walk_ancestors


def test_preorder_source_order(parse_js):
    """Parents come before children, siblings in source order."""
    root = parse_js("a(b);")
    kinds = [node.type for node, _ in iter_with_lineage(root)]

    assert kinds == [
        "program",
        "expression_statement",
        "call_expression",
        "identifier",
        "arguments",
        "identifier",
    ]


def test_lineage_excludes_current_node(parse_js):
    root = parse_js("a(b);")
    pairs = list(iter_with_lineage(root))

    assert pairs[0][1] == ()
    node, lineage = pairs[-1]
    assert node_text(node) == "b"
    assert [n.type for n in lineage] == ["program", "expression_statement", "call_expression", "arguments"]
    assert all(n != node for n in lineage)


def test_visitor_called_once_per_matching_node(parse_js):
    root = parse_js("first(); second(third());")
    seen = []

    walk_ancestors(root, {"call_expression": lambda node, lineage: seen.append(
        node_text(node.child_by_field_name("function"))
    )})

    assert seen == ["first", "second", "third"]


def test_multiple_visitors_per_kind(parse_js):
    root = parse_js("x = 1;")
    calls = []

    walk_ancestors(root, {
        "assignment_expression": [
            lambda node, lineage: calls.append("one"),
            lambda node, lineage: calls.append("two"),
        ],
        "number": lambda node, lineage: calls.append("number"),
    })

    assert calls == ["one", "two", "number"]


def test_unregistered_kinds_are_ignored(parse_js):
    root = parse_js("let x = 1;")
    visited = walk_ancestors(root, {"class_declaration": lambda node, lineage: pytest.fail("unexpected")})
    assert visited > 0


def test_walk_is_deterministic(parse_js):
    root = parse_js("function f() { if (a) { g(); } }")

    first = [(n.type, n.start_byte) for n, _ in iter_with_lineage(root)]
    second = [(n.type, n.start_byte) for n, _ in iter_with_lineage(root)]
    assert first == second


def test_deep_tree_does_not_recurse(parse_js):
    """Deep nesting is walked without hitting the recursion limit."""
    depth = 1200
    root = parse_js("x = " + "[" * depth + "]" * depth + ";")

    arrays = []
    walk_ancestors(root, {"array": lambda node, lineage: arrays.append(len(lineage))})

    assert len(arrays) == depth
    assert arrays == sorted(arrays)


def test_absent_root_is_a_precondition_violation():
    with pytest.raises(WalkerError):
        walk_ancestors(None, {})
    with pytest.raises(ValueError):
        list(iter_with_lineage(None))
