"""Find debug prints (``console.log``) left inside a named function."""

from __future__ import annotations

import logging
from typing import Any, Optional

from . import config
from .ancestry import find_ancestor, find_nearest
from .models import DebugStatementVerdict, NodeKind
from .parser import node_text
from .walker import Lineage, Visitor, walk_ancestors

logger = logging.getLogger(__name__)

_FUNCTION_DECLARATION_KINDS = {
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.GENERATOR_FUNCTION_DECLARATION,
}


def is_member_call(call: Any, object_name: str, method: str) -> bool:
    """True for calls shaped like ``object_name.method(...)``."""
    callee = call.child_by_field_name("function")
    if callee is None or callee.type != NodeKind.MEMBER_EXPRESSION:
        return False
    obj = callee.child_by_field_name("object")
    prop = callee.child_by_field_name("property")
    return (
        obj is not None
        and obj.type == NodeKind.IDENTIFIER
        and node_text(obj) == object_name
        and prop is not None
        and prop.type == NodeKind.PROPERTY_IDENTIFIER
        and node_text(prop) == method
    )


def _bound_name(node: Optional[Any]) -> Optional[str]:
    if node is None:
        return None
    name = node.child_by_field_name("name")
    if name is None or name.type != NodeKind.IDENTIFIER:
        return None
    return node_text(name)


def enclosing_function_matches(lineage: Lineage, function_name: str) -> bool:
    """Check the nearest function declaration, then the nearest variable binding.

    Only the nearest construct of each kind is compared against
    *function_name*; this is not a lexical scope analysis, so a same-named
    binding nested inside another function still matches.
    """
    declaration = find_nearest(_FUNCTION_DECLARATION_KINDS, lineage)
    if _bound_name(declaration) == function_name:
        return True
    declarator = find_ancestor(NodeKind.VARIABLE_DECLARATOR, lineage)
    return _bound_name(declarator) == function_name


def console_log_visitor(
    function_name: str,
    verdict: DebugStatementVerdict,
    object_name: str = config.DEFAULT_DEBUG_OBJECT,
    method: str = config.DEFAULT_DEBUG_METHOD,
) -> Visitor:
    """Return a ``call_expression`` visitor that records into *verdict*."""
    def visit(node: Any, lineage: Lineage) -> None:
        if not is_member_call(node, object_name, method):
            return
        if enclosing_function_matches(lineage, function_name):
            logger.debug(
                "%s.%s call inside '%s' at line %d",
                object_name, method, function_name, node.start_point[0] + 1,
            )
            verdict.record()

    return visit


def detect_console_log(
    root: Optional[Any],
    function_name: str,
    verdict: Optional[DebugStatementVerdict] = None,
    object_name: str = config.DEFAULT_DEBUG_OBJECT,
    method: str = config.DEFAULT_DEBUG_METHOD,
) -> DebugStatementVerdict:
    """Walk *root* once and report debug prints inside *function_name*.

    An absent tree yields the default (empty) verdict.
    """
    if verdict is None:
        verdict = DebugStatementVerdict(function_name=function_name)
    if root is None or not function_name:
        return verdict
    walk_ancestors(
        root,
        {NodeKind.CALL_EXPRESSION: console_log_visitor(function_name, verdict, object_name, method)},
    )
    return verdict
