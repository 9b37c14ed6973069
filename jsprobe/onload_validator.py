"""Check that a page-ready handler is registered on ``window``.

Recognised registrations::

    window.addEventListener('load', init)
    window.addEventListener('DOMContentLoaded', init)
    window.onload = init

Passing ``init()`` instead of ``init`` registers the *result* of the call,
which is recorded as misuse.
"""

from __future__ import annotations

import logging
from typing import Any, Collection, Optional

from . import config
from .ancestry import find_ancestor, find_nearest
from .models import LoadEventVerdict, NodeKind
from .parser import node_text, string_value
from .walker import Lineage, Visitor, walk_ancestors

logger = logging.getLogger(__name__)

_ASSIGNMENT_KINDS = {NodeKind.ASSIGNMENT_EXPRESSION, NodeKind.AUGMENTED_ASSIGNMENT_EXPRESSION}


def call_arguments(call: Any) -> Optional[list]:
    """Return the argument nodes of a call, comments excluded."""
    args = call.child_by_field_name("arguments")
    if args is None or args.type != NodeKind.ARGUMENTS:
        return None
    return [a for a in args.named_children if a.type != NodeKind.COMMENT]


def _is_identifier(node: Any, name: str) -> bool:
    return node is not None and node.type == NodeKind.IDENTIFIER and node_text(node) == name


def _check_add_event_listener(
    lineage: Lineage,
    verdict: LoadEventVerdict,
    events: Collection[str],
) -> None:
    call = find_ancestor(NodeKind.CALL_EXPRESSION, lineage)
    if call is None:
        return
    args = call_arguments(call)
    if args is None or len(args) != 2:
        return

    event, handler = args
    if string_value(event) in events:
        verdict.registered = True
        if handler.type == NodeKind.CALL_EXPRESSION:
            logger.debug("Load handler is called instead of passed (line %d)", handler.start_point[0] + 1)
            verdict.misuse = True


def _check_onload_assignment(lineage: Lineage, verdict: LoadEventVerdict) -> None:
    assignment = find_nearest(_ASSIGNMENT_KINDS, lineage)
    if assignment is None:
        return
    verdict.registered = True
    right = assignment.child_by_field_name("right")
    if right is not None and right.type == NodeKind.CALL_EXPRESSION:
        logger.debug("window.onload assigned a call result (line %d)", right.start_point[0] + 1)
        verdict.misuse = True


def onload_validator(
    verdict: LoadEventVerdict,
    events: Collection[str] = config.DEFAULT_LOAD_EVENTS,
) -> Visitor:
    """Return a ``member_expression`` visitor that records into *verdict*.

    Example::

        verdict = LoadEventVerdict()
        walk_ancestors(root, {"member_expression": onload_validator(verdict)})
    """
    def visit(node: Any, lineage: Lineage) -> None:
        obj = node.child_by_field_name("object")
        prop = node.child_by_field_name("property")
        if not _is_identifier(obj, "window"):
            return
        if prop is None or prop.type != NodeKind.PROPERTY_IDENTIFIER:
            return

        name = node_text(prop)
        if name == "addEventListener":
            _check_add_event_listener(lineage, verdict, events)
        elif name == "onload":
            _check_onload_assignment(lineage, verdict)

    return visit


def detect_load_registration(
    root: Optional[Any],
    verdict: Optional[LoadEventVerdict] = None,
    events: Collection[str] = config.DEFAULT_LOAD_EVENTS,
) -> LoadEventVerdict:
    """Walk *root* once and return the load-event verdict.

    An absent tree yields the default (empty) verdict.
    """
    if verdict is None:
        verdict = LoadEventVerdict()
    if root is None:
        return verdict
    walk_ancestors(root, {NodeKind.MEMBER_EXPRESSION: onload_validator(verdict, events)})
    return verdict
