"""Depth-first tree walk that hands every visitor its node's lineage."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Mapping, Sequence, Tuple, Union

from .errors import WalkerError

logger = logging.getLogger(__name__)

Lineage = Tuple[Any, ...]
Visitor = Callable[[Any, Lineage], None]
VisitorMap = Mapping[str, Union[Visitor, Sequence[Visitor]]]


def iter_with_lineage(root: Any) -> Iterator[Tuple[Any, Lineage]]:
    """Yield ``(node, lineage)`` for every named node under *root*.

    Nodes come out in pre-order (source order).  The lineage runs from
    *root* down to the node's parent and excludes the node itself.
    """
    if root is None:
        raise WalkerError("Cannot walk an absent tree; check the parse result first")

    stack: List[Tuple[Any, Lineage]] = [(root, ())]
    while stack:
        node, lineage = stack.pop()
        yield node, lineage
        children = node.named_children
        if children:
            child_lineage = lineage + (node,)
            for child in reversed(children):
                stack.append((child, child_lineage))


def _normalise(visitors: VisitorMap) -> Dict[str, List[Visitor]]:
    table: Dict[str, List[Visitor]] = {}
    for kind, handlers in visitors.items():
        if callable(handlers):
            table[kind] = [handlers]
        else:
            table[kind] = list(handlers)
    return table


def walk_ancestors(root: Any, visitors: VisitorMap) -> int:
    """Walk *root* and call each visitor registered for a node's kind.

    Every handler receives ``(node, lineage)``.  Kinds with no visitor are
    skipped.  Returns the number of nodes visited.
    """
    table = _normalise(visitors)
    visited = 0
    for node, lineage in iter_with_lineage(root):
        visited += 1
        for handler in table.get(node.type, ()):
            handler(node, lineage)
    logger.debug("Walked %d nodes with visitors for %s", visited, sorted(table))
    return visited
