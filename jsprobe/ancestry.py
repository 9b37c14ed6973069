"""Nearest-enclosing lookups over a traversal lineage."""

from __future__ import annotations

from typing import Any, Collection, Optional, Sequence


def find_ancestor(kind: Optional[str], lineage: Optional[Sequence[Any]]) -> Optional[Any]:
    """Return the ancestor of type *kind* closest to the current node.

    *lineage* is ordered from the root down to the parent of the node being
    visited, so the scan runs from its tail towards its head.  A missing
    kind or lineage, or no match at all, yields None.

    Example::

        func = find_ancestor("function_declaration", lineage)
        if func is not None and node_text(func.child_by_field_name("name")) == "main":
            ...
    """
    if not kind or not isinstance(lineage, (list, tuple)):
        return None

    for ancestor in reversed(lineage):
        if ancestor is not None and getattr(ancestor, "type", None) == kind:
            return ancestor
    return None


def find_nearest(kinds: Collection[str], lineage: Optional[Sequence[Any]]) -> Optional[Any]:
    """Like :func:`find_ancestor` but matches any of several kinds."""
    if not kinds or not isinstance(lineage, (list, tuple)):
        return None

    for ancestor in reversed(lineage):
        if ancestor is not None and getattr(ancestor, "type", None) in kinds:
            return ancestor
    return None
