"""JavaScript parsing on top of Tree-sitter.

Tree-sitter is error-tolerant: it always produces a tree and marks the
broken regions with ``ERROR`` / ``MISSING`` nodes.  Detectors need a tree
they can make structural claims about, so by default a tree containing
syntax errors is treated as a parse failure and ``None`` is returned
instead.
"""

from __future__ import annotations

import importlib
import logging
import re
from typing import Any, Optional

from .errors import ParserUnavailableError
from .models import NodeKind

logger = logging.getLogger(__name__)

GRAMMAR_MODULE = "tree_sitter_javascript"

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|.)", re.DOTALL)
_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0",
    # line continuations
    "\n": "", "\r": "", "\r\n": "", "\u2028": "", "\u2029": "",
}


class JavaScriptParser:
    """Parse JavaScript source text into a tree-sitter syntax tree."""

    def __init__(self, tolerate_errors: bool = False) -> None:
        self.tolerate_errors = tolerate_errors
        self._parser = self._init_parser()

    @staticmethod
    def _init_parser() -> Any:
        try:
            from tree_sitter import Language, Parser as TSParser  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ParserUnavailableError(
                "tree-sitter is not installed. "
                "Install with: pip install tree-sitter tree-sitter-javascript"
            ) from exc

        try:
            mod = importlib.import_module(GRAMMAR_MODULE)
        except ImportError as exc:
            raise ParserUnavailableError(
                f"Grammar package '{GRAMMAR_MODULE}' not installed. "
                f"Install with: pip install {GRAMMAR_MODULE.replace('_', '-')}"
            ) from exc

        # tree-sitter >=0.22 per-language packages expose a
        # language() function that returns the Language capsule.
        parser = TSParser(Language(mod.language()))
        logger.debug("Loaded tree-sitter parser for javascript")
        return parser

    def parse_tree(self, source: str) -> Any:
        """Return the raw tree-sitter ``Tree`` for *source*."""
        return self._parser.parse(source.encode("utf-8"))

    def parse(self, source: str) -> Optional[Any]:
        """Return the root node of *source*, or None if it has syntax errors."""
        root = self.parse_tree(source).root_node
        if root.has_error and not self.tolerate_errors:
            logger.debug("Source has syntax errors near line %d", _first_error_line(root))
            return None
        return root


def _first_error_line(root: Any) -> int:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return root.start_point[0] + 1


def node_text(node: Any) -> str:
    """Return the source text covered by *node* (empty when unavailable)."""
    if node is None:
        return ""
    text = node.text
    if text is None:
        return ""
    return text.decode("utf-8", errors="replace")


def _decode_escape(match: "re.Match[str]") -> str:
    escape = match.group(1)
    if escape[0] in "ux" and len(escape) > 1:
        digits = escape[2:-1] if escape.startswith("u{") else escape[1:]
        try:
            return chr(int(digits, 16))
        except ValueError:
            return match.group(0)
    return _SIMPLE_ESCAPES.get(escape, escape)


def string_value(node: Any) -> Optional[str]:
    """Return the value of a plain string literal node.

    Quotes are removed and escape sequences decoded, so ``'lo\\x61d'``
    yields ``load``.  Legacy octal escapes are not decoded.
    """
    if node is None or node.type != NodeKind.STRING:
        return None
    text = node_text(node)
    if len(text) < 2:
        return None
    return _ESCAPE.sub(_decode_escape, text[1:-1])


_default_parsers: dict = {}


def get_parser(tolerate_errors: bool = False) -> JavaScriptParser:
    """Return a shared parser instance for the given error policy."""
    parser = _default_parsers.get(tolerate_errors)
    if parser is None:
        parser = JavaScriptParser(tolerate_errors=tolerate_errors)
        _default_parsers[tolerate_errors] = parser
    return parser


def parse_source(source: str, tolerate_errors: bool = False) -> Optional[Any]:
    """Parse *source* with the shared parser."""
    return get_parser(tolerate_errors).parse(source)
