"""Line-oriented heuristics over raw source text.

These checks never look at the syntax tree: comment contents are not
parsed, so whether a ``//`` comment hides disabled code is decided by
pattern matching alone.  False positives and negatives are expected.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Pattern

from . import config
from .models import CommentScanVerdict

COMMENT_MARKER = "//"
BYTE_ORDER_MARK = "\ufeff"

_PROSE = re.compile(r"^[A-Z][a-z]")
_TODO_WORD = re.compile(r"\bTODO\b")

CODE_PATTERNS = [
    re.compile(
        r"^(var|let|const|function|class|if|else|for|while|do|switch|case"
        r"|try|catch|return|import|export)\s"
    ),
    re.compile(r"\w+\s*[=({]"),  # assignments or function calls
    re.compile(r"[}\]);]$"),  # closing brackets / semicolons
    re.compile(r"\w+\.\w+"),  # property access
    re.compile(r"console\."),
    re.compile(r"\w+\s*\([^)]*\)"),  # function calls
]


def _annotation_pattern(annotations: Iterable[str]) -> Optional[Pattern[str]]:
    words = [re.escape(w) for w in annotations if w]
    if not words:
        return None
    return re.compile(rf"^({'|'.join(words)}):", re.IGNORECASE)


def _is_documentation(content: str, annotation: Optional[Pattern[str]]) -> bool:
    if not content or _PROSE.match(content):
        return True
    return annotation is not None and annotation.match(content) is not None


def looks_like_code(content: str) -> bool:
    """True if a comment body matches any of the code-shape patterns."""
    return any(pattern.search(content) for pattern in CODE_PATTERNS)


def scan_comments(
    source: str,
    annotations: Iterable[str] = config.DEFAULT_ANNOTATIONS,
) -> CommentScanVerdict:
    """Scan ``//`` comments for disabled code; stop at the first hit."""
    verdict = CommentScanVerdict()
    annotation = _annotation_pattern(annotations)
    source = source.lstrip(BYTE_ORDER_MARK)

    for lineno, line in enumerate(source.split("\n"), start=1):
        stripped = line.strip()
        if not stripped.startswith(COMMENT_MARKER):
            continue

        content = stripped[len(COMMENT_MARKER):].strip()
        if _is_documentation(content, annotation):
            continue

        if looks_like_code(content):
            verdict.found = True
            verdict.line = lineno
            verdict.text = stripped
            break

    return verdict


def has_commented_out_code(
    source: str,
    annotations: Iterable[str] = config.DEFAULT_ANNOTATIONS,
) -> bool:
    """Return True when some ``//`` comment in *source* looks like code.

    >>> has_commented_out_code("run();\\n// const x = 5;")
    True
    >>> has_commented_out_code("// This is a documentation comment")
    False
    """
    return scan_comments(source, annotations).found


def has_todo_comments(source: str) -> bool:
    """Return True when the word ``TODO`` appears anywhere in *source*."""
    return _TODO_WORD.search(source) is not None
