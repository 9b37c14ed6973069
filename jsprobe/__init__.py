"""jsprobe: structural checks over JavaScript syntax trees."""

__version__ = "0.1.0"

from .ancestry import find_ancestor, find_nearest
from .comment_scanner import has_commented_out_code, has_todo_comments, scan_comments
from .console_detector import console_log_visitor, detect_console_log
from .loader import load_source_unit
from .models import (
    CommentScanVerdict,
    DebugStatementVerdict,
    LoadEventVerdict,
    NodeKind,
    ProbeReport,
    SourceUnit,
)
from .onload_validator import detect_load_registration, onload_validator
from .parser import JavaScriptParser, parse_source
from .walker import iter_with_lineage, walk_ancestors

__all__ = [
    "__version__",
    "CommentScanVerdict",
    "DebugStatementVerdict",
    "JavaScriptParser",
    "LoadEventVerdict",
    "NodeKind",
    "ProbeReport",
    "SourceUnit",
    "console_log_visitor",
    "detect_console_log",
    "detect_load_registration",
    "find_ancestor",
    "find_nearest",
    "has_commented_out_code",
    "has_todo_comments",
    "iter_with_lineage",
    "load_source_unit",
    "onload_validator",
    "parse_source",
    "scan_comments",
    "walk_ancestors",
]
