"""Core data models shared by the parser, walker and detectors."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional


class NodeKind:
    """Tree-sitter JavaScript node types inspected by the detectors."""
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    STRING = "string"
    COMMENT = "comment"
    ARGUMENTS = "arguments"
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    AUGMENTED_ASSIGNMENT_EXPRESSION = "augmented_assignment_expression"
    FUNCTION_DECLARATION = "function_declaration"
    GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"


@dataclass
class LoadEventVerdict:
    """Result of the window load-event registration check."""
    registered: bool = False
    misuse: bool = False

    @property
    def passed(self) -> bool:
        return self.registered and not self.misuse

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DebugStatementVerdict:
    """Result of looking for debug prints inside one named function."""
    function_name: str
    found: bool = False
    calls: int = 0

    def record(self) -> None:
        self.found = True
        self.calls += 1

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class CommentScanVerdict:
    """Result of the commented-out-code scan; ``line`` is 1-based."""
    found: bool = False
    line: Optional[int] = None
    text: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SourceUnit:
    """Source text of one JavaScript file plus its tree, when it parsed."""
    source: str
    root: Optional[Any] = None
    path: Optional[Path] = None

    @property
    def parsed(self) -> bool:
        return self.root is not None


@dataclass
class ProbeReport:
    """Every verdict produced for one source unit."""
    path: Optional[Path]
    parsed: bool
    load_event: LoadEventVerdict
    comments: CommentScanVerdict
    has_todos: bool = False
    debug: Dict[str, DebugStatementVerdict] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": str(self.path) if self.path else None,
            "parsed": self.parsed,
            "load_event": self.load_event.as_dict(),
            "comments": self.comments.as_dict(),
            "has_todos": self.has_todos,
            "debug": {name: v.as_dict() for name, v in self.debug.items()},
        }
