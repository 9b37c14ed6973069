"""Load a JavaScript file into a :class:`SourceUnit`."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import SourceUnit
from .parser import get_parser

logger = logging.getLogger(__name__)


def resolve_source_path(path: Path) -> Path:
    """Map a directory to its ``index.js`` and a bare name to ``<name>.js``."""
    if path.is_dir():
        return path / "index.js"
    if not path.exists() and not path.suffix:
        return path.with_suffix(".js")
    return path


def load_source_unit(
    path: Path,
    parse: bool = True,
    tolerate_errors: bool = False,
) -> SourceUnit:
    """Read *path* and, unless ``parse=False``, attach its syntax tree.

    A file that does not parse still yields a unit: ``root`` is left as
    None so tree-based checks report no findings.

    Files are decoded as UTF-8; a leading byte-order mark is dropped.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    source_path = resolve_source_path(Path(path))
    source = source_path.read_text(encoding="utf-8-sig")
    unit = SourceUnit(source=source, path=source_path)

    if parse:
        unit.root = get_parser(tolerate_errors).parse(source)
        if unit.root is None:
            logger.warning("Could not parse %s; tree checks will report nothing", source_path)
    return unit


def unit_from_source(source: str, tolerate_errors: bool = False) -> SourceUnit:
    """Build a unit from in-memory source text."""
    return SourceUnit(source=source, root=get_parser(tolerate_errors).parse(source))
