"""Run every detector over one source unit."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .comment_scanner import has_todo_comments, scan_comments
from .config_manager import ProbeSettings
from .console_detector import detect_console_log
from .models import ProbeReport, SourceUnit
from .onload_validator import detect_load_registration

logger = logging.getLogger(__name__)


def run_all(
    unit: SourceUnit,
    function_names: Iterable[str] = (),
    settings: Optional[ProbeSettings] = None,
) -> ProbeReport:
    """Collect the verdict of each detector into a :class:`ProbeReport`.

    Each detector gets its own verdict record and walks the tree once.
    """
    settings = settings or ProbeSettings()

    report = ProbeReport(
        path=unit.path,
        parsed=unit.parsed,
        load_event=detect_load_registration(unit.root, events=settings.load_events),
        comments=scan_comments(unit.source, settings.annotations),
        has_todos=has_todo_comments(unit.source),
    )
    for name in function_names:
        report.debug[name] = detect_console_log(
            unit.root,
            name,
            object_name=settings.debug_object,
            method=settings.debug_method,
        )

    logger.debug("Report for %s: %s", unit.path or "<source>", report.to_dict())
    return report
