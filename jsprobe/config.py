"""Configuration paths and detector defaults for jsprobe."""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(os.environ.get("JSPROBE_HOME", str(Path.home() / ".jsprobe"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

# Event names accepted by window.addEventListener(...) as a page-ready hook
DEFAULT_LOAD_EVENTS = ("load", "DOMContentLoaded")

# Debug print looked for inside named functions: console.log(...)
DEFAULT_DEBUG_OBJECT = "console"
DEFAULT_DEBUG_METHOD = "log"

# Comment prefixes that mark a note rather than disabled code
DEFAULT_ANNOTATIONS = ("TODO", "FIXME", "NOTE", "HACK")

