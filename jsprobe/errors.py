"""Exception types raised by jsprobe."""

from __future__ import annotations


class JsprobeError(Exception):
    """Base class for all jsprobe errors."""


class ParserUnavailableError(JsprobeError):
    """The tree-sitter runtime or its JavaScript grammar could not be loaded."""


class WalkerError(JsprobeError, ValueError):
    """The walker was called without a root node."""


class ConfigError(JsprobeError):
    """The configuration file exists but cannot be used."""
