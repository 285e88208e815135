# Exception taxonomy: configuration errors, malformed trees, unsupported inputs.
# Lint findings are never exceptions; they are Diagnostics in the Context.

from __future__ import annotations


class LintelError(Exception):
    """Base class for every error raised by lintel itself."""


class ConfigurationError(LintelError):
    """Rule selection is invalid (detected before any rule runs)."""


class DuplicateRuleCodeError(ConfigurationError):
    """Two registered rules report under the same diagnostic code."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Duplicate rule code: {code!r}")
        self.code = code


class UnknownRuleError(ConfigurationError):
    """An include/exclude list names a code no rule owns."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown rule code: {code!r}")
        self.code = code


class UnknownTagError(ConfigurationError):
    """A tag filter names a tag no rule carries."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unknown rule tag: {tag!r}")
        self.tag = tag


class MalformedTreeError(LintelError):
    """
    A node does not have the shape its grammar guarantees.

    Raised from inside a rule; the driver aborts that rule for the current
    program and discards whatever it reported.
    """

    def __init__(self, node_type: str, detail: str) -> None:
        super().__init__(f"Malformed {node_type} node: {detail}")
        self.node_type = node_type


class UnsupportedFileError(LintelError):
    """No grammar is registered for the file's extension."""
