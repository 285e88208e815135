# Per-program analysis context: owns the diagnostics sink and resolves spans
# to line/column positions. One Context per (program, rule set) run.

from __future__ import annotations

import logging
from bisect import bisect_right
from enum import Enum
from typing import Union

from tree_sitter import Node as TSNode

from lintel.diagnostics.models import Diagnostic, Position, Range, Span
from lintel.parser import Program

logger = logging.getLogger(__name__)

# Rules pass either literal text or a member of their message/hint enum.
Text = Union[str, Enum]


def _text(value: Text) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return value


class LineIndex:
    """Byte offset -> (line, column) lookup for one source buffer."""

    def __init__(self, source: bytes) -> None:
        self.source = source
        self.line_starts = [0]
        for i, byte in enumerate(source):
            if byte == 0x0A:
                self.line_starts.append(i + 1)

    def position(self, byte_pos: int) -> Position:
        """
        Resolve a byte offset. Lines are 1-based; columns count characters
        from the start of the line, 0-based.
        """
        byte_pos = min(max(byte_pos, 0), len(self.source))
        line = bisect_right(self.line_starts, byte_pos) - 1
        start = self.line_starts[line]
        col = len(self.source[start:byte_pos].decode("utf-8", errors="replace"))
        return Position(line=line + 1, col=col, byte_pos=byte_pos)


class Context:
    """
    Sink for diagnostics produced while linting one program.

    Rules receive the context in lint() and only ever append to it; they never
    read what other rules reported. The driver owns it between rules.
    """

    def __init__(self, filename: str, program: Program) -> None:
        self.filename = filename
        self.program = program
        self.line_index = LineIndex(program.source)
        self.diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> bytes:
        return self.program.source

    def position(self, byte_pos: int) -> Position:
        return self.line_index.position(byte_pos)

    def range_of(self, span: Span) -> Range:
        return Range(start=self.position(span.lo), end=self.position(span.hi))

    def source_of(self, span: Span) -> str:
        """Source text covered by span, decoded leniently."""
        return self.source[span.lo : span.hi].decode("utf-8", errors="replace")

    def add_diagnostic(self, span: Span | TSNode, code: str, message: Text) -> None:
        self._push(span, code, message, None)

    def add_diagnostic_with_hint(
        self,
        span: Span | TSNode,
        code: str,
        message: Text,
        hint: Text,
    ) -> None:
        """Report a violation together with a remediation suggestion for the user."""
        self._push(span, code, message, _text(hint))

    def _push(self, span: Span | TSNode, code: str, message: Text, hint: str | None) -> None:
        if not isinstance(span, Span):
            span = Span.from_node(span)
        diagnostic = Diagnostic(
            filename=self.filename,
            code=code,
            message=_text(message),
            span=span,
            range=self.range_of(span),
            hint=hint,
        )
        logger.debug("%s:%d:%d [%s] %s", self.filename, diagnostic.line, diagnostic.col, code, diagnostic.message)
        self.diagnostics.append(diagnostic)

    def mark(self) -> int:
        """Current number of diagnostics; pass to rollback() to undo later appends."""
        return len(self.diagnostics)

    def rollback(self, mark: int) -> list[Diagnostic]:
        """Drop every diagnostic appended after mark and return them."""
        dropped = self.diagnostics[mark:]
        del self.diagnostics[mark:]
        return dropped
