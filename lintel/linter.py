"""
Lint driver: parse a program, run every configured rule against one Context,
apply ignore directives and return the diagnostics.

Rules run one at a time in config order. A rule that raises is aborted for
that program: its exception is logged, whatever it reported is rolled back,
and the remaining rules still run.

Ignore directives are line comments:

    // lintel-ignore-file            (before the first statement: whole file)
    // lintel-ignore-file no-delete-var
    // lintel-ignore no-delete-var   (the next line only)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from tree_sitter import Node as TSNode

from lintel.config import Config, get_default_config
from lintel.context import Context
from lintel.diagnostics.models import Diagnostic
from lintel.parser import Program, Syntax, parse_file, parse_program, syntax_for_path

logger = logging.getLogger(__name__)

_DIRECTIVE_RE = re.compile(r"^//\s*lintel-ignore(?P<file>-file)?(?:\s+(?P<codes>.*?))?\s*$")
_CODE_SEP_RE = re.compile(r"[\s,]+")


@dataclass
class IgnoreDirectives:
    """
    Suppressions parsed from comments.

    An empty code set means every code is suppressed.
    """

    file_codes: Optional[frozenset[str]] = None
    # 1-based line the directive applies to -> codes
    line_codes: dict[int, frozenset[str]] = field(default_factory=dict)

    def suppresses(self, diagnostic: Diagnostic) -> bool:
        if self.file_codes is not None and (not self.file_codes or diagnostic.code in self.file_codes):
            return True
        codes = self.line_codes.get(diagnostic.line)
        return codes is not None and (not codes or diagnostic.code in codes)


def _parse_directive(text: str) -> Optional[tuple[bool, frozenset[str]]]:
    match = _DIRECTIVE_RE.match(text.strip())
    if match is None:
        return None
    raw = match.group("codes") or ""
    codes = frozenset(c for c in _CODE_SEP_RE.split(raw) if c)
    return match.group("file") is not None, codes


def _comments(root: TSNode) -> Iterable[TSNode]:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "comment":
            yield node
            continue
        stack.extend(reversed(node.named_children))


def collect_ignore_directives(program: Program) -> IgnoreDirectives:
    """Find lintel-ignore comments in a program."""
    directives = IgnoreDirectives()
    root = program.root_node

    for child in root.named_children:
        if child.type == "hash_bang_line":
            continue
        if child.type != "comment":
            break
        parsed = _parse_directive(child.text.decode("utf-8", errors="replace"))
        if parsed is not None and parsed[0]:
            directives.file_codes = parsed[1]
            break

    for comment in _comments(root):
        parsed = _parse_directive(comment.text.decode("utf-8", errors="replace"))
        if parsed is None or parsed[0]:
            continue
        end_row = comment.end_point[0]
        # end_point row is 0-based; the directive covers the following line
        directives.line_codes[end_row + 2] = parsed[1]
    return directives


@dataclass
class LintResult:
    """Outcome of linting one program."""

    filename: str
    program: Program
    diagnostics: list[Diagnostic] = field(default_factory=list)
    failed_rules: list[str] = field(default_factory=list)
    suppressed: int = 0

    @property
    def has_parse_errors(self) -> bool:
        return self.program.has_errors


class Linter:
    """Runs a fixed set of rules over programs."""

    def __init__(self, config: Optional[Config] = None) -> None:
        self.config = config if config is not None else get_default_config()

    @property
    def rules(self) -> Sequence:
        return self.config.rules

    def lint_program(self, filename: str, program: Program) -> LintResult:
        context = Context(filename, program)
        result = LintResult(filename=filename, program=program)
        if program.has_errors:
            logger.warning("%s has syntax errors; diagnostics may be incomplete", filename)

        for rule in self.config.rules:
            mark = context.mark()
            try:
                rule.lint(context, program)
            except Exception:
                dropped = context.rollback(mark)
                logger.exception(
                    "Rule %s aborted on %s; discarding %d diagnostic(s)",
                    rule.code(),
                    filename,
                    len(dropped),
                )
                result.failed_rules.append(rule.code())
                continue
            logger.debug("Rule %s reported %d diagnostic(s) on %s", rule.code(), context.mark() - mark, filename)

        directives = collect_ignore_directives(program)
        for diagnostic in context.diagnostics:
            if directives.suppresses(diagnostic):
                result.suppressed += 1
            else:
                result.diagnostics.append(diagnostic)

        logger.info(
            "Linted %s: %d diagnostic(s), %d suppressed",
            filename,
            len(result.diagnostics),
            result.suppressed,
        )
        return result

    def lint_source(
        self,
        filename: str,
        source: bytes | str,
        syntax: Optional[Syntax] = None,
    ) -> LintResult:
        """Parse and lint in-memory source. The grammar comes from filename unless given."""
        if isinstance(source, str):
            source = source.encode("utf-8")
        kind = None
        if syntax is None:
            syntax, kind = syntax_for_path(Path(filename))
        program = parse_program(source, syntax=syntax, kind=kind)
        return self.lint_program(filename, program)

    def lint_file(self, path: Path) -> Optional[LintResult]:
        """Lint one file; None if it could not be read."""
        program = parse_file(path)
        if program is None:
            return None
        return self.lint_program(str(path), program)

    def lint_files(self, paths: Iterable[Path]) -> list[LintResult]:
        results: list[LintResult] = []
        for path in paths:
            result = self.lint_file(path)
            if result is not None:
                results.append(result)
        return results
