# Tree-sitter setup and parsing: turn JavaScript/TypeScript source into a Program.

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language

from lintel.errors import UnsupportedFileError

logger = logging.getLogger(__name__)


class Syntax(str, Enum):
    """Grammar used to parse a file."""

    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"
    TSX = "tsx"


class ProgramKind(str, Enum):
    """The two top-level program shapes: modules allow import/export, scripts do not."""

    MODULE = "module"
    SCRIPT = "script"


_LANGUAGES: dict[Syntax, Language] = {
    Syntax.JAVASCRIPT: Language(tree_sitter_javascript.language()),
    Syntax.TYPESCRIPT: Language(tree_sitter_typescript.language_typescript()),
    Syntax.TSX: Language(tree_sitter_typescript.language_tsx()),
}

# extension -> (grammar, forced program kind or None to detect)
EXTENSIONS: dict[str, tuple[Syntax, Optional[ProgramKind]]] = {
    ".js": (Syntax.JAVASCRIPT, None),
    ".jsx": (Syntax.JAVASCRIPT, None),
    ".mjs": (Syntax.JAVASCRIPT, ProgramKind.MODULE),
    ".cjs": (Syntax.JAVASCRIPT, ProgramKind.SCRIPT),
    ".ts": (Syntax.TYPESCRIPT, None),
    ".mts": (Syntax.TYPESCRIPT, ProgramKind.MODULE),
    ".cts": (Syntax.TYPESCRIPT, ProgramKind.SCRIPT),
    ".tsx": (Syntax.TSX, None),
}

_MODULE_STATEMENTS = frozenset({"import_statement", "export_statement"})


@dataclass(frozen=True)
class Program:
    """
    A parsed program handed to rules.

    The tree is owned by tree-sitter and shared read-only by every rule that
    runs against it.
    """

    kind: ProgramKind
    syntax: Syntax
    tree: tree_sitter.Tree
    source: bytes

    @property
    def root_node(self) -> tree_sitter.Node:
        return self.tree.root_node

    @property
    def is_module(self) -> bool:
        return self.kind is ProgramKind.MODULE

    @property
    def has_errors(self) -> bool:
        return self.tree.root_node.has_error


def get_language(syntax: Syntax = Syntax.JAVASCRIPT) -> Language:
    """Return the tree-sitter Language for the given syntax."""
    return _LANGUAGES[syntax]


def create_parser(syntax: Syntax = Syntax.JAVASCRIPT) -> tree_sitter.Parser:
    """Create a tree-sitter Parser configured for the given syntax."""
    return tree_sitter.Parser(_LANGUAGES[syntax])


def syntax_for_path(path: Path) -> tuple[Syntax, Optional[ProgramKind]]:
    """
    Pick the grammar (and, for .mjs/.cjs style extensions, the program kind)
    from a file name.

    Raises:
        UnsupportedFileError: the extension is not a JavaScript/TypeScript one.
    """
    try:
        return EXTENSIONS[path.suffix.lower()]
    except KeyError:
        raise UnsupportedFileError(f"No grammar for file: {path}") from None


def detect_program_kind(root: tree_sitter.Node) -> ProgramKind:
    """A program is a module when any top-level statement is an import or export."""
    for child in root.named_children:
        if child.type in _MODULE_STATEMENTS:
            return ProgramKind.MODULE
    return ProgramKind.SCRIPT


def parse_bytes(
    source: bytes,
    parser: Optional[tree_sitter.Parser] = None,
) -> tree_sitter.Tree:
    """
    Parse JavaScript source bytes into a tree.

    Args:
        source: UTF-8 encoded source code.
        parser: Optional parser instance; if None, a JavaScript parser is created.

    Returns:
        The parse tree. Check tree.root_node.has_error for syntax errors.
    """
    if parser is None:
        parser = create_parser()
    tree = parser.parse(source)
    if tree.root_node.has_error:
        logger.warning("Parse completed with errors: root=%s", tree.root_node.type)
    else:
        logger.debug("Parse succeeded: root=%s", tree.root_node.type)
    return tree


def parse_program(
    source: bytes,
    syntax: Syntax = Syntax.JAVASCRIPT,
    kind: Optional[ProgramKind] = None,
) -> Program:
    """
    Parse source into a Program.

    When kind is None it is detected from the top-level statements.
    """
    tree = parse_bytes(source, parser=create_parser(syntax))
    if kind is None:
        kind = detect_program_kind(tree.root_node)
    return Program(kind=kind, syntax=syntax, tree=tree, source=source)


def parse_file(path: Path) -> Optional[Program]:
    """
    Parse a source file into a Program, choosing the grammar by extension.

    Returns:
        The program, or None if the file could not be read.

    Raises:
        UnsupportedFileError: the extension has no grammar.
    """
    syntax, kind = syntax_for_path(path)
    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read file %s: %s", path, e)
        return None
    program = parse_program(source, syntax=syntax, kind=kind)
    logger.info(
        "Parsed file %s: syntax=%s kind=%s success=%s",
        path,
        syntax.value,
        program.kind.value,
        not program.has_errors,
    )
    return program
