"""
File system traversal: walk directories and collect JavaScript/TypeScript sources.

Typical usage:
    from pathlib import Path
    from lintel.traversal import find_source_files

    sources = find_source_files(Path("./web"))
    sources = find_source_files(Path("./web"), ignore_dirs={"dist", "vendor"})
    scripts = find_source_files(Path("./web"), extensions={".js"})
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Set

from lintel.parser import EXTENSIONS

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS: frozenset[str] = frozenset(EXTENSIONS)

# Declaration files carry only types; nothing for value-level rules to check.
DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")

DEFAULT_IGNORE_DIRS: Set[str] = {
    # Build output
    "build",
    "dist",
    "out",
    "coverage",
    ".next",
    ".nuxt",
    # Dependencies
    "node_modules",
    "bower_components",
    "vendor",
    "third_party",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Editors
    ".vscode",
    ".idea",
    # Caches
    ".cache",
    "__pycache__",
}


def is_source_file(path: Path, extensions: Optional[Iterable[str]] = None) -> bool:
    """
    Check if a file is a lintable source file.

    Examples:
        >>> is_source_file(Path("app.ts"))
        True
        >>> is_source_file(Path("types.d.ts"))
        False
        >>> is_source_file(Path("app.ts"), extensions={".js"})
        False
    """
    allowed = SOURCE_EXTENSIONS if extensions is None else {e.lower() for e in extensions}
    name = path.name.lower()
    if name.endswith(DECLARATION_SUFFIXES):
        return False
    return path.suffix.lower() in allowed


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """Only the directory name is compared, case-sensitively."""
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    extensions: Optional[Iterable[str]] = None,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[Path]:
    """
    Find every lintable source file below root. Symbolic links are never
    followed, so a link cycle cannot make the walk loop.

    Args:
        root: Directory to search.
        ignore_dirs: Directory names to prune. If None, uses DEFAULT_IGNORE_DIRS.
        extensions: Allowed extensions (with dot). If None, all known ones.
        filter_fn: Extra predicate; a file is kept only if it returns True.

    Returns:
        Matching paths, sorted.

    Raises:
        FileNotFoundError: root does not exist.
        NotADirectoryError: root is not a directory.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()
    if not root.exists():
        raise FileNotFoundError(f"Root directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Searching %s for JavaScript/TypeScript sources", root)

    found: list[Path] = []
    pending = [root]
    while pending:
        directory = pending.pop()
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", directory, e)
            continue

        for entry in entries:
            if entry.is_symlink():
                continue
            if entry.is_dir():
                if not should_ignore_directory(entry, ignore_dirs):
                    pending.append(entry)
            elif is_source_file(entry, extensions) and (filter_fn is None or filter_fn(entry)):
                found.append(entry)

    found.sort()
    logger.info("Found %d source file(s) under %s", len(found), root)
    return found


def collect_targets(targets: Iterable[Path], ignore_dirs: Optional[Set[str]] = None) -> list[Path]:
    """
    Expand CLI targets: files are kept as given, directories are searched.

    Raises:
        FileNotFoundError: a target does not exist.
    """
    files: list[Path] = []
    for target in targets:
        if target.is_dir():
            found = find_source_files(target, ignore_dirs=ignore_dirs)
            if not found:
                logger.warning("No source files found under %s", target)
            files.extend(found)
        elif target.is_file():
            files.append(target)
        else:
            raise FileNotFoundError(f"No such file or directory: {target}")
    return files
