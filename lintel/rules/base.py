# Rule interface (abstract base class): defines the contract all lint rules implement.
# Concrete rules (no_delete_var, ...) subclass Rule, set the class attributes and
# implement lint().

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from lintel.context import Context
from lintel.parser import Program


class Rule(ABC):
    """
    Abstract base class for all lint rules.

    Subclasses must define:
    - CODE: str — permanent diagnostic code (e.g. "no-delete-var"); used in
      ignore comments and config, so it never changes once released
    - TAGS: frozenset[str] — grouping labels such as "recommended"
    - DOCS: str — markdown explanation with Invalid/Valid examples
    - lint(context, program) — walk the program and report into context

    Rules carry no instance state. code(), tags() and docs() can be called
    without running any analysis (documentation and config tooling do so).
    """

    CODE: ClassVar[str]
    TAGS: ClassVar[frozenset[str]] = frozenset()
    DOCS: ClassVar[str] = ""

    def code(self) -> str:
        return self.CODE

    def tags(self) -> frozenset[str]:
        return self.TAGS

    def docs(self) -> str:
        return self.DOCS

    @abstractmethod
    def lint(self, context: Context, program: Program) -> None:
        """
        Analyze one program and report violations into context.

        Args:
            context: Diagnostic sink for this program. Only append to it.
            program: The parsed tree, in module or script form. Never mutated.

        Raises:
            MalformedTreeError: a node lacks a child its grammar guarantees.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.CODE}>"
