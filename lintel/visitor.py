"""
Visitor dispatch: one pre-order walk over a tree-sitter tree with per-node-kind hooks.

Rules subclass Visitor and define ``visit_<kind>(node, parent)`` methods for the
node kinds they care about; every other node is walked without a callback.
Hooks never decide whether children are visited, so each named node in the
tree is reached exactly once.

Typical usage:
    class DebuggerVisitor(Visitor):
        def visit_debugger_statement(self, node, parent):
            self.context.add_diagnostic(node, "no-debugger", "...")

    DebuggerVisitor(context).visit_program(program)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, ClassVar, Optional

from tree_sitter import Node as TSNode

from lintel.context import Context
from lintel.parser import Program, ProgramKind

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    """Node kinds with a dedicated hook. Values are tree-sitter node type names."""

    COMMENT = "comment"
    # statements
    EXPRESSION_STATEMENT = "expression_statement"
    VARIABLE_DECLARATION = "variable_declaration"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    FUNCTION_DECLARATION = "function_declaration"
    GENERATOR_FUNCTION_DECLARATION = "generator_function_declaration"
    CLASS_DECLARATION = "class_declaration"
    STATEMENT_BLOCK = "statement_block"
    IF_STATEMENT = "if_statement"
    FOR_STATEMENT = "for_statement"
    FOR_IN_STATEMENT = "for_in_statement"
    WHILE_STATEMENT = "while_statement"
    DO_STATEMENT = "do_statement"
    SWITCH_STATEMENT = "switch_statement"
    TRY_STATEMENT = "try_statement"
    RETURN_STATEMENT = "return_statement"
    THROW_STATEMENT = "throw_statement"
    BREAK_STATEMENT = "break_statement"
    CONTINUE_STATEMENT = "continue_statement"
    LABELED_STATEMENT = "labeled_statement"
    WITH_STATEMENT = "with_statement"
    DEBUGGER_STATEMENT = "debugger_statement"
    EMPTY_STATEMENT = "empty_statement"
    IMPORT_STATEMENT = "import_statement"
    EXPORT_STATEMENT = "export_statement"
    # expressions
    IDENTIFIER = "identifier"
    THIS = "this"
    UNARY_EXPRESSION = "unary_expression"
    UPDATE_EXPRESSION = "update_expression"
    BINARY_EXPRESSION = "binary_expression"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    AUGMENTED_ASSIGNMENT_EXPRESSION = "augmented_assignment_expression"
    TERNARY_EXPRESSION = "ternary_expression"
    CALL_EXPRESSION = "call_expression"
    NEW_EXPRESSION = "new_expression"
    MEMBER_EXPRESSION = "member_expression"
    SUBSCRIPT_EXPRESSION = "subscript_expression"
    PARENTHESIZED_EXPRESSION = "parenthesized_expression"
    SEQUENCE_EXPRESSION = "sequence_expression"
    AWAIT_EXPRESSION = "await_expression"
    YIELD_EXPRESSION = "yield_expression"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION_EXPRESSION = "function_expression"
    CLASS = "class"
    OBJECT = "object"
    ARRAY = "array"
    STRING = "string"
    TEMPLATE_STRING = "template_string"
    NUMBER = "number"
    REGEX = "regex"
    # typescript value-level constructs
    AS_EXPRESSION = "as_expression"
    NON_NULL_EXPRESSION = "non_null_expression"
    ENUM_DECLARATION = "enum_declaration"


# Pure type syntax; no runtime semantics.
TYPE_KINDS = frozenset(
    {
        "type_annotation",
        "opting_type_annotation",
        "omitting_type_annotation",
        "asserts_annotation",
        "type_predicate_annotation",
        "type_alias_declaration",
        "interface_declaration",
        "type_arguments",
        "type_parameters",
        "implements_clause",
        "predefined_type",
        "type_identifier",
        "nested_type_identifier",
        "generic_type",
        "union_type",
        "intersection_type",
        "object_type",
        "array_type",
        "tuple_type",
        "function_type",
        "constructor_type",
        "conditional_type",
        "parenthesized_type",
        "lookup_type",
        "literal_type",
        "index_type_query",
        "type_query",
        "readonly_type",
        "infer_type",
        "template_literal_type",
        "existential_type",
    }
)

Hook = Callable[["Visitor", TSNode, Optional[TSNode]], None]


class Visitor:
    """
    Base visitor bound to one Context.

    Attributes:
        context: Where hooks report diagnostics.
        skip_types: When true (default) type-annotation subtrees are not
            entered at all. Set to False on a subclass that inspects types.
        ancestors: Nodes from the root down to the parent of the node being
            visited. Valid only inside a hook.
        program_kind: MODULE or SCRIPT, set by the entry point in use.
    """

    skip_types: ClassVar[bool] = True
    _hooks: ClassVar[dict[str, Hook]] = {}

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        known = {kind.value for kind in NodeKind}
        hooks: dict[str, Hook] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                if not attr.startswith("visit_") or not callable(value):
                    continue
                if attr in _ENTRY_POINTS:
                    continue
                kind = attr[len("visit_") :]
                if kind in known:
                    hooks[kind] = value
                else:
                    raise TypeError(f"{cls.__name__}.{attr} does not match a known node kind")
        cls._hooks = hooks

    def __init__(self, context: Context) -> None:
        self.context = context
        self.ancestors: list[TSNode] = []
        self.program_kind: Optional[ProgramKind] = None

    def visit_program(self, program: Program) -> None:
        """Dispatch to visit_module or visit_script by the program's kind."""
        if program.kind is ProgramKind.MODULE:
            self.visit_module(program.root_node)
        else:
            self.visit_script(program.root_node)

    def visit_module(self, root: TSNode) -> None:
        self.program_kind = ProgramKind.MODULE
        self.walk(root)

    def visit_script(self, root: TSNode) -> None:
        self.program_kind = ProgramKind.SCRIPT
        self.walk(root)

    def visit_node(self, node: TSNode, parent: Optional[TSNode]) -> None:
        """Called for every node kind without a dedicated hook. Does nothing."""

    def walk(self, root: TSNode, parent: Optional[TSNode] = None) -> None:
        """
        Visit root and all of its named descendants in pre-order, children
        left to right. Iterative, so deep trees do not exhaust the stack.
        """
        hooks = self._hooks
        ancestors = self.ancestors
        ancestors.clear()
        stack: list[tuple[TSNode, Optional[TSNode], int]] = [(root, parent, 0)]
        visited = 0
        while stack:
            node, node_parent, depth = stack.pop()
            del ancestors[depth:]
            if self.skip_types and node.type in TYPE_KINDS:
                continue
            hook = hooks.get(node.type)
            if hook is not None:
                hook(self, node, node_parent)
            else:
                self.visit_node(node, node_parent)
            visited += 1
            ancestors.append(node)
            children = node.named_children
            for child in reversed(children):
                stack.append((child, node, depth + 1))
        ancestors.clear()
        logger.debug("%s visited %d node(s)", type(self).__name__, visited)


_ENTRY_POINTS = frozenset(
    name for name in vars(Visitor) if name.startswith("visit_")
)
