"""Unit tests for the no-delete-var rule."""

import pytest

from lintel.context import Context
from lintel.errors import MalformedTreeError
from lintel.parser import ProgramKind, Syntax, parse_program
from lintel.rules.no_delete_var import (
    NoDeleteVarHint,
    NoDeleteVarMessage,
    NoDeleteVarRule,
    NoDeleteVarVisitor,
)


def _run_rule(source: str, syntax: Syntax = Syntax.JAVASCRIPT) -> list:
    """Parse source, build a context, run NoDeleteVarRule, return diagnostics."""
    program = parse_program(source.encode("utf-8"), syntax=syntax)
    ctx = Context("test.js", program)
    NoDeleteVarRule().lint(ctx, program)
    return ctx.diagnostics


def test_rule_identity():
    rule = NoDeleteVarRule()
    assert rule.code() == "no-delete-var"
    assert rule.tags() == frozenset({"recommended"})
    assert "### Invalid:" in rule.docs()
    assert "### Valid:" in rule.docs()


def test_message_and_hint_text():
    assert NoDeleteVarMessage.UNEXPECTED.value == "Variables shouldn't be deleted"
    assert NoDeleteVarHint.REMOVE.value == "Remove the deletion statement"


def test_delete_var_reported_at_delete_expression():
    diagnostics = _run_rule('var someVar = "someVar"; delete someVar;')
    assert len(diagnostics) == 1
    d = diagnostics[0]
    assert d.code == "no-delete-var"
    assert d.message == "Variables shouldn't be deleted"
    assert d.hint == "Remove the deletion statement"
    assert (d.line, d.col) == (1, 25)
    assert (d.span.lo, d.span.hi) == (25, 39)


@pytest.mark.parametrize("keyword", ["var", "let", "const"])
def test_every_declaration_form(keyword):
    diagnostics = _run_rule(f"{keyword} v = 1;\ndelete v;")
    assert len(diagnostics) == 1
    assert diagnostics[0].line == 2
    assert diagnostics[0].col == 0


def test_undeclared_identifier_reported():
    assert len(_run_rule("delete someGlobal;")) == 1


def test_property_delete_is_valid():
    assert _run_rule("var obj = { a: 1 }; delete obj.a;") == []


def test_computed_property_delete_is_valid():
    assert _run_rule('var obj = { a: 1 }; delete obj["a"]; delete obj[key];') == []


def test_parenthesized_identifier_not_reported():
    assert _run_rule("delete (x);") == []


@pytest.mark.parametrize("op", ["!", "-", "+", "~", "typeof ", "void "])
def test_other_unary_operators_inert(op):
    assert _run_rule(f"var a = 1; {op}a;") == []


def test_nested_deletes_each_checked():
    diagnostics = _run_rule("delete (delete x);")
    assert len(diagnostics) == 1
    assert diagnostics[0].col == 8


def test_delete_inside_other_unary_found():
    assert len(_run_rule("!(delete x);")) == 1


def test_occurrences_at_any_depth_in_source_order():
    source = (
        "delete a;\n"
        "function f() { delete b; if (x) { delete c; } }\n"
        "const g = () => delete d;\n"
        "class K { m() { return [delete e, delete this.p]; } }\n"
    )
    diagnostics = _run_rule(source)
    assert [(d.line, d.col) for d in diagnostics] == [(1, 0), (2, 15), (2, 34), (3, 16), (4, 24)]


def test_deterministic():
    source = "delete a; delete b.c; delete d;"
    assert _run_rule(source) == _run_rule(source)


def test_module_program():
    program = parse_program(b"import a from './a.js';\ndelete a;")
    assert program.kind is ProgramKind.MODULE
    ctx = Context("mod.js", program)
    NoDeleteVarRule().lint(ctx, program)
    assert len(ctx.diagnostics) == 1


@pytest.mark.parametrize("kind", [ProgramKind.MODULE, ProgramKind.SCRIPT])
def test_program_kind_does_not_change_findings(kind):
    program = parse_program(b"var v = 1;\ndelete v;\ndelete v.p;", kind=kind)
    visitor = NoDeleteVarVisitor(Context("t.js", program))
    visitor.visit_program(program)
    assert visitor.program_kind is kind
    assert [d.line for d in visitor.context.diagnostics] == [2]


def test_delete_undefined_reported():
    assert len(_run_rule("delete undefined;")) == 1


def test_delete_shadowed_undefined_reported():
    diagnostics = _run_rule("function f() { var undefined = 1; delete undefined; }")
    assert len(diagnostics) == 1
    assert diagnostics[0].col == 34


def test_typescript_source():
    diagnostics = _run_rule("let v: number = 1;\ndelete v;", syntax=Syntax.TYPESCRIPT)
    assert len(diagnostics) == 1
    assert diagnostics[0].line == 2


def test_tree_not_mutated():
    program = parse_program(b"var v; delete v;")
    before = str(program.root_node)
    NoDeleteVarRule().lint(Context("t.js", program), program)
    assert str(program.root_node) == before


class _BrokenUnary:
    type = "unary_expression"

    def child_by_field_name(self, name):
        return None


def test_missing_argument_is_malformed():
    program = parse_program(b"")
    visitor = NoDeleteVarVisitor(Context("t.js", program))
    with pytest.raises(MalformedTreeError):
        visitor.visit_unary_expression(_BrokenUnary(), None)
