# Deleting variables: flags `delete <identifier>`, which only works on object properties.

from __future__ import annotations

from enum import Enum
from typing import Optional

from tree_sitter import Node as TSNode

from lintel.context import Context
from lintel.errors import MalformedTreeError
from lintel.parser import Program
from lintel.rules.base import Rule
from lintel.visitor import Visitor

CODE = "no-delete-var"

# tree-sitter gives `undefined` its own node type, but it is still a binding name
BARE_NAME_KINDS = frozenset({"identifier", "undefined"})


class NoDeleteVarMessage(str, Enum):
    UNEXPECTED = "Variables shouldn't be deleted"


class NoDeleteVarHint(str, Enum):
    REMOVE = "Remove the deletion statement"


class NoDeleteVarRule(Rule):
    CODE = CODE
    TAGS = frozenset({"recommended"})
    DOCS = """Disallows the deletion of variables

`delete` is used to remove a property from an object.  Variables declared via
`var`, `let` and `const` cannot be deleted (`delete` will return false).  Setting
`strict` mode on will raise a syntax error when attempting to delete a variable.

### Invalid:
```typescript
const a = 1;
let b = 2;
var c = 3;
delete a; // would return false
delete b; // would return false
delete c; // would return false
```

### Valid:
```typescript
var obj = {
  a: 1,
};
delete obj.a; // returns true;
```
"""

    def lint(self, context: Context, program: Program) -> None:
        NoDeleteVarVisitor(context).visit_program(program)


class NoDeleteVarVisitor(Visitor):
    def visit_unary_expression(self, node: TSNode, parent: Optional[TSNode]) -> None:
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if operator is None or argument is None:
            raise MalformedTreeError(node.type, "missing operator or argument")
        if operator.type != "delete":
            return

        # member and subscript access delete a property, which is fine
        if argument.type in BARE_NAME_KINDS:
            self.context.add_diagnostic_with_hint(
                node,
                CODE,
                NoDeleteVarMessage.UNEXPECTED,
                NoDeleteVarHint.REMOVE,
            )
