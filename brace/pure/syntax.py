"""Abstract syntax tree for the brace language.

Expressions are Number, Variable and BinaryOp; statements are Assignment, If and Block. Nodes are immutable and own
their children exclusively, so a tree can never contain cycles. line/column are kept for diagnostics only and take no
part in equality, which makes two parses of equivalent text compare equal.

str(node) gives the canonical source form of a node:

```
Number      -> 3
Variable    -> x
BinaryOp    -> (<left> <op> <right>)
Assignment  -> x = <expr>;
If          -> if (<condition>) <then>                              ; without else
             | if <condition> then <then> else <otherwise> endif    ; with else
Block       -> { <statement> ... }
```

Parsing the canonical form of a tree gives back an equal tree.
"""

from dataclasses import dataclass, field, fields
from typing import Optional, Tuple


class Node:
    """Superclass of every AST node."""

    @property
    def nodes(self):
        """Child nodes, in source order."""
        return ()

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>(<attr>=<value>, nodes=[
            <Node>(<attr>=<value>, nodes=[
                ...
                <Node>(<attr>=<value>)  # <-- if nodes is empty
            ])
        ])
        """
        attrs = []
        for attr in fields(self):
            value = getattr(self, attr.name)
            if attr.compare and not isinstance(value, (Node, tuple)) and value is not None:
                attrs.append(f"{attr.name}={value!r}")

        result = f"{'    ' * indents}{type(self).__name__}({', '.join(attrs)}"
        if self.nodes:
            result += ", nodes=[" if attrs else "nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"


class Expression(Node):
    pass


class Statement(Node):
    pass


@dataclass(frozen=True)
class Number(Expression):
    value: int
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=0, compare=False, repr=False)

    def __str__(self):
        if self.value < 0:
            return f"(0 - {-self.value})"  # no negative literals in the grammar
        return str(self.value)


@dataclass(frozen=True)
class Variable(Expression):
    name: str
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=0, compare=False, repr=False)

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class BinaryOp(Expression):
    op: str
    left: Expression
    right: Expression
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=0, compare=False, repr=False)

    @property
    def nodes(self):
        return self.left, self.right

    def __str__(self):
        return f"({self.left} {self.op} {self.right})"


@dataclass(frozen=True)
class Assignment(Statement):
    name: str
    expr: Expression
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=0, compare=False, repr=False)

    @property
    def nodes(self):
        return (self.expr,)

    def __str__(self):
        return f"{self.name} = {self.expr};"


@dataclass(frozen=True)
class If(Statement):
    condition: Expression
    then: Statement
    otherwise: Optional[Statement] = None
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=0, compare=False, repr=False)

    @property
    def nodes(self):
        if self.otherwise is None:
            return self.condition, self.then
        return self.condition, self.then, self.otherwise

    def __str__(self):
        if self.otherwise is None:
            return f"if ({self.condition}) {self.then}"
        return f"if {self.condition} then {self.then} else {self.otherwise} endif"


@dataclass(frozen=True)
class Block(Statement):
    statements: Tuple[Statement, ...] = ()
    line: int = field(default=0, compare=False, repr=False)
    column: int = field(default=0, compare=False, repr=False)

    @property
    def nodes(self):
        return self.statements

    def __str__(self):
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(stmt) for stmt in self.statements) + " }"
