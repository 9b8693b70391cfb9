"""Tree-walking evaluation of brace ASTs against a single, flat environment.

Any nonzero value is true. Operands are evaluated left to right. Every arithmetic result must fit in a 32-bit signed
integer, and '/' truncates toward zero. A fault stops execution at once; assignments already made are kept.
"""

import operator
from collections.abc import Mapping

from brace.lang.error import DivisionByZero, GenericException, IntegerOverflow, UndefinedVariable
from brace.pure.lexical import INT_MAX, INT_MIN
from brace.pure.syntax import Assignment, BinaryOp, Block, If, Number, Variable


def divide(left, right):
    """Integer division truncating toward zero. right must be nonzero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Environment(Mapping):
    """Variable bindings of one program execution. Read-only as a Mapping; bindings are only added or overwritten
    through assign, never removed.
    """

    def __init__(self, bindings=None):
        self._bindings = dict(bindings) if bindings else {}

    def lookup(self, variable):
        """Value of Variable node variable, or UndefinedVariable if it was never assigned."""
        try:
            return self._bindings[variable.name]
        except KeyError:
            raise UndefinedVariable(variable.name, variable.line or None, variable.column or None) from None

    def assign(self, name, value):
        self._bindings[name] = value

    def snapshot(self):
        """Insertion-ordered copy of the bindings."""
        return dict(self._bindings)

    def __getitem__(self, name):
        return self._bindings[name]

    def __iter__(self):
        return iter(self._bindings)

    def __len__(self):
        return len(self._bindings)

    def __repr__(self):
        return f"Environment({self._bindings!r})"


class Evaluator:
    """Evaluates expressions and executes statements against env. error_handler, if given, is told about every
    assignment (see ErrorHandler.register_step).
    """
    OPERATORS = {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": divide,
    }

    def __init__(self, env=None, error_handler=None):
        self.env = Environment() if env is None else env
        self.error_handler = error_handler

    def evaluate(self, node):
        """Value of expression node."""
        if isinstance(node, Number):
            return node.value

        if isinstance(node, Variable):
            return self.env.lookup(node)

        if isinstance(node, BinaryOp):
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)

            if node.op == "/" and right == 0:
                raise DivisionByZero(str(node), node.line or None, node.column or None)

            value = Evaluator.OPERATORS[node.op](left, right)
            if not INT_MIN <= value <= INT_MAX:
                raise IntegerOverflow(str(node), node.line or None, node.column or None, literal=False)
            return value

        raise GenericException("cannot evaluate '{}'", repr(node), internal=True)

    def execute(self, node):
        """Executes statement node. Returns the assigned value for an Assignment, the outcome of the branch taken for
        an If, and None for a Block.
        """
        if isinstance(node, Assignment):
            value = self.evaluate(node.expr)
            self.env.assign(node.name, value)
            if self.error_handler is not None:
                self.error_handler.register_step("=", f"{node.name} = {value}")
            return value

        if isinstance(node, If):
            if self.evaluate(node.condition) != 0:
                return self.execute(node.then)
            if node.otherwise is not None:
                return self.execute(node.otherwise)
            return None

        if isinstance(node, Block):
            for statement in node.statements:
                self.execute(statement)
            return None

        raise GenericException("cannot execute '{}'", repr(node), internal=True)
