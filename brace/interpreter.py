"""brace interpreter.

Basic program flow, each stage running to completion (or to the first fault) before the next one starts:
    1. Lexer: turns the source text into tokens on demand (see brace/pure/lexical.py)
    2. Parser: builds an AST from the tokens with one token of lookahead (see brace/pure/parser.py)
    3. Evaluator: walks the AST, reading and writing one flat environment (see brace/pure/evaluator.py)

interpret is the whole pipeline. It prints nothing and never exits: the result is either the final variable
bindings or a GenericException subclass (see brace/lang/error.py).
"""

from contextlib import contextmanager

from brace.lang.error import NestingTooDeep
from brace.pure.evaluator import Environment, Evaluator
from brace.pure.parser import parse


@contextmanager
def depth_guard():
    """Turns Python stack exhaustion on pathological input into a NestingTooDeep fault."""
    try:
        yield
    except RecursionError:
        raise NestingTooDeep() from None


def interpret(source, env=None, max_depth=None, bare=False, error_handler=None):
    """Runs program source and returns the final bindings as an insertion-ordered dict. env, if given, is the
    Environment to run against (it is mutated in place).
    """
    if env is None:
        env = Environment()

    with depth_guard():
        tree = parse(source, max_depth, bare)
        Evaluator(env, error_handler).execute(tree)

    return env.snapshot()
