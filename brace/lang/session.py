"""Session control for the brace language. Runs whole programs (file or command-line mode) or single lines (shell
mode) against one environment that lives as long as the session.
"""

from brace.interpreter import depth_guard, interpret
from brace.lang.error import GenericException
from brace.pure.evaluator import Environment, Evaluator
from brace.pure.lexical import Lexer
from brace.pure.parser import Parser, parse
from brace.pure.syntax import Expression


class Session:
    """Governs a brace session, with control over the variable environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, max_depth=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.max_depth = max_depth  # None means Parser.MAX_DEPTH

        self.env = Environment()

        if path == Session.SH_FILE:
            self.error_handler.fatal = False

    @staticmethod
    def read(path):
        """Returns the contents of the file at path."""
        try:
            with open(path, "r") as file:
                return file.read()
        except OSError:
            raise GenericException("'{}' could not be opened", path, diagnosis=False) from None

    @property
    def results(self):
        """Insertion-ordered copy of the current bindings."""
        return self.env.snapshot()

    def tree(self, source, bare=False):
        """Parses source without running it."""
        self.error_handler.register_source(self.path, source)  # in case error is raised
        tree = parse(source, self.max_depth, bare)
        self.error_handler.remove_source(self.path)  # error was not raised
        return tree

    def run(self, source, bare=False):
        """Runs a whole program against this session's environment and returns the resulting bindings. Will raise any
        fault that is encountered.
        """
        self.error_handler.register_source(self.path, source)

        results = interpret(source, self.env, self.max_depth, bare, self.error_handler)
        if not results:
            self.error_handler.warn("'{}' does not bind any variables", self.path)

        self.error_handler.remove_source(self.path)
        return results

    def add(self, line):
        """Runs one line of shell input. Returns the value of a bare expression, otherwise None."""
        self.error_handler.register_source(self.path, line)

        with depth_guard():
            node = Parser(Lexer(line), self.max_depth).parse_line()
            evaluator = Evaluator(self.env, self.error_handler)
            value = None
            if isinstance(node, Expression):
                value = evaluator.evaluate(node)
            else:
                evaluator.execute(node)

        self.error_handler.remove_source(self.path)
        return value

    def reset(self):
        """Forgets every binding."""
        self.env = Environment()
