"""Error handling for the brace language. Every fault the core can produce is a GenericException subclass; if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

The core (lexer, parser, evaluator) only raises these faults. Rendering them is left to ErrorHandler, which is used by
the driver and the interactive shell.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error message so that it can be used to throw a brace fault. exprs are the snippets substituted into
    msg; exprs[0] should be the offending snippet. line/column locate the fault in the source, if known.
    """

    def __init__(self, msg, exprs=None, line=None, column=None, length=1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.template = msg
        self.exprs = [str(expr) for expr in exprs]
        self.expr = self.exprs[0]

        self.line = line
        self.column = column
        self.length = max(length, 1)  # needed for error display

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    @property
    def kind(self):
        return type(self).__name__

    @property
    def position(self):
        if self.line is None:
            return ""
        return f" at line {self.line}, col {self.column}"

    @property
    def msg(self):
        return self.template.format(*self.exprs) + self.position

    def colored_msg(self):
        """Same as msg, but with the expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs)) + self.position

    def __str__(self):
        return self.msg


class InvalidCharacter(GenericException):
    """Lexer found a character that starts no token."""

    def __init__(self, char, line=None, column=None):
        super().__init__("invalid character '{}'", char, line, column)
        self.char = char


class IntegerOverflow(GenericException):
    """A literal, or the result of an arithmetic operation, does not fit the integer representation."""

    def __init__(self, text, line=None, column=None, literal=True):
        if literal:
            msg = "integer literal '{}' does not fit in a 32-bit integer"
        else:
            msg = "result of '{}' does not fit in a 32-bit integer"
        super().__init__(msg, text, line, column, length=len(text) if literal else 1)
        self.text = text


class UnexpectedToken(GenericException):
    """Parser's lookahead did not match the grammar rule in force."""

    def __init__(self, expected, actual):
        super().__init__("expected {}, got {}", (expected, actual.describe()), actual.line, actual.column,
                         length=len(actual.text))
        self.expected = expected
        self.actual = actual


class UnexpectedEndOfInput(UnexpectedToken):
    """Grammar required a token but the token stream was exhausted. actual is the END token."""


class UndefinedVariable(GenericException):
    """Variable read before it was ever assigned."""

    def __init__(self, name, line=None, column=None):
        super().__init__("undefined variable '{}'", name, line, column, length=len(name))
        self.name = name


class DivisionByZero(GenericException):
    """Right operand of '/' evaluated to zero."""

    def __init__(self, expr, line=None, column=None):
        super().__init__("division by zero in '{}'", str(expr), line, column)


class NestingTooDeep(GenericException):
    """Program nests expressions or statements deeper than allowed."""

    def __init__(self, limit=None, line=None, column=None):
        if limit is None:
            super().__init__("program is nested too deeply to evaluate", diagnosis=False)
        else:
            super().__init__("nesting exceeds {} levels", str(limit), line, column)
        self.limit = limit


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print brace faults/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    @property
    def stream(self):
        return sys.stderr

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = None

    def register_source(self, path, source):
        """Registers source text in traceback given path. Should be called prior to Session run/add."""
        self.traceback[path] = source

    def remove_source(self, path):
        """Removes source text from traceback given path. Should be called after a successful Session run/add."""
        self.traceback[path] = None

    def register_step(self, label, expr):
        """Prints an evaluation step in verbose mode."""
        if self.verbose:
            print(colored(f"{label} ", attrs=["dark"]) + str(expr))

    @staticmethod
    def diagnose(error, source, warning=False):
        """Returns the offending source line with the faulty part highlighted, and a caret underneath it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        lines = source.splitlines()
        if error.line is None or not 0 < error.line <= len(lines):
            return ""

        line = lines[error.line - 1]
        start = min(error.column - 1, len(line))
        end = start + error.length

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (error.length - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, msg, exprs=None):
        """Prints a warning message, prefixed by the file it concerns."""
        warning = GenericException(msg, exprs)

        file = next(iter(self.traceback), "<unknown>")
        warning_msg = colored(f"{file}: ", attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.colored_msg()

        print(warning_msg, file=self.stream)

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: source representing where the error originated.
        """
        error_msg = ""
        source = None
        for file, text in self.traceback.items():  # assumes dict is insertion-ordered
            if text is not None:
                if error.line is not None:
                    error_msg += f"  File '{file}', line {error.line}:\n"
                source = text

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.colored_msg()
        print(error_msg, file=self.stream)

        if source is not None and not error.internal and error.diagnosis:
            diagnosis = ErrorHandler.diagnose(error, source)
            if diagnosis:
                print(diagnosis, file=self.stream)

        if self.fatal:
            sys.exit(1)
        for file in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.traceback[file] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt", diagnosis=False))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("maximum recursion depth exceeded", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            self.throw(GenericException("unknown error: '{}: {}'", (exc_type.__name__, exc_val), internal=True))
            do_exit = True

        return not do_exit
