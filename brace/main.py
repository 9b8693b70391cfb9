"""Runs brace programs from a file, the command line or standard input, or starts the interactive shell. Uses the
error handling context manager. Called from the brace console script.
"""

import argparse
import sys

from brace.lang.error import ErrorHandler
from brace.lang.session import Session
from brace.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="brace", description="Interpreter for the brace expression language.")
    parser.add_argument("file", help="file to interpret and run, '-' for stdin (if empty, goes to command-line mode)",
                        nargs="?")
    parser.add_argument("-c", "--command", help="program passed in as a string")
    parser.add_argument("--bare", action="store_true", help="program is statements without the surrounding braces")
    parser.add_argument("--max-depth", type=int, default=None, help="maximum nesting of parentheses and statements")
    parser.add_argument("--ast", action="store_true", help="print the syntax tree instead of running the program")
    parser.add_argument("-v", "--verbose", action="store_true", help="print every assignment as it is executed")
    return parser


def main(argv=None):
    """Runs brace interpreter. Called from brace executable script."""
    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        error_handler.verbose = args.verbose

        if args.command is not None:
            path, source = "<command>", args.command
        elif args.file == "-" or (args.file is None and not sys.stdin.isatty()):
            path, source = "<stdin>", sys.stdin.read()
        elif args.file is not None:
            path, source = args.file, Session.read(args.file)
        else:
            Shell(Session(error_handler, Session.SH_FILE, args.max_depth)).cmdloop()
            return

        sess = Session(error_handler, path, args.max_depth)
        if args.ast:
            print(sess.tree(source, args.bare).display())
            return

        results = sess.run(source, args.bare)

        print("Final variables:")
        for name, value in results.items():
            print(f"{name} = {value}")


if __name__ == "__main__":
    main()
