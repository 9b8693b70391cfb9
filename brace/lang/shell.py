"""Handles interactive/command-line mode for the brace interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """brace interpreter shell."""
    intro = "brace interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def is_open(line):
        """Whether line has more opening braces than closing ones, i.e. needs a continuation."""
        return line.count("{") > line.count("}")

    def default(self, line):
        """Executes arbitrary brace statements, or prints the value of an expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            try:
                line = f"{self._tmp_line}\n{line}" if self._tmp_line else line

                if Shell.is_open(line):
                    self._tmp_line = line
                    self.prompt = self.secondary_prompt
                    return

                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                value = self.sess.add(line)
                if value is not None:
                    print(value, file=self.stdout)
            except KeyboardInterrupt:
                self._tmp_line = ""  # an interrupt abandons any pending continuation
                self.prompt = self._tmp_prompt
                raise

    def do_vars(self, arg):
        """Prints every variable binding."""
        if arg:
            return self.default(f"vars {arg}")  # 'vars' is a legal variable name
        for name, value in self.sess.results.items():
            print(f"{name} = {value}", file=self.stdout)

    def do_reset(self, arg):
        """Forgets every variable binding."""
        if arg:
            return self.default(f"reset {arg}")
        self.sess.reset()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")
        print("Welcome to the brace interpreter!\n\n"
              "brace is a small imperative language over 32-bit integers. Statements are \n"
              "assignments ('x = 1 + 2;'), conditionals ('if (x) y = 1;' or \n"
              "'if x then y = 1; else y = 2; endif') and blocks ('{ ... }'). Typing an \n"
              "expression prints its value.\n\n"
              "Commands: 'vars' lists bindings, 'reset' forgets them, 'exit' quits.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")
        return True
