"""Handles interactive mode for the Lox interpreter. Uses cmd as backend."""

import cmd


def is_balanced(line):
    """Whether every "(" and "{" in line is closed. Naive: brackets inside strings count too."""
    return line.count("(") + line.count("{") <= line.count(")") + line.count("}")


class Shell(cmd.Cmd):
    """Lox interpreter shell. Every entry goes through the session's command, so variables survive between lines."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information, 'exit' to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, command="evaluate", *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.sess.error_handler.fatal = False  # errors should not end the shell
        self.command = command

        self._tmp_line = ""

    def default(self, line):
        """Runs an arbitrary Lox entry. An entry with unclosed brackets continues on the next line."""
        line = self._tmp_line + line

        if not is_balanced(line):
            self._tmp_line = line + "\n"
            self.prompt = self.secondary_prompt
            return

        self._tmp_line = ""
        self.prompt = self._tmp_prompt

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.sess.dispatch(self.command, line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Lox interpreter!\n\n"
              "Lox is a small dynamically typed scripting language. This shell supports \n"
              "numbers, strings, booleans and nil, variables with block scoping, and \n"
              "if/while/for statements.\n\n"
              f"Entries run in '{self.command}' mode. Try typing 'var a = 1;' and then \n"
              "'a + 2;'. An entry with unclosed brackets continues on the next line.", file=self.stdout)

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
            self.sess.error_handler.warn(f"Unrecognized token: '{arg}'")
            return False
        return True
