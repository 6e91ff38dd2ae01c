"""Session control for the Lox language. A Session composes the lexer, parser and evaluator for each command, either
over a whole script or (from the shell) one entry at a time.

Stages report their own errors through the session's ErrorHandler and hand back an error flag; the session turns a
raised flag into a StageFailure so nothing past a broken stage runs.
"""

import sys

from lox.lang.error import SourceUnavailable, StageFailure
from lox.lang.evaluator import Interpreter
from lox.lang.lexical import scan
from lox.lang.parser import parse
from lox.lang.printer import render, stringify


class Session:
    """Governs a Lox session. The interpreter (and so the global scope) lives as long as the session."""
    COMMANDS = ("tokenize", "parse", "evaluate", "run")

    def __init__(self, error_handler, stdout=None):
        self.error_handler = error_handler
        self.interpreter = Interpreter(stdout=stdout)

        self.results = []  # values echoed by the last evaluate

        self._stdout = stdout

    @property
    def stdout(self):
        if self._stdout is None:
            return sys.stdout
        return self._stdout

    @staticmethod
    def load(path):
        """Returns the contents of the script at path. Bytes that are not valid UTF-8 become U+FFFD, which the scanner
        then reports as an unexpected character.
        """
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as file:
                return file.read()
        except OSError:
            raise SourceUnavailable(f"'{path}' could not be opened") from None

    def dispatch(self, command, source):
        """Runs source through command (one of Session.COMMANDS)."""
        if command not in Session.COMMANDS:
            raise ValueError(f"unknown command '{command}'")
        getattr(self, command)(source)

    def tokenize(self, source):
        """Prints every token, errors included in the scan. Fails after printing if any error was reported."""
        tokens, had_error = scan(source, self.error_handler)
        for token in tokens:
            print(token, file=self.stdout)

        if had_error:
            raise StageFailure()

    def parse(self, source):
        """Prints the parenthesized form of every declaration in source."""
        for declaration in self.declarations(source):
            print(render(declaration), file=self.stdout)

    def evaluate(self, source):
        """Runs source, printing the value of every top-level expression statement along with print's output."""
        self.results = []
        for declaration in self.declarations(source):
            for value in self.interpreter.execute(declaration):
                self.results.append(value)
                print(stringify(value), file=self.stdout)

    def run(self, source):
        """Runs source. Only print statements write to stdout."""
        self.interpreter.interpret(self.declarations(source))

    def declarations(self, source):
        """Scans and parses source. Both stages always run, so every static error is reported in one go."""
        tokens, had_lexical_error = scan(source, self.error_handler)
        declarations, had_syntax_error = parse(tokens, self.error_handler)

        if had_lexical_error or had_syntax_error:
            raise StageFailure()
        return declarations
