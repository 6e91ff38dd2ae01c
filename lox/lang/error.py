"""Error handling for the Lox language. Only LoxErrors should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Static errors (lexical and syntax) are reported in-line through ErrorHandler.report while the scanner and parser
keep going; runtime errors abort the run and are rendered when they reach ErrorHandler.
"""

import sys

from termcolor import colored


EX_DATAERR = 65   # lexical or syntax error in the script
EX_NOINPUT = 66   # script could not be read
EX_SOFTWARE = 70  # runtime error while evaluating
EX_INTERRUPTED = 130


class LoxError(Exception):
    """Base class for interpreter errors. line anchors the error to the script (None if there is no sensible line)
    and status is the exit status used if the error ends the run.
    """
    status = 1

    def __init__(self, msg="", line=None, status=None, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.internal = internal

        if status is not None:
            self.status = status


class LexicalError(LoxError):
    """Unexpected character or unterminated string. Recoverable: scanning resumes after it is reported."""
    status = EX_DATAERR


class ParseError(LoxError):
    """Raised by the parser to unwind to the enclosing declaration. A fatal ParseError aborts the whole parse."""
    status = EX_DATAERR

    def __init__(self, msg="", line=None, fatal=False):
        super().__init__(msg, line)
        self.fatal = fatal


class StageFailure(LoxError):
    """Raised by a session once a stage has reported its errors. Carries no message: everything that went wrong was
    already printed by the reporter.
    """
    status = EX_DATAERR


class LoxRuntimeError(LoxError):
    """Type mismatch, division by zero or any other operation that cannot be evaluated."""
    status = EX_SOFTWARE


class UndefinedVariable(LoxRuntimeError):

    def __init__(self, name, line=None):
        super().__init__(f"Undefined variable {name}.", line)
        self.name = name


class SourceUnavailable(LoxError):
    status = EX_NOINPUT


class ErrorHandler:
    """Context manager that renders Lox errors/warnings and turns them into exit statuses. It is also the reporter
    handed to the scanner and parser, which call report for every static error they find.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, color=True, stream=None):
        self.fatal = fatal
        self.color = color
        self.status = 0  # status of the last error thrown, kept for non-fatal mode

        self._stream = stream

    @property
    def stream(self):
        """Stream diagnostics are written to. Looked up on every use so a replaced sys.stderr is honoured."""
        if self._stream is None:
            return sys.stderr
        return self._stream

    def paint(self, text, color):
        """Returns text bolded and colored if the diagnostics stream is a terminal."""
        if self.color and self.stream.isatty():
            return colored(text, color, attrs=["bold"])
        return text

    def report(self, line, where, message):
        """Prints a static error. where is "" for lexical errors, " at end " or " at '<lexeme>' " for syntax errors.
        Does not stop the caller: scanner and parser keep their own error flag.
        """
        label = self.paint("Error:", ErrorHandler.ERROR)
        print(f"[line {line}] {label} {where}{message}", file=self.stream)

    def warn(self, message):
        """Prints a warning. Warnings never change the exit status."""
        print(self.paint("warning:", ErrorHandler.WARNING) + " " + message, file=self.stream)

    def throw(self, error):
        """Renders error (a LoxError) and exits with its status if fatal. Errors without a message (StageFailure)
        were reported already, so only their status matters.
        """
        if error.msg:
            error_msg = self.paint(error.msg, ErrorHandler.ERROR)
            if error.internal:
                error_msg = self.paint("[internal] ", ErrorHandler.ERROR) + error_msg

            print(error_msg, file=self.stream)
            if error.line is not None:
                print(f"[line {error.line}]", file=self.stream)

        self.status = error.status
        if self.fatal:
            sys.exit(error.status)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxError("keyboard interrupt", status=EX_INTERRUPTED))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxRuntimeError("Maximum recursion depth exceeded."))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError(f"unknown error: '{exc_type.__name__}: {exc_val}'", status=EX_SOFTWARE, internal=True))
            do_exit = True

        return not do_exit
