"""Command-line front end of the Lox interpreter: runs a script through one of the session commands, or starts the
interactive shell when no script is given. Installed as the lox console script.

Every error is routed through the ErrorHandler context manager, which prints it and exits with its status: 65 for
lexical/syntax errors, 70 for runtime errors.
"""

import argparse

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def main(argv=None):
    """Runs the Lox interpreter. argv defaults to sys.argv[1:]."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the Lox language.")
        parser.add_argument("command", choices=Session.COMMANDS, help="what to do with the script")
        parser.add_argument("file", help="script to run (if empty, goes to interactive mode)", nargs="?")
        parser.add_argument("--no-color", help="never color diagnostics", action="store_true")
        args = parser.parse_args(argv)

        error_handler.color = not args.no_color
        sess = Session(error_handler)

        if args.file is not None:
            sess.dispatch(args.command, Session.load(args.file))
        else:
            Shell(sess, args.command).cmdloop()
