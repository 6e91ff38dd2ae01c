import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout

from lox.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.addCleanup(self.directory.cleanup)

    def script(self, source):
        path = os.path.join(self.directory.name, "script.lox")
        with open(path, "w") as file:
            file.write(source)
        return path

    def run_main(self, *argv):
        """Returns (stdout, stderr, exit status) of running main with argv."""
        stdout, stderr = io.StringIO(), io.StringIO()
        status = 0
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                main(list(argv))
            except SystemExit as exc:
                status = exc.code
        return stdout.getvalue(), stderr.getvalue(), status

    def test_commands(self):
        cases = {
            ("evaluate", "1 + 2 * 3;"): "7\n",
            ("run", "1 + 2 * 3; print \"done\";"): "done\n",
            ("parse", "print -1;"): "(print (- 1.0))\n",
            ("tokenize", "x"): "IDENTIFIER x null\nEOF  null\n",
            ("evaluate", "var a = 1; { var a = 2; } print a;"): "1\n",
        }
        for (command, source), expected in cases.items():
            self.assertEqual((expected, "", 0), self.run_main(command, self.script(source)), command)

    def test_exit_statuses(self):
        cases = {
            ("evaluate", "1 +;"): ("[line 1] Error:  at ';' Expect expression.\n", 65),
            ("tokenize", "@"): ("[line 1] Error: Unexpected character: @\n", 65),
            ("run", "print 1 / 0;"): ("Division by zero.\n[line 1]\n", 70),
            ("evaluate", "\n\nnil + 1;"): ("Invalid operands for binary operator.\n[line 3]\n", 70),
        }
        for (command, source), (expected, status) in cases.items():
            __, stderr, code = self.run_main(command, self.script(source), "--no-color")
            self.assertEqual((expected, status), (stderr, code), command)

    def test_invalid_utf8_is_lexical_error(self):
        path = os.path.join(self.directory.name, "binary.lox")
        with open(path, "wb") as file:
            file.write(b"print 1;\n\xff\n")

        stdout, stderr, status = self.run_main("run", path, "--no-color")

        self.assertEqual(("", 65), (stdout, status))
        self.assertEqual("[line 2] Error: Unexpected character: �\n", stderr)

    def test_missing_file(self):
        path = os.path.join(self.directory.name, "missing.lox")
        __, stderr, status = self.run_main("run", path, "--no-color")

        self.assertEqual(66, status)
        self.assertEqual(f"'{path}' could not be opened\n", stderr)

    def test_bad_arguments(self):
        should_fail = [[], ["compile", "x.lox"], ["run", "a.lox", "b.lox"]]
        for case in should_fail:
            __, __, status = self.run_main(*case)
            self.assertEqual(2, status, case)


if __name__ == '__main__':
    unittest.main()
