import unittest

from lox.lang.lexical import Scanner, Token, TokenType, format_literal, scan


class Recorder:
    """Reporter that keeps errors instead of printing them."""

    def __init__(self):
        self.errors = []

    def report(self, line, where, message):
        self.errors.append((line, where, message))


def kinds(source):
    tokens, __ = scan(source, Recorder())
    return [token.kind for token in tokens]


class ScannerTestCase(unittest.TestCase):

    def test_single_characters(self):
        cases = {
            "(": TokenType.LEFT_PAREN,
            ")": TokenType.RIGHT_PAREN,
            "{": TokenType.LEFT_BRACE,
            "}": TokenType.RIGHT_BRACE,
            ",": TokenType.COMMA,
            ".": TokenType.DOT,
            "-": TokenType.MINUS,
            "+": TokenType.PLUS,
            ";": TokenType.SEMICOLON,
            "*": TokenType.STAR,
            "/": TokenType.SLASH,
        }
        for case, expected in cases.items():
            self.assertEqual([expected, TokenType.EOF], kinds(case), case)

        self.assertEqual([TokenType.LEFT_PAREN] * 3 + [TokenType.RIGHT_PAREN, TokenType.EOF], kinds("((()"))

    def test_one_or_two_characters(self):
        cases = {
            "!": [TokenType.BANG],
            "!=": [TokenType.BANG_EQUAL],
            "=": [TokenType.EQUAL],
            "==": [TokenType.EQUAL_EQUAL],
            "<": [TokenType.LESS],
            "<=": [TokenType.LESS_EQUAL],
            ">": [TokenType.GREATER],
            ">=": [TokenType.GREATER_EQUAL],
            "===": [TokenType.EQUAL_EQUAL, TokenType.EQUAL],
            "!!=": [TokenType.BANG, TokenType.BANG_EQUAL],
            "< =": [TokenType.LESS, TokenType.EQUAL],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenType.EOF], kinds(case), case)

    def test_token_str(self):
        cases = {
            "42": "NUMBER 42 42.0",
            "3.14": "NUMBER 3.14 3.14",
            "0.00001": "NUMBER 0.00001 0.00001",
            "007.500": "NUMBER 007.500 7.5",
            "\"hello world\"": "STRING \"hello world\" hello world",
            "foo_bar": "IDENTIFIER foo_bar null",
            "and": "AND and null",
            "(": "LEFT_PAREN ( null",
            "<=": "LESS_EQUAL <= null",
        }
        for case, expected in cases.items():
            tokens, __ = scan(case, Recorder())
            self.assertEqual(expected, str(tokens[0]), case)
            self.assertEqual("EOF  null", str(tokens[-1]), case)

    def test_empty_source(self):
        tokens, had_error = scan("", Recorder())
        self.assertEqual([Token(TokenType.EOF, "", None, 1)], tokens)
        self.assertFalse(had_error)

    def test_numbers(self):
        cases = {
            "12": [(TokenType.NUMBER, 12.0)],
            "1.5": [(TokenType.NUMBER, 1.5)],
            "12.": [(TokenType.NUMBER, 12.0), (TokenType.DOT, None)],
            ".5": [(TokenType.DOT, None), (TokenType.NUMBER, 5.0)],
            "1.2.3": [(TokenType.NUMBER, 1.2), (TokenType.DOT, None), (TokenType.NUMBER, 3.0)],
            "-4": [(TokenType.MINUS, None), (TokenType.NUMBER, 4.0)],
        }
        for case, expected in cases.items():
            tokens, __ = scan(case, Recorder())
            self.assertEqual(expected, [(token.kind, token.literal) for token in tokens[:-1]], case)

    def test_keywords_and_identifiers(self):
        keywords = "and class else false for fun if nil or print return super this true var while"
        for case in keywords.split():
            tokens, __ = scan(case, Recorder())
            self.assertEqual(TokenType[case.upper()], tokens[0].kind, case)

        should_be_identifiers = ["andy", "_", "_x1", "Print", "classy", "x_Y_9", "orchid"]
        for case in should_be_identifiers:
            tokens, __ = scan(case, Recorder())
            self.assertEqual([TokenType.IDENTIFIER, TokenType.EOF], [token.kind for token in tokens], case)
            self.assertEqual(case, tokens[0].lexeme, case)
            self.assertIsNone(tokens[0].literal, case)

        self.assertEqual([TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.EOF], kinds("1abc"))

    def test_strings(self):
        tokens, had_error = scan("\"a\nb\" x", Recorder())
        self.assertFalse(had_error)
        self.assertEqual("a\nb", tokens[0].literal)
        self.assertEqual("\"a\nb\"", tokens[0].lexeme)
        self.assertEqual(2, tokens[1].line)

        tokens, __ = scan("\"\"", Recorder())
        self.assertEqual("", tokens[0].literal)

        tokens, __ = scan("\"// not a comment\"", Recorder())
        self.assertEqual("// not a comment", tokens[0].literal)

    def test_comments_and_whitespace(self):
        cases = {
            "// only a comment": [],
            "( // comment ) ignored": [TokenType.LEFT_PAREN],
            " \t\r(\n)": [TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN],
            "/ /": [TokenType.SLASH, TokenType.SLASH],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenType.EOF], kinds(case), case)

    def test_line_numbers(self):
        tokens, __ = scan("a\nb // comment\n\nc", Recorder())
        self.assertEqual([1, 2, 4, 4], [token.line for token in tokens])

    def test_unexpected_characters(self):
        recorder = Recorder()
        tokens, had_error = Scanner("$(#\n@", recorder).scan_tokens()

        self.assertTrue(had_error)
        self.assertEqual([TokenType.LEFT_PAREN, TokenType.EOF], [token.kind for token in tokens])
        self.assertEqual([
            (1, "", "Unexpected character: $"),
            (1, "", "Unexpected character: #"),
            (2, "", "Unexpected character: @"),
        ], recorder.errors)

        should_fail = ["é", "λ", "[", "&", "|", "'"]
        for case in should_fail:
            recorder = Recorder()
            tokens, had_error = scan(case, recorder)
            self.assertTrue(had_error, case)
            self.assertEqual([(1, "", f"Unexpected character: {case}")], recorder.errors, case)

    def test_unterminated_string(self):
        recorder = Recorder()
        tokens, had_error = scan("(\n\"abc\ndef", recorder)

        self.assertTrue(had_error)
        self.assertEqual([TokenType.LEFT_PAREN, TokenType.EOF], [token.kind for token in tokens])
        self.assertEqual([(3, "", "Unterminated string.")], recorder.errors)

    def test_format_literal(self):
        # list of pairs: 0.0 == False would collapse dict keys
        cases = [
            (4.0, "4.0"),
            (0.0, "0.0"),
            (1234.5, "1234.5"),
            (0.1, "0.1"),
            (0.00001, "0.00001"),
            (0.0001234, "0.0001234"),
            (-1.5e-07, "-0.00000015"),
            (float("inf"), "inf"),
            ("text", "text"),
            (True, "true"),
            (False, "false"),
            (None, "nil"),
        ]
        for case, expected in cases:
            self.assertEqual(expected, format_literal(case), case)


if __name__ == '__main__':
    unittest.main()
