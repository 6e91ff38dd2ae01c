"""Lexical analysis for the Lox language: a single left-to-right pass turning source text into tokens.

Tokens can be loosely defined as follows:

```
<single>     ::= "(" | ")" | "{" | "}" | "," | "." | "-" | "+" | ";" | "*" | "/"
<double>     ::= "!" | "!=" | "=" | "==" | "<" | "<=" | ">" | ">="   ; longest match wins
<string>     ::= '"' <char>* '"'                                     ; may span lines, no escapes
<number>     ::= <digit>+ ("." <digit>+)?                            ; a trailing "." is a DOT token
<identifier> ::= [A-Za-z_] [A-Za-z0-9_]*                             ; keywords are looked up afterwards

<comment>    ::= "//" <char>* "\n"
```
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, auto

from lox.lang.error import LexicalError


class TokenType(Enum):
    # single-character tokens
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    COMMA = auto()
    DOT = auto()
    MINUS = auto()
    PLUS = auto()
    SEMICOLON = auto()
    SLASH = auto()
    STAR = auto()

    # one or two character tokens
    BANG = auto()
    BANG_EQUAL = auto()
    EQUAL = auto()
    EQUAL_EQUAL = auto()
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()

    # literals
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # keywords
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    EOF = auto()


KEYWORDS = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

SINGLES = {
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
}

# first character: (type if followed by "=", type otherwise)
DOUBLES = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}

WHITESPACE = {" ", "\t", "\r"}


def format_literal(value):
    """Canonical rendering of a literal as written in the source: integral numbers keep exactly one decimal digit
    (4 -> '4.0'), nil is 'nil', booleans are lowercase and strings are their raw text.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return f"{value:.1f}"
        if math.isfinite(value):
            # shortest round-trip digits, never in exponent form (1e-05 -> 0.00001)
            return format(Decimal(repr(value)), "f")
        return repr(value)
    return str(value)


@dataclass(frozen=True)
class Token:
    kind: TokenType
    lexeme: str
    literal: object
    line: int

    def __str__(self):
        literal = "null" if self.literal is None else format_literal(self.literal)
        return f"{self.kind.name} {self.lexeme} {literal}"


def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


class Scanner:
    """Scans source into tokens. Errors are sent to reporter (anything with a report(line, where, message) method)
    and scanning resumes with the next character, so every error in the source is reported in one pass.
    """

    def __init__(self, source, reporter):
        self.source = source
        self.reporter = reporter

        self.tokens = []
        self.had_error = False

        self._start = 0
        self._current = 0
        self._line = 1

    def scan_tokens(self):
        """Scans the whole source. Returns (tokens, had_error); tokens always ends with an EOF token."""
        while not self._at_end():
            self._start = self._current
            try:
                self._scan_token()
            except LexicalError as error:
                self.had_error = True
                self.reporter.report(error.line, "", error.msg)

        self.tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self.tokens, self.had_error

    def _scan_token(self):
        char = self._advance()

        if char in SINGLES:
            self._add_token(SINGLES[char])

        elif char in DOUBLES:
            matched, unmatched = DOUBLES[char]
            self._add_token(matched if self._match("=") else unmatched)

        elif char == "/":
            if self._match("/"):
                self._skip_comment()
            else:
                self._add_token(TokenType.SLASH)

        elif char in WHITESPACE:
            pass

        elif char == "\n":
            self._line += 1

        elif char == "\"":
            self._string()

        elif is_digit(char):
            self._number()

        elif is_alpha(char):
            self._identifier()

        else:
            raise LexicalError(f"Unexpected character: {char}", self._line)

    def _skip_comment(self):
        # stops before the newline: _scan_token counts lines
        while self._peek() != "\n" and not self._at_end():
            self._current += 1

    def _string(self):
        while self._peek() != "\"" and not self._at_end():
            if self._peek() == "\n":
                self._line += 1
            self._current += 1

        if self._at_end():
            raise LexicalError("Unterminated string.", self._line)

        self._current += 1  # closing "
        self._add_token(TokenType.STRING, self.source[self._start + 1:self._current - 1])

    def _number(self):
        while is_digit(self._peek()):
            self._current += 1

        if self._peek() == "." and is_digit(self._peek_next()):
            self._current += 1
            while is_digit(self._peek()):
                self._current += 1

        self._add_token(TokenType.NUMBER, float(self.source[self._start:self._current]))

    def _identifier(self):
        while is_alpha(self._peek()) or is_digit(self._peek()):
            self._current += 1

        text = self.source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _add_token(self, kind, literal=None):
        lexeme = self.source[self._start:self._current]
        self.tokens.append(Token(kind, lexeme, literal, self._line))

    def _advance(self):
        char = self.source[self._current]
        self._current += 1
        return char

    def _match(self, expected):
        if self._at_end() or self.source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _peek(self):
        if self._at_end():
            return "\0"
        return self.source[self._current]

    def _peek_next(self):
        if self._current + 1 >= len(self.source):
            return "\0"
        return self.source[self._current + 1]

    def _at_end(self):
        return self._current >= len(self.source)


def scan(source, reporter):
    """Shorthand for Scanner(source, reporter).scan_tokens()."""
    return Scanner(source, reporter).scan_tokens()
