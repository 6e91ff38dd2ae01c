"""Recursive-descent parser for the Lox language: turns the scanner's tokens into the declarations in grammar.py.

Grammar, from lowest to highest precedence:

```
<program>     ::= <declaration>* EOF
<declaration> ::= <var_decl> | <statement>
<var_decl>    ::= "var" IDENTIFIER ("=" <expression>)? ";"
<statement>   ::= <expr_stmt> | <print_stmt> | <block> | <if_stmt> | <while_stmt> | <for_stmt>
<expr_stmt>   ::= <expression> ";"
<print_stmt>  ::= "print" <expression> ";"
<block>       ::= "{" <declaration>* "}"
<if_stmt>     ::= "if" "(" <expression> ")" <statement> ("else" <statement>)?
<while_stmt>  ::= "while" "(" <expression> ")" <statement>
<for_stmt>    ::= "for" "(" (<var_decl> | <expr_stmt> | ";") <expression>? ";" <expression>? ")" <statement>
                                                    ; desugared into a Block holding a While

<expression>  ::= <assignment>
<assignment>  ::= <logic_or> ("=" <assignment>)?   ; right-associative, target must be a variable
<logic_or>    ::= <logic_and> ("or" <logic_and>)*
<logic_and>   ::= <equality> ("and" <equality>)*
<equality>    ::= <comparison> (("!=" | "==") <comparison>)*
<comparison>  ::= <term> ((">" | ">=" | "<" | "<=") <term>)*
<term>        ::= <factor> (("-" | "+") <factor>)*
<factor>      ::= <unary> (("/" | "*") <unary>)*
<unary>       ::= ("!" | "-") <unary> | <primary>
<primary>     ::= STRING | NUMBER | "true" | "false" | "nil" | IDENTIFIER | "(" <expression> ")"
```

Every binary tier associates left: abcd = (((a b) c) d).

Error recovery: a missing token is reported and the parser skips to the next statement boundary before carrying on
with the next declaration. A token that cannot start an expression is reported and ends the parse altogether.
"""

from lox.lang import grammar as ast
from lox.lang.error import ParseError
from lox.lang.lexical import TokenType


# tokens that begin a statement, used to resynchronize after an error
STATEMENT_STARTS = {
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
}

# operator tiers, from lowest to highest precedence
EQUALITY = (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL)
COMPARISON = (TokenType.GREATER, TokenType.GREATER_EQUAL, TokenType.LESS, TokenType.LESS_EQUAL)
TERM = (TokenType.MINUS, TokenType.PLUS)
FACTOR = (TokenType.SLASH, TokenType.STAR)
UNARY = (TokenType.BANG, TokenType.MINUS)

LITERALS = {
    TokenType.TRUE: True,
    TokenType.FALSE: False,
    TokenType.NIL: None,
}


class Parser:
    """Parses a token list (ending with EOF) into declarations. Errors go to reporter, like in Scanner."""

    def __init__(self, tokens, reporter):
        self.tokens = tokens
        self.reporter = reporter
        self.had_error = False

        self._current = 0

    def parse(self):
        """Parses the whole program. Returns (declarations, had_error). On a fatal error, declarations holds what was
        parsed before it.
        """
        declarations = []
        try:
            while not self._at_end():
                declaration = self.declaration()
                if declaration is not None:
                    declarations.append(declaration)
        except ParseError as error:
            if not error.fatal:
                raise

        return declarations, self.had_error

    def declaration(self):
        """Parses a declaration. Returns None if it could not be parsed (the error has been reported and the parser
        has skipped ahead to the next statement).
        """
        try:
            if self._match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except ParseError as error:
            if error.fatal:
                raise
            self.synchronize()
            return None

    def var_declaration(self):
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = ast.Literal(None)
        if self._match(TokenType.EQUAL):
            initializer = self.expression()

        self._consume(TokenType.SEMICOLON, "Expect ';' after variable declaration.")
        return ast.Var(name, initializer)

    def statement(self):
        if self._match(TokenType.PRINT):
            return self.print_statement()
        if self._match(TokenType.LEFT_BRACE):
            return ast.Block(self.block())
        if self._match(TokenType.IF):
            return self.if_statement()
        if self._match(TokenType.WHILE):
            return self.while_statement()
        if self._match(TokenType.FOR):
            return self.for_statement()
        return self.expression_statement()

    def print_statement(self):
        value = self.expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return ast.Print(value)

    def expression_statement(self):
        expr = self.expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return ast.Expression(expr)

    def block(self):
        """Parses the declarations of a block whose "{" was already consumed, up to and including the "}"."""
        declarations = []
        while not self._check(TokenType.RIGHT_BRACE) and not self._at_end():
            declaration = self.declaration()
            if declaration is not None:
                declarations.append(declaration)

        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        return declarations

    def if_statement(self):
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self.expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self.statement()
        else_branch = None
        if self._match(TokenType.ELSE):
            else_branch = self.statement()

        return ast.If(condition, then_branch, else_branch)

    def while_statement(self):
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self.expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after condition.")
        return ast.While(condition, self.statement())

    def for_statement(self):
        """There is no For node: the loop becomes {initializer; while (condition) {body; increment;}}."""
        self._consume(TokenType.LEFT_PAREN, "Expect '(' after 'for'.")

        if self._match(TokenType.SEMICOLON):
            initializer = None
        elif self._match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = ast.Literal(True)
        if not self._check(TokenType.SEMICOLON):
            condition = self.expression()
        self._consume(TokenType.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self._consume(TokenType.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = [self.statement()]
        if increment is not None:
            body.append(ast.Expression(increment))

        loop = ast.While(condition, ast.Block(body))
        if initializer is None:
            return ast.Block([loop])
        return ast.Block([initializer, loop])

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self.assignment()

            if isinstance(expr, ast.Variable):
                return ast.Assign(expr.name, value)

            # reported without unwinding
            self.error(equals, "Invalid assignment target.")

        return expr

    def logic_or(self):
        expr = self.logic_and()
        while self._match(TokenType.OR):
            operator = self._previous()
            expr = ast.Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.equality()
        while self._match(TokenType.AND):
            operator = self._previous()
            expr = ast.Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        return self._binary(self.comparison, EQUALITY)

    def comparison(self):
        return self._binary(self.term, COMPARISON)

    def term(self):
        return self._binary(self.factor, TERM)

    def factor(self):
        return self._binary(self.unary, FACTOR)

    def unary(self):
        if self._match(*UNARY):
            operator = self._previous()
            return ast.Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        token = self._peek()

        if token.kind in LITERALS:
            self._advance()
            return ast.Literal(LITERALS[token.kind])

        if token.kind in (TokenType.NUMBER, TokenType.STRING):
            self._advance()
            return ast.Literal(token.literal)

        if token.kind is TokenType.IDENTIFIER:
            self._advance()
            return ast.Variable(token)

        if token.kind is TokenType.LEFT_PAREN:
            self._advance()
            expr = self.expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return ast.Grouping(expr)

        raise self.error(token, "Expect expression.", fatal=True)

    def synchronize(self):
        """Discards tokens until just after a ";" or just before a token that starts a statement."""
        self._advance()

        while not self._at_end():
            if self._previous().kind is TokenType.SEMICOLON:
                return
            if self._peek().kind in STATEMENT_STARTS:
                return
            self._advance()

    def error(self, token, message, fatal=False):
        """Reports message at token and returns (does not raise) the matching ParseError."""
        self.had_error = True

        if token.kind is TokenType.EOF:
            self.reporter.report(token.line, " at end ", message)
        else:
            self.reporter.report(token.line, f" at '{token.lexeme}' ", message)

        return ParseError(message, token.line, fatal=fatal)

    def _binary(self, operand, operators):
        """Parses a left-associative tier: operand (operator operand)*."""
        expr = operand()
        while self._match(*operators):
            operator = self._previous()
            expr = ast.Binary(expr, operator, operand())
        return expr

    def _consume(self, kind, message):
        if self._check(kind):
            return self._advance()
        raise self.error(self._peek(), message)

    def _match(self, *kinds):
        for kind in kinds:
            if self._check(kind):
                self._advance()
                return True
        return False

    def _check(self, kind):
        return self._peek().kind is kind

    def _advance(self):
        if not self._at_end():
            self._current += 1
        return self._previous()

    def _at_end(self):
        return self._peek().kind is TokenType.EOF

    def _peek(self):
        return self.tokens[self._current]

    def _previous(self):
        return self.tokens[self._current - 1]


def parse(tokens, reporter):
    """Shorthand for Parser(tokens, reporter).parse()."""
    return Parser(tokens, reporter).parse()
