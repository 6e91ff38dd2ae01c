"""Lox tree-walking interpreter.

For reference:
- "tokens": flat lexical units produced by lang/lexical.py
- "declarations": top-level program units (variable declarations or statements) produced by lang/parser.py

Basic program flow:
    1. Lexer: scans the source into tokens, reporting unexpected characters and unterminated strings
    2. Parser: recursive descent over the tokens, producing the AST defined in lang/grammar.py
        - for the grammar rules, see the lang/parser.py docstring
    3. Evaluator: walks the AST directly with a lexically scoped environment (no bytecode)

lang/session.py composes the stages for each command, and lang/error.py renders every diagnostic.
"""

__version__ = "0.1.0"
