"""Implementation of the Lox language: lexer, parser, evaluator and the session/shell that drive them."""
