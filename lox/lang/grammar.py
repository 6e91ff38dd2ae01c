"""Abstract syntax tree for the Lox language, shared by the parser, the printer and the evaluator.

Nodes are frozen dataclasses: the parser builds them bottom-up and nothing mutates them afterwards. Operators and
names are kept as the Tokens they came from so every node can be traced back to a line of the script.

```
<expr> ::= Literal | Unary | Binary | Grouping | Variable | Assign | Logical
<stmt> ::= Expression | Print | Block | If | While
<decl> ::= Var | <stmt>                          ; a program is a list of <decl>
```
"""

from dataclasses import dataclass
from typing import List, Optional

from lox.lang.lexical import Token


class Expr:
    """Superclass of every expression node."""


class Stmt:
    """Superclass of every statement and declaration node."""


@dataclass(frozen=True)
class Literal(Expr):
    value: object  # float, str, bool or None


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting "and"/"or". Kept apart from Binary because the right operand is evaluated lazily."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Block(Stmt):
    declarations: List[Stmt]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Var(Stmt):
    """Variable declaration. The parser fills in Literal(None) when there is no initializer."""
    name: Token
    initializer: Expr
