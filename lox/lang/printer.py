"""Textual forms of Lox trees and values.

Two renderings exist for numbers: literals in the tree keep one decimal digit (the way the parse command shows them:
`4.0`), while runtime values drop an integral fraction (the way print shows them: `4`).

Tree format:
```
Literal               -> <literal>                   ; 4.0, hello, true, nil
Unary                 -> (<op> <right>)
Binary | Logical      -> (<op> <left> <right>)
Grouping              -> (group <expr>)
Variable              -> variable <name>
Assign                -> (= <name> <value>)

Expression            -> <expr>
Print                 -> (print <expr>)
Var                   -> (var <name> <initializer>)
Block                 -> (block <decl> <decl> ...)
If                    -> (if <condition> <then> <else>?)
While                 -> (while <condition> <body>)
```
"""

from lox.lang import grammar as ast
from lox.lang.lexical import format_literal


def stringify(value):
    """Display form of a runtime value, as written by print."""
    if isinstance(value, float) and value.is_integer():
        return f"{value:.0f}"
    return format_literal(value)


def parenthesize(name, *parts):
    return "(" + " ".join([name] + [render(part) for part in parts]) + ")"


def render(node):
    """Fully parenthesized prefix form of an expression or declaration. Independent of the source's whitespace."""
    if isinstance(node, ast.Literal):
        return format_literal(node.value)

    elif isinstance(node, ast.Unary):
        return parenthesize(node.operator.lexeme, node.right)

    elif isinstance(node, (ast.Binary, ast.Logical)):
        return parenthesize(node.operator.lexeme, node.left, node.right)

    elif isinstance(node, ast.Grouping):
        return parenthesize("group", node.expression)

    elif isinstance(node, ast.Variable):
        return f"variable {node.name.lexeme}"

    elif isinstance(node, ast.Assign):
        return f"(= {node.name.lexeme} {render(node.value)})"

    elif isinstance(node, ast.Expression):
        return render(node.expression)

    elif isinstance(node, ast.Print):
        return parenthesize("print", node.expression)

    elif isinstance(node, ast.Var):
        return f"(var {node.name.lexeme} {render(node.initializer)})"

    elif isinstance(node, ast.Block):
        return parenthesize("block", *node.declarations)

    elif isinstance(node, ast.If):
        if node.else_branch is None:
            return parenthesize("if", node.condition, node.then_branch)
        return parenthesize("if", node.condition, node.then_branch, node.else_branch)

    elif isinstance(node, ast.While):
        return parenthesize("while", node.condition, node.body)

    raise TypeError(f"cannot render {type(node).__name__}")
