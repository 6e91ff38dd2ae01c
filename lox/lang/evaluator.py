"""Tree-walking evaluator for the Lox language. Expressions are reduced by plain structural recursion: each node's
children are evaluated first, then combined. Statements are executed for their side effects, and also hand back the
values of the expression statements they ran (used by the evaluate command and the shell to echo results).

Runtime values are Python objects: float (every number), str, bool and None (nil).
"""

import operator
import sys
from contextlib import contextmanager

from lox.lang import grammar as ast
from lox.lang.environment import Environment
from lox.lang.error import LoxRuntimeError, UndefinedVariable
from lox.lang.lexical import TokenType
from lox.lang.printer import stringify


NUMERIC = {
    TokenType.PLUS: operator.add,
    TokenType.MINUS: operator.sub,
    TokenType.STAR: operator.mul,
    TokenType.SLASH: operator.truediv,
    TokenType.GREATER: operator.gt,
    TokenType.GREATER_EQUAL: operator.ge,
    TokenType.LESS: operator.lt,
    TokenType.LESS_EQUAL: operator.le,
}


def is_truthy(value):
    """nil and false are falsy, everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Values of different types are never equal, so 1 == true is false even though Python says otherwise."""
    return type(left) is type(right) and left == right


def is_number(value):
    return isinstance(value, float)  # bool is not a float subclass


class Interpreter:
    """Evaluates declarations against a global Environment that persists between calls to interpret/execute, so a
    shell can run a program one line at a time. print writes to stdout (sys.stdout unless given).
    """

    def __init__(self, environment=None, stdout=None):
        if environment is None:
            environment = Environment()

        self.globals = environment
        self.environment = environment

        self._stdout = stdout

    @property
    def stdout(self):
        if self._stdout is None:
            return sys.stdout
        return self._stdout

    def interpret(self, declarations):
        """Executes declarations in order and returns the values their expression statements produced. Raises
        LoxRuntimeError on the first operation that fails; the values produced so far are lost.
        """
        values = []
        for declaration in declarations:
            values.extend(self.execute(declaration))
        return values

    def execute(self, stmt):
        """Executes one declaration. Returns the list of values produced by the expression statements it ran."""
        if isinstance(stmt, ast.Expression):
            return [self.evaluate(stmt.expression)]

        elif isinstance(stmt, ast.Print):
            value = self.evaluate(stmt.expression)
            print(stringify(value), file=self.stdout)
            return []

        elif isinstance(stmt, ast.Var):
            self.environment.declare(stmt.name.lexeme, self.evaluate(stmt.initializer))
            return []

        elif isinstance(stmt, ast.Block):
            with self.scope():
                return self.interpret(stmt.declarations)

        elif isinstance(stmt, ast.If):
            if is_truthy(self.evaluate(stmt.condition)):
                return self.execute(stmt.then_branch)
            elif stmt.else_branch is not None:
                return self.execute(stmt.else_branch)
            return []

        elif isinstance(stmt, ast.While):
            while is_truthy(self.evaluate(stmt.condition)):
                self.execute(stmt.body)
            return []

        raise TypeError(f"cannot execute {type(stmt).__name__}")

    def evaluate(self, expr):
        """Reduces expr to a runtime value."""
        if isinstance(expr, ast.Literal):
            return expr.value

        elif isinstance(expr, ast.Grouping):
            return self.evaluate(expr.expression)

        elif isinstance(expr, ast.Unary):
            return self._unary(expr)

        elif isinstance(expr, ast.Binary):
            return self._binary(expr)

        elif isinstance(expr, ast.Logical):
            left = self.evaluate(expr.left)

            if expr.operator.kind is TokenType.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left

            return self.evaluate(expr.right)

        elif isinstance(expr, ast.Variable):
            try:
                return self.environment.lookup(expr.name.lexeme)
            except UndefinedVariable as error:
                raise UndefinedVariable(error.name, expr.name.line) from None

        elif isinstance(expr, ast.Assign):
            value = self.evaluate(expr.value)
            try:
                self.environment.assign(expr.name.lexeme, value)
            except UndefinedVariable as error:
                raise UndefinedVariable(error.name, expr.name.line) from None
            return value

        raise TypeError(f"cannot evaluate {type(expr).__name__}")

    @contextmanager
    def scope(self):
        """Runs the body of the with statement in a new scope nested in the current one."""
        previous = self.environment
        self.environment = previous.child()
        try:
            yield self.environment
        finally:
            self.environment = previous

    def _unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.kind is TokenType.BANG:
            return not is_truthy(right)

        if not is_number(right):
            raise LoxRuntimeError("Operand must be a number.", expr.operator.line)
        return -right

    def _binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        kind = expr.operator.kind

        if kind is TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind is TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if is_number(left) and is_number(right):
            if kind is TokenType.SLASH and right == 0:
                raise LoxRuntimeError("Division by zero.", expr.operator.line)
            return NUMERIC[kind](left, right)

        if isinstance(left, str) and isinstance(right, str) and kind is TokenType.PLUS:
            return left + right

        raise LoxRuntimeError("Invalid operands for binary operator.", expr.operator.line)
