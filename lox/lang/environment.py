"""Variable scopes for the Lox evaluator.

Scoping is lexical: every block gets a child Environment. A declaration binds the name in the innermost scope only
(shadowing any outer binding), and an assignment updates the innermost scope that declares the name, leaving
every other scope untouched.
"""

from lox.lang.error import UndefinedVariable


class Environment:
    """One scope, chained to the scope that encloses it (None for the global scope)."""

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def declare(self, name, value=None):
        """Binds name to value in this scope. Redeclaring a name in the same scope overwrites it."""
        self.values[name] = value

    def assign(self, name, value):
        """Rebinds name in the nearest scope that declares it. Raises UndefinedVariable if no scope does."""
        scope = self.resolve(name)
        scope.values[name] = value

    def lookup(self, name):
        """Returns the value bound to name in the nearest scope that declares it."""
        return self.resolve(name).values[name]

    def resolve(self, name):
        """Returns the nearest scope (self included) that declares name."""
        scope = self
        while scope is not None:
            if name in scope.values:
                return scope
            scope = scope.enclosing
        raise UndefinedVariable(name)

    def child(self):
        """Returns a new scope enclosed by this one."""
        return Environment(self)

    def __contains__(self, name):
        try:
            self.resolve(name)
        except UndefinedVariable:
            return False
        return True

    def __repr__(self):
        return f"Environment({self.values}, enclosing={self.enclosing!r})"
