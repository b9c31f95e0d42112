##################################
############IMPORTS###############
##################################
from .errors import Resolution_Mismatch, Runtime_Error
from .tokens import Token
##################################
############CLASSES###############
##################################
class Environment:
    """One lexical scope: a frame of bindings plus a fixed link outward."""

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value):
        self.values[name] = value

    def get(self, name: Token):
        lexeme = name.lexeme
        if lexeme in self.values:
            return self.values[lexeme]

        if self.enclosing is not None:
            return self.enclosing.get(name)

        raise Runtime_Error(name, f"Undefined variable '{lexeme}'.")

    def assign(self, name: Token, value):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return

        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return

        raise Runtime_Error(name, f"Undefined variable '{name.lexeme}'.")

    def ancestor(self, distance: int):
        environment = self
        for _ in range(distance):
            environment = environment.enclosing
            if environment is None:
                raise Resolution_Mismatch(f"No scope {distance} hops out.")
        return environment

    def get_at(self, distance: int, name: str):
        values = self.ancestor(distance).values
        if name not in values:
            raise Resolution_Mismatch(f"'{name}' is not declared {distance} scopes out.")
        return values[name]

    def assign_at(self, distance: int, name: Token, value):
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise Resolution_Mismatch(f"'{name.lexeme}' is not declared {distance} scopes out.")
        values[name.lexeme] = value

    def __repr__(self):
        return f"Environment({sorted(self.values)}, enclosing={self.enclosing is not None})"
