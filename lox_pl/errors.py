##################################
############IMPORTS###############
##################################
from .tokens import TokenType
##################################
############CLASSES###############
##################################
class ParseError(RuntimeError):
    pass
##################################
class Runtime_Error(Exception):
    def __init__(self, token, message):
        self.token = token
        self.message = message
        Exception.__init__(self, message)

    @property
    def line(self):
        return self.token.line
##################################
class Resolution_Mismatch(RuntimeError):
    """Raised when the resolver and the interpreter disagree about a scope.

    This is never a user error: correctly resolved programs cannot trigger
    it, so seeing one means the two passes walked the tree differently.
    """
##################################
class Static_Error:
    """A compile-time problem found by the scanner, parser or resolver."""

    def __init__(self, line: int, where: str, message: str):
        self.line = line
        self.where = where
        self.message = message

    @staticmethod
    def at(token, message):
        if token.type == TokenType.EOF:
            return Static_Error(token.line, " at end", message)
        return Static_Error(token.line, f" at '{token.lexeme}'", message)

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def __repr__(self):
        return f"Static_Error({self.line}, {self.where!r}, {self.message!r})"
