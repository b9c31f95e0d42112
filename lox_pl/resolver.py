##################################
############IMPORTS###############
##################################
from enum import Enum

from .errors import Static_Error
from .visitor import Visitor
##################################
############CLASSES###############
##################################
class FunctionType(Enum):
    NONE = "none"
    FUNCTION = "function"
    INITIALIZER = "initializer"
    METHOD = "method"
##################################
class ClassType(Enum):
    NONE = "none"
    CLASS = "class"
    SUBCLASS = "subclass"
##################################
class Resolver(Visitor):
    """Static pass that binds every local reference to a scope distance.

    Each block, function body and class body pushes a scope mapping
    name -> "initializer finished". A reference found in the stack is
    reported to the interpreter as the number of scopes between it and the
    declaring scope; a reference found nowhere is left for the globals.

    Problems are collected in ``errors`` and the walk carries on, so one run
    reports everything it can find.
    """

    def __init__(self, interpreter):
        self.interpreter = interpreter
        self.scopes = []
        self.errors = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        # Top-level names whose initializer is being resolved right now
        self.initializing_globals = []

    def resolve(self, statements):
        for statement in statements:
            self.resolve_stmt(statement)
        return self.errors

    def resolve_stmt(self, stmt):
        stmt.accept(self)

    def resolve_expr(self, expr):
        expr.accept(self)

    def error(self, token, message):
        self.errors.append(Static_Error.at(token, message))

    # Scopes

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name):
        if not self.scopes:
            return

        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.error(name, "Already a variable with this name in this scope.")

        scope[name.lexeme] = False

    def define(self, name):
        if not self.scopes:
            return
        self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr, name):
        for i in range(len(self.scopes) - 1, -1, -1):
            if name.lexeme in self.scopes[i]:
                self.interpreter.resolve(expr, len(self.scopes) - 1 - i)
                return

    def resolve_function(self, function, type):
        enclosing_function = self.current_function
        self.current_function = type

        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()

        self.current_function = enclosing_function

    # Statements

    def visit_block_statement(self, stmt):
        self.begin_scope()
        self.resolve(stmt.statements)
        self.end_scope()

    def visit_class_stmt(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.name.lexeme == stmt.superclass.name.lexeme:
                self.error(stmt.superclass.name, "A class can't inherit from itself.")

            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)

            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            declaration = FunctionType.METHOD
            if method.name.lexeme == "init":
                declaration = FunctionType.INITIALIZER
            self.resolve_function(method, declaration)

        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def visit_expression_stmt(self, stmt):
        self.resolve_expr(stmt.expression)

    def visit_function_stmt(self, stmt):
        self.declare(stmt.name)
        self.define(stmt.name)

        self.resolve_function(stmt, FunctionType.FUNCTION)

    def visit_if_stmt(self, stmt):
        self.resolve_expr(stmt.condition)
        self.resolve_stmt(stmt.then_branch)
        if stmt.else_branch is not None:
            self.resolve_stmt(stmt.else_branch)

    def visit_print_stmt(self, stmt):
        self.resolve_expr(stmt.expression)

    def visit_return_stmt(self, stmt):
        if self.current_function == FunctionType.NONE:
            self.error(stmt.keyword, "Can't return from top-level code.")

        if stmt.value is not None:
            if self.current_function == FunctionType.INITIALIZER:
                self.error(stmt.keyword, "Can't return a value from an initializer.")

            self.resolve_expr(stmt.value)

    def visit_var_stmt(self, stmt):
        self.declare(stmt.name)
        if stmt.initializer is not None:
            if self.scopes:
                self.resolve_expr(stmt.initializer)
            else:
                self.initializing_globals.append(stmt.name.lexeme)
                self.resolve_expr(stmt.initializer)
                self.initializing_globals.pop()
        self.define(stmt.name)

    def visit_while_stmt(self, stmt):
        self.resolve_expr(stmt.condition)
        self.resolve_stmt(stmt.body)

    # Expressions

    def visit_assign_expr(self, expr):
        self.resolve_expr(expr.value)
        self.resolve_local(expr, expr.name)

    def visit_binary(self, expr):
        self.resolve_expr(expr.left)
        self.resolve_expr(expr.right)

    def visit_call_expr(self, expr):
        self.resolve_expr(expr.callee)

        for argument in expr.arguments:
            self.resolve_expr(argument)

    def visit_get_expr(self, expr):
        self.resolve_expr(expr.object)

    def visit_grouping(self, expr):
        self.resolve_expr(expr.expression)

    def visit_literal(self, expr):
        pass

    def visit_logical_expr(self, expr):
        self.resolve_expr(expr.left)
        self.resolve_expr(expr.right)

    def visit_set_expr(self, expr):
        self.resolve_expr(expr.value)
        self.resolve_expr(expr.object)

    def visit_super_expr(self, expr):
        if self.current_class == ClassType.NONE:
            self.error(expr.keyword, "Can't use 'super' outside of a class.")
        elif self.current_class != ClassType.SUBCLASS:
            self.error(expr.keyword, "Can't use 'super' in a class with no superclass.")

        self.resolve_local(expr, expr.keyword)

    def visit_this_expr(self, expr):
        if self.current_class == ClassType.NONE:
            self.error(expr.keyword, "Can't use 'this' outside of a class.")
            return

        self.resolve_local(expr, expr.keyword)

    def visit_unary(self, expr):
        self.resolve_expr(expr.right)

    def visit_variable(self, expr):
        name = expr.name.lexeme
        if self.scopes:
            if self.scopes[-1].get(name) is False:
                self.error(expr.name, "Can't read local variable in its own initializer.")
        elif name in self.initializing_globals:
            self.error(expr.name, "Can't read local variable in its own initializer.")

        self.resolve_local(expr, expr.name)
