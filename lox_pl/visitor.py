##################################
############IMPORTS###############
##################################
from abc import ABC, abstractmethod
##################################
############CLASSES###############
##################################
class Visitor(ABC):
    """Every pass over the tree implements one hook per node kind."""

    # Expressions
    @abstractmethod
    def visit_assign_expr(self, expr):
        pass

    @abstractmethod
    def visit_binary(self, expr):
        pass

    @abstractmethod
    def visit_call_expr(self, expr):
        pass

    @abstractmethod
    def visit_get_expr(self, expr):
        pass

    @abstractmethod
    def visit_grouping(self, expr):
        pass

    @abstractmethod
    def visit_literal(self, expr):
        pass

    @abstractmethod
    def visit_logical_expr(self, expr):
        pass

    @abstractmethod
    def visit_set_expr(self, expr):
        pass

    @abstractmethod
    def visit_super_expr(self, expr):
        pass

    @abstractmethod
    def visit_this_expr(self, expr):
        pass

    @abstractmethod
    def visit_unary(self, expr):
        pass

    @abstractmethod
    def visit_variable(self, expr):
        pass

    # Statements
    @abstractmethod
    def visit_block_statement(self, stmt):
        pass

    @abstractmethod
    def visit_class_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_expression_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_function_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_if_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_print_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_return_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_var_stmt(self, stmt):
        pass

    @abstractmethod
    def visit_while_stmt(self, stmt):
        pass
