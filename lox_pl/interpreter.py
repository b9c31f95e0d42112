##################################
############IMPORTS###############
##################################
import math

from .environment import Environment
from .errors import Resolution_Mismatch, Runtime_Error
from .runtime import (
    Clock, Lox_Callable, Lox_Class, Lox_Function, Lox_Instance, Return_Value,
)
from .tokens import Token, TokenType
from .visitor import Visitor
##################################
############CLASSES###############
##################################
class Interpreter(Visitor):
    """Tree-walking evaluator.

    Statement visitors return ``None`` on normal completion or a
    ``Return_Value`` when a ``return`` ran; blocks and loops stop at the first
    ``Return_Value`` and hand it to their caller.
    """

    def __init__(self, out=None):
        self.out = out # None means "whatever sys.stdout is at print time"
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.globals.define("clock", Clock())

    def interpret(self, statements):
        for statement in statements:
            if self.execute(statement) is not None:
                raise Resolution_Mismatch("'return' escaped to the top level.")

    def resolve(self, expr, depth):
        self.locals[expr] = depth

    def evaluate(self, expr):
        return expr.accept(self)

    def execute(self, statement):
        return statement.accept(self)

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment

            for statement in statements:
                completion = self.execute(statement)
                if completion is not None:
                    return completion
        finally:
            self.environment = previous
        return None

    # Statements

    def visit_block_statement(self, stmt):
        return self.execute_block(stmt.statements, Environment(self.environment))

    def visit_class_stmt(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, Lox_Class):
                raise Runtime_Error(stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        if superclass is not None:
            self.environment = Environment(self.environment)
            self.environment.define("super", superclass)

        methods = {}
        for method in stmt.methods:
            function = Lox_Function(method, self.environment, method.name.lexeme == "init")
            methods[method.name.lexeme] = function

        klass = Lox_Class(stmt.name.lexeme, superclass, methods)

        if superclass is not None:
            self.environment = self.environment.enclosing

        self.environment.assign(stmt.name, klass)
        return None

    def visit_expression_stmt(self, stmt):
        self.evaluate(stmt.expression)
        return None

    def visit_function_stmt(self, stmt):
        function = Lox_Function(stmt, self.environment, False)
        self.environment.define(stmt.name.lexeme, function)
        return None

    def visit_if_stmt(self, stmt):
        if self.isTruthy(self.evaluate(stmt.condition)):
            return self.execute(stmt.then_branch)
        elif stmt.else_branch is not None:
            return self.execute(stmt.else_branch)

        return None

    def visit_print_stmt(self, stmt):
        value = self.evaluate(stmt.expression)
        print(self.stringify(value), file=self.out)
        return None

    def visit_return_stmt(self, stmt):
        value = None
        if stmt.value is not None:
            value = self.evaluate(stmt.value)

        return Return_Value(value)

    def visit_var_stmt(self, stmt):
        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)
        return None

    def visit_while_stmt(self, stmt):
        while self.isTruthy(self.evaluate(stmt.condition)):
            completion = self.execute(stmt.body)
            if completion is not None:
                return completion

        return None

    # Expressions

    def visit_assign_expr(self, expr):
        value = self.evaluate(expr.value)

        distance = self.locals.get(expr)
        if distance is not None:
            self.environment.assign_at(distance, expr.name, value)
        else:
            self.globals.assign(expr.name, value)

        return value

    def visit_binary(self, expr):
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        operator = expr.operator.type

        if operator == TokenType.PLUS:
            if self.isNumber(left) and self.isNumber(right):
                return left + right

            if isinstance(left, str) and isinstance(right, str):
                return left + right

            raise Runtime_Error(expr.operator, "Operands must be two numbers or two strings.")
        elif operator == TokenType.BANG_EQUAL:
            return not self.isEqual(left, right)
        elif operator == TokenType.EQUAL_EQUAL:
            return self.isEqual(left, right)

        self.checkNumberOperands(expr.operator, left, right)

        if operator == TokenType.GREATER:
            return left > right
        elif operator == TokenType.GREATER_EQUAL:
            return left >= right
        elif operator == TokenType.LESS:
            return left < right
        elif operator == TokenType.LESS_EQUAL:
            return left <= right
        elif operator == TokenType.MINUS:
            return left - right
        elif operator == TokenType.SLASH:
            if right == 0:
                # IEEE 754: x / 0 is a signed infinity, 0 / 0 is NaN
                if left == 0 or math.isnan(left):
                    return math.nan
                return math.copysign(math.inf, left) * math.copysign(1.0, right)
            return left / right
        elif operator == TokenType.STAR:
            return left * right

        return None

    def visit_call_expr(self, expr):
        callee = self.evaluate(expr.callee)

        arguments = []
        for argument in expr.arguments:
            arguments.append(self.evaluate(argument))

        if not isinstance(callee, Lox_Callable):
            raise Runtime_Error(expr.paren, "Can only call functions and classes.")

        if len(arguments) != callee.arity():
            raise Runtime_Error(
                expr.paren,
                f"Expected {callee.arity()} arguments but got {len(arguments)}.",
            )

        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise Runtime_Error(expr.paren, "Stack overflow.") from None

    def visit_get_expr(self, expr):
        object = self.evaluate(expr.object)
        if isinstance(object, Lox_Instance):
            return object.get(expr.name)

        raise Runtime_Error(expr.name, "Only instances have properties.")

    def visit_grouping(self, expr):
        return self.evaluate(expr.expression)

    def visit_literal(self, expr):
        return expr.value

    def visit_logical_expr(self, expr):
        left = self.evaluate(expr.left)

        if expr.operator.type == TokenType.OR:
            if self.isTruthy(left):
                return left
        else:
            if not self.isTruthy(left):
                return left

        return self.evaluate(expr.right)

    def visit_set_expr(self, expr):
        object = self.evaluate(expr.object)

        if not isinstance(object, Lox_Instance):
            raise Runtime_Error(expr.name, "Only instances have fields.")

        value = self.evaluate(expr.value)
        object.set(expr.name, value)
        return value

    def visit_super_expr(self, expr):
        distance = self.locals[expr]
        superclass = self.environment.get_at(distance, "super")
        # "this" always sits in the scope just inside the one holding "super"
        object = self.environment.get_at(distance - 1, "this")

        method = superclass.find_method(expr.method.lexeme)
        if method is None:
            raise Runtime_Error(expr.method, f"Undefined property '{expr.method.lexeme}'.")

        return method.bind(object)

    def visit_this_expr(self, expr):
        return self.look_up_variable(expr.keyword, expr)

    def visit_unary(self, expr):
        right = self.evaluate(expr.right)

        if expr.operator.type == TokenType.BANG:
            return not self.isTruthy(right)
        elif expr.operator.type == TokenType.MINUS:
            self.checkNumberOperand(expr.operator, right)
            return -right

        return None

    def visit_variable(self, expr):
        return self.look_up_variable(expr.name, expr)

    # Helpers

    def look_up_variable(self, name: Token, expr):
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def isNumber(self, value):
        return isinstance(value, (float, int)) and not isinstance(value, bool)

    def checkNumberOperand(self, operator, operand):
        if self.isNumber(operand):
            return
        raise Runtime_Error(operator, "Operand must be a number.")

    def checkNumberOperands(self, operator: Token, left, right):
        if not self.isNumber(left):
            raise Runtime_Error(operator, "Left operand must be a number.")
        if not self.isNumber(right):
            raise Runtime_Error(operator, "Right operand must be a number.")

    def isTruthy(self, object):
        if object is None:
            return False
        if isinstance(object, bool):
            return object

        return True

    def isEqual(self, left, right):
        if left is None and right is None:
            return True
        if left is None or right is None:
            return False
        # Lox booleans are not numbers, even though Python's are
        if isinstance(left, bool) != isinstance(right, bool):
            return False
        if self.isNumber(left) and self.isNumber(right):
            return left == right
        if isinstance(left, str) and isinstance(right, str):
            return left == right

        return left is right

    def stringify(self, object):
        if object is None:
            return "nil"

        if isinstance(object, bool):
            return "true" if object else "false"

        if isinstance(object, float):
            if math.isnan(object):
                return "NaN"
            if math.isinf(object):
                return "Infinity" if object > 0 else "-Infinity"
            text = repr(object)
            if text.endswith(".0"):
                text = text[0: len(text) - 2]
            return text

        return str(object)
