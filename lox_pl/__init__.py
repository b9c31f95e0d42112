"""Lox scripting language: scanner, parser, resolver and tree-walking interpreter."""

from .environment import Environment
from .errors import ParseError, Resolution_Mismatch, Runtime_Error, Static_Error
from .interpreter import Interpreter
from .lox import Lox, main
from .parser import Parser
from .resolver import Resolver
from .runtime import Lox_Callable, Lox_Class, Lox_Function, Lox_Instance
from .scanner import Scanner
from .tokens import Token, TokenType

__version__ = "0.2.0"
