"""Pytest configuration for the Lox test suite."""

import io

import pytest

from lox_pl import Interpreter, Lox, Parser, Resolver, Scanner


class Result:
    """What a program printed, and what the driver reported."""

    def __init__(self, lox, out, err):
        self.lox = lox
        self.out = out
        self.err = err

    @property
    def lines(self):
        return self.out.splitlines()


@pytest.fixture
def run():
    """Run source through a fresh driver and capture both streams."""

    def _run(source: str) -> Result:
        out, err = io.StringIO(), io.StringIO()
        lox = Lox(out=out, err=err)
        lox.run(source)
        return Result(lox, out.getvalue(), err.getvalue())

    return _run


@pytest.fixture
def parse():
    """Scan and parse source, failing the test on any syntax error."""

    def _parse(source: str):
        scanner = Scanner(source)
        parser = Parser(scanner.scan_tokens())
        statements = parser.parse()
        assert scanner.errors == [], [str(e) for e in scanner.errors]
        assert parser.errors == [], [str(e) for e in parser.errors]
        return statements

    return _parse


@pytest.fixture
def resolve(parse):
    """Parse and resolve source. Returns (statements, interpreter, errors)."""

    def _resolve(source: str):
        statements = parse(source)
        interpreter = Interpreter(out=io.StringIO())
        errors = Resolver(interpreter).resolve(statements)
        return statements, interpreter, errors

    return _resolve
