"""Tests for turning source text into tokens."""

from lox_pl import Scanner, TokenType


def _types(source: str):
    return [t.type for t in Scanner(source).scan_tokens()]


def test_punctuation_and_operators():
    assert _types("(){},.-+;*/ ! != = == < <= > >=") == [
        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
        TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
        TokenType.COMMA, TokenType.DOT, TokenType.MINUS, TokenType.PLUS,
        TokenType.SEMICOLON, TokenType.STAR, TokenType.SLASH,
        TokenType.BANG, TokenType.BANG_EQUAL,
        TokenType.EQUAL, TokenType.EQUAL_EQUAL,
        TokenType.LESS, TokenType.LESS_EQUAL,
        TokenType.GREATER, TokenType.GREATER_EQUAL,
        TokenType.EOF,
    ]


def test_keywords_and_identifiers():
    tokens = Scanner("class orchid or this super fun_1").scan_tokens()
    assert [t.type for t in tokens] == [
        TokenType.CLASS, TokenType.IDENTIFIER, TokenType.OR,
        TokenType.THIS, TokenType.SUPER, TokenType.IDENTIFIER, TokenType.EOF,
    ]
    assert tokens[1].lexeme == "orchid"
    assert tokens[5].lexeme == "fun_1"


def test_number_literals_are_floats():
    tokens = Scanner("12 3.5 7.").scan_tokens()
    assert tokens[0].literal == 12.0
    assert tokens[1].literal == 3.5
    # a trailing dot is not part of the number
    assert tokens[2].literal == 7.0
    assert tokens[3].type == TokenType.DOT


def test_strings_track_lines():
    tokens = Scanner('"one\ntwo" x').scan_tokens()
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].literal == "one\ntwo"
    assert tokens[1].line == 2


def test_comments_are_skipped():
    tokens = Scanner("// nothing here\nprint 1; // trailing").scan_tokens()
    assert [t.type for t in tokens] == [
        TokenType.PRINT, TokenType.NUMBER, TokenType.SEMICOLON, TokenType.EOF,
    ]
    assert tokens[0].line == 2


def test_errors_are_collected_and_scanning_continues():
    scanner = Scanner('@ var x = "open')
    tokens = scanner.scan_tokens()
    assert [str(e) for e in scanner.errors] == [
        "[line 1] Error: Unexpected character: @",
        "[line 1] Error: Unterminated string.",
    ]
    assert [t.type for t in tokens] == [
        TokenType.VAR, TokenType.IDENTIFIER, TokenType.EQUAL, TokenType.EOF,
    ]
