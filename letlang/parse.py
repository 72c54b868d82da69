"""letlang parser — recursive descent, one method per grammar production."""

from __future__ import annotations

from .ast import BinaryOp, Expr, LetExpr, NumberLit, Pos, Var
from .tokens import (
    TK_EOF,
    TK_EQUALS,
    TK_IDENT,
    TK_IN,
    TK_LET,
    TK_LPAREN,
    TK_NUMBER,
    TK_PLUS,
    TK_RPAREN,
    TK_STAR,
    Lexer,
    Token,
)

FACTOR_START: str = "NUMBER, IDENT or '('"


def _describe(tok: Token) -> str:
    if tok.type == TK_EOF:
        return "end of input"
    return "'" + tok.value + "'"


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class UnexpectedToken(ParseError):
    """The current token does not fit the production being parsed."""

    def __init__(self, expected: str, actual: Token):
        self.expected: str = expected
        self.actual: Token = actual
        super().__init__(
            "expected " + expected + ", got " + _describe(actual),
            actual.line,
            actual.col,
        )


class MissingIdentifier(ParseError):
    """'let' not followed by the name it binds."""

    def __init__(self, actual: Token):
        self.actual: Token = actual
        super().__init__(
            "expected identifier after 'let', got " + _describe(actual),
            actual.line,
            actual.col,
        )


class Parser:
    """Recursive descent parser for letlang.

    Pulls tokens from the lexer on demand and keeps exactly one of them
    as lookahead.
    """

    def __init__(self, lexer: Lexer):
        self.lexer: Lexer = lexer
        self.tok: Token = lexer.next_token()

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tok

    def advance(self) -> Token:
        tok = self.tok
        self.tok = self.lexer.next_token()
        return tok

    def at(self, type_: str) -> bool:
        return self.tok.type == type_

    def eat(self, type_: str) -> Token:
        """Consume the current token if its kind is type_.

        Only the kind is compared: any NUMBER satisfies a NUMBER expectation.
        """
        if self.tok.type != type_:
            expected = type_
            if type_ not in (TK_NUMBER, TK_IDENT, TK_EOF):
                expected = "'" + type_ + "'"
            raise UnexpectedToken(expected, self.tok)
        return self.advance()

    def _pos(self) -> Pos:
        return Pos(self.tok.line, self.tok.col)

    # ── Top Level ────────────────────────────────────────────

    def parse(self) -> Expr:
        """Parse one expression; tokens after it are left unconsumed."""
        return self._parse_nested()

    def parse_program(self) -> Expr:
        """Parse one expression that must span the whole input."""
        expr = self._parse_nested()
        self.eat(TK_EOF)
        return expr

    def _parse_nested(self) -> Expr:
        try:
            return self.parse_expr()
        except RecursionError:
            raise ParseError(
                "expression nested too deeply", self.tok.line, self.tok.col
            ) from None

    # ── Expressions ──────────────────────────────────────────

    def parse_expr(self) -> Expr:
        """Expr = Let | Sum"""
        if self.at(TK_LET):
            return self.parse_let()
        return self.parse_sum()

    def parse_let(self) -> LetExpr:
        """Let = 'let' IDENT '=' Expr 'in' Expr"""
        pos = self._pos()
        self.eat(TK_LET)
        if not self.at(TK_IDENT):
            raise MissingIdentifier(self.tok)
        name = self.eat(TK_IDENT).value
        self.eat(TK_EQUALS)
        value = self.parse_expr()
        self.eat(TK_IN)
        body = self.parse_expr()
        return LetExpr(pos, name, value, body)

    def parse_sum(self) -> Expr:
        """Sum = Product ( '+' Product )*"""
        left = self.parse_product()
        while self.at(TK_PLUS):
            op = self.advance().value
            right = self.parse_product()
            left = BinaryOp(left.pos, op, left, right)
        return left

    def parse_product(self) -> Expr:
        """Product = Factor ( '*' Factor )*"""
        left = self.parse_factor()
        while self.at(TK_STAR):
            op = self.advance().value
            right = self.parse_factor()
            left = BinaryOp(left.pos, op, left, right)
        return left

    def parse_factor(self) -> Expr:
        """Factor = NUMBER | IDENT | '(' Expr ')'"""
        tok = self.tok
        pos = self._pos()
        if tok.type == TK_NUMBER:
            self.advance()
            return NumberLit(pos, tok.int_value)
        if tok.type == TK_IDENT:
            self.advance()
            return Var(pos, tok.value)
        if tok.type == TK_LPAREN:
            self.advance()
            inner = self.parse_expr()
            self.eat(TK_RPAREN)
            return inner
        raise UnexpectedToken(FACTOR_START, tok)
