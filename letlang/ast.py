"""letlang AST — parse-time node definitions."""

from __future__ import annotations

from dataclasses import dataclass


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Expr:
    """Base for all expressions."""

    pos: Pos


@dataclass
class NumberLit(Expr):
    """Integer literal."""

    value: int


@dataclass
class Var(Expr):
    """Variable reference."""

    name: str


@dataclass
class BinaryOp(Expr):
    """left op right, op is '+' or '*'."""

    op: str
    left: Expr
    right: Expr


@dataclass
class LetExpr(Expr):
    """let name = value in body."""

    name: str
    value: Expr
    body: Expr
