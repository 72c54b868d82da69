"""letlang lexer, parser and typechecker — public API."""

from __future__ import annotations

from .ast import Expr
from .check import (
    CheckError as CheckError,
    Type as Type,
    TypeEnv,
    check as check,
    type_check as type_check,
)
from .emit import to_parenthesized as to_parenthesized, to_source
from .parse import ParseError as ParseError, Parser
from .tokens import Lexer, TokenizeError as TokenizeError, tokenize as tokenize


def parse(source: str) -> Expr:
    """Parse letlang source into an Expr. The whole input must be consumed."""
    parser = Parser(Lexer(source))
    return parser.parse_program()


def check_source(source: str, env: TypeEnv | None = None) -> Type | CheckError:
    """Parse and type-check letlang source.

    Lex and parse errors are raised; a type error is returned as a value.
    """
    expr = parse(source)
    return check(expr, env)


def emit(expr: Expr) -> str:
    """Emit an `Expr` AST as letlang source text."""
    return to_source(expr)
