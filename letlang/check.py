"""letlang typechecker — assigns a type to a parsed expression."""

from __future__ import annotations

from dataclasses import dataclass

from .ast import BinaryOp, Expr, LetExpr, NumberLit, Pos, Var


# ============================================================
# RESOLVED TYPE REPRESENTATION
# ============================================================

TY_INT: str = "int"


@dataclass
class Type:
    kind: str


# Primitive singletons
INT_T: Type = Type(kind=TY_INT)

TypeEnv = dict[str, Type]

ARITH_OPS: set[str] = {"+", "*"}


# ============================================================
# TYPE EQUALITY
# ============================================================


def type_eq(a: Type, b: Type) -> bool:
    return a.kind == b.kind


def type_name(t: Type) -> str:
    """Human-readable name for a type, for error messages."""
    return t.kind


# ============================================================
# CHECK ERRORS
# ============================================================


class CheckError(Exception):
    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class UndefinedVariable(CheckError):
    def __init__(self, name: str, pos: Pos):
        self.name: str = name
        super().__init__("undefined name '" + name + "'", pos.line, pos.col)


class OperandTypeMismatch(CheckError):
    def __init__(self, op: str, left: Type, right: Type, pos: Pos):
        self.op: str = op
        self.left: Type = left
        self.right: Type = right
        super().__init__(
            "operands of "
            + op
            + " must be int, got "
            + type_name(left)
            + " and "
            + type_name(right),
            pos.line,
            pos.col,
        )


class UnsupportedOperator(CheckError):
    def __init__(self, op: str, pos: Pos):
        self.op: str = op
        super().__init__("unknown binary operator: " + op, pos.line, pos.col)


# ============================================================
# CHECKER
# ============================================================

_UNBOUND = object()


class Checker:
    """Walks an expression tree against a mutable environment.

    Let bindings are added to ``env`` for the duration of their body and the
    previous state is put back afterwards, so the environment a caller hands
    in is returned unchanged whether checking succeeds or fails.
    """

    def __init__(self, env: TypeEnv | None = None) -> None:
        self.env: TypeEnv = env if env is not None else {}

    # ── Scope management ──────────────────────────────────────

    def bind(self, name: str, typ: Type) -> object:
        """Bind name and return what it shadowed (_UNBOUND if nothing)."""
        previous = self.env.get(name, _UNBOUND)
        self.env[name] = typ
        return previous

    def restore(self, name: str, previous: object) -> None:
        if previous is _UNBOUND:
            del self.env[name]
        else:
            self.env[name] = previous

    def lookup(self, name: str, pos: Pos) -> Type:
        if name not in self.env:
            raise UndefinedVariable(name, pos)
        return self.env[name]

    # ── Expression checking ───────────────────────────────────

    def check_expr(self, expr: Expr) -> Type:
        """Type-check an expression and return its type."""
        if isinstance(expr, NumberLit):
            return INT_T
        if isinstance(expr, Var):
            return self.lookup(expr.name, expr.pos)
        if isinstance(expr, BinaryOp):
            return self.check_binary_op(expr)
        if isinstance(expr, LetExpr):
            return self.check_let(expr)
        pos = getattr(expr, "pos", Pos(0, 0))
        raise CheckError(
            "unhandled expression type: " + type(expr).__name__, pos.line, pos.col
        )

    def check_binary_op(self, expr: BinaryOp) -> Type:
        # Left-associative chains nest leftwards; walk that spine in a loop.
        spine: list[BinaryOp] = []
        node: Expr = expr
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left
        left = self.check_expr(node)
        for op_node in reversed(spine):
            right = self.check_expr(op_node.right)
            left = self.check_binary_op_types(op_node.op, left, right, op_node.pos)
        return left

    def check_binary_op_types(
        self, op: str, left: Type, right: Type, pos: Pos
    ) -> Type:
        if not type_eq(left, INT_T) or not type_eq(right, INT_T):
            raise OperandTypeMismatch(op, left, right, pos)
        if op in ARITH_OPS:
            return INT_T
        raise UnsupportedOperator(op, pos)

    def check_let(self, expr: LetExpr) -> Type:
        # The value is checked before the name is visible: no self-reference.
        value = self.check_expr(expr.value)
        previous = self.bind(expr.name, value)
        try:
            return self.check_expr(expr.body)
        finally:
            self.restore(expr.name, previous)


# ============================================================
# PUBLIC API
# ============================================================


def type_check(expr: Expr, env: TypeEnv) -> Type:
    """Type-check expr against env. Raises CheckError on the first error."""
    return Checker(env).check_expr(expr)


def check(expr: Expr, env: TypeEnv | None = None) -> Type | CheckError:
    """Type-check expr, returning its type or the first error as a value."""
    try:
        return type_check(expr, env if env is not None else {})
    except CheckError as e:
        return e
    except RecursionError:
        pos = getattr(expr, "pos", Pos(0, 0))
        return CheckError("expression nested too deeply", pos.line, pos.col)
