"""letlang emitter — converts an AST back into letlang source text.

Total over the node types in `letlang/ast.py`: a new node type needs a case
here as well.
"""

from __future__ import annotations

from .ast import BinaryOp, Expr, LetExpr, NumberLit, Var


def to_source(expr: Expr) -> str:
    """Render expr with the fewest parentheses that preserve its grouping."""
    return _Emitter(full_parens=False).render(expr)


def to_parenthesized(expr: Expr) -> str:
    """Render expr with every binary operation wrapped in parentheses."""
    return _Emitter(full_parens=True).render(expr)


class _Emitter:
    # Expression precedence (higher binds tighter)
    _PREC_LET: int = 1
    _PREC_SUM: int = 2
    _PREC_PRODUCT: int = 3
    _PREC_PRIMARY: int = 4

    _BIN_PREC: dict[str, int] = {
        "+": _PREC_SUM,
        "*": _PREC_PRODUCT,
    }

    def __init__(self, full_parens: bool) -> None:
        self._full_parens: bool = full_parens

    def render(self, expr: Expr) -> str:
        return self._render_expr(expr, self._PREC_LET)

    def _expr_prec(self, expr: Expr) -> int:
        if isinstance(expr, LetExpr):
            return self._PREC_LET
        if isinstance(expr, BinaryOp):
            if expr.op not in self._BIN_PREC:
                raise ValueError(f"unknown binary operator: {expr.op}")
            return self._BIN_PREC[expr.op]
        return self._PREC_PRIMARY

    def _needs_parens(self, expr: Expr, parent_prec: int, side: str) -> bool:
        prec = self._expr_prec(expr)
        if prec < parent_prec:
            return True
        if prec == parent_prec and side == "right" and prec != self._PREC_LET:
            return True
        return self._full_parens and isinstance(expr, BinaryOp)

    def _render_expr(self, expr: Expr, parent_prec: int, side: str = "") -> str:
        text = self._render_expr_inner(expr, self._expr_prec(expr))
        if self._needs_parens(expr, parent_prec, side):
            return f"({text})"
        return text

    def _render_binary_op(self, expr: BinaryOp) -> str:
        # Left-associative chains nest leftwards; render that spine in a loop.
        spine: list[BinaryOp] = [expr]
        node = expr.left
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left
        text = self._render_expr(node, self._expr_prec(spine[-1]), "left")
        i = len(spine) - 1
        while i >= 0:
            op_node = spine[i]
            prec = self._expr_prec(op_node)
            right = self._render_expr(op_node.right, prec, "right")
            text = f"{text} {op_node.op} {right}"
            if i > 0 and self._needs_parens(
                op_node, self._expr_prec(spine[i - 1]), "left"
            ):
                text = f"({text})"
            i -= 1
        return text

    def _render_expr_inner(self, expr: Expr, prec: int) -> str:
        if isinstance(expr, NumberLit):
            return str(expr.value)
        if isinstance(expr, Var):
            return expr.name
        if isinstance(expr, BinaryOp):
            return self._render_binary_op(expr)
        if isinstance(expr, LetExpr):
            value = self._render_expr(expr.value, self._PREC_LET)
            body = self._render_expr(expr.body, self._PREC_LET)
            return f"let {expr.name} = {value} in {body}"
        raise ValueError(f"unhandled expression type: {type(expr).__name__}")
