"""Evaluation of symbolic addresses such as ``"libc + 0x3c4b20"``.

Only integer arithmetic over named bases is supported: ``+``, ``-``,
``*``, ``/`` (floor division), unary signs and parentheses.
"""

from __future__ import annotations

import ast
import operator
import re
from typing import Callable, Dict, Mapping, Type, Union

from memio.core.errors import AddressEvaluationError, AddressSyntaxError

_HEX_RE = re.compile(r"\b0[xX][0-9a-zA-Z]+")

_BINARY_OPS: Dict[Type[ast.operator], Callable[[int, int], int]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.floordiv,
    ast.FloorDiv: operator.floordiv,
}

_UNARY_OPS: Dict[Type[ast.unaryop], Callable[[int], int]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def _hex_to_decimal(match: re.Match) -> str:
    literal = match.group(0)
    try:
        return str(int(literal, 16))
    except ValueError:
        raise AddressSyntaxError(f"Invalid hexadecimal literal: {literal!r}") from None


class _Evaluator:
    """Walks a parsed expression, allowing only integer arithmetic."""

    def __init__(self, expression: str, names: Mapping[str, int]):
        self.expression = expression
        self.names = names

    def visit(self, node: ast.AST) -> int:
        if isinstance(node, ast.Expression):
            return self.visit(node.body)
        if isinstance(node, ast.Constant) and type(node.value) is int:
            return node.value
        if isinstance(node, ast.Name):
            if node.id not in self.names:
                raise AddressEvaluationError(
                    f"Unknown name {node.id!r} in address {self.expression!r}"
                )
            return self.names[node.id]
        if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
            left = self.visit(node.left)
            right = self.visit(node.right)
            try:
                return _BINARY_OPS[type(node.op)](left, right)
            except ZeroDivisionError:
                raise AddressEvaluationError(
                    f"Division by zero in address {self.expression!r}"
                ) from None
        if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
            return _UNARY_OPS[type(node.op)](self.visit(node.operand))
        raise AddressSyntaxError(
            f"Unsupported syntax {type(node).__name__} in address {self.expression!r}"
        )


def resolve_address(expression: Union[int, str], names: Mapping[str, int]) -> int:
    """Evaluate *expression* against the *names* table.

    Parameters
    ----------
    expression:
        An integer (returned unchanged) or an arithmetic expression whose
        identifiers are keys of *names*.
    names:
        Name -> integer bindings, usually the base addresses of a process.

    Returns
    -------
    int

    Raises
    ------
    AddressSyntaxError
        If the expression cannot be parsed, nests too deeply, or uses
        anything but arithmetic.
    AddressEvaluationError
        If the expression references a name missing from *names*.

    Example::

        resolve_address("heap + 0x10 * pp", {"heap": 0xde00, "pp": 8})
        # 56960 == 0xde80
    """
    if isinstance(expression, int) and not isinstance(expression, bool):
        return expression
    if not isinstance(expression, str):
        raise AddressSyntaxError(f"Address must be an int or a str, not {expression!r}")

    source = _HEX_RE.sub(_hex_to_decimal, expression).strip()
    try:
        tree = ast.parse(source, mode="eval")
    except SyntaxError as exc:
        raise AddressSyntaxError(f"Cannot parse address {expression!r}: {exc.msg}") from None
    except (RecursionError, MemoryError):
        raise AddressSyntaxError("Address expression too complex") from None

    for name, value in names.items():
        if not isinstance(value, int):
            raise AddressEvaluationError(f"Name {name!r} is bound to a non-integer {value!r}")
    try:
        return _Evaluator(expression, names).visit(tree)
    except RecursionError:
        raise AddressSyntaxError("Address expression too complex") from None
