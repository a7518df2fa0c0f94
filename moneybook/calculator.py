"""
Arithmetic for the amount-entry keypad.

The keypad builds a text expression such as ``12.5*4 - 3`` which is parsed
with :mod:`ast` and evaluated by walking a small whitelist of node types.
Anything outside the whitelist is rejected; nothing is ever passed to eval.

Literals are turned into floats before any operator runs, so an oversized
power overflows instead of building a huge integer.
"""

import ast
import math
import operator

import structlog

from moneybook.errors import ValidationError

logger = structlog.get_logger(__name__)

# longer than anything typed on the keypad; keeps parse and walk depth bounded
MAX_EXPRESSION_LENGTH = 200

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def evaluate(expression: str) -> float:
    """Evaluate a keypad expression, raising ValidationError if it is not plain arithmetic."""
    text = (expression or "").strip()
    if not text:
        raise ValidationError("Invalid calculation")
    if len(text) > MAX_EXPRESSION_LENGTH:
        logger.debug("calculation_rejected", length=len(text), error="too long")
        raise ValidationError("Invalid calculation")
    try:
        tree = ast.parse(text, mode="eval")
        value = float(_eval(tree.body))
    except (SyntaxError, ArithmeticError, ValueError, TypeError, RecursionError, MemoryError) as e:
        logger.debug("calculation_rejected", expression=text, error=str(e))
        raise ValidationError("Invalid calculation") from e
    if not math.isfinite(value):
        logger.debug("calculation_rejected", expression=text, error="not finite")
        raise ValidationError("Invalid calculation")
    return value


def _eval(node: ast.AST) -> float:
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ValueError(f"unsupported literal {node.value!r}")
        return float(node.value)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval(node.operand))
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        return _BINARY_OPS[type(node.op)](_eval(node.left), _eval(node.right))
    raise ValueError(f"unsupported syntax {type(node).__name__}")
