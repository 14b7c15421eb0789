"""
Postfix (reverse Polish) evaluation with exact decimal arithmetic.

The evaluator owns its operand stack; nothing is shared with the converter.
For every operator two operands are popped: `a` first (the right-hand
operand) and `b` second (the left-hand operand).
"""

from __future__ import annotations

import decimal
from decimal import Decimal
from typing import Optional, Sequence

from .exceptions import (
    ArithmeticOverflowError,
    DivisionByZeroError,
    InvalidExponentError,
    MalformedExpressionError,
    UnknownOperatorError,
)
from .models import PostfixElement

DEFAULT_PRECISION = 28
DEFAULT_MAX_EXPONENT = 100_000


def power(
    base: Decimal, exponent: Decimal, max_exponent: Optional[int] = DEFAULT_MAX_EXPONENT
) -> Decimal:
    """Raise `base` to a whole, non-negative `exponent` by repeated multiplication.

    Bases 0, 1 and -1 are answered without looping. Any other base is refused
    above `max_exponent` (``None`` disables the cap).
    """
    if exponent < 0 or exponent != exponent.to_integral_value():
        raise InvalidExponentError(
            f"Exponent must be a non-negative whole number, got {exponent}",
            details={"base": str(base), "exponent": str(exponent)},
        )
    if exponent == 0:
        return Decimal(1)
    if base in (0, 1):
        return +base
    if base == -1:
        return Decimal(-1) if int(exponent) % 2 else Decimal(1)
    if max_exponent is not None and exponent > max_exponent:
        raise InvalidExponentError(
            f"Exponent {exponent} exceeds the limit of {max_exponent}",
            details={"base": str(base), "exponent": str(exponent), "max_exponent": max_exponent},
        )

    result = Decimal(1)
    remaining = exponent
    while remaining > 0:
        result *= base
        remaining -= 1
    return result


def _apply(symbol: str, a: Decimal, b: Decimal, max_exponent: Optional[int]) -> Decimal:
    if symbol == "+":
        return a + b
    if symbol == "-":
        return b - a
    if symbol == "*":
        return a * b
    if symbol == "/":
        if a == 0:
            raise DivisionByZeroError(
                f"Division by zero: {b} / {a}", details={"dividend": str(b)}
            )
        return b / a
    if symbol == "^":
        return power(b, a, max_exponent)
    raise UnknownOperatorError(f"Unhandled operator: {symbol!r}", details={"operator": symbol})


def evaluate_postfix(
    postfix: Sequence[PostfixElement],
    precision: int = DEFAULT_PRECISION,
    max_exponent: Optional[int] = DEFAULT_MAX_EXPONENT,
) -> Decimal:
    """Reduce a postfix sequence to a single value.

    Args:
        postfix: operands (Decimal) and operator symbols (str) in postfix order.
        precision: significant digits for the decimal context.
        max_exponent: largest exponent `^` accepts for bases other than 0, 1, -1.

    Returns:
        The one value left on the operand stack.

    Raises:
        MalformedExpressionError: if an operator lacks operands or the
            sequence does not reduce to exactly one value.
        ArithmeticOverflowError: if a result leaves the decimal range.
        DivisionByZeroError, InvalidExponentError, UnknownOperatorError.
    """
    stack: list[Decimal] = []

    with decimal.localcontext() as ctx:
        ctx.prec = precision
        for element in postfix:
            if isinstance(element, Decimal):
                stack.append(element)
                continue
            if len(stack) < 2:
                raise MalformedExpressionError(
                    f"Operator {element!r} needs two operands, found {len(stack)}",
                    details={"operator": element, "operands": len(stack)},
                )
            a = stack.pop()
            b = stack.pop()
            try:
                stack.append(_apply(element, a, b, max_exponent))
            except (decimal.Overflow, decimal.InvalidOperation) as e:
                raise ArithmeticOverflowError(
                    f"Result of {element!r} is out of range",
                    details={"operator": element, "left": str(b), "right": str(a)},
                ) from e

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"Expression reduced to {len(stack)} values instead of one",
            details={"remaining": [str(v) for v in stack]},
        )
    return stack[0]
