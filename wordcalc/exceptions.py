"""
Custom exception hierarchy for expression evaluation.

Each exception type maps to one category of failure in the
lex → consolidate → convert → evaluate pipeline. Every error is fatal to the
call that raised it: there is no partial result.
"""

from __future__ import annotations


class CalculatorError(Exception):
    """Base exception for all expression evaluation failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class InvalidInputError(CalculatorError):
    """The input holds a character (or literal) the lexer cannot classify."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_INPUT", message, details)


class UnbalancedParenthesesError(CalculatorError):
    """A closing parenthesis has no matching opening one, or vice versa."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("UNBALANCED_PARENTHESES", message, details)


class UnknownOperatorError(CalculatorError):
    """Precedence or evaluation was requested for an unsupported symbol."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("UNKNOWN_OPERATOR", message, details)


class DivisionByZeroError(CalculatorError):
    """The right-hand operand of a division is zero."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("DIVISION_BY_ZERO", message, details)


class MalformedExpressionError(CalculatorError):
    """The postfix sequence does not reduce to exactly one value."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("MALFORMED_EXPRESSION", message, details)


class InvalidExponentError(CalculatorError):
    """The exponent of ``^`` is negative or not a whole number."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INVALID_EXPONENT", message, details)


class ArithmeticOverflowError(CalculatorError):
    """A result falls outside the range of the decimal context."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("ARITHMETIC_OVERFLOW", message, details)
