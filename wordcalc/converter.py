"""
Infix-to-postfix conversion (shunting-yard).

The converter is the last token receiver in the chain. It keeps its own
operator stack and builds the postfix sequence the evaluator walks later.

Two operator rules are available:

- legacy (default): the incoming operator is compared only against the top of
  the stack. If the top binds strictly tighter, every pending operator down to
  the nearest "(" is flushed; otherwise the operator is simply pushed. Chains
  of equal precedence therefore group to the right: "8 - 3 - 2" is 8 - (3 - 2).
- textbook: the standard algorithm. Pop while the top binds at least as
  tightly (strictly tighter for the right-associative "^").
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Mapping

from .exceptions import InvalidInputError, UnbalancedParenthesesError, UnknownOperatorError
from .models import PostfixElement, TokenKind

OPEN_MARKER = "("

PRECEDENCE: Mapping[str, int] = MappingProxyType({
    "+": 0,
    "-": 0,
    "*": 1,
    "/": 1,
    "^": 2,
})

RIGHT_ASSOCIATIVE: frozenset[str] = frozenset({"^"})


def get_precedence(symbol: str) -> int:
    """Return the binding strength of an operator symbol.

    Raises:
        UnknownOperatorError: for anything outside PRECEDENCE, including
            multi-character runs such as "+-".
    """
    try:
        return PRECEDENCE[symbol]
    except KeyError:
        raise UnknownOperatorError(
            f"Unknown precedence for operator: {symbol!r}",
            details={"operator": symbol},
        ) from None


def parse_number(lexeme: str) -> Decimal:
    """Parse a Number lexeme as an exact decimal."""
    try:
        value = Decimal(lexeme)
    except InvalidOperation:
        raise InvalidInputError(
            f"Invalid number literal: {lexeme!r}", details={"lexeme": lexeme}
        ) from None
    return value


class InfixToPostfixConverter:
    """Token receiver that reorders an infix token stream into postfix.

    Usage:
        converter = InfixToPostfixConverter()
        Lexer("2 + 3 * 4").run(converter)
        postfix = converter.finish()   # [2, 3, 4, "*", "+"]
    """

    def __init__(self, textbook: bool = False):
        self.textbook = textbook
        self.stack: list[str] = []
        self.postfix: list[PostfixElement] = []

    def receive_token(self, kind: TokenKind, lexeme: str) -> None:
        if kind == TokenKind.NUMBER:
            self.postfix.append(parse_number(lexeme))
        elif kind == TokenKind.OPEN_PAREN:
            self.stack.append(OPEN_MARKER)
        elif kind == TokenKind.CLOSE_PAREN:
            self._close_group()
        elif kind == TokenKind.OPERATOR:
            if self.textbook:
                self._push_textbook(lexeme)
            else:
                self._push_legacy(lexeme)
        # Word tokens (and anything else) carry no meaning here

    def finish(self) -> list[PostfixElement]:
        """Drain the remaining operators and return the postfix sequence."""
        while self.stack:
            symbol = self.stack.pop()
            if symbol == OPEN_MARKER:
                raise UnbalancedParenthesesError(
                    "Unbalanced parentheses: '(' was never closed",
                    details={"unclosed": self.stack.count(OPEN_MARKER) + 1},
                )
            self.postfix.append(symbol)
        return self.postfix

    # ─── Operator Rules ─────────────────────────────────────────────

    def _push_legacy(self, symbol: str) -> None:
        incoming = get_precedence(symbol)
        if self.stack and self.stack[-1] != OPEN_MARKER:
            if get_precedence(self.stack[-1]) > incoming:
                self._drain_group()
        self.stack.append(symbol)

    def _push_textbook(self, symbol: str) -> None:
        incoming = get_precedence(symbol)
        while self.stack and self.stack[-1] != OPEN_MARKER:
            top = get_precedence(self.stack[-1])
            if top > incoming or (top == incoming and symbol not in RIGHT_ASSOCIATIVE):
                self.postfix.append(self.stack.pop())
            else:
                break
        self.stack.append(symbol)

    # ─── Grouping ───────────────────────────────────────────────────

    def _drain_group(self) -> None:
        """Pop every operator above the nearest "(" (or the whole stack)."""
        while self.stack and self.stack[-1] != OPEN_MARKER:
            self.postfix.append(self.stack.pop())

    def _close_group(self) -> None:
        self._drain_group()
        if not self.stack:
            raise UnbalancedParenthesesError(
                "Unbalanced parentheses: ')' without matching '('",
                details={"postfix_so_far": [str(e) for e in self.postfix]},
            )
        self.stack.pop()
