"""
Fold runs of English number-words into single Number tokens.

The consolidator is the first-stage token receiver: it sits between the lexer
and the converter, intercepts Word tokens and forwards everything else.

Supported patterns:
    "two plus three"        → 2 + 3
    "two hundred three"     → 203
    "two hundred and three" → 203  ("and" is an unknown word and is ignored)
    "twenty one times four" → 21 * 4

This is a pairing heuristic, not a grammar. Words are paired by position
and each pair is multiplied; "-ty" words are added instead. So
"one hundred twenty" comes out as 121, not 120.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping

from .lexer import TokenReceiver
from .models import TokenKind

logger = logging.getLogger(__name__)

# ─── Word Lookup Tables ──────────────────────────────────────────────

_ONES: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
    "eleven": 11,
    "twelve": 12,
    "thirteen": 13,
    "fourteen": 14,
    "fifteen": 15,
    "sixteen": 16,
    "seventeen": 17,
    "eighteen": 18,
    "nineteen": 19,
}

_TENS: dict[str, int] = {
    "twenty": 20,
    "thirty": 30,
    "forty": 40,
    "fourty": 40,  # Common misspelling, accepted on purpose
    "fifty": 50,
    "sixty": 60,
    "seventy": 70,
    "eighty": 80,
    "ninety": 90,
}

_SCALES: dict[str, int] = {
    "hundred": 100,
    "thousand": 1_000,
    "million": 1_000_000,
    "billion": 1_000_000_000,
    "trillion": 1_000_000_000_000,
    "quadrillion": 1_000_000_000_000_000,
    "quintillion": 1_000_000_000_000_000_000,
}

NUMBER_WORDS: Mapping[str, Decimal] = MappingProxyType(
    {word: Decimal(value) for table in (_ONES, _TENS, _SCALES) for word, value in table.items()}
)

OPERATOR_WORDS: Mapping[str, str] = MappingProxyType({
    "plus": "+",
    "add": "+",
    "added": "+",
    "minus": "-",
    "subtract": "-",
    "subtracted": "-",
    "divide": "/",
    "divided": "/",
    "times": "*",
    "multiplied": "*",
})


# ─── Flush Algorithm ────────────────────────────────────────────────


def consolidate_words(words: list[str]) -> Decimal:
    """Fold buffered number-words into one value.

    Args:
        words: lowercase keys of NUMBER_WORDS, in input order.

    Returns:
        The folded value; Decimal(0) for an empty list.

    Algorithm:
        Walk the words by index, keeping a `multiplier` register.
        - even index, "-ty" word → add it to `result`, multiplier = 1
        - even index, other word → multiplier = its value
        - odd index              → add multiplier * value to `result`
        An odd-length buffer leaves a pending multiplier, which is added last.
    """
    result = Decimal(0)
    multiplier = Decimal(0)

    for i, word in enumerate(words):
        value = NUMBER_WORDS[word]
        if i % 2:
            result += multiplier * value
        elif word.endswith("ty"):
            result += value
            multiplier = Decimal(1)
        else:
            multiplier = value

    if len(words) % 2:
        result += multiplier

    return result


# ─── Consolidator ───────────────────────────────────────────────────


class WordNumberConsolidator:
    """Token receiver that folds number-words before forwarding downstream.

    Call ``finish()`` once the lexer is done so a trailing phrase such as
    "... plus three" is not left in the buffer.
    """

    def __init__(self, downstream: TokenReceiver):
        self.downstream = downstream
        self.buffer: list[str] = []

    def receive_token(self, kind: TokenKind, lexeme: str) -> None:
        if kind != TokenKind.WORD:
            self.flush()
            self.downstream.receive_token(kind, lexeme)
            return

        word = lexeme.lower()
        if word in OPERATOR_WORDS:
            self.flush()
            self.downstream.receive_token(TokenKind.OPERATOR, OPERATOR_WORDS[word])
        elif word in NUMBER_WORDS:
            self.buffer.append(word)
        else:
            logger.debug("Ignoring unrecognized word %r", lexeme)
            self.downstream.receive_token(TokenKind.WORD, lexeme)

    def flush(self) -> None:
        """Emit the buffered phrase as one Number token, if there is one."""
        if not self.buffer:
            return
        value = consolidate_words(self.buffer)
        logger.debug("Consolidated %s into %s", self.buffer, value)
        self.buffer.clear()
        self.downstream.receive_token(TokenKind.NUMBER, str(value))

    def finish(self) -> None:
        self.flush()
