"""
Core data types shared by every stage of the evaluator.

Enumerations are plain ``str`` enums so they print and serialize by value.
Tokens are frozen pydantic models: once the lexer (or the consolidator)
produces one, nothing downstream may change it.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


# ─── Character Classes ──────────────────────────────────────────────


class CharacterClass(str, Enum):
    """Lexical class of a single input character."""

    WHITESPACE = "WHITESPACE"
    DIGIT = "DIGIT"  # Digit or decimal point
    LETTER = "LETTER"
    OPERATOR = "OPERATOR"
    OPEN_PAREN = "OPEN_PAREN"
    CLOSE_PAREN = "CLOSE_PAREN"
    END_OF_INPUT = "END_OF_INPUT"
    UNRECOGNIZED = "UNRECOGNIZED"


# ─── Tokens ─────────────────────────────────────────────────────────


class TokenKind(str, Enum):
    """Kind of a token handed to a token receiver."""

    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    OPEN_PAREN = "OPEN_PAREN"
    CLOSE_PAREN = "CLOSE_PAREN"
    WORD = "WORD"


class Token(BaseModel):
    """A ``{kind, lexeme}`` pair, exactly as matched (or synthesized)."""

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    lexeme: str


# ─── Lexer States ───────────────────────────────────────────────────


class LexerState(str, Enum):
    SCAN_WHITESPACE = "SCAN_WHITESPACE"
    SCAN_NUMBER = "SCAN_NUMBER"
    SCAN_OPERATOR = "SCAN_OPERATOR"
    SCAN_WORD = "SCAN_WORD"
    TERMINAL = "TERMINAL"


# ─── Postfix Sequence ───────────────────────────────────────────────

# Each element is either an operand or an operator symbol.
PostfixElement = Union[Decimal, str]


# ─── Evaluation Report ──────────────────────────────────────────────


class EvaluationReport(BaseModel):
    """The final output of a full parse-and-evaluate call."""

    expression: str
    result: Decimal
    formatted: str  # Culture-invariant general representation of `result`
    postfix: list[str] = Field(default_factory=list)
    tokens: list[Token] = Field(default_factory=list)  # As seen by the converter
