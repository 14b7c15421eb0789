"""
Character-class-driven lexer.

The lexer is a finite-state machine. Each step classifies the character under
the cursor and asks the pure ``transition`` function what to do:

    (state, character class) → (action, next state)

The lexer then performs the action against its cursor (``pos``) and token
start marker (``start``) and hands every completed token to a receiver.
Whitespace is discarded and never reaches the receiver.

Invariant: ``0 <= start <= pos <= len(text)`` at every step.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Protocol

from .exceptions import InvalidInputError
from .models import CharacterClass, LexerState, TokenKind

OPERATOR_CHARS: frozenset[str] = frozenset("+-*/^")
DIGIT_CHARS: frozenset[str] = frozenset("0123456789.")


class TokenReceiver(Protocol):
    """Anything the lexer (or an upstream filter) can hand tokens to.

    Implementations must not raise for kinds they do not handle.
    """

    def receive_token(self, kind: TokenKind, lexeme: str) -> None: ...


class Action(str, Enum):
    """What the lexer does with the current character before changing state."""

    DISCARD = "DISCARD"  # Skip the character; the next token starts after it
    MARK = "MARK"  # Token starts here; re-scan this character in the new state
    ADVANCE = "ADVANCE"  # Character belongs to the token being scanned
    EMIT_SINGLE = "EMIT_SINGLE"  # Character is a complete one-char token
    EMIT = "EMIT"  # Token ends before this character
    STOP = "STOP"
    FAIL = "FAIL"


# ─── Classification ─────────────────────────────────────────────────


def classify(char: Optional[str]) -> CharacterClass:
    """Return the class of one character; ``None`` means end of input."""
    if char is None:
        return CharacterClass.END_OF_INPUT
    if char.isspace():
        return CharacterClass.WHITESPACE
    if char.isascii() and char.isalpha():
        return CharacterClass.LETTER
    if char in DIGIT_CHARS:
        return CharacterClass.DIGIT
    if char == "(":
        return CharacterClass.OPEN_PAREN
    if char == ")":
        return CharacterClass.CLOSE_PAREN
    if char in OPERATOR_CHARS:
        return CharacterClass.OPERATOR
    return CharacterClass.UNRECOGNIZED


# ─── Transition Table ───────────────────────────────────────────────

_FROM_WHITESPACE: dict[CharacterClass, tuple[Action, LexerState]] = {
    CharacterClass.WHITESPACE: (Action.DISCARD, LexerState.SCAN_WHITESPACE),
    CharacterClass.DIGIT: (Action.MARK, LexerState.SCAN_NUMBER),
    CharacterClass.LETTER: (Action.MARK, LexerState.SCAN_WORD),
    CharacterClass.OPERATOR: (Action.MARK, LexerState.SCAN_OPERATOR),
    CharacterClass.OPEN_PAREN: (Action.EMIT_SINGLE, LexerState.SCAN_WHITESPACE),
    CharacterClass.CLOSE_PAREN: (Action.EMIT_SINGLE, LexerState.SCAN_WHITESPACE),
    CharacterClass.END_OF_INPUT: (Action.STOP, LexerState.TERMINAL),
    CharacterClass.UNRECOGNIZED: (Action.FAIL, LexerState.TERMINAL),
}

# Which class keeps each scanning state going, and what it emits when it ends.
_RUN_CLASS: dict[LexerState, CharacterClass] = {
    LexerState.SCAN_NUMBER: CharacterClass.DIGIT,
    LexerState.SCAN_OPERATOR: CharacterClass.OPERATOR,
    LexerState.SCAN_WORD: CharacterClass.LETTER,
}

_RUN_KIND: dict[LexerState, TokenKind] = {
    LexerState.SCAN_NUMBER: TokenKind.NUMBER,
    LexerState.SCAN_OPERATOR: TokenKind.OPERATOR,
    LexerState.SCAN_WORD: TokenKind.WORD,
}

_PAREN_KIND: dict[CharacterClass, TokenKind] = {
    CharacterClass.OPEN_PAREN: TokenKind.OPEN_PAREN,
    CharacterClass.CLOSE_PAREN: TokenKind.CLOSE_PAREN,
}


def transition(
    state: LexerState, char_class: CharacterClass
) -> tuple[Action, LexerState]:
    """Pure transition function of the lexer state machine."""
    if state == LexerState.SCAN_WHITESPACE:
        return _FROM_WHITESPACE[char_class]
    if state == LexerState.TERMINAL:
        return Action.STOP, LexerState.TERMINAL

    if char_class == _RUN_CLASS[state]:
        return Action.ADVANCE, state
    if char_class == CharacterClass.END_OF_INPUT:
        return Action.EMIT, LexerState.TERMINAL
    return Action.EMIT, LexerState.SCAN_WHITESPACE


# ─── Lexer ──────────────────────────────────────────────────────────


class Lexer:
    """Tokenizes one input string.

    Usage:
        Lexer("2 + 3").run(receiver)
    """

    def __init__(self, text: str):
        self.text = text
        self.state = LexerState.SCAN_WHITESPACE
        self.pos = 0
        self.start = 0

    def run(self, receiver: TokenReceiver) -> None:
        """Consume the whole input once, emitting tokens left to right."""
        while self.state != LexerState.TERMINAL:
            char = self._read()
            char_class = classify(char)
            action, next_state = transition(self.state, char_class)

            if action == Action.FAIL:
                raise InvalidInputError(
                    f"Invalid input: unrecognized character {char!r} at position {self.pos}",
                    details={"character": char, "position": self.pos},
                )
            if action == Action.DISCARD:
                self.pos += 1
                self.start = self.pos
            elif action == Action.MARK:
                self.start = self.pos
            elif action == Action.ADVANCE:
                self.pos += 1
            elif action == Action.EMIT_SINGLE:
                self.pos += 1
                self._emit(receiver, _PAREN_KIND[char_class])
            elif action == Action.EMIT:
                self._emit(receiver, _RUN_KIND[self.state])

            self.state = next_state

    def _read(self) -> Optional[str]:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def _emit(self, receiver: TokenReceiver, kind: TokenKind) -> None:
        receiver.receive_token(kind, self.text[self.start : self.pos])
        self.start = self.pos
