"""
Main evaluation pipeline — wires the stages together for one call.

Flow:
  ┌──────────┐
  │   Text   │
  └────┬─────┘
       │
  ┌────▼─────┐
  │  Lexer   │   ← character classes → tokens
  └────┬─────┘
       │
  ┌────▼─────────┐
  │ Consolidator │   ← "two hundred three" → 203, "plus" → +
  └────┬─────────┘
       │
  ┌────▼─────┐
  │ Recorder │   ← keeps (and logs) the tokens the converter sees
  └────┬─────┘
       │
  ┌────▼──────┐
  │ Converter │   ← shunting-yard → postfix sequence
  └────┬──────┘
       │
  ┌────▼──────┐
  │ Evaluator │   ← operand stack → one Decimal
  └───────────┘

Every call builds fresh stage objects. The pipeline instance holds only its
settings, so re-running the same text always gives the same answer.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from .config import Settings
from .converter import InfixToPostfixConverter
from .evaluator import evaluate_postfix
from .exceptions import CalculatorError
from .lexer import Lexer, TokenReceiver
from .models import EvaluationReport, Token, TokenKind
from .word_to_number import WordNumberConsolidator

logger = logging.getLogger(__name__)


def format_result(value: Decimal) -> str:
    """Culture-invariant general representation: no exponent, no trailing zeros."""
    if value == 0:
        return "0"
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


class TokenRecorder:
    """Pass-through receiver that records and logs every token it forwards."""

    def __init__(self, downstream: TokenReceiver, level: int = logging.DEBUG):
        self.downstream = downstream
        self.level = level
        self.tokens: list[Token] = []

    def receive_token(self, kind: TokenKind, lexeme: str) -> None:
        logger.log(self.level, "received token: %s, %s", kind.value, lexeme)
        self.tokens.append(Token(kind=kind, lexeme=lexeme))
        self.downstream.receive_token(kind, lexeme)


class ExpressionPipeline:
    """Orchestrates one parse-and-evaluate call.

    Usage:
        pipeline = ExpressionPipeline()
        report = pipeline.run("two hundred three plus 4")
        print(report.formatted)   # 207
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()

    def run(self, text: str) -> EvaluationReport:
        """Evaluate `text` and return the result with its intermediate artifacts.

        Raises:
            CalculatorError: any lexing, conversion or evaluation failure.
        """
        converter = InfixToPostfixConverter(textbook=self.settings.textbook_precedence)
        recorder = TokenRecorder(
            converter,
            level=logging.INFO if self.settings.debug_tokens else logging.DEBUG,
        )
        consolidator = WordNumberConsolidator(recorder)

        try:
            Lexer(text).run(consolidator)
            consolidator.finish()
            postfix = converter.finish()
            logger.debug("Postfix for %r: %s", text, postfix)
            result = evaluate_postfix(
                postfix,
                precision=self.settings.precision,
                max_exponent=self.settings.max_exponent,
            )
        except CalculatorError as e:
            logger.warning("Evaluation of %r failed [%s]: %s", text, e.code, e)
            raise

        return EvaluationReport(
            expression=text,
            result=result,
            formatted=format_result(result),
            postfix=[str(element) for element in postfix],
            tokens=recorder.tokens,
        )

    def evaluate(self, text: str) -> Decimal:
        return self.run(text).result


def evaluate(text: str, settings: Optional[Settings] = None) -> Decimal:
    """Evaluate one expression with a throwaway pipeline."""
    return ExpressionPipeline(settings).evaluate(text)
