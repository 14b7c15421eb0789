#!/usr/bin/env python3
"""
wordcalc — Console Entry Point
===============================

Evaluates one expression and prints the result.

Usage:
    python main.py "two hundred three plus 4"     # Expression from argv
    python main.py                                 # Prompts for input
    WORDCALC_LOG_LEVEL=DEBUG python main.py "1+2"  # Show tokens and postfix
"""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from wordcalc.config import Settings
from wordcalc.exceptions import CalculatorError
from wordcalc.pipeline import ExpressionPipeline

load_dotenv()


# ─── ANSI Color Constants ───────────────────────────────────────────

_RED = "\033[91m"
_BOLD = "\033[1m"
_RESET = "\033[0m"


def _read_expression(argv: list[str]) -> str:
    if argv:
        return " ".join(argv)
    return input("input: ")


# ─── Main ────────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> int:
    """Evaluate one expression; returns the process exit code."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    expression = _read_expression(sys.argv[1:] if argv is None else argv)
    pipeline = ExpressionPipeline(settings)

    try:
        report = pipeline.run(expression)
    except CalculatorError as e:
        print(f"{_RED}{_BOLD}Error [{e.code}]{_RESET}: {e}", file=sys.stderr)
        return 1

    print(f"Eval: {report.formatted}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
