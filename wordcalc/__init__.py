"""
wordcalc — Arithmetic over digits and English number-words.

Architecture: Lexer → Number-word consolidation → Shunting-yard → Postfix evaluation
Philosophy:  Exact decimal arithmetic. Fail loudly, never guess a result.
"""

__version__ = "1.0.0"
