"""
Runtime settings, read from WORDCALC_* environment variables.

The shells call ``load_dotenv()`` first, so a local ``.env`` file works too.
Values are validated by pydantic: a bad value fails at startup, not mid-call.
"""

from __future__ import annotations

import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field

from .evaluator import DEFAULT_MAX_EXPONENT, DEFAULT_PRECISION

ENV_PREFIX = "WORDCALC_"


class Settings(BaseModel):
    """Evaluator configuration."""

    textbook_precedence: bool = False  # Standard shunting-yard instead of legacy rule
    precision: int = Field(default=DEFAULT_PRECISION, ge=1, le=1000)
    max_exponent: int = Field(default=DEFAULT_MAX_EXPONENT, ge=0)  # Largest exponent for "^"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    debug_tokens: bool = False  # Log every token at INFO

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from the environment, ignoring unset variables."""
        env = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is not None and raw.strip():
                values[name] = raw.strip().upper() if name == "log_level" else raw.strip()
        return cls(**values)
