"""Pytest configuration — ensures the project root is importable."""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _clean_wordcalc_env(monkeypatch):
    """Keep WORDCALC_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("WORDCALC_"):
            monkeypatch.delenv(name)
    yield
