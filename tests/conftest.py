"""Pytest configuration for the craps engine."""

from __future__ import annotations

import sys
import warnings
from pathlib import Path

import pytest


def _ensure_repo_on_path() -> None:
    """Make the repository importable without an editable install."""
    repo_root = Path(__file__).resolve().parent.parent
    if repo_root.exists():
        path_str = str(repo_root)
        if path_str not in sys.path:
            sys.path.insert(0, path_str)


_ensure_repo_on_path()
warnings.simplefilter("default", DeprecationWarning)

from craps_engine.dice import FixedDice  # noqa: E402
from craps_engine.table import Table  # noqa: E402


@pytest.fixture
def dice() -> FixedDice:
    """Scripted dice; tests push the pairs they need with ``dice.extend``."""
    return FixedDice()


@pytest.fixture
def table(dice: FixedDice) -> Table:
    """$5-$1000 table, 3x odds, one player 'alice' with $1000."""
    t = Table(min_bet=5, max_bet=1000, max_odds=3, dice=dice)
    t.add_player("alice", "Alice", 1000)
    return t
