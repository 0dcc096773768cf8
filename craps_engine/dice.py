"""
dice.py -- dice sources and the Roll value

Public:
  - Roll (frozen): die1, die2, total, is_hard, timestamp
  - make_roll(die1, die2, timestamp=None) -> Roll
  - DiceSource: roll_die() / roll()
  - SecureDice   OS CSPRNG, time-seeded fallback if the generator fails
  - SeededDice   numpy Generator, reproducible runs
  - FixedDice    scripted (die1, die2) pairs for tests and replays
"""

from __future__ import annotations

import secrets
import time
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

import numpy as np

from .errors import DiceError, DiceExhaustedError
from .logging_utils import get_logger

log = get_logger("dice")

FACES = range(1, 7)


@dataclass(frozen=True)
class Roll:
    die1: int
    die2: int
    total: int
    is_hard: bool
    timestamp: float = field(default_factory=time.time, compare=False)

    @property
    def dice(self) -> Tuple[int, int]:
        return (self.die1, self.die2)

    def matches(self, a: int, b: int) -> bool:
        """True when the dice show exactly ``a`` and ``b`` in either order."""
        return (self.die1, self.die2) in ((a, b), (b, a))

    def __str__(self) -> str:
        return f"{self.total} ({self.die1} + {self.die2})"


def make_roll(die1: int, die2: int, timestamp: Optional[float] = None) -> Roll:
    for face in (die1, die2):
        if not isinstance(face, (int, np.integer)) or int(face) not in FACES:
            raise DiceError(f"die face must be an integer 1-6, got {face!r}")
    d1, d2 = int(die1), int(die2)
    return Roll(
        die1=d1,
        die2=d2,
        total=d1 + d2,
        is_hard=d1 == d2,
        timestamp=time.time() if timestamp is None else timestamp,
    )


class DiceSource(ABC):
    """Anything that can throw two dice for the table."""

    @abstractmethod
    def roll_die(self) -> int:
        ...

    def roll(self) -> Roll:
        return make_roll(self.roll_die(), self.roll_die())


class SecureDice(DiceSource):
    """
    Uniform faces from the OS CSPRNG. If the generator is unavailable the face
    is derived from the clock instead, so a roll never blocks the game.
    """

    def roll_die(self) -> int:
        try:
            return secrets.randbelow(6) + 1
        except (OSError, NotImplementedError) as e:
            log.warning("secure RNG unavailable, using time-seeded fallback: %s", e)
            return 1 + (time.time_ns() % 6)


class SeededDice(DiceSource):
    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None) -> None:
        if isinstance(rng, np.random.Generator):
            self._rng = rng
        else:
            self._rng = np.random.default_rng(seed)
        self.seed = seed

    def roll_die(self) -> int:
        return int(self._rng.integers(1, 7))


class FixedDice(DiceSource):
    """
    Replays a scripted sequence of (die1, die2) pairs in order. ``roll_die``
    hands out the faces of the next pair one at a time, so two calls throw
    the same dice as one ``roll()``.
    """

    def __init__(self, pairs: Iterable[Tuple[int, int]] = ()) -> None:
        self._pairs: deque = deque()
        self._faces: deque = deque()     # second face of a half-thrown pair
        self.extend(pairs)

    def extend(self, pairs: Iterable[Tuple[int, int]]) -> None:
        for d1, d2 in pairs:
            make_roll(d1, d2)  # validate faces up front
            self._pairs.append((int(d1), int(d2)))

    @property
    def remaining(self) -> int:
        """Whole pairs left in the script."""
        return len(self._pairs)

    def roll_die(self) -> int:
        if not self._faces:
            if not self._pairs:
                raise DiceExhaustedError("no scripted rolls left")
            self._faces.extend(self._pairs.popleft())
        return self._faces.popleft()
