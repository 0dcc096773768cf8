# craps_engine/state.py
"""
Game phases and the come-out / point state machine.

Transitions (driven only by Roll.total in the current state):

    COME_OUT  7, 11         -> COME_OUT   natural
    COME_OUT  2, 3, 12      -> COME_OUT   craps
    COME_OUT  4-6, 8-10     -> POINT      point_established
    POINT     == point      -> COME_OUT   point_made
    POINT     7             -> SEVEN_OUT -> COME_OUT   seven_out
    POINT     other         -> POINT      roll

SEVEN_OUT is entered and left inside a single ``advance`` call.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set, Tuple

from .dice import Roll
from .logging_utils import get_logger

log = get_logger("state")

# ---------------------------------------------------------------------------
# Canonical event names and numeric groups
# ---------------------------------------------------------------------------

NATURAL = "natural"
CRAPS = "craps"
POINT_ESTABLISHED = "point_established"
POINT_MADE = "point_made"
SEVEN_OUT = "seven_out"
ROLL = "roll"

CANONICAL_EVENT_TYPES: Set[str] = {
    NATURAL,
    CRAPS,
    POINT_ESTABLISHED,
    POINT_MADE,
    SEVEN_OUT,
    ROLL,
}

POINT_NUMS = {4, 5, 6, 8, 9, 10}
CRAPS_NUMS = {2, 3, 12}
NATURAL_NUMS = {7, 11}


class GameState(Enum):
    COME_OUT = "COME_OUT"
    POINT = "POINT"
    SEVEN_OUT = "SEVEN_OUT"

    def __str__(self) -> str:
        return self.value


class Point(Enum):
    OFF = 0
    FOUR = 4
    FIVE = 5
    SIX = 6
    EIGHT = 8
    NINE = 9
    TEN = 10

    @property
    def number(self) -> int:
        """The box number, 0 when the point is off."""
        return self.value

    @classmethod
    def from_total(cls, total: int) -> "Point":
        if total not in POINT_NUMS:
            raise ValueError(f"invalid point number: {total}")
        return cls(total)

    def __str__(self) -> str:
        return "OFF" if self is Point.OFF else str(self.value)


@dataclass(frozen=True)
class Transition:
    from_state: GameState
    to_state: GameState
    event: str
    roll: Roll
    point_before: Point
    point_after: Point
    path: Tuple[GameState, ...] = ()

    @property
    def shooter_change(self) -> bool:
        return self.event == SEVEN_OUT

    @property
    def changed(self) -> bool:
        return self.from_state is not self.to_state or self.point_before is not self.point_after


def validate_transition(from_state: GameState, to_state: GameState, roll: Roll, point: Point) -> Optional[str]:
    """Return a description of what is wrong with the transition, or None."""
    total = roll.total
    if from_state is GameState.COME_OUT:
        if to_state is GameState.POINT:
            if total not in POINT_NUMS:
                return f"invalid point number: {total}"
        elif to_state is GameState.COME_OUT:
            if total not in NATURAL_NUMS | CRAPS_NUMS:
                return f"invalid come out roll: {total}"
        else:
            return f"invalid transition from come out to {to_state}"
    elif from_state is GameState.POINT:
        if point is Point.OFF:
            return "point phase without an established point"
        if to_state is GameState.COME_OUT:
            if total != point.number:
                return f"invalid point phase roll: {total}"
        elif to_state is GameState.SEVEN_OUT:
            if total != 7:
                return f"invalid seven out roll: {total}"
        elif to_state is GameState.POINT:
            if total == 7 or total == point.number:
                return f"roll {total} should have ended the point {point}"
    elif from_state is GameState.SEVEN_OUT:
        if to_state is not GameState.COME_OUT:
            return f"invalid transition from seven out to {to_state}"
    return None


class StateMachine:
    """Owns the table's GameState and Point and advances them one roll at a time."""

    def __init__(self) -> None:
        self.state: GameState = GameState.COME_OUT
        self.point: Point = Point.OFF

    def check_invariants(self) -> List[str]:
        problems: List[str] = []
        if self.state is GameState.SEVEN_OUT:
            problems.append("seven out is transient and must not persist between rolls")
        if self.state is GameState.COME_OUT and self.point is not Point.OFF:
            problems.append("point should be off during come out phase")
        if self.state is GameState.POINT and self.point is Point.OFF:
            problems.append("point should be set during point phase")
        return problems

    def _check(self, from_state: GameState, to_state: GameState, roll: Roll, reason: str) -> None:
        problem = validate_transition(from_state, to_state, roll, self.point)
        if problem:
            # the roll is generated internally, so apply it anyway
            log.warning("state transition %s -> %s on %d (%s): %s", from_state, to_state, roll.total, reason, problem)

    def advance(self, roll: Roll) -> Transition:
        from_state, point_before = self.state, self.point
        path: Tuple[GameState, ...]

        if from_state is GameState.SEVEN_OUT:
            # only reachable if a previous advance was interrupted
            log.warning("table was left in SEVEN_OUT; resetting to COME_OUT before roll %d", roll.total)
            self.state, self.point = GameState.COME_OUT, Point.OFF
            from_state, point_before = self.state, self.point

        if from_state is GameState.COME_OUT:
            if roll.total in NATURAL_NUMS:
                event, to_state = NATURAL, GameState.COME_OUT
            elif roll.total in CRAPS_NUMS:
                event, to_state = CRAPS, GameState.COME_OUT
            else:
                event, to_state = POINT_ESTABLISHED, GameState.POINT
            self._check(from_state, to_state, roll, event)
            if to_state is GameState.POINT:
                try:
                    self.point = Point.from_total(roll.total)
                    self.state = GameState.POINT
                except ValueError as e:
                    log.warning("could not establish point: %s", e)
                    to_state = GameState.COME_OUT
            path = (from_state, to_state)
        else:
            if roll.total == 7:
                event = SEVEN_OUT
                self._check(GameState.POINT, GameState.SEVEN_OUT, roll, event)
                self.state = GameState.SEVEN_OUT
                self._check(GameState.SEVEN_OUT, GameState.COME_OUT, roll, "come out after seven out")
                self.state, self.point = GameState.COME_OUT, Point.OFF
                to_state = GameState.COME_OUT
                path = (GameState.POINT, GameState.SEVEN_OUT, GameState.COME_OUT)
            elif roll.total == self.point.number:
                event, to_state = POINT_MADE, GameState.COME_OUT
                self._check(from_state, to_state, roll, event)
                self.state, self.point = GameState.COME_OUT, Point.OFF
                path = (from_state, to_state)
            else:
                event, to_state = ROLL, GameState.POINT
                self._check(from_state, to_state, roll, event)
                path = (from_state,)

        transition = Transition(
            from_state=from_state,
            to_state=self.state,
            event=event,
            roll=roll,
            point_before=point_before,
            point_after=self.point,
            path=path,
        )
        if transition.changed:
            log.info(
                "state transition: %s -> %s (roll: %d, reason: %s)",
                transition.from_state, transition.to_state, roll.total, event,
            )
        return transition
