"""
limits.py -- placement-time checks

Every check raises a ValidationError subclass and mutates nothing, so the
table can run them all before touching a bankroll.

Public:
  - effective_limits(player, table_min, table_max) -> (min, max)
  - check_amount(amount, min_bet, max_bet)
  - check_bankroll(player, amount)
  - check_phase(defn, state)
  - check_numbers(defn, numbers) -> tuple
  - max_odds_amount(base_amount, max_multiple) / check_odds(amount, base_amount, max_multiple)
  - check_session(player)
  - check_player_limits(table_min, table_max, ...)
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from .errors import (
    BetLimitError,
    BetPhaseError,
    InsufficientBankrollError,
    InvalidNumbersError,
    OddsLimitError,
    SessionLimitError,
)
from .ledger import Player, money
from .registry import POINT_NUMBERS, BetCategory, CanonicalBetDefinition
from .state import GameState

# odds bet -> the contract bet it sits behind
ODDS_BASE: Dict[str, str] = {
    "PASS_ODDS": "PASS_LINE",
    "DONT_PASS_ODDS": "DONT_PASS",
    "COME_ODDS": "COME",
    "DONT_COME_ODDS": "DONT_COME",
}


def effective_limits(player: Player, table_min: float, table_max: float) -> Tuple[float, float]:
    lo = table_min if player.min_bet is None else player.min_bet
    hi = table_max if player.max_bet is None else player.max_bet
    return lo, hi


def check_amount(amount: float, min_bet: float, max_bet: float) -> None:
    if amount is None or amount <= 0:
        raise BetLimitError(f"bet amount must be positive, got ${amount}")
    if amount < min_bet:
        raise BetLimitError(f"bet amount ${amount:.2f} is below minimum ${min_bet:.2f}")
    if amount > max_bet:
        raise BetLimitError(f"bet amount ${amount:.2f} exceeds maximum ${max_bet:.2f}")


def check_bankroll(player: Player, amount: float) -> None:
    if money(amount) > player.bankroll:
        raise InsufficientBankrollError(
            f"insufficient bankroll: ${player.bankroll:.2f} available, ${amount:.2f} required"
        )


def check_phase(defn: CanonicalBetDefinition, state: GameState) -> None:
    if defn.requires_come_out and state is not GameState.COME_OUT:
        raise BetPhaseError(f"bet type {defn.key} can only be placed during come-out phase")
    if defn.requires_point and state is not GameState.POINT:
        raise BetPhaseError(f"bet type {defn.key} can only be placed during point phase")


def check_numbers(defn: CanonicalBetDefinition, numbers: Optional[Iterable[int]]) -> Tuple[int, ...]:
    """
    Validate the numbers attached to a bet and return the tuple to store on it.

    PLACE_NUMBERS needs the player's box numbers. Fixed multi-number bets
    (inside, outside, all hardways) accept either nothing or their own set.
    Come odds take at most one box number, the come point they back.
    """
    nums = tuple(int(n) for n in (numbers or ()))
    for n in nums:
        if n < 1 or n > 12:
            raise InvalidNumbersError(f"invalid number {n} for bet type {defn.key}")

    if defn.player_numbers:
        if not nums:
            raise InvalidNumbersError(f"bet type {defn.key} needs at least one number")
        bad = [n for n in nums if n not in defn.numbers]
        if bad:
            raise InvalidNumbersError(f"{defn.key} numbers must be box numbers, got {bad}")
        if len(set(nums)) != len(nums):
            raise InvalidNumbersError(f"duplicate numbers for {defn.key}: {list(nums)}")
        return tuple(sorted(nums))

    if len(defn.numbers) > 1:
        if nums and set(nums) != set(defn.numbers):
            raise InvalidNumbersError(
                f"{defn.key} always covers {list(defn.numbers)}, got {list(nums)}"
            )
        return defn.numbers

    if defn.category is BetCategory.ODDS and defn.key in ("COME_ODDS", "DONT_COME_ODDS"):
        if len(nums) > 1 or (nums and nums[0] not in POINT_NUMBERS):
            raise InvalidNumbersError(f"{defn.key} takes a single come point, got {list(nums)}")

    return nums


def max_odds_amount(base_amount: float, max_multiple: float) -> float:
    return money(float(base_amount) * float(max_multiple))


def check_odds(amount: float, base_amount: float, max_multiple: float) -> None:
    cap = max_odds_amount(base_amount, max_multiple)
    if money(amount) > cap:
        raise OddsLimitError(
            f"odds bet ${amount:.2f} exceeds {max_multiple:g}x the ${base_amount:.2f} base bet (max ${cap:.2f})"
        )


def check_session(player: Player) -> None:
    if player.loss_limit and -player.session_result >= player.loss_limit:
        raise SessionLimitError(
            f"player {player.id} reached the loss limit of ${player.loss_limit:.2f}"
        )


def check_player_limits(
    table_min: float,
    table_max: float,
    *,
    min_bet: Optional[float] = None,
    max_bet: Optional[float] = None,
    win_goal: Optional[float] = None,
    loss_limit: Optional[float] = None,
) -> None:
    if max_bet is not None:
        if max_bet <= 0:
            raise BetLimitError("max bet must be positive")
        if max_bet < table_min:
            raise BetLimitError(f"max bet cannot be less than table minimum (${table_min:.2f})")
    if min_bet is not None:
        if min_bet < 0:
            raise BetLimitError("min bet cannot be negative")
        if min_bet > table_max:
            raise BetLimitError(f"min bet cannot be greater than table maximum (${table_max:.2f})")
    if min_bet is not None and max_bet is not None and min_bet > max_bet:
        raise BetLimitError("min bet cannot exceed max bet")
    if win_goal is not None and win_goal < 0:
        raise BetLimitError("win goal cannot be negative")
    if loss_limit is not None and loss_limit < 0:
        raise BetLimitError("loss limit cannot be negative")
