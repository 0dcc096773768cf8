"""
table.py -- the craps table

Table is the one object callers drive: seat players, take bets, throw the
dice, settle, advance the game. A turn is

    roll = table.roll_dice()
    results = table.resolve_all_bets(roll)
    results += table.update_game_state_only(roll)

or ``table.execute_game_turn()``, which does the same three steps.

Every mutating call validates first and raises a ValidationError before
touching any bankroll or bet list.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .bet_types import normalize_bet_type
from .config import TableConfig
from .dice import DiceSource, Roll, SecureDice, SeededDice
from .errors import (
    BetLimitError,
    BetNotFoundError,
    ContractBetError,
    PlayerExistsError,
    PlayerNotFoundError,
    UnknownBetTypeError,
    ValidationError,
)
from .ledger import PRESS, REFUND, Bet, Player, money, next_bet_id
from .limits import (
    ODDS_BASE,
    check_amount,
    check_bankroll,
    check_numbers,
    check_odds,
    check_phase,
    check_player_limits,
    check_session,
    effective_limits,
)
from .logging_utils import get_logger
from .registry import BetCategory, BetRegistry, CanonicalBetDefinition, default_registry
from .resolution import ResolutionEngine
from .state import POINT_ESTABLISHED, POINT_MADE, SEVEN_OUT, GameState, Point, StateMachine, Transition

log = get_logger("table")

# bets taken down (stake returned) when the shooter sevens out
SEVEN_OUT_CLEANUP = (
    BetCategory.PLACE,
    BetCategory.BUY,
    BetCategory.LAY,
    BetCategory.PLACE_TO_LOSE,
    BetCategory.HARD_WAY,
)


class Table:
    def __init__(
        self,
        min_bet: float = 5.0,
        max_bet: float = 1000.0,
        max_odds: int = 3,
        registry: Optional[BetRegistry] = None,
        dice: Optional[DiceSource] = None,
    ) -> None:
        if min_bet <= 0 or max_bet <= 0 or min_bet > max_bet:
            raise BetLimitError(f"invalid table limits: min ${min_bet} / max ${max_bet}")
        if max_odds < 0:
            raise BetLimitError(f"max odds cannot be negative, got {max_odds}")
        self.min_bet = float(min_bet)
        self.max_bet = float(max_bet)
        self.max_odds = max_odds
        self.registry = registry if registry is not None else default_registry()
        self.dice: DiceSource = dice if dice is not None else SecureDice()
        self.players: Dict[str, Player] = {}    # seating order
        self.shooter: str = ""
        self.last_roll: Optional[Roll] = None
        self.last_transition: Optional[Transition] = None
        self.history: List[Roll] = []
        self.created_at = time.time()
        self._machine = StateMachine()
        self._engine = ResolutionEngine(self)

    @classmethod
    def from_config(
        cls,
        cfg: TableConfig,
        *,
        registry: Optional[BetRegistry] = None,
        dice: Optional[DiceSource] = None,
    ) -> "Table":
        if dice is None:
            dice = SeededDice(cfg.seed) if cfg.seed is not None else SecureDice()
        table = cls(cfg.min_bet, cfg.max_bet, cfg.max_odds, registry=registry, dice=dice)
        for p in cfg.players:
            pid = str(p["id"])
            table.add_player(pid, str(p.get("name", pid)), float(p.get("bankroll", 0.0)))
        return table

    # ----- game state -----------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._machine.state

    @property
    def point(self) -> Point:
        return self._machine.point

    def get_state(self) -> GameState:
        return self.state

    def get_point(self) -> Point:
        return self.point

    def get_point_number(self) -> int:
        """The point as a number, 0 when off."""
        return self.point.number

    def get_shooter(self) -> str:
        return self.shooter

    def is_come_out(self) -> bool:
        return self.state is GameState.COME_OUT

    def is_point(self) -> bool:
        return self.state is GameState.POINT

    # ----- players --------------------------------------------------------

    def add_player(self, player_id: str, name: str, bankroll: float) -> Player:
        if player_id in self.players:
            raise PlayerExistsError(f"player {player_id} already exists")
        if bankroll is None or bankroll < 0:
            raise ValidationError(f"bankroll cannot be negative, got {bankroll}")
        player = Player(id=player_id, name=name, bankroll=bankroll)
        self.players[player_id] = player
        if not self.shooter:
            self.shooter = player_id
            log.info("shooter is now %s", player_id)
        log.debug("seated %s (%s) with $%.2f", player_id, name, player.bankroll)
        return player

    def get_player(self, player_id: str) -> Player:
        try:
            return self.players[player_id]
        except KeyError:
            raise PlayerNotFoundError(f"player {player_id} not found") from None

    def remove_player(self, player_id: str) -> float:
        """Unseat a player, returning the stakes of their open bets. Returns the refund."""
        player = self.get_player(player_id)
        refunded = 0.0
        for bet in player.open_bets():
            player.credit(bet.amount, bet, kind=REFUND, note="left the table")
            refunded += bet.amount
        player.bets = []

        successor = self._next_shooter(player_id) if self.shooter == player_id else self.shooter
        del self.players[player_id]
        if self.shooter == player_id:
            self.shooter = successor if successor != player_id else ""
            log.info("shooter %s left; shooter is now %s", player_id, self.shooter or "(none)")
        return money(refunded)

    def set_player_limits(
        self,
        player_id: str,
        *,
        min_bet: Optional[float] = None,
        max_bet: Optional[float] = None,
        win_goal: Optional[float] = None,
        loss_limit: Optional[float] = None,
    ) -> Player:
        player = self.get_player(player_id)
        check_player_limits(
            self.min_bet,
            self.max_bet,
            min_bet=min_bet if min_bet is not None else player.min_bet,
            max_bet=max_bet if max_bet is not None else player.max_bet,
            win_goal=win_goal,
            loss_limit=loss_limit,
        )
        if min_bet is not None:
            player.min_bet = float(min_bet)
        if max_bet is not None:
            player.max_bet = float(max_bet)
        if win_goal is not None:
            player.win_goal = float(win_goal)
        if loss_limit is not None:
            player.loss_limit = float(loss_limit)
        return player

    def _next_shooter(self, after: str) -> str:
        order = list(self.players)
        if not order:
            return ""
        if after not in order:
            return order[0]
        return order[(order.index(after) + 1) % len(order)]

    # ----- bets -----------------------------------------------------------

    def _definition(self, bet_type: str) -> Tuple[str, CanonicalBetDefinition]:
        key = normalize_bet_type(bet_type)
        defn, found = self.registry.lookup(key)
        if not found:
            raise UnknownBetTypeError(f"unknown bet type: {bet_type}")
        return key, defn

    def _odds_target(
        self, player: Player, defn: CanonicalBetDefinition, numbers: Sequence[int]
    ) -> Tuple[int, float]:
        """(number the odds back, total base bet behind it or 0 when there is none)."""
        base_type = ODDS_BASE[defn.key]
        if defn.key in ("PASS_ODDS", "DONT_PASS_ODDS"):
            number = self.point.number
            bases = player.open_bets(base_type)
        else:
            travelled = [b for b in player.open_bets(base_type) if b.come_point is not None]
            if numbers:
                number = numbers[0]
            elif travelled:
                number = travelled[-1].come_point
            else:
                number = self.point.number
            bases = [b for b in travelled if b.come_point == number]
        return number, money(sum(b.amount for b in bases))

    def place_bet(
        self,
        player_id: str,
        bet_type: str,
        amount: float,
        numbers: Optional[Sequence[int]] = None,
    ) -> Bet:
        player = self.get_player(player_id)
        lo, hi = effective_limits(player, self.min_bet, self.max_bet)
        check_amount(amount, lo, hi)
        check_bankroll(player, amount)
        key, defn = self._definition(bet_type)
        check_phase(defn, self.state)
        nums = check_numbers(defn, numbers)
        check_session(player)

        odds_point = None
        if defn.category is BetCategory.ODDS:
            odds_point, base = self._odds_target(player, defn, nums)
            if base > 0:
                existing = sum(b.amount for b in player.open_bets(key) if b.odds_point == odds_point)
                check_odds(existing + amount, base, self.max_odds)

        bet = Bet(
            id=next_bet_id(),
            bet_type=key,
            amount=money(amount),
            player_id=player_id,
            numbers=nums,
            odds_point=odds_point,
        )
        player.debit(bet.amount, bet)
        player.bets.append(bet)
        log.debug("%s placed %s $%.2f%s", player_id, key, bet.amount, f" on {list(nums)}" if nums else "")
        return bet

    def remove_bet(self, player_id: str, bet_type: str) -> float:
        """Take down every open bet of this type, returning the stakes. Returns the refund."""
        player = self.get_player(player_id)
        key, _ = self._definition(bet_type)
        bets = player.open_bets(key)
        if not bets:
            raise BetNotFoundError(f"player {player_id} has no {key} bet")
        if key == "PASS_LINE" and self.state is GameState.POINT:
            raise ContractBetError("pass line bet cannot be removed once a point is established")
        if key == "COME" and any(b.come_point is not None for b in bets):
            raise ContractBetError("come bet cannot be removed once it has moved to a number")

        refunded = 0.0
        for bet in bets:
            player.credit(bet.amount, bet, kind=REFUND, note="taken down")
            refunded += bet.amount
        ids = {b.id for b in bets}
        player.bets = [b for b in player.bets if b.id not in ids]
        return money(refunded)

    def press_bet(self, player_id: str, bet_type: str, amount: float) -> List[Bet]:
        """Add ``amount`` to every open bet of this type."""
        player = self.get_player(player_id)
        if amount is None or amount <= 0:
            raise BetLimitError(f"press amount must be positive, got ${amount}")
        key, defn = self._definition(bet_type)
        bets = player.open_bets(key)
        if not bets:
            raise BetNotFoundError(f"player {player_id} has no {key} bet")

        check_bankroll(player, amount * len(bets))
        _, hi = effective_limits(player, self.min_bet, self.max_bet)
        for bet in bets:
            if bet.amount + amount > hi:
                raise BetLimitError(
                    f"pressed bet ${bet.amount + amount:.2f} exceeds maximum ${hi:.2f}"
                )
        if defn.category is BetCategory.ODDS:
            by_point: Dict[int, List[Bet]] = {}
            for bet in bets:
                by_point.setdefault(bet.odds_point, []).append(bet)
            for number, group in by_point.items():
                _, base = self._odds_target(player, defn, (number,))
                if base > 0:
                    check_odds(sum(b.amount for b in group) + amount * len(group), base, self.max_odds)

        for bet in bets:
            player.debit(amount, bet, kind=PRESS)
            bet.amount = money(bet.amount + amount)
        return bets

    def turn_bet(self, player_id: str, bet_type: str, working: bool) -> List[Bet]:
        """Turn bets on or off. Off bets sit out rolls without losing their stake."""
        player = self.get_player(player_id)
        key, defn = self._definition(bet_type)
        bets = player.open_bets(key)
        if not bets:
            raise BetNotFoundError(f"player {player_id} has no {key} bet")
        if defn.one_roll and not working:
            raise ValidationError(f"one-roll bet {key} cannot be turned off")
        for bet in bets:
            bet.working = bool(working)
        return bets

    # ----- turn -----------------------------------------------------------

    def roll_dice(self) -> Roll:
        """Throw the dice. Settles nothing and leaves the game state alone."""
        if self.players and self.shooter not in self.players:
            log.warning("shooter %r is not seated; reassigning", self.shooter)
            self.shooter = self._next_shooter(self.shooter)
        roll = self.dice.roll()
        self.last_roll = roll
        self.history.append(roll)
        return roll

    def resolve_all_bets(self, roll: Roll) -> List[str]:
        return self._engine.resolve_all(roll)

    def update_game_state_only(self, roll: Roll) -> List[str]:
        """Advance the state machine on ``roll``; returns table announcements."""
        transition = self._machine.advance(roll)
        self.last_transition = transition
        notes: List[str] = []

        if transition.event == POINT_ESTABLISHED:
            notes.append(f"Point is {transition.point_after}")
        elif transition.event == POINT_MADE:
            notes.append(f"Point {transition.point_before} made")
        elif transition.shooter_change:
            notes.extend(self._seven_out_cleanup())
            previous = self.shooter
            self.shooter = self._next_shooter(previous)
            log.info("shooter change: %s -> %s", previous or "(none)", self.shooter or "(none)")
            notes.append(f"Seven out! New shooter: {self.shooter or '(none)'}")

        for problem in self._machine.check_invariants():
            log.warning("table state: %s", problem)
        return notes

    def execute_game_turn(self) -> Tuple[Roll, List[str]]:
        roll = self.roll_dice()
        results = self.resolve_all_bets(roll)
        results.extend(self.update_game_state_only(roll))
        return roll, results

    def _seven_out_cleanup(self) -> List[str]:
        notes: List[str] = []
        for player in self.players.values():
            returned: List[Bet] = []
            for bet in player.open_bets():
                defn, found = self.registry.lookup(bet.bet_type)
                if found and defn.category in SEVEN_OUT_CLEANUP:
                    player.credit(bet.amount, bet, kind=REFUND, note="seven out")
                    returned.append(bet)
            if returned:
                ids = {b.id for b in returned}
                player.bets = [b for b in player.bets if b.id not in ids]
                total = money(sum(b.amount for b in returned))
                notes.append(f"Seven out: returned ${total:.2f} to {player.id} ({len(returned)} bet(s) taken down)")
        return notes

    # ----- display ----------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": str(self.state),
            "point": self.point.number,
            "shooter": self.shooter,
            "min_bet": self.min_bet,
            "max_bet": self.max_bet,
            "max_odds": self.max_odds,
            "last_roll": str(self.last_roll) if self.last_roll else None,
            "rolls": len(self.history),
            "players": {pid: p.snapshot() for pid, p in self.players.items()},
        }
