"""
resolution.py -- per-roll bet settlement

The engine walks every open bet once per roll, against the table's state and
point as they were *before* the roll moves them. Each bet family has a
resolver strategy that looks at the bet, its registry definition and the roll
and returns an Outcome; the engine alone touches bankrolls.

Public:
  - OutcomeKind, Outcome, RollContext
  - BetResolver and the family strategies:
      LineResolver, OddsResolver, PlaceStyleResolver, HardWayResolver,
      PropositionResolver, HornResolver, HopResolver, BigResolver,
      CombinationResolver
  - DEFAULT_RESOLVERS: BetCategory -> resolver class
  - ResolutionEngine(table).resolve_all(roll) -> List[str]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Type

from .dice import Roll
from .ledger import PUSH, REFUND, WIN, Bet, Player, money
from .logging_utils import get_logger
from .registry import (
    POINT_NUMBERS,
    BetCategory,
    BetRegistry,
    CanonicalBetDefinition,
    WorkingBehavior,
    lay_odds,
    true_odds,
)
from .state import CRAPS_NUMS, NATURAL_NUMS, GameState, Point

if TYPE_CHECKING:
    from .table import Table

log = get_logger("resolution")


class OutcomeKind(str, Enum):
    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    CONTINUE = "continue"


@dataclass
class Outcome:
    kind: OutcomeKind
    payout: float = 0.0                        # profit before commission
    commission: float = 0.0
    rearm: bool = False                        # win pays profit only; bet stays up
    message: str = ""
    refund: float = 0.0                        # stake handed back on a partial loss
    travel_to: Optional[int] = None            # come / don't come moves to this number
    amount_after: Optional[float] = None       # stake left after a partial loss
    numbers_after: Optional[Tuple[int, ...]] = None

    @property
    def net(self) -> float:
        return money(self.payout - self.commission)

    @property
    def terminal(self) -> bool:
        if self.kind is OutcomeKind.CONTINUE:
            return False
        return not (self.kind is OutcomeKind.WIN and self.rearm)


def _win(payout: float, message: str, *, commission: float = 0.0, rearm: bool = False) -> Outcome:
    return Outcome(OutcomeKind.WIN, payout=money(payout), commission=money(commission), rearm=rearm, message=message)


def _lose(message: str, *, refund: float = 0.0) -> Outcome:
    return Outcome(OutcomeKind.LOSE, message=message, refund=money(refund))


def _push(message: str) -> Outcome:
    return Outcome(OutcomeKind.PUSH, message=message)


def _continue(message: str = "", **changes) -> Outcome:
    return Outcome(OutcomeKind.CONTINUE, message=message, **changes)


def _pay(amount: float, ratio: Fraction) -> float:
    return money(amount * ratio.numerator / ratio.denominator)


@dataclass(frozen=True)
class RollContext:
    """The roll plus the phase it was thrown in."""
    roll: Roll
    state: GameState
    point: Point

    @property
    def total(self) -> int:
        return self.roll.total

    @property
    def come_out(self) -> bool:
        return self.state is GameState.COME_OUT


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class BetResolver(ABC):
    """Settles one family of bets. Reads the bet and roll; never mutates them."""

    def __init__(self, registry: BetRegistry) -> None:
        self.registry = registry

    @abstractmethod
    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        ...


_LINE_LABELS = {
    "PASS_LINE": "Pass line",
    "DONT_PASS": "Don't pass",
    "COME": "Come bet",
    "DONT_COME": "Don't come",
}


class LineResolver(BetResolver):
    """
    Pass / don't pass follow the table: come-out rules while the point is off,
    then the point against 7. Come / don't come run the same rules on their own
    come point, starting from the roll after they are placed.
    """

    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        label = _LINE_LABELS.get(defn.key, defn.name)
        if defn.category is BetCategory.COME:
            if bet.come_point is None:
                out = self._first_roll(label, defn.wrong_way, bet.amount, ctx.total)
                if out.kind is OutcomeKind.CONTINUE:
                    out = _continue(f"{label} moves to {ctx.total}", travel_to=ctx.total)
                return out
            return self._on_number(label, defn.wrong_way, bet.amount, ctx.total, bet.come_point)

        if ctx.come_out:
            return self._first_roll(label, defn.wrong_way, bet.amount, ctx.total)
        return self._on_number(label, defn.wrong_way, bet.amount, ctx.total, ctx.point.number)

    @staticmethod
    def _first_roll(label: str, wrong: bool, amount: float, total: int) -> Outcome:
        if wrong:
            if total in (2, 3):
                return _win(amount, f"{label} wins ${amount:.2f} (Craps)")
            if total == 12:
                return _push(f"{label} push ${amount:.2f} (12)")
            if total in NATURAL_NUMS:
                return _lose(f"{label} loses ${amount:.2f} (Natural)")
        else:
            if total in NATURAL_NUMS:
                return _win(amount, f"{label} wins ${amount:.2f} (Natural)")
            if total in CRAPS_NUMS:
                return _lose(f"{label} loses ${amount:.2f} (Craps)")
        return _continue()

    @staticmethod
    def _on_number(label: str, wrong: bool, amount: float, total: int, number: int) -> Outcome:
        if number not in POINT_NUMBERS:
            raise ValueError(f"invalid point number: {number}")
        if total == 7:
            if wrong:
                return _win(amount, f"{label} wins ${amount:.2f} (Seven out)")
            return _lose(f"{label} loses ${amount:.2f} (Seven out)")
        if total == number:
            if wrong:
                return _lose(f"{label} loses ${amount:.2f} (Point made)")
            return _win(amount, f"{label} wins ${amount:.2f} (Point made)")
        return _continue()


class OddsResolver(BetResolver):
    """True odds on the number the bet backs, in either phase."""

    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        number = bet.odds_point
        if number not in POINT_NUMBERS:
            raise ValueError(f"odds bet {bet.id} is not keyed to a point number")
        total = ctx.total
        if defn.wrong_way:
            if total == 7:
                payout = _pay(bet.amount, lay_odds(number))
                return _win(payout, f"{defn.name} wins ${payout:.2f} (Seven out)")
            if total == number:
                return _lose(f"{defn.name} loses ${bet.amount:.2f} ({number} hit)")
        else:
            if total == number:
                payout = _pay(bet.amount, true_odds(number))
                return _win(payout, f"{defn.name} wins ${payout:.2f} ({number} hit)")
            if total == 7:
                return _lose(f"{defn.name} loses ${bet.amount:.2f} (Seven out)")
        return _continue()


class PlaceStyleResolver(BetResolver):
    """
    Place, buy, lay and place-to-lose on one number, plus the multi-number
    place bets. Winners stay up; a single roll settles only the winning side.
    """

    _WRONG_SIDE = (BetCategory.LAY, BetCategory.PLACE_TO_LOSE)

    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        if len(defn.numbers) > 1:
            return self._multi(bet, defn, ctx)

        number = defn.number
        if number is None:
            raise ValueError(f"{defn.key} is not keyed to a number")
        if defn.category in self._WRONG_SIDE:
            hit, miss = 7, number
        else:
            hit, miss = number, 7

        if ctx.total == hit:
            payout = _pay(bet.amount, defn.ratio)
            commission = money(payout * defn.commission)
            msg = f"{defn.name} wins ${payout - commission:.2f}"
            if commission:
                msg += f" (commission ${commission:.2f})"
            return _win(payout, msg, commission=commission, rearm=True)
        if ctx.total == miss:
            return _lose(f"{defn.name} loses ${bet.amount:.2f}")
        return _continue()

    def _multi(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        numbers = tuple(bet.numbers) or defn.numbers
        total = ctx.total
        if total == 7:
            return _lose(f"{defn.name} loses ${bet.amount:.2f} (Seven out)")
        if total in numbers:
            share = bet.amount / len(numbers)
            payout = _pay(share, self.registry[f"PLACE_{total}"].ratio)
            return _win(payout, f"{defn.name} wins ${payout:.2f} ({total})", rearm=True)
        return _continue()


class HardWayResolver(BetResolver):
    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        if len(defn.numbers) > 1:
            return self._all(bet, defn, ctx)
        number = defn.number
        total = ctx.total
        if total == 7:
            return _lose(f"{defn.name} loses ${bet.amount:.2f} (Seven out)")
        if total == number:
            if ctx.roll.is_hard:
                payout = _pay(bet.amount, defn.ratio)
                return _win(payout, f"{defn.name} wins ${payout:.2f}", rearm=True)
            return _lose(f"{defn.name} loses ${bet.amount:.2f} (easy {number})")
        return _continue()

    def _all(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        # each number carries an even share; an easy roll takes that share down
        numbers = tuple(bet.numbers) or defn.numbers
        total = ctx.total
        if total == 7:
            return _lose(f"{defn.name} loses ${bet.amount:.2f} (Seven out)")
        if total not in numbers:
            return _continue()
        share = money(bet.amount / len(numbers))
        if ctx.roll.is_hard:
            payout = _pay(share, self.registry[f"HARD_{total}"].ratio)
            return _win(payout, f"{defn.name} wins ${payout:.2f} (hard {total})", rearm=True)
        remaining = tuple(n for n in numbers if n != total)
        if not remaining:
            return _lose(f"{defn.name} loses ${bet.amount:.2f} (easy {total})")
        return _continue(
            f"{defn.name} loses ${share:.2f} on easy {total}",
            amount_after=money(bet.amount - share),
            numbers_after=remaining,
        )


class PropositionResolver(BetResolver):
    """Field and the single-number props: registry totals and ratios, one roll."""

    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        total = ctx.total
        if total in defn.winning_totals:
            payout = _pay(bet.amount, defn.ratio_for_total(total))
            return _win(payout, f"{defn.name} wins ${payout:.2f} ({total})")
        return _lose(f"{defn.name} loses ${bet.amount:.2f} ({total})")


class _SplitResolver(BetResolver):
    """
    Stake divided by weight over the definition's sub-bets. The winning legs
    pay their ratio on their share; every other share is lost.
    """

    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        if not defn.components:
            raise ValueError(f"{defn.key} has no sub-bets")
        units = sum(leg.weight for leg in defn.components)
        total = ctx.total
        won = lost = 0.0
        hit = False
        for leg in defn.components:
            stake = bet.amount * leg.weight / units
            if total in leg.totals:
                hit = True
                won += _pay(stake, leg.ratio)
            else:
                lost += stake
        net = money(won - lost)

        if not hit:
            return _lose(f"{defn.name} loses ${bet.amount:.2f} ({total})")
        if net > 0:
            return _win(net, f"{defn.name} wins ${net:.2f} ({total})")
        if net == 0:
            return _push(f"{defn.name} push ${bet.amount:.2f} ({total})")
        return _lose(f"{defn.name} loses ${-net:.2f} ({total})", refund=bet.amount + net)


class HornResolver(_SplitResolver):
    pass


class CombinationResolver(_SplitResolver):
    pass


class HopResolver(BetResolver):
    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        roll = ctx.roll
        if any(roll.matches(a, b) for a, b in defn.dice):
            payout = _pay(bet.amount, defn.ratio)
            return _win(payout, f"{defn.name} wins ${payout:.2f} ({roll.die1}-{roll.die2})")
        return _lose(f"{defn.name} loses ${bet.amount:.2f} ({roll.die1}-{roll.die2})")


class BigResolver(BetResolver):
    def resolve(self, bet: Bet, defn: CanonicalBetDefinition, ctx: RollContext) -> Outcome:
        number = defn.number
        if ctx.total == number:
            payout = _pay(bet.amount, defn.ratio)
            return _win(payout, f"{defn.name} wins ${payout:.2f}")
        if ctx.total == 7:
            return _lose(f"{defn.name} loses ${bet.amount:.2f} (Seven out)")
        return _continue()


DEFAULT_RESOLVERS: Dict[BetCategory, Type[BetResolver]] = {
    BetCategory.LINE: LineResolver,
    BetCategory.COME: LineResolver,
    BetCategory.ODDS: OddsResolver,
    BetCategory.FIELD: PropositionResolver,
    BetCategory.PLACE: PlaceStyleResolver,
    BetCategory.BUY: PlaceStyleResolver,
    BetCategory.LAY: PlaceStyleResolver,
    BetCategory.PLACE_TO_LOSE: PlaceStyleResolver,
    BetCategory.HARD_WAY: HardWayResolver,
    BetCategory.PROPOSITION: PropositionResolver,
    BetCategory.HORN: HornResolver,
    BetCategory.HOP: HopResolver,
    BetCategory.BIG: BigResolver,
    BetCategory.COMBINATION: CombinationResolver,
}


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ResolutionEngine:
    """
    Settles every open bet on the table for one roll.

    Bad bets (unknown type, non-positive amount, wrong owner, a resolver
    error) become result strings and come off the layout with the settled
    ones; they never stop the rest of the table from settling. Stakes of
    well-formed bets that cannot be settled are refunded.
    """

    def __init__(self, table: "Table", resolvers: Optional[Dict[BetCategory, BetResolver]] = None) -> None:
        self.table = table
        if resolvers is None:
            shared: Dict[type, BetResolver] = {}
            resolvers = {
                cat: shared.setdefault(cls, cls(table.registry))
                for cat, cls in DEFAULT_RESOLVERS.items()
            }
        self._resolvers = resolvers

    def resolve_all(self, roll: Roll) -> List[str]:
        table = self.table
        ctx = RollContext(roll=roll, state=table.state, point=table.point)
        before = {pid: p.session_result for pid, p in table.players.items()}
        results: List[str] = []

        for player in table.players.values():
            for bet in list(player.bets):
                line = self._settle(player, bet, ctx)
                if line:
                    results.append(line)

        for player in table.players.values():
            purged = player.purge_resolved()
            if purged:
                log.debug("purged %d settled bet(s) for %s", purged, player.id)

        results.extend(self._session_notes(before))
        return results

    # ----- per bet -------------------------------------------------------

    @staticmethod
    def _malformed(player: Player, bet: Optional[Bet]) -> Optional[str]:
        if bet is None:
            return "bet is missing"
        if not bet.player_id:
            return f"bet {bet.id} has no owner"
        if bet.player_id != player.id:
            return f"bet {bet.id} belongs to {bet.player_id}"
        if bet.amount is None or bet.amount <= 0:
            return f"bet {bet.id} has non-positive amount {bet.amount}"
        return None

    def _settle(self, player: Player, bet: Bet, ctx: RollContext) -> Optional[str]:
        problem = self._malformed(player, bet)
        if problem:
            log.warning("dropping bet for player %s: %s", player.id, problem)
            if bet is not None:
                bet.resolved = True
            return f"Invalid bet state for player {player.id}: {problem}"
        if bet.resolved:
            return None

        defn, found = self.table.registry.lookup(bet.bet_type)
        if not found:
            log.warning("unknown bet type %s on bet %s", bet.bet_type, bet.id)
            self._drop(player, bet)
            return f"Unknown bet type: {bet.bet_type}"

        if not bet.working:
            return None
        if defn.working is WorkingBehavior.CONDITIONAL and ctx.come_out:
            return None

        resolver = self._resolvers.get(defn.category)
        if resolver is None:
            self._drop(player, bet)
            return f"No resolver for {defn.category} ({bet.bet_type})"

        try:
            outcome = resolver.resolve(bet, defn, ctx)
        except (ValueError, KeyError, ZeroDivisionError) as e:
            log.warning("could not resolve %s (%s): %s", bet.id, bet.bet_type, e)
            self._drop(player, bet)
            return f"Error resolving {bet.bet_type} for player {player.id}: {e}"

        self._apply(player, bet, defn, outcome)
        return outcome.message or None

    @staticmethod
    def _drop(player: Player, bet: Bet) -> None:
        """Take an unsettleable bet off the layout, handing its stake back."""
        player.credit(bet.amount, bet, kind=REFUND, note="could not settle")
        bet.resolved = True

    def _apply(self, player: Player, bet: Bet, defn: CanonicalBetDefinition, outcome: Outcome) -> None:
        if outcome.travel_to is not None:
            bet.come_point = outcome.travel_to
        if outcome.amount_after is not None:
            bet.amount = outcome.amount_after
        if outcome.numbers_after is not None:
            bet.numbers = outcome.numbers_after

        kind = outcome.kind
        if kind is OutcomeKind.WIN:
            if outcome.rearm:
                player.credit(outcome.net, bet, kind=WIN, note="payout")
            else:
                player.credit(bet.amount + outcome.net, bet, kind=WIN, note="stake + payout")
        elif kind is OutcomeKind.PUSH:
            player.credit(bet.amount, bet, kind=PUSH)
        elif kind is OutcomeKind.LOSE and outcome.refund > 0:
            player.credit(outcome.refund, bet, kind=PUSH, note="partial return")

        if outcome.terminal:
            bet.resolved = True
        elif defn.one_roll:
            log.warning("one-roll bet %s (%s) did not settle; removing it", bet.id, bet.bet_type)
            bet.resolved = True

        log.debug(
            "settled %s %s $%.2f for %s: %s net=%.2f",
            bet.id, bet.bet_type, bet.amount, player.id, kind.value, outcome.net,
        )

    def _session_notes(self, before: Dict[str, float]) -> List[str]:
        notes: List[str] = []
        for pid, player in self.table.players.items():
            was, now = before.get(pid, 0.0), player.session_result
            if player.win_goal and was < player.win_goal <= now:
                notes.append(f"Player {pid} reached win goal of ${player.win_goal:.2f} (session +${now:.2f})")
            if player.loss_limit and -was < player.loss_limit <= -now:
                notes.append(f"Player {pid} hit loss limit of ${player.loss_limit:.2f} (session -${-now:.2f})")
        return notes
