"""
registry.py -- canonical bet definitions

Every bet the table accepts is declared here once. Resolution reads payout
ratios, winning totals, commission and working behavior from these records;
nothing else in the engine carries its own odds.

Public API:
    BetCategory, WorkingBehavior, SubBet, CanonicalBetDefinition
    BetRegistry                     immutable bet_type -> definition mapping
    default_registry() -> BetRegistry
    true_odds(number) / lay_odds(number) -> Fraction
    get_bet_definition, get_all_bet_types, get_bets_by_category,
    get_one_roll_bets, get_always_working_bets, get_bets_by_house_edge
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple


class BetCategory(str, Enum):
    LINE = "Line Bets"
    COME = "Come Bets"
    ODDS = "Odds Bets"
    FIELD = "Field Bets"
    PLACE = "Place Bets"
    BUY = "Buy Bets"
    LAY = "Lay Bets"
    PLACE_TO_LOSE = "Place-to-Lose Bets"
    HARD_WAY = "Hard Way Bets"
    PROPOSITION = "Proposition Bets"
    HORN = "Horn Bets"
    HOP = "Hop Bets"
    BIG = "Big Bets"
    COMBINATION = "Combination Bets"

    def __str__(self) -> str:
        return self.value


# Display order used by SHOW BETS style listings
CATEGORY_ORDER: Tuple[BetCategory, ...] = (
    BetCategory.LINE,
    BetCategory.COME,
    BetCategory.ODDS,
    BetCategory.PLACE,
    BetCategory.BUY,
    BetCategory.LAY,
    BetCategory.PLACE_TO_LOSE,
    BetCategory.FIELD,
    BetCategory.HARD_WAY,
    BetCategory.BIG,
    BetCategory.HOP,
    BetCategory.HORN,
    BetCategory.COMBINATION,
    BetCategory.PROPOSITION,
)


class WorkingBehavior(str, Enum):
    ONE_ROLL = "ONE_ROLL"        # settles on the very next roll
    ALWAYS = "ALWAYS"            # works every roll until it wins or loses
    CONDITIONAL = "CONDITIONAL"  # off during the come-out roll

    def __str__(self) -> str:
        return self.value


COMMISSION_RATE = 0.05

POINT_NUMBERS: Tuple[int, ...] = (4, 5, 6, 8, 9, 10)
HARD_NUMBERS: Tuple[int, ...] = (4, 6, 8, 10)

_TRUE_ODDS: Dict[int, Fraction] = {
    4: Fraction(2, 1),
    10: Fraction(2, 1),
    5: Fraction(3, 2),
    9: Fraction(3, 2),
    6: Fraction(6, 5),
    8: Fraction(6, 5),
}


def true_odds(number: int) -> Fraction:
    """Right-side true odds for a point number (2:1, 3:2, 6:5)."""
    try:
        return _TRUE_ODDS[number]
    except KeyError:
        raise ValueError(f"no true odds for {number}") from None


def lay_odds(number: int) -> Fraction:
    """Wrong-side odds for a point number (1:2, 2:3, 5:6)."""
    return 1 / true_odds(number)


@dataclass(frozen=True)
class SubBet:
    """One leg of a split bet: ``weight`` units riding on ``totals`` at numerator:denominator."""
    totals: FrozenSet[int]
    numerator: int
    denominator: int = 1
    weight: int = 1

    @property
    def ratio(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)


@dataclass(frozen=True)
class CanonicalBetDefinition:
    key: str
    name: str
    category: BetCategory
    description: str
    payout: str
    working: WorkingBehavior
    numerator: int
    denominator: int
    winning_totals: FrozenSet[int] = frozenset()
    requires_point: bool = False
    requires_come_out: bool = False
    house_edge: Optional[float] = None
    commission: float = 0.0
    # box numbers a bet rides on (place/buy/lay/hard/big and the multi-number bets)
    numbers: Tuple[int, ...] = ()
    # wrong-side bets: don't pass / don't come and their odds
    wrong_way: bool = False
    # per-total overrides of numerator:denominator (field 2 and 12)
    special_payouts: Tuple[Tuple[int, int, int], ...] = ()
    # weighted legs of horn / world / C&E style split bets
    components: Tuple[SubBet, ...] = ()
    # exact dice combinations a hop bet covers
    dice: Tuple[Tuple[int, int], ...] = ()
    # multi-number bets whose numbers come from the player
    player_numbers: bool = False

    @property
    def one_roll(self) -> bool:
        return self.working is WorkingBehavior.ONE_ROLL

    @property
    def variable_payout(self) -> bool:
        """0/0 signals a payout computed from the point or the number hit."""
        return self.numerator == 0 and self.denominator == 0

    @property
    def ratio(self) -> Fraction:
        if self.variable_payout:
            raise ValueError(f"{self.key} has a variable payout")
        return Fraction(self.numerator, self.denominator)

    def ratio_for_total(self, total: int) -> Fraction:
        for t, num, den in self.special_payouts:
            if t == total:
                return Fraction(num, den)
        return self.ratio

    @property
    def number(self) -> Optional[int]:
        """The single box number for one-number bets."""
        return self.numbers[0] if len(self.numbers) == 1 else None


_HORN_LEGS = (
    SubBet(frozenset({2}), 30),
    SubBet(frozenset({3}), 15),
    SubBet(frozenset({11}), 15),
    SubBet(frozenset({12}), 30),
)


def _horn_high_legs(high: int) -> Tuple[SubBet, ...]:
    return tuple(
        SubBet(leg.totals, leg.numerator, leg.denominator, weight=2 if high in leg.totals else 1)
        for leg in _HORN_LEGS
    )


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------

_DEFINITIONS: Tuple[CanonicalBetDefinition, ...] = (
    # Line bets
    CanonicalBetDefinition(
        key="PASS_LINE",
        name="Pass Line",
        category=BetCategory.LINE,
        description="Shooter wins: 7 or 11 on the come out, then makes the point before a 7",
        payout="1:1",
        working=WorkingBehavior.ALWAYS,
        numerator=1,
        denominator=1,
        house_edge=1.41,
    ),
    CanonicalBetDefinition(
        key="DONT_PASS",
        name="Don't Pass",
        category=BetCategory.LINE,
        description="Shooter loses: 2 or 3 on the come out, then a 7 before the point",
        payout="1:1 (12 is push)",
        working=WorkingBehavior.ALWAYS,
        numerator=1,
        denominator=1,
        house_edge=1.36,
        wrong_way=True,
    ),

    # Come bets
    CanonicalBetDefinition(
        key="COME",
        name="Come",
        category=BetCategory.COME,
        description="Like the pass line, starting from the next roll",
        payout="1:1",
        working=WorkingBehavior.ALWAYS,
        numerator=1,
        denominator=1,
        house_edge=1.41,
    ),
    CanonicalBetDefinition(
        key="DONT_COME",
        name="Don't Come",
        category=BetCategory.COME,
        description="Like don't pass, starting from the next roll",
        payout="1:1 (12 is push)",
        working=WorkingBehavior.ALWAYS,
        numerator=1,
        denominator=1,
        house_edge=1.36,
        wrong_way=True,
    ),

    # Odds bets
    CanonicalBetDefinition(
        key="PASS_ODDS",
        name="Pass Odds",
        category=BetCategory.ODDS,
        description="Odds behind the pass line once a point is established",
        payout="2:1 on 4/10, 3:2 on 5/9, 6:5 on 6/8",
        working=WorkingBehavior.ALWAYS,
        numerator=0,
        denominator=0,
        requires_point=True,
        house_edge=0.0,
    ),
    CanonicalBetDefinition(
        key="DONT_PASS_ODDS",
        name="Don't Pass Odds",
        category=BetCategory.ODDS,
        description="Odds laid behind don't pass once a point is established",
        payout="1:2 on 4/10, 2:3 on 5/9, 5:6 on 6/8",
        working=WorkingBehavior.ALWAYS,
        numerator=0,
        denominator=0,
        requires_point=True,
        house_edge=0.0,
        wrong_way=True,
    ),
    CanonicalBetDefinition(
        key="COME_ODDS",
        name="Come Odds",
        category=BetCategory.ODDS,
        description="Odds behind a come bet on its number",
        payout="2:1 on 4/10, 3:2 on 5/9, 6:5 on 6/8",
        working=WorkingBehavior.ALWAYS,
        numerator=0,
        denominator=0,
        requires_point=True,
        house_edge=0.0,
    ),
    CanonicalBetDefinition(
        key="DONT_COME_ODDS",
        name="Don't Come Odds",
        category=BetCategory.ODDS,
        description="Odds laid behind a don't come bet on its number",
        payout="1:2 on 4/10, 2:3 on 5/9, 5:6 on 6/8",
        working=WorkingBehavior.ALWAYS,
        numerator=0,
        denominator=0,
        requires_point=True,
        house_edge=0.0,
        wrong_way=True,
    ),

    # Field
    CanonicalBetDefinition(
        key="FIELD",
        name="Field",
        category=BetCategory.FIELD,
        description="Next roll is 2, 3, 4, 9, 10, 11 or 12",
        payout="1:1 (2 pays 2:1, 12 pays 3:1)",
        working=WorkingBehavior.ONE_ROLL,
        numerator=1,
        denominator=1,
        winning_totals=frozenset({2, 3, 4, 9, 10, 11, 12}),
        house_edge=2.78,
        special_payouts=((2, 2, 1), (12, 3, 1)),
    ),

    # Place bets
    CanonicalBetDefinition(
        key="PLACE_4",
        name="Place 4",
        category=BetCategory.PLACE,
        description="4 is rolled before 7",
        payout="9:5",
        working=WorkingBehavior.CONDITIONAL,
        numerator=9,
        denominator=5,
        winning_totals=frozenset({4}),
        house_edge=6.67,
        numbers=(4,),
    ),
    CanonicalBetDefinition(
        key="PLACE_5",
        name="Place 5",
        category=BetCategory.PLACE,
        description="5 is rolled before 7",
        payout="7:5",
        working=WorkingBehavior.CONDITIONAL,
        numerator=7,
        denominator=5,
        winning_totals=frozenset({5}),
        house_edge=4.0,
        numbers=(5,),
    ),
    CanonicalBetDefinition(
        key="PLACE_6",
        name="Place 6",
        category=BetCategory.PLACE,
        description="6 is rolled before 7",
        payout="7:6",
        working=WorkingBehavior.CONDITIONAL,
        numerator=7,
        denominator=6,
        winning_totals=frozenset({6}),
        house_edge=1.52,
        numbers=(6,),
    ),
    CanonicalBetDefinition(
        key="PLACE_8",
        name="Place 8",
        category=BetCategory.PLACE,
        description="8 is rolled before 7",
        payout="7:6",
        working=WorkingBehavior.CONDITIONAL,
        numerator=7,
        denominator=6,
        winning_totals=frozenset({8}),
        house_edge=1.52,
        numbers=(8,),
    ),
    CanonicalBetDefinition(
        key="PLACE_9",
        name="Place 9",
        category=BetCategory.PLACE,
        description="9 is rolled before 7",
        payout="7:5",
        working=WorkingBehavior.CONDITIONAL,
        numerator=7,
        denominator=5,
        winning_totals=frozenset({9}),
        house_edge=4.0,
        numbers=(9,),
    ),
    CanonicalBetDefinition(
        key="PLACE_10",
        name="Place 10",
        category=BetCategory.PLACE,
        description="10 is rolled before 7",
        payout="9:5",
        working=WorkingBehavior.CONDITIONAL,
        numerator=9,
        denominator=5,
        winning_totals=frozenset({10}),
        house_edge=6.67,
        numbers=(10,),
    ),
    CanonicalBetDefinition(
        key="PLACE_NUMBERS",
        name="Place Numbers",
        category=BetCategory.PLACE,
        description="Stake split evenly over the box numbers the player names",
        payout="Place odds on the number hit",
        working=WorkingBehavior.CONDITIONAL,
        numerator=0,
        denominator=0,
        winning_totals=frozenset(POINT_NUMBERS),
        numbers=POINT_NUMBERS,
        player_numbers=True,
    ),
    CanonicalBetDefinition(
        key="PLACE_INSIDE",
        name="Place Inside",
        category=BetCategory.PLACE,
        description="Stake split evenly over 5, 6, 8 and 9",
        payout="7:5 on 5/9, 7:6 on 6/8",
        working=WorkingBehavior.CONDITIONAL,
        numerator=0,
        denominator=0,
        winning_totals=frozenset({5, 6, 8, 9}),
        numbers=(5, 6, 8, 9),
    ),
    CanonicalBetDefinition(
        key="PLACE_OUTSIDE",
        name="Place Outside",
        category=BetCategory.PLACE,
        description="Stake split evenly over 4, 5, 9 and 10",
        payout="9:5 on 4/10, 7:5 on 5/9",
        working=WorkingBehavior.CONDITIONAL,
        numerator=0,
        denominator=0,
        winning_totals=frozenset({4, 5, 9, 10}),
        numbers=(4, 5, 9, 10),
    ),

    # Buy bets
    CanonicalBetDefinition(
        key="BUY_4",
        name="Buy 4",
        category=BetCategory.BUY,
        description="4 before 7 at true odds, 5% commission on the win",
        payout="2:1 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=2,
        denominator=1,
        winning_totals=frozenset({4}),
        house_edge=4.76,
        commission=COMMISSION_RATE,
        numbers=(4,),
    ),
    CanonicalBetDefinition(
        key="BUY_5",
        name="Buy 5",
        category=BetCategory.BUY,
        description="5 before 7 at true odds, 5% commission on the win",
        payout="3:2 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=3,
        denominator=2,
        winning_totals=frozenset({5}),
        house_edge=4.76,
        commission=COMMISSION_RATE,
        numbers=(5,),
    ),
    CanonicalBetDefinition(
        key="BUY_6",
        name="Buy 6",
        category=BetCategory.BUY,
        description="6 before 7 at true odds, 5% commission on the win",
        payout="6:5 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=6,
        denominator=5,
        winning_totals=frozenset({6}),
        house_edge=4.76,
        commission=COMMISSION_RATE,
        numbers=(6,),
    ),
    CanonicalBetDefinition(
        key="BUY_8",
        name="Buy 8",
        category=BetCategory.BUY,
        description="8 before 7 at true odds, 5% commission on the win",
        payout="6:5 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=6,
        denominator=5,
        winning_totals=frozenset({8}),
        house_edge=4.76,
        commission=COMMISSION_RATE,
        numbers=(8,),
    ),
    CanonicalBetDefinition(
        key="BUY_9",
        name="Buy 9",
        category=BetCategory.BUY,
        description="9 before 7 at true odds, 5% commission on the win",
        payout="3:2 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=3,
        denominator=2,
        winning_totals=frozenset({9}),
        house_edge=4.76,
        commission=COMMISSION_RATE,
        numbers=(9,),
    ),
    CanonicalBetDefinition(
        key="BUY_10",
        name="Buy 10",
        category=BetCategory.BUY,
        description="10 before 7 at true odds, 5% commission on the win",
        payout="2:1 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=2,
        denominator=1,
        winning_totals=frozenset({10}),
        house_edge=4.76,
        commission=COMMISSION_RATE,
        numbers=(10,),
    ),

    # Lay bets
    CanonicalBetDefinition(
        key="LAY_4",
        name="Lay 4",
        category=BetCategory.LAY,
        description="7 before 4 at true odds, 5% commission on the win",
        payout="1:2 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=1,
        denominator=2,
        winning_totals=frozenset({7}),
        house_edge=2.44,
        commission=COMMISSION_RATE,
        numbers=(4,),
    ),
    CanonicalBetDefinition(
        key="LAY_5",
        name="Lay 5",
        category=BetCategory.LAY,
        description="7 before 5 at true odds, 5% commission on the win",
        payout="2:3 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=2,
        denominator=3,
        winning_totals=frozenset({7}),
        house_edge=3.23,
        commission=COMMISSION_RATE,
        numbers=(5,),
    ),
    CanonicalBetDefinition(
        key="LAY_6",
        name="Lay 6",
        category=BetCategory.LAY,
        description="7 before 6 at true odds, 5% commission on the win",
        payout="5:6 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=5,
        denominator=6,
        winning_totals=frozenset({7}),
        house_edge=4.0,
        commission=COMMISSION_RATE,
        numbers=(6,),
    ),
    CanonicalBetDefinition(
        key="LAY_8",
        name="Lay 8",
        category=BetCategory.LAY,
        description="7 before 8 at true odds, 5% commission on the win",
        payout="5:6 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=5,
        denominator=6,
        winning_totals=frozenset({7}),
        house_edge=4.0,
        commission=COMMISSION_RATE,
        numbers=(8,),
    ),
    CanonicalBetDefinition(
        key="LAY_9",
        name="Lay 9",
        category=BetCategory.LAY,
        description="7 before 9 at true odds, 5% commission on the win",
        payout="2:3 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=2,
        denominator=3,
        winning_totals=frozenset({7}),
        house_edge=3.23,
        commission=COMMISSION_RATE,
        numbers=(9,),
    ),
    CanonicalBetDefinition(
        key="LAY_10",
        name="Lay 10",
        category=BetCategory.LAY,
        description="7 before 10 at true odds, 5% commission on the win",
        payout="1:2 (minus commission)",
        working=WorkingBehavior.CONDITIONAL,
        numerator=1,
        denominator=2,
        winning_totals=frozenset({7}),
        house_edge=2.44,
        commission=COMMISSION_RATE,
        numbers=(10,),
    ),

    # Place-to-lose bets
    CanonicalBetDefinition(
        key="PLACE_TO_LOSE_4",
        name="Place-to-Lose 4",
        category=BetCategory.PLACE_TO_LOSE,
        description="7 before 4, no commission",
        payout="1:2",
        working=WorkingBehavior.CONDITIONAL,
        numerator=1,
        denominator=2,
        winning_totals=frozenset({7}),
        house_edge=2.44,
        numbers=(4,),
    ),
    CanonicalBetDefinition(
        key="PLACE_TO_LOSE_5",
        name="Place-to-Lose 5",
        category=BetCategory.PLACE_TO_LOSE,
        description="7 before 5, no commission",
        payout="2:3",
        working=WorkingBehavior.CONDITIONAL,
        numerator=2,
        denominator=3,
        winning_totals=frozenset({7}),
        house_edge=3.23,
        numbers=(5,),
    ),
    CanonicalBetDefinition(
        key="PLACE_TO_LOSE_6",
        name="Place-to-Lose 6",
        category=BetCategory.PLACE_TO_LOSE,
        description="7 before 6, no commission",
        payout="5:6",
        working=WorkingBehavior.CONDITIONAL,
        numerator=5,
        denominator=6,
        winning_totals=frozenset({7}),
        house_edge=4.0,
        numbers=(6,),
    ),
    CanonicalBetDefinition(
        key="PLACE_TO_LOSE_8",
        name="Place-to-Lose 8",
        category=BetCategory.PLACE_TO_LOSE,
        description="7 before 8, no commission",
        payout="5:6",
        working=WorkingBehavior.CONDITIONAL,
        numerator=5,
        denominator=6,
        winning_totals=frozenset({7}),
        house_edge=4.0,
        numbers=(8,),
    ),
    CanonicalBetDefinition(
        key="PLACE_TO_LOSE_9",
        name="Place-to-Lose 9",
        category=BetCategory.PLACE_TO_LOSE,
        description="7 before 9, no commission",
        payout="2:3",
        working=WorkingBehavior.CONDITIONAL,
        numerator=2,
        denominator=3,
        winning_totals=frozenset({7}),
        house_edge=3.23,
        numbers=(9,),
    ),
    CanonicalBetDefinition(
        key="PLACE_TO_LOSE_10",
        name="Place-to-Lose 10",
        category=BetCategory.PLACE_TO_LOSE,
        description="7 before 10, no commission",
        payout="1:2",
        working=WorkingBehavior.CONDITIONAL,
        numerator=1,
        denominator=2,
        winning_totals=frozenset({7}),
        house_edge=2.44,
        numbers=(10,),
    ),

    # Hard ways
    CanonicalBetDefinition(
        key="HARD_4",
        name="Hard 4",
        category=BetCategory.HARD_WAY,
        description="4 is rolled as 2-2 before an easy 4 or a 7",
        payout="7:1",
        working=WorkingBehavior.CONDITIONAL,
        numerator=7,
        denominator=1,
        winning_totals=frozenset({4}),
        house_edge=11.11,
        numbers=(4,),
    ),
    CanonicalBetDefinition(
        key="HARD_6",
        name="Hard 6",
        category=BetCategory.HARD_WAY,
        description="6 is rolled as 3-3 before an easy 6 or a 7",
        payout="9:1",
        working=WorkingBehavior.CONDITIONAL,
        numerator=9,
        denominator=1,
        winning_totals=frozenset({6}),
        house_edge=9.09,
        numbers=(6,),
    ),
    CanonicalBetDefinition(
        key="HARD_8",
        name="Hard 8",
        category=BetCategory.HARD_WAY,
        description="8 is rolled as 4-4 before an easy 8 or a 7",
        payout="9:1",
        working=WorkingBehavior.CONDITIONAL,
        numerator=9,
        denominator=1,
        winning_totals=frozenset({8}),
        house_edge=9.09,
        numbers=(8,),
    ),
    CanonicalBetDefinition(
        key="HARD_10",
        name="Hard 10",
        category=BetCategory.HARD_WAY,
        description="10 is rolled as 5-5 before an easy 10 or a 7",
        payout="7:1",
        working=WorkingBehavior.CONDITIONAL,
        numerator=7,
        denominator=1,
        winning_totals=frozenset({10}),
        house_edge=11.11,
        numbers=(10,),
    ),
    CanonicalBetDefinition(
        key="ALL_HARDWAYS",
        name="All Hardways",
        category=BetCategory.HARD_WAY,
        description="Stake split evenly over hard 4, 6, 8 and 10",
        payout="7:1 on 4/10, 9:1 on 6/8",
        working=WorkingBehavior.CONDITIONAL,
        numerator=0,
        denominator=0,
        winning_totals=frozenset(HARD_NUMBERS),
        numbers=HARD_NUMBERS,
    ),

    # Big 6 / Big 8
    CanonicalBetDefinition(
        key="BIG_6",
        name="Big 6",
        category=BetCategory.BIG,
        description="6 is rolled before 7, even money",
        payout="1:1",
        working=WorkingBehavior.ALWAYS,
        numerator=1,
        denominator=1,
        winning_totals=frozenset({6}),
        house_edge=9.09,
        numbers=(6,),
    ),
    CanonicalBetDefinition(
        key="BIG_8",
        name="Big 8",
        category=BetCategory.BIG,
        description="8 is rolled before 7, even money",
        payout="1:1",
        working=WorkingBehavior.ALWAYS,
        numerator=1,
        denominator=1,
        winning_totals=frozenset({8}),
        house_edge=9.09,
        numbers=(8,),
    ),

    # Single-roll propositions
    CanonicalBetDefinition(
        key="ANY_SEVEN",
        name="Any Seven",
        category=BetCategory.PROPOSITION,
        description="Next roll is 7",
        payout="4:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=4,
        denominator=1,
        winning_totals=frozenset({7}),
        house_edge=16.67,
    ),
    CanonicalBetDefinition(
        key="ANY_CRAPS",
        name="Any Craps",
        category=BetCategory.PROPOSITION,
        description="Next roll is 2, 3 or 12",
        payout="7:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=7,
        denominator=1,
        winning_totals=frozenset({2, 3, 12}),
        house_edge=11.11,
    ),
    CanonicalBetDefinition(
        key="ELEVEN",
        name="Eleven",
        category=BetCategory.PROPOSITION,
        description="Next roll is 11 (5-6)",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({11}),
        house_edge=11.11,
    ),
    CanonicalBetDefinition(
        key="ACE_DEUCE",
        name="Ace-Deuce",
        category=BetCategory.PROPOSITION,
        description="Next roll is 3 (1-2)",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({3}),
        house_edge=11.11,
    ),
    CanonicalBetDefinition(
        key="ACES",
        name="Aces",
        category=BetCategory.PROPOSITION,
        description="Next roll is 2 (1-1)",
        payout="30:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=30,
        denominator=1,
        winning_totals=frozenset({2}),
        house_edge=13.89,
    ),
    CanonicalBetDefinition(
        key="BOXCARS",
        name="Boxcars",
        category=BetCategory.PROPOSITION,
        description="Next roll is 12 (6-6)",
        payout="30:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=30,
        denominator=1,
        winning_totals=frozenset({12}),
        house_edge=13.89,
    ),

    # Horn family
    CanonicalBetDefinition(
        key="HORN",
        name="Horn",
        category=BetCategory.HORN,
        description="Stake split evenly over 2, 3, 11 and 12",
        payout="2/12 pay 27:4, 3/11 pay 3:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=3,
        denominator=1,
        winning_totals=frozenset({2, 3, 11, 12}),
        house_edge=12.5,
        components=_HORN_LEGS,
    ),
    CanonicalBetDefinition(
        key="HORN_HIGH_2",
        name="Horn High 2",
        category=BetCategory.HORN,
        description="Five-unit horn with the extra unit on 2",
        payout="2 pays 57:5, 3/11 pay 11:5, 12 pays 26:5",
        working=WorkingBehavior.ONE_ROLL,
        numerator=57,
        denominator=5,
        winning_totals=frozenset({2, 3, 11, 12}),
        house_edge=12.5,
        components=_horn_high_legs(2),
    ),
    CanonicalBetDefinition(
        key="HORN_HIGH_3",
        name="Horn High 3",
        category=BetCategory.HORN,
        description="Five-unit horn with the extra unit on 3",
        payout="3 pays 27:5, 11 pays 11:5, 2/12 pay 26:5",
        working=WorkingBehavior.ONE_ROLL,
        numerator=27,
        denominator=5,
        winning_totals=frozenset({2, 3, 11, 12}),
        house_edge=12.5,
        components=_horn_high_legs(3),
    ),
    CanonicalBetDefinition(
        key="HORN_HIGH_11",
        name="Horn High 11",
        category=BetCategory.HORN,
        description="Five-unit horn with the extra unit on 11",
        payout="11 pays 27:5, 3 pays 11:5, 2/12 pay 26:5",
        working=WorkingBehavior.ONE_ROLL,
        numerator=27,
        denominator=5,
        winning_totals=frozenset({2, 3, 11, 12}),
        house_edge=12.5,
        components=_horn_high_legs(11),
    ),
    CanonicalBetDefinition(
        key="HORN_HIGH_12",
        name="Horn High 12",
        category=BetCategory.HORN,
        description="Five-unit horn with the extra unit on 12",
        payout="12 pays 57:5, 3/11 pay 11:5, 2 pays 26:5",
        working=WorkingBehavior.ONE_ROLL,
        numerator=57,
        denominator=5,
        winning_totals=frozenset({2, 3, 11, 12}),
        house_edge=12.5,
        components=_horn_high_legs(12),
    ),

    # Combination bets
    CanonicalBetDefinition(
        key="WORLD",
        name="World",
        category=BetCategory.COMBINATION,
        description="Horn plus any seven, stake split over five units; 7 is a push",
        payout="2/12 pay 26:5, 3/11 pay 11:5, 7 pushes",
        working=WorkingBehavior.ONE_ROLL,
        numerator=26,
        denominator=5,
        winning_totals=frozenset({2, 3, 7, 11, 12}),
        house_edge=13.33,
        components=_HORN_LEGS + (SubBet(frozenset({7}), 4),),
    ),
    CanonicalBetDefinition(
        key="C_AND_E",
        name="C and E",
        category=BetCategory.COMBINATION,
        description="Stake split between any craps and eleven",
        payout="any craps pays 3:1, 11 pays 7:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=3,
        denominator=1,
        winning_totals=frozenset({2, 3, 11, 12}),
        house_edge=11.11,
        components=(
            SubBet(frozenset({2, 3, 12}), 7),
            SubBet(frozenset({11}), 15),
        ),
    ),

    # Hop bets: any non-pair combination pays 15:1, pairs pay 30:1
    CanonicalBetDefinition(
        key="HOP_1_2",
        name="Hop 1-2",
        category=BetCategory.HOP,
        description="Next roll is exactly 1-2",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({3}),
        house_edge=11.11,
        dice=((1, 2),),
    ),
    CanonicalBetDefinition(
        key="HOP_1_3",
        name="Hop 1-3",
        category=BetCategory.HOP,
        description="Next roll is exactly 1-3",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({4}),
        house_edge=11.11,
        dice=((1, 3),),
    ),
    CanonicalBetDefinition(
        key="HOP_1_4",
        name="Hop 1-4",
        category=BetCategory.HOP,
        description="Next roll is exactly 1-4",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({5}),
        house_edge=11.11,
        dice=((1, 4),),
    ),
    CanonicalBetDefinition(
        key="HOP_1_5",
        name="Hop 1-5",
        category=BetCategory.HOP,
        description="Next roll is exactly 1-5",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({6}),
        house_edge=11.11,
        dice=((1, 5),),
    ),
    CanonicalBetDefinition(
        key="HOP_1_6",
        name="Hop 1-6",
        category=BetCategory.HOP,
        description="Next roll is exactly 1-6",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({7}),
        house_edge=11.11,
        dice=((1, 6),),
    ),
    CanonicalBetDefinition(
        key="HOP_2_3",
        name="Hop 2-3",
        category=BetCategory.HOP,
        description="Next roll is exactly 2-3",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({5}),
        house_edge=11.11,
        dice=((2, 3),),
    ),
    CanonicalBetDefinition(
        key="HOP_2_4",
        name="Hop 2-4",
        category=BetCategory.HOP,
        description="Next roll is exactly 2-4",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({6}),
        house_edge=11.11,
        dice=((2, 4),),
    ),
    CanonicalBetDefinition(
        key="HOP_2_5",
        name="Hop 2-5",
        category=BetCategory.HOP,
        description="Next roll is exactly 2-5",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({7}),
        house_edge=11.11,
        dice=((2, 5),),
    ),
    CanonicalBetDefinition(
        key="HOP_2_6",
        name="Hop 2-6",
        category=BetCategory.HOP,
        description="Next roll is exactly 2-6",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({8}),
        house_edge=11.11,
        dice=((2, 6),),
    ),
    CanonicalBetDefinition(
        key="HOP_3_4",
        name="Hop 3-4",
        category=BetCategory.HOP,
        description="Next roll is exactly 3-4",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({7}),
        house_edge=11.11,
        dice=((3, 4),),
    ),
    CanonicalBetDefinition(
        key="HOP_3_5",
        name="Hop 3-5",
        category=BetCategory.HOP,
        description="Next roll is exactly 3-5",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({8}),
        house_edge=11.11,
        dice=((3, 5),),
    ),
    CanonicalBetDefinition(
        key="HOP_3_6",
        name="Hop 3-6",
        category=BetCategory.HOP,
        description="Next roll is exactly 3-6",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({9}),
        house_edge=11.11,
        dice=((3, 6),),
    ),
    CanonicalBetDefinition(
        key="HOP_4_5",
        name="Hop 4-5",
        category=BetCategory.HOP,
        description="Next roll is exactly 4-5",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({9}),
        house_edge=11.11,
        dice=((4, 5),),
    ),
    CanonicalBetDefinition(
        key="HOP_4_6",
        name="Hop 4-6",
        category=BetCategory.HOP,
        description="Next roll is exactly 4-6",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({10}),
        house_edge=11.11,
        dice=((4, 6),),
    ),
    CanonicalBetDefinition(
        key="HOP_5_6",
        name="Hop 5-6",
        category=BetCategory.HOP,
        description="Next roll is exactly 5-6",
        payout="15:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=15,
        denominator=1,
        winning_totals=frozenset({11}),
        house_edge=11.11,
        dice=((5, 6),),
    ),
    CanonicalBetDefinition(
        key="HOP_HARD_4",
        name="Hop Hard 4",
        category=BetCategory.HOP,
        description="Next roll is exactly 2-2",
        payout="30:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=30,
        denominator=1,
        winning_totals=frozenset({4}),
        house_edge=13.89,
        dice=((2, 2),),
    ),
    CanonicalBetDefinition(
        key="HOP_HARD_6",
        name="Hop Hard 6",
        category=BetCategory.HOP,
        description="Next roll is exactly 3-3",
        payout="30:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=30,
        denominator=1,
        winning_totals=frozenset({6}),
        house_edge=13.89,
        dice=((3, 3),),
    ),
    CanonicalBetDefinition(
        key="HOP_HARD_8",
        name="Hop Hard 8",
        category=BetCategory.HOP,
        description="Next roll is exactly 4-4",
        payout="30:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=30,
        denominator=1,
        winning_totals=frozenset({8}),
        house_edge=13.89,
        dice=((4, 4),),
    ),
    CanonicalBetDefinition(
        key="HOP_HARD_10",
        name="Hop Hard 10",
        category=BetCategory.HOP,
        description="Next roll is exactly 5-5",
        payout="30:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=30,
        denominator=1,
        winning_totals=frozenset({10}),
        house_edge=13.89,
        dice=((5, 5),),
    ),
    CanonicalBetDefinition(
        key="HOP_EASY_8",
        name="Hop Easy 8",
        category=BetCategory.HOP,
        description="Next roll is 2-6 or 3-5 (any 8 except 4-4)",
        payout="7:1",
        working=WorkingBehavior.ONE_ROLL,
        numerator=7,
        denominator=1,
        winning_totals=frozenset({8}),
        house_edge=11.11,
        dice=((2, 6), (3, 5)),
    ),
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class BetRegistry(Mapping[str, CanonicalBetDefinition]):
    """
    Read-only bet_type -> CanonicalBetDefinition table.

    Built once and shared by reference; gameplay never mutates it.
    """

    def __init__(self, definitions: Iterable[CanonicalBetDefinition]) -> None:
        table: Dict[str, CanonicalBetDefinition] = {}
        for d in definitions:
            if d.key in table:
                raise ValueError(f"duplicate bet definition: {d.key}")
            table[d.key] = d
        self._defs: Mapping[str, CanonicalBetDefinition] = MappingProxyType(table)

    def __getitem__(self, bet_type: str) -> CanonicalBetDefinition:
        return self._defs[bet_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._defs)

    def __len__(self) -> int:
        return len(self._defs)

    def lookup(self, bet_type: str) -> Tuple[Optional[CanonicalBetDefinition], bool]:
        d = self._defs.get(bet_type)
        return d, d is not None

    def all_bet_types(self) -> List[str]:
        return sorted(self._defs)

    def bets_by_category(self) -> Dict[BetCategory, List[str]]:
        out: Dict[BetCategory, List[str]] = {}
        for cat in CATEGORY_ORDER:
            keys = sorted(k for k, d in self._defs.items() if d.category is cat)
            if keys:
                out[cat] = keys
        return out

    def one_roll_bets(self) -> List[str]:
        return sorted(k for k, d in self._defs.items() if d.one_roll)

    def always_working_bets(self) -> List[str]:
        return sorted(k for k, d in self._defs.items() if not d.one_roll)

    def bets_by_house_edge(self) -> List[str]:
        """Lowest edge first; bets whose edge depends on the numbers covered go last."""
        return sorted(
            self._defs,
            key=lambda k: (self._defs[k].house_edge is None, self._defs[k].house_edge or 0.0, k),
        )


@lru_cache(maxsize=None)
def default_registry() -> BetRegistry:
    return BetRegistry(_DEFINITIONS)


# ----- module-level introspection (read-only) -----------------------------

def get_bet_definition(bet_type: str) -> Tuple[Optional[CanonicalBetDefinition], bool]:
    return default_registry().lookup(bet_type)


def get_all_bet_types() -> List[str]:
    return default_registry().all_bet_types()


def get_bets_by_category() -> Dict[BetCategory, List[str]]:
    return default_registry().bets_by_category()


def get_one_roll_bets() -> List[str]:
    return default_registry().one_roll_bets()


def get_always_working_bets() -> List[str]:
    return default_registry().always_working_bets()


def get_bets_by_house_edge() -> List[str]:
    return default_registry().bets_by_house_edge()
