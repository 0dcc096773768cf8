# ledger.py -- players, their bets, and the bankroll transaction log
from __future__ import annotations

import itertools
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def money(x: float) -> float:
    """Round to cents."""
    return round(float(x) + 0.0, 2)


# --------------------------
# Entry kinds
# --------------------------

STAKE = "stake"      # debit at placement
PRESS = "press"      # debit when a bet is raised
WIN = "win"          # credit on a winning settlement
PUSH = "push"        # stake returned without profit
REFUND = "refund"    # stake returned on take-down / seven-out cleanup / leaving the table

DEBIT_KINDS = (STAKE, PRESS)
CREDIT_KINDS = (WIN, PUSH, REFUND)

_bet_seq = itertools.count(1)


def next_bet_id() -> str:
    return f"bet_{next(_bet_seq)}"


# --------------------------
# Core records
# --------------------------

@dataclass
class Bet:
    id: str
    bet_type: str
    amount: float
    player_id: str
    working: bool = True
    numbers: Tuple[int, ...] = ()
    placed_at: float = field(default_factory=time.time)
    come_point: Optional[int] = None   # number a come / don't come bet has travelled to
    odds_point: Optional[int] = None   # number an odds bet is keyed to
    resolved: bool = False

    def snapshot(self) -> Dict[str, Any]:
        d = asdict(self)
        d["numbers"] = list(self.numbers)
        return d


@dataclass
class LedgerEntry:
    id: int
    ts: float
    kind: str
    amount: float            # signed: negative for debits
    balance: float           # bankroll after the entry
    bet_id: Optional[str] = None
    bet_type: Optional[str] = None
    note: str = ""

    def snapshot(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Player:
    id: str
    name: str
    bankroll: float
    bets: List[Bet] = field(default_factory=list)
    min_bet: Optional[float] = None      # None -> table minimum
    max_bet: Optional[float] = None      # None -> table maximum
    win_goal: Optional[float] = None     # session profit that ends the session
    loss_limit: Optional[float] = None   # session loss that stops new bets
    starting_bankroll: Optional[float] = None
    session_start: float = field(default_factory=time.time)
    ledger: List[LedgerEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.bankroll = money(self.bankroll)
        if self.starting_bankroll is None:
            self.starting_bankroll = self.bankroll
        self._entry_seq = itertools.count(1)

    # ----- bankroll ------------------------------------------------------

    def _record(self, kind: str, amount: float, bet: Optional[Bet], note: str) -> LedgerEntry:
        self.bankroll = money(self.bankroll + amount)
        entry = LedgerEntry(
            id=next(self._entry_seq),
            ts=time.time(),
            kind=kind,
            amount=money(amount),
            balance=self.bankroll,
            bet_id=bet.id if bet else None,
            bet_type=bet.bet_type if bet else None,
            note=note,
        )
        self.ledger.append(entry)
        return entry

    def debit(self, amount: float, bet: Optional[Bet] = None, *, kind: str = STAKE, note: str = "") -> LedgerEntry:
        if kind not in DEBIT_KINDS:
            raise ValueError(f"not a debit kind: {kind}")
        return self._record(kind, -abs(amount), bet, note)

    def credit(self, amount: float, bet: Optional[Bet] = None, *, kind: str = WIN, note: str = "") -> LedgerEntry:
        if kind not in CREDIT_KINDS:
            raise ValueError(f"not a credit kind: {kind}")
        return self._record(kind, abs(amount), bet, note)

    def totals(self) -> Dict[str, float]:
        """Sum of ledger amounts per kind (debits negative)."""
        out = {k: 0.0 for k in DEBIT_KINDS + CREDIT_KINDS}
        for e in self.ledger:
            out[e.kind] = money(out.get(e.kind, 0.0) + e.amount)
        return out

    @property
    def session_result(self) -> float:
        """Bankroll plus money still on the layout, against the starting bankroll."""
        return money(self.bankroll + self.exposure - (self.starting_bankroll or 0.0))

    @property
    def exposure(self) -> float:
        """Money currently on the layout."""
        return money(sum(b.amount for b in self.bets if not b.resolved))

    # ----- bets ----------------------------------------------------------

    def open_bets(self, bet_type: Optional[str] = None) -> List[Bet]:
        return [b for b in self.bets if not b.resolved and (bet_type is None or b.bet_type == bet_type)]

    def purge_resolved(self) -> int:
        before = len(self.bets)
        self.bets = [b for b in self.bets if not b.resolved]
        return before - len(self.bets)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bankroll": self.bankroll,
            "starting_bankroll": self.starting_bankroll,
            "session_result": self.session_result,
            "min_bet": self.min_bet,
            "max_bet": self.max_bet,
            "win_goal": self.win_goal,
            "loss_limit": self.loss_limit,
            "bets": [b.snapshot() for b in self.bets],
            "ledger": [e.snapshot() for e in self.ledger],
        }
