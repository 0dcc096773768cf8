# tests/test_resolution_props.py
"""One-roll bets: field, single-number props, horn family, world, C&E, hops."""
import pytest

from craps_engine.dice import FixedDice
from craps_engine.table import Table
from tests._table_helpers import throw


@pytest.fixture
def low_table():
    t = Table(min_bet=1, max_bet=500, max_odds=3, dice=FixedDice())
    t.add_player("bob", "Bob", 1000)
    return t


def _bankroll_after(table, bet_type, amount, pair):
    table.place_bet("bob", bet_type, amount)
    results = throw(table, pair)
    bob = table.get_player("bob")
    # one-roll bets never outlive their roll
    assert bob.bets == []
    return bob.bankroll, results


@pytest.mark.parametrize("pair,bankroll", [
    ((1, 1), 1020),    # 2 pays 2:1
    ((6, 6), 1030),    # 12 pays 3:1
    ((1, 2), 1010),
    ((4, 5), 1010),
    ((5, 6), 1010),
    ((3, 4), 990),
    ((2, 6), 990),
    ((1, 4), 990),
])
def test_field(low_table, pair, bankroll):
    assert _bankroll_after(low_table, "FIELD", 10, pair)[0] == bankroll


@pytest.mark.parametrize("bet_type,amount,pair,bankroll", [
    ("ANY_SEVEN", 10, (2, 5), 1040),
    ("ANY_SEVEN", 10, (3, 3), 990),
    ("ANY_CRAPS", 10, (1, 2), 1070),
    ("ANY_CRAPS", 10, (6, 6), 1070),
    ("ANY_CRAPS", 10, (5, 6), 990),
    ("ELEVEN", 5, (5, 6), 1075),
    ("ACE_DEUCE", 5, (2, 1), 1075),
    ("ACES", 5, (1, 1), 1150),
    ("BOXCARS", 5, (6, 6), 1150),
    ("BOXCARS", 5, (1, 1), 995),
])
def test_single_number_props(low_table, bet_type, amount, pair, bankroll):
    assert _bankroll_after(low_table, bet_type, amount, pair)[0] == bankroll


@pytest.mark.parametrize("bet_type,amount,pair,bankroll", [
    # horn: a unit on each of 2, 3, 11, 12
    ("HORN", 4, (1, 1), 1027),
    ("HORN", 4, (1, 2), 1012),
    ("HORN", 4, (5, 6), 1012),
    ("HORN", 4, (3, 4), 996),
    # horn high: the extra unit rides the named number
    ("HORN_HIGH_12", 5, (6, 6), 1057),
    ("HORN_HIGH_12", 5, (5, 6), 1011),
    ("HORN_HIGH_2", 5, (6, 6), 1026),
    ("HORN_HIGH_3", 5, (1, 2), 1027),
    ("HORN_HIGH_11", 5, (1, 1), 1026),
    # world: horn plus a unit on any seven
    ("WORLD", 5, (1, 1), 1026),
    ("WORLD", 5, (1, 2), 1011),
    ("WORLD", 5, (4, 4), 995),
    # C&E: half on any craps, half on eleven
    ("C_AND_E", 10, (1, 2), 1030),
    ("C_AND_E", 10, (5, 6), 1070),
    ("C_AND_E", 10, (3, 3), 990),
])
def test_split_bets(low_table, bet_type, amount, pair, bankroll):
    assert _bankroll_after(low_table, bet_type, amount, pair)[0] == bankroll


def test_world_pushes_on_seven(low_table):
    bankroll, results = _bankroll_after(low_table, "WORLD", 5, (3, 4))
    assert bankroll == 1000
    assert "World push $5.00 (7)" in results


def test_horn_partial_loss_is_reported_as_net(low_table):
    _, results = _bankroll_after(low_table, "HORN", 4, (1, 2))
    assert "Horn wins $12.00 (3)" in results
    led = low_table.get_player("bob").ledger
    assert [e.amount for e in led] == [-4, 16]


@pytest.mark.parametrize("bet_type,pair,bankroll", [
    ("HOP_2_3", (3, 2), 1075),
    ("HOP_2_3", (1, 4), 995),
    ("HOP_1_6", (6, 1), 1075),
    ("HOP_HARD_6", (3, 3), 1150),
    ("HOP_HARD_6", (2, 4), 995),
    ("HOP_EASY_8", (3, 5), 1035),
    ("HOP_EASY_8", (6, 2), 1035),
    ("HOP_EASY_8", (4, 4), 995),
])
def test_hop_bets(low_table, bet_type, pair, bankroll):
    assert _bankroll_after(low_table, bet_type, 5, pair)[0] == bankroll


def test_props_work_in_the_point_phase_too(low_table):
    throw(low_table, (2, 2))
    assert low_table.is_point()
    bankroll, _ = _bankroll_after(low_table, "ANY_CRAPS", 10, (1, 1))
    assert bankroll == 1070
