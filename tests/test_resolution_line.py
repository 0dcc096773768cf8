# tests/test_resolution_line.py
"""Pass / don't pass, come / don't come and the odds behind them."""
import pytest

from craps_engine.errors import BetPhaseError, OddsLimitError
from craps_engine.state import GameState
from tests._table_helpers import set_point, throw


def _alice(table):
    return table.get_player("alice")


# ----- pass / don't pass -----

@pytest.mark.parametrize("pair,bankroll", [((3, 4), 1010), ((5, 6), 1010), ((1, 1), 990), ((1, 2), 990), ((6, 6), 990)])
def test_pass_line_on_the_come_out(table, pair, bankroll):
    table.place_bet("alice", "PASS_LINE", 10)
    throw(table, pair)
    assert _alice(table).bankroll == bankroll
    assert _alice(table).bets == []


def test_pass_line_rides_the_point_then_wins(table):
    table.place_bet("alice", "PASS_LINE", 10)
    set_point(table, 6)
    assert len(_alice(table).bets) == 1
    results = throw(table, (3, 3))
    assert "Pass line wins $10.00 (Point made)" in results
    assert "Point 6 made" in results
    assert _alice(table).bankroll == 1010
    assert table.is_come_out()


def test_pass_line_loses_on_seven_out(table):
    table.place_bet("alice", "PASS_LINE", 10)
    set_point(table, 9)
    results = throw(table, (1, 2), (5, 5), (2, 5))
    assert "Pass line loses $10.00 (Seven out)" in results
    assert "Seven out! New shooter: alice" in results
    assert _alice(table).bankroll == 990
    assert _alice(table).bets == []


@pytest.mark.parametrize("pair,bankroll,left", [
    ((1, 1), 1010, 0), ((1, 2), 1010, 0), ((6, 6), 1000, 0), ((3, 4), 990, 0), ((5, 6), 990, 0), ((2, 2), 990, 1),
])
def test_dont_pass_on_the_come_out(table, pair, bankroll, left):
    table.place_bet("alice", "DONT_PASS", 10)
    throw(table, pair)
    assert _alice(table).bankroll == bankroll
    assert len(_alice(table).bets) == left


def test_dont_pass_wins_on_seven_out_and_loses_on_point(table):
    table.place_bet("alice", "DONT_PASS", 10)
    set_point(table, 4)
    results = throw(table, (3, 4))
    assert "Don't pass wins $10.00 (Seven out)" in results
    assert _alice(table).bankroll == 1010

    table.place_bet("alice", "DONT_PASS", 10)
    set_point(table, 5)
    throw(table, (2, 3))
    assert _alice(table).bankroll == 1000


# ----- come / don't come -----

def test_come_bet_travels_then_wins_on_its_number(table):
    set_point(table, 4)
    table.place_bet("alice", "COME", 10)
    results = throw(table, (3, 3))
    assert "Come bet moves to 6" in results
    (bet,) = _alice(table).bets
    assert bet.come_point == 6

    results = throw(table, (4, 2))
    assert "Come bet wins $10.00 (Point made)" in results
    assert _alice(table).bankroll == 1010
    # the table point is untouched
    assert table.get_point_number() == 4


def test_come_bet_wins_on_seven_before_it_travels(table):
    set_point(table, 4)
    table.place_bet("alice", "COME", 10)
    results = throw(table, (3, 4))
    assert "Come bet wins $10.00 (Natural)" in results
    assert _alice(table).bankroll == 1010
    assert table.is_come_out()


def test_travelled_come_bet_loses_on_seven(table):
    set_point(table, 4)
    table.place_bet("alice", "COME", 10)
    throw(table, (4, 4), (1, 6))
    assert _alice(table).bankroll == 990
    assert _alice(table).bets == []


def test_dont_come_pushes_on_twelve(table):
    set_point(table, 4)
    table.place_bet("alice", "DONT_COME", 10)
    results = throw(table, (6, 6))
    assert "Don't come push $10.00 (12)" in results
    assert _alice(table).bankroll == 1000
    assert _alice(table).bets == []


def test_dont_come_travels_then_wins_on_seven(table):
    set_point(table, 4)
    table.place_bet("alice", "DONT_COME", 10)
    throw(table, (3, 3))
    assert _alice(table).bets[0].come_point == 6
    throw(table, (3, 4))
    assert _alice(table).bankroll == 1010


# ----- odds -----

def test_pass_odds_need_a_point(table):
    table.place_bet("alice", "PASS_LINE", 10)
    with pytest.raises(BetPhaseError):
        table.place_bet("alice", "PASS_ODDS", 20)
    assert _alice(table).bankroll == 990


def test_pass_odds_pay_true_odds(table):
    table.place_bet("alice", "PASS_LINE", 10)
    set_point(table, 4)
    odds = table.place_bet("alice", "PASS_ODDS", 30)
    assert odds.odds_point == 4
    results = throw(table, (2, 2))
    assert "Pass Odds wins $60.00 (4 hit)" in results
    assert _alice(table).bankroll == 1070
    assert _alice(table).bets == []


def test_pass_odds_capped_by_max_odds(table):
    table.place_bet("alice", "PASS_LINE", 10)
    set_point(table, 5)
    table.place_bet("alice", "PASS_ODDS", 20)
    with pytest.raises(OddsLimitError):
        table.place_bet("alice", "PASS_ODDS", 15)
    with pytest.raises(OddsLimitError):
        table.press_bet("alice", "PASS_ODDS", 15)
    table.place_bet("alice", "PASS_ODDS", 10)
    assert _alice(table).exposure == 40


def test_odds_without_a_base_bet_are_not_capped(table):
    set_point(table, 10)
    table.place_bet("alice", "PASS_ODDS", 100)
    throw(table, (5, 5))
    assert _alice(table).bankroll == 1200


def test_dont_pass_odds_pay_lay_odds(table):
    table.place_bet("alice", "DONT_PASS", 10)
    set_point(table, 4)
    table.place_bet("alice", "DONT_PASS_ODDS", 30)
    results = throw(table, (3, 4))
    assert "Don't Pass Odds wins $15.00 (Seven out)" in results
    assert _alice(table).bankroll == 1025


def test_come_odds_follow_the_come_point(table):
    set_point(table, 4)
    table.place_bet("alice", "COME", 10)
    throw(table, (3, 3))
    odds = table.place_bet("alice", "COME_ODDS", 30)
    assert odds.odds_point == 6
    with pytest.raises(OddsLimitError):
        table.place_bet("alice", "COME_ODDS", 5, numbers=[6])

    throw(table, (4, 2))
    # come 1:1 plus 6:5 on the odds
    assert _alice(table).bankroll == 1046
    assert _alice(table).bets == []


def test_odds_stay_keyed_to_their_number_across_phases(table):
    table.place_bet("alice", "PASS_LINE", 10)
    set_point(table, 8)
    table.place_bet("alice", "PASS_ODDS", 10)
    table.place_bet("alice", "COME", 10)
    throw(table, (4, 5))           # come travels to 9
    table.place_bet("alice", "COME_ODDS", 10, numbers=[9])
    throw(table, (2, 6))           # point made: pass and pass odds settle
    assert table.get_state() is GameState.COME_OUT
    types = sorted(b.bet_type for b in _alice(table).bets)
    assert types == ["COME", "COME_ODDS"]

    throw(table, (3, 6))           # the come bet and its odds win on the come-out
    assert _alice(table).bets == []
    # pass +10, pass odds +12, come +10, come odds +15
    assert _alice(table).bankroll == 1047
