# tests/test_resolution_box.py
"""Place, buy, lay, place-to-lose, hardways, big 6/8 and the multi-number bets."""
import pytest

from craps_engine.errors import InvalidNumbersError
from tests._table_helpers import set_point, throw


def _alice(table):
    return table.get_player("alice")


# ----- place / buy / lay / place-to-lose -----

def test_place_bet_pays_and_stays_up(table):
    set_point(table, 6)
    table.place_bet("alice", "PLACE_4", 10)
    results = throw(table, (1, 3))
    assert "Place 4 wins $18.00" in results
    assert _alice(table).bankroll == 1008
    (bet,) = _alice(table).bets
    assert bet.bet_type == "PLACE_4"
    assert bet.working

    throw(table, (1, 3))
    assert _alice(table).bankroll == 1026


def test_place_bet_loses_on_seven(table):
    set_point(table, 6)
    table.place_bet("alice", "PLACE_8", 12)
    results = throw(table, (3, 4))
    assert "Place 8 loses $12.00" in results
    assert _alice(table).bankroll == 988
    assert _alice(table).bets == []


def test_place_bet_is_off_on_the_come_out(table):
    set_point(table, 8)
    table.place_bet("alice", "PLACE_6", 12)
    throw(table, (4, 4))          # point made
    throw(table, (3, 4))          # come-out natural
    throw(table, (3, 3))          # come-out six sets the point
    assert _alice(table).bankroll == 988
    assert len(_alice(table).bets) == 1

    throw(table, (2, 4))
    assert _alice(table).bankroll == 1002


def test_buy_bet_pays_true_odds_less_commission(table):
    set_point(table, 6)
    table.place_bet("alice", "BUY_4", 20)
    results = throw(table, (2, 2))
    assert "Buy 4 wins $38.00 (commission $2.00)" in results
    assert _alice(table).bankroll == 1018
    assert len(_alice(table).bets) == 1


def test_lay_bet_wins_on_seven_then_comes_down(table):
    set_point(table, 6)
    table.place_bet("alice", "LAY_10", 40)
    results = throw(table, (3, 4))
    assert "Lay 10 wins $19.00 (commission $1.00)" in results
    assert "Seven out: returned $40.00 to alice (1 bet(s) taken down)" in results
    assert _alice(table).bankroll == 1019
    assert _alice(table).bets == []


def test_lay_bet_loses_on_its_number(table):
    set_point(table, 6)
    table.place_bet("alice", "LAY_4", 20)
    throw(table, (1, 3))
    assert _alice(table).bankroll == 980
    assert _alice(table).bets == []


def test_place_to_lose_pays_without_commission(table):
    set_point(table, 4)
    table.place_bet("alice", "PLACE_TO_LOSE_6", 12)
    results = throw(table, (3, 4))
    assert "Place-to-Lose 6 wins $10.00" in results
    assert "Seven out: returned $12.00 to alice (1 bet(s) taken down)" in results
    assert _alice(table).bankroll == 1010


# ----- hardways -----

def test_hard_way_wins_hard_and_loses_easy(table):
    set_point(table, 6)
    table.place_bet("alice", "HARD_8", 10)
    results = throw(table, (4, 4))
    assert "Hard 8 wins $90.00" in results
    assert _alice(table).bankroll == 1080
    assert len(_alice(table).bets) == 1

    results = throw(table, (5, 3))
    assert "Hard 8 loses $10.00 (easy 8)" in results
    assert _alice(table).bets == []
    assert _alice(table).bankroll == 1080


def test_hard_way_is_off_on_the_come_out(table):
    table.place_bet("alice", "HARD_6", 10)
    throw(table, (3, 3))
    assert _alice(table).bankroll == 990
    assert len(_alice(table).bets) == 1


def test_all_hardways_settles_number_by_number(table):
    set_point(table, 5)
    table.place_bet("alice", "ALL_HARDWAYS", 20)

    throw(table, (3, 3))
    assert _alice(table).bankroll == 1025

    results = throw(table, (1, 3))
    assert "All Hardways loses $5.00 on easy 4" in results
    (bet,) = _alice(table).bets
    assert bet.amount == 15
    assert bet.numbers == (6, 8, 10)

    throw(table, (2, 2))          # four is no longer covered
    assert _alice(table).bankroll == 1025
    assert _alice(table).bets[0].amount == 15

    throw(table, (3, 4))
    assert _alice(table).bets == []
    assert _alice(table).session_result == 25


# ----- multi-number place bets -----

def test_place_inside_pays_per_number_share(table):
    set_point(table, 4)
    bet = table.place_bet("alice", "PLACE_INSIDE", 24)
    assert bet.numbers == (5, 6, 8, 9)
    throw(table, (2, 4))
    assert _alice(table).bankroll == 983
    throw(table, (2, 3))
    assert _alice(table).bankroll == pytest.approx(991.4)
    throw(table, (5, 5))
    assert _alice(table).bankroll == pytest.approx(991.4)
    assert len(_alice(table).bets) == 1


def test_place_outside_covers_the_outside_numbers(table):
    bet = table.place_bet("alice", "PLACE_OUTSIDE", 20)
    assert bet.numbers == (4, 5, 9, 10)
    set_point(table, 6)
    throw(table, (4, 6))
    assert _alice(table).bankroll == 989


def test_place_numbers_needs_numbers(table):
    with pytest.raises(InvalidNumbersError):
        table.place_bet("alice", "PLACE_NUMBERS", 10)
    assert _alice(table).bankroll == 1000

    set_point(table, 6)
    table.place_bet("alice", "PLACE_NUMBERS", 10, numbers=[10, 4])
    throw(table, (4, 6))
    assert _alice(table).bankroll == 999
    throw(table, (2, 5))
    assert _alice(table).bets == []
    assert _alice(table).bankroll == 999


# ----- big 6 / big 8 -----

def test_big_six_works_on_the_come_out(table):
    table.place_bet("alice", "BIG_6", 10)
    results = throw(table, (2, 4))
    assert "Big 6 wins $10.00" in results
    assert "Point is 6" in results
    assert _alice(table).bankroll == 1010
    assert _alice(table).bets == []


def test_big_eight_loses_on_seven(table):
    table.place_bet("alice", "BIG_8", 10)
    throw(table, (1, 1), (3, 4))
    assert _alice(table).bankroll == 990
    assert _alice(table).bets == []
