# tests/test_registry.py
from fractions import Fraction

import pytest

from craps_engine.registry import (
    BetCategory,
    BetRegistry,
    WorkingBehavior,
    default_registry,
    get_all_bet_types,
    get_always_working_bets,
    get_bet_definition,
    get_bets_by_category,
    get_bets_by_house_edge,
    get_one_roll_bets,
    lay_odds,
    true_odds,
)

EXPECTED_TYPES = {
    "PASS_LINE", "DONT_PASS", "COME", "DONT_COME",
    "PASS_ODDS", "DONT_PASS_ODDS", "COME_ODDS", "DONT_COME_ODDS",
    "FIELD",
    "PLACE_4", "PLACE_5", "PLACE_6", "PLACE_8", "PLACE_9", "PLACE_10",
    "PLACE_NUMBERS", "PLACE_INSIDE", "PLACE_OUTSIDE",
    "BUY_4", "BUY_5", "BUY_6", "BUY_8", "BUY_9", "BUY_10",
    "LAY_4", "LAY_5", "LAY_6", "LAY_8", "LAY_9", "LAY_10",
    "PLACE_TO_LOSE_4", "PLACE_TO_LOSE_5", "PLACE_TO_LOSE_6",
    "PLACE_TO_LOSE_8", "PLACE_TO_LOSE_9", "PLACE_TO_LOSE_10",
    "HARD_4", "HARD_6", "HARD_8", "HARD_10", "ALL_HARDWAYS",
    "ANY_SEVEN", "ANY_CRAPS", "ELEVEN", "ACE_DEUCE", "ACES", "BOXCARS",
    "HORN", "HORN_HIGH_2", "HORN_HIGH_3", "HORN_HIGH_11", "HORN_HIGH_12",
    "WORLD", "C_AND_E",
    "HOP_1_2", "HOP_1_3", "HOP_1_4", "HOP_1_5", "HOP_1_6",
    "HOP_2_3", "HOP_2_4", "HOP_2_5", "HOP_2_6",
    "HOP_3_4", "HOP_3_5", "HOP_3_6",
    "HOP_4_5", "HOP_4_6", "HOP_5_6",
    "HOP_HARD_4", "HOP_HARD_6", "HOP_HARD_8", "HOP_HARD_10", "HOP_EASY_8",
    "BIG_6", "BIG_8",
}


def test_registry_has_every_bet_type():
    assert set(get_all_bet_types()) == EXPECTED_TYPES
    assert len(default_registry()) == 76


def test_lookup_returns_definition_and_found_flag():
    defn, found = get_bet_definition("PLACE_6")
    assert found
    assert defn.key == "PLACE_6"
    assert defn.ratio == Fraction(7, 6)

    missing, found = get_bet_definition("PLACE_7")
    assert missing is None
    assert not found


def test_lookup_is_pure_and_registry_immutable():
    a, _ = get_bet_definition("BUY_8")
    b, _ = get_bet_definition("BUY_8")
    assert a == b
    assert a is b
    reg = default_registry()
    assert reg is default_registry()
    with pytest.raises(TypeError):
        reg._defs["NEW"] = a  # type: ignore[index]
    with pytest.raises(Exception):
        a.numerator = 99  # type: ignore[misc]


def test_duplicate_keys_rejected():
    defn = default_registry()["FIELD"]
    with pytest.raises(ValueError):
        BetRegistry([defn, defn])


@pytest.mark.parametrize("key,ratio", [
    ("PLACE_4", Fraction(9, 5)), ("PLACE_5", Fraction(7, 5)), ("PLACE_8", Fraction(7, 6)),
    ("BUY_4", Fraction(2, 1)), ("BUY_9", Fraction(3, 2)), ("BUY_6", Fraction(6, 5)),
    ("LAY_10", Fraction(1, 2)), ("LAY_5", Fraction(2, 3)), ("LAY_8", Fraction(5, 6)),
    ("PLACE_TO_LOSE_4", Fraction(1, 2)),
    ("HARD_4", Fraction(7, 1)), ("HARD_8", Fraction(9, 1)),
    ("ANY_SEVEN", Fraction(4, 1)), ("ANY_CRAPS", Fraction(7, 1)), ("ELEVEN", Fraction(15, 1)),
    ("ACES", Fraction(30, 1)), ("BOXCARS", Fraction(30, 1)), ("HOP_2_3", Fraction(15, 1)),
    ("HOP_HARD_6", Fraction(30, 1)), ("BIG_6", Fraction(1, 1)),
])
def test_payout_ratios(key, ratio):
    assert default_registry()[key].ratio == ratio


def test_commission_only_on_buy_and_lay():
    reg = default_registry()
    for key, defn in reg.items():
        if defn.category in (BetCategory.BUY, BetCategory.LAY):
            assert defn.commission == pytest.approx(0.05), key
        else:
            assert defn.commission == 0.0, key


def test_variable_payout_bets():
    reg = default_registry()
    for key in ("PASS_ODDS", "DONT_PASS_ODDS", "COME_ODDS", "DONT_COME_ODDS"):
        assert reg[key].variable_payout
        assert reg[key].requires_point
        with pytest.raises(ValueError):
            reg[key].ratio


def test_true_and_lay_odds():
    assert true_odds(4) == Fraction(2, 1)
    assert true_odds(9) == Fraction(3, 2)
    assert true_odds(6) == Fraction(6, 5)
    assert lay_odds(10) == Fraction(1, 2)
    assert lay_odds(5) == Fraction(2, 3)
    assert lay_odds(8) == Fraction(5, 6)
    with pytest.raises(ValueError):
        true_odds(7)


def test_field_special_payouts():
    field = default_registry()["FIELD"]
    assert field.ratio_for_total(2) == Fraction(2, 1)
    assert field.ratio_for_total(12) == Fraction(3, 1)
    assert field.ratio_for_total(9) == Fraction(1, 1)
    assert field.winning_totals == frozenset({2, 3, 4, 9, 10, 11, 12})


def test_working_behavior_tags():
    reg = default_registry()
    assert reg["PLACE_6"].working is WorkingBehavior.CONDITIONAL
    assert reg["HARD_10"].working is WorkingBehavior.CONDITIONAL
    assert reg["PASS_LINE"].working is WorkingBehavior.ALWAYS
    assert reg["BIG_8"].working is WorkingBehavior.ALWAYS
    assert reg["HORN"].one_roll
    assert reg["HOP_EASY_8"].one_roll
    assert not reg["LAY_4"].one_roll


def test_one_roll_and_always_working_partition_the_registry():
    one = set(get_one_roll_bets())
    always = set(get_always_working_bets())
    assert one.isdisjoint(always)
    assert one | always == EXPECTED_TYPES
    assert {"FIELD", "ANY_SEVEN", "WORLD", "C_AND_E", "HOP_1_2"} <= one


def test_bets_by_category_in_display_order():
    cats = get_bets_by_category()
    assert list(cats)[0] is BetCategory.LINE
    assert cats[BetCategory.LINE] == ["DONT_PASS", "PASS_LINE"]
    assert "BIG_6" in cats[BetCategory.BIG]
    assert sum(len(v) for v in cats.values()) == 76


def test_bets_by_house_edge_is_sorted():
    order = get_bets_by_house_edge()
    reg = default_registry()
    edges = [reg[k].house_edge for k in order]
    known = [e for e in edges if e is not None]
    assert known == sorted(known)
    # bets with no fixed edge sort last
    assert all(e is None for e in edges[len(known):])
    assert order[0] in ("PASS_ODDS", "DONT_PASS_ODDS", "COME_ODDS", "DONT_COME_ODDS")
    assert order.index("DONT_PASS") < order.index("PASS_LINE") < order.index("ANY_SEVEN")


def test_split_bet_components():
    reg = default_registry()
    horn = reg["HORN"]
    assert sum(leg.weight for leg in horn.components) == 4
    hh = reg["HORN_HIGH_12"]
    assert sum(leg.weight for leg in hh.components) == 5
    assert [leg.weight for leg in hh.components if 12 in leg.totals] == [2]
    world = reg["WORLD"]
    assert sum(leg.weight for leg in world.components) == 5
    assert reg["HOP_EASY_8"].dice == ((2, 6), (3, 5))
