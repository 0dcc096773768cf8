# tests/test_dice.py
import secrets

import numpy as np
import pytest

from craps_engine.dice import FixedDice, SecureDice, SeededDice, make_roll
from craps_engine.errors import DiceError, DiceExhaustedError


def test_make_roll_total_and_hardness():
    r = make_roll(3, 3)
    assert r.total == 6
    assert r.is_hard
    assert r.dice == (3, 3)

    r = make_roll(2, 5)
    assert r.total == 7
    assert not r.is_hard
    assert str(r) == "7 (2 + 5)"


def test_roll_is_immutable():
    r = make_roll(1, 2)
    with pytest.raises(Exception):
        r.total = 12  # type: ignore[misc]


def test_roll_matches_either_order():
    r = make_roll(5, 3)
    assert r.matches(3, 5)
    assert r.matches(5, 3)
    assert not r.matches(4, 4)


@pytest.mark.parametrize("faces", [(0, 3), (7, 1), (2, 9), (1.5, 2), ("3", 4)])
def test_make_roll_rejects_bad_faces(faces):
    with pytest.raises(DiceError):
        make_roll(*faces)


def test_make_roll_accepts_numpy_ints():
    r = make_roll(np.int64(4), np.int64(4))
    assert r.total == 8
    assert isinstance(r.die1, int)


def test_secure_dice_faces_in_range():
    d = SecureDice()
    faces = {d.roll_die() for _ in range(500)}
    assert faces <= set(range(1, 7))
    roll = d.roll()
    assert 2 <= roll.total <= 12


def test_secure_dice_falls_back_when_generator_fails(monkeypatch, caplog):
    def broken(_n):
        raise OSError("no entropy")

    monkeypatch.setattr(secrets, "randbelow", broken)
    d = SecureDice()
    with caplog.at_level("WARNING", logger="craps_engine.dice"):
        face = d.roll_die()
    assert 1 <= face <= 6
    assert any("fallback" in rec.getMessage() for rec in caplog.records)


def test_seeded_dice_is_reproducible():
    a = SeededDice(seed=42)
    b = SeededDice(seed=42)
    seq_a = [a.roll().dice for _ in range(20)]
    seq_b = [b.roll().dice for _ in range(20)]
    assert seq_a == seq_b
    assert all(1 <= f <= 6 for pair in seq_a for f in pair)


def test_seeded_dice_accepts_generator():
    rng = np.random.default_rng(7)
    d = SeededDice(rng=rng)
    assert 1 <= d.roll_die() <= 6


def test_fixed_dice_replays_in_order_then_runs_out():
    d = FixedDice([(1, 1), (6, 5)])
    assert d.remaining == 2
    assert d.roll().dice == (1, 1)
    assert d.roll().total == 11
    with pytest.raises(DiceExhaustedError):
        d.roll()


def test_fixed_dice_validates_script():
    with pytest.raises(DiceError):
        FixedDice([(1, 7)])


def test_fixed_dice_hands_out_single_faces():
    d = FixedDice([(2, 5), (6, 6)])
    assert d.roll_die() == 2
    assert d.remaining == 1
    assert d.roll_die() == 5
    assert d.roll() == make_roll(6, 6)
    with pytest.raises(DiceExhaustedError):
        d.roll_die()
