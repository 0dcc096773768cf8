"""
bet_types.py -- bet type canonicalization

Callers (the query layer, config files, tests) name bets loosely: "Place 6",
"place_6", "don't pass", "yo". The table only understands registry keys, so
everything passes through here first.

Public API:
    normalize_bet_type(raw: str) -> str
    extract_number(raw: str) -> int | None
"""

from __future__ import annotations

import re
from typing import List, Optional

# Whole-phrase aliases -> canonical registry key
_ALIASES = {
    # Line / come families
    "pass": "PASS_LINE",
    "pass line": "PASS_LINE",
    "pl": "PASS_LINE",
    "dont pass": "DONT_PASS",
    "don t pass": "DONT_PASS",
    "dp": "DONT_PASS",
    "come": "COME",
    "dont come": "DONT_COME",
    "don t come": "DONT_COME",
    "dc": "DONT_COME",
    # Field / props
    "field": "FIELD",
    "any seven": "ANY_SEVEN",
    "any 7": "ANY_SEVEN",
    "big red": "ANY_SEVEN",
    "any craps": "ANY_CRAPS",
    "eleven": "ELEVEN",
    "yo": "ELEVEN",
    "yo 11": "ELEVEN",
    "ace deuce": "ACE_DEUCE",
    "aces": "ACES",
    "snake eyes": "ACES",
    "boxcars": "BOXCARS",
    "midnight": "BOXCARS",
    # Split bets
    "horn": "HORN",
    "world": "WORLD",
    "whirl": "WORLD",
    "c and e": "C_AND_E",
    "c e": "C_AND_E",
    "ce": "C_AND_E",
    "craps eleven": "C_AND_E",
    # Multi-number
    "place numbers": "PLACE_NUMBERS",
    "inside": "PLACE_INSIDE",
    "place inside": "PLACE_INSIDE",
    "outside": "PLACE_OUTSIDE",
    "place outside": "PLACE_OUTSIDE",
    "hardways": "ALL_HARDWAYS",
    "all hardways": "ALL_HARDWAYS",
    "all hard ways": "ALL_HARDWAYS",
}

_NUMBER_WORDS = {
    "two": 2, "three": 3, "four": 4, "five": 5, "six": 6, "eight": 8,
    "nine": 9, "ten": 10, "eleven": 11, "twelve": 12,
}

_BOX_NUMBERS = {4, 5, 6, 8, 9, 10}
_HARD_ALLOWED = {4, 6, 8, 10}
_HORN_NUMBERS = {2, 3, 11, 12}


def _clean(s: str) -> str:
    s = s.strip().lower()
    # normalize punctuation (and underscores) to spaces, then squeeze
    s = re.sub(r"[^a-z0-9]+", " ", s)
    s = re.sub(r"\s+", " ", s).strip()
    return s


def _ints(toks: List[str]) -> List[int]:
    out: List[int] = []
    for t in toks:
        if t.isdigit():
            out.append(int(t))
        elif t in _NUMBER_WORDS:
            out.append(_NUMBER_WORDS[t])
    return out


def extract_number(raw: Optional[str], allowed=_BOX_NUMBERS) -> Optional[int]:
    """Last number in ``raw`` that is in ``allowed`` (box numbers by default)."""
    if not raw:
        return None
    for n in reversed(_ints(_clean(raw).split())):
        if n in allowed:
            return n
    return None


def _hop_key(toks: List[str]) -> Optional[str]:
    nums = [n for n in _ints(toks) if 1 <= n <= 12]
    if "hard" in toks:
        n = next((n for n in reversed(nums) if n in _HARD_ALLOWED), None)
        return f"HOP_HARD_{n}" if n else None
    if "easy" in toks and 8 in nums:
        return "HOP_EASY_8"
    faces = [n for n in nums if 1 <= n <= 6]
    if len(faces) >= 2:
        a, b = sorted(faces[-2:])
        return f"HOP_HARD_{a * 2}" if a == b else f"HOP_{a}_{b}"
    return None


def normalize_bet_type(raw: Optional[str]) -> str:
    """
    Returns the canonical registry key for a loosely written bet name.

    Examples:
      "Place 6" / "place_6" / "PLACE_6"   -> "PLACE_6"
      "Pass Line" / "pass" / "PL"          -> "PASS_LINE"
      "Don't Pass" / "dp"                  -> "DONT_PASS"
      "Hard 8" / "hardway 8"               -> "HARD_8"
      "Come Odds"                          -> "COME_ODDS"
      "Hop 3 5" / "hop 5-3"                -> "HOP_3_5"
      "Horn High 12"                       -> "HORN_HIGH_12"
      "Place to lose 4" / "PTL 4"          -> "PLACE_TO_LOSE_4"

    Unknown names come back upper-snake-cased so the registry lookup can
    report them by name. A family word with a number that family cannot
    take ("Hard 5", "Place 7") is unknown too, never a neighbouring bet.
    """
    base = _clean(raw or "")
    if base in _ALIASES:
        return _ALIASES[base]

    toks = base.split()
    unknown = base.upper().replace(" ", "_") or "UNKNOWN"
    has_number = bool(_ints(toks))
    dont = "dont" in toks or "don" in toks

    if "odds" in toks:
        if "come" in toks:
            return "DONT_COME_ODDS" if dont else "COME_ODDS"
        return "DONT_PASS_ODDS" if dont else "PASS_ODDS"

    if "hop" in toks:
        return _hop_key(toks) or unknown

    if "horn" in toks and "high" in toks:
        n = extract_number(base, _HORN_NUMBERS)
        return f"HORN_HIGH_{n}" if n else unknown

    if "ptl" in toks or ("place" in toks and "lose" in toks):
        n = extract_number(base)
        return f"PLACE_TO_LOSE_{n}" if n else unknown

    # Hardways (number-aware)
    if "hard" in toks or "hardway" in toks or "hardways" in toks:
        n = extract_number(base, _HARD_ALLOWED)
        if n:
            return f"HARD_{n}"
        return unknown if has_number else "ALL_HARDWAYS"

    for word, prefix, allowed in (
        ("buy", "BUY", _BOX_NUMBERS),
        ("lay", "LAY", _BOX_NUMBERS),
        ("big", "BIG", {6, 8}),
    ):
        if word in toks:
            n = extract_number(base, allowed)
            return f"{prefix}_{n}" if n else unknown

    # Pass / don't pass, come / don't come
    if "pass" in toks:
        return "DONT_PASS" if dont else "PASS_LINE"
    if "come" in toks:
        return "DONT_COME" if dont else "COME"

    if "place" in toks:
        n = extract_number(base)
        if n:
            return f"PLACE_{n}"
        return unknown if has_number else "PLACE_NUMBERS"

    # Lone box number -> place bet
    if len(toks) == 1:
        n = extract_number(base)
        if n:
            return f"PLACE_{n}"

    return unknown
