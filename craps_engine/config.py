"""
config.py -- table configuration

Public:
  - TableConfig(min_bet, max_bet, max_odds, seed, players)
  - DEFAULT_PROFILES: named presets
  - get_table_config(profile=None, overrides=None) -> TableConfig
  - validate_table_config(cfg) -> ConfigResult(errors, warnings, config)
  - load_table_config(path) -> TableConfig   (YAML or JSON)
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .errors import ConfigError


@dataclass
class TableConfig:
    min_bet: float = 5.0
    max_bet: float = 1000.0
    max_odds: int = 3
    seed: Optional[int] = None                 # None -> secure dice
    players: List[Dict[str, Any]] = field(default_factory=list)   # [{id, name, bankroll}]

    def snapshot(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------
# Built-in preset profiles
# ---------------------------

DEFAULT_PROFILES: Dict[str, Dict[str, Any]] = {
    # Typical Strip table: $5 minimum, 3x odds.
    "standard": {"min_bet": 5, "max_bet": 1000, "max_odds": 3},
    # Downtown style: low minimum, generous odds.
    "downtown_10x": {"min_bet": 3, "max_bet": 500, "max_odds": 10},
    "high_limit": {"min_bet": 25, "max_bet": 10000, "max_odds": 5},
    # Bubble / stadium style: $1 bets, huge odds multiplier.
    "bubble_100x": {"min_bet": 1, "max_bet": 5000, "max_odds": 100},
}

_KNOWN_KEYS = {f.name for f in fields(TableConfig)} | {"profile"}


@dataclass
class ConfigResult:
    errors: List[str]
    warnings: List[str]
    config: Optional[TableConfig]


def get_table_config(profile: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> TableConfig:
    """
    Merge ``overrides`` over a named profile (or the dataclass defaults).
    Unknown profile names raise ConfigError; validation is separate.
    """
    base: Dict[str, Any] = {}
    if profile is not None:
        if profile not in DEFAULT_PROFILES:
            raise ConfigError(f"unknown table profile '{profile}'")
        base = dict(DEFAULT_PROFILES[profile])
    merged = {**base, **{k: v for k, v in (overrides or {}).items() if k != "profile"}}
    unknown = sorted(set(merged) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"unknown table config keys: {', '.join(unknown)}")
    return TableConfig(**merged)


def validate_table_config(cfg: TableConfig) -> ConfigResult:
    errors: List[str] = []
    warnings: List[str] = []

    if not _is_number(cfg.min_bet) or cfg.min_bet <= 0:
        errors.append("min_bet must be a positive number")
    if not _is_number(cfg.max_bet) or cfg.max_bet <= 0:
        errors.append("max_bet must be a positive number")
    if not errors and cfg.min_bet > cfg.max_bet:
        errors.append("min_bet cannot exceed max_bet")

    if isinstance(cfg.max_odds, bool) or not isinstance(cfg.max_odds, int) or cfg.max_odds < 0:
        errors.append("max_odds must be a non-negative integer")
    elif cfg.max_odds == 0:
        warnings.append("max_odds is 0: odds bets behind a base bet will be rejected")
    elif cfg.max_odds > 100:
        warnings.append(f"max_odds {cfg.max_odds}x is unusually high")

    if cfg.seed is not None and (isinstance(cfg.seed, bool) or not isinstance(cfg.seed, int)):
        errors.append("seed must be an integer or null")

    seen = set()
    for i, p in enumerate(cfg.players or []):
        if not isinstance(p, dict) or "id" not in p:
            errors.append(f"players[{i}] must be an object with an 'id'")
            continue
        pid = str(p["id"])
        if pid in seen:
            errors.append(f"players[{i}]: duplicate id '{pid}'")
        seen.add(pid)
        bankroll = p.get("bankroll", 0)
        if not _is_number(bankroll) or bankroll < 0:
            errors.append(f"players[{i}].bankroll must be a non-negative number")
        elif _is_number(cfg.min_bet) and bankroll < cfg.min_bet:
            warnings.append(f"player '{pid}' cannot cover the table minimum")

    return ConfigResult(errors, warnings, cfg if not errors else None)


def load_table_config(path: Union[str, Path]) -> TableConfig:
    """Load a table config from YAML or JSON and validate it."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"cannot read table config {p}: {e}") from e

    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            data: Any = yaml.safe_load(text) or {}
        else:
            data = json.loads(text or "{}")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"cannot parse table config {p}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("table config root must be a mapping")

    # allow a top-level `table:` block
    if isinstance(data.get("table"), dict):
        data = {**data["table"], **{k: v for k, v in data.items() if k != "table"}}

    cfg = get_table_config(data.get("profile"), data)
    result = validate_table_config(cfg)
    if result.errors:
        raise ConfigError("; ".join(result.errors))
    return cfg


def _is_number(x: Any) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)
