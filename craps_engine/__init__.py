# craps_engine/__init__.py
"""
Craps Engine: a single in-process craps table with a game state machine, canonical
bet registry, per-roll resolution engine and player bankroll ledger.
"""

from .dice import Roll, DiceSource, SecureDice, SeededDice, FixedDice, make_roll
from .state import GameState, Point, StateMachine, Transition
from .registry import (
    BetCategory,
    WorkingBehavior,
    CanonicalBetDefinition,
    BetRegistry,
    default_registry,
    get_bet_definition,
    get_all_bet_types,
    get_bets_by_category,
    get_one_roll_bets,
    get_always_working_bets,
    get_bets_by_house_edge,
)
from .bet_types import normalize_bet_type
from .ledger import Bet, Player, LedgerEntry
from .resolution import ResolutionEngine, Outcome, OutcomeKind
from .table import Table
from .config import TableConfig, get_table_config, load_table_config, validate_table_config
from .errors import (
    CrapsError,
    ValidationError,
    BetLimitError,
    InsufficientBankrollError,
    UnknownBetTypeError,
    BetPhaseError,
    InvalidNumbersError,
    OddsLimitError,
    SessionLimitError,
    ContractBetError,
    PlayerNotFoundError,
    PlayerExistsError,
    BetNotFoundError,
    DiceError,
    DiceExhaustedError,
    ConfigError,
)
from .logging_utils import setup_logging

__version__ = "0.1.0"

__all__ = [
    # Dice
    "Roll",
    "DiceSource",
    "SecureDice",
    "SeededDice",
    "FixedDice",
    "make_roll",
    # State machine
    "GameState",
    "Point",
    "StateMachine",
    "Transition",
    # Registry
    "BetCategory",
    "WorkingBehavior",
    "CanonicalBetDefinition",
    "BetRegistry",
    "default_registry",
    "get_bet_definition",
    "get_all_bet_types",
    "get_bets_by_category",
    "get_one_roll_bets",
    "get_always_working_bets",
    "get_bets_by_house_edge",
    "normalize_bet_type",
    # Ledger / table
    "Bet",
    "Player",
    "LedgerEntry",
    "ResolutionEngine",
    "Outcome",
    "OutcomeKind",
    "Table",
    # Config
    "TableConfig",
    "get_table_config",
    "load_table_config",
    "validate_table_config",
    # Errors
    "CrapsError",
    "ValidationError",
    "BetLimitError",
    "InsufficientBankrollError",
    "UnknownBetTypeError",
    "BetPhaseError",
    "InvalidNumbersError",
    "OddsLimitError",
    "SessionLimitError",
    "ContractBetError",
    "PlayerNotFoundError",
    "PlayerExistsError",
    "BetNotFoundError",
    "DiceError",
    "DiceExhaustedError",
    "ConfigError",
    # Logging
    "setup_logging",
]
