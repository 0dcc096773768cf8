class CrapsError(Exception):
    """Base class for craps engine errors."""


class ValidationError(CrapsError, ValueError):
    """Raised when a table operation is rejected; nothing was mutated."""


class BetLimitError(ValidationError):
    """Raised when a bet amount falls outside the table or player limits."""


class InsufficientBankrollError(ValidationError):
    """Raised when the player's bankroll cannot cover the stake."""


class UnknownBetTypeError(ValidationError):
    """Raised when a bet type is not in the registry."""


class BetPhaseError(ValidationError):
    """Raised when a bet is not legal for the current game state."""


class InvalidNumbersError(ValidationError):
    """Raised when the numbers attached to a bet are not usable."""


class OddsLimitError(ValidationError):
    """Raised when an odds bet exceeds the max-odds multiple of its base bet."""


class SessionLimitError(ValidationError):
    """Raised when a player has hit their session loss limit."""


class ContractBetError(ValidationError):
    """Raised when removing a bet that may not be taken down."""


class PlayerNotFoundError(ValidationError, KeyError):
    """Raised for an unknown player id."""

    def __str__(self) -> str:
        # KeyError wraps its message in quotes
        return str(self.args[0]) if self.args else ""


class PlayerExistsError(ValidationError):
    """Raised when adding a player id that is already seated."""


class BetNotFoundError(ValidationError):
    """Raised when a player has no bet of the requested type."""


class DiceError(CrapsError):
    """Raised for invalid die faces."""


class DiceExhaustedError(DiceError):
    """Raised when a scripted dice source has no rolls left."""


class ConfigError(CrapsError):
    """Raised for an unusable table configuration."""
