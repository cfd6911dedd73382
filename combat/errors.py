"""Exception types raised by the combat simulator."""
from typing import Optional


class CombatError(Exception):
    """Base class for recoverable simulator errors."""


class ParseError(CombatError, ValueError):
    """Raised when the input grid cannot be turned into a battle."""

    def __init__(self, message: str, row: Optional[int] = None, col: Optional[int] = None):
        self.row = row
        self.col = col
        if row is not None:
            where = f"row {row}" if col is None else f"row {row}, col {col}"
            message = f"{message} ({where})"
        super().__init__(message)


class PowerSearchExhausted(CombatError):
    """No attack power in the searched range produced a lossless victory."""

    def __init__(self, faction: str, min_power: int, max_power: int):
        self.faction = faction
        self.min_power = min_power
        self.max_power = max_power
        super().__init__(
            f"no lossless victory for {faction} with power in [{min_power}, {max_power}]"
        )


class InvariantViolation(RuntimeError):
    """Internal consistency failure. Indicates a bug, not bad input."""


class Stalemate(CombatError):
    """A full round passed with no movement and no attacks; the battle can never end."""

    def __init__(self, rounds: int):
        self.rounds = rounds
        super().__init__(f"battle is deadlocked after {rounds} rounds")
