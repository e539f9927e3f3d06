"""
Exception types raised by the poker engine.

Normal game outcomes (no qualifying low, a single remaining player, a short
all-in) are plain return values. Exceptions are reserved for invalid
configuration, rejected actions and broken internal invariants.
"""


class PokerError(Exception):
    """Base class for all engine errors."""


class RuleConfigError(PokerError, ValueError):
    """A rule descriptor or game configuration is invalid."""


class IllegalActionError(PokerError):
    """
    An action was rejected at the action-provider boundary.

    This is a retryable failure: the caller may ask the provider again.
    """

    def __init__(self, message: str, player_name: str = "", action=None):
        super().__init__(message)
        self.player_name = player_name
        self.action = action


class GameStateError(PokerError):
    """An operation was invoked in a state where it is not allowed."""


class EmptyShowdownError(PokerError):
    """Settlement was invoked with nobody left to win the pot."""


class PotAccountingError(PokerError):
    """Awarded chips do not add up to the pot being settled."""

    def __init__(self, expected: int, actual: int):
        super().__init__(f"Pot accounting mismatch: pot={expected}, awarded={actual}")
        self.expected = expected
        self.actual = actual
