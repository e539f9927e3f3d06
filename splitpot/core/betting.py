"""
Betting limit strategies.

A calculator answers one question for the player to act: what are the
smallest and largest totals their current bet may be raised to? Amounts are
totals for the round (call included), not increments.

Minimum raise:
    bet_to_call + max(last_raise_amount, bet_to_call, big_blind if nobody has bet)

Pot-limit maximum:
    bet_to_call + (pot + amount_to_call), i.e. the pot after a notional call

No-limit maximum:
    the player's whole stack

Both bounds are clamped to the player's all-in total. When the stack cannot
reach the minimum, the only legal raise is all-in for less.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Optional, Tuple

from splitpot.core.errors import RuleConfigError
from splitpot.core.player import Player
from splitpot.core.rules import BettingLimit

if TYPE_CHECKING:
    from splitpot.core.game import PokerGame


def min_raise_total(bet_to_call: int, last_raise_amount: int, big_blind: int) -> int:
    """
    Smallest legal total for a full bet or raise.

    Args:
        bet_to_call: Current highest bet in the round
        last_raise_amount: Size of the last full raise (the increment)
        big_blind: Big blind amount, the minimum opening bet

    Returns:
        Minimum total bet amount (including the call)
    """
    increment = max(last_raise_amount, bet_to_call, big_blind if bet_to_call == 0 else 0)
    return bet_to_call + increment


class BettingLimitCalculator(ABC):
    """Computes the legal raise range for the player to act."""

    @abstractmethod
    def calculate_limits(
        self,
        game: PokerGame,
        player: Optional[Player] = None,
    ) -> Tuple[int, int]:
        """
        Return (min_raise_total, max_raise_total) for ``player``.

        ``player`` defaults to the game's current actor.
        """

    @staticmethod
    def _clamp(min_total: int, max_total: int, player: Player) -> Tuple[int, int]:
        all_in = player.amount_all_in
        max_total = min(max_total, all_in)
        if min_total > all_in:
            # Short stack: the only raise left is all-in for less
            min_total = max_total = all_in
        if max_total < min_total:
            min_total = max_total
        return min_total, max_total


class PotLimitCalculator(BettingLimitCalculator):
    """Raises capped at the size of the pot after calling."""

    def calculate_limits(self, game, player=None):
        player = player or game.current_player
        state = game.state
        amount_to_call = max(0, state.bet_to_call - player.current_bet)

        min_total = min_raise_total(state.bet_to_call, state.last_raise_amount, game.big_blind)
        max_total = state.bet_to_call + (game.pot + amount_to_call)
        return self._clamp(min_total, max_total, player)


class NoLimitCalculator(BettingLimitCalculator):
    """Raises capped only by the player's stack."""

    def calculate_limits(self, game, player=None):
        player = player or game.current_player
        state = game.state

        min_total = min_raise_total(state.bet_to_call, state.last_raise_amount, game.big_blind)
        return self._clamp(min_total, player.amount_all_in, player)


def calculator_for(betting_limit: BettingLimit) -> BettingLimitCalculator:
    """Pick the calculator for a variant's betting structure."""
    if betting_limit == BettingLimit.POT_LIMIT:
        return PotLimitCalculator()
    if betting_limit == BettingLimit.NO_LIMIT:
        return NoLimitCalculator()
    raise RuleConfigError(f"Unsupported betting limit: {betting_limit}")
