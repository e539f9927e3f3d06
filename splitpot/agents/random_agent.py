"""
Simple bots.

Useful for testing game logic, simulations and as baselines. None of them
looks at its cards.
"""

import random
from typing import Any, Dict, List, Optional

from splitpot.agents.base import BaseAgent
from splitpot.core.game import PlayerAction
from splitpot.core.rules import ActionType


_AGGRESSIVE = (ActionType.BET, ActionType.RAISE)


def _find(legal_actions: List[Dict[str, Any]], *types: ActionType) -> Optional[Dict[str, Any]]:
    return next((a for a in legal_actions if a["type"] in types), None)


class RandomActionProvider(BaseAgent):
    """
    Selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to bet/raise instead of checking/calling
    """

    def __init__(
        self,
        rng: random.Random,
        name: Optional[str] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
    ):
        """
        Args:
            rng: Random source (shared with the game or separate, but explicit)
            name: Optional name
            fold_probability: Probability of folding (0-1)
            raise_probability: Probability of raising vs calling (0-1)
        """
        super().__init__(name)
        self.rng = rng
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability

    def act(self, game_state, legal_actions):
        roll = self.rng.random()

        # Folding is never chosen when checking is free
        if _find(legal_actions, ActionType.CALL) and roll < self.fold_probability:
            return PlayerAction(ActionType.FOLD)

        aggressive = _find(legal_actions, *_AGGRESSIVE)
        if aggressive and roll < self.fold_probability + self.raise_probability:
            amount = self.rng.randint(aggressive["min"], aggressive["max"])
            return PlayerAction(aggressive["type"], amount)

        passive = _find(legal_actions, ActionType.CHECK, ActionType.CALL)
        if passive:
            return PlayerAction(passive["type"])
        return PlayerAction(ActionType.FOLD)


class CallingActionProvider(BaseAgent):
    """Always checks or calls."""

    def act(self, game_state, legal_actions):
        passive = _find(legal_actions, ActionType.CHECK, ActionType.CALL)
        if passive:
            return PlayerAction(passive["type"])
        return PlayerAction(ActionType.FOLD)


class AggressiveActionProvider(BaseAgent):
    """
    Bets or raises whenever allowed, otherwise calls.

    Useful for exercising raise logic and side pots.
    """

    def __init__(self, name: Optional[str] = None, raise_multiplier: float = 2.0):
        """
        Args:
            name: Optional name
            raise_multiplier: Raise size relative to the minimum raise
        """
        super().__init__(name)
        self.raise_multiplier = raise_multiplier

    def act(self, game_state, legal_actions):
        aggressive = _find(legal_actions, *_AGGRESSIVE)
        if aggressive:
            amount = int(aggressive["min"] * self.raise_multiplier)
            amount = max(aggressive["min"], min(amount, aggressive["max"]))
            return PlayerAction(aggressive["type"], amount)

        passive = _find(legal_actions, ActionType.CHECK, ActionType.CALL)
        if passive:
            return PlayerAction(passive["type"])
        return PlayerAction(ActionType.FOLD)
