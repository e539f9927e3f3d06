"""
Action provider interface.

The engine asks an action provider for every decision a seat has to make.
A provider may be a bot, a human behind a terminal or a remote client; the
engine only relies on ``get_action`` returning one ``PlayerAction`` (or
raising ``TimeoutError``, which the runner maps to a default action).

Usage:
    class MyAgent(BaseAgent):
        def act(self, game_state, legal_actions):
            return PlayerAction(ActionType.CALL)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from splitpot.core.game import PlayerAction, PokerGame
from splitpot.core.player import Player


class ActionProvider(ABC):
    """Anything that can decide an action for a player."""

    @abstractmethod
    def get_action(self, game: PokerGame, player: Player) -> PlayerAction:
        """
        Decide the next action for ``player``.

        Args:
            game: Game in progress (read-only for providers)
            player: The player to act

        Returns:
            PlayerAction; BET/RAISE amounts are totals within
            ``game.calculate_betting_limits(player)``

        Raises:
            TimeoutError: No decision was made in time
        """


class BaseAgent(ActionProvider):
    """
    Base class for bots working from a state snapshot.

    ``get_action`` builds the snapshot and legal action list from the game
    and hands them to ``act``; subclasses only implement ``act``.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the game state before acting.

        Override if the agent keeps beliefs or history between decisions.
        """

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]],
    ) -> PlayerAction:
        """
        Choose an action given the current game state.

        Args:
            game_state: ``PokerGame.get_state`` snapshot for this player
            legal_actions: ``PokerGame.legal_actions`` for this player:
                - type: ActionType
                - amount: Chips needed (for CALL)
                - min/max: Valid totals (for BET/RAISE)
        """

    def get_action(self, game: PokerGame, player: Player) -> PlayerAction:
        game_state = game.get_state(for_player=player.name)
        self.observe(game_state)
        return self.act(game_state, game.legal_actions(player))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
