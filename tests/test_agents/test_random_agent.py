"""
Tests for the bundled bots and the action provider interface.
"""

import random

from splitpot.agents import (
    AggressiveActionProvider, BaseAgent, CallingActionProvider, RandomActionProvider,
)
from splitpot.core.game import PlayerAction
from splitpot.core.rules import ActionType


class RecordingAgent(BaseAgent):
    """Checks or folds and remembers what it saw."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def observe(self, game_state):
        self.seen.append(game_state)

    def act(self, game_state, legal_actions):
        types = [a["type"] for a in legal_actions]
        return PlayerAction(ActionType.CHECK if ActionType.CHECK in types else ActionType.FOLD)


class TestRandomActionProvider:
    """RandomActionProvider only returns legal actions."""

    def test_always_legal_preflop(self, six_player_plo8_game):
        game = six_player_plo8_game
        game.start_hand()
        game.prepare_betting_round()
        player = game.current_player

        for seed in range(100):
            provider = RandomActionProvider(random.Random(seed), raise_probability=0.5)
            game.validate_action(player, provider.get_action(game, player))

    def test_never_folds_when_checking_is_free(self, heads_up_game):
        game = heads_up_game
        game.start_hand()
        game.prepare_betting_round()
        game.process_action(game.current_player, PlayerAction(ActionType.CALL))
        game.advance_turn()
        bb = game.current_player

        for seed in range(50):
            provider = RandomActionProvider(random.Random(seed), fold_probability=1.0)
            assert provider.get_action(game, bb).action_type != ActionType.FOLD

    def test_default_name(self):
        assert RandomActionProvider(random.Random(0)).name == "RandomActionProvider"
        assert repr(CallingActionProvider(name="Bob")) == "CallingActionProvider(Bob)"


class TestCallingActionProvider:
    def test_calls_then_checks(self, heads_up_game):
        game = heads_up_game
        game.start_hand()
        game.prepare_betting_round()
        provider = CallingActionProvider()

        alice, bob = game.players
        assert provider.get_action(game, alice).action_type == ActionType.CALL
        game.process_action(alice, PlayerAction(ActionType.CALL))
        game.advance_turn()
        assert provider.get_action(game, bob).action_type == ActionType.CHECK


class TestAggressiveActionProvider:
    def test_raises_within_limits(self, three_player_game):
        game = three_player_game
        game.start_hand()
        game.prepare_betting_round()
        player = game.current_player

        action = AggressiveActionProvider().get_action(game, player)
        assert action == PlayerAction(ActionType.RAISE, 80)
        game.validate_action(player, action)

    def test_capped_at_stack(self, three_player_game):
        game = three_player_game
        game.start_hand()
        game.prepare_betting_round()
        player = game.current_player

        action = AggressiveActionProvider(raise_multiplier=1000.0).get_action(game, player)
        assert action.amount == 1000


class TestBaseAgent:
    def test_observes_own_view(self, heads_up_game):
        game = heads_up_game
        game.start_hand()
        game.prepare_betting_round()
        agent = RecordingAgent()

        action = agent.get_action(game, game.current_player)

        assert action.action_type == ActionType.FOLD
        state = agent.seen[0]
        assert len(state["hand"]) == 2
        assert [a["type"] for a in state["legal_actions"]] == ["FOLD", "CALL", "RAISE"]
