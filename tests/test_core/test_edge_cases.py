"""
Tests for all-in edge cases.

These tests cover:
- Short all-in raises that do not reopen the action
- Skipping betting rounds when nobody can bet
- All-in run-outs to showdown with chip conservation
"""

import pytest
from splitpot.core.errors import IllegalActionError
from splitpot.core.game import PlayerAction
from splitpot.core.player import PlayerStatus
from splitpot.core.rules import ActionType, GamePhase


def act(game, action_type, amount=0):
    player = game.current_player
    action = PlayerAction(action_type, amount)
    game.validate_action(player, action)
    result = game.process_action(player, action)
    game.advance_turn()
    return result


def limp_to_flop(game):
    """Everyone calls the big blind, the big blind checks, the flop is dealt."""
    game.start_hand()
    game.prepare_betting_round()
    while not game.is_betting_round_over():
        owed = game.amount_to_call(game.current_player)
        act(game, ActionType.CALL if owed else ActionType.CHECK)
    game.advance_phase()
    game.prepare_betting_round()


class TestShortAllIn:
    """An all-in below a full raise moves the bet but does not reopen the action."""

    def test_short_all_in_does_not_reopen(self, three_player_game):
        game = three_player_game
        alice, bob, carol = game.players
        limp_to_flop(game)
        assert game.current_player is bob

        aggressive, _ = act(game, ActionType.BET, 100)
        assert aggressive

        # Carol has only 150 behind: a full raise would be to 200
        carol.chips = 150
        aggressive, event = act(game, ActionType.RAISE, 150)
        assert not aggressive
        assert event.description == "Raise to 150 (All-in)"
        assert carol.status == PlayerStatus.ALL_IN
        assert game.state.bet_to_call == 150
        assert game.state.last_raise_amount == 100
        assert game.state.aggressor is bob

        # Alice has not acted yet and may still raise
        assert game.current_player is alice
        assert game.can_raise(alice)
        act(game, ActionType.CALL)

        # Bob already acted: call or fold only
        assert game.current_player is bob
        assert not game.can_raise(bob)
        assert [a["type"] for a in game.legal_actions(bob)] == [ActionType.FOLD, ActionType.CALL]
        with pytest.raises(IllegalActionError):
            game.validate_action(bob, PlayerAction(ActionType.RAISE, 400))
        act(game, ActionType.CALL)

        assert game.is_betting_round_over()

    def test_all_in_below_the_call(self, three_player_game):
        """An all-in that does not cover the bet is a call for less."""
        game = three_player_game
        alice, bob, carol = game.players
        limp_to_flop(game)
        act(game, ActionType.BET, 100)

        carol.chips = 60
        assert not game.can_raise(carol)
        aggressive, event = game.process_action(carol, PlayerAction(ActionType.RAISE, 60))
        assert not aggressive
        assert event.description == "Call 60 (All-in)"
        assert game.state.bet_to_call == 100

    def test_full_all_in_raise_reopens(self, three_player_game):
        game = three_player_game
        alice, bob, carol = game.players
        limp_to_flop(game)
        act(game, ActionType.BET, 100)

        carol.chips = 250
        aggressive, _ = act(game, ActionType.RAISE, 250)
        assert aggressive
        assert game.state.last_raise_amount == 150
        act(game, ActionType.CALL)
        assert game.can_raise(bob)


class TestSkipBettingRound:
    """Tests for should_skip_betting_round."""

    def test_lone_player_facing_all_in_must_act(self, heads_up_game):
        game = heads_up_game
        game.start_hand()
        game.prepare_betting_round()
        act(game, ActionType.RAISE, 1000)
        assert game.players[0].status == PlayerStatus.ALL_IN
        assert not game.should_skip_betting_round()
        assert not game.is_betting_round_over()

    def test_skip_when_one_player_can_act(self, heads_up_game):
        game = heads_up_game
        alice, bob = game.players
        alice.chips, bob.chips = 500, 1500
        game.start_hand()
        game.prepare_betting_round()
        act(game, ActionType.RAISE, 500)
        act(game, ActionType.CALL)
        assert game.is_betting_round_over()
        assert bob.status == PlayerStatus.PLAYING

        game.advance_phase()
        game.prepare_betting_round()
        assert game.should_skip_betting_round()

        game.deal_to_showdown()
        results = game.distribute_pot()
        assert sum(r.amount_won for r in results) == 1000
        assert alice.chips + bob.chips == 2000

    def test_all_in_and_call_runs_out(self, heads_up_game):
        game = heads_up_game
        game.start_hand()
        game.prepare_betting_round()
        act(game, ActionType.RAISE, 1000)
        act(game, ActionType.CALL)
        assert all(p.status == PlayerStatus.ALL_IN for p in game.players)

        game.advance_phase()
        game.prepare_betting_round()
        assert game.should_skip_betting_round()
        game.deal_to_showdown()
        assert game.phase == GamePhase.SHOWDOWN
        assert len(game.community_cards) == 5

        game.distribute_pot()
        assert game.pot == 0
        assert sum(p.chips for p in game.players) == 2000
        game.assert_chips_conserved()

    def test_no_skip_with_two_active_players(self, three_player_game):
        game = three_player_game
        limp_to_flop(game)
        assert not game.should_skip_betting_round()
