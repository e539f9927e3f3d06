"""
Tests for pydantic rule, game and action schemas.
"""

import random

import pytest
from pydantic import ValidationError
from splitpot.core.errors import IllegalActionError, RuleConfigError
from splitpot.core.game import PlayerAction, PokerGame
from splitpot.core.rules import ActionType, HandCategory, HoleCardConstraint, PLO8, PLS7
from splitpot.schemas import ActionRequest, GameConfig, RuleConfig


SVITEN_SPECIAL = {
    "name": "Pot-Limit Sviten Special",
    "abbreviation": "pls7",
    "betting_limit": "pot_limit",
    "hole_cards": {"count": 3},
    "hand_rankings": {
        "custom_rankings": [
            {"name": "skip_straight_flush", "insert_after": "royal_flush"},
            {"name": "skip_straight", "insert_after": "flush"},
        ],
    },
    "low_hand": {"enabled": True, "max_rank": 7},
}


class TestRuleConfig:
    """Tests for building rule descriptors from rule files."""

    def test_matches_preset(self):
        rules = RuleConfig.model_validate(SVITEN_SPECIAL).to_rule_descriptor()
        assert rules == PLS7
        assert rules.strength_of(HandCategory.SKIP_STRAIGHT) == PLS7.strength_of(HandCategory.SKIP_STRAIGHT)

    def test_omaha_hi_lo(self):
        config = RuleConfig(
            name="Pot-Limit Omaha Hi-Lo",
            abbreviation="PLO8",
            betting_limit="pot_limit",
            hole_cards={"count": 4, "use_constraint": "exact", "use_count": 2},
            low_hand={"enabled": True},
        )
        rules = config.to_rule_descriptor()
        assert rules == PLO8
        assert rules.hole_card_constraint == HoleCardConstraint.EXACT

    def test_exact_without_use_count(self):
        with pytest.raises(ValidationError):
            RuleConfig(
                name="Broken", abbreviation="BRK", betting_limit="pot_limit",
                hole_cards={"count": 4, "use_constraint": "exact"},
            )

    def test_unknown_category(self):
        data = dict(SVITEN_SPECIAL, hand_rankings={
            "custom_rankings": [{"name": "five_of_a_kind", "insert_after": "royal_flush"}],
        })
        with pytest.raises(ValidationError):
            RuleConfig.model_validate(data)

    def test_unknown_betting_limit(self):
        with pytest.raises(ValidationError):
            RuleConfig.model_validate(dict(SVITEN_SPECIAL, betting_limit="fixed_limit"))

    def test_low_max_rank_range(self):
        with pytest.raises(ValidationError):
            RuleConfig.model_validate(dict(SVITEN_SPECIAL, low_hand={"enabled": True, "max_rank": 4}))

    def test_duplicate_custom_category(self):
        data = dict(SVITEN_SPECIAL, hand_rankings={
            "custom_rankings": [{"name": "straight", "insert_after": "flush"}],
        })
        config = RuleConfig.model_validate(data)
        with pytest.raises(RuleConfigError):
            config.to_rule_descriptor()


class TestGameConfig:
    """Tests for table settings."""

    def test_create_game(self):
        config = GameConfig(
            player_names=["A", "B", "C"], starting_chips=500,
            small_blind=5, big_blind=10, blind_up_interval=4,
        )
        game = config.create_game(PLO8, random.Random(0))
        assert isinstance(game, PokerGame)
        assert game.num_players == 3
        assert game.total_chips == 1500
        assert (game.small_blind, game.big_blind) == (5, 10)
        assert game.blind_up_interval == 4

    def test_defaults(self):
        config = GameConfig(player_names=["A", "B"])
        assert (config.starting_chips, config.small_blind, config.big_blind) == (1000, 10, 20)

    @pytest.mark.parametrize("names", [["A"], ["A", "A"], [f"P{i}" for i in range(11)]])
    def test_invalid_players(self, names):
        with pytest.raises(ValidationError):
            GameConfig(player_names=names)

    def test_small_blind_above_big_blind(self):
        with pytest.raises(ValidationError):
            GameConfig(player_names=["A", "B"], small_blind=30, big_blind=20)


class TestActionRequest:
    """Tests for incoming action requests."""

    def test_raise(self):
        request = ActionRequest(action_type="raise", amount=100)
        assert request.to_player_action() == PlayerAction(ActionType.RAISE, 100)

    def test_normalizes_case_and_whitespace(self):
        assert ActionRequest(action_type=" check ").action_type == ActionType.CHECK

    def test_bet_needs_amount(self):
        with pytest.raises(IllegalActionError):
            ActionRequest(action_type="BET").to_player_action()

    def test_negative_amount(self):
        with pytest.raises(ValidationError):
            ActionRequest(action_type="CALL", amount=-5)

    def test_unknown_action(self):
        with pytest.raises(ValidationError):
            ActionRequest(action_type="JUMP")
