"""
splitpot core - pure Python poker rules engine.

Hand evaluation, betting rounds and pot settlement for several variants,
with no I/O of its own.
"""

from splitpot.core.card import Card, Deck, Rank, Suit, parse_cards
from splitpot.core.player import Player, PlayerStatus
from splitpot.core.rules import (
    ActionType, BettingLimit, GamePhase, HandCategory, HoleCardConstraint,
    RuleDescriptor, get_rules, NLH, PLO, PLO8, PLS, PLS7,
)
from splitpot.core.hand import (
    Comparison, HandEvaluation, HandResult, HandStrengthEvaluator,
    StandardHandEvaluator, compare_hands, compare_low_hands, evaluate,
)
from splitpot.core.odds import OutsInfo, calculate_outs, estimate_equity
from splitpot.core.betting import BettingLimitCalculator, NoLimitCalculator, PotLimitCalculator
from splitpot.core.pot import PotTier, SettlementResult
from splitpot.core.game import PokerGame, PlayerAction, ActionEvent, BlindEvent
from splitpot.core.runner import play_hand

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "parse_cards",
    "Player",
    "PlayerStatus",
    "ActionType",
    "BettingLimit",
    "GamePhase",
    "HandCategory",
    "HoleCardConstraint",
    "RuleDescriptor",
    "get_rules",
    "NLH",
    "PLO",
    "PLO8",
    "PLS",
    "PLS7",
    "Comparison",
    "HandEvaluation",
    "HandResult",
    "HandStrengthEvaluator",
    "StandardHandEvaluator",
    "compare_hands",
    "compare_low_hands",
    "evaluate",
    "OutsInfo",
    "calculate_outs",
    "estimate_equity",
    "BettingLimitCalculator",
    "NoLimitCalculator",
    "PotLimitCalculator",
    "PotTier",
    "SettlementResult",
    "PokerGame",
    "PlayerAction",
    "ActionEvent",
    "BlindEvent",
    "play_hand",
]
