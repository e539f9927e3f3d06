"""
splitpot - Multi-variant poker rules engine

Hold'em, Omaha and Sviten rules with:
- Rule-ordered hand evaluation, including hi/lo splits and skip straights
- Pot-limit and no-limit betting rounds
- Side pot settlement with exact chip conservation

Usage:
    from splitpot.core import PokerGame, get_rules, play_hand
    from splitpot.agents import RandomActionProvider
"""

__version__ = "0.1.0"

from splitpot.core.card import Card, Deck
from splitpot.core.player import Player
from splitpot.core.game import PokerGame
from splitpot.core.hand import evaluate
from splitpot.core.rules import get_rules

__all__ = [
    "Card",
    "Deck",
    "Player",
    "PokerGame",
    "evaluate",
    "get_rules",
    "__version__",
]
