"""
Pytest configuration and shared fixtures for splitpot tests.
"""

import random

import pytest
from splitpot.core.card import Card, Deck, Rank, Suit, parse_cards
from splitpot.core.game import PokerGame
from splitpot.core.player import Player, PlayerStatus
from splitpot.core.rules import GamePhase, NLH, PLO8


@pytest.fixture
def rng():
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def deck():
    """Create a fresh unshuffled deck."""
    return Deck()


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(name="test_player", chips=1000, seat=0)


@pytest.fixture
def heads_up_game():
    """Create a 2-player No-Limit Hold'em game (blinds 10/20, 1000 chips)."""
    return PokerGame(["Alice", "Bob"], rules=NLH, rng=random.Random(1))


@pytest.fixture
def three_player_game():
    """Create a 3-player No-Limit Hold'em game."""
    return PokerGame(["Alice", "Bob", "Carol"], rules=NLH, rng=random.Random(2))


@pytest.fixture
def six_player_plo8_game():
    """Create a 6-player Pot-Limit Omaha Hi-Lo game."""
    names = ["P0", "P1", "P2", "P3", "P4", "P5"]
    return PokerGame(names, rules=PLO8, rng=random.Random(3))


@pytest.fixture
def showdown_game():
    """
    Factory for a game staged at showdown.

    Usage:
        game = showdown_game(NLH, hands=["Ac Ad", "Kc Kd"], board="2c 7d 9h Js 3s",
                             bets=[100, 100], folded=[])

    Every player starts with 10000 chips; bets are moved into the pot so the
    chip total is conserved. Players whose bet empties their stack are all-in.
    """
    def _make(rules, hands, board, bets, folded=(), dealer_index=0, starting_chips=10000):
        names = [f"P{i}" for i in range(len(hands))]
        game = PokerGame(names, rules=rules, rng=random.Random(0), starting_chips=starting_chips)
        for player, hand, bet in zip(game.players, hands, bets):
            player.hole_cards = parse_cards(hand)
            player.chips -= bet
            player.total_bet = bet
            player.status = PlayerStatus.ALL_IN if player.chips == 0 else PlayerStatus.PLAYING
        for index in folded:
            game.players[index].status = PlayerStatus.FOLDED
        game.community_cards = parse_cards(board)
        game.pot = sum(bets)
        game.dealer_index = dealer_index
        game.phase = GamePhase.SHOWDOWN
        return game

    return _make


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
