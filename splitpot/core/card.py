"""
Cards and the deck.

Rank values are face values (Two = 2 ... Ace = 14), so a tuple of ranks is
directly usable as a tie-break key. Code that plays the Ace low (wheel and
skip straights, low hands) reads ``Rank.low_value`` instead.

A deck never seeds itself: ``Deck.shuffle`` takes the game's
``random.Random`` so a seeded game deals the same cards every time.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List


class Suit(IntEnum):
    """Card suits, in the deck's canonical order."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


class Rank(IntEnum):
    """Card ranks, valued by face (Ace high)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def low_value(self) -> int:
        """Value used when the Ace plays low (Ace = 1)."""
        return 1 if self is Rank.ACE else int(self)


SUIT_CHARS: Dict[Suit, str] = dict(zip(Suit, "cdhs"))
SUIT_SYMBOLS: Dict[Suit, str] = dict(zip(Suit, "♣♦♥♠"))
RANK_CHARS: Dict[Rank, str] = dict(zip(Rank, "23456789TJQKA"))
RANK_NAMES: Dict[Rank, str] = dict(zip(Rank, (
    "Two", "Three", "Four", "Five", "Six", "Seven", "Eight",
    "Nine", "Ten", "Jack", "Queen", "King", "Ace",
)))

_RANK_BY_CHAR = {char: rank for rank, char in RANK_CHARS.items()}
_SUIT_BY_TEXT = {
    **{char: suit for suit, char in SUIT_CHARS.items()},
    **{symbol: suit for suit, symbol in SUIT_SYMBOLS.items()},
}


@dataclass(frozen=True)
class Card:
    """
    An immutable playing card.

    Two cards are equal when rank and suit match. ``<`` looks at the rank
    only, which is what sorting a hand needs.

    Build cards from enums, ``Card(Rank.ACE, Suit.SPADES)``, or from text,
    ``Card.from_string("As")`` (also "A♠" and "10s").
    """
    rank: Rank
    suit: Suit

    def __post_init__(self):
        object.__setattr__(self, "rank", Rank(self.rank))
        object.__setattr__(self, "suit", Suit(self.suit))

    @classmethod
    def from_string(cls, text: str) -> Card:
        """
        Parse one card: a rank character ("2"-"9", "T", "J", "Q", "K", "A",
        or "10") followed by a suit letter (c/d/h/s) or symbol.

        Raises:
            ValueError: Unknown rank or suit
        """
        text = text.strip()
        rank_text, suit_text = ("T", text[2:]) if text.startswith("10") else (text[:1].upper(), text[1:])

        rank = _RANK_BY_CHAR.get(rank_text)
        suit = _SUIT_BY_TEXT.get(suit_text.lower())
        if rank is None or suit is None:
            raise ValueError(f"Not a card: {text!r}")
        return cls(rank, suit)

    def __lt__(self, other: Card) -> bool:
        return self.rank < other.rank

    def __repr__(self) -> str:
        return f"Card({self.short_str})"

    def __str__(self) -> str:
        return RANK_CHARS[self.rank] + SUIT_SYMBOLS[self.suit]

    @property
    def short_str(self) -> str:
        """ASCII form, e.g. 'As'."""
        return RANK_CHARS[self.rank] + SUIT_CHARS[self.suit]

    def to_dict(self) -> dict:
        """Plain-data form for display sinks."""
        red = self.suit in (Suit.HEARTS, Suit.DIAMONDS)
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "text": str(self),
            "color": "red" if red else "black",
        }


class Deck:
    """
    The 52 cards of one hand, owned by one game.

    Usage:
        deck = Deck()
        deck.shuffle(rng)
        hole = deck.deal(4)
        deck.burn()
        board = deck.deal(3)
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        """Restore all 52 cards in canonical order (by rank, then suit)."""
        self._cards: List[Card] = [Card(rank, suit) for rank in Rank for suit in Suit]
        self._dealt: List[Card] = []

    def shuffle(self, rng: random.Random) -> None:
        rng.shuffle(self._cards)

    def deal(self, n: int = 1) -> List[Card]:
        """
        Take n cards off the top.

        Raises:
            ValueError: Fewer than n cards left
        """
        if n > len(self._cards):
            raise ValueError(f"Deck has {len(self._cards)} cards, cannot deal {n}")
        cards, self._cards = self._cards[:n], self._cards[n:]
        self._dealt += cards
        return cards

    def deal_one(self) -> Card:
        return self.deal(1)[0]

    def burn(self) -> Card:
        """Discard the top card face down."""
        return self.deal_one()

    @property
    def remaining(self) -> int:
        return len(self._cards)

    @property
    def dealt_cards(self) -> List[Card]:
        """Every card taken off the deck so far, burns included."""
        return list(self._dealt)

    def __len__(self) -> int:
        return self.remaining

    def __repr__(self) -> str:
        return f"Deck(remaining={self.remaining})"


def parse_cards(text: str) -> List[Card]:
    """
    Parse a run of cards, either space-separated ("As Kh Td", "A♠ K♥") or
    packed two characters apiece ("AsKhTd").

    Raises:
        ValueError: Any token is not a card
    """
    text = text.strip()
    if not text:
        return []
    if " " in text:
        return [Card.from_string(token) for token in text.split()]
    if len(text) % 2:
        raise ValueError(f"Cannot split {text!r} into two-character cards")
    return [Card.from_string(text[i:i + 2]) for i in range(0, len(text), 2)]
