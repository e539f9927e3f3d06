"""
Hand evaluation for multi-variant poker.

The evaluator works category-first: it walks the variant's hand-rank order
from strongest to weakest and returns the first category a finder can build
from the pool. Because the order is total, the first hit is the best hand
and no cross-category comparison is needed.

Every result carries a tie-break tuple laid out per category:

    Royal / straight flush / skip straight (flush) / straight: (top,)
    Four of a kind:   (quad, kicker)
    Full house:       (trips, pair)
    Flush:            (five ranks, descending)
    Three of a kind:  (trips, k1, k2)
    Two pair:         (high pair, low pair, kicker)
    One pair:         (pair, k1, k2, k3)
    High card:        (five ranks, descending)

Wheel straights (A-2-3-4-5) report Five as their top card. Skip straights
are five ranks spaced two apart with a top card of Nine or better; the
lowest one, 9-7-5-3-A, plays the Ace low.

Low hands (hi/lo variants) need five distinct ranks at or below the
variant's maximum with the Ace counting as 1. Their tie-break is the five
low values in descending order, and the smaller sequence wins: 7-5-4-3-A
(7,5,4,3,1) beats 7-6-4-3-2 (7,6,4,3,2).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from splitpot.core.card import Card, Rank, Suit, RANK_CHARS, RANK_NAMES
from splitpot.core.combinations import generator_for
from splitpot.core.rules import (
    HandCategory, HoleCardConstraint, RuleDescriptor, HAND_SIZE,
)


class Comparison(IntEnum):
    """Outcome of comparing two hands from the first hand's point of view."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class HandResult:
    """
    A five-card hand with its category and tie-break key.

    Attributes:
        category: Hand category, or None for a low hand
        cards: The five cards making the hand
        tie_break: Category-specific comparison key (see module docstring)
    """
    category: Optional[HandCategory]
    cards: Tuple[Card, ...]
    tie_break: Tuple[int, ...]

    @property
    def is_low(self) -> bool:
        return self.category is None

    def describe(self) -> str:
        """Human-readable description, e.g. 'Full House, Aces full of Kings'."""
        if self.category is None:
            return "-".join(_low_char(v) for v in self.tie_break)
        return _describe(self.category, self.tie_break)

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class HandEvaluation:
    """
    Best high hand and, for hi/lo variants, best qualifying low hand.

    ``high`` is None only when the player does not hold enough cards to form
    a hand at all, which is a distinct outcome from holding a weak hand.
    """
    high: Optional[HandResult]
    low: Optional[HandResult] = None

    @property
    def has_hand(self) -> bool:
        return self.high is not None

    @property
    def insufficient_cards(self) -> bool:
        return self.high is None


NO_HAND = HandEvaluation(high=None)


# ============= Pool analysis =============

class _Pool:
    """Cards grouped by rank and suit, highest rank first."""

    def __init__(self, cards: Sequence[Card]):
        self.cards: List[Card] = sorted(cards, key=lambda c: (c.rank, c.suit), reverse=True)
        self.by_rank: Dict[Rank, List[Card]] = defaultdict(list)
        self.by_suit: Dict[Suit, List[Card]] = defaultdict(list)
        for card in self.cards:
            self.by_rank[card.rank].append(card)
            self.by_suit[card.suit].append(card)

    def ranks_with(self, count: int) -> List[Rank]:
        """Ranks held at least ``count`` times, highest first."""
        return sorted((r for r, cs in self.by_rank.items() if len(cs) >= count), reverse=True)

    def kickers(self, exclude: Sequence[Rank], n: int) -> List[Card]:
        """Highest ``n`` cards whose rank is not already used."""
        return [c for c in self.cards if c.rank not in exclude][:n]


Found = Tuple[Tuple[Card, ...], Tuple[int, ...]]


def _find_sequence(cards: Sequence[Card], step: int, min_top: int) -> Optional[Found]:
    """
    Find the highest run of five ranks spaced ``step`` apart.

    The Ace also counts as 1, so A-2-3-4-5 (step 1) and 9-7-5-3-A (step 2)
    are found after every higher run has been tried.
    """
    by_value: Dict[int, Card] = {}
    for card in sorted(cards, key=lambda c: (c.rank, c.suit), reverse=True):
        by_value.setdefault(int(card.rank), card)
    if Rank.ACE in by_value:
        by_value[1] = by_value[int(Rank.ACE)]

    for top in sorted(by_value, reverse=True):
        if top < min_top:
            break
        values = [top - step * i for i in range(HAND_SIZE)]
        if all(v in by_value for v in values):
            return tuple(by_value[v] for v in values), (top,)
    return None


def _best_per_suit(pool: _Pool, step: int, min_top: int) -> Optional[Found]:
    best: Optional[Found] = None
    for suited in pool.by_suit.values():
        if len(suited) < HAND_SIZE:
            continue
        found = _find_sequence(suited, step, min_top)
        if found and (best is None or found[1] > best[1]):
            best = found
    return best


def _royal_flush(pool: _Pool) -> Optional[Found]:
    found = _best_per_suit(pool, 1, 5)
    if found and found[1][0] == Rank.ACE:
        return found
    return None


def _straight_flush(pool: _Pool) -> Optional[Found]:
    return _best_per_suit(pool, 1, 5)


def _skip_straight_flush(pool: _Pool) -> Optional[Found]:
    return _best_per_suit(pool, 2, 9)


def _four_of_a_kind(pool: _Pool) -> Optional[Found]:
    quads = pool.ranks_with(4)
    if not quads:
        return None
    quad = quads[0]
    kicker = pool.kickers([quad], 1)
    if not kicker:
        return None
    return tuple(pool.by_rank[quad][:4]) + tuple(kicker), (quad, kicker[0].rank)


def _full_house(pool: _Pool) -> Optional[Found]:
    trips = pool.ranks_with(3)
    if not trips:
        return None
    top = trips[0]
    pairs = [r for r in pool.ranks_with(2) if r != top]
    if not pairs:
        return None
    pair = pairs[0]
    return tuple(pool.by_rank[top][:3] + pool.by_rank[pair][:2]), (top, pair)


def _flush(pool: _Pool) -> Optional[Found]:
    best: Optional[Found] = None
    for suited in pool.by_suit.values():
        if len(suited) < HAND_SIZE:
            continue
        cards = tuple(suited[:HAND_SIZE])
        key = tuple(int(c.rank) for c in cards)
        if best is None or key > best[1]:
            best = (cards, key)
    return best


def _straight(pool: _Pool) -> Optional[Found]:
    return _find_sequence(pool.cards, 1, 5)


def _skip_straight(pool: _Pool) -> Optional[Found]:
    return _find_sequence(pool.cards, 2, 9)


def _three_of_a_kind(pool: _Pool) -> Optional[Found]:
    trips = pool.ranks_with(3)
    if not trips:
        return None
    top = trips[0]
    kickers = pool.kickers([top], 2)
    if len(kickers) < 2:
        return None
    cards = tuple(pool.by_rank[top][:3]) + tuple(kickers)
    return cards, (top,) + tuple(int(c.rank) for c in kickers)


def _two_pair(pool: _Pool) -> Optional[Found]:
    pairs = pool.ranks_with(2)
    if len(pairs) < 2:
        return None
    high, low = pairs[0], pairs[1]
    kicker = pool.kickers([high, low], 1)
    if not kicker:
        return None
    cards = tuple(pool.by_rank[high][:2] + pool.by_rank[low][:2]) + tuple(kicker)
    return cards, (high, low, kicker[0].rank)


def _one_pair(pool: _Pool) -> Optional[Found]:
    pairs = pool.ranks_with(2)
    if not pairs:
        return None
    pair = pairs[0]
    kickers = pool.kickers([pair], 3)
    if len(kickers) < 3:
        return None
    cards = tuple(pool.by_rank[pair][:2]) + tuple(kickers)
    return cards, (pair,) + tuple(int(c.rank) for c in kickers)


def _high_card(pool: _Pool) -> Optional[Found]:
    cards = tuple(pool.cards[:HAND_SIZE])
    return cards, tuple(int(c.rank) for c in cards)


_FINDERS: Dict[HandCategory, Callable[[_Pool], Optional[Found]]] = {
    HandCategory.ROYAL_FLUSH: _royal_flush,
    HandCategory.SKIP_STRAIGHT_FLUSH: _skip_straight_flush,
    HandCategory.STRAIGHT_FLUSH: _straight_flush,
    HandCategory.FOUR_OF_A_KIND: _four_of_a_kind,
    HandCategory.FULL_HOUSE: _full_house,
    HandCategory.FLUSH: _flush,
    HandCategory.SKIP_STRAIGHT: _skip_straight,
    HandCategory.STRAIGHT: _straight,
    HandCategory.THREE_OF_A_KIND: _three_of_a_kind,
    HandCategory.TWO_PAIR: _two_pair,
    HandCategory.ONE_PAIR: _one_pair,
    HandCategory.HIGH_CARD: _high_card,
}


# ============= Evaluation =============

def find_high_hand(cards: Sequence[Card], rules: RuleDescriptor) -> Optional[HandResult]:
    """
    Best high hand from a pool of cards, ignoring hole-card constraints.

    Returns None if the pool holds fewer than five cards.
    """
    if len(cards) < HAND_SIZE:
        return None
    pool = _Pool(cards)
    for category in rules.hand_rank_order:
        found = _FINDERS[category](pool)
        if found is not None:
            hand_cards, tie_break = found
            return HandResult(category, hand_cards, tuple(int(v) for v in tie_break))
    return None


def find_low_hand(cards: Sequence[Card], max_rank: int) -> Optional[HandResult]:
    """
    Best qualifying low hand from a pool of cards.

    Returns None when fewer than five distinct ranks at or below
    ``max_rank`` are available (Ace counts as 1).
    """
    by_value: Dict[int, Card] = {}
    for card in sorted(cards, key=lambda c: (c.rank.low_value, c.suit)):
        value = card.rank.low_value
        if value <= max_rank:
            by_value.setdefault(value, card)
    if len(by_value) < HAND_SIZE:
        return None
    values = sorted(by_value)[:HAND_SIZE]
    values.reverse()
    return HandResult(None, tuple(by_value[v] for v in values), tuple(values))


def compare_hands(h1: HandResult, h2: HandResult, rules: RuleDescriptor) -> Comparison:
    """
    Compare two high hands under a variant's rank order.

    The category strength decides first; equal categories fall back to the
    tie-break tuples.
    """
    s1, s2 = rules.strength_of(h1.category), rules.strength_of(h2.category)
    if s1 != s2:
        return Comparison.GREATER if s1 > s2 else Comparison.LESS
    if h1.tie_break != h2.tie_break:
        return Comparison.GREATER if h1.tie_break > h2.tie_break else Comparison.LESS
    return Comparison.EQUAL


def compare_low_hands(h1: HandResult, h2: HandResult) -> Comparison:
    """Compare two low hands. GREATER means h1 is the better (lower) hand."""
    if h1.tie_break == h2.tie_break:
        return Comparison.EQUAL
    return Comparison.GREATER if h1.tie_break < h2.tie_break else Comparison.LESS


def _best(
    hands: Sequence[Optional[HandResult]],
    compare: Callable[[HandResult, HandResult], Comparison],
) -> Optional[HandResult]:
    best: Optional[HandResult] = None
    for hand in hands:
        if hand is not None and (best is None or compare(hand, best) == Comparison.GREATER):
            best = hand
    return best


def evaluate(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    rules: RuleDescriptor,
) -> HandEvaluation:
    """
    Evaluate a player's best high hand and, if enabled, best low hand.

    With the ``any`` constraint the combined pool is scanned directly. With
    ``exact``/``max`` constraints every legal candidate is evaluated and the
    best kept; the low hand is drawn from the same candidates, so it also
    honours the hole-card split.

    Args:
        hole_cards: The player's private cards
        community_cards: Board cards dealt so far
        rules: Variant rules

    Returns:
        HandEvaluation; ``NO_HAND`` if no five-card hand can be formed
    """
    if rules.hole_card_constraint == HoleCardConstraint.ANY:
        pool = list(hole_cards) + list(community_cards)
        high = find_high_hand(pool, rules)
        if high is None:
            return NO_HAND
        low = find_low_hand(pool, rules.low_hand_max_rank) if rules.low_hand_enabled else None
        return HandEvaluation(high, low)

    candidates = generator_for(rules).generate(hole_cards, community_cards)
    if not candidates:
        return NO_HAND

    high = _best(
        [find_high_hand(c, rules) for c in candidates],
        lambda a, b: compare_hands(a, b, rules),
    )
    low = None
    if rules.low_hand_enabled:
        low = _best([find_low_hand(c, rules.low_hand_max_rank) for c in candidates], compare_low_hands)
    return HandEvaluation(high, low)


class HandStrengthEvaluator(ABC):
    """Strategy used by the game to evaluate and compare players' hands."""

    @abstractmethod
    def evaluate(
        self,
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
    ) -> HandEvaluation:
        """Evaluate a player's holding against the board."""

    @abstractmethod
    def compare(self, h1: HandResult, h2: HandResult) -> Comparison:
        """Compare two high hands."""

    def compare_low(self, h1: HandResult, h2: HandResult) -> Comparison:
        """Compare two low hands."""
        return compare_low_hands(h1, h2)


class StandardHandEvaluator(HandStrengthEvaluator):
    """Evaluator bound to a variant's rule descriptor."""

    def __init__(self, rules: RuleDescriptor):
        self.rules = rules

    def evaluate(self, hole_cards, community_cards):
        return evaluate(hole_cards, community_cards, self.rules)

    def compare(self, h1, h2):
        return compare_hands(h1, h2, self.rules)


# ============= Descriptions =============

def _name(value: int) -> str:
    return RANK_NAMES[Rank(value)]


def _plural(value: int) -> str:
    name = _name(value)
    return f"{name}es" if name.endswith("x") else f"{name}s"


def _low_char(value: int) -> str:
    return "A" if value == 1 else RANK_CHARS[Rank(value)]


def _high(t: Tuple[int, ...]) -> str:
    return f"{_name(t[0])} high"


def _straight(t: Tuple[int, ...]) -> str:
    return "Five high (Wheel)" if t[0] == Rank.FIVE else _high(t)


_DETAILS: Dict[HandCategory, Callable[[Tuple[int, ...]], str]] = {
    HandCategory.SKIP_STRAIGHT_FLUSH: _high,
    HandCategory.STRAIGHT_FLUSH: _high,
    HandCategory.FOUR_OF_A_KIND: lambda t: _plural(t[0]),
    HandCategory.FULL_HOUSE: lambda t: f"{_plural(t[0])} full of {_plural(t[1])}",
    HandCategory.FLUSH: _high,
    HandCategory.SKIP_STRAIGHT: _high,
    HandCategory.STRAIGHT: _straight,
    HandCategory.THREE_OF_A_KIND: lambda t: _plural(t[0]),
    HandCategory.TWO_PAIR: lambda t: f"{_plural(t[0])} and {_plural(t[1])}",
    HandCategory.HIGH_CARD: lambda t: _name(t[0]),
}


def _describe(category: HandCategory, tie_break: Tuple[int, ...]) -> str:
    if category is HandCategory.ONE_PAIR:
        return f"Pair of {_plural(tie_break[0])}"
    if category not in _DETAILS:
        return category.display_name
    return f"{category.display_name}, {_DETAILS[category](tie_break)}"
