"""
Outs and equity estimates for a hand still in progress.

An out is an unseen card that, dealt as the next board card, lifts the
player's best high hand into a stronger drawing category of the variant's
rank order, or gives the player a qualifying low they do not yet hold.
Improvements to one pair or two pair are not counted as draws.

Outs are found by evaluating the hand once per unseen card, so they honour
the variant's hole-card constraint and its custom categories (skip
straights only count where the rules rank them).

Equity uses the rule of 2 and 4: outs x 4% on the flop, outs x 2% on the
turn.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Sequence
import logging

from splitpot.core.card import Card, Rank, Suit
from splitpot.core.hand import evaluate
from splitpot.core.rules import (
    HandCategory, RuleDescriptor, FLOP_CARDS, TURN_CARDS, TOTAL_COMMUNITY_CARDS,
)


logger = logging.getLogger(__name__)

DRAW_CATEGORIES = frozenset({
    HandCategory.ROYAL_FLUSH,
    HandCategory.SKIP_STRAIGHT_FLUSH,
    HandCategory.STRAIGHT_FLUSH,
    HandCategory.FOUR_OF_A_KIND,
    HandCategory.FULL_HOUSE,
    HandCategory.FLUSH,
    HandCategory.SKIP_STRAIGHT,
    HandCategory.STRAIGHT,
    HandCategory.THREE_OF_A_KIND,
})

# Percent per out, keyed by board size
_EQUITY_PER_OUT = {
    FLOP_CARDS: 4,
    FLOP_CARDS + TURN_CARDS: 2,
}


def _card_order(card: Card):
    return card.suit, card.rank


@dataclass
class OutsInfo:
    """
    Outs found for one player.

    Attributes:
        outs_per_category: Cards completing each stronger drawing category
        low_outs: Cards that complete a qualifying low
    """
    outs_per_category: Dict[HandCategory, List[Card]] = field(default_factory=dict)
    low_outs: List[Card] = field(default_factory=list)

    @property
    def high_outs(self) -> List[Card]:
        """Distinct high-hand outs, sorted by suit then rank."""
        cards = {c for outs in self.outs_per_category.values() for c in outs}
        return sorted(cards, key=_card_order)

    @property
    def all_outs(self) -> List[Card]:
        """Distinct outs for either half of the pot, sorted by suit then rank."""
        return sorted(set(self.high_outs) | set(self.low_outs), key=_card_order)

    @property
    def has_outs(self) -> bool:
        return bool(self.outs_per_category or self.low_outs)


def unseen_cards(*seen: Sequence[Card]) -> List[Card]:
    """Every card of a full deck not in any of the given groups, by suit then rank."""
    known = {card for group in seen for card in group}
    return [Card(rank, suit) for suit in Suit for rank in Rank if Card(rank, suit) not in known]


def calculate_outs(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    rules: RuleDescriptor,
) -> OutsInfo:
    """
    Find the cards that would improve a player's hand on the next street.

    Args:
        hole_cards: The player's private cards
        community_cards: Board cards dealt so far
        rules: Variant rules, deciding the category order and the low

    Returns:
        OutsInfo; empty when the player has no hand yet or the board is full
    """
    info = OutsInfo()
    if len(community_cards) >= TOTAL_COMMUNITY_CARDS:
        return info

    current = evaluate(hole_cards, community_cards, rules)
    if not current.has_hand:
        return info
    current_strength = rules.strength_of(current.high.category)
    needs_low = rules.low_hand_enabled and current.low is None

    for card in unseen_cards(hole_cards, community_cards):
        improved = evaluate(hole_cards, list(community_cards) + [card], rules)
        category = improved.high.category
        if category in DRAW_CATEGORIES and rules.strength_of(category) > current_strength:
            info.outs_per_category.setdefault(category, []).append(card)
        if needs_low and improved.low is not None:
            info.low_outs.append(card)

    counts = {category.value: len(outs) for category, outs in info.outs_per_category.items()}
    logger.debug(
        f"Outs for {' '.join(map(str, hole_cards))} on {' '.join(map(str, community_cards))}: "
        f"{counts}, low={len(info.low_outs)}"
    )
    return info


def break_even_equity(pot: int, amount_to_call: int) -> float:
    """
    Minimum equity for a call to break even: call / (pot + call).

    Returns 0.0 when there is nothing to call.
    """
    if amount_to_call <= 0:
        return 0.0
    return amount_to_call / (pot + amount_to_call)


def estimate_equity(num_community_cards: int, num_outs: int) -> float:
    """
    Estimate winning chances from the number of outs (rule of 2 and 4).

    Only the flop and the turn have a card to come; any other board size
    logs a warning and returns 0.0. The estimate is capped at 1.0.
    """
    if num_outs <= 0:
        return 0.0
    per_out = _EQUITY_PER_OUT.get(num_community_cards)
    if per_out is None:
        logger.warning(f"No equity estimate with {num_community_cards} community cards")
        return 0.0
    return min(1.0, num_outs * per_out / 100)


def equity_with_cards(
    hole_cards: Sequence[Card],
    community_cards: Sequence[Card],
    rules: RuleDescriptor,
) -> float:
    """Estimated equity from the high-hand outs of a hand; low draws are ignored."""
    info = calculate_outs(hole_cards, community_cards, rules)
    return estimate_equity(len(community_cards), len(info.high_outs))
