"""
Candidate hand generation.

A hand generator turns a player's hole cards and the board into every legal
five-card hand under the variant's hole-card constraint:

- any:      best five of hole + community cards
- exact(k): exactly k hole cards with 5 - k community cards (Omaha uses k=2)
- max(k):   anywhere from 0 to k hole cards

Generators never raise for short pools; too few cards simply yield no
candidates and callers treat that as "no hand".
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from itertools import combinations
from typing import List, Sequence, Tuple

from splitpot.core.card import Card
from splitpot.core.rules import HAND_SIZE, HoleCardConstraint, RuleDescriptor


CandidateHand = Tuple[Card, ...]


class HandGenerator(ABC):
    """Produces every legal five-card hand for a hole/community split."""

    @abstractmethod
    def generate(
        self,
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
    ) -> List[CandidateHand]:
        """Return all candidate hands; empty if none can be formed."""


class AnyHandGenerator(HandGenerator):
    """Any five cards from the combined pool."""

    def generate(self, hole_cards, community_cards):
        pool = list(hole_cards) + list(community_cards)
        return list(combinations(pool, HAND_SIZE))


class ExactHandGenerator(HandGenerator):
    """Exactly ``use_count`` hole cards and the rest from the board."""

    def __init__(self, use_count: int):
        self.use_count = use_count

    def generate(self, hole_cards, community_cards):
        board_count = HAND_SIZE - self.use_count
        if len(hole_cards) < self.use_count or len(community_cards) < board_count:
            return []
        return [
            hole + board
            for hole in combinations(list(hole_cards), self.use_count)
            for board in combinations(list(community_cards), board_count)
        ]


class MaxHandGenerator(HandGenerator):
    """Up to ``use_count`` hole cards."""

    def __init__(self, use_count: int):
        self.use_count = use_count

    def generate(self, hole_cards, community_cards):
        candidates: List[CandidateHand] = []
        for used in range(self.use_count + 1):
            candidates.extend(ExactHandGenerator(used).generate(hole_cards, community_cards))
        return candidates


def generator_for(rules: RuleDescriptor) -> HandGenerator:
    """Pick the generator matching the variant's hole-card constraint."""
    if rules.hole_card_constraint == HoleCardConstraint.EXACT:
        return ExactHandGenerator(rules.hole_card_use_count)
    if rules.hole_card_constraint == HoleCardConstraint.MAX:
        return MaxHandGenerator(rules.hole_card_use_count)
    return AnyHandGenerator()
