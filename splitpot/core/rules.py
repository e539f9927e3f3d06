"""
Game rules, constants and variant presets.

A ``RuleDescriptor`` is the immutable description of a poker variant: how
many hole cards are dealt, how many of them a hand must use, which hand
categories exist and in which order they rank, whether the pot is split with
a qualifying low hand, and whether betting is pot-limit or no-limit.

Hand categories deliberately carry no global ordering. Each descriptor owns
an ordered list (strongest first) and a category's strength is looked up in
that list, so variants such as Pot-Limit Sviten can slot "skip straights"
between the standard categories.

Table conventions (heads-up):
    The dealer posts the small blind and acts first before the flop.
    After the flop the non-dealer acts first.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from splitpot.core.card import Rank
from splitpot.core.errors import RuleConfigError


logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Phases of a hand."""
    WAITING = auto()      # No hand started yet
    PREFLOP = auto()      # After hole cards dealt, before flop
    FLOP = auto()         # After 3 community cards
    TURN = auto()         # After 4th community card
    RIVER = auto()        # After 5th community card
    SHOWDOWN = auto()     # Determine winner
    HAND_OVER = auto()    # Hand is complete


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    BET = "BET"
    RAISE = "RAISE"


class BettingLimit(Enum):
    """Betting structure of a variant."""
    POT_LIMIT = "pot_limit"
    NO_LIMIT = "no_limit"


class HoleCardConstraint(Enum):
    """How many hole cards a five-card hand may or must use."""
    ANY = "any"       # Best five of hole + community
    EXACT = "exact"   # Exactly N hole cards (Omaha)
    MAX = "max"       # At most N hole cards


class HandCategory(Enum):
    """Hand categories. Strength comes from a RuleDescriptor, not from here."""
    ROYAL_FLUSH = "royal_flush"
    SKIP_STRAIGHT_FLUSH = "skip_straight_flush"
    STRAIGHT_FLUSH = "straight_flush"
    FOUR_OF_A_KIND = "four_of_a_kind"
    FULL_HOUSE = "full_house"
    FLUSH = "flush"
    SKIP_STRAIGHT = "skip_straight"
    STRAIGHT = "straight"
    THREE_OF_A_KIND = "three_of_a_kind"
    TWO_PAIR = "two_pair"
    ONE_PAIR = "one_pair"
    HIGH_CARD = "high_card"

    @property
    def display_name(self) -> str:
        return HAND_CATEGORY_NAMES[self]


HAND_CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.SKIP_STRAIGHT_FLUSH: "Skip Straight Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.SKIP_STRAIGHT: "Skip Straight",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

# Standard ranking, strongest first
STANDARD_HAND_RANK_ORDER: Tuple[HandCategory, ...] = (
    HandCategory.ROYAL_FLUSH,
    HandCategory.STRAIGHT_FLUSH,
    HandCategory.FOUR_OF_A_KIND,
    HandCategory.FULL_HOUSE,
    HandCategory.FLUSH,
    HandCategory.STRAIGHT,
    HandCategory.THREE_OF_A_KIND,
    HandCategory.TWO_PAIR,
    HandCategory.ONE_PAIR,
    HandCategory.HIGH_CARD,
)


# Default game settings
DEFAULT_SMALL_BLIND = 10
DEFAULT_BIG_BLIND = 20
DEFAULT_BUY_IN = 1000
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per phase
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5  # Best 5-card hand


@dataclass(frozen=True)
class CustomRanking:
    """A non-standard category inserted one step below an existing one."""
    category: HandCategory
    insert_after: HandCategory


def build_hand_rank_order(
    custom_rankings: Sequence[CustomRanking] = (),
    use_standard: bool = True,
) -> Tuple[HandCategory, ...]:
    """
    Build a strongest-first category order.

    Each custom category is placed immediately after its anchor, i.e. it
    ranks just below the anchor. An anchor that is not in the order yet
    appends the category at the end.

    Args:
        custom_rankings: Categories to insert, applied in order
        use_standard: Start from the standard ten categories

    Returns:
        Tuple of categories, strongest first
    """
    order: List[HandCategory] = list(STANDARD_HAND_RANK_ORDER) if use_standard else []

    for custom in custom_rankings:
        if custom.category in order:
            raise RuleConfigError(f"Hand category listed twice: {custom.category.value}")
        if custom.insert_after in order:
            order.insert(order.index(custom.insert_after) + 1, custom.category)
        else:
            logger.warning(
                f"Anchor {custom.insert_after.value} not found, "
                f"appending {custom.category.value} at the end"
            )
            order.append(custom.category)

    return tuple(order)


@dataclass(frozen=True)
class RuleDescriptor:
    """
    Immutable description of a poker variant.

    Attributes:
        name: Display name, e.g. "Pot-Limit Omaha Hi-Lo"
        abbreviation: Short name, e.g. "PLO8"
        betting_limit: Pot-limit or no-limit
        hole_card_count: Hole cards dealt to each player
        hole_card_constraint: How hole cards may be used (any/exact/max)
        hole_card_use_count: N for exact/max constraints
        hand_rank_order: Categories, strongest first
        low_hand_enabled: Split the pot with a qualifying low hand
        low_hand_max_rank: Highest card allowed in a low hand (8 for 8-or-better)
    """
    name: str
    abbreviation: str
    betting_limit: BettingLimit
    hole_card_count: int
    hole_card_constraint: HoleCardConstraint = HoleCardConstraint.ANY
    hole_card_use_count: int = 0
    hand_rank_order: Tuple[HandCategory, ...] = STANDARD_HAND_RANK_ORDER
    low_hand_enabled: bool = False
    low_hand_max_rank: int = 8
    _strengths: Dict[HandCategory, int] = field(
        init=False, repr=False, compare=False, hash=False, default_factory=dict
    )

    def __post_init__(self):
        object.__setattr__(self, "hand_rank_order", tuple(self.hand_rank_order))
        self.validate()
        size = len(self.hand_rank_order)
        # Strongest category gets the highest number
        self._strengths.update(
            {category: size - i for i, category in enumerate(self.hand_rank_order)}
        )

    def validate(self) -> None:
        """Raise RuleConfigError if the descriptor is inconsistent."""
        if self.hole_card_count < 1:
            raise RuleConfigError(f"{self.abbreviation}: hole_card_count must be positive")
        if self.hole_card_constraint != HoleCardConstraint.ANY:
            if not 0 < self.hole_card_use_count <= min(self.hole_card_count, HAND_SIZE):
                raise RuleConfigError(
                    f"{self.abbreviation}: hole_card_use_count {self.hole_card_use_count} "
                    f"invalid for {self.hole_card_count} hole cards"
                )
        if not self.hand_rank_order:
            raise RuleConfigError(f"{self.abbreviation}: hand_rank_order is empty")
        if len(set(self.hand_rank_order)) != len(self.hand_rank_order):
            raise RuleConfigError(f"{self.abbreviation}: duplicate hand categories")
        if HandCategory.HIGH_CARD not in self.hand_rank_order:
            raise RuleConfigError(f"{self.abbreviation}: high_card must be ranked")
        if self.low_hand_enabled and not 5 <= self.low_hand_max_rank <= int(Rank.KING):
            raise RuleConfigError(
                f"{self.abbreviation}: low_hand_max_rank must be between 5 and 13"
            )

    def strength_of(self, category: HandCategory) -> int:
        """Ordinal strength of a category in this variant (higher is stronger)."""
        try:
            return self._strengths[category]
        except KeyError:
            raise RuleConfigError(
                f"{category.value} is not ranked in {self.abbreviation}"
            ) from None

    def allows(self, category: HandCategory) -> bool:
        """Whether this variant ranks the category at all."""
        return category in self._strengths


# Variant presets
NLH = RuleDescriptor(
    name="No-Limit Hold'em",
    abbreviation="NLH",
    betting_limit=BettingLimit.NO_LIMIT,
    hole_card_count=2,
)

PLO = RuleDescriptor(
    name="Pot-Limit Omaha",
    abbreviation="PLO",
    betting_limit=BettingLimit.POT_LIMIT,
    hole_card_count=4,
    hole_card_constraint=HoleCardConstraint.EXACT,
    hole_card_use_count=2,
)

PLO8 = RuleDescriptor(
    name="Pot-Limit Omaha Hi-Lo",
    abbreviation="PLO8",
    betting_limit=BettingLimit.POT_LIMIT,
    hole_card_count=4,
    hole_card_constraint=HoleCardConstraint.EXACT,
    hole_card_use_count=2,
    low_hand_enabled=True,
    low_hand_max_rank=8,
)

SVITEN_RANKINGS = (
    CustomRanking(HandCategory.SKIP_STRAIGHT_FLUSH, insert_after=HandCategory.ROYAL_FLUSH),
    CustomRanking(HandCategory.SKIP_STRAIGHT, insert_after=HandCategory.FLUSH),
)

PLS = RuleDescriptor(
    name="Pot-Limit Sviten",
    abbreviation="PLS",
    betting_limit=BettingLimit.POT_LIMIT,
    hole_card_count=3,
    hand_rank_order=build_hand_rank_order(SVITEN_RANKINGS),
)

PLS7 = RuleDescriptor(
    name="Pot-Limit Sviten Special",
    abbreviation="PLS7",
    betting_limit=BettingLimit.POT_LIMIT,
    hole_card_count=3,
    hand_rank_order=build_hand_rank_order(SVITEN_RANKINGS),
    low_hand_enabled=True,
    low_hand_max_rank=7,
)

PRESETS: Dict[str, RuleDescriptor] = {
    rules.abbreviation: rules for rules in (NLH, PLO, PLO8, PLS, PLS7)
}


def get_rules(abbreviation: str) -> RuleDescriptor:
    """Look up a preset by abbreviation (case-insensitive)."""
    try:
        return PRESETS[abbreviation.upper()]
    except KeyError:
        raise RuleConfigError(
            f"Unknown game variant: {abbreviation} (known: {', '.join(PRESETS)})"
        ) from None


def get_blind_positions(num_players: int, dealer_position: int) -> Tuple[int, int]:
    """
    Calculate small blind and big blind positions.

    In heads-up play the dealer posts the small blind.

    Args:
        num_players: Number of seats still in the game
        dealer_position: Position of the dealer among those seats (0-indexed)

    Returns:
        Tuple of (small_blind_position, big_blind_position)
    """
    if num_players < 2:
        raise ValueError("Need at least 2 players")

    if num_players == 2:
        sb_pos = dealer_position
        bb_pos = (dealer_position + 1) % num_players
    else:
        sb_pos = (dealer_position + 1) % num_players
        bb_pos = (dealer_position + 2) % num_players

    return sb_pos, bb_pos
