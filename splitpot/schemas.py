"""
Pydantic schemas for rule/game configuration and action requests.

Rule files (e.g. YAML) are parsed by the host; these models validate the
resulting mappings and turn them into engine objects.
"""

from typing import List, Optional
import random

from pydantic import BaseModel, Field, field_validator, model_validator

from splitpot.core.errors import IllegalActionError
from splitpot.core.game import PlayerAction, PokerGame
from splitpot.core.rules import (
    ActionType, BettingLimit, CustomRanking, HandCategory, HoleCardConstraint,
    RuleDescriptor, build_hand_rank_order,
    DEFAULT_BIG_BLIND, DEFAULT_BUY_IN, DEFAULT_SMALL_BLIND, MAX_PLAYERS, MIN_PLAYERS,
)


# ============= Rule Schemas =============

class HoleCardConfig(BaseModel):
    """Hole cards dealt and how many a hand must use."""
    count: int = Field(ge=1, le=7)
    use_constraint: HoleCardConstraint = HoleCardConstraint.ANY
    use_count: int = Field(default=0, ge=0, le=5)


class CustomRankingConfig(BaseModel):
    """A non-standard category and the category it ranks just below."""
    name: HandCategory
    insert_after: HandCategory


class HandRankingConfig(BaseModel):
    """Category order: standard ten plus inserted custom categories."""
    use_standard_rankings: bool = True
    custom_rankings: List[CustomRankingConfig] = Field(default_factory=list)


class LowHandConfig(BaseModel):
    """Hi/lo split settings."""
    enabled: bool = False
    max_rank: int = Field(default=8, ge=5, le=13)


class RuleConfig(BaseModel):
    """A variant definition as found in a rule file."""
    name: str
    abbreviation: str = Field(min_length=1)
    betting_limit: BettingLimit
    hole_cards: HoleCardConfig
    hand_rankings: HandRankingConfig = Field(default_factory=HandRankingConfig)
    low_hand: LowHandConfig = Field(default_factory=LowHandConfig)

    @model_validator(mode="after")
    def check_use_count(self):
        hole = self.hole_cards
        if hole.use_constraint != HoleCardConstraint.ANY and not 0 < hole.use_count <= hole.count:
            raise ValueError(
                f"use_count must be between 1 and {hole.count} for '{hole.use_constraint.value}'"
            )
        return self

    def to_rule_descriptor(self) -> RuleDescriptor:
        """Build the immutable descriptor used by the engine."""
        order = build_hand_rank_order(
            [CustomRanking(c.name, c.insert_after) for c in self.hand_rankings.custom_rankings],
            use_standard=self.hand_rankings.use_standard_rankings,
        )
        return RuleDescriptor(
            name=self.name,
            abbreviation=self.abbreviation.upper(),
            betting_limit=self.betting_limit,
            hole_card_count=self.hole_cards.count,
            hole_card_constraint=self.hole_cards.use_constraint,
            hole_card_use_count=self.hole_cards.use_count,
            hand_rank_order=order,
            low_hand_enabled=self.low_hand.enabled,
            low_hand_max_rank=self.low_hand.max_rank,
        )


# ============= Game Schemas =============

class GameConfig(BaseModel):
    """Table settings for a new game."""
    player_names: List[str] = Field(min_length=MIN_PLAYERS, max_length=MAX_PLAYERS)
    starting_chips: int = Field(gt=0, default=DEFAULT_BUY_IN)
    small_blind: int = Field(gt=0, default=DEFAULT_SMALL_BLIND)
    big_blind: int = Field(gt=0, default=DEFAULT_BIG_BLIND)
    blind_up_interval: int = Field(ge=0, default=0)
    show_outs: bool = False

    @field_validator("player_names")
    @classmethod
    def names_unique(cls, names: List[str]) -> List[str]:
        if len(set(names)) != len(names):
            raise ValueError("player names must be unique")
        return names

    @model_validator(mode="after")
    def check_blinds(self):
        if self.small_blind > self.big_blind:
            raise ValueError("small_blind cannot exceed big_blind")
        return self

    def create_game(self, rules: RuleDescriptor, rng: random.Random) -> PokerGame:
        """Create a game with these settings."""
        return PokerGame(
            self.player_names,
            rules=rules,
            rng=rng,
            starting_chips=self.starting_chips,
            small_blind=self.small_blind,
            big_blind=self.big_blind,
            blind_up_interval=self.blind_up_interval,
            show_outs=self.show_outs,
        )


# ============= Action Schemas =============

class ActionRequest(BaseModel):
    """An action submitted by a player or client."""
    action_type: ActionType = Field(..., description="Action type: FOLD, CHECK, CALL, BET, RAISE")
    amount: Optional[int] = Field(default=0, ge=0, description="Total bet for BET/RAISE actions")

    @field_validator("action_type", mode="before")
    @classmethod
    def normalize_action_type(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    def to_player_action(self) -> PlayerAction:
        amount = self.amount or 0
        if self.action_type in (ActionType.BET, ActionType.RAISE) and amount <= 0:
            raise IllegalActionError(f"{self.action_type.value} requires a positive amount", action=self)
        return PlayerAction(self.action_type, amount)
