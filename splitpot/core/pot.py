"""
Pot settlement: side pots, hi/lo splits and odd chips.

The pot is cut into tiers at every distinct ``total_bet`` among the players
who put chips in, folded players included. Each tier is sized by everyone
who reached its threshold but can only be won by players still in the hand
who reached it.

Each tier is then settled on its own:
- with a qualifying low hand, the low half gets ``amount // 2`` and the
  high half gets the rest
- without one, the best high hand(s) scoop the tier
- ties split a half evenly; odd chips go one at a time to the tied winners
  in seat order starting left of the dealer button

Awards always add up to the pot exactly. Any mismatch raises
``PotAccountingError`` before a single chip is moved.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging

from splitpot.core.card import Card
from splitpot.core.errors import EmptyShowdownError, GameStateError, PotAccountingError
from splitpot.core.hand import (
    Comparison, HandEvaluation, HandResult, HandStrengthEvaluator,
)
from splitpot.core.player import Player, PlayerStatus


logger = logging.getLogger(__name__)


@dataclass
class PotTier:
    """Main pot or side pot, computed fresh at settlement."""
    amount: int
    eligible_players: List[Player] = field(default_factory=list)
    threshold_bet: int = 0

    @property
    def eligible_names(self) -> List[str]:
        return [p.name for p in self.eligible_players]


@dataclass
class SettlementResult:
    """Chips won by one player over all tiers of a hand."""
    player_name: str
    amount_won: int
    hand_description: str


def get_showdown_players(players: Sequence[Player]) -> List[Player]:
    """Players who can still win chips: not folded and not eliminated."""
    return [
        p for p in players
        if p.status not in (PlayerStatus.FOLDED, PlayerStatus.ELIMINATED)
    ]


def build_pot_tiers(players: Sequence[Player]) -> List[PotTier]:
    """
    Split the chips committed this hand into a main pot and side pots.

    Example: all-ins of 2000, 5000 and 10000 give tiers of
    6000 (2000 x 3), 6000 (3000 x 2) and 5000 (5000 x 1).

    Args:
        players: Every seat at the table

    Returns:
        Tiers in ascending threshold order. A level that only folded
        players reached is added to the tier below it.
    """
    showdown = get_showdown_players(players)
    contributors = [p for p in players if p.total_bet > 0]
    thresholds = sorted({p.total_bet for p in contributors})

    tiers: List[PotTier] = []
    prev_threshold = 0
    for threshold in thresholds:
        contribution = threshold - prev_threshold
        reached = sum(1 for p in contributors if p.total_bet >= threshold)
        amount = contribution * reached
        eligible = [p for p in showdown if p.total_bet >= threshold]

        if amount > 0 and not eligible and tiers:
            # Only folded players reached this level
            tiers[-1].amount += amount
        elif amount > 0 and eligible:
            tiers.append(PotTier(amount=amount, eligible_players=eligible, threshold_bet=threshold))
            logger.debug(
                f"Pot tier: amount={amount}, threshold={threshold}, "
                f"eligible={[p.name for p in eligible]}"
            )
            if len(eligible) == 1:
                logger.debug(f"Tier at {threshold} has a single eligible player: {eligible[0].name}")

        prev_threshold = threshold

    return tiers


def _clockwise_from_dealer(players: Sequence[Player], dealer_index: int) -> List[Player]:
    """Seats in order starting immediately left of the dealer button."""
    n = len(players)
    return [players[(dealer_index + 1 + i) % n] for i in range(n)]


def _split(amount: int, winners: Sequence[Player], seat_order: Sequence[Player]) -> Dict[Player, int]:
    """
    Split an amount evenly among winners.

    Odd chips go one each to winners closest to the left of the dealer.
    """
    share, remainder = divmod(amount, len(winners))
    awards = {w: share for w in winners}
    for player in seat_order:
        if remainder == 0:
            break
        if player in awards:
            awards[player] += 1
            remainder -= 1
    return awards


def _best_players(
    contenders: Sequence[Player],
    hand_of: Callable[[Player], Optional[HandResult]],
    compare: Callable[[HandResult, HandResult], Comparison],
) -> Tuple[List[Player], Optional[HandResult]]:
    """Players holding the best hand (ties included) and that hand."""
    winners: List[Player] = []
    best: Optional[HandResult] = None
    for player in contenders:
        hand = hand_of(player)
        if hand is None:
            continue
        if best is None:
            best, winners = hand, [player]
            continue
        outcome = compare(hand, best)
        if outcome == Comparison.GREATER:
            best, winners = hand, [player]
        elif outcome == Comparison.EQUAL:
            winners.append(player)
    return winners, best


def settle(
    players: Sequence[Player],
    community_cards: Sequence[Card],
    evaluator: HandStrengthEvaluator,
    dealer_index: int,
    pot: int,
) -> List[SettlementResult]:
    """
    Settle a pot at showdown and pay the winners.

    Args:
        players: Every seat at the table (index == seat)
        community_cards: The board
        evaluator: Hand strength strategy of the game
        dealer_index: Seat of the dealer button, for odd chips
        pot: Chips in the pot before settlement

    Returns:
        One SettlementResult per winning player, in seat order

    Raises:
        EmptyShowdownError: Nobody is left to win, or no eligible player of
            a tier can form a hand
        PotAccountingError: The tiers or awards do not add up to ``pot``
    """
    showdown = get_showdown_players(players)
    if not showdown:
        raise EmptyShowdownError("Settlement invoked with no players left in the hand")

    tiers = build_pot_tiers(players)
    tier_total = sum(t.amount for t in tiers)
    if tier_total != pot:
        raise PotAccountingError(pot, tier_total)

    evaluations: Dict[Player, HandEvaluation] = {
        p: evaluator.evaluate(p.hole_cards, community_cards) for p in showdown
    }
    seat_order = _clockwise_from_dealer(players, dealer_index)

    winnings: Dict[Player, int] = {}
    descriptions: Dict[Player, str] = {}

    for tier in tiers:
        contenders = [p for p in tier.eligible_players if evaluations[p].has_hand]
        if not contenders:
            raise EmptyShowdownError(
                f"No player eligible for the {tier.amount} tier can form a hand"
            )

        high_winners, best_high = _best_players(
            contenders, lambda p: evaluations[p].high, evaluator.compare
        )
        low_winners, best_low = _best_players(
            contenders, lambda p: evaluations[p].low, evaluator.compare_low
        )
        logger.debug(
            f"Tier {tier.amount}: high={[p.name for p in high_winners]} ({best_high}), "
            f"low={[p.name for p in low_winners]} ({best_low})"
        )

        if low_winners:
            low_amount = tier.amount // 2
            high_amount = tier.amount - low_amount
            awards = [
                _split(high_amount, high_winners, seat_order),
                _split(low_amount, low_winners, seat_order),
            ]
            high_desc = f"High: {best_high}"
            low_desc = f"Low: {best_low}"
            for player in high_winners:
                if player in low_winners:
                    descriptions.setdefault(player, f"Scoop! {high_desc}, {low_desc}")
                else:
                    descriptions.setdefault(player, high_desc)
            for player in low_winners:
                descriptions.setdefault(player, low_desc)
        else:
            awards = [_split(tier.amount, high_winners, seat_order)]
            for player in high_winners:
                descriptions.setdefault(player, f"High: {best_high} (Scoop)")

        for award in awards:
            for player, amount in award.items():
                winnings[player] = winnings.get(player, 0) + amount

    awarded = sum(winnings.values())
    if awarded != pot:
        raise PotAccountingError(pot, awarded)

    results = []
    for player in players:
        if player in winnings:
            player.chips += winnings[player]
            results.append(SettlementResult(player.name, winnings[player], descriptions[player]))
            logger.debug(f"{player.name} wins {winnings[player]}: {descriptions[player]}")
    return results


def award_to_last_player(players: Sequence[Player], pot: int) -> List[SettlementResult]:
    """
    Give the whole pot to the only player left in the hand.

    Raises:
        GameStateError: More or fewer than one player is still in the hand
    """
    remaining = get_showdown_players(players)
    if len(remaining) != 1:
        raise GameStateError(
            f"Expected exactly one player left in the hand, found {len(remaining)}"
        )
    winner = remaining[0]
    winner.chips += pot
    logger.debug(f"{winner.name} takes {pot} as the last remaining player")
    return [SettlementResult(winner.name, pot, "takes the pot as the last remaining player")]
