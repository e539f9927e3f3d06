"""
Tests for low hand qualification and comparison in hi/lo variants.
"""

from splitpot.core.card import parse_cards
from splitpot.core.hand import Comparison, compare_low_hands, evaluate, find_low_hand
from splitpot.core.rules import (
    BettingLimit, HandCategory, HoleCardConstraint, RuleDescriptor, PLO, PLO8, PLS7,
)


def low(cards: str, max_rank: int = 8):
    return find_low_hand(parse_cards(cards), max_rank)


class TestLowQualification:
    """Tests for which pools make a low hand."""

    def test_wheel(self):
        """A-2-3-4-5 is the best low; the Ace counts as 1."""
        hand = low("As 2d 3c 4h 5s Kd Qc")
        assert hand.is_low
        assert hand.category is None
        assert hand.tie_break == (5, 4, 3, 2, 1)
        assert hand.describe() == "5-4-3-2-A"

    def test_picks_lowest_five(self):
        hand = low("8c 7d 5h 4s 3c 2d Ah")
        assert hand.tie_break == (5, 4, 3, 2, 1)

    def test_pairs_do_not_count_twice(self):
        """A paired low card leaves only four distinct low ranks."""
        assert low("2c 2d 3c 4h 5s 9d Kc") is None

    def test_max_rank_boundary(self):
        """An eight qualifies for eight-or-better but not seven-or-better."""
        cards = "As Ad 2c 3d 4h 8s 9c"
        assert low(cards, max_rank=7) is None
        hand = low(cards, max_rank=8)
        assert hand.tie_break == (8, 4, 3, 2, 1)
        assert hand.describe() == "8-4-3-2-A"

    def test_description(self):
        assert low("7s 5d 4c 3h Ah").describe() == "7-5-4-3-A"


class TestLowComparison:
    """Tests for compare_low_hands: GREATER means the first hand is lower."""

    def test_top_card_equal_next_decides(self):
        """7-6-5-3-A beats 7-6-5-4-3."""
        h1 = low("7s 6d 5c 3h Ah")
        h2 = low("7c 6h 5d 4s 3c")
        assert compare_low_hands(h1, h2) == Comparison.GREATER
        assert compare_low_hands(h2, h1) == Comparison.LESS

    def test_lower_top_card_wins(self):
        """6-5-4-3-2 beats 7-5-4-3-2."""
        h1 = low("6s 5d 4c 3h 2h")
        h2 = low("7c 5h 4d 3s 2c")
        assert compare_low_hands(h1, h2) == Comparison.GREATER

    def test_wheel_is_best(self):
        wheel = low("As 2d 3c 4h 5s")
        six = low("6s 4d 3c 2h Ah")
        assert compare_low_hands(wheel, six) == Comparison.GREATER

    def test_suits_do_not_matter(self):
        h1 = low("7s 5d 4c 3h Ah")
        h2 = low("7h 5c 4d 3s Ac")
        assert compare_low_hands(h1, h2) == Comparison.EQUAL


class TestLowWithHoleCardConstraints:
    """Tests for low hands built from legal candidates only."""

    def test_omaha_low_uses_two_hole_cards(self):
        result = evaluate(parse_cards("Ac 2c Kd Kh"), parse_cards("3s 4d 5h Qc Jd"), PLO8)
        assert result.low.tie_break == (5, 4, 3, 2, 1)

    def test_omaha_one_low_hole_card_is_no_low(self):
        """Four low board cards and one low hole card do not make an Omaha low."""
        result = evaluate(parse_cards("Ac Kd Kh Qs"), parse_cards("2s 3d 4h 5c 9d"), PLO8)
        assert result.low is None
        assert result.high.category == HandCategory.ONE_PAIR

    def test_max_constraint_allows_one_hole_card(self):
        """With at most two hole cards the same holding makes a wheel."""
        rules = RuleDescriptor(
            name="Max Two Hi-Lo", abbreviation="MX2",
            betting_limit=BettingLimit.NO_LIMIT, hole_card_count=4,
            hole_card_constraint=HoleCardConstraint.MAX, hole_card_use_count=2,
            low_hand_enabled=True,
        )
        result = evaluate(parse_cards("Ac Kd Kh Qs"), parse_cards("2s 3d 4h 5c 9d"), rules)
        assert result.low.tie_break == (5, 4, 3, 2, 1)
        assert result.high.category == HandCategory.STRAIGHT
        assert result.high.tie_break == (5,)

    def test_seven_or_better(self):
        """PLS7 pools hole and board cards freely with a seven cap."""
        hole, board = parse_cards("Ah 7c Kd"), parse_cards("2s 3d 6h Qc Jd")
        assert evaluate(hole, board, PLS7).low.tie_break == (7, 6, 3, 2, 1)
        hole = parse_cards("Ah 8c Kd")
        assert evaluate(hole, board, PLS7).low is None

    def test_no_low_in_high_only_variant(self):
        result = evaluate(parse_cards("Ac 2c Kd Kh"), parse_cards("3s 4d 5h Qc Jd"), PLO)
        assert result.low is None
