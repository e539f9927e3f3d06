"""
Seats and their per-hand betting state.

``total_bet`` is what a seat has put in over the whole hand; pot tiers are
cut from it at showdown. ``current_bet`` only covers the street in play.
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
from enum import Enum, auto

from splitpot.core.card import Card


class PlayerStatus(Enum):
    """Where a seat stands in the current hand."""
    PLAYING = auto()      # can still be asked to act
    FOLDED = auto()
    ALL_IN = auto()       # in for every chip, waits for showdown
    ELIMINATED = auto()   # busted in an earlier hand


@dataclass(eq=False)
class Player:
    """
    One seat at the table.

    Seats compare by identity, never by chip count or name.

    Attributes:
        name: Display name, unique at the table
        chips: Stack behind, not counting anything already bet
        seat: 0-indexed position
        hole_cards: Private cards for this hand
        current_bet: Chips put in on this street
        total_bet: Chips put in over the whole hand
        status: PlayerStatus for this hand
        has_acted: Acted since the last full raise on this street
        last_action: Short text of the latest action, e.g. "Raise 60"
    """
    name: str
    chips: int
    seat: int = 0
    hole_cards: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    status: PlayerStatus = PlayerStatus.PLAYING
    has_acted: bool = False
    last_action: Optional[str] = None

    def begin_hand(self) -> None:
        """Clear the last hand. A seat with no chips left stays out for good."""
        self.hole_cards, self.last_action = [], None
        self.current_bet = self.total_bet = 0
        self.has_acted = False
        busted = self.is_eliminated or self.chips <= 0
        self.status = PlayerStatus.ELIMINATED if busted else PlayerStatus.PLAYING

    def begin_street(self) -> None:
        self.current_bet = 0
        self.has_acted = False
        if self.is_playing:
            self.last_action = None

    def post(self, amount: int) -> int:
        """
        Put up to ``amount`` chips in front of the player.

        Returns:
            The chips actually moved, which is less than ``amount`` when the
            stack runs out. A seat whose stack hits zero is all-in.
        """
        moved = max(0, min(amount, self.chips))
        self.chips -= moved
        self.current_bet += moved
        self.total_bet += moved
        if moved and not self.chips:
            self.status = PlayerStatus.ALL_IN
        return moved

    def fold(self) -> None:
        self.status = PlayerStatus.FOLDED
        self.has_acted = True
        self.last_action = "Fold"

    @property
    def amount_all_in(self) -> int:
        """The street bet this seat reaches by shoving."""
        return self.current_bet + self.chips

    @property
    def is_playing(self) -> bool:
        return self.status is PlayerStatus.PLAYING

    @property
    def is_in_hand(self) -> bool:
        """Still eligible to win chips this hand."""
        return self.status in (PlayerStatus.PLAYING, PlayerStatus.ALL_IN)

    @property
    def is_eliminated(self) -> bool:
        return self.status is PlayerStatus.ELIMINATED

    def to_dict(self, show_cards: bool = False) -> Dict[str, Any]:
        """Public view of the seat; hole cards only with ``show_cards``."""
        data: Dict[str, Any] = {
            "name": self.name,
            "seat": self.seat,
            "chips": self.chips,
            "bet": self.current_bet,
            "total_bet": self.total_bet,
            "status": self.status.name,
            "last_action": self.last_action,
        }
        if show_cards:
            data["cards"] = [c.to_dict() for c in self.hole_cards]
        return data

    def __repr__(self) -> str:
        return f"Player({self.name!r}, chips={self.chips}, {self.status.name})"

    def __str__(self) -> str:
        hole = " ".join(map(str, self.hole_cards)) or "--"
        return f"{self.name} ({self.chips}) {hole}"
