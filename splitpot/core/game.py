"""
Poker game engine - betting round state machine.

This module drives a hand for any supported variant:
- Dealer button rotation, blinds (with optional blind-up interval)
- Dealing hole cards and the board (with burn cards)
- Betting rounds: whose turn it is, applying actions, round completion
- Legal action and raise-range queries for action providers
- Settlement through the pot engine, eliminations, game over

Heads-up: the dealer posts the small blind and acts first before the flop;
the big blind acts first after the flop.

A full bet or raise reopens the action for every other player. An all-in
for less than a full raise moves the bet to call up but does not reopen
the action: players who already acted may only call or fold.

The engine is single-threaded and owns all its state. Randomness comes only
from the ``random.Random`` passed in at construction.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
import logging
import random

from splitpot.core.betting import BettingLimitCalculator, calculator_for, min_raise_total
from splitpot.core.card import Card, Deck
from splitpot.core.errors import GameStateError, IllegalActionError, PotAccountingError, RuleConfigError
from splitpot.core.hand import HandStrengthEvaluator, StandardHandEvaluator
from splitpot.core.player import Player, PlayerStatus
from splitpot.core.pot import SettlementResult, award_to_last_player, settle
from splitpot.core.rules import (
    ActionType, GamePhase, RuleDescriptor, get_blind_positions,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, DEFAULT_BUY_IN,
    MIN_PLAYERS, MAX_PLAYERS, FLOP_CARDS, TURN_CARDS, RIVER_CARDS,
    TOTAL_COMMUNITY_CARDS,
)


logger = logging.getLogger(__name__)

BETTING_PHASES = (GamePhase.PREFLOP, GamePhase.FLOP, GamePhase.TURN, GamePhase.RIVER)


@dataclass
class PlayerAction:
    """
    An action chosen by a player.

    ``amount`` is only meaningful for BET/RAISE and is the player's new
    total bet for the round, not the increment.
    """
    action_type: ActionType
    amount: int = 0


@dataclass
class ActionEvent:
    """Record of an applied action, for display sinks."""
    player_name: str
    action: ActionType
    amount: int = 0
    description: str = ""

    def __str__(self) -> str:
        return f"{self.player_name}: {self.description or self.action.value}"


@dataclass
class BlindEvent:
    """Blinds went up at the start of a hand."""
    small_blind: int
    big_blind: int

    def __str__(self) -> str:
        return f"Blinds are now {self.small_blind}/{self.big_blind}"


@dataclass
class BettingRoundState:
    """
    Per-round betting state, reset at the start of every round.

    Attributes:
        bet_to_call: Highest current bet in the round
        last_raise_amount: Increment of the last full bet or raise
        current_actor_index: Seat whose turn it is
        action_closer_index: Seat whose turn closes the round if nobody raises
        aggressor: Player who made the last full bet or raise (not owned)
        actions_taken: Actions since the last full bet or raise, that one included
    """
    bet_to_call: int = 0
    last_raise_amount: int = 0
    current_actor_index: int = 0
    action_closer_index: int = 0
    aggressor: Optional[Player] = None
    actions_taken: int = 0


class PokerGame:
    """
    Multi-variant poker game engine.

    Usage:
        game = PokerGame(["Alice", "Bob", "Carol"], rules=PLO8, rng=random.Random(7))
        game.start_hand()
        while game.phase in BETTING_PHASES:
            game.prepare_betting_round()
            while not game.is_betting_round_over():
                player = game.current_player
                if player.is_playing:
                    action = provider.get_action(game, player)
                    game.validate_action(player, action)
                    game.process_action(player, action)
                game.advance_turn()
            ...
        results = game.distribute_pot()

    ``splitpot.core.runner.play_hand`` wraps this loop.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        rules: RuleDescriptor,
        rng: random.Random,
        starting_chips: int = DEFAULT_BUY_IN,
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        hand_evaluator: Optional[HandStrengthEvaluator] = None,
        betting_calculator: Optional[BettingLimitCalculator] = None,
        blind_up_interval: int = 0,
        show_outs: bool = False,
    ):
        """
        Initialize a new game.

        Args:
            player_names: Unique names, in seat order
            rules: Variant rules
            rng: Random source used for every shuffle
            starting_chips: Starting stack for each player
            small_blind: Small blind amount
            big_blind: Big blind amount
            hand_evaluator: Hand strength strategy (defaults to the rules' evaluator)
            betting_calculator: Raise range strategy (defaults from rules.betting_limit)
            blind_up_interval: Double the blinds every N hands (0 disables)
            show_outs: Report outs and equity for players on the flop and turn
        """
        if not MIN_PLAYERS <= len(player_names) <= MAX_PLAYERS:
            raise RuleConfigError(f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}")
        if len(set(player_names)) != len(player_names):
            raise RuleConfigError("Player names must be unique")
        if len(player_names) * rules.hole_card_count + TOTAL_COMMUNITY_CARDS + 3 > 52:
            raise RuleConfigError(f"Not enough cards to deal {rules.abbreviation} to {len(player_names)} players")
        if starting_chips <= 0:
            raise RuleConfigError("Starting chips must be positive")
        if not 0 < small_blind <= big_blind:
            raise RuleConfigError("Blinds must satisfy 0 < small_blind <= big_blind")
        if blind_up_interval < 0:
            raise RuleConfigError("blind_up_interval cannot be negative")

        self.rules = rules
        self.rng = rng
        self.small_blind = small_blind
        self.big_blind = big_blind
        self.blind_up_interval = blind_up_interval
        self.show_outs = show_outs
        self.hand_evaluator = hand_evaluator or StandardHandEvaluator(rules)
        self.betting_calculator = betting_calculator or calculator_for(rules.betting_limit)

        self.players: List[Player] = [
            Player(name=name, chips=starting_chips, seat=i)
            for i, name in enumerate(player_names)
        ]
        self.total_chips = starting_chips * len(self.players)

        # Hand state
        self.deck = Deck()
        self.community_cards: List[Card] = []
        self.phase = GamePhase.WAITING
        self.hand_number = 0
        self.pot = 0

        # Positions; the first hand puts the button on seat 0
        self.dealer_index = len(self.players) - 1
        self.small_blind_index = 0
        self.big_blind_index = 0

        self.state = BettingRoundState()

    # ============= Queries =============

    @property
    def num_players(self) -> int:
        """Number of seats at the table."""
        return len(self.players)

    @property
    def current_player(self) -> Player:
        """The player whose turn it is."""
        return self.players[self.state.current_actor_index]

    def is_hand_running(self) -> bool:
        """Check if a hand is currently in progress."""
        return self.phase not in (GamePhase.WAITING, GamePhase.HAND_OVER)

    def is_game_over(self) -> bool:
        """At most one player still has chips."""
        return sum(1 for p in self.players if not p.is_eliminated and p.chips > 0) < MIN_PLAYERS

    def count_remaining_players(self) -> int:
        """Players not eliminated from the game."""
        return sum(1 for p in self.players if not p.is_eliminated)

    def count_non_folded_players(self) -> int:
        """Players still in the hand, all-in players included."""
        return sum(1 for p in self.players if p.is_in_hand)

    def count_players_able_to_act(self) -> int:
        """Players who can still make betting decisions this hand."""
        return sum(1 for p in self.players if p.is_playing)

    def find_player(self, name: str) -> Optional[Player]:
        """Get a player by name."""
        for player in self.players:
            if player.name == name:
                return player
        return None

    def can_show_outs(self, player: Player) -> bool:
        """Outs are reported on the flop and turn for players still in the hand."""
        return self.show_outs and player.is_in_hand and self.phase in (GamePhase.FLOP, GamePhase.TURN)

    def amount_to_call(self, player: Player) -> int:
        """Chips the player must add to match the current bet."""
        return max(0, self.state.bet_to_call - player.current_bet)

    def _next_index(self, start: int, predicate: Callable[[Player], bool]) -> Optional[int]:
        """First seat after ``start`` (wrapping, start itself last) matching predicate."""
        for offset in range(1, self.num_players + 1):
            index = (start + offset) % self.num_players
            if predicate(self.players[index]):
                return index
        return None

    def _previous_index(self, start: int, predicate: Callable[[Player], bool]) -> Optional[int]:
        """First seat before ``start`` (wrapping) matching predicate."""
        for offset in range(1, self.num_players + 1):
            index = (start - offset) % self.num_players
            if predicate(self.players[index]):
                return index
        return None

    @staticmethod
    def _in_game(player: Player) -> bool:
        return not player.is_eliminated

    # ============= Hand lifecycle =============

    def start_hand(self) -> Optional[BlindEvent]:
        """
        Start a new hand: blinds, button, deal.

        Returns:
            BlindEvent if the blinds went up this hand, else None

        Raises:
            GameStateError: Fewer than two players have chips
        """
        if self.is_game_over():
            raise GameStateError("Cannot start hand: not enough players with chips")

        self.hand_number += 1
        event = None
        if (
            self.blind_up_interval > 0
            and self.hand_number > 1
            and (self.hand_number - 1) % self.blind_up_interval == 0
        ):
            self.small_blind *= 2
            self.big_blind *= 2
            event = BlindEvent(self.small_blind, self.big_blind)
            logger.info(f"Blinds up: {self.small_blind}/{self.big_blind}")

        logger.info(f"Starting hand #{self.hand_number} ({self.rules.abbreviation})")

        self.deck = Deck()
        self.deck.shuffle(self.rng)
        self.community_cards = []
        self.pot = 0
        self.state = BettingRoundState()
        self.phase = GamePhase.PREFLOP

        for player in self.players:
            player.begin_hand()

        self._move_dealer_button()
        self._post_blinds()
        self._deal_hole_cards()

        return event

    def _move_dealer_button(self) -> None:
        """Move the button to the next seat still in the game and place the blinds."""
        self.dealer_index = self._next_index(self.dealer_index, self._in_game)

        active_indices = [i for i, p in enumerate(self.players) if self._in_game(p)]
        sb_pos, bb_pos = get_blind_positions(
            len(active_indices), active_indices.index(self.dealer_index)
        )
        self.small_blind_index = active_indices[sb_pos]
        self.big_blind_index = active_indices[bb_pos]

    def _post_blinds(self) -> None:
        """Post small and big blinds. Short stacks go all-in for less."""
        sb_player = self.players[self.small_blind_index]
        bb_player = self.players[self.big_blind_index]

        sb_amount = self._post(sb_player, self.small_blind)
        sb_player.last_action = f"SB {sb_amount}"
        bb_amount = self._post(bb_player, self.big_blind)
        bb_player.last_action = f"BB {bb_amount}"

        self.state.bet_to_call = self.big_blind
        self.state.last_raise_amount = 0

        logger.debug(f"Blinds posted: SB={sb_amount} BB={bb_amount}")

    def _deal_hole_cards(self) -> None:
        """Deal hole cards one at a time around the table."""
        for _ in range(self.rules.hole_card_count):
            for player in self.players:
                if self._in_game(player):
                    player.hole_cards.append(self.deck.deal_one())

    def _post(self, player: Player, amount: int) -> int:
        posted = player.post(amount)
        self.pot += posted
        return posted

    # ============= Betting rounds =============

    def prepare_betting_round(self) -> None:
        """
        Reset per-round state and pick the first actor and the action closer.

        Pre-flop the blinds stay in front of the players and the big blind
        closes the action. Post-flop bets are cleared, the first seat left of
        the button starts and the seat before it closes.
        """
        if self.phase not in BETTING_PHASES:
            raise GameStateError(f"No betting in phase {self.phase.name}")

        state = self.state
        state.aggressor = None
        state.actions_taken = 0

        if self.phase == GamePhase.PREFLOP:
            for player in self.players:
                player.has_acted = False
            state.action_closer_index = self.big_blind_index
            first = self._next_index(self.big_blind_index, self._in_game)
        else:
            for player in self.players:
                if self._in_game(player):
                    player.begin_street()
            state.bet_to_call = 0
            state.last_raise_amount = 0
            first = self._next_index(self.dealer_index, self._in_game)
            state.action_closer_index = self._previous_index(first, self._in_game)

        if not self.players[first].is_playing:
            first = self._next_index(first, lambda p: p.is_playing) or first
        state.current_actor_index = first

    def is_betting_round_over(self) -> bool:
        """
        Check whether the current betting round has concluded.

        The round is over when at most one player is left in the hand, or
        when every player able to act has acted since the last full raise and
        matched the bet to call. Posting a blind is not acting, so the big
        blind always gets its option.
        """
        if self.count_non_folded_players() <= 1:
            return True

        for player in self.players:
            if not player.is_playing:
                continue
            if not player.has_acted or player.current_bet < self.state.bet_to_call:
                return False
        return True

    def should_skip_betting_round(self) -> bool:
        """
        Whether no betting is possible this round.

        True when fewer than two players can act, unless the only player
        able to act still has to respond to a bet.
        """
        if self.count_non_folded_players() <= 1:
            return True
        playing = [p for p in self.players if p.is_playing]
        if len(playing) >= 2:
            return False
        return all(p.current_bet >= self.state.bet_to_call for p in playing)

    def advance_turn(self) -> None:
        """Move the action to the next player able to act."""
        index = self._next_index(self.state.current_actor_index, lambda p: p.is_playing)
        if index is not None:
            self.state.current_actor_index = index

    def process_action(self, player: Player, action: PlayerAction) -> Tuple[bool, ActionEvent]:
        """
        Apply an action to the game state.

        Amounts are assumed validated (see ``validate_action``); BET/RAISE
        amounts are only clamped to the player's stack.

        Args:
            player: Acting player
            action: Chosen action

        Returns:
            Tuple of (was_aggressive, ActionEvent). Only a full bet or raise
            is aggressive.

        Raises:
            IllegalActionError: CHECK while a call is owed
        """
        state = self.state
        action_type = action.action_type
        event = ActionEvent(player_name=player.name, action=action_type)

        if action_type == ActionType.CHECK and player.current_bet < state.bet_to_call:
            raise IllegalActionError(
                f"Cannot check, must call {self.amount_to_call(player)}",
                player_name=player.name, action=action,
            )

        state.actions_taken += 1

        if action_type == ActionType.FOLD:
            player.fold()
            event.description = "Fold"

        elif action_type == ActionType.CHECK:
            player.has_acted = True
            event.description = "Check"

        elif action_type == ActionType.CALL:
            posted = self._post(player, self.amount_to_call(player))
            player.has_acted = True
            event.amount = posted
            event.description = f"Call {posted}" + self._all_in_suffix(player)

        elif action_type in (ActionType.BET, ActionType.RAISE):
            return self._apply_bet_or_raise(player, action, event)

        else:
            raise IllegalActionError(f"Unknown action: {action_type}", player.name, action)

        player.last_action = event.description
        return False, event

    def _apply_bet_or_raise(
        self,
        player: Player,
        action: PlayerAction,
        event: ActionEvent,
    ) -> Tuple[bool, ActionEvent]:
        state = self.state
        previous_bet = state.bet_to_call
        full_minimum = min_raise_total(previous_bet, state.last_raise_amount, self.big_blind)

        target = min(action.amount, player.amount_all_in)
        posted = self._post(player, target - player.current_bet)
        player.has_acted = True
        new_total = player.current_bet

        if new_total <= previous_bet:
            # All-in that does not even cover the call
            event.amount = posted
            event.description = f"Call {posted}" + self._all_in_suffix(player)
            player.last_action = event.description
            return False, event

        verb = "Bet" if action.action_type == ActionType.BET else "Raise to"
        event.amount = new_total
        event.description = f"{verb} {new_total}" + self._all_in_suffix(player)
        player.last_action = event.description
        state.bet_to_call = new_total

        if new_total < full_minimum:
            logger.debug(
                f"{player.name} all-in for {new_total}, short of a full raise to "
                f"{full_minimum}; action not reopened"
            )
            return False, event

        state.last_raise_amount = new_total - previous_bet
        state.actions_taken = 1
        state.aggressor = player
        seat = self.players.index(player)
        state.action_closer_index = self._previous_index(seat, self._in_game)
        for other in self.players:
            if other is not player and other.is_playing:
                other.has_acted = False
        return True, event

    @staticmethod
    def _all_in_suffix(player: Player) -> str:
        return " (All-in)" if player.status == PlayerStatus.ALL_IN else ""

    # ============= Legal actions =============

    def calculate_betting_limits(self, player: Optional[Player] = None) -> Tuple[int, int]:
        """(min_raise_total, max_raise_total) for the player (default: current actor)."""
        return self.betting_calculator.calculate_limits(self, player or self.current_player)

    def can_raise(self, player: Player) -> bool:
        """
        Whether the player may bet or raise.

        Requires chips beyond the call, and that the action is open to the
        player: after a short all-in, players who already acted may only
        call or fold.
        """
        return (
            player.is_playing
            and player.chips > self.amount_to_call(player)
            and not player.has_acted
        )

    def legal_actions(self, player: Optional[Player] = None) -> List[Dict[str, Any]]:
        """
        Get legal actions for a player (default: current actor).

        Returns:
            List of dicts with ``type`` (ActionType) and, where relevant,
            ``amount`` (call) or ``min``/``max`` (bet/raise totals)
        """
        player = player or self.current_player
        if not player.is_playing:
            return []

        owed = self.amount_to_call(player)
        actions: List[Dict[str, Any]] = [{"type": ActionType.FOLD}]

        if owed == 0:
            actions.append({"type": ActionType.CHECK})
        else:
            actions.append({"type": ActionType.CALL, "amount": min(owed, player.chips)})

        if self.can_raise(player):
            low, high = self.calculate_betting_limits(player)
            action_type = ActionType.BET if self.state.bet_to_call == 0 else ActionType.RAISE
            actions.append({"type": action_type, "min": low, "max": high})

        return actions

    def validate_action(self, player: Player, action: PlayerAction) -> None:
        """
        Check an action at the provider boundary.

        Raises:
            IllegalActionError: Out of turn, action not available, or a
                bet/raise total outside the legal range
        """
        if player is not self.current_player:
            raise IllegalActionError(
                f"It is {self.current_player.name}'s turn, not {player.name}'s",
                player.name, action,
            )

        legal = {a["type"]: a for a in self.legal_actions(player)}
        if action.action_type not in legal:
            raise IllegalActionError(
                f"{action.action_type.value} is not legal for {player.name} "
                f"(legal: {', '.join(t.value for t in legal)})",
                player.name, action,
            )

        if action.action_type in (ActionType.BET, ActionType.RAISE):
            limits = legal[action.action_type]
            if not limits["min"] <= action.amount <= limits["max"]:
                raise IllegalActionError(
                    f"{action.action_type.value} to {action.amount} outside "
                    f"[{limits['min']}, {limits['max']}]",
                    player.name, action,
                )

    # ============= Board =============

    def advance_phase(self) -> None:
        """Move to the next phase, dealing community cards as required."""
        if self.phase == GamePhase.PREFLOP:
            self._deal_community(FLOP_CARDS)
            self.phase = GamePhase.FLOP
        elif self.phase == GamePhase.FLOP:
            self._deal_community(TURN_CARDS)
            self.phase = GamePhase.TURN
        elif self.phase == GamePhase.TURN:
            self._deal_community(RIVER_CARDS)
            self.phase = GamePhase.RIVER
        elif self.phase == GamePhase.RIVER:
            self.phase = GamePhase.SHOWDOWN
        elif self.phase == GamePhase.SHOWDOWN:
            self.phase = GamePhase.HAND_OVER
        else:
            raise GameStateError(f"Cannot advance from phase {self.phase.name}")

    def deal_to_showdown(self) -> None:
        """Deal the rest of the board when no more betting is possible."""
        while self.phase in BETTING_PHASES:
            self.advance_phase()

    def _deal_community(self, n: int) -> None:
        self.deck.burn()
        self.community_cards.extend(self.deck.deal(n))
        logger.debug(f"Board: {' '.join(c.short_str for c in self.community_cards)}")

    # ============= Settlement =============

    def distribute_pot(self) -> List[SettlementResult]:
        """Settle the pot at showdown and pay the winners."""
        results = settle(
            self.players, self.community_cards, self.hand_evaluator,
            self.dealer_index, self.pot,
        )
        self._finish_settlement(results)
        return results

    def award_pot_to_last_player(self) -> List[SettlementResult]:
        """Give the pot to the only player who did not fold."""
        results = award_to_last_player(self.players, self.pot)
        self._finish_settlement(results)
        return results

    def _finish_settlement(self, results: List[SettlementResult]) -> None:
        self.pot = 0
        self.phase = GamePhase.HAND_OVER
        self.assert_chips_conserved()
        for result in results:
            logger.info(f"{result.player_name} wins {result.amount_won}: {result.hand_description}")

    def cleanup_hand(self) -> List[str]:
        """
        Post-hand maintenance: eliminate busted players, detect game over.

        Returns:
            Human-readable event strings
        """
        events = []
        for player in self.players:
            if player.chips == 0 and not player.is_eliminated:
                player.status = PlayerStatus.ELIMINATED
                events.append(f"{player.name} has been eliminated!")

        if self.count_remaining_players() <= 1:
            for player in self.players:
                if not player.is_eliminated:
                    events.append(f"{player.name} wins the game!")
                    break

        self.phase = GamePhase.HAND_OVER
        return events

    def assert_chips_conserved(self) -> None:
        """
        Raise if chips were created or destroyed.

        Raises:
            PotAccountingError: sum(chips) + pot differs from the starting total
        """
        total = sum(p.chips for p in self.players) + self.pot
        if total != self.total_chips:
            raise PotAccountingError(self.total_chips, total)

    # ============= State =============

    def get_state(self, for_player: Optional[str] = None) -> Dict[str, Any]:
        """
        Snapshot of the table for display sinks and action providers.

        Args:
            for_player: If given, include that player's hole cards and legal actions
        """
        state = {
            "variant": self.rules.abbreviation,
            "phase": self.phase.name,
            "hand_number": self.hand_number,
            "pot": self.pot,
            "bet_to_call": self.state.bet_to_call,
            "blinds": (self.small_blind, self.big_blind),
            "board": [c.to_dict() for c in self.community_cards],
            "dealer": self.players[self.dealer_index].name,
            "current_player": self.current_player.name if self.is_hand_running() else None,
            "players": [p.to_dict() for p in self.players],
        }

        player = self.find_player(for_player) if for_player else None
        if player is not None:
            state["hand"] = [c.to_dict() for c in player.hole_cards]
            if self.is_hand_running() and player is self.current_player:
                state["legal_actions"] = [
                    {**a, "type": a["type"].value} for a in self.legal_actions(player)
                ]

        return state
