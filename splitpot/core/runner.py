"""
Hand runner: plays one complete hand against a set of action providers.

The runner is the boundary between the engine and whoever decides actions
(humans, bots, remote clients). It validates every action before it reaches
``PokerGame.process_action``; a provider that keeps sending illegal actions,
or that times out, gets a default action (check if free, otherwise fold).

Every applied action and settlement line is logged and, if a display sink
is given, passed to it as a human-readable string.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Callable, List, Mapping, Optional
import logging

from splitpot.core.errors import GameStateError, IllegalActionError
from splitpot.core.game import BETTING_PHASES, PlayerAction, PokerGame
from splitpot.core.odds import break_even_equity, calculate_outs, estimate_equity
from splitpot.core.player import Player
from splitpot.core.pot import SettlementResult
from splitpot.core.rules import ActionType

if TYPE_CHECKING:
    from splitpot.agents.base import ActionProvider


logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3

DisplaySink = Callable[[str], None]


def default_action(game: PokerGame, player: Player) -> PlayerAction:
    """Check when it is free, otherwise fold."""
    if game.amount_to_call(player) == 0:
        return PlayerAction(ActionType.CHECK)
    return PlayerAction(ActionType.FOLD)


def request_action(
    game: PokerGame,
    player: Player,
    provider: ActionProvider,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> PlayerAction:
    """
    Ask a provider for an action until it returns a legal one.

    Args:
        game: Game in progress
        player: Player to act (the game's current actor)
        provider: Decision source for that player
        max_retries: Attempts before falling back to the default action

    Returns:
        A validated PlayerAction
    """
    for attempt in range(1, max_retries + 1):
        try:
            action = provider.get_action(game, player)
        except TimeoutError:
            logger.warning(f"{player.name} timed out, applying default action")
            return default_action(game, player)

        try:
            game.validate_action(player, action)
            return action
        except IllegalActionError as e:
            logger.warning(f"Rejected action from {player.name} (attempt {attempt}/{max_retries}): {e}")

    logger.warning(f"{player.name} sent no legal action, applying default action")
    return default_action(game, player)


def _emit(sink: Optional[DisplaySink], message: str) -> None:
    logger.info(message)
    if sink is not None:
        sink(message)


def report_outs(game: PokerGame, sink: Optional[DisplaySink] = None) -> None:
    """Emit outs and equity estimates for every player the game allows it for."""
    for player in game.players:
        if not game.can_show_outs(player):
            continue
        info = calculate_outs(player.hole_cards, game.community_cards, game.rules)
        if not info.has_outs:
            continue
        outs = info.all_outs
        _emit(
            sink,
            f"{player.name} outs ({len(outs)}): {' '.join(map(str, outs))} "
            f"| break-even {break_even_equity(game.pot, game.amount_to_call(player)):.2f}, "
            f"equity {estimate_equity(len(game.community_cards), len(outs)):.2f}",
        )


def run_betting_round(
    game: PokerGame,
    providers: Mapping[str, ActionProvider],
    sink: Optional[DisplaySink] = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> None:
    """
    Run the current betting round until it is over.

    Raises:
        GameStateError: The round did not terminate within its action bound
    """
    # Every full raise adds at least a big blind, so raises are bounded by the chips in play
    max_steps = game.num_players * (2 + game.total_chips // max(1, game.big_blind))
    steps = 0

    while not game.is_betting_round_over():
        steps += 1
        if steps > max_steps:
            raise GameStateError(f"Betting round exceeded {max_steps} steps")

        player = game.current_player
        if player.is_playing:
            action = request_action(game, player, providers[player.name], max_retries)
            _, event = game.process_action(player, action)
            _emit(sink, str(event))
        game.advance_turn()


def play_hand(
    game: PokerGame,
    providers: Mapping[str, ActionProvider],
    sink: Optional[DisplaySink] = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> List[SettlementResult]:
    """
    Play one full hand: blinds, betting rounds, board, settlement, cleanup.

    Args:
        game: Game between hands
        providers: Action provider for each player name
        sink: Optional display sink receiving human-readable lines
        max_retries: Attempts per action before the default action applies

    Returns:
        Settlement results of the hand
    """
    blind_event = game.start_hand()
    if blind_event is not None:
        _emit(sink, str(blind_event))

    while game.phase in BETTING_PHASES:
        if game.count_non_folded_players() <= 1:
            break

        game.prepare_betting_round()
        report_outs(game, sink)
        if game.should_skip_betting_round():
            game.deal_to_showdown()
            break

        run_betting_round(game, providers, sink, max_retries)
        if game.count_non_folded_players() <= 1:
            break
        game.advance_phase()

    if game.community_cards:
        _emit(sink, f"Board: {' '.join(str(c) for c in game.community_cards)}")

    if game.count_non_folded_players() <= 1:
        results = game.award_pot_to_last_player()
    else:
        results = game.distribute_pot()

    for result in results:
        _emit(sink, f"{result.player_name} wins {result.amount_won} ({result.hand_description})")

    for event in game.cleanup_hand():
        _emit(sink, event)

    return results
