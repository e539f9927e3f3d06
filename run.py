#!/usr/bin/env python3
"""
splitpot - hand simulation script

Plays hands between bots and logs every action and settlement.

Usage:
    python run.py [--variant PLO8] [--players 4] [--hands 50] [--seed 7] [--outs] [--dev]
"""

import argparse
import logging
import random

from splitpot.agents import RandomActionProvider
from splitpot.core.rules import get_rules
from splitpot.core.runner import play_hand
from splitpot.logger import init_logger
from splitpot.schemas import GameConfig


logger = logging.getLogger("splitpot.run")


def main():
    parser = argparse.ArgumentParser(description="splitpot hand simulator")
    parser.add_argument("--variant", default="PLS7", help="NLH, PLO, PLO8, PLS or PLS7")
    parser.add_argument("--players", type=int, default=4, help="Number of bots")
    parser.add_argument("--hands", type=int, default=50, help="Maximum hands to play")
    parser.add_argument("--chips", type=int, default=1000, help="Starting chips")
    parser.add_argument("--blind-up", type=int, default=10, help="Double blinds every N hands")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--outs", action="store_true", help="Report outs and equity on the flop and turn")
    parser.add_argument("--dev", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    init_logger(args.dev)
    rng = random.Random(args.seed)

    config = GameConfig(
        player_names=[f"CPU {i + 1}" for i in range(args.players)],
        starting_chips=args.chips,
        blind_up_interval=args.blind_up,
        show_outs=args.outs or args.dev,
    )
    game = config.create_game(get_rules(args.variant), rng)
    providers = {name: RandomActionProvider(rng, name=name) for name in config.player_names}

    for _ in range(args.hands):
        if game.is_game_over():
            break
        play_hand(game, providers)

    standings = sorted(game.players, key=lambda p: p.chips, reverse=True)
    logger.info("Final standings: " + ", ".join(f"{p.name}={p.chips}" for p in standings))


if __name__ == "__main__":
    main()
