#!/usr/bin/env python3
"""
PokerArena - Startup Script

Usage:
    python run.py serve [--host HOST] [--port PORT] [--reload]
    python run.py play --seat Alice:console --seat Bob:openai:gpt-4o-mini \\
        --seat Carol:random [--hands N] [--log-file hands.log]

Seat kinds: console, random, call, aggressive, or an LLM provider
(openai, azure, anthropic, deepseek, ollama) followed by the model name.
"""

import argparse
import asyncio
import logging
import random
import sys
from typing import Optional

import uvicorn
from dotenv import load_dotenv

from pokerarena.agents import ConsoleAgent, LLMAgent, create_backend
from pokerarena.agents.backends import BACKENDS
from pokerarena.core.game import Game
from pokerarena.core.player import Player
from pokerarena.core.rules import DEFAULT_BIG_BLIND, DEFAULT_BUY_IN, DEFAULT_SMALL_BLIND
from pokerarena.server.manager import BOT_KINDS, make_bot

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("pokerarena")


def build_player(
    index: int,
    seat: str,
    chips: int,
    rng: random.Random,
    show_hand: bool = False,
) -> Player:
    """
    Build a player from a NAME:KIND[:MODEL] seat description.

    Raises:
        ValueError: Malformed description or unknown kind
    """
    parts = seat.split(":", 2)
    if len(parts) < 2:
        raise ValueError(f"Seat '{seat}' must look like NAME:KIND[:MODEL]")
    name, kind = parts[0], parts[1].lower()

    if kind == "console":
        agent = ConsoleAgent()
    elif kind in BOT_KINDS:
        agent = make_bot(kind, random.Random(rng.random()))
    elif kind in BACKENDS:
        if len(parts) < 3:
            raise ValueError(f"Seat '{seat}' needs a model name")
        agent = LLMAgent(create_backend(kind, parts[2]), name=name)
    else:
        raise ValueError(f"Unknown seat kind '{kind}'")

    return Player(
        player_id=f"seat-{index}",
        name=name,
        chips=chips,
        agent=agent,
        show_hand_in_log=show_hand,
    )


async def play(args: argparse.Namespace) -> None:
    rng = random.Random(args.seed)
    players = [
        build_player(i, seat, args.chips, rng, args.show_hands)
        for i, seat in enumerate(args.seat)
    ]
    game = Game(
        players,
        small_blind=args.small_blind,
        big_blind=args.big_blind,
        rng=rng,
    )

    summaries = await game.play(max_hands=args.hands)

    print(f"\nPlayed {len(summaries)} hands.")
    for player in sorted(players, key=lambda p: p.chips, reverse=True):
        print(f"  {player.name}: {player.chips} chips")
    if not game.is_game_running():
        print("Game over!")


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, force=True)
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger("pokerarena").addHandler(handler)


def main():
    parser = argparse.ArgumentParser(description="PokerArena")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP service")
    serve.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve.add_argument("--reload", action="store_true", help="Enable auto-reload")

    game = sub.add_parser("play", help="Play hands in the terminal")
    game.add_argument(
        "--seat", action="append", required=True,
        help="NAME:KIND[:MODEL], repeat once per seat in table order",
    )
    game.add_argument("--chips", type=int, default=DEFAULT_BUY_IN, help="Starting chips")
    game.add_argument("--small-blind", type=int, default=DEFAULT_SMALL_BLIND)
    game.add_argument("--big-blind", type=int, default=DEFAULT_BIG_BLIND)
    game.add_argument("--hands", type=int, default=None, help="Stop after N hands")
    game.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    game.add_argument("--log-file", default=None, help="Also write the log here")
    game.add_argument(
        "--show-hands", action="store_true",
        help="Write every seat's hole cards to the log",
    )
    game.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    args = parser.parse_args()

    if args.command == "serve":
        uvicorn.run(
            "pokerarena.server.app:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return

    load_dotenv()
    configure_logging(args.log_level, args.log_file)
    try:
        asyncio.run(play(args))
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
