"""
PokerArena - No-Limit Texas Hold'em table simulator

A tournament table simulator where every seat is driven by a decision
provider:
- Pure Python hand engine (betting streets, side pots, hand ranking)
- Bot, console and LLM-backed decision providers
- FastAPI service to run tables over HTTP

Usage:
    from pokerarena.core import Game, Player
    from pokerarena.agents import CallAgent, RandomAgent
"""

__version__ = "0.2.0"

from pokerarena.core.card import Card, Deck
from pokerarena.core.player import Player
from pokerarena.core.game import Game, HandSummary
from pokerarena.core.hand import HandRank, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "Game",
    "HandSummary",
    "HandRank",
    "evaluate_hand",
    "__version__",
]
