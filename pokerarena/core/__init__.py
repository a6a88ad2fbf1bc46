"""
PokerArena Core - Pure Python Texas Hold'em hand simulation.

This module contains all game logic without any network dependencies.
"""

from pokerarena.core.card import Card, Deck, DeckExhaustedError, Rank, Suit
from pokerarena.core.player import Player
from pokerarena.core.hand import HandCategory, HandRank, evaluate_hand, compare_hands
from pokerarena.core.ranking import PlayerRank, rank_players
from pokerarena.core.actions import (
    Action, ActionRecord, ActionType, AllIn, Bet, BigBlind, Call, Check, Fold,
    PossibleAction, Raise, SmallBlind,
)
from pokerarena.core.rules import BettingState, Street
from pokerarena.core.state import RoundState
from pokerarena.core.betting import BettingRound
from pokerarena.core.pots import NoActivePlayersError, SidePot, create_side_pots, settle
from pokerarena.core.game import Game, HandSummary

__all__ = [
    "Card",
    "Deck",
    "DeckExhaustedError",
    "Rank",
    "Suit",
    "Player",
    "HandCategory",
    "HandRank",
    "evaluate_hand",
    "compare_hands",
    "PlayerRank",
    "rank_players",
    "Action",
    "ActionRecord",
    "ActionType",
    "AllIn",
    "Bet",
    "BigBlind",
    "Call",
    "Check",
    "Fold",
    "PossibleAction",
    "Raise",
    "SmallBlind",
    "BettingState",
    "Street",
    "RoundState",
    "BettingRound",
    "NoActivePlayersError",
    "SidePot",
    "create_side_pots",
    "settle",
    "Game",
    "HandSummary",
]
