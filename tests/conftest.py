"""
Pytest configuration and shared fixtures for PokerArena tests.
"""

import asyncio
import random
from typing import List, Optional, Sequence

import pytest
from pokerarena.agents.random_agent import CallAgent, ScriptedAgent
from pokerarena.core.card import Card, Deck, Rank, Suit, parse_cards
from pokerarena.core.player import Player
from pokerarena.core.state import RoundState


NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Heidi", "Ivan", "Judy"]


def run(coro):
    """Drive a coroutine to completion."""
    return asyncio.run(coro)


def make_players(chips: Sequence[int], agents: Optional[Sequence] = None) -> List[Player]:
    """Players named Alice, Bob, ... in seat order, calling by default."""
    return [
        Player(
            player_id=f"p{i}",
            name=NAMES[i],
            chips=amount,
            agent=agents[i] if agents else CallAgent(),
        )
        for i, amount in enumerate(chips)
    ]


def scripted(*scripts) -> List[ScriptedAgent]:
    return [ScriptedAgent(actions) for actions in scripts]


def stacked_deck(hole: Sequence[str], board: str) -> Deck:
    """
    A deck that deals the given hole cards (one string per seat, two cards
    each) and then the board.
    """
    cards = [c for seat in hole for c in parse_cards(seat)] + parse_cards(board)
    return Deck.stacked(cards)


@pytest.fixture
def deck():
    """Create a fresh deck shuffled with a fixed seed."""
    return Deck(rng=random.Random(42))


@pytest.fixture
def unshuffled_deck():
    """Create a fresh unshuffled deck."""
    return Deck(shuffle=False)


@pytest.fixture
def sample_player():
    """Create a sample player with 1000 chips."""
    return Player(player_id="test_player", name="Tester", chips=1000, agent=CallAgent())


@pytest.fixture
def four_players():
    """Four calling players with 1000 chips each."""
    return make_players([1000, 1000, 1000, 1000])


@pytest.fixture
def round_state(four_players):
    """A pre-flop round state with blinds 5/10 posted by seats 0 and 1."""
    state = RoundState(players=four_players, small_blind=5, big_blind=10)
    four_players[0].commit(5)
    four_players[1].commit(10)
    state.pot = 15
    state.current_bet = 10
    state.last_raise_by = 10
    return state


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
