"""
Table management for the HTTP service.

This module provides:
- Table: A game instance with the lock that serialises its hands
- TableManager: Creates, looks up and removes tables
"""

from __future__ import annotations
from typing import Dict, List, Optional
from dataclasses import dataclass, field
import asyncio
import logging
import random

from pokerarena.agents.random_agent import AggressiveAgent, CallAgent, RandomAgent
from pokerarena.core.game import Game, HandSummary
from pokerarena.core.player import Player
from pokerarena.core.rules import DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND


logger = logging.getLogger(__name__)

BOT_KINDS = ("random", "call", "aggressive")


@dataclass
class SeatSpec:
    """A seat to create: who sits there and which bot plays it."""
    name: str
    chips: int
    agent: str = "call"


@dataclass
class Table:
    """A table with its game and the lock held while a hand is played."""
    table_id: str
    game: Game
    seed: Optional[int] = None
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def is_busy(self) -> bool:
        return self.lock.locked()


def make_bot(kind: str, rng: random.Random):
    """Build a bot decision provider by kind."""
    if kind == "random":
        return RandomAgent(rng=rng)
    if kind == "call":
        return CallAgent()
    if kind == "aggressive":
        return AggressiveAgent()
    raise ValueError(f"Unknown agent kind '{kind}'. Choose from: {', '.join(BOT_KINDS)}")


class TableManager:
    """
    Manages tables played by bots.

    Usage:
        manager = TableManager()
        table = manager.create_table([SeatSpec("Alice", 1000), SeatSpec("Bob", 1000)])
        summary = await manager.play_hand(table.table_id)
        manager.remove_table(table.table_id)
    """

    def __init__(self):
        self.tables: Dict[str, Table] = {}
        self._table_counter = 0

    def create_table(
        self,
        seats: List[SeatSpec],
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        seed: Optional[int] = None,
    ) -> Table:
        """
        Create a new table.

        Raises:
            ValueError: Duplicate names, unknown bot kinds or invalid table
                settings
        """
        names = [s.name for s in seats]
        if len(set(names)) != len(names):
            raise ValueError("Player names must be unique")

        rng = random.Random(seed)
        players = [
            Player(
                player_id=f"seat-{i}",
                name=spec.name,
                chips=spec.chips,
                agent=make_bot(spec.agent, random.Random(rng.random())),
            )
            for i, spec in enumerate(seats)
        ]
        game = Game(players, small_blind=small_blind, big_blind=big_blind, rng=rng)

        self._table_counter += 1
        table_id = f"table-{self._table_counter}"
        table = Table(table_id=table_id, game=game, seed=seed)
        self.tables[table_id] = table
        logger.info(f"Created table {table_id} with {len(players)} players")

        return table

    def get_table(self, table_id: str) -> Optional[Table]:
        """Get a table by ID."""
        return self.tables.get(table_id)

    def remove_table(self, table_id: str) -> bool:
        """
        Remove a table.

        Returns:
            True if the table existed
        """
        table = self.tables.pop(table_id, None)
        if table is None:
            return False
        logger.info(f"Removed table {table_id}")
        return True

    async def play_hand(self, table_id: str) -> Optional[HandSummary]:
        """
        Play one hand at a table; hands at the same table never overlap.

        Returns:
            The hand summary, or None when the game is over

        Raises:
            KeyError: Unknown table
        """
        table = self.tables[table_id]
        async with table.lock:
            summary = await table.game.play_round()
        if summary is not None:
            logger.info(f"Table {table_id} finished hand #{summary.hand_number}")
        return summary
