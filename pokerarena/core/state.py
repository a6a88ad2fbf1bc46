"""
Per-hand round state shared between the orchestrator, the betting engine and
the decision providers.
"""

from __future__ import annotations
from typing import List, Optional
from dataclasses import dataclass, field
import logging

from pokerarena.core.actions import ActionRecord
from pokerarena.core.card import Card
from pokerarena.core.player import Player
from pokerarena.core.rules import Street


logger = logging.getLogger(__name__)


@dataclass
class RoundState:
    """
    Mutable record of one hand.

    Attributes:
        players: Seats in table order for this hand
        small_blind: Small blind amount
        big_blind: Big blind amount
        pot: Chips collected so far
        current_bet: Highest street bet among active players
        last_raise_by: Size of the last full raise, the minimum next raise
        community_cards: 0, 3, 4 or 5 board cards
        street: Street being played
        actions: Applied actions in order
        log: Human-readable lines for the hand
        to_act: Player currently asked for a decision
    """
    players: List[Player]
    small_blind: int
    big_blind: int
    pot: int = 0
    current_bet: int = 0
    last_raise_by: int = 0
    community_cards: List[Card] = field(default_factory=list)
    street: Street = Street.PREFLOP
    actions: List[ActionRecord] = field(default_factory=list)
    log: List[str] = field(default_factory=list)
    to_act: Optional[Player] = None

    def reset(self) -> None:
        """Reset for a new hand."""
        self.pot = 0
        self.current_bet = 0
        self.last_raise_by = 0
        self.community_cards = []
        self.street = Street.PREFLOP
        self.actions = []
        self.log = []
        self.to_act = None

    def add_log(self, line: str) -> None:
        logger.info(line)
        self.log.append(line)

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if p.is_active]

    def players_stack(self) -> str:
        """One line per player with their chip count."""
        return "\n".join(f"{p.name} ({p.chips} chips)" for p in self.players)
