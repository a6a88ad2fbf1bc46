"""
Texas Hold'em Hand Orchestrator.

Sequences one hand at a time:
- reset per-hand player fields and shuffle a fresh deck
- post blinds (seat 0 small, seat 1 big) and deal hole cards
- run the pre-flop, flop, turn and river betting streets
- settle the pot (side pots at showdown)
- eliminate busted players and rotate the blinds

Chips are the only state carried between hands, together with the seat
order.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import logging
import random

from pokerarena.core.actions import BigBlind, SmallBlind
from pokerarena.core.betting import BettingRound, post_blind
from pokerarena.core.card import Card, Deck
from pokerarena.core.hand import HandRank
from pokerarena.core.player import Player
from pokerarena.core.pots import Settlement, SidePot, create_side_pots, settle
from pokerarena.core.rules import (
    Street,
    DEFAULT_BIG_BLIND, DEFAULT_SMALL_BLIND, MAX_PLAYERS, MIN_PLAYERS,
    HOLE_CARDS, STREET_CARDS,
)
from pokerarena.core.state import RoundState


logger = logging.getLogger(__name__)


@dataclass
class ShowdownEntry:
    """A contesting player's hand at showdown."""
    player_id: str
    name: str
    cards: List[Card]
    hand: HandRank

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "cards": [str(c) for c in self.cards],
            "category": self.hand.name,
            "kickers": list(self.hand.kickers),
            "description": self.hand.describe(),
        }


@dataclass
class HandSummary:
    """What happened in one hand, keyed by player name."""
    hand_number: int
    pot: int
    community_cards: List[Card] = field(default_factory=list)
    side_pots: List[SidePot] = field(default_factory=list)
    showdown: List[ShowdownEntry] = field(default_factory=list)
    payouts: Dict[str, int] = field(default_factory=dict)
    final_chips: Dict[str, int] = field(default_factory=dict)
    eliminated: List[str] = field(default_factory=list)
    log: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hand_number": self.hand_number,
            "pot": self.pot,
            "community_cards": [str(c) for c in self.community_cards],
            "side_pots": [
                {"amount": p.amount, "players": [pl.name for pl in p.players]}
                for p in self.side_pots
            ],
            "showdown": [entry.to_dict() for entry in self.showdown],
            "payouts": dict(self.payouts),
            "final_chips": dict(self.final_chips),
            "eliminated": list(self.eliminated),
            "log": list(self.log),
        }


class Game:
    """
    A single No-Limit Texas Hold'em table.

    Usage:
        game = Game(players, small_blind=5, big_blind=10, rng=random.Random(7))
        summary = await game.play_round()
    """

    def __init__(
        self,
        players: Sequence[Player],
        small_blind: int = DEFAULT_SMALL_BLIND,
        big_blind: int = DEFAULT_BIG_BLIND,
        rng: Optional[random.Random] = None,
        deck_factory: Optional[Callable[[], Deck]] = None,
    ):
        """
        Initialize a table.

        Args:
            players: Players in seat order (seat 0 posts the first small blind)
            small_blind: Small blind amount
            big_blind: Big blind amount
            rng: Randomness source for shuffling
            deck_factory: Builds the deck for each hand (defaults to a deck
                shuffled with `rng`)
        """
        if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
            raise ValueError(
                f"Number of players must be {MIN_PLAYERS}-{MAX_PLAYERS}"
            )
        if small_blind <= 0 or big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if small_blind > big_blind:
            raise ValueError("Small blind cannot exceed big blind")

        self.players: List[Player] = list(players)
        self.small_blind = small_blind
        self.big_blind = big_blind
        self.rng = rng or random.Random()
        self.deck_factory = deck_factory or (lambda: Deck(rng=self.rng))

        self.deck: Optional[Deck] = None
        self.state = RoundState(
            players=self.players,
            small_blind=small_blind,
            big_blind=big_blind,
        )
        self.hand_number = 0
        self.last_summary: Optional[HandSummary] = None

    def is_game_running(self) -> bool:
        """Check if at least two players still have chips."""
        return sum(1 for p in self.players if p.chips > 0) >= 2

    @property
    def total_chips(self) -> int:
        return sum(p.chips for p in self.players)

    async def play(self, max_hands: Optional[int] = None) -> List[HandSummary]:
        """Play hands until one player has every chip or max_hands is reached."""
        summaries: List[HandSummary] = []
        while self.is_game_running():
            if max_hands is not None and len(summaries) >= max_hands:
                break
            summary = await self.play_round()
            if summary is None:
                break
            summaries.append(summary)
        return summaries

    async def play_round(self) -> Optional[HandSummary]:
        """
        Play one complete hand.

        Returns:
            The hand summary, or None if fewer than two players have chips
        """
        if not self.is_game_running():
            logger.warning("Cannot start hand: not enough players with chips")
            return None

        self._start_hand()
        seated = list(self.players)
        self.make_blinds_pay()
        self.deal_hole_cards()

        for street in Street:
            if len(self.state.active_players) < 2:
                break
            if street != Street.PREFLOP:
                self.deal_community_cards(street)
            await BettingRound(self.state, street).run()

        pot = self.state.pot
        settlement = self.settle()
        eliminated = self.eliminate_players_and_move_blinds()

        summary = self._summarize(seated, pot, settlement, eliminated)
        self.last_summary = summary
        return summary

    def _start_hand(self) -> None:
        self.players = [p for p in self.players if p.chips > 0]

        self.hand_number += 1
        self.state.players = self.players
        self.state.reset()
        for player in self.players:
            player.reset_for_new_hand()
        self.deck = self.deck_factory()

        self.state.add_log(f"Hand #{self.hand_number}")

    def make_blinds_pay(self) -> None:
        """Post the blinds from seats 0 and 1, each capped at the payer's chips."""
        small_blind_player = self.players[0]
        big_blind_player = self.players[1 % len(self.players)]

        post_blind(self.state, small_blind_player, self.small_blind, SmallBlind)
        post_blind(self.state, big_blind_player, self.big_blind, BigBlind)

        self.state.current_bet = self.big_blind
        self.state.last_raise_by = self.big_blind

    def deal_hole_cards(self) -> None:
        """Deal 2 hole cards to every seated player."""
        for player in self.players:
            player.deal_cards(self._deck().deal(HOLE_CARDS))
            if player.show_hand_in_log:
                self.state.add_log(
                    f"Player {player.name} is dealt "
                    f"{' '.join(str(c) for c in player.hand)}"
                )

    def deal_community_cards(self, street: Street) -> None:
        """Reveal the community cards for a street."""
        cards = self._deck().deal(STREET_CARDS[street])
        self.state.community_cards.extend(cards)
        self.state.add_log(
            f"{street.value.capitalize()}: "
            f"{' '.join(str(c) for c in self.state.community_cards)}"
        )

    def create_side_pots(self) -> List[SidePot]:
        """Contribution tiers of the hand in progress."""
        return create_side_pots(self.players)

    def settle(self) -> Settlement:
        """Pay out the pot and empty it."""
        settlement = settle(self.players, self.state.community_cards, self.state.pot)
        self.state.pot = 0

        names = {p.player_id: p.name for p in self.players}
        hands = {
            id(p): tier.hand for tier in settlement.rankings for p in tier.players
        }
        for player in self.players:
            won = settlement.payouts.get(player.player_id)
            if not won:
                continue
            name = names[player.player_id]
            if not settlement.showdown:
                self.state.add_log(f"Player {name} wins {won} chips.")
            elif id(player) in hands:
                self.state.add_log(
                    f"Player {name} wins {won} chips "
                    f"with {hands[id(player)].describe()}."
                )
            else:
                # Refund of a pot whose contributors all folded
                self.state.add_log(f"Player {name} gets back {won} chips.")

        return settlement

    def eliminate_players_and_move_blinds(self) -> List[str]:
        """
        Rotate the seat list left by one and drop players without chips.

        Returns:
            Names of eliminated players
        """
        rotated = self.players[1:] + self.players[:1]
        eliminated = [p.name for p in rotated if p.chips == 0]
        self.players = [p for p in rotated if p.chips > 0]
        self.state.players = self.players

        for name in eliminated:
            self.state.add_log(f"Player {name} is eliminated.")
        return eliminated

    def _deck(self) -> Deck:
        if self.deck is None:
            raise RuntimeError("No hand in progress")
        return self.deck

    def _summarize(
        self,
        seated: List[Player],
        pot: int,
        settlement: Settlement,
        eliminated: List[str],
    ) -> HandSummary:
        everyone = {p.player_id: p for p in seated}
        showdown = [
            ShowdownEntry(
                player_id=p.player_id,
                name=p.name,
                cards=list(p.hand),
                hand=tier.hand,
            )
            for tier in settlement.rankings
            for p in tier.players
        ]
        return HandSummary(
            hand_number=self.hand_number,
            pot=pot,
            community_cards=list(self.state.community_cards),
            side_pots=settlement.pots,
            showdown=showdown,
            payouts={
                everyone[pid].name: amount
                for pid, amount in settlement.payouts.items()
            },
            final_chips={p.name: p.chips for p in everyone.values()},
            eliminated=eliminated,
            log=list(self.state.log),
        )
