"""
Player class for Texas Hold'em.

Manages player state including:
- Chips (persist across hands)
- Hole cards
- Bets in the current street and in the whole hand
- Active / all-in / has-acted flags
- The decision provider that chooses the player's actions
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any, Dict, List, Optional
from dataclasses import dataclass, field

from pokerarena.core.card import Card

if TYPE_CHECKING:
    from pokerarena.agents.base import DecisionProvider


@dataclass(eq=False)
class Player:
    """
    A player at the table.

    Attributes:
        player_id: Unique identifier for the player
        name: Display name used in logs
        chips: Current chip count (never negative)
        agent: Decision provider polled when it is this player's turn
        hand: The player's hole cards (2 cards once dealt)
        current_bet: Chips committed in the current street
        total_bet: Chips committed across the whole hand
        is_active: Still contesting the pot
        is_all_in: Has no chips left to bet
        has_acted: Acted since the last bet/raise reset
        show_hand_in_log: Reveal hole cards in the hand log
    """
    player_id: str
    name: str
    chips: int
    agent: Optional["DecisionProvider"] = None
    hand: List[Card] = field(default_factory=list)
    current_bet: int = 0
    total_bet: int = 0
    is_active: bool = True
    is_all_in: bool = False
    has_acted: bool = False
    show_hand_in_log: bool = False

    def __post_init__(self) -> None:
        if self.chips < 0:
            raise ValueError(f"Player {self.name} cannot start with negative chips")

    def reset_for_new_hand(self) -> None:
        """Reset every per-hand field; chips are kept."""
        self.hand = []
        self.current_bet = 0
        self.total_bet = 0
        self.is_active = True
        self.is_all_in = False
        self.has_acted = False

    def reset_for_new_street(self) -> None:
        """Reset per-street fields (flop, turn, river)."""
        self.current_bet = 0
        self.has_acted = False

    def deal_cards(self, cards: List[Card]) -> None:
        """Deal hole cards to the player."""
        self.hand = list(cards)

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the current bet.

        The amount is clamped to the chips the player has left; a player
        left with no chips is forced all-in.

        Returns:
            Actual amount committed
        """
        if amount <= 0:
            return 0

        actual = min(amount, self.chips)
        self.chips -= actual
        self.current_bet += actual
        self.total_bet += actual

        if self.chips == 0:
            self.is_all_in = True

        return actual

    def fold(self) -> None:
        """Fold the hand."""
        self.is_active = False

    @property
    def can_act(self) -> bool:
        """Still in the hand with chips behind."""
        return self.is_active and not self.is_all_in

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.player_id,
            "name": self.name,
            "chips": self.chips,
            "bet": self.current_bet,
            "total_bet": self.total_bet,
            "is_active": self.is_active,
            "is_all_in": self.is_all_in,
        }

        if not hide_cards and self.hand:
            result["cards"] = [card.to_dict() for card in self.hand]

        return result

    def __repr__(self) -> str:
        return (
            f"Player({self.name}, chips={self.chips}, "
            f"bet={self.current_bet}, active={self.is_active})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hand) if self.hand else "??"
        return f"Player {self.name} [{cards_str}] {self.chips} chips"
