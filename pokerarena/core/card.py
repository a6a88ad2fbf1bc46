"""
Card and Deck classes for Texas Hold'em.

Ranks are stored as integers 0 (Two) .. 12 (Ace) so the hand evaluator can
use them directly as histogram slots and kicker values.
"""

from __future__ import annotations
import random
from typing import Iterable, List, Optional
from enum import IntEnum


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0     # ♣
    DIAMONDS = 1  # ♦
    HEARTS = 2    # ♥
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks from 2 (lowest) to Ace (highest)."""
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


SUIT_SYMBOLS = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}

CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["T"] = Rank.TEN
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class DeckExhaustedError(ValueError):
    """Raised when more cards are requested than the deck still holds."""


class Card:
    """
    A playing card represented as (rank, suit).

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("As"), Card.from_string("10♥")
    """

    __slots__ = ("rank", "suit")

    def __init__(self, rank: Rank, suit: Suit):
        self.rank = Rank(rank)
        self.suit = Suit(suit)

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts a rank ("2".."10", "T", "J", "Q", "K", "A") followed by a
        suit char ("c", "d", "h", "s") or symbol ("♣", "♦", "♥", "♠").
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part, suit_part = s[:-1].upper(), s[-1]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(CHAR_TO_RANK[rank_part], suit)

    @property
    def rank_value(self) -> int:
        """Rank as an integer 0 (Two) .. 12 (Ace)."""
        return int(self.rank)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self.rank == other.rank and self.suit == other.suit
        return False

    def __hash__(self) -> int:
        return int(self.rank) * 4 + int(self.suit)

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{RANK_CHARS[self.rank]}{SUIT_CHARS[self.suit]}"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self.rank],
            "suit": SUIT_SYMBOLS[self.suit],
            "text": str(self),
        }


def full_deck() -> List[Card]:
    """All 52 cards in a fixed order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    A standard 52-card deck.

    Usage:
        deck = Deck(rng=random.Random(42))
        hole_cards = deck.deal(2)
        flop = deck.deal(3)
    """

    def __init__(self, rng: Optional[random.Random] = None, shuffle: bool = True):
        """Initialize a new deck, optionally shuffled with the given RNG."""
        self._rng = rng or random.Random()
        self._cards: List[Card] = full_deck()
        if shuffle:
            self.shuffle()

    @classmethod
    def stacked(cls, top_cards: Iterable[Card]) -> Deck:
        """
        Build an unshuffled deck whose first cards are `top_cards`, in order.

        The rest of the 52 cards follow in their fixed order.
        """
        top = list(top_cards)
        if len(set(top)) != len(top):
            raise ValueError("Duplicate cards in stacked deck")
        deck = cls(shuffle=False)
        deck._cards = top + [c for c in deck._cards if c not in top]
        return deck

    def shuffle(self) -> None:
        """Fisher-Yates shuffle of the remaining cards."""
        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randint(0, i)
            cards[i], cards[j] = cards[j], cards[i]

    def deal(self, n: int = 1) -> List[Card]:
        """
        Deal n cards from the top of the deck.

        Raises:
            DeckExhaustedError: If not enough cards remain.
        """
        if n > len(self._cards):
            raise DeckExhaustedError(
                f"Cannot deal {n} cards, only {len(self._cards)} remain"
            )

        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        return dealt

    def deal_one(self) -> Card:
        """Deal a single card."""
        return self.deal(1)[0]

    @property
    def remaining(self) -> int:
        """Number of cards remaining in the deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck({self.remaining} cards remaining)"


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse space-separated cards, e.g. "As Kh 10d" or "A♠ K♥ 10♦".
    """
    return [Card.from_string(s) for s in cards_str.split()]
