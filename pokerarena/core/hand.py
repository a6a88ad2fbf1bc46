"""
Hand Evaluation for Texas Hold'em.

Evaluates a player's 2 hole cards plus up to 5 community cards and returns a
HandRank: a category and an ordered list of kicker ranks. Two HandRanks
compare by category first, then kicker by kicker, so the dataclass ordering
is the hand ordering.

Categories (best to worst):
1. Straight Flush: 5 consecutive cards of same suit
2. Four of a Kind: 4 cards of same rank
3. Full House: 3 of a kind + pair
4. Flush: 5 cards of same suit
5. Straight: 5 consecutive cards
6. Three of a Kind: 3 cards of same rank
7. Two Pair: 2 different pairs
8. One Pair: 2 cards of same rank
9. High Card: No made hand

Note: Ace can be low in A-2-3-4-5 straight (wheel), valued as Five high.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from enum import IntEnum

from pokerarena.core.card import Card, Rank, Suit, RANK_NAMES


class HandCategory(IntEnum):
    """Hand categories from weakest (lowest value) to strongest."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


HAND_CATEGORY_NAMES = {
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

NUM_RANKS = 13


@dataclass(frozen=True, order=True)
class HandRank:
    """
    An evaluated hand.

    Attributes:
        category: The hand category
        kickers: Rank values (0-12) used for tie-breaks, most significant first
    """
    category: HandCategory
    kickers: Tuple[int, ...]

    @property
    def name(self) -> str:
        return HAND_CATEGORY_NAMES[self.category]

    def describe(self) -> str:
        """Human-readable description, e.g. 'Full House, Kings full of Fours'."""
        return describe_hand_rank(self)


def evaluate_hand(hole_cards: Sequence[Card], community: Sequence[Card]) -> HandRank:
    """
    Evaluate the best hand from hole cards plus community cards.

    Args:
        hole_cards: The player's 2 hole cards
        community: 0-5 community cards

    Returns:
        HandRank with category and kickers

    Raises:
        ValueError: If more than 7 cards are given in total
    """
    cards = list(hole_cards) + list(community)
    if len(cards) > 7:
        raise ValueError(f"Need at most 7 cards, got {len(cards)}")

    rank_count = _rank_count(cards)

    flush_cards = _flush_cards(cards)
    if flush_cards is not None:
        straight_high = _straight_high(_rank_count(flush_cards))
        if straight_high is not None:
            return HandRank(HandCategory.STRAIGHT_FLUSH, (straight_high,))

    quads = _highest_rank_with_count(rank_count, 4)
    if quads is not None:
        return HandRank(
            HandCategory.FOUR_OF_A_KIND,
            (quads,) + _kickers(rank_count, [quads], 1),
        )

    trips = _highest_rank_with_count(rank_count, 3)
    if trips is not None:
        pair = _highest_rank_with_count(rank_count, 2, exclude=trips)
        if pair is not None:
            return HandRank(HandCategory.FULL_HOUSE, (trips, pair))

    if flush_cards is not None:
        ranks = sorted((c.rank_value for c in flush_cards), reverse=True)
        return HandRank(HandCategory.FLUSH, tuple(ranks[:5]))

    straight_high = _straight_high(rank_count)
    if straight_high is not None:
        return HandRank(HandCategory.STRAIGHT, (straight_high,))

    if trips is not None:
        return HandRank(
            HandCategory.THREE_OF_A_KIND,
            (trips,) + _kickers(rank_count, [trips], 2),
        )

    pairs = _all_ranks_with_count(rank_count, 2)
    if len(pairs) >= 2:
        top_two = pairs[:2]
        return HandRank(
            HandCategory.TWO_PAIR,
            tuple(top_two) + _kickers(rank_count, top_two, 1),
        )

    if pairs:
        return HandRank(
            HandCategory.ONE_PAIR,
            (pairs[0],) + _kickers(rank_count, [pairs[0]], 3),
        )

    return HandRank(HandCategory.HIGH_CARD, _kickers(rank_count, [], 5))


def compare_hands(hand_a: HandRank, hand_b: HandRank) -> int:
    """
    Three-way comparison of two evaluated hands.

    Returns:
        Positive if hand_a is stronger, negative if hand_b is stronger, 0 if tied
    """
    if hand_a.category != hand_b.category:
        return int(hand_a.category) - int(hand_b.category)

    for kicker_a, kicker_b in zip(hand_a.kickers, hand_b.kickers):
        if kicker_a != kicker_b:
            return kicker_a - kicker_b

    return 0


def _rank_count(cards: Sequence[Card]) -> List[int]:
    """13-slot histogram of rank occurrences."""
    counts = [0] * NUM_RANKS
    for card in cards:
        counts[card.rank_value] += 1
    return counts


def _flush_cards(cards: Sequence[Card]) -> Optional[List[Card]]:
    """Cards of the first suit holding at least 5 cards, if any."""
    by_suit: Dict[Suit, List[Card]] = {suit: [] for suit in Suit}
    for card in cards:
        by_suit[card.suit].append(card)
    for suit_cards in by_suit.values():
        if len(suit_cards) >= 5:
            return suit_cards
    return None


def _straight_high(rank_count: Sequence[int]) -> Optional[int]:
    """
    Highest rank of a straight in the histogram, scanning Ace down to Five.

    Index (i - 4 + 13) % 13 wraps to the Ace for the wheel (A-2-3-4-5).
    """
    for i in range(NUM_RANKS - 1, Rank.FIVE - 1, -1):
        if (
            rank_count[i] > 0
            and rank_count[i - 1] > 0
            and rank_count[i - 2] > 0
            and rank_count[i - 3] > 0
            and rank_count[(i - 4 + NUM_RANKS) % NUM_RANKS] > 0
        ):
            return i
    return None


def _highest_rank_with_count(
    rank_count: Sequence[int],
    count: int,
    exclude: Optional[int] = None,
) -> Optional[int]:
    """Highest rank appearing at least `count` times, other than `exclude`."""
    for rank in range(NUM_RANKS - 1, -1, -1):
        if rank != exclude and rank_count[rank] >= count:
            return rank
    return None


def _all_ranks_with_count(rank_count: Sequence[int], count: int) -> List[int]:
    """All ranks appearing exactly `count` times, descending."""
    return [r for r in range(NUM_RANKS - 1, -1, -1) if rank_count[r] == count]


def _kickers(
    rank_count: Sequence[int],
    exclude_ranks: Sequence[int],
    number_of_kickers: int,
) -> Tuple[int, ...]:
    """Remaining card ranks, descending, skipping ranks used by the category."""
    remaining: List[int] = []
    for rank in range(NUM_RANKS - 1, -1, -1):
        if rank not in exclude_ranks:
            remaining.extend([rank] * rank_count[rank])
    return tuple(remaining[:number_of_kickers])


def _rank_name(rank: int) -> str:
    return RANK_NAMES[Rank(rank)]


def _plural(rank: int) -> str:
    name = _rank_name(rank)
    return f"{name}es" if name == "Six" else f"{name}s"


def describe_hand_rank(hand: HandRank) -> str:
    """Get a human-readable description of an evaluated hand."""
    k = hand.kickers
    category = hand.category

    if category == HandCategory.STRAIGHT_FLUSH:
        if k[0] == Rank.ACE:
            return "Royal Flush"
        return f"Straight Flush, {_rank_name(k[0])} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(k[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(k[0])} full of {_plural(k[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(k[0])} high"
    elif category == HandCategory.STRAIGHT:
        if k[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(k[0])} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(k[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(k[0])} and {_plural(k[1])}"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(k[0])}"
    return f"High Card, {_rank_name(k[0])}"
