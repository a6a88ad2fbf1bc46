"""
Hand Ranker - orders players into tiers of equal hand strength.
"""

from __future__ import annotations
from typing import List, Sequence
from dataclasses import dataclass, field

from pokerarena.core.card import Card
from pokerarena.core.hand import HandRank, compare_hands, evaluate_hand
from pokerarena.core.player import Player


@dataclass
class PlayerRank:
    """One or more players whose best hands are exactly equal."""
    hand: HandRank
    players: List[Player] = field(default_factory=list)


def rank_players(players: Sequence[Player], community: Sequence[Card]) -> List[PlayerRank]:
    """
    Rank players by hand strength.

    Each hand is evaluated independently and inserted into a strongest-first
    list of tiers: an equal hand joins the existing tier, otherwise a new tier
    is spliced in before the first weaker one. Players inside a tier keep the
    order they were given in.

    Args:
        players: Players to rank (hole cards must be dealt)
        community: Community cards

    Returns:
        Tiers ordered from strongest to weakest
    """
    tiers: List[PlayerRank] = []

    for player in players:
        hand = evaluate_hand(player.hand, community)
        _insert(tiers, player, hand)

    return tiers


def _insert(tiers: List[PlayerRank], player: Player, hand: HandRank) -> None:
    for index, tier in enumerate(tiers):
        result = compare_hands(hand, tier.hand)
        if result > 0:
            tiers.insert(index, PlayerRank(hand=hand, players=[player]))
            return
        if result == 0:
            tier.players.append(player)
            return
    tiers.append(PlayerRank(hand=hand, players=[player]))
