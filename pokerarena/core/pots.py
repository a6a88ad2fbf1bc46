"""
Side-Pot Settlement.

The pot is split into tiers by how much each player committed during the
hand. Each tier is paid to the strongest hand among the still-active players
who contributed to it.

Odd chips: a tier that does not divide evenly gives its remainder one chip at
a time to the winners in seat order.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from pokerarena.core.card import Card
from pokerarena.core.player import Player
from pokerarena.core.ranking import PlayerRank, rank_players


logger = logging.getLogger(__name__)


class NoActivePlayersError(RuntimeError):
    """Raised when a pot is settled with nobody left to award it to."""


@dataclass
class SidePot:
    """A pot tier and the players who contributed to it."""
    amount: int
    players: List[Player] = field(default_factory=list)


@dataclass
class Settlement:
    """Outcome of settling one hand."""
    pots: List[SidePot] = field(default_factory=list)
    rankings: List[PlayerRank] = field(default_factory=list)
    payouts: Dict[str, int] = field(default_factory=dict)
    showdown: bool = False


def create_side_pots(players: Sequence[Player]) -> List[SidePot]:
    """
    Partition the chips committed this hand into contribution tiers.

    Repeatedly takes the smallest remaining contribution m: the tier holds
    m from every remaining contributor, who are all eligible for it. Tiers are
    returned from the one everybody paid into down to the one only the
    biggest contributor paid into. Player fields are not modified.

    Example: contributions 100/200/300/400 give tiers 400, 300, 200, 100
    with 4, 3, 2 and 1 eligible players.
    """
    seat = {id(p): i for i, p in enumerate(players)}
    remaining = sorted(
        ((p, p.total_bet) for p in players if p.total_bet > 0),
        key=lambda entry: entry[1],
    )

    pots: List[SidePot] = []
    while remaining:
        level = remaining[0][1]
        eligible = sorted((p for p, _ in remaining), key=lambda p: seat[id(p)])
        pots.append(SidePot(amount=level * len(remaining), players=eligible))
        remaining = [(p, bet - level) for p, bet in remaining if bet - level > 0]

    return pots


def split_pot(amount: int, winners: Sequence[Player]) -> Dict[str, int]:
    """
    Split chips evenly among winners (already in seat order).

    Returns:
        player_id -> chips won
    """
    share, remainder = divmod(amount, len(winners))
    return {
        w.player_id: share + (1 if i < remainder else 0)
        for i, w in enumerate(winners)
    }


def settle(
    players: Sequence[Player],
    community: Sequence[Card],
    pot: int,
) -> Settlement:
    """
    Award the pot to the winners of the hand and credit their chips.

    Args:
        players: All seats in table order
        community: Community cards dealt so far
        pot: Total chips in the pot

    Raises:
        NoActivePlayersError: If every player has folded
    """
    active = [p for p in players if p.is_active]
    settlement = Settlement()

    if not active:
        raise NoActivePlayersError("No active player left to award the pot to")

    if len(active) == 1:
        winner = active[0]
        winner.chips += pot
        settlement.payouts[winner.player_id] = pot
        settlement.pots = [SidePot(amount=pot, players=[winner])]
        return settlement

    settlement.showdown = True
    settlement.rankings = rank_players(active, community)
    settlement.pots = create_side_pots(players)

    distributed = sum(p.amount for p in settlement.pots)
    if distributed != pot:
        raise RuntimeError(f"Side pots hold {distributed} chips but the pot is {pot}")

    seat = {id(p): i for i, p in enumerate(players)}
    for side_pot in settlement.pots:
        winners = _pot_winners(side_pot, settlement.rankings)
        if not winners:
            logger.warning(
                f"No active contributor for a pot of {side_pot.amount}, "
                f"returning it to its contributors"
            )
            winners = side_pot.players
        winners = sorted(winners, key=lambda p: seat[id(p)])

        shares = split_pot(side_pot.amount, winners)
        for player in winners:
            won = shares[player.player_id]
            player.chips += won
            settlement.payouts[player.player_id] = (
                settlement.payouts.get(player.player_id, 0) + won
            )

    return settlement


def _pot_winners(side_pot: SidePot, rankings: List[PlayerRank]) -> Optional[List[Player]]:
    """Members of the strongest rank tier that contributed to the pot."""
    eligible = {id(p) for p in side_pot.players}
    for tier in rankings:
        winners = [p for p in tier.players if id(p) in eligible]
        if winners:
            return winners
    return None
