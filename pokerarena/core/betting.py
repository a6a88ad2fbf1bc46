"""
Betting Engine - one street of betting as a state machine.

A street moves NOT_STARTED -> IN_PROGRESS -> CLOSED. While in progress the
engine walks the seats circularly and polls, one at a time, every player who
still owes an action. Each decision is validated against the state at the
moment it is applied; an invalid decision becomes a fold.

A street is closed when, among players still in the hand with chips behind:
- at most one remains and nobody bet more than they have matched, or
- every one of them has acted and matched the current bet.
"""

from __future__ import annotations
from typing import List, Type, Union
import logging

from pokerarena.core.actions import (
    Action, ActionRecord, AllIn, Bet, BigBlind, Call, Check, Fold, Raise,
    SmallBlind, describe_action,
)
from pokerarena.core.player import Player
from pokerarena.core.rules import (
    BettingState, Street,
    chips_to_call, first_to_act, get_possible_actions, is_valid_action,
)
from pokerarena.core.state import RoundState


logger = logging.getLogger(__name__)


class BettingRound:
    """
    Drives one betting street to completion.

    Usage:
        betting = BettingRound(state, Street.FLOP)
        await betting.run()
    """

    def __init__(self, state: RoundState, street: Street):
        self.state = state
        self.street = street
        self.status = BettingState.NOT_STARTED
        self.seat_visits = 0

    @property
    def players(self) -> List[Player]:
        return self.state.players

    @property
    def contenders(self) -> List[Player]:
        """Players still in the hand who can put in more chips."""
        return [p for p in self.players if p.can_act]

    def is_closed(self) -> bool:
        """Check whether the street has nothing left to contest."""
        if len(self.state.active_players) <= 1:
            return True

        contenders = self.contenders
        if not contenders:
            return True
        if len(contenders) == 1:
            return contenders[0].current_bet >= self.state.current_bet

        return all(
            p.has_acted and p.current_bet == self.state.current_bet
            for p in contenders
        )

    def needs_to_act(self, player: Player) -> bool:
        return player.can_act and (
            not player.has_acted or player.current_bet < self.state.current_bet
        )

    async def run(self) -> None:
        """Poll players in seat order until the street closes."""
        if self.status != BettingState.NOT_STARTED:
            raise RuntimeError(f"Betting on the {self.street.value} already ran")

        self.state.street = self.street
        self.status = BettingState.IN_PROGRESS

        num_seats = len(self.players)
        seat = first_to_act(self.street, num_seats)

        while not self.is_closed():
            player = self.players[seat]
            self.seat_visits += 1
            if self.needs_to_act(player):
                await self.take_turn(player)
            seat = (seat + 1) % num_seats

        self.close()

    async def take_turn(self, player: Player) -> ActionRecord:
        """Ask one player for a decision, validate it and apply it."""
        if player.agent is None:
            raise RuntimeError(f"Player {player.name} has no decision provider")

        possible_actions = get_possible_actions(player, self.state)
        self.state.to_act = player
        try:
            action = await player.agent.make_decision(self.state, possible_actions)
        finally:
            self.state.to_act = None

        if not is_valid_action(player, self.state, action):
            logger.warning(
                f"Invalid action {action!r} from {player.name}, forcing fold"
            )
            action = Fold()

        return self.apply(player, action)

    def apply(self, player: Player, action: Action) -> ActionRecord:
        """
        Apply a validated action to the player and the round state.

        Chip amounts are clamped to the player's stack; a player who runs out
        of chips is all-in.
        """
        state = self.state
        previous_bet = state.current_bet
        committed = 0

        if isinstance(action, Fold):
            player.fold()
        elif isinstance(action, Check):
            pass
        elif isinstance(action, Call):
            committed = player.commit(chips_to_call(player, state))
        elif isinstance(action, Bet):
            committed = player.commit(action.amount - player.current_bet)
        elif isinstance(action, Raise):
            committed = player.commit(
                state.current_bet + action.amount - player.current_bet
            )
        elif isinstance(action, AllIn):
            committed = player.commit(player.chips)
        else:
            raise TypeError(f"Cannot apply {action!r} during betting")

        state.pot += committed
        player.has_acted = True

        if player.current_bet > previous_bet:
            # Bet, raise or an all-in over the current bet: everyone else
            # still holding chips must act again.
            state.current_bet = player.current_bet
            state.last_raise_by = max(
                state.last_raise_by, player.current_bet - previous_bet
            )
            for other in self.players:
                if other is not player and other.can_act:
                    other.has_acted = False

        return self._record(player, action, committed)

    def close(self) -> None:
        """Reset per-street bets and flags."""
        for player in self.players:
            player.reset_for_new_street()
        self.state.current_bet = 0
        self.status = BettingState.CLOSED

    def _record(self, player: Player, action: Action, committed: int) -> ActionRecord:
        record = ActionRecord(
            player_id=player.player_id,
            player_name=player.name,
            street=self.street.value,
            action=action,
            amount_committed=committed,
            is_all_in=player.is_all_in and committed > 0,
        )
        self.state.actions.append(record)
        self.state.add_log(describe_action(record))
        return record


def post_blind(
    state: RoundState,
    player: Player,
    amount: int,
    blind: Union[Type[SmallBlind], Type[BigBlind]],
) -> ActionRecord:
    """
    Post a forced blind, capped at the player's chips.

    The blind counts toward the player's street bet but not as having acted.
    """
    posted = player.commit(amount)
    state.pot += posted

    record = ActionRecord(
        player_id=player.player_id,
        player_name=player.name,
        street=Street.PREFLOP.value,
        action=blind(posted),
        amount_committed=posted,
        is_all_in=player.is_all_in,
    )
    state.actions.append(record)
    state.add_log(describe_action(record))
    return record
