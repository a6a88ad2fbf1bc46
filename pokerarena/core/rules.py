"""
Texas Hold'em Rules and Constants.

Table conventions used throughout the engine:

1. Blinds: seat 0 posts the small blind and seat 1 the big blind. After each
   hand the seat list rotates left by one, so the blinds move with it.

2. First to act: seat 2 pre-flop (wrapping to seat 0 heads-up), seat 0 on
   the flop, turn and river.

3. Bets and raises: BET(amount) is the total street bet and is only offered
   when nobody has bet yet. RAISE(amount) raises the current bet BY amount.
   The minimum for either is the size of the last full raise (the big blind
   at the start of a hand), capped at what the player can put in.

4. Short stacks: amounts are clamped to the player's chips and the action
   becomes an implicit all-in.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List
from enum import Enum, auto

from pokerarena.core.actions import (
    Action, ActionType, Bet, Raise, PossibleAction,
)

if TYPE_CHECKING:
    from pokerarena.core.player import Player
    from pokerarena.core.state import RoundState


class Street(Enum):
    """The four betting phases of a hand."""
    PREFLOP = "pre-flop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


class BettingState(Enum):
    """Lifecycle of one betting street."""
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    CLOSED = auto()


# Default game settings
DEFAULT_SMALL_BLIND = 5
DEFAULT_BIG_BLIND = 10
DEFAULT_BUY_IN = 1000
MIN_PLAYERS = 2
MAX_PLAYERS = 10

# Cards per phase
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Community cards revealed before each street's betting
STREET_CARDS = {
    Street.PREFLOP: 0,
    Street.FLOP: FLOP_CARDS,
    Street.TURN: TURN_CARDS,
    Street.RIVER: RIVER_CARDS,
}

# Seat that opens the action on each street
PREFLOP_FIRST_SEAT = 2
POSTFLOP_FIRST_SEAT = 0


def first_to_act(street: Street, num_seats: int) -> int:
    """Seat index that opens the betting on a street."""
    seat = PREFLOP_FIRST_SEAT if street == Street.PREFLOP else POSTFLOP_FIRST_SEAT
    return seat % num_seats


def chips_to_call(player: "Player", state: "RoundState") -> int:
    """Chips the player still needs to match the current bet."""
    return max(0, state.current_bet - player.current_bet)


def can_check(player: "Player", state: "RoundState") -> bool:
    return state.current_bet == 0 or player.current_bet == state.current_bet


def can_call(player: "Player", state: "RoundState") -> bool:
    return state.current_bet > player.current_bet


def can_bet(player: "Player", state: "RoundState") -> bool:
    return state.current_bet == 0


def can_raise(player: "Player", state: "RoundState") -> bool:
    return state.current_bet > 0 and player.chips > chips_to_call(player, state)


def min_bet(player: "Player", state: "RoundState") -> int:
    """Minimum opening bet: the last raise size, capped at the player's chips."""
    return min(player.chips, state.last_raise_by)


def min_raise(player: "Player", state: "RoundState") -> int:
    """
    Minimum raise increment: the last raise size, capped at the largest
    increment the player can afford.
    """
    max_increment = player.chips + player.current_bet - state.current_bet
    return min(max_increment, state.last_raise_by)


def get_possible_actions(player: "Player", state: "RoundState") -> List[PossibleAction]:
    """
    Actions offered to a player at decision time.

    FOLD and ALL_IN are always offered; CHECK, CALL, BET and RAISE depend on
    the current bet.
    """
    actions = [PossibleAction(ActionType.FOLD)]

    if can_check(player, state):
        actions.append(PossibleAction(ActionType.CHECK))
    if can_call(player, state):
        actions.append(PossibleAction(ActionType.CALL))
    if can_bet(player, state):
        actions.append(PossibleAction(ActionType.BET, min_bet(player, state)))
    if can_raise(player, state):
        actions.append(PossibleAction(ActionType.RAISE, min_raise(player, state)))

    actions.append(PossibleAction(ActionType.ALL_IN))
    return actions


def is_valid_action(player: "Player", state: "RoundState", action: Action) -> bool:
    """
    Check an action against the current state.

    Amounts above the player's chips are valid; they are clamped when applied.
    """
    action_type = getattr(action, "type", None)

    if action_type in (ActionType.FOLD, ActionType.ALL_IN):
        return True
    if action_type == ActionType.CHECK:
        return can_check(player, state)
    if action_type == ActionType.CALL:
        return can_call(player, state)
    if action_type == ActionType.BET:
        return (
            isinstance(action, Bet)
            and can_bet(player, state)
            and action.amount > 0
            and action.amount >= min_bet(player, state)
        )
    if action_type == ActionType.RAISE:
        return (
            isinstance(action, Raise)
            and can_raise(player, state)
            and action.amount > 0
            and action.amount >= min_raise(player, state)
        )
    return False
