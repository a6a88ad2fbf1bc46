"""
Player actions.

An action is one of a small set of classes (a tagged union): only the
variants that need an amount carry one. Each class exposes its tag as the
class attribute `type`.

Decision providers return the bare action; the betting engine stamps it with
the acting player's identity in an ActionRecord before logging it.
"""

from __future__ import annotations
from typing import ClassVar, Optional, Union
from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Possible action tags."""
    SMALL_BLIND = "smallBlind"
    BIG_BLIND = "bigBlind"
    FOLD = "fold"
    CHECK = "check"
    CALL = "call"
    BET = "bet"
    RAISE = "raise"
    ALL_IN = "allIn"


@dataclass(frozen=True)
class SmallBlind:
    amount: int
    type: ClassVar[ActionType] = ActionType.SMALL_BLIND


@dataclass(frozen=True)
class BigBlind:
    amount: int
    type: ClassVar[ActionType] = ActionType.BIG_BLIND


@dataclass(frozen=True)
class Fold:
    type: ClassVar[ActionType] = ActionType.FOLD


@dataclass(frozen=True)
class Check:
    type: ClassVar[ActionType] = ActionType.CHECK


@dataclass(frozen=True)
class Call:
    type: ClassVar[ActionType] = ActionType.CALL


@dataclass(frozen=True)
class Bet:
    """Open the betting with a total street bet of `amount`."""
    amount: int
    type: ClassVar[ActionType] = ActionType.BET


@dataclass(frozen=True)
class Raise:
    """Raise the current bet by `amount`."""
    amount: int
    type: ClassVar[ActionType] = ActionType.RAISE


@dataclass(frozen=True)
class AllIn:
    type: ClassVar[ActionType] = ActionType.ALL_IN


Action = Union[SmallBlind, BigBlind, Fold, Check, Call, Bet, Raise, AllIn]
PlayerAction = Union[Fold, Check, Call, Bet, Raise, AllIn]


@dataclass(frozen=True)
class PossibleAction:
    """
    An action offered to a player at decision time.

    Attributes:
        type: The action tag
        minimal_amount: Minimum amount for BET/RAISE, None otherwise
    """
    type: ActionType
    minimal_amount: Optional[int] = None


@dataclass(frozen=True)
class ActionRecord:
    """An applied action with the identity of the player who took it."""
    player_id: str
    player_name: str
    street: str
    action: Action
    amount_committed: int = 0
    is_all_in: bool = False


def describe_action(record: ActionRecord) -> str:
    """Human-readable log line for an applied action."""
    action = record.action
    name = record.player_name

    if isinstance(action, SmallBlind):
        text = f"Player {name} posts small blind of {action.amount}."
    elif isinstance(action, BigBlind):
        text = f"Player {name} posts big blind of {action.amount}."
    elif isinstance(action, Fold):
        text = f"Player {name} folds."
    elif isinstance(action, Check):
        text = f"Player {name} checks."
    elif isinstance(action, Call):
        text = f"Player {name} calls."
    elif isinstance(action, Bet):
        text = f"Player {name} bets {action.amount}."
    elif isinstance(action, Raise):
        text = f"Player {name} raises by {action.amount}."
    elif isinstance(action, AllIn):
        return f"Player {name} goes all in."
    else:
        raise TypeError(f"Unknown action: {action!r}")

    if record.is_all_in:
        text = f"{text.rstrip('.')} (all in)."
    return text


def describe_possible_action(possible: PossibleAction) -> str:
    """Short description of an offered action, e.g. 'raise 20 or more'."""
    if possible.type == ActionType.RAISE:
        return f"raise {possible.minimal_amount} or more"
    if possible.type == ActionType.BET:
        return f"bet {possible.minimal_amount} or more"
    if possible.type == ActionType.ALL_IN:
        return "all-in"
    return possible.type.value
