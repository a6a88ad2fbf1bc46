"""
Baseline bots and the scripted test double.

Useful for testing and as opponents for LLM-driven seats.
"""

from __future__ import annotations
import random
from collections import deque
from typing import Iterable, List, Optional

from pokerarena.agents.base import find_action
from pokerarena.core.actions import (
    ActionType, AllIn, Bet, Call, Check, Fold, PlayerAction, PossibleAction,
    Raise,
)
from pokerarena.core.state import RoundState


class RandomAgent:
    """
    An agent that selects random legal actions.

    The agent has configurable tendencies:
    - fold_probability: How likely to fold when facing a bet
    - raise_probability: How likely to bet/raise instead of check/call
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        fold_probability: float = 0.1,
        raise_probability: float = 0.3,
        all_in_probability: float = 0.02,
    ):
        self.rng = rng or random.Random()
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self.all_in_probability = all_in_probability

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        roll = self.rng.random()
        check = find_action(possible_actions, ActionType.CHECK)

        if roll < self.all_in_probability:
            return AllIn()

        if check is None and roll < self.fold_probability:
            return Fold()

        aggressive = [
            a for a in possible_actions
            if a.type in (ActionType.BET, ActionType.RAISE)
        ]
        if aggressive and roll < self.fold_probability + self.raise_probability:
            action = self.rng.choice(aggressive)
            # Bias towards small sizes: between the minimum and three times it
            amount = self.rng.randint(action.minimal_amount, action.minimal_amount * 3)
            return Bet(amount) if action.type == ActionType.BET else Raise(amount)

        if check is not None:
            return Check()
        if find_action(possible_actions, ActionType.CALL) is not None:
            return Call()
        return Fold()


class CallAgent:
    """An agent that always checks or calls."""

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        if find_action(possible_actions, ActionType.CHECK) is not None:
            return Check()
        if find_action(possible_actions, ActionType.CALL) is not None:
            return Call()
        return Fold()


class AggressiveAgent:
    """An agent that bets or raises whenever it can, otherwise calls."""

    def __init__(self, raise_multiplier: float = 2.0):
        """
        Args:
            raise_multiplier: Size of bets/raises relative to the minimum
        """
        self.raise_multiplier = raise_multiplier

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        for action in possible_actions:
            if action.type in (ActionType.BET, ActionType.RAISE):
                amount = max(1, int(action.minimal_amount * self.raise_multiplier))
                return Bet(amount) if action.type == ActionType.BET else Raise(amount)

        if find_action(possible_actions, ActionType.CHECK) is not None:
            return Check()
        if find_action(possible_actions, ActionType.CALL) is not None:
            return Call()
        return Fold()


class ScriptedAgent:
    """
    Replays a fixed list of actions, one per decision, then folds.

    The offered actions are ignored, so a script can also exercise the
    engine's handling of invalid decisions.
    """

    def __init__(self, actions: Iterable[PlayerAction] = ()):
        self.actions = deque(actions)
        self.seen: List[List[PossibleAction]] = []

    def add_decision(self, action: PlayerAction) -> None:
        self.actions.append(action)

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        self.seen.append(list(possible_actions))
        if not self.actions:
            return Fold()
        return self.actions.popleft()
