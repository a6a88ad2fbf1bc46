"""
Decision Provider Interface for PokerArena.

Anything that can choose an action for a seat implements one coroutine:

    async def make_decision(state, possible_actions) -> Action

Providers are free to take as long as they need (console input, network
calls with retries). The betting engine awaits one provider at a time and
validates whatever comes back; an action outside the offered set, or with an
amount below the offered minimum, is turned into a fold.

Usage:
    class MyAgent:
        async def make_decision(self, state, possible_actions):
            return Call()
"""

from __future__ import annotations
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from pokerarena.core.actions import ActionType, PossibleAction, PlayerAction
from pokerarena.core.state import RoundState


@runtime_checkable
class DecisionProvider(Protocol):
    """Chooses an action for one seat."""

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        """
        Choose an action.

        Args:
            state: The current round state (read-only for providers)
            possible_actions: Actions the engine will accept right now,
                BET/RAISE carrying their minimal amount

        Returns:
            One action whose type is among possible_actions
        """
        ...


def find_action(
    possible_actions: Sequence[PossibleAction],
    action_type: ActionType,
) -> Optional[PossibleAction]:
    """The offered action of the given type, if any."""
    return next((a for a in possible_actions if a.type == action_type), None)
