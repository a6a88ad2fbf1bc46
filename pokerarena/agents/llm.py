"""
LLM-driven decision provider.

The agent turns the round state into a plain-English question, sends it to a
completion backend and reads the first recognisable action word out of the
answer. Anything it cannot understand is a fold.
"""

from __future__ import annotations
from typing import List, Optional, Protocol
import logging
import re

from pokerarena.agents.base import find_action
from pokerarena.core.actions import (
    ActionType, AllIn, Bet, Call, Check, Fold, PlayerAction, PossibleAction,
    Raise, describe_action, describe_possible_action,
)
from pokerarena.core.player import Player
from pokerarena.core.state import RoundState


logger = logging.getLogger(__name__)

_AMOUNT_RE = re.compile(r"(\d+)")
_ALL_IN_RE = re.compile(r"all[\s-]*in")


class CompletionBackend(Protocol):
    """Anything that answers a prompt with text."""

    async def complete(self, prompt: str) -> str:
        ...


def generate_prompt(
    state: RoundState,
    possible_actions: List[PossibleAction],
    player: Optional[Player] = None,
) -> str:
    """
    Describe the decision in natural language.

    Args:
        state: Current round state
        possible_actions: Actions on offer
        player: The player deciding (defaults to state.to_act)

    Returns:
        The prompt text
    """
    player = player or state.to_act
    hand = " and ".join(str(c) for c in player.hand) if player else "unknown"
    community = (
        ", ".join(str(c) for c in state.community_cards)
        if state.community_cards else "not dealt yet"
    )
    options = ", ".join(describe_possible_action(a) for a in possible_actions)

    lines = [
        "You are playing No-Limit Texas Hold'em poker.",
        f"Your hand is {hand}.",
        f"The community cards are {community}.",
        f"The pot is {state.pot} chips.",
    ]
    if player is not None:
        lines.append(
            f"You have {player.chips} chips and have bet {player.current_bet} "
            f"this round; the current bet is {state.current_bet}."
        )
    lines.append(f"Chip counts:\n{state.players_stack()}")
    if state.actions:
        history = "\n".join(describe_action(record) for record in state.actions)
        lines.append(f"Actions so far:\n{history}")
    lines.append(f"It's your turn. Do you {options}?")
    lines.append("Answer with the action only, e.g. 'Call.' or 'Raise 40.'")
    return "\n".join(lines)


def extract_amount(response: str) -> Optional[int]:
    match = _AMOUNT_RE.search(response)
    return int(match.group(1)) if match else None


def parse_response(
    response: str,
    possible_actions: List[PossibleAction],
) -> PlayerAction:
    """
    Map a free-text answer onto an action.

    Keywords are tried in order: fold, call, raise, check, bet, all in. A raise
    or bet without a number uses the offered minimum. Unrecognised answers
    fold.
    """
    text = response.lower()

    if "fold" in text:
        return Fold()
    if "call" in text:
        return Call()
    if "raise" in text:
        return Raise(extract_amount(text) or _minimum(possible_actions, ActionType.RAISE))
    if "check" in text:
        return Check()
    if "bet" in text:
        return Bet(extract_amount(text) or _minimum(possible_actions, ActionType.BET))
    if _ALL_IN_RE.search(text):
        return AllIn()
    return Fold()


def _minimum(possible_actions: List[PossibleAction], action_type: ActionType) -> int:
    offered = find_action(possible_actions, action_type)
    if offered is None or offered.minimal_amount is None:
        # Not on offer: the engine will reject it and fold.
        return 0
    return offered.minimal_amount


class LLMAgent:
    """
    Decision provider backed by a language model.

    Usage:
        agent = LLMAgent(OpenAIBackend("gpt-4o-mini"), name="gpt")
        player = Player(player_id="p1", name="gpt", chips=1000, agent=agent)
    """

    def __init__(self, backend: CompletionBackend, name: str = "llm"):
        self.backend = backend
        self.name = name
        self.last_prompt: Optional[str] = None
        self.last_response: Optional[str] = None

    def generate_prompt(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> str:
        return generate_prompt(state, possible_actions)

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        prompt = self.generate_prompt(state, possible_actions)
        self.last_prompt = prompt

        response = await self.backend.complete(prompt)
        self.last_response = response
        logger.debug(f"{self.name} answered: {response!r}")

        return parse_response(response, possible_actions)
