"""
Human seat at the terminal.
"""

from __future__ import annotations
from typing import Callable, List
import asyncio

from pokerarena.agents.llm import generate_prompt, parse_response
from pokerarena.core.actions import PlayerAction, PossibleAction
from pokerarena.core.state import RoundState


class ConsoleAgent:
    """
    Asks a human for each decision on stdin.

    The question is the same one an LLM seat would see and the answer is
    parsed the same way, so "raise 40" or "I fold" both work. Input is read in
    a worker thread so other tasks on the loop keep running.
    """

    def __init__(self, input_func: Callable[[str], str] = input):
        self.input_func = input_func

    async def make_decision(
        self,
        state: RoundState,
        possible_actions: List[PossibleAction],
    ) -> PlayerAction:
        prompt = generate_prompt(state, possible_actions)
        answer = await asyncio.to_thread(self.input_func, f"{prompt}\n> ")
        return parse_response(answer, possible_actions)
