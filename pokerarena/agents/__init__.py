"""
PokerArena Agents - decision providers for table seats.

This module provides the decision provider interface, baseline bots, a
console seat for humans and LLM-backed seats.
"""

from pokerarena.agents.base import DecisionProvider, find_action
from pokerarena.agents.random_agent import (
    AggressiveAgent, CallAgent, RandomAgent, ScriptedAgent,
)
from pokerarena.agents.console import ConsoleAgent
from pokerarena.agents.llm import LLMAgent, generate_prompt, parse_response
from pokerarena.agents.backends import (
    AnthropicBackend, AzureOpenAIBackend, OpenAIBackend, create_backend,
)

__all__ = [
    "DecisionProvider",
    "find_action",
    "AggressiveAgent",
    "CallAgent",
    "RandomAgent",
    "ScriptedAgent",
    "ConsoleAgent",
    "LLMAgent",
    "generate_prompt",
    "parse_response",
    "AnthropicBackend",
    "AzureOpenAIBackend",
    "OpenAIBackend",
    "create_backend",
]
