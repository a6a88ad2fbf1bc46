"""
Completion backends for LLM seats.

Each backend sends one user message per decision and returns the text of the
reply. Rate limiting (HTTP 429) is retried with a linear backoff of
`retry * 5` seconds up to `max_retries` attempts; any other API failure, an
exhausted retry budget or an empty reply answers "Fold.".

Environment variables (loaded from .env by run.py):
    OPENAI_API_KEY, OPENAI_API_ENDPOINT
    AZURE_OPEN_AI_API_KEY, AZURE_OPEN_AI_API_ENDPOINT
    ANTHROPIC_API_KEY
    DEEPSEEK_API_KEY
    OLLAMA_API_ENDPOINT
"""

from __future__ import annotations
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, Type
from abc import ABC, abstractmethod
import asyncio
import logging
import os

import anthropic
import openai


logger = logging.getLogger(__name__)

FOLD_ANSWER = "Fold."
RETRY_DELAY_SECONDS = 5
DEFAULT_MAX_RETRIES = 10
DEFAULT_MAX_TOKENS = 20

DEEPSEEK_BASE_URL = "https://api.deepseek.com"
OLLAMA_BASE_URL = "http://localhost:11434/v1"
AZURE_API_VERSION = "2024-06-01"


class RetryingBackend(ABC):
    """
    Shared request loop. Subclasses build the payload and perform the call.

    Attributes:
        rate_limit_errors: Exceptions that trigger a retry
        api_errors: Exceptions that end the request with a fold
    """

    rate_limit_errors: Tuple[Type[BaseException], ...] = ()
    api_errors: Tuple[Type[BaseException], ...] = ()

    def __init__(
        self,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.model = model
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.sleep = sleep

    def build_request(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": self.max_tokens,
        }

    @abstractmethod
    async def send(self, request: Dict[str, Any]) -> Optional[str]:
        """Perform one API call and return the reply text, if any."""
        pass

    async def complete(self, prompt: str) -> str:
        request = self.build_request(prompt)
        logger.debug(f"Request to {self.model}: {request}")

        for retry in range(1, self.max_retries + 1):
            try:
                text = await self.send(request)
            except self.rate_limit_errors:
                delay = retry * RETRY_DELAY_SECONDS
                logger.warning(
                    f"Rate limit exceeded for {self.model}. "
                    f"Retrying in {delay} seconds..."
                )
                await self.sleep(delay)
                continue
            except self.api_errors as e:
                logger.error(f"LLM call to {self.model} failed: {e}")
                return FOLD_ANSWER

            logger.debug(f"Response from {self.model}: {text!r}")
            return text or FOLD_ANSWER

        logger.error(f"Giving up on {self.model} after {self.max_retries} attempts")
        return FOLD_ANSWER


class OpenAIBackend(RetryingBackend):
    """OpenAI chat completions, or any OpenAI-compatible endpoint via base_url."""

    rate_limit_errors = (openai.RateLimitError,)
    api_errors = (openai.APIError,)

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[Any] = None,
        **kwargs: Any,
    ):
        super().__init__(model, **kwargs)
        # Retries are ours; the SDK's own retry loop is disabled.
        self.client = client or openai.AsyncOpenAI(
            api_key=api_key or os.getenv("OPENAI_API_KEY"),
            base_url=base_url or os.getenv("OPENAI_API_ENDPOINT"),
            max_retries=0,
        )

    @classmethod
    def deepseek(cls, model: str = "deepseek-chat", **kwargs: Any) -> OpenAIBackend:
        return cls(
            model,
            api_key=os.getenv("DEEPSEEK_API_KEY"),
            base_url=DEEPSEEK_BASE_URL,
            **kwargs,
        )

    @classmethod
    def ollama(cls, model: str, **kwargs: Any) -> OpenAIBackend:
        # Ollama ignores the key but the client requires one.
        return cls(
            model,
            api_key="ollama",
            base_url=os.getenv("OLLAMA_API_ENDPOINT", OLLAMA_BASE_URL),
            **kwargs,
        )

    async def send(self, request: Dict[str, Any]) -> Optional[str]:
        response = await self.client.chat.completions.create(**request)
        if not response.choices:
            return None
        return response.choices[0].message.content


class AzureOpenAIBackend(OpenAIBackend):
    """Azure OpenAI deployment; `model` is the deployment name."""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        api_version: str = AZURE_API_VERSION,
        client: Optional[Any] = None,
        **kwargs: Any,
    ):
        client = client or openai.AsyncAzureOpenAI(
            api_key=api_key or os.getenv("AZURE_OPEN_AI_API_KEY"),
            azure_endpoint=endpoint or os.getenv("AZURE_OPEN_AI_API_ENDPOINT"),
            api_version=api_version,
            max_retries=0,
        )
        super().__init__(model, client=client, **kwargs)


class AnthropicBackend(RetryingBackend):
    """Anthropic Messages API."""

    rate_limit_errors = (anthropic.RateLimitError,)
    api_errors = (anthropic.APIError,)

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        client: Optional[Any] = None,
        **kwargs: Any,
    ):
        super().__init__(model, **kwargs)
        self.client = client or anthropic.AsyncAnthropic(
            api_key=api_key or os.getenv("ANTHROPIC_API_KEY"),
            max_retries=0,
        )

    async def send(self, request: Dict[str, Any]) -> Optional[str]:
        response = await self.client.messages.create(**request)
        if not response.content or response.content[0].type != "text":
            return None
        return response.content[0].text


BACKENDS: Dict[str, Callable[..., RetryingBackend]] = {
    "openai": OpenAIBackend,
    "azure": AzureOpenAIBackend,
    "anthropic": AnthropicBackend,
    "deepseek": OpenAIBackend.deepseek,
    "ollama": OpenAIBackend.ollama,
}


def create_backend(provider: str, model: str, **kwargs: Any) -> RetryingBackend:
    """
    Build a backend by provider name.

    Raises:
        ValueError: Unknown provider
    """
    try:
        factory = BACKENDS[provider]
    except KeyError:
        raise ValueError(
            f"Unknown LLM provider '{provider}'. "
            f"Choose from: {', '.join(sorted(BACKENDS))}"
        ) from None
    return factory(model, **kwargs)
