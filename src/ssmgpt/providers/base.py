"""Abstract base classes for embedding and LLM providers.

Both are external collaborators: the embedding provider turns a question
into a query vector, the LLM provider turns the assembled prompt into an
answer. Failures of either surface as ProviderError.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel


class ProviderConfig(BaseModel):
    """Base configuration for all providers."""

    provider_type: str
    model_name: str
    api_key: Optional[str] = None
    extra_params: dict[str, Any] = {}


def resolve_api_key(api_key: Optional[str]) -> Optional[str]:
    """Treat api_key as an environment variable name if one is set, else as the key."""
    if not api_key:
        return None
    return os.getenv(api_key) or api_key


class EmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    def __init__(self, config: ProviderConfig) -> None:
        """Initialize provider with configuration."""
        self.config = config

    @abstractmethod
    async def embed_text(self, text: str) -> Optional[list[float]]:
        """Generate embedding for a single text.

        Args:
            text: Input text to embed

        Returns:
            Embedding vector, or None if the provider returned no embedding

        Raises:
            ProviderError: If embedding generation fails
        """
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Return the embedding dimension for this model."""
        pass

    async def close(self) -> None:
        """Release network resources."""


class LLMProvider(ABC):
    """Abstract interface for chat-completion providers."""

    def __init__(self, config: ProviderConfig) -> None:
        """Initialize provider with configuration."""
        self.config = config

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: float = 0.7,
    ) -> str:
        """Generate text completion.

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            Generated text

        Raises:
            ProviderError: If generation fails
        """
        pass

    async def close(self) -> None:
        """Release network resources."""


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, message: str, provider: str, original_error: Optional[Exception] = None):
        self.message = message
        self.provider = provider
        self.original_error = original_error
        super().__init__(self.message)
