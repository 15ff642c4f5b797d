"""OpenAI embedding provider using the official API client.

The query must be embedded with the same model that produced the corpus
embeddings, otherwise the vectors are not comparable.
"""

from typing import Optional

import structlog
from openai import AsyncOpenAI

from ssmgpt.providers.base import EmbeddingProvider, ProviderConfig, ProviderError, resolve_api_key

logger = structlog.get_logger(__name__)


# Model metadata for OpenAI embedding models
MODEL_METADATA = {
    "text-embedding-ada-002": {"dimension": 1536},
    "text-embedding-3-small": {"dimension": 1536},
    "text-embedding-3-large": {"dimension": 3072},
}

DEFAULT_MODEL = "text-embedding-3-small"


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """OpenAI embedding provider.

    Example:
        config = ProviderConfig(
            provider_type="openai",
            model_name="text-embedding-3-small",
            api_key="OPENAI_API_KEY",
        )
        provider = OpenAIEmbeddingProvider(config)
        vector = await provider.embed_text("How do I pick a niche?")
    """

    def __init__(self, config: ProviderConfig) -> None:
        """Initialize OpenAI embedding provider.

        Args:
            config: Provider configuration with api_key and model_name

        Raises:
            ProviderError: If API key is missing or client initialization fails
        """
        super().__init__(config)

        api_key = resolve_api_key(config.api_key)
        if not api_key:
            raise ProviderError(
                message="API key is required",
                provider="openai",
            )

        self.model_name = config.model_name or DEFAULT_MODEL

        if self.model_name in MODEL_METADATA:
            self._dimension = MODEL_METADATA[self.model_name]["dimension"]
        else:
            logger.warning(
                "unknown_openai_model",
                model_name=self.model_name,
                known_models=list(MODEL_METADATA.keys()),
            )
            self._dimension = config.extra_params.get("dimension", 1536)

        client_kwargs = {"api_key": api_key}
        if "base_url" in config.extra_params:
            client_kwargs["base_url"] = config.extra_params["base_url"]

        try:
            self.client = AsyncOpenAI(**client_kwargs)
        except Exception as e:
            raise ProviderError(
                message=f"Failed to initialize OpenAI client: {str(e)}",
                provider="openai",
                original_error=e,
            )

        logger.info(
            "openai_embedding_provider_initialized",
            model_name=self.model_name,
            dimension=self._dimension,
        )

    async def embed_text(self, text: str) -> Optional[list[float]]:
        """Generate embedding for a single text.

        Args:
            text: Input text to embed

        Returns:
            Embedding vector, or None when the response carries no data

        Raises:
            ProviderError: If text is empty or API call fails
        """
        if not text or not text.strip():
            raise ProviderError(
                message="Cannot embed empty text",
                provider="openai",
            )

        try:
            logger.debug(
                "calling_openai_embeddings_api",
                text_length=len(text),
                model=self.model_name,
            )

            response = await self.client.embeddings.create(
                model=self.model_name,
                input=text,
            )
        except Exception as e:
            error_message = str(e)
            lowered = error_message.lower()

            if "authentication" in lowered or "api_key" in lowered:
                message = f"OpenAI authentication failed: {error_message}"
            elif "rate_limit" in lowered or "rate limit" in lowered:
                message = f"OpenAI rate limit exceeded: {error_message}"
            elif "connection" in lowered or "timed out" in lowered:
                message = f"Network error connecting to OpenAI: {error_message}"
            else:
                message = f"Failed to generate embedding: {error_message}"

            raise ProviderError(message=message, provider="openai", original_error=e)

        if not response.data:
            logger.warning("openai_embedding_empty_response", model=self.model_name)
            return None

        if getattr(response, "usage", None):
            logger.info(
                "openai_embedding_generated",
                tokens_used=response.usage.total_tokens,
                model=self.model_name,
            )

        return list(response.data[0].embedding)

    def get_dimension(self) -> int:
        """Return the embedding dimension for this model."""
        return self._dimension

    async def close(self) -> None:
        """Close the OpenAI client connection."""
        logger.info("closing_openai_embedding_provider", model_name=self.model_name)
        await self.client.close()

    async def __aenter__(self) -> "OpenAIEmbeddingProvider":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit with automatic cleanup."""
        await self.close()
