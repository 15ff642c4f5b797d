"""Provider abstractions: embeddings and LLM backends."""

from ssmgpt.providers.base import EmbeddingProvider, LLMProvider, ProviderConfig, ProviderError


def create_embedding_provider(config: ProviderConfig) -> EmbeddingProvider:
    """Factory function to create embedding providers based on configuration.

    Raises:
        ValueError: If provider_type is unknown
        ProviderError: If provider initialization fails

    Example:
        config = ProviderConfig(
            provider_type="openai",
            model_name="text-embedding-3-small",
            api_key="OPENAI_API_KEY",
        )
        provider = create_embedding_provider(config)
    """
    provider_type = config.provider_type.lower()

    if provider_type == "openai":
        from ssmgpt.providers.openai import OpenAIEmbeddingProvider

        return OpenAIEmbeddingProvider(config)

    raise ValueError(
        f"Unknown embedding provider type: '{provider_type}'. Supported types: openai"
    )


def create_llm_provider(config: ProviderConfig) -> LLMProvider:
    """Factory function to create LLM providers based on configuration.

    Raises:
        ValueError: If provider_type is unknown
        ProviderError: If provider initialization fails
    """
    provider_type = config.provider_type.lower()

    if provider_type == "openai":
        from ssmgpt.providers.openai_llm import OpenAILLMProvider

        return OpenAILLMProvider(config)

    raise ValueError(
        f"Unknown LLM provider type: '{provider_type}'. Supported types: openai"
    )


__all__ = [
    "EmbeddingProvider",
    "LLMProvider",
    "ProviderConfig",
    "ProviderError",
    "create_embedding_provider",
    "create_llm_provider",
]
