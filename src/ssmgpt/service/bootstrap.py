"""Runtime component construction from configuration."""

from typing import Optional

from ssmgpt.config.schema import AppConfig
from ssmgpt.core.formatting import ResponseFormatter
from ssmgpt.core.prompt import DEFAULT_PERSONA, PromptAssembler
from ssmgpt.core.retriever import Retriever
from ssmgpt.observability.logging import get_logger
from ssmgpt.pipelines.answer import AnswerPipeline
from ssmgpt.providers import ProviderConfig, create_embedding_provider, create_llm_provider
from ssmgpt.storage import CorpusStore

logger = get_logger(__name__)


def load_corpus(config: AppConfig) -> CorpusStore:
    """Load the configured corpus.

    Raises:
        CorpusLoadError: If the corpus file is missing or malformed
    """
    return CorpusStore.from_file(config.corpus.path)


def load_persona(config: AppConfig) -> str:
    """Read the persona override file, or fall back to the built-in persona."""
    if config.llm.persona_file is None:
        return DEFAULT_PERSONA
    return config.llm.persona_file.expanduser().read_text(encoding="utf-8")


def build_pipeline(config: AppConfig, corpus: Optional[CorpusStore] = None) -> AnswerPipeline:
    """Create providers and assemble the answer pipeline.

    Args:
        config: Application configuration
        corpus: Preloaded corpus (loaded from config.corpus.path if None)

    Raises:
        CorpusLoadError: If the corpus cannot be loaded
        ProviderError: If a provider cannot be initialized
    """
    if corpus is None:
        corpus = load_corpus(config)

    embedding_provider = create_embedding_provider(
        ProviderConfig(
            provider_type=config.embedding.provider.value,
            model_name=config.embedding.model_name,
            api_key=config.embedding.api_key,
            extra_params=config.embedding.extra_params,
        )
    )
    llm_provider = create_llm_provider(
        ProviderConfig(
            provider_type=config.llm.provider.value,
            model_name=config.llm.model_name,
            api_key=config.llm.api_key,
            extra_params=config.llm.extra_params,
        )
    )

    if corpus.dimension is not None and corpus.dimension != embedding_provider.get_dimension():
        logger.warning(
            "embedding_dimension_mismatch",
            corpus_dimension=corpus.dimension,
            model_dimension=embedding_provider.get_dimension(),
            model_name=config.embedding.model_name,
        )

    formatter = ResponseFormatter(
        public_base_url=config.formatting.public_base_url,
        local_base_url=config.formatting.local_base_url,
        max_segment_length=config.formatting.max_segment_length,
        preview_label=config.formatting.preview_label,
    )

    return AnswerPipeline(
        retriever=Retriever(corpus, default_top_k=config.retrieval.top_k),
        embedding_provider=embedding_provider,
        llm_provider=llm_provider,
        assembler=PromptAssembler(persona=load_persona(config)),
        formatter=formatter,
        top_k=config.retrieval.top_k,
        enhance_questions=config.retrieval.enhance_questions,
        max_tokens=config.llm.max_tokens,
        temperature=config.llm.temperature,
    )
