"""Unit tests for the answer pipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from ssmgpt.core.formatting import ResponseFormatter
from ssmgpt.core.intent import QueryIntent
from ssmgpt.core.prompt import PromptAssembler
from ssmgpt.core.retriever import Retriever
from ssmgpt.entities import EmbeddedChunk
from ssmgpt.pipelines.answer import AnswerPipeline
from ssmgpt.providers.base import ProviderError
from ssmgpt.storage import CorpusStore


@pytest.fixture
def corpus():
    return CorpusStore(
        [
            EmbeddedChunk(text="Niches: start narrow.", source="Module 1", embedding=[1, 0]),
            EmbeddedChunk(text="Ads: test creatives.", source="Module 5", embedding=[0, 1]),
            EmbeddedChunk(
                text="Funnel ![Image](http://localhost:3000/docx-images/f.png)",
                source="Slides",
                embedding=[1, 1],
            ),
        ]
    )


@pytest.fixture
def embedding_provider():
    provider = MagicMock()
    provider.embed_text = AsyncMock(return_value=[1.0, 0.0])
    provider.close = AsyncMock()
    return provider


@pytest.fixture
def llm_provider():
    provider = MagicMock()
    provider.generate = AsyncMock(
        return_value="  Start narrow. ![Image](http://localhost:3000/docx-images/f.png)\n"
    )
    provider.close = AsyncMock()
    return provider


def _pipeline(corpus, embedding_provider, llm_provider, **kwargs):
    return AnswerPipeline(
        retriever=Retriever(corpus),
        embedding_provider=embedding_provider,
        llm_provider=llm_provider,
        assembler=PromptAssembler(persona="PERSONA"),
        formatter=ResponseFormatter(public_base_url="http://example.com"),
        **kwargs,
    )


@pytest.mark.asyncio
class TestAnswerPipeline:
    """Test AnswerPipeline orchestration."""

    async def test_answer(self, corpus, embedding_provider, llm_provider):
        pipeline = _pipeline(corpus, embedding_provider, llm_provider, top_k=2)

        result = await pipeline.answer("How do I pick a niche?")

        embedding_provider.embed_text.assert_awaited_once_with("How do I pick a niche?")
        assert [r.chunk.source for r in result.sources] == ["Module 1", "Slides"]

        kwargs = llm_provider.generate.await_args.kwargs
        assert kwargs["system_prompt"] == "PERSONA"
        assert "From Module 1:\nNiches: start narrow." in kwargs["prompt"]
        assert "Module 5" not in kwargs["prompt"]
        assert kwargs["prompt"].endswith("User question: How do I pick a niche?")

        assert result.answer == "Start narrow. ![Image](http://localhost:3000/docx-images/f.png)"
        assert result.segments == [
            "Start narrow. <http://example.com/docx-images/f.png|Click here to preview image>"
        ]
        assert result.intent == QueryIntent.GENERIC

    async def test_missing_embedding_still_answers(self, corpus, embedding_provider, llm_provider):
        embedding_provider.embed_text.return_value = None
        pipeline = _pipeline(corpus, embedding_provider, llm_provider)

        result = await pipeline.answer("Anything?")

        assert result.sources == []
        assert not result.has_context
        llm_provider.generate.assert_awaited_once()

    async def test_thread_context_passed_to_prompt(self, corpus, embedding_provider, llm_provider):
        pipeline = _pipeline(corpus, embedding_provider, llm_provider)

        await pipeline.answer("And the next step?", thread_context="How do I pick a niche?")

        prompt = llm_provider.generate.await_args.kwargs["prompt"]
        assert "Conversation so far:\nHow do I pick a niche?" in prompt
        embedding_provider.embed_text.assert_awaited_once_with("And the next step?")

    async def test_enhanced_question(self, corpus, embedding_provider, llm_provider):
        pipeline = _pipeline(corpus, embedding_provider, llm_provider, enhance_questions=True)

        result = await pipeline.answer("how to run ads")

        assert result.intent == QueryIntent.HOW_TO
        prompt = llm_provider.generate.await_args.kwargs["prompt"]
        assert prompt.endswith("User question: Please provide step-by-step instructions for: how to run ads")
        embedding_provider.embed_text.assert_awaited_once_with("how to run ads")
        assert result.question == "how to run ads"

    async def test_generation_options(self, corpus, embedding_provider, llm_provider):
        pipeline = _pipeline(
            corpus, embedding_provider, llm_provider, max_tokens=500, temperature=0.1
        )

        await pipeline.answer("q")

        kwargs = llm_provider.generate.await_args.kwargs
        assert kwargs["max_tokens"] == 500
        assert kwargs["temperature"] == 0.1

    async def test_provider_error_propagates(self, corpus, embedding_provider, llm_provider):
        embedding_provider.embed_text.side_effect = ProviderError("down", provider="openai")
        pipeline = _pipeline(corpus, embedding_provider, llm_provider)

        with pytest.raises(ProviderError):
            await pipeline.answer("q")
        llm_provider.generate.assert_not_awaited()

    async def test_search_top_k_override(self, corpus, embedding_provider, llm_provider):
        pipeline = _pipeline(corpus, embedding_provider, llm_provider, top_k=1)

        assert len(await pipeline.search("q")) == 1
        assert len(await pipeline.search("q", top_k=3)) == 3

    async def test_close(self, corpus, embedding_provider, llm_provider):
        pipeline = _pipeline(corpus, embedding_provider, llm_provider)

        await pipeline.close()

        embedding_provider.close.assert_awaited_once()
        llm_provider.close.assert_awaited_once()
