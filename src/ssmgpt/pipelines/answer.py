"""Answer pipeline: retrieval-augmented answers to student questions.

Why this exists:
- Orchestrates embed -> rank -> assemble -> generate -> render
- Keeps the Slack and CLI surfaces free of retrieval details

How to use:
    from ssmgpt.pipelines.answer import AnswerPipeline

    pipeline = AnswerPipeline(retriever, embedding_provider, llm_provider, assembler, formatter)
    result = await pipeline.answer("How do I pick a niche?")
    for segment in result.segments:
        ...
"""

from typing import Optional

from ssmgpt.core.formatting import ResponseFormatter
from ssmgpt.core.intent import QueryIntent, classify_intent, enhance_question
from ssmgpt.core.prompt import PromptAssembler
from ssmgpt.core.retriever import Retriever
from ssmgpt.entities import AnswerResult, RankedResult
from ssmgpt.observability.logging import get_logger
from ssmgpt.providers.base import EmbeddingProvider, LLMProvider

logger = get_logger(__name__)


class AnswerPipeline:
    """Pipeline for answering questions from the knowledge base."""

    def __init__(
        self,
        retriever: Retriever,
        embedding_provider: EmbeddingProvider,
        llm_provider: LLMProvider,
        assembler: PromptAssembler,
        formatter: ResponseFormatter,
        top_k: int = 5,
        enhance_questions: bool = False,
        max_tokens: Optional[int] = None,
        temperature: float = 0.7,
    ):
        """Initialize the answer pipeline.

        Args:
            retriever: Ranks corpus chunks against the query vector
            embedding_provider: Provider for query embeddings
            llm_provider: Provider for chat completions
            assembler: Builds the user prompt
            formatter: Renders the answer for Slack
            top_k: Chunks included in each prompt
            enhance_questions: Wrap questions in an intent template
            max_tokens: Completion token limit (provider default if None)
            temperature: Sampling temperature
        """
        self.retriever = retriever
        self.embedding_provider = embedding_provider
        self.llm_provider = llm_provider
        self.assembler = assembler
        self.formatter = formatter
        self.top_k = top_k
        self.enhance_questions = enhance_questions
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def search(self, query: str, top_k: Optional[int] = None) -> list[RankedResult]:
        """Embed the query and rank the corpus against it.

        Raises:
            ProviderError: If the embedding call fails
        """
        top_k = top_k or self.top_k
        logger.info("search_started", query=query, top_k=top_k)

        query_vector = await self.embedding_provider.embed_text(query)
        results = self.retriever.rank(query_vector, top_k)

        if not results:
            logger.warning("no_relevant_context", query=query)
        logger.info("search_completed", query=query, result_count=len(results))
        return results

    async def answer(self, question: str, thread_context: Optional[str] = None) -> AnswerResult:
        """Answer a question using retrieved context.

        A question with no retrievable context is still sent to the model,
        which answers (or declines) according to the persona.

        Args:
            question: The student's question
            thread_context: Earlier messages from the Slack thread

        Returns:
            Raw answer, rendered segments and the chunks used

        Raises:
            ProviderError: If the embedding or completion call fails
        """
        logger.info("answer_started", question=question, has_thread_context=bool(thread_context))

        results = await self.search(question)

        intent = classify_intent(question) if self.enhance_questions else QueryIntent.GENERIC
        prompt_question = enhance_question(question, intent) if self.enhance_questions else question

        prompt = self.assembler.build(results, prompt_question, thread_context)
        answer = await self.llm_provider.generate(
            prompt=prompt,
            system_prompt=self.assembler.persona,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        answer = answer.strip()
        segments = self.formatter.render(answer)

        logger.info(
            "answer_completed",
            intent=intent.value,
            source_count=len(results),
            answer_length=len(answer),
            segment_count=len(segments),
        )

        return AnswerResult(
            question=question,
            answer=answer,
            segments=segments,
            sources=results,
            intent=intent,
        )

    async def close(self) -> None:
        """Close provider connections."""
        await self.embedding_provider.close()
        await self.llm_provider.close()
