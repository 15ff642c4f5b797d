"""Brute-force nearest-neighbour retrieval over the loaded corpus.

Every chunk is scored against the query vector on each call (O(n * D)).
There is no index: the knowledge base is small and changes only when the
ingestion job rebuilds the corpus file.
"""

from collections.abc import Sequence
from typing import Optional

from ssmgpt.core.similarity import cosine_similarity, is_vector
from ssmgpt.entities import RankedResult
from ssmgpt.observability.logging import get_logger
from ssmgpt.storage.corpus import CorpusStore

logger = get_logger(__name__)


class Retriever:
    """Ranks corpus chunks by cosine similarity to a query vector."""

    def __init__(self, corpus: CorpusStore, default_top_k: int = 5) -> None:
        """Initialize the retriever.

        Args:
            corpus: Read-only corpus snapshot to search
            default_top_k: Number of results returned when rank() gets no top_k
        """
        if default_top_k < 1:
            raise ValueError("default_top_k must be at least 1")
        self.corpus = corpus
        self.default_top_k = default_top_k

    def rank(
        self,
        query_vector: Optional[Sequence[float]],
        top_k: Optional[int] = None,
    ) -> list[RankedResult]:
        """Return the top_k chunks most similar to query_vector.

        Results are ordered by descending similarity. Equal scores keep the
        corpus order, since Python's sort is stable.

        Args:
            query_vector: Query embedding; None or a non-vector yields no results
            top_k: Maximum number of results (defaults to default_top_k)

        Returns:
            At most top_k ranked results

        Raises:
            ValueError: If top_k is smaller than 1
        """
        top_k = self.default_top_k if top_k is None else top_k
        if top_k < 1:
            raise ValueError("top_k must be at least 1")

        if not is_vector(query_vector):
            logger.warning("no_query_embedding", received_type=type(query_vector).__name__)
            return []

        results = [
            RankedResult(chunk=chunk, similarity=cosine_similarity(chunk.embedding, query_vector))
            for chunk in self.corpus
        ]
        results.sort(key=lambda r: r.similarity, reverse=True)
        top = results[:top_k]

        logger.debug(
            "retrieval_completed",
            corpus_size=len(results),
            returned=len(top),
            best_similarity=top[0].similarity if top else None,
        )
        return top
