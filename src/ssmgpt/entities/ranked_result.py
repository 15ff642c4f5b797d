"""RankedResult entity - a chunk scored against a query."""

from pydantic import BaseModel, Field

from ssmgpt.entities.chunk import EmbeddedChunk


class RankedResult(BaseModel):
    """A corpus chunk with its cosine similarity to the query vector.

    The chunk is shared with the corpus, never copied or modified.
    """

    chunk: EmbeddedChunk
    similarity: float = Field(..., ge=-1.0, le=1.0, description="Cosine similarity (-1 to 1)")
