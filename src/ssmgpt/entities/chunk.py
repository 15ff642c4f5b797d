"""EmbeddedChunk entity - a knowledge base passage with its embedding."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ssmgpt.core.formatting import IMAGE_MARKDOWN_PATTERN


class EmbeddedChunk(BaseModel):
    """A unit of source-document text paired with its embedding.

    Chunks are produced by an offline ingestion job and loaded read-only
    at startup. Instances are frozen so a loaded corpus cannot be mutated.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Passage content")
    source: str = Field(..., description="Originating document, used for attribution")
    embedding: tuple[float, ...] = Field(..., description="Embedding vector")

    @field_validator("embedding")
    @classmethod
    def embedding_not_empty(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        if not v:
            raise ValueError("Chunk embedding cannot be empty")
        if not all(math.isfinite(x) for x in v):
            raise ValueError("Chunk embedding must contain only finite numbers")
        return v

    @property
    def dimension(self) -> int:
        return len(self.embedding)

    @property
    def image_refs(self) -> list[str]:
        """Markdown image links embedded in the text, verbatim."""
        return [match.group(0) for match in IMAGE_MARKDOWN_PATTERN.finditer(self.text)]
