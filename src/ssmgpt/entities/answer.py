"""AnswerResult entity - the outcome of answering a single question."""

from pydantic import BaseModel, Field

from ssmgpt.core.intent import QueryIntent
from ssmgpt.entities.ranked_result import RankedResult


class AnswerResult(BaseModel):
    """Generated answer plus everything used to produce it."""

    question: str
    answer: str = Field(..., description="Raw model output, stripped")
    segments: list[str] = Field(default_factory=list, description="Rendered display segments")
    sources: list[RankedResult] = Field(default_factory=list)
    intent: QueryIntent = QueryIntent.GENERIC

    @property
    def has_context(self) -> bool:
        return bool(self.sources)
