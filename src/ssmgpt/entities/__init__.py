"""Entities - Domain models for the coaching assistant.

This module contains pure domain entities without business logic:
- EmbeddedChunk: A passage of the knowledge base paired with its embedding
- RankedResult: A chunk with its similarity to a query
- AnswerResult: The outcome of answering one question
"""

from ssmgpt.entities.answer import AnswerResult
from ssmgpt.entities.chunk import EmbeddedChunk
from ssmgpt.entities.ranked_result import RankedResult

__all__ = [
    "AnswerResult",
    "EmbeddedChunk",
    "RankedResult",
]
