"""In-memory corpus of pre-embedded chunks.

The corpus is a JSON array of {"text", "source", "embedding"} records,
produced by a separate ingestion job. It is loaded once at startup and
never modified: there are no insert, update or delete operations.
Loading is all-or-nothing; any problem raises CorpusLoadError so the
process never serves requests from a partial corpus.
"""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ssmgpt.entities import EmbeddedChunk
from ssmgpt.observability.logging import get_logger
from ssmgpt.storage.base import CorpusLoadError

logger = get_logger(__name__)


class CorpusStore:
    """Immutable, ordered collection of embedded chunks."""

    def __init__(self, chunks: Iterable[EmbeddedChunk]) -> None:
        """Initialize the store from already-validated chunks.

        Raises:
            CorpusLoadError: If chunk embeddings differ in dimensionality
        """
        self._chunks: tuple[EmbeddedChunk, ...] = tuple(chunks)

        dimensions = {chunk.dimension for chunk in self._chunks}
        if len(dimensions) > 1:
            raise CorpusLoadError(
                f"Corpus embeddings have mixed dimensions: {sorted(dimensions)}"
            )
        self._dimension: Optional[int] = dimensions.pop() if dimensions else None

    @classmethod
    def from_records(cls, records: object) -> "CorpusStore":
        """Build a store from decoded JSON records.

        Args:
            records: Decoded JSON; must be a list of chunk objects

        Raises:
            CorpusLoadError: If records is not a list or any record is invalid
        """
        if not isinstance(records, list):
            raise CorpusLoadError(
                f"Corpus must be a JSON array, got {type(records).__name__}"
            )

        chunks = []
        for index, record in enumerate(records):
            try:
                chunks.append(EmbeddedChunk.model_validate(record))
            except ValidationError as e:
                raise CorpusLoadError(
                    f"Invalid corpus record at index {index}: {e}",
                    original_error=e,
                )
        return cls(chunks)

    @classmethod
    def from_file(cls, path: Path | str) -> "CorpusStore":
        """Load the corpus from a JSON file.

        Args:
            path: Path to the corpus JSON file

        Returns:
            Loaded corpus

        Raises:
            CorpusLoadError: If the file is missing, unreadable or malformed
        """
        path = Path(path).expanduser()
        logger.info("corpus_loading", path=str(path))

        try:
            with open(path, encoding="utf-8") as f:
                records = json.load(f)
        except FileNotFoundError as e:
            raise CorpusLoadError(f"Corpus file not found: {path}", original_error=e)
        except json.JSONDecodeError as e:
            raise CorpusLoadError(f"Corpus file is not valid JSON: {path}: {e}", original_error=e)
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusLoadError(f"Failed to read corpus file {path}: {e}", original_error=e)

        store = cls.from_records(records)
        logger.info(
            "corpus_loaded",
            path=str(path),
            chunk_count=len(store),
            dimension=store.dimension,
        )
        return store

    @property
    def dimension(self) -> Optional[int]:
        """Embedding dimensionality shared by all chunks (None when empty)."""
        return self._dimension

    def sources(self) -> list[str]:
        """Distinct source labels in first-seen order."""
        return list(dict.fromkeys(chunk.source for chunk in self._chunks))

    def __iter__(self) -> Iterator[EmbeddedChunk]:
        return iter(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)
