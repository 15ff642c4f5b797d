"""Storage layer: the read-only embedded corpus."""

from ssmgpt.storage.base import CorpusLoadError, StorageError
from ssmgpt.storage.corpus import CorpusStore

__all__ = [
    "CorpusLoadError",
    "CorpusStore",
    "StorageError",
]
