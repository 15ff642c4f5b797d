"""Unit tests for the JSON corpus store."""

import json

import pytest

from ssmgpt.entities import EmbeddedChunk
from ssmgpt.storage import CorpusLoadError, CorpusStore, StorageError


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestCorpusStore:
    """Test CorpusStore loading and access."""

    def test_load_from_file(self, tmp_path):
        path = _write(
            tmp_path / "chunks.json",
            [
                {"text": "First", "source": "Module 1", "embedding": [1, 0]},
                {"text": "Second", "source": "Module 2", "embedding": [0, 1]},
                {"text": "Third", "source": "Module 1", "embedding": [1, 1]},
            ],
        )

        store = CorpusStore.from_file(path)

        assert len(store) == 3
        assert store.dimension == 2
        assert [c.text for c in store] == ["First", "Second", "Third"]
        assert store.sources() == ["Module 1", "Module 2"]

    def test_extra_fields_are_ignored(self, tmp_path):
        path = _write(
            tmp_path / "chunks.json",
            [{"text": "a", "source": "s", "embedding": [0.5], "imageRefs": []}],
        )
        assert len(CorpusStore.from_file(path)) == 1

    def test_empty_corpus(self, tmp_path):
        store = CorpusStore.from_file(_write(tmp_path / "chunks.json", []))
        assert len(store) == 0
        assert store.dimension is None
        assert list(store) == []

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(CorpusLoadError, match="not found"):
            CorpusStore.from_file(tmp_path / "missing.json")

    def test_malformed_json_is_fatal(self, tmp_path):
        path = tmp_path / "chunks.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(CorpusLoadError, match="not valid JSON"):
            CorpusStore.from_file(path)

    def test_non_array_is_fatal(self, tmp_path):
        path = _write(tmp_path / "chunks.json", {"text": "a"})
        with pytest.raises(CorpusLoadError, match="JSON array"):
            CorpusStore.from_file(path)

    def test_invalid_record_is_fatal(self, tmp_path):
        path = _write(
            tmp_path / "chunks.json",
            [
                {"text": "ok", "source": "s", "embedding": [1.0]},
                {"text": "no embedding", "source": "s"},
            ],
        )
        with pytest.raises(CorpusLoadError, match="index 1") as exc_info:
            CorpusStore.from_file(path)
        assert isinstance(exc_info.value, StorageError)
        assert exc_info.value.original_error is not None

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_embedding_is_fatal(self, tmp_path, token):
        path = tmp_path / "chunks.json"
        path.write_text(
            '[{"text": "ok", "source": "s", "embedding": [1.0, 0.0]},'
            f' {{"text": "corrupt", "source": "s", "embedding": [{token}, 0.0]}}]',
            encoding="utf-8",
        )
        with pytest.raises(CorpusLoadError, match="index 1"):
            CorpusStore.from_file(path)

    def test_mixed_dimensions_are_fatal(self):
        with pytest.raises(CorpusLoadError, match="mixed dimensions"):
            CorpusStore(
                [
                    EmbeddedChunk(text="a", source="s", embedding=[1.0, 0.0]),
                    EmbeddedChunk(text="b", source="s", embedding=[1.0]),
                ]
            )

    def test_store_is_snapshot(self):
        chunks = [EmbeddedChunk(text="a", source="s", embedding=[1.0])]
        store = CorpusStore(chunks)
        chunks.append(EmbeddedChunk(text="b", source="s", embedding=[1.0]))
        assert len(store) == 1
