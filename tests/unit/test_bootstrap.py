"""Unit tests for runtime wiring."""

import json
from unittest.mock import patch

import pytest

from ssmgpt.config.schema import AppConfig, CorpusConfig, LLMConfig, RetrievalConfig
from ssmgpt.core.prompt import DEFAULT_PERSONA
from ssmgpt.service import build_pipeline, load_corpus, load_persona
from ssmgpt.storage import CorpusLoadError


@pytest.fixture
def corpus_file(tmp_path):
    path = tmp_path / "chunks.json"
    path.write_text(
        json.dumps([{"text": "a", "source": "Module 1", "embedding": [0.1] * 1536}]),
        encoding="utf-8",
    )
    return path


def test_load_corpus(corpus_file):
    config = AppConfig(corpus=CorpusConfig(path=corpus_file))
    assert len(load_corpus(config)) == 1


def test_load_corpus_missing(tmp_path):
    config = AppConfig(corpus=CorpusConfig(path=tmp_path / "nope.json"))
    with pytest.raises(CorpusLoadError):
        load_corpus(config)


def test_load_persona(tmp_path):
    assert load_persona(AppConfig()) == DEFAULT_PERSONA

    persona = tmp_path / "persona.txt"
    persona.write_text("Be a concise coach.", encoding="utf-8")
    assert load_persona(AppConfig(llm=LLMConfig(persona_file=persona))) == "Be a concise coach."


@patch("ssmgpt.providers.openai.AsyncOpenAI")
def test_build_pipeline(mock_openai_class, corpus_file):
    config = AppConfig(
        corpus=CorpusConfig(path=corpus_file),
        retrieval=RetrievalConfig(top_k=100, enhance_questions=True),
        embedding={"api_key": "test-key"},
        llm={"api_key": "test-key", "max_tokens": 800},
    )

    pipeline = build_pipeline(config)

    assert len(pipeline.retriever.corpus) == 1
    assert pipeline.retriever.default_top_k == 100
    assert pipeline.top_k == 100
    assert pipeline.enhance_questions is True
    assert pipeline.max_tokens == 800
    assert pipeline.assembler.persona == DEFAULT_PERSONA
    assert pipeline.formatter.max_segment_length == 2900
