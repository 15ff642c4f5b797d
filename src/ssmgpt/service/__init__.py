"""Service layer - wiring of configuration into runtime components.

- load_corpus: Load the embedded corpus (fatal on failure)
- build_pipeline: Create providers and the answer pipeline
"""

from ssmgpt.service.bootstrap import build_pipeline, load_corpus, load_persona

__all__ = [
    "build_pipeline",
    "load_corpus",
    "load_persona",
]
