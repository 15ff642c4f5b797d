"""SSM GPT: a Slack coaching assistant backed by retrieval over a fixed knowledge base."""

__version__ = "0.1.0"
