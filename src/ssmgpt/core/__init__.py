"""Core retrieval, prompt and formatting logic."""
