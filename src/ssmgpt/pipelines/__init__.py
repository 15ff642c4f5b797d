"""Pipelines: request orchestration."""
