"""Unit tests for the PromptFrame-AI database layer.

Covers engine helpers, the repositories in promptframe_ai/core/database and
default data seeding. All tests run against in-memory SQLite.
"""
