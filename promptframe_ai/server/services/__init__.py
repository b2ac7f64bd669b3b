"""Shared services and dependencies for the API layer."""
