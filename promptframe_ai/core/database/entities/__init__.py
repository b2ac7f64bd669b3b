"""
Database entity models.

This package contains all database entity models organized by business domain
and table relationships.

Modules:
- users: User accounts and login sessions
- image_styles: Image styles and their AI-extracted data
- generation: Generation jobs and generated images
- project_sessions: Saved and working project sessions
- prompts: User preferences, system prompts and media adapters
- concept_lists: Generated concept lists and their refinement history
"""

from . import (
    concept_lists,
    generation,
    image_styles,
    project_sessions,
    prompts,
    users,
)

__all__ = [
    "concept_lists",
    "generation",
    "image_styles",
    "project_sessions",
    "prompts",
    "users",
]
