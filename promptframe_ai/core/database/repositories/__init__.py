"""
Repository layer for data access operations.

This package contains repository interfaces and implementations for all
database entities, providing a clean abstraction layer for data access
operations.
"""

from .base import AsyncBaseRepository, QueryBuilder
from .concept_lists import ConceptListRepository
from .generation import GeneratedImageRepository, GenerationJobRepository
from .image_styles import ImageStyleRepository
from .project_sessions import ProjectSessionRepository
from .prompts import (
    MediaAdapterRepository,
    SystemPromptRepository,
    UserPreferencesRepository,
)
from .users import AuthSessionRepository, UserRepository

__all__ = [
    "AsyncBaseRepository",
    "QueryBuilder",
    "AuthSessionRepository",
    "ConceptListRepository",
    "GeneratedImageRepository",
    "GenerationJobRepository",
    "ImageStyleRepository",
    "MediaAdapterRepository",
    "ProjectSessionRepository",
    "SystemPromptRepository",
    "UserPreferencesRepository",
    "UserRepository",
]
