"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts. All of them use
camelCase aliases on the wire.

Modules:
- users: Accounts, credentials and role changes
- image_styles: Image style CRUD models
- generation: Generation settings, jobs and images
- project_sessions: Project session models
- ai_tools: Style extraction, previews and refinement
- prompts: Preferences, system prompts and media adapters
- concept_lists: Concept list generation and refinement
"""

from .ai_tools import (
    ConceptResponse,
    ExtractStyleRequest,
    ExtractStyleResponse,
    GenerateConceptRequest,
    IntelligentRefineRequest,
    IntelligentRefineResponse,
    RefineStyleRequest,
    RefineStyleResponse,
    StylePreviewRequest,
    StylePreviewResponse,
    UploadedImageResponse,
)
from .base import CamelModel, MessageResponse
from .concept_lists import (
    ConceptListRead,
    ConceptListUpdate,
    ConversationTurn,
    GenerateConceptListRequest,
    RefineRequest,
    ReviseRequest,
)
from .generation import (
    GeneratedImageRead,
    GenerateRequest,
    GenerationJobRead,
    GenerationSettings,
    JobStartedResponse,
    RegenerateRequest,
    SessionSettings,
)
from .image_styles import ImageStyleCreate, ImageStyleRead, ImageStyleUpdate
from .project_sessions import (
    MigratedJobsResponse,
    MigrateJobsRequest,
    ProjectSessionCreate,
    ProjectSessionRead,
    ProjectSessionUpdate,
    TemporaryClearedResponse,
)
from .prompts import (
    MediaAdapterCreate,
    MediaAdapterRead,
    MediaAdapterUpdate,
    SystemPromptCreate,
    SystemPromptRead,
    SystemPromptUpdate,
    UserPreferencesRead,
    UserPreferencesUpdate,
)
from .users import (
    AdminUserCreate,
    Credentials,
    ElevateUserRequest,
    RoleUpdate,
    UserMessageResponse,
    UserRead,
)

__all__ = [
    "AdminUserCreate",
    "CamelModel",
    "ConceptListRead",
    "ConceptListUpdate",
    "ConceptResponse",
    "ConversationTurn",
    "Credentials",
    "ElevateUserRequest",
    "ExtractStyleRequest",
    "ExtractStyleResponse",
    "GenerateConceptListRequest",
    "GenerateConceptRequest",
    "GenerateRequest",
    "GeneratedImageRead",
    "GenerationJobRead",
    "GenerationSettings",
    "ImageStyleCreate",
    "ImageStyleRead",
    "ImageStyleUpdate",
    "IntelligentRefineRequest",
    "IntelligentRefineResponse",
    "JobStartedResponse",
    "MediaAdapterCreate",
    "MediaAdapterRead",
    "MediaAdapterUpdate",
    "MessageResponse",
    "MigrateJobsRequest",
    "MigratedJobsResponse",
    "ProjectSessionCreate",
    "ProjectSessionRead",
    "ProjectSessionUpdate",
    "RefineRequest",
    "RefineStyleRequest",
    "RefineStyleResponse",
    "RegenerateRequest",
    "ReviseRequest",
    "RoleUpdate",
    "SessionSettings",
    "StylePreviewRequest",
    "StylePreviewResponse",
    "SystemPromptCreate",
    "SystemPromptRead",
    "SystemPromptUpdate",
    "TemporaryClearedResponse",
    "UploadedImageResponse",
    "UserMessageResponse",
    "UserPreferencesRead",
    "UserPreferencesUpdate",
    "UserRead",
]
