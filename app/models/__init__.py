# Shared data models
from app.models.knowledge import KnowledgeEntry, ScoredEntry, AgentConfig
from app.models.profile import (
    Profile,
    ProfileMetadata,
    ProfileValue,
    ProfileValueKind,
    PartialProfile,
    classify_value,
    is_non_empty,
    resolve_path,
)
from app.models.api_responses import (
    ChatResponse,
    KnowledgeSource,
    RankResponse,
    RankedEntry,
    ProfileResponse,
)

__all__ = [
    "KnowledgeEntry",
    "ScoredEntry",
    "AgentConfig",
    "Profile",
    "ProfileMetadata",
    "ProfileValue",
    "ProfileValueKind",
    "PartialProfile",
    "classify_value",
    "is_non_empty",
    "resolve_path",
    "ChatResponse",
    "KnowledgeSource",
    "RankResponse",
    "RankedEntry",
    "ProfileResponse",
]
