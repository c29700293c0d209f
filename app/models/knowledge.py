"""
Knowledge Base Models

This module defines the data models for agent knowledge entries and scoring results.
"""

from typing import List, Optional, Dict, Any, Union
from pydantic import BaseModel, Field, field_validator

from app.utils.helpers import flatten_list


class KnowledgeEntry(BaseModel):
    """
    A titled block of reference text used to ground chatbot answers.

    Entries come from an external store and may be incomplete; missing text
    fields default to "" so that scoring can treat them as irrelevant.
    """

    id: str = Field("", description="Entry identifier")
    title: str = Field("", description="Entry title")
    content: str = Field("", description="Reference text")
    keywords: List[str] = Field(
        default_factory=list, description="Optional keyword tags"
    )

    model_config = {"frozen": True}

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> List[str]:
        return flatten_list(value)

    @property
    def is_complete(self) -> bool:
        """Whether the entry has both a title and content."""
        return bool(self.title) and bool(self.content)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnowledgeEntry":
        """
        Create entry from a storage dictionary.

        Args:
            data: Dictionary with entry data

        Returns:
            KnowledgeEntry instance
        """
        return cls.model_validate(data)


KnowledgeEntryLike = Union[KnowledgeEntry, Dict[str, Any]]


class ScoredEntry(BaseModel):
    """A knowledge entry with its relevance score for one message."""

    entry: KnowledgeEntry
    score: float = Field(0.0, ge=0.0, description="Relevance score, 0 = irrelevant")


class AgentConfig(BaseModel):
    """
    Chatbot agent configuration: system prompt plus its knowledge base.
    """

    agent_id: str = Field(..., description="Unique agent identifier")
    name: Optional[str] = Field(None, description="Display name")
    system_prompt: str = Field("", description="Base system prompt for answers")
    knowledge_bases: List[KnowledgeEntry] = Field(
        default_factory=list, description="Knowledge entries owned by the agent"
    )

    @field_validator("knowledge_bases", mode="before")
    @classmethod
    def _coerce_entries(cls, value: Any) -> List[Any]:
        # Stores may hold entries as a list or as an id -> entry mapping
        if value is None:
            return []
        if isinstance(value, dict):
            entries = []
            for key, entry in value.items():
                if isinstance(entry, dict) and not entry.get("id"):
                    entry = {**entry, "id": key}
                entries.append(entry)
            return entries
        return value
