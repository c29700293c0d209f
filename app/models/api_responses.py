"""
API Response Models

Pydantic models for consistent API response structures.
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class KnowledgeSource(BaseModel):
    """A knowledge entry used to ground an answer."""

    id: str = Field("", description="Entry identifier")
    title: str = Field(..., description="Entry title")
    score: float = Field(..., description="Relevance score")


class ChatResponse(BaseModel):
    """
    Response model for the chat endpoint.
    """

    status: str = Field(..., description="Status: success or error")
    answer: Optional[str] = Field(None, description="Answer shown to the user")
    knowledge_bases: List[str] = Field(
        default_factory=list, description="Titles of the knowledge entries used"
    )
    sources: List[KnowledgeSource] = Field(
        default_factory=list, description="Knowledge entries used, with scores"
    )
    ai_keywords: List[str] = Field(
        default_factory=list, description="Keywords extracted by the model"
    )
    suggestions: List[str] = Field(
        default_factory=list, description="Suggested follow-up questions"
    )
    profile: Optional[Dict[str, Any]] = Field(
        None, description="User profile after this message (when user_id is given)"
    )
    profile_updated: bool = Field(False, description="Whether the profile changed")
    reason: Optional[str] = Field(None, description="Error reason if status is error")


class RankedEntry(BaseModel):
    """One selected entry in a ranking response."""

    entry: Dict[str, Any] = Field(..., description="Knowledge entry")
    score: float = Field(..., description="Relevance score")


class RankResponse(BaseModel):
    """Response model for the knowledge ranking endpoint."""

    message: str = Field(..., description="The scored message")
    ai_keywords: List[str] = Field(
        default_factory=list, description="Normalized AI keywords used"
    )
    selected: List[RankedEntry] = Field(
        default_factory=list, description="Selected entries, best first"
    )
    total_candidates: int = Field(0, description="Entries that were scored")
    total_relevant: int = Field(0, description="Entries with a positive score")


class ProfileResponse(BaseModel):
    """Response model for profile endpoints."""

    agent_id: str
    user_id: str
    profile: Dict[str, Any] = Field(
        default_factory=dict, description="Flat profile including metadata"
    )
    description: str = Field("", description="Human-readable profile summary")
    confidence: float = Field(0.0, description="Profile confidence (0-10)")
    extracted: Optional[Dict[str, Any]] = Field(
        None, description="Fragments extracted from the analyzed message"
    )
