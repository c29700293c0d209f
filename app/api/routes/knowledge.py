"""
Knowledge Base API Routes

GET  /api/knowledge/{agent_id}       - List the agent's knowledge entries
PUT  /api/knowledge/{agent_id}       - Replace the agent's knowledge entries
POST /api/knowledge/{agent_id}/rank  - Rank entries for a message (no LLM call)
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.ai_core.ranking import normalize_ai_keywords, rank, score, select_scored
from app.api.dependencies import get_knowledge_store
from app.config import get_settings
from app.models.api_responses import RankedEntry, RankResponse
from app.models.knowledge import KnowledgeEntry
from app.services.knowledge_store import AgentNotFoundError, KnowledgeStore

logger = logging.getLogger(__name__)
router = APIRouter()


class RankRequest(BaseModel):
    """Request model for the ranking endpoint."""

    message: str = Field(..., description="User message to score entries against")
    ai_keywords: List[Any] = Field(
        default_factory=list, description="Optional AI keywords (may be nested)"
    )


class EntriesRequest(BaseModel):
    """Request model for replacing an agent's entries."""

    entries: List[KnowledgeEntry] = Field(default_factory=list)


@router.get("/{agent_id}", response_model=List[KnowledgeEntry])
async def list_entries(
    agent_id: str, store: KnowledgeStore = Depends(get_knowledge_store)
):
    """List the knowledge entries of an agent."""
    try:
        return store.get_entries(agent_id)
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{agent_id}", response_model=List[KnowledgeEntry])
async def replace_entries(
    agent_id: str,
    request: EntriesRequest,
    store: KnowledgeStore = Depends(get_knowledge_store),
):
    """Replace the knowledge entries of an agent."""
    try:
        return store.set_entries(agent_id, request.entries).knowledge_bases
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{agent_id}/rank", response_model=RankResponse)
async def rank_entries(
    agent_id: str,
    request: RankRequest,
    store: KnowledgeStore = Depends(get_knowledge_store),
):
    """
    Score and select knowledge entries for a message.

    Useful to inspect which entries would be injected into the answer prompt.
    """
    try:
        entries = store.get_entries(agent_id)
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    scored = score(request.message, entries, request.ai_keywords)
    selected = select_scored(scored, limit=get_settings().max_knowledge_entries)

    return RankResponse(
        message=request.message,
        ai_keywords=normalize_ai_keywords(request.ai_keywords),
        selected=[
            RankedEntry(entry=item.entry.model_dump(), score=item.score)
            for item in selected
        ],
        total_candidates=len(scored),
        total_relevant=len(rank(scored)),
    )
