"""
Profile API Routes

GET    /api/profiles/{agent_id}/{user_id}          - Current profile
DELETE /api/profiles/{agent_id}/{user_id}          - Clear a profile
POST   /api/profiles/{agent_id}/{user_id}/analyze  - Extract and merge from a message
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.ai_core.profile import describe_profile
from app.api.dependencies import get_knowledge_store, get_orchestrator, get_profile_service
from app.models.api_responses import ProfileResponse
from app.models.profile import Profile
from app.services.chat_orchestrator import ChatOrchestrator
from app.services.knowledge_store import AgentNotFoundError, KnowledgeStore
from app.services.profile_store import ProfileService, ProfileUpdateError

logger = logging.getLogger(__name__)
router = APIRouter()


class AnalyzeRequest(BaseModel):
    """Request model for profile analysis."""

    message: str = Field(..., description="User message to analyze")
    source: str = Field("widget", description="Channel the message came from")


def _to_response(agent_id: str, user_id: str, profile: Profile, extracted=None) -> ProfileResponse:
    return ProfileResponse(
        agent_id=agent_id,
        user_id=user_id,
        profile=profile.to_dict(),
        description=describe_profile(profile),
        confidence=profile.metadata.confidence,
        extracted=extracted,
    )


@router.get("/{agent_id}/{user_id}", response_model=ProfileResponse)
async def get_profile(
    agent_id: str,
    user_id: str,
    store: KnowledgeStore = Depends(get_knowledge_store),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Get a user's profile with its description."""
    try:
        store.get_agent(agent_id)
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return _to_response(agent_id, user_id, profiles.get_profile(agent_id, user_id))


@router.delete("/{agent_id}/{user_id}")
async def clear_profile(
    agent_id: str,
    user_id: str,
    store: KnowledgeStore = Depends(get_knowledge_store),
    profiles: ProfileService = Depends(get_profile_service),
):
    """Clear a user's profile (administrative action)."""
    try:
        store.get_agent(agent_id)
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    removed = profiles.store.clear(agent_id, user_id)
    logger.info(f"Profile cleared: agent={agent_id} user={user_id} existed={removed}")
    return {"status": "success", "removed": removed}


@router.post("/{agent_id}/{user_id}/analyze", response_model=ProfileResponse)
async def analyze_message(
    agent_id: str,
    user_id: str,
    request: AnalyzeRequest,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    """
    Extract profile fragments from a message and merge them into the profile.

    Example request body:
    ```json
    {"message": "我叫陳大大，電話是0912345678"}
    ```
    """
    try:
        profile, extracted = orchestrator.analyze_profile(
            agent_id, user_id, request.message, source=request.source
        )
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProfileUpdateError as e:
        logger.error(f"Profile analysis failed: {e}")
        raise HTTPException(status_code=409, detail=str(e))

    return _to_response(agent_id, user_id, profile, extracted)
