"""
Chat API Routes

POST /api/chat/{agent_id} - Answer a user message with knowledge grounding
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from app.api.dependencies import get_orchestrator
from app.models.api_responses import ChatResponse
from app.services.chat_orchestrator import ChatOrchestrator
from app.services.knowledge_store import AgentNotFoundError

logger = logging.getLogger(__name__)
router = APIRouter()


class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""

    message: str = Field(..., min_length=1, description="User message")
    user_id: Optional[str] = Field(
        None, description="User identifier; enables profile tracking"
    )
    source: str = Field("widget", description="Channel: widget, linebot, ...")
    conversation_history: Optional[List[Dict[str, Any]]] = Field(
        None,
        description="Previous turns. Format: [{'role': 'user'|'assistant', 'content': str}]",
    )


@router.post("/{agent_id}", response_model=ChatResponse)
async def chat(
    agent_id: str,
    request: ChatRequest,
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    """
    Answer a user message.

    Pipeline:
    1. Extract AI keywords
    2. Select up to 3 relevant knowledge entries
    3. Generate the answer
    4. Update the user's profile (when user_id is given)

    Example request body:
    ```json
    {
        "message": "學費多少？",
        "user_id": "U123",
        "source": "linebot"
    }
    ```
    """
    logger.info(f"Chat request: agent={agent_id} message_length={len(request.message)}")
    try:
        return await orchestrator.respond(
            agent_id=agent_id,
            message=request.message,
            user_id=request.user_id,
            source=request.source,
            conversation_history=request.conversation_history,
        )
    except AgentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
