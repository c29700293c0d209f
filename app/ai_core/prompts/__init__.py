"""Prompts package."""

from app.ai_core.prompts.keywords import KEYWORD_EXTRACTION_PROMPT, create_keyword_prompt
from app.ai_core.prompts.chat import (
    NO_KNOWLEDGE_CONTENT,
    build_knowledge_context,
    create_chat_system_prompt,
)

__all__ = [
    "KEYWORD_EXTRACTION_PROMPT",
    "create_keyword_prompt",
    "NO_KNOWLEDGE_CONTENT",
    "build_knowledge_context",
    "create_chat_system_prompt",
]
