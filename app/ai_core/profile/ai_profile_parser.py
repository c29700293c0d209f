"""
AI Response Parser

The answer prompt asks the model to append a ```json block with a "profile"
object (dynamic fields inferred about the user) and follow-up "suggestions".
This module separates that block from the visible answer.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from app.models.profile import is_non_empty
from app.utils import extract_json_block, flatten_list, load_json_safely, remove_json_block

logger = logging.getLogger(__name__)


class AIResponsePayload(BaseModel):
    """Visible answer plus the structured data appended by the model."""

    answer: str = Field("", description="Answer text without the JSON block")
    profile: Dict[str, Any] = Field(
        default_factory=dict, description="Profile fields inferred by the model"
    )
    suggestions: List[str] = Field(
        default_factory=list, description="Suggested follow-up questions"
    )


def has_valid_content(profile: Optional[Mapping[str, Any]]) -> bool:
    """
    Check whether a profile fragment carries any information.

    Returns:
        True if any value is a non-empty string/array/record or nonzero number
    """
    if not isinstance(profile, Mapping):
        return False
    return any(is_non_empty(value) for value in profile.values())


def parse_ai_response(text: Optional[str]) -> AIResponsePayload:
    """
    Split a model reply into answer text and its appended JSON payload.

    Malformed or missing JSON never raises; the answer is then the full text.

    Args:
        text: Raw model reply

    Returns:
        AIResponsePayload
    """
    if not text:
        return AIResponsePayload()

    json_text = extract_json_block(text)
    if json_text is None:
        return AIResponsePayload(answer=text.strip())

    answer = remove_json_block(text)
    data = load_json_safely(json_text)
    if not isinstance(data, dict):
        logger.warning("AI response JSON block is not an object, ignoring it")
        return AIResponsePayload(answer=answer)

    profile = data.get("profile")
    if not isinstance(profile, dict):
        profile = {}

    return AIResponsePayload(
        answer=answer,
        profile=profile,
        suggestions=flatten_list(data.get("suggestions")),
    )
