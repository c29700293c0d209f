"""
Keyword Extraction Module

Turns a user message into a small set of keywords via the chat model. The
keywords are the highest-weight signal of the relevance scorer, but they are
optional: any failure here degrades to an empty keyword list.
"""

import re
import logging
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage

from app.ai_core.prompts.keywords import create_keyword_prompt
from app.config import get_settings
from app.utils import extract_json_block, flatten_list, load_json_safely

logger = logging.getLogger(__name__)

_QUOTED = re.compile(r'"([^"]+)"')


class KeywordExtractionError(Exception):
    """
    Raised when the model call for keyword extraction fails.
    Always caught by KeywordExtractor.extract_keywords.
    """

    pass


def parse_keywords(text: Optional[str]) -> List[str]:
    """
    Parse keywords from a model reply, tolerating malformed output.

    Accepts a JSON array (optionally inside a ```json fence), an object with a
    "keywords" array, and falls back to every double-quoted substring.

    Args:
        text: Raw model reply

    Returns:
        Keyword strings (possibly empty)
    """
    if not text:
        return []

    json_text = extract_json_block(text) or text.strip()
    data = load_json_safely(json_text)

    if isinstance(data, dict):
        data = data.get("keywords") or []
    if isinstance(data, (list, str)):
        return [k.strip() for k in flatten_list(data) if k.strip()]

    # Fallback: pick quoted strings out of free text
    quoted = _QUOTED.findall(text)
    if quoted:
        logger.warning("Keyword reply is not valid JSON, using quoted strings")
    return [k.strip() for k in quoted if k.strip()]


class KeywordExtractor:
    """
    Extracts knowledge-matching keywords from user messages using the LLM.
    """

    def __init__(self, llm: Any = None):
        """
        Args:
            llm: Chat model with an async `ainvoke`; created lazily via the
                 gen_ai_hub proxy when not provided
        """
        self._llm = llm

    @property
    def llm(self):
        """Lazy initialization of the gen_ai_hub chat model."""
        if self._llm is None:
            from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
            from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client

            config = get_settings()
            self._llm = ChatOpenAI(
                proxy_model_name=config.openai_model,
                proxy_client=get_proxy_client("gen-ai-hub"),
                temperature=config.keyword_temperature,
            )
        return self._llm

    async def extract_keywords(
        self,
        message: str,
        context: Optional[List[Dict[str, str]]] = None,
    ) -> List[str]:
        """
        Extract keywords for a message.

        Args:
            message: Current user message
            context: Optional recent conversation turns

        Returns:
            Keywords; [] on any failure
        """
        if not message or not message.strip():
            return []

        try:
            reply = await self._call_llm(message, context)
        except KeywordExtractionError as e:
            logger.error(f"Keyword extraction failed: {e}")
            return []

        keywords = parse_keywords(reply)
        logger.info(f"Extracted {len(keywords)} keywords: {keywords}")
        return keywords

    async def _call_llm(
        self, message: str, context: Optional[List[Dict[str, str]]]
    ) -> str:
        try:
            prompt = create_keyword_prompt(message, context)
            response = await self.llm.ainvoke([HumanMessage(content=prompt)])
        except Exception as e:
            raise KeywordExtractionError(str(e)) from e

        content = getattr(response, "content", None)
        if not isinstance(content, str):
            raise KeywordExtractionError("LLM returned no text content")
        return content
