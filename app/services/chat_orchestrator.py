"""
Chat Orchestrator Service

Orchestrates answering a user message:
1. Extract AI keywords for the message
2. Score and select the agent's knowledge entries
3. Build the system prompt (knowledge, profile, time, history)
4. Generate the answer with the LLM
5. Update the user's dynamic profile
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from langchain_core.messages import HumanMessage, SystemMessage

from app.ai_core.keywords import KeywordExtractor
from app.ai_core.profile import ProfileFieldExtractor, has_valid_content, parse_ai_response
from app.ai_core.profile.profile_merger import merge_fields
from app.ai_core.prompts.chat import create_chat_system_prompt
from app.ai_core.ranking import score, select_scored
from app.config import Settings, get_settings
from app.models.api_responses import ChatResponse, KnowledgeSource
from app.models.profile import PartialProfile, Profile
from app.services.knowledge_store import KnowledgeStore
from app.services.profile_store import ProfileService, ProfileUpdateError

logger = logging.getLogger(__name__)


class ChatOrchestrator:
    """
    Orchestrates knowledge selection, answer generation and profile updates.
    """

    def __init__(
        self,
        knowledge_store: KnowledgeStore,
        profile_service: ProfileService,
        keyword_extractor: Optional[KeywordExtractor] = None,
        profile_extractor: Optional[ProfileFieldExtractor] = None,
        llm: Any = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.knowledge_store = knowledge_store
        self.profile_service = profile_service
        self.keyword_extractor = keyword_extractor or KeywordExtractor()
        self.profile_extractor = profile_extractor or ProfileFieldExtractor()

        # Lazy initialization of the LLM (only when an answer is generated)
        self._llm = llm

    @property
    def llm(self):
        """Lazy initialization of the gen_ai_hub chat model."""
        if self._llm is None:
            from gen_ai_hub.proxy.langchain.openai import ChatOpenAI
            from gen_ai_hub.proxy.core.proxy_clients import get_proxy_client

            self._llm = ChatOpenAI(
                proxy_model_name=self.settings.openai_model,
                proxy_client=get_proxy_client("gen-ai-hub"),
                temperature=self.settings.temperature,
            )
        return self._llm

    async def respond(
        self,
        agent_id: str,
        message: str,
        user_id: Optional[str] = None,
        source: str = "widget",
        conversation_history: Optional[List[Dict[str, Any]]] = None,
    ) -> ChatResponse:
        """
        Answer a user message with knowledge grounding and profile tracking.

        Args:
            agent_id: Agent whose knowledge base and prompt are used
            message: User message
            user_id: User identifier; enables profile tracking when given
            source: Channel the message came from (e.g. widget, linebot)
            conversation_history: Previous turns, oldest first

        Returns:
            ChatResponse; status "error" when the answer could not be generated

        Raises:
            AgentNotFoundError: If the agent does not exist
        """
        agent = self.knowledge_store.get_agent(agent_id)
        logger.info(
            f"Chat request: agent={agent_id} source={source} user={user_id or 'N/A'}"
        )

        try:
            # 1. AI keywords (never fails, degrades to [])
            ai_keywords = await self._extract_keywords(message, conversation_history)

            # 2. Knowledge selection
            scored = score(message, agent.knowledge_bases, ai_keywords)
            selected = select_scored(scored, limit=self.settings.max_knowledge_entries)
            logger.info(
                f"Selected {len(selected)} of {len(scored)} knowledge entries: "
                f"{[(item.entry.title, item.score) for item in selected]}"
            )

            # 3. Prompt
            current_profile = (
                self.profile_service.get_profile(agent_id, user_id) if user_id else None
            )
            system_prompt = create_chat_system_prompt(
                system_prompt=agent.system_prompt,
                message=message,
                knowledge_entries=[item.entry for item in selected],
                profile_fields=current_profile.attributes if current_profile else None,
                request_profile_json=user_id is not None,
                user_id=user_id,
                current_time=self._current_time_text(),
                history=conversation_history,
                history_limit=self.settings.conversation_history_limit,
            )

            # 4. Answer
            response = await self.llm.ainvoke(
                [SystemMessage(content=system_prompt), HumanMessage(content=message)]
            )
            payload = parse_ai_response(response.content)

        except Exception as e:
            logger.error(f"Error generating chat response: {str(e)}", exc_info=True)
            return ChatResponse(status="error", reason=str(e))

        # 5. Profile update (failures never fail the answer)
        profile_dict = current_profile.to_dict() if current_profile else None
        profile_updated = False
        if user_id:
            partial = self._combine_partials(
                self.profile_extractor.extract(message), payload.profile
            )
            updated = self._update_profile(agent_id, user_id, partial, source)
            if updated is not None:
                profile_dict = updated.to_dict()
                profile_updated = True

        return ChatResponse(
            status="success",
            answer=payload.answer,
            knowledge_bases=[item.entry.title for item in selected],
            sources=[
                KnowledgeSource(id=item.entry.id, title=item.entry.title, score=item.score)
                for item in selected
            ],
            ai_keywords=ai_keywords,
            suggestions=payload.suggestions,
            profile=profile_dict,
            profile_updated=profile_updated,
        )

    def analyze_profile(
        self, agent_id: str, user_id: str, message: str, source: str = "widget"
    ) -> Tuple[Profile, PartialProfile]:
        """
        Extract profile fragments from a message and merge them (no LLM call).

        Returns:
            (current profile, extracted fragments)

        Raises:
            AgentNotFoundError: If the agent does not exist
            ProfileUpdateError: If the update could not be persisted
        """
        self.knowledge_store.get_agent(agent_id)
        extracted = self.profile_extractor.extract(message)
        if not extracted:
            logger.info(f"No profile information in message for user {user_id}")
            return self.profile_service.get_profile(agent_id, user_id), extracted

        profile = self.profile_service.apply(agent_id, user_id, extracted, source=source)
        return profile, extracted

    async def _extract_keywords(
        self, message: str, history: Optional[List[Dict[str, Any]]]
    ) -> List[str]:
        if not self.settings.keyword_extraction_enabled:
            return []
        try:
            context = None
            if history:
                context = [
                    turn for turn in history[-self.settings.conversation_history_limit:]
                    if isinstance(turn, dict) and "role" in turn
                ]
            return await self.keyword_extractor.extract_keywords(message, context)
        except Exception as e:
            logger.error(f"Keyword extraction raised unexpectedly: {e}", exc_info=True)
            return []

    @staticmethod
    def _combine_partials(
        extracted: PartialProfile, ai_profile: Dict[str, Any]
    ) -> PartialProfile:
        """Regex fragments first, then the model's profile fields on top."""
        if not has_valid_content(ai_profile):
            return extracted
        return merge_fields(extracted, ai_profile)

    def _update_profile(
        self, agent_id: str, user_id: str, partial: PartialProfile, source: str
    ) -> Optional[Profile]:
        if not has_valid_content(partial):
            logger.info("No profile content in this turn, skipping update")
            return None
        try:
            return self.profile_service.apply(agent_id, user_id, partial, source=source)
        except ProfileUpdateError as e:
            logger.error(f"Profile update failed: {e}")
            return None

    def _current_time_text(self) -> str:
        return datetime.now(ZoneInfo(self.settings.timezone)).strftime("%Y/%m/%d %H:%M")
