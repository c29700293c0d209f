"""
Request-scoped access to the services created in app.main.create_app.
"""

from fastapi import Request

from app.services.chat_orchestrator import ChatOrchestrator
from app.services.knowledge_store import KnowledgeStore
from app.services.profile_store import ProfileService


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.orchestrator


def get_knowledge_store(request: Request) -> KnowledgeStore:
    return request.app.state.orchestrator.knowledge_store


def get_profile_service(request: Request) -> ProfileService:
    return request.app.state.orchestrator.profile_service
