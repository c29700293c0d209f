import logging
from typing import Any, Optional

from fastapi import FastAPI

from app.config import Settings, get_settings
from app.api.routes import chat, knowledge, profiles
from app.ai_core.keywords import KeywordExtractor
from app.services.chat_orchestrator import ChatOrchestrator
from app.services.knowledge_store import KnowledgeStore
from app.services.profile_store import ProfileService, ProfileStore

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("app")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)


def create_app(
    settings: Optional[Settings] = None,
    knowledge_store: Optional[KnowledgeStore] = None,
    profile_store: Optional[ProfileStore] = None,
    keyword_extractor: Optional[KeywordExtractor] = None,
    llm: Any = None,
) -> FastAPI:
    """
    Build the FastAPI application and its services.

    Services live on app.state so each app instance owns its own stores.
    """
    settings = settings or get_settings()

    if knowledge_store is None:
        if settings.knowledge_base_path:
            knowledge_store = KnowledgeStore.from_yaml(settings.knowledge_base_path)
        else:
            logger.warning("No knowledge_base_path configured, starting with no agents")
            knowledge_store = KnowledgeStore()

    profile_service = ProfileService(
        profile_store or ProfileStore(),
        max_retries=settings.profile_update_max_retries,
    )

    application = FastAPI(
        title=settings.app_name,
        description="Knowledge-grounded chatbot with dynamic user profiles",
        version="0.1.0",
    )
    application.state.orchestrator = ChatOrchestrator(
        knowledge_store=knowledge_store,
        profile_service=profile_service,
        keyword_extractor=keyword_extractor,
        llm=llm,
        settings=settings,
    )

    # Include routers
    application.include_router(chat.router, prefix="/api/chat", tags=["Chat"])
    application.include_router(knowledge.router, prefix="/api/knowledge", tags=["Knowledge"])
    application.include_router(profiles.router, prefix="/api/profiles", tags=["Profiles"])

    @application.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": "0.1.0",
            "endpoints": {
                "chat": "/api/chat",
                "knowledge": "/api/knowledge",
                "profiles": "/api/profiles",
                "health": "/health",
                "docs": "/docs",
                "redoc": "/redoc",
            },
        }

    @application.get("/health")
    async def health_check():
        return {"status": "healthy", "service": settings.app_name}

    return application


app = create_app()
