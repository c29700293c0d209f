"""
Development server runner for the ConvAI agent API.

Usage:
    python run.py

Environment variables (set in .env file):
    DEBUG=true - Enable debug logging and auto-reload
    KNOWLEDGE_BASE_PATH=data/knowledge.yaml - Seed agents and knowledge entries
    HOST=127.0.0.1 - Server host (default: 127.0.0.1)
    PORT=8000 - Server port (default: 8000)
"""

import os

import uvicorn

from app.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    log_level = "debug" if settings.debug else "info"

    print(f"Starting {settings.app_name} server on http://{host}:{port}")
    print(f"Knowledge base: {settings.knowledge_base_path or '(none, agents must be added via API)'}")
    print(f"Model: {settings.openai_model} | Log Level: {log_level}")
    print(f"Docs available at: http://{host}:{port}/docs")

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port,
        reload=settings.debug,
        log_level=log_level,
        access_log=True,
    )
