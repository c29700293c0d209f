from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "ConvAI Agent"
    debug: bool = False

    # OpenAI (via gen_ai_hub proxy)
    # No API key needed - uses gen_ai_hub proxy
    openai_model: str = "gpt-4o-mini"
    temperature: float = 0.7
    keyword_temperature: float = 0.0  # Deterministic keyword extraction
    keyword_extraction_enabled: bool = True

    # Knowledge base
    knowledge_base_path: str = ""  # YAML file with agents and their entries
    max_knowledge_entries: int = 3

    # Conversation
    conversation_history_limit: int = 10  # Turns included in the prompt
    timezone: str = "Asia/Taipei"

    # Profiles
    profile_update_max_retries: int = 3

    model_config = ConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
