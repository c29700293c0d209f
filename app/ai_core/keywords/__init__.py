from app.ai_core.keywords.keyword_extractor import (
    KeywordExtractor,
    KeywordExtractionError,
    parse_keywords,
)

__all__ = ["KeywordExtractor", "KeywordExtractionError", "parse_keywords"]
