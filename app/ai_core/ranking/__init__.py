from app.ai_core.ranking.relevance_scorer import score, normalize_ai_keywords
from app.ai_core.ranking.selector import rank, select, select_scored, MAX_SELECTED_ENTRIES

__all__ = [
    "score",
    "normalize_ai_keywords",
    "rank",
    "select",
    "select_scored",
    "MAX_SELECTED_ENTRIES",
]
