"""
Knowledge Relevance Scorer

Responsibilities:
- Score every knowledge entry of an agent against a user message
- Combine independent evidence (direct containment, AI keywords, entry
  keywords, weighted domain terms, partial word overlap) additively
- Tolerate malformed AI keyword lists and incomplete entries

The scorer is a pure function: identical inputs always give identical scores.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.ai_core.ranking.keyword_weights import KEYWORD_WEIGHTS
from app.models.knowledge import KnowledgeEntry, KnowledgeEntryLike, ScoredEntry
from app.utils import flatten_list

logger = logging.getLogger(__name__)

# Signal weights
TITLE_CONTAINMENT_SCORE = 5.0
CONTENT_CONTAINMENT_SCORE = 3.0
AI_KEYWORD_TITLE_SCORE = 6.0
AI_KEYWORD_CONTENT_SCORE = 5.0
AI_KEYWORD_TAG_OVERLAP_SCORE = 7.0
ENTRY_KEYWORD_IN_MESSAGE_SCORE = 4.0
TOKEN_TITLE_SCORE = 1.0
TOKEN_CONTENT_SCORE = 0.5

# Message tokens must be longer than this to count as partial overlap
MIN_TOKEN_LENGTH = 2


def normalize_ai_keywords(ai_keywords: Any) -> List[str]:
    """
    Turn an untrusted AI keyword payload into a clean list of lower-case terms.

    Nested lists are flattened one level, non-strings and blank strings are
    dropped. Repeated keywords are kept and each one scores again.

    Args:
        ai_keywords: Output of the keyword extractor, possibly malformed

    Returns:
        Lower-cased, stripped keywords in input order
    """
    normalized = (keyword.strip().lower() for keyword in flatten_list(ai_keywords))
    return [keyword for keyword in normalized if keyword]


def _tokenize(message_lower: str) -> List[str]:
    """Whitespace-separated words longer than MIN_TOKEN_LENGTH; repeats are kept."""
    return [token for token in message_lower.split() if len(token) > MIN_TOKEN_LENGTH]


def _coerce_entry(entry: KnowledgeEntryLike) -> Optional[KnowledgeEntry]:
    if isinstance(entry, KnowledgeEntry):
        return entry
    if isinstance(entry, dict):
        return KnowledgeEntry.from_dict(entry)
    logger.debug(f"Skipping unsupported knowledge entry type: {type(entry).__name__}")
    return None


def score_entry(
    message_lower: str,
    entry: KnowledgeEntry,
    ai_keywords: Sequence[str],
    tokens: Sequence[str],
    keyword_weights: Dict[str, int] = KEYWORD_WEIGHTS,
) -> float:
    """
    Compute the relevance score of a single entry.

    Args:
        message_lower: Lower-cased, stripped user message
        entry: Knowledge entry to score
        ai_keywords: Normalized AI keywords (see normalize_ai_keywords)
        tokens: Message tokens used for partial word overlap
        keyword_weights: Weighted domain term table

    Returns:
        Non-negative score; 0 means irrelevant
    """
    if not entry.is_complete:
        return 0.0

    score = 0.0
    title = entry.title.lower()
    content = entry.content.lower()
    entry_keywords = [k.strip().lower() for k in entry.keywords if k.strip()]

    # Direct containment of the whole message
    if message_lower:
        if message_lower in title or title in message_lower:
            score += TITLE_CONTAINMENT_SCORE
        if message_lower in content:
            score += CONTENT_CONTAINMENT_SCORE

    # AI keywords carry the highest weights
    for ai_keyword in ai_keywords:
        if ai_keyword in title:
            score += AI_KEYWORD_TITLE_SCORE
        if ai_keyword in content:
            score += AI_KEYWORD_CONTENT_SCORE
        for tag in entry_keywords:
            if ai_keyword in tag or tag in ai_keyword:
                score += AI_KEYWORD_TAG_OVERLAP_SCORE

    # Entry keyword tags mentioned by the user
    if message_lower:
        for tag in entry_keywords:
            if tag in message_lower:
                score += ENTRY_KEYWORD_IN_MESSAGE_SCORE

    # Weighted domain terms, doubled when they also appear in the title
    for term, weight in keyword_weights.items():
        if term in message_lower:
            if term in title:
                score += weight * 2
            if term in content:
                score += weight

    # Partial word overlap
    for token in tokens:
        if token in title:
            score += TOKEN_TITLE_SCORE
        if token in content:
            score += TOKEN_CONTENT_SCORE

    return score


def score(
    message: str,
    entries: Optional[Iterable[KnowledgeEntryLike]],
    ai_keywords: Any = None,
) -> List[ScoredEntry]:
    """
    Score knowledge entries against a user message.

    Args:
        message: Raw user message
        entries: Candidate entries (models or storage dicts); None means empty
        ai_keywords: Keywords from the AI keyword extractor; may be malformed

    Returns:
        One ScoredEntry per usable entry, in input order
    """
    if not entries:
        return []

    message_lower = message.strip().lower() if isinstance(message, str) else ""
    keywords = normalize_ai_keywords(ai_keywords)
    tokens = _tokenize(message_lower)

    scored = []
    for raw_entry in entries:
        entry = _coerce_entry(raw_entry)
        if entry is None:
            continue
        scored.append(
            ScoredEntry(
                entry=entry,
                score=score_entry(message_lower, entry, keywords, tokens),
            )
        )

    logger.debug(
        f"Scored {len(scored)} entries with {len(keywords)} AI keywords "
        f"and {len(tokens)} message tokens"
    )
    return scored
